"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from src.utils.config import (
    VISION_API_KEY_ENV,
    APIConfig,
    AppConfig,
    OCRConfig,
    load_config,
)


class TestOCRConfig:
    """Tests for OCRConfig defaults and overrides."""

    def test_defaults(self) -> None:
        cfg = OCRConfig()
        assert cfg.backend == "vision"
        assert cfg.vision_api_url == "https://vision.googleapis.com/v1/images:annotate"
        assert cfg.vision_api_key is None
        assert cfg.request_timeout == 30.0
        assert cfg.default_lang == "eng"
        assert cfg.psm == 3

    def test_override(self) -> None:
        cfg = OCRConfig(backend="tesseract", default_lang="msa", psm=6)
        assert cfg.backend == "tesseract"
        assert cfg.default_lang == "msa"
        assert cfg.psm == 6


class TestAPIConfig:
    """Tests for APIConfig defaults."""

    def test_defaults(self) -> None:
        cfg = APIConfig()
        assert cfg.port == 8000
        assert cfg.raw_text_log_chars == 500


class TestAppConfig:
    """Tests for the top-level AppConfig."""

    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert isinstance(cfg.ocr, OCRConfig)
        assert isinstance(cfg.api, APIConfig)
        assert cfg.log_level == "INFO"

    def test_nested_override(self) -> None:
        cfg = AppConfig(ocr=OCRConfig(backend="tesseract"), log_level="DEBUG")
        assert cfg.ocr.backend == "tesseract"
        assert cfg.log_level == "DEBUG"


class TestLoadConfig:
    """Tests for the load_config function."""

    @pytest.fixture(autouse=True)
    def _no_env_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(VISION_API_KEY_ENV, raising=False)

    def test_load_repository_config(self, project_root: Path) -> None:
        cfg = load_config(project_root / "configs" / "config.yaml")
        assert isinstance(cfg, AppConfig)
        assert cfg.ocr.backend == "vision"
        assert cfg.ocr.vision_api_key is None

    def test_load_missing_file_returns_defaults(self) -> None:
        cfg = load_config(Path("/nonexistent/path/config.yaml"))
        assert isinstance(cfg, AppConfig)
        assert cfg.ocr.default_lang == "eng"

    def test_load_custom_yaml(self, tmp_path: Path) -> None:
        config_data = {
            "ocr": {"backend": "tesseract", "psm": 6},
            "api": {"port": 9000},
            "log_level": "DEBUG",
        }
        config_file = tmp_path / "config.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        cfg = load_config(config_file)
        assert cfg.ocr.backend == "tesseract"
        assert cfg.ocr.psm == 6
        assert cfg.api.port == 9000
        assert cfg.log_level == "DEBUG"

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        cfg = load_config(config_file)
        assert isinstance(cfg, AppConfig)

    def test_api_key_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(VISION_API_KEY_ENV, "env-key")
        cfg = load_config(tmp_path / "missing.yaml")
        assert cfg.ocr.vision_api_key == "env-key"

    def test_file_api_key_wins_over_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(VISION_API_KEY_ENV, "env-key")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("ocr:\n  vision_api_key: file-key\n")

        cfg = load_config(config_file)
        assert cfg.ocr.vision_api_key == "file-key"

    def test_empty_environment_key_is_none(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(VISION_API_KEY_ENV, "")
        cfg = load_config(tmp_path / "missing.yaml")
        assert cfg.ocr.vision_api_key is None

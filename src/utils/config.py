"""Configuration management for the passport OCR service.

Loads and validates YAML configuration with sensible defaults for the
text-detection backends and the HTTP API.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

VISION_API_KEY_ENV = "GOOGLE_VISION_API_KEY"


class OCRConfig(BaseModel):
    """Configuration for the text-detection backend."""

    backend: str = "vision"
    vision_api_url: str = "https://vision.googleapis.com/v1/images:annotate"
    vision_api_key: str | None = None
    request_timeout: float = 30.0
    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 3


class APIConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 8000
    raw_text_log_chars: int = 500


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    When the file does not set ``ocr.vision_api_key``, the key is read
    from the ``GOOGLE_VISION_API_KEY`` environment variable.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        config = AppConfig(**raw)
    else:
        logger.info("No config file found at %s, using defaults", path)
        config = AppConfig()

    if not config.ocr.vision_api_key:
        config.ocr.vision_api_key = os.environ.get(VISION_API_KEY_ENV) or None
    return config

"""Selection of the text-detection backend from configuration."""

import re
from typing import Protocol

from src.utils.config import OCRConfig
from src.utils.logger import get_logger

from .tesseract_engine import TesseractEngine
from .vision_client import VisionClient

logger = get_logger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)


class TextDetector(Protocol):
    """Anything that turns a base64 image into recognized text."""

    def detect_text(self, image_b64: str) -> str: ...


def build_text_detector(config: OCRConfig) -> TextDetector:
    """Create the backend named by ``config.backend``.

    Args:
        config: OCR section of the application configuration.

    Returns:
        A :class:`VisionClient` or :class:`TesseractEngine`.

    Raises:
        ValueError: The backend name is not recognized.
    """
    backend = config.backend.lower()
    logger.debug("Using %s text detection backend", backend)

    if backend == "vision":
        return VisionClient(
            api_key=config.vision_api_key,
            api_url=config.vision_api_url,
            timeout=config.request_timeout,
        )
    if backend == "tesseract":
        return TesseractEngine(
            tesseract_cmd=config.tesseract_cmd,
            default_lang=config.default_lang,
            psm=config.psm,
        )
    raise ValueError(f"Unknown OCR backend: {config.backend}")


def strip_data_url(image: str) -> str:
    """Remove a ``data:<mime>;base64,`` prefix from an image payload."""
    return _DATA_URL_PREFIX.sub("", image.strip(), count=1)

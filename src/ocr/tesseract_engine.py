"""Tesseract OCR backend for running passport text detection locally.

Decodes base64 image payloads with Pillow and reads them with
pytesseract, reporting the mean word confidence alongside the text.
"""

import base64
import binascii
import io
from dataclasses import dataclass

import pytesseract
from PIL import Image, UnidentifiedImageError

from src.utils.logger import get_logger

from .errors import InvalidImageError, NoTextDetectedError

logger = get_logger(__name__)


@dataclass
class OCRResult:
    """Text recognized on a single image."""

    text: str
    confidence: float
    language: str


class TesseractEngine:
    """Wrapper around Tesseract OCR for passport photos.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
        psm: Tesseract page segmentation mode.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        psm: int = 3,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.psm = psm

    def extract_text(self, image: Image.Image, lang: str | None = None) -> OCRResult:
        """Extract text and mean word confidence from an image.

        Args:
            image: Decoded Pillow image.
            lang: OCR language code. Defaults to the engine default.

        Returns:
            OCRResult with the recognized text and confidence in ``[0, 1]``.
        """
        lang = lang or self.default_lang
        config = f"--psm {self.psm}"

        text = pytesseract.image_to_string(image, lang=lang, config=config)
        data = pytesseract.image_to_data(
            image,
            lang=lang,
            config=config,
            output_type=pytesseract.Output.DICT,
        )

        confidences = [
            float(conf)
            for conf, word in zip(data["conf"], data["text"])
            if float(conf) > 0 and word.strip()
        ]
        avg_conf = sum(confidences) / len(confidences) / 100.0 if confidences else 0.0

        logger.info(
            "OCR extracted %d words with average confidence %.2f",
            len(confidences),
            avg_conf,
        )
        return OCRResult(text=text, confidence=avg_conf, language=lang)

    def detect_text(self, image_b64: str) -> str:
        """Run OCR on a base64-encoded image.

        Raises:
            InvalidImageError: The payload is not a decodable image.
            NoTextDetectedError: Tesseract returned only whitespace.
        """
        image = decode_image(image_b64)
        result = self.extract_text(image)
        if not result.text.strip():
            raise NoTextDetectedError("No text detected in the image")
        return result.text


def decode_image(image_b64: str) -> Image.Image:
    """Decode base64 image content into an RGB Pillow image.

    Raises:
        InvalidImageError: The content is not valid base64 or not an image.
    """
    try:
        raw = base64.b64decode(image_b64, validate=True)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageError("Image is not valid base64", details=str(exc)) from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImageError("Could not decode image", details=str(exc)) from exc
    return image.convert("RGB")

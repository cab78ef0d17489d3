"""FastAPI application for the passport OCR API.

Provides REST endpoints for reading passport fields from an image,
parsing already recognized text, and health checks.
"""

import shutil

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from src.extraction.passport_parser import parse_passport_text
from src.ocr.errors import OCRServiceError
from src.ocr.text_detector import TextDetector, build_text_detector, strip_data_url
from src.utils.config import AppConfig, load_config
from src.utils.logger import get_logger

from .schemas import (
    HealthResponse,
    OCRBackend,
    OCRRequest,
    OCRResponse,
    ParseRequest,
    ParseResponse,
    PassportFields,
)

logger = get_logger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="Passport OCR API",
    description="Read passport fields from photos for employee onboarding",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_components() -> tuple[AppConfig, TextDetector]:
    """Load configuration and build the configured text detector.

    Returns:
        Tuple of (config, text_detector).
    """
    config = load_config()
    return config, build_text_detector(config.ocr)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return service health and backend availability.

    An unrecognized ``ocr.backend`` is reported as-is with a
    ``misconfigured`` status.
    """
    config = load_config()
    backend = config.ocr.backend.lower()
    known = backend in {b.value for b in OCRBackend}
    return HealthResponse(
        status="healthy" if known else "misconfigured",
        version=VERSION,
        ocr_backend=backend,
        tesseract_available=shutil.which("tesseract") is not None,
        vision_configured=bool(config.ocr.vision_api_key),
    )


@app.post("/api/ocr", response_model=OCRResponse)
def read_passport(request: OCRRequest) -> OCRResponse:
    """Detect text in a passport image and parse its fields.

    Args:
        request: Body with a base64-encoded image, optionally as a data URL.

    Returns:
        The raw detected text and the parsed passport fields.
    """
    image = strip_data_url(request.image or "")
    if not image:
        raise HTTPException(status_code=400, detail="No image provided")

    try:
        config, detector = _get_components()
        full_text = detector.detect_text(image)
    except OCRServiceError as exc:
        logger.warning("OCR failed with %d: %s", exc.status_code, exc.message)
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    except Exception as exc:
        logger.error("OCR processing failed: %s", exc)
        raise HTTPException(
            status_code=500, detail=f"OCR processing failed: {exc}"
        ) from exc

    logger.info(
        "Raw text extracted: %s", full_text[: config.api.raw_text_log_chars]
    )
    parsed = parse_passport_text(full_text)

    return OCRResponse(
        success=True,
        raw_text=full_text,
        parsed=PassportFields(**parsed.to_dict()),
    )


@app.post("/api/parse", response_model=ParseResponse)
async def parse_text(request: ParseRequest) -> ParseResponse:
    """Parse passport fields from text that was recognized elsewhere."""
    parsed = parse_passport_text(request.text)
    return ParseResponse(parsed=PassportFields(**parsed.to_dict()))

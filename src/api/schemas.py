"""Pydantic request/response schemas for the FastAPI endpoints."""

from enum import StrEnum

from pydantic import BaseModel


class OCRBackend(StrEnum):
    """Supported text-detection backends."""

    VISION = "vision"
    TESSERACT = "tesseract"


class OCRRequest(BaseModel):
    """Request body carrying a base64-encoded passport image."""

    image: str | None = None


class ParseRequest(BaseModel):
    """Request body carrying already recognized text."""

    text: str


class PassportFields(BaseModel):
    """Parsed passport fields; empty strings mark fields that were not found."""

    full_name: str = ""
    passport_number: str = ""
    nationality: str = ""
    date_of_birth: str = ""
    gender: str = ""
    passport_expiry: str = ""
    place_of_issue: str = ""


class OCRResponse(BaseModel):
    """Response schema for a passport OCR request."""

    success: bool
    raw_text: str
    parsed: PassportFields


class ParseResponse(BaseModel):
    """Response schema for a text-only parse request."""

    parsed: PassportFields


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    ocr_backend: str
    tesseract_available: bool
    vision_configured: bool

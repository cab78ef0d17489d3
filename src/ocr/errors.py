"""Errors raised while turning an image into text.

Each error carries the HTTP status the API reports it with.
"""


class OCRServiceError(Exception):
    """Base class for text-detection failures."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class MissingAPIKeyError(OCRServiceError):
    """The configured backend needs an API key that is not set."""

    status_code = 500


class InvalidImageError(OCRServiceError):
    """The image payload could not be decoded."""

    status_code = 400


class NoTextDetectedError(OCRServiceError):
    """The backend found no text in the image."""

    status_code = 422


class VisionAPIError(OCRServiceError):
    """The upstream text-detection service failed or returned non-2xx."""

    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.upstream_status = upstream_status

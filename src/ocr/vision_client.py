"""Google Cloud Vision client for passport text detection.

Sends a base64 image to the ``images:annotate`` REST endpoint with the
``TEXT_DETECTION`` feature and returns the full detected text.
"""

import requests

from src.utils.logger import get_logger

from .errors import MissingAPIKeyError, NoTextDetectedError, VisionAPIError

logger = get_logger(__name__)

DEFAULT_VISION_API_URL = "https://vision.googleapis.com/v1/images:annotate"


class VisionClient:
    """Text detection through the Google Cloud Vision REST API.

    Args:
        api_key: Vision API key. Detection fails with
            :class:`MissingAPIKeyError` when it is empty.
        api_url: ``images:annotate`` endpoint URL.
        timeout: Request timeout in seconds.
        session: Optional ``requests`` session to reuse.
    """

    def __init__(
        self,
        api_key: str | None,
        api_url: str = DEFAULT_VISION_API_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def build_payload(image_b64: str) -> dict:
        """Build the annotate request body for a single image."""
        return {
            "requests": [
                {
                    "image": {"content": image_b64},
                    "features": [{"type": "TEXT_DETECTION", "maxResults": 1}],
                }
            ]
        }

    def detect_text(self, image_b64: str) -> str:
        """Run text detection on a base64-encoded image.

        Args:
            image_b64: Base64 image content without a ``data:`` prefix.

        Returns:
            The full text annotation of the image.

        Raises:
            MissingAPIKeyError: No API key is configured.
            VisionAPIError: The request failed or returned a non-2xx status.
            NoTextDetectedError: The response holds no text annotations.
        """
        if not self.api_key:
            raise MissingAPIKeyError("GOOGLE_VISION_API_KEY is not configured")

        try:
            response = self.session.post(
                self.api_url,
                params={"key": self.api_key},
                json=self.build_payload(image_b64),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Vision API request failed: %s", exc)
            raise VisionAPIError(f"Vision API request failed: {exc}") from exc

        if not response.ok:
            logger.error(
                "Vision API error: %s %s", response.status_code, response.text
            )
            raise VisionAPIError(
                f"Vision API returned {response.status_code}",
                upstream_status=response.status_code,
                details=response.text,
            )

        return self._extract_text(response.json())

    @staticmethod
    def _extract_text(data: dict) -> str:
        responses = data.get("responses") or [{}]
        annotations = responses[0].get("textAnnotations")
        if not annotations:
            raise NoTextDetectedError("No text detected in the image")
        return annotations[0].get("description", "")

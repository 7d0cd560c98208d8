import base64
import logging
from typing import Optional

import requests

from labelscan import config
from labelscan.domain.errors import (
    NoCredentialConfigured,
    ProviderHTTPError,
    ProviderMalformedResponse,
)


logger = logging.getLogger(__name__)

FEATURES = (
    {"type": "TEXT_DETECTION", "maxResults": 1},
    {"type": "LABEL_DETECTION", "maxResults": 10},
    {"type": "LOGO_DETECTION", "maxResults": 5},
)


class GoogleVisionClient:
    """Thin HTTP client for the images:annotate endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else config.GOOGLE_VISION_API_KEY
        self.api_url = api_url or config.GOOGLE_VISION_API_URL
        self.timeout = timeout or config.GOOGLE_VISION_TIMEOUT
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        if self._owns_session:
            self.session.close()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_request(self, image_bytes: bytes) -> dict:
        return {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                    "features": [dict(feature) for feature in FEATURES],
                }
            ]
        }

    def annotate(self, image_bytes: bytes) -> dict:
        """Return the single annotation response for one image."""
        if not self.is_configured:
            raise NoCredentialConfigured()

        try:
            response = self.session.post(
                self.api_url,
                params={"key": self.api_key},
                json=self.build_request(image_bytes),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderHTTPError(f"Google Vision request failed: {e}") from e

        if not response.ok:
            raise ProviderHTTPError(
                f"Google Vision API error: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderMalformedResponse(f"Google Vision returned non-JSON body: {e}") from e

        responses = data.get("responses") if isinstance(data, dict) else None
        if not responses or not isinstance(responses[0], dict):
            raise ProviderMalformedResponse("No response from Google Vision API")

        result = responses[0]
        if "error" in result:
            message = result["error"].get("message", "unknown error") if isinstance(result["error"], dict) else result["error"]
            raise ProviderHTTPError(f"Google Vision API error: {message}")

        logger.debug("Google Vision returned keys %s", sorted(result))
        return result

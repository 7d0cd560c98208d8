from typing import Optional


class LabelScanError(Exception):
    """Base class for every failure the analysis pipeline knows how to name."""

    default_message = "label analysis failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class NoCredentialConfigured(LabelScanError):
    default_message = "Google Vision API is not configured"


class ProviderHTTPError(LabelScanError):
    default_message = "vision provider returned an error status"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderMalformedResponse(LabelScanError):
    default_message = "vision provider returned a malformed response"


class EngineInvocationError(LabelScanError):
    default_message = "text recognition engine failed"


class InsufficientTextError(LabelScanError):
    default_message = "insufficient confidence"


class ImageDecodeError(LabelScanError):
    default_message = "could not decode image"

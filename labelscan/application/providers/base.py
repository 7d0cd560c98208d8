"""
Shared result type and base class for recognition providers.

The analysis service only talks to this interface; it does not know whether
text came from the cloud or from the local engine.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from labelscan.domain.entities.image import RawImage
from labelscan.domain.entities.ocr_result import OCRResult
from labelscan.domain.entities.product import ProductTypeGuess, VisionLabel


@dataclass
class ProviderResult:
    """Result from a single recognition provider."""

    provider_name: str
    success: bool
    ocr: Optional[OCRResult] = None
    product_types: List[ProductTypeGuess] = field(default_factory=list)
    labels: List[VisionLabel] = field(default_factory=list)
    # Set when the provider scores its own output; None means aggregate locally
    overall_confidence: Optional[int] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, provider_name: str, error_kind: str, error: str) -> "ProviderResult":
        return cls(provider_name=provider_name, success=False, error_kind=error_kind, error=error)


class RecognitionProvider(ABC):
    name: str

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the provider can be tried at all (credentials, binaries)."""

    @abstractmethod
    def attempt_recognition(self, image: RawImage) -> ProviderResult:
        """Recognise the image. Must not raise; failures are returned."""

    def close(self):
        """Release held resources such as HTTP sessions."""

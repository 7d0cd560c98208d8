from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional

from labelscan.domain.entities.ocr_result import OCRResult
from labelscan.domain.entities.product import ColorProfile, ProductMatch, VisionLabel


@dataclass
class Recommendation:
    kind: str  # error | warning | info | success
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ConfidenceBreakdown:
    overall: int
    ocr: float
    product_type: float

    @property
    def is_reliable(self) -> bool:
        return self.overall > 50

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "ocr": self.ocr,
            "product_type": self.product_type,
            "is_reliable": self.is_reliable,
        }


@dataclass
class LabelSections:
    ingredients: Optional[str] = None
    nutrition: Optional[str] = None
    product_name: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.ingredients or self.nutrition)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AnalysisReport:
    provider: str
    ocr: OCRResult
    products: List[ProductMatch]
    product_type: str
    product_type_confidence: float
    color_profile: ColorProfile
    confidence: ConfidenceBreakdown
    recommendations: List[Recommendation]
    sections: LabelSections
    cleaned_text: str
    labels: List[VisionLabel] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return self.ocr.has_text or bool(self.products)

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "success": self.success,
            "ocr": self.ocr.to_dict(),
            "products": [product.to_dict() for product in self.products],
            "product_type": self.product_type,
            "product_type_confidence": self.product_type_confidence,
            "color_profile": self.color_profile.to_dict(),
            "confidence": self.confidence.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "sections": self.sections.to_dict(),
            "cleaned_text": self.cleaned_text,
            "labels": [label.to_dict() for label in self.labels],
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class AnalysisOutcome:
    """Either a complete report or a typed failure; never both, never neither."""

    success: bool
    report: Optional[AnalysisReport] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, report: AnalysisReport) -> "AnalysisOutcome":
        return cls(success=True, report=report)

    @classmethod
    def failed(cls, error_kind: str, error: str) -> "AnalysisOutcome":
        return cls(success=False, error_kind=error_kind, error=error)

from dataclasses import dataclass, field
from typing import List, Optional

from labelscan.domain.entities.product import ProductMatch


CONFIDENT_WORD_THRESHOLD = 50


@dataclass
class RecognizedWord:
    text: str
    confidence: float


@dataclass
class EngineOutput:
    """What a recognition engine returns for one (buffer, options) call."""

    text: str
    confidence: float
    words: List[RecognizedWord] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)


@dataclass
class OCRAttempt:
    strategy: str
    segmentation_mode: Optional[str]
    raw_text: str
    engine_confidence: float
    quality_score: float
    effective_confidence: float
    words: List[RecognizedWord] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not 0 <= self.engine_confidence <= 100:
            raise ValueError("Engine confidence must be between 0 and 100")

        if not 0 <= self.quality_score <= 100:
            raise ValueError("Quality score must be between 0 and 100")


@dataclass
class OCRResult:
    attempt: Optional[OCRAttempt]
    enhanced_text: str
    has_text: bool
    looks_like_food_label: bool
    detected_brands: List[ProductMatch] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def empty(cls, error: str) -> "OCRResult":
        return cls(
            attempt=None,
            enhanced_text="",
            has_text=False,
            looks_like_food_label=False,
            detected_brands=[],
            error=error,
        )

    @property
    def confidence(self) -> float:
        return self.attempt.engine_confidence if self.attempt else 0.0

    @property
    def raw_text(self) -> str:
        return self.attempt.raw_text if self.attempt else ""

    @property
    def strategy(self) -> Optional[str]:
        return self.attempt.strategy if self.attempt else None

    @property
    def confident_words(self) -> List[str]:
        if not self.attempt:
            return []
        return [
            word.text
            for word in self.attempt.words
            if word.confidence > CONFIDENT_WORD_THRESHOLD
        ]

    def to_dict(self) -> dict:
        return {
            "text": self.enhanced_text,
            "raw_text": self.raw_text,
            "confidence": self.confidence,
            "has_text": self.has_text,
            "looks_like_food_label": self.looks_like_food_label,
            "strategy": self.strategy,
            "segmentation_mode": self.attempt.segmentation_mode if self.attempt else None,
            "quality_score": self.attempt.quality_score if self.attempt else 0.0,
            "effective_confidence": self.attempt.effective_confidence if self.attempt else 0.0,
            "words": self.confident_words,
            "lines": list(self.attempt.lines) if self.attempt else [],
            "detected_brands": [brand.to_dict() for brand in self.detected_brands],
            "error": self.error,
        }

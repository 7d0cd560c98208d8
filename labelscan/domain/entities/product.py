from dataclasses import dataclass, asdict


@dataclass
class ProductMatch:
    key: str
    canonical_name: str
    product_type: str
    category: str
    source_confidence: float

    def __post_init__(self):
        if not 0 <= self.source_confidence <= 100:
            raise ValueError("Source confidence must be between 0 and 100")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProductTypeGuess:
    """A coarse category inferred from a cloud label, tagged with that label's score."""

    product_type: str
    confidence: float
    label: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class VisionLabel:
    name: str
    confidence: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ColorProfile:
    avg_r: float
    avg_g: float
    avg_b: float
    bright_fraction: float
    dark_fraction: float
    dominant_color_hex: str

    @property
    def brightness(self) -> float:
        return (self.avg_r + self.avg_g + self.avg_b) / 3

    def to_dict(self) -> dict:
        return {
            "avg_r": round(self.avg_r),
            "avg_g": round(self.avg_g),
            "avg_b": round(self.avg_b),
            "brightness": round(self.brightness),
            "bright_fraction": self.bright_fraction,
            "dark_fraction": self.dark_fraction,
            "dominant_color_hex": self.dominant_color_hex,
        }


@dataclass
class ColorAnalysis:
    product_type: str
    confidence: int
    profile: ColorProfile

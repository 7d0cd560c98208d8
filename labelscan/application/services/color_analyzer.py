import numpy as np

from labelscan.application.services.confidence import round_half_up
from labelscan.domain.entities.image import RawImage
from labelscan.domain.entities.product import ColorAnalysis, ColorProfile


BRIGHT_LEVEL = 200
DARK_LEVEL = 50


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return "#{:02x}{:02x}{:02x}".format(round_half_up(r), round_half_up(g), round_half_up(b))


class ColorAnalyzer:
    """Coarse product-type guess from packaging colour statistics."""

    def profile(self, image: RawImage) -> ColorProfile:
        rgb = image.pixels[..., :3].reshape(-1, 3).astype(np.float64)
        avg_r, avg_g, avg_b = rgb.mean(axis=0)
        brightness = rgb.sum(axis=1) / 3

        return ColorProfile(
            avg_r=float(avg_r),
            avg_g=float(avg_g),
            avg_b=float(avg_b),
            bright_fraction=float(np.mean(brightness > BRIGHT_LEVEL)),
            dark_fraction=float(np.mean(brightness < DARK_LEVEL)),
            dominant_color_hex=rgb_to_hex(avg_r, avg_g, avg_b),
        )

    def analyze(self, image: RawImage) -> ColorAnalysis:
        profile = self.profile(image)
        product_type, confidence = classify(profile)
        return ColorAnalysis(product_type=product_type, confidence=confidence, profile=profile)


def classify(profile: ColorProfile):
    """First matching rule wins."""
    r, g, b = profile.avg_r, profile.avg_g, profile.avg_b

    # dark packaging: cola, energy drinks
    if profile.dark_fraction > 0.4:
        return "Beverage (possibly cola or energy drink)", 60
    if r > g * 1.3 and r > b * 1.3:
        return "Snack or Candy", 55
    # brown tones
    if abs(r - g) < 30 and b < r * 0.8:
        return "Chocolate or Cookie", 50
    if profile.bright_fraction > 0.5:
        return "Packaged Food Item", 45
    return "Unknown", 0

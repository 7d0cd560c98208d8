import math
from typing import List, Sequence

from labelscan.domain.entities.analysis_report import Recommendation
from labelscan.domain.entities.product import ProductMatch


ENGINE_WEIGHT = 0.5
HAS_TEXT_SCORE, HAS_TEXT_WEIGHT = 30, 0.2
FOOD_LABEL_SCORE, FOOD_LABEL_WEIGHT = 80, 0.2
BRAND_SCORE, BRAND_WEIGHT = 90, 0.1
PRODUCT_TYPE_WEIGHT = 0.1

LOW_OVERALL_CONFIDENCE = 30
LOW_ENGINE_CONFIDENCE = 60


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_overall_confidence(
    engine_confidence: float,
    has_text: bool,
    looks_like_food_label: bool,
    brands: Sequence[ProductMatch],
    product_type_confidence: float,
) -> int:
    """Weighted average over the signals that are actually present."""
    signals = []
    if engine_confidence > 0:
        signals.append((engine_confidence, ENGINE_WEIGHT))
    if has_text:
        signals.append((HAS_TEXT_SCORE, HAS_TEXT_WEIGHT))
    if looks_like_food_label:
        signals.append((FOOD_LABEL_SCORE, FOOD_LABEL_WEIGHT))
    if brands:
        signals.append((BRAND_SCORE, BRAND_WEIGHT))
    if product_type_confidence > 0:
        signals.append((product_type_confidence, PRODUCT_TYPE_WEIGHT))

    total_weight = sum(weight for _, weight in signals)
    if total_weight == 0:
        return 0
    score = sum(value * weight for value, weight in signals)
    return round_half_up(score / total_weight)


def generate_recommendations(
    overall_confidence: float,
    engine_confidence: float,
    has_text: bool,
    looks_like_food_label: bool,
    brands: Sequence[ProductMatch],
) -> List[Recommendation]:
    recommendations = []

    if overall_confidence < LOW_OVERALL_CONFIDENCE:
        recommendations.append(Recommendation(
            "error",
            "Low confidence in image analysis. Please ensure the image is clear "
            "and contains a food label.",
        ))

    if not has_text:
        recommendations.append(Recommendation(
            "warning", "No text detected. Try taking a clearer photo with better lighting."
        ))

    if has_text and not looks_like_food_label:
        recommendations.append(Recommendation(
            "info", "This might not be a food label. Please verify the extracted text."
        ))

    if 0 < engine_confidence < LOW_ENGINE_CONFIDENCE:
        recommendations.append(Recommendation(
            "warning",
            "OCR confidence is low. Consider manually verifying or editing the extracted text.",
        ))

    if brands:
        recommendations.append(Recommendation(
            "success", f"Detected product: {brands[0].canonical_name}"
        ))

    return recommendations

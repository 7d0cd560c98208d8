import logging
from typing import List, Optional

import requests

from labelscan.application.providers.base import ProviderResult, RecognitionProvider
from labelscan.application.services.confidence import round_half_up
from labelscan.application.services.section_extractor import fold_case
from labelscan.application.services.text_enhancer import collapse_whitespace
from labelscan.application.services.text_quality import assess_text_quality
from labelscan.domain.entities.image import RawImage
from labelscan.domain.entities.ocr_result import OCRAttempt, OCRResult
from labelscan.domain.entities.product import ProductMatch, ProductTypeGuess, VisionLabel
from labelscan.domain.errors import LabelScanError, ProviderMalformedResponse
from labelscan.infrastructure.imaging.image_codec import encode_png
from labelscan.infrastructure.vision.google_vision_client import GoogleVisionClient


logger = logging.getLogger(__name__)

FULL_TEXT_SCORE = 80
LOGO_SCORE = 90
MIN_TEXT_LENGTH = 10

LABEL_CATEGORIES = (
    ("beverage", ("drink", "beverage", "soda", "cola", "juice", "water", "coffee", "tea")),
    ("snack", ("snack", "chips", "crackers", "popcorn", "nuts")),
    ("candy", ("candy", "chocolate", "sweet", "confectionery", "dessert")),
    ("food", ("food", "meal", "cuisine", "dish", "ingredient")),
)
FOOD_LABEL_TERMS = ("food", "snack", "beverage", "drink", "ingredient", "nutrition", "packaged goods")
INGREDIENT_STOPS = ("nutrition", "allergen", "manufactured")


def calculate_confidence(result: dict) -> int:
    """Mean of the active factors: full text, mean label score, any logo."""
    factors = []
    if result.get("fullTextAnnotation"):
        factors.append(FULL_TEXT_SCORE)

    labels = result.get("labelAnnotations") or []
    if labels:
        factors.append(sum(float(label.get("score", 0)) for label in labels) / len(labels) * 100)

    if result.get("logoAnnotations"):
        factors.append(LOGO_SCORE)

    return round_half_up(sum(factors) / len(factors)) if factors else 0


def analyze_labels(labels: List[dict]) -> List[ProductTypeGuess]:
    """Every (label, category) hit, each carrying the label's own score."""
    guesses = []
    for label in labels:
        description = label["description"].lower()
        for product_type, keywords in LABEL_CATEGORIES:
            if any(keyword in description for keyword in keywords):
                guesses.append(ProductTypeGuess(
                    product_type=product_type,
                    confidence=float(label.get("score", 0)) * 100,
                    label=label["description"],
                ))
    return guesses


def extract_brands(logos: List[dict]) -> List[ProductMatch]:
    return [
        ProductMatch(
            key=logo["description"].lower(),
            canonical_name=logo["description"],
            product_type="Unknown",
            category="Unknown",
            source_confidence=min(100.0, float(logo.get("score", 0)) * 100),
        )
        for logo in logos
    ]


def process_ingredients_text(text: str) -> str:
    """INGREDIENTS: <text after the first 'ingredients' up to the next stop word>."""
    if not text:
        return ""

    lower = fold_case(text)
    start = lower.find("ingredients")
    if start == -1:
        return text

    start += len("ingredients")
    while start < len(text) and (text[start] == ":" or text[start].isspace()):
        start += 1

    stops = [lower.find(stop, start) for stop in INGREDIENT_STOPS]
    end = min([index for index in stops if index != -1], default=len(text))
    ingredients = collapse_whitespace(text[start:end]).strip()
    if not ingredients:
        return text
    return f"INGREDIENTS: {ingredients}"


def looks_like_food_product(labels: List[dict]) -> bool:
    return any(
        term in label["description"].lower()
        for label in labels
        for term in FOOD_LABEL_TERMS
    )


class CloudVisionProvider(RecognitionProvider):
    name = "Google Vision API"

    def __init__(self, client: Optional[GoogleVisionClient] = None):
        self.client = client or GoogleVisionClient()

    def is_available(self) -> bool:
        return self.client.is_configured

    def close(self):
        self.client.close()

    def attempt_recognition(self, image: RawImage) -> ProviderResult:
        try:
            return self._recognize(image)
        except LabelScanError as e:
            logger.warning("[%s] %s: %s", self.name, e.kind, e)
            return ProviderResult.failed(self.name, e.kind, str(e))
        except requests.RequestException as e:
            logger.warning("[%s] request failed: %s", self.name, e)
            return ProviderResult.failed(self.name, "ProviderHTTPError", str(e))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("[%s] unexpected response shape: %s", self.name, e)
            return ProviderResult.failed(
                self.name, ProviderMalformedResponse.__name__, f"Malformed Google Vision response: {e}"
            )

    def _recognize(self, image: RawImage) -> ProviderResult:
        result = self.client.annotate(encode_png(image))

        full_text = result.get("fullTextAnnotation") or {}
        raw_text = full_text.get("text", "") or ""
        labels = result.get("labelAnnotations") or []
        logos = result.get("logoAnnotations") or []
        confidence = calculate_confidence(result)

        attempt = OCRAttempt(
            strategy="cloud",
            segmentation_mode=None,
            raw_text=raw_text,
            engine_confidence=confidence,
            quality_score=assess_text_quality(raw_text),
            effective_confidence=confidence,
        )
        ocr = OCRResult(
            attempt=attempt,
            enhanced_text=process_ingredients_text(raw_text),
            has_text=len(raw_text) > MIN_TEXT_LENGTH,
            looks_like_food_label=looks_like_food_product(labels),
            detected_brands=extract_brands(logos),
        )
        logger.info("[%s] confidence=%d labels=%d logos=%d", self.name, confidence, len(labels), len(logos))

        return ProviderResult(
            provider_name=self.name,
            success=True,
            ocr=ocr,
            product_types=analyze_labels(labels),
            labels=[
                VisionLabel(name=label["description"], confidence=round_half_up(float(label.get("score", 0)) * 100))
                for label in labels
            ],
            overall_confidence=confidence,
        )

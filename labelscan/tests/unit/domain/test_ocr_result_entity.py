import pytest

from labelscan.domain.entities.ocr_result import OCRAttempt, OCRResult, RecognizedWord
from labelscan.domain.entities.product import ProductMatch


def make_attempt(**overrides):
    values = dict(
        strategy="grayscale",
        segmentation_mode="auto",
        raw_text="Ingredients: sugar, salt",
        engine_confidence=82.0,
        quality_score=40,
        effective_confidence=69.4,
        words=[RecognizedWord("Ingredients:", 91.0), RecognizedWord("sugar,", 45.0)],
        lines=["Ingredients: sugar, salt"],
    )
    values.update(overrides)
    return OCRAttempt(**values)


class TestOCRAttempt:
    def test_create_attempt(self):
        attempt = make_attempt()

        assert attempt.strategy == "grayscale"
        assert attempt.segmentation_mode == "auto"
        assert attempt.engine_confidence == 82.0

    def test_engine_confidence_out_of_range(self):
        with pytest.raises(ValueError, match="Engine confidence"):
            make_attempt(engine_confidence=101)

    def test_quality_score_out_of_range(self):
        with pytest.raises(ValueError, match="Quality score"):
            make_attempt(quality_score=-1)


class TestOCRResult:
    def test_empty_result(self):
        result = OCRResult.empty("insufficient confidence")

        assert result.has_text is False
        assert result.confidence == 0.0
        assert result.detected_brands == []
        assert result.error == "insufficient confidence"
        assert result.raw_text == ""
        assert result.strategy is None

    def test_confident_words_filter(self):
        result = OCRResult(
            attempt=make_attempt(),
            enhanced_text="Ingredients: sugar, salt",
            has_text=True,
            looks_like_food_label=False,
        )

        assert result.confident_words == ["Ingredients:"]

    def test_to_dict(self):
        brand = ProductMatch("oreo", "Oreo", "Cookie", "Snack", 90.0)
        result = OCRResult(
            attempt=make_attempt(),
            enhanced_text="Ingredients: sugar, salt",
            has_text=True,
            looks_like_food_label=False,
            detected_brands=[brand],
        )
        result_dict = result.to_dict()

        assert result_dict["text"] == "Ingredients: sugar, salt"
        assert result_dict["confidence"] == 82.0
        assert result_dict["strategy"] == "grayscale"
        assert result_dict["detected_brands"][0]["canonical_name"] == "Oreo"
        assert result_dict["error"] is None

    def test_empty_to_dict(self):
        result_dict = OCRResult.empty("insufficient confidence").to_dict()

        assert result_dict["has_text"] is False
        assert result_dict["words"] == []
        assert result_dict["segmentation_mode"] is None

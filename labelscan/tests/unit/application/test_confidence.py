import pytest

from labelscan.application.services.confidence import (
    calculate_overall_confidence,
    generate_recommendations,
    round_half_up,
)
from labelscan.domain.entities.analysis_report import ConfidenceBreakdown
from labelscan.domain.entities.product import ProductMatch


OREO = ProductMatch("oreo", "Oreo", "Cookie", "Snack", 90.0)


class TestRoundHalfUp:
    @pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (65.71, 66), (2.49, 2)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestOverallConfidence:
    def test_no_signals(self):
        assert calculate_overall_confidence(0, False, False, [], 0) == 0

    def test_engine_and_text(self):
        # (80 * 0.5 + 30 * 0.2) / 0.7
        overall = calculate_overall_confidence(80, True, False, [], 0)

        assert overall == 66
        assert ConfidenceBreakdown(overall, 80, 0).is_reliable is True

    def test_all_signals(self):
        # (80*0.5 + 30*0.2 + 80*0.2 + 90*0.1 + 60*0.1) / 1.1
        assert calculate_overall_confidence(80, True, True, [OREO], 60) == 70

    def test_product_type_only(self):
        assert calculate_overall_confidence(0, False, False, [], 45) == 45

    def test_in_range(self):
        assert 0 <= calculate_overall_confidence(100, True, True, [OREO], 100) <= 100


class TestRecommendations:
    def test_empty_analysis(self):
        recommendations = generate_recommendations(0, 0, False, False, [])

        assert [r.kind for r in recommendations] == ["error", "warning"]
        assert recommendations[1].message.startswith("No text detected")

    def test_text_that_is_not_a_label(self):
        recommendations = generate_recommendations(66, 80, True, False, [])

        assert [r.kind for r in recommendations] == ["info"]

    def test_low_engine_confidence(self):
        recommendations = generate_recommendations(45, 40, True, True, [])

        assert [r.kind for r in recommendations] == ["warning"]
        assert recommendations[0].message.startswith("OCR confidence is low")

    def test_detected_product_comes_last(self):
        recommendations = generate_recommendations(20, 40, True, False, [OREO])

        assert [r.kind for r in recommendations] == ["error", "info", "warning", "success"]
        assert recommendations[-1].message == "Detected product: Oreo"

    def test_confident_label(self):
        assert generate_recommendations(85, 90, True, True, []) == []

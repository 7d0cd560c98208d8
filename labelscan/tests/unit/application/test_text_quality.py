import pytest

from labelscan.application.services.text_quality import (
    FOOD_LABEL_KEYWORDS,
    assess_text_quality,
    count_food_keywords,
    looks_like_food_label,
)


class TestAssessTextQuality:
    def test_empty_text(self):
        assert assess_text_quality("") == 0

    def test_plain_words_score_nothing(self):
        assert assess_text_quality("hello world") == 0

    def test_keyword_bonus(self):
        assert assess_text_quality("hello world sugar") == 10
        assert assess_text_quality("ingredients") == 20

    def test_alphanumeric_bonus(self):
        assert assess_text_quality("sugar 12") == 30

    def test_word_count_bonuses_are_cumulative(self):
        eleven = " ".join(["word"] * 11)
        twenty_one = " ".join(["word"] * 21)
        fifty_one = " ".join(["word"] * 51)

        assert assess_text_quality(eleven) == 20
        assert assess_text_quality(twenty_one) == 30
        assert assess_text_quality(fifty_one) == 40

    def test_short_words_are_not_counted(self):
        assert assess_text_quality(" ".join(["ab"] * 30)) == 0

    def test_special_character_penalty(self):
        # 30 points of bonus, cancelled by a third of the text being noise
        assert assess_text_quality("@@@@ sugar 1") == 0

    def test_full_label_is_capped(self, label_text):
        assert assess_text_quality(label_text) == 100

    @pytest.mark.parametrize("keyword", ["ingredients", "nutrition", "protein", "sodium"])
    def test_adding_a_keyword_never_lowers_the_score(self, keyword):
        base = "Serving size 2 cookies per pack"

        assert assess_text_quality(f"{base} {keyword}") >= assess_text_quality(base)

    def test_score_is_bounded(self):
        assert 0 <= assess_text_quality("!!!!!!!!!!") <= 100


class TestFoodLabel:
    def test_keyword_list(self):
        assert len(FOOD_LABEL_KEYWORDS) == 17
        assert "net wt" in FOOD_LABEL_KEYWORDS
        assert "expiry" not in FOOD_LABEL_KEYWORDS

    def test_count_is_case_insensitive(self):
        assert count_food_keywords("CALORIES Protein sodium") == 3

    def test_two_keywords_are_not_enough(self):
        assert looks_like_food_label("calories protein") is False

    def test_three_keywords(self):
        assert looks_like_food_label("calories protein sodium") is True

    def test_empty_text(self):
        assert looks_like_food_label("") is False

    def test_label_text(self, label_text):
        assert looks_like_food_label(label_text) is True

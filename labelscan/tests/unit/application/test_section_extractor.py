from labelscan.application.services.section_extractor import (
    clean_extracted_text,
    extract_ingredients,
    extract_nutrition,
    extract_product_name,
    extract_sections,
    format_sections,
)
from labelscan.domain.entities.analysis_report import LabelSections


class TestExtractIngredients:
    def test_runs_to_end_without_period(self):
        assert extract_ingredients("Ingredients: water, sugar, citric acid") == "water, sugar, citric acid"

    def test_capture_ends_with_stop_word_before_period(self):
        text = "INGREDIENTS: oats, honey, contains nuts. Best before June"

        assert extract_ingredients(text) == "oats, honey, contains"

    def test_falls_back_to_next_section_heading(self, label_text):
        assert extract_ingredients(label_text) == "sugar, cocoa butter, milk powder."

    def test_contains_fallback(self):
        assert extract_ingredients("Contains milk and soy") == "milk and soy"

    def test_singular_keyword(self):
        assert extract_ingredients("Ingredient: rice") == "rice"

    def test_no_section(self):
        assert extract_ingredients("Best served chilled.") is None


class TestExtractNutrition:
    def test_nutrition_facts(self, label_text):
        assert extract_nutrition(label_text) == "per serving: Calories 210, Protein 3g, Sodium 40mg"

    def test_stops_at_ingredients(self):
        text = "Nutrition Fact: Fat 2g\nIngredients: corn"

        assert extract_nutrition(text) == "Fat 2g"

    def test_calories_fallback(self):
        assert extract_nutrition("Calories 210 Protein 3g") == "210 Protein 3g"

    def test_calories_need_a_number(self):
        assert extract_nutrition("Calories: low") is None


class TestExtractProductName:
    def test_first_line(self):
        assert extract_product_name("Choco Crunch\nIngredients: cocoa") == "Choco Crunch"

    def test_lowercase_first_line(self):
        assert extract_product_name("choco crunch\nmore") is None

    def test_long_first_line(self, label_text):
        assert extract_product_name(label_text) is None


class TestSections:
    def test_extract_sections_empty(self):
        assert extract_sections("") == LabelSections()

    def test_format_sections(self):
        sections = LabelSections(
            ingredients="wheat (gluten),  salt",
            nutrition="Fat  2g",
            product_name="Crackers",
        )

        assert format_sections(sections) == (
            "Product: Crackers\n\nIngredients: wheat ( gluten ) , salt\n\nNutrition: Fat 2g"
        )


class TestCleanExtractedText:
    def test_empty(self):
        assert clean_extracted_text("") == ("", LabelSections())

    def test_sections_are_laid_out(self):
        cleaned, sections = clean_extracted_text("x\nSNACK MIX\n12\nIngredients: corn, salt")

        assert sections.product_name == "SNACK MIX"
        assert sections.ingredients == "corn, salt"
        assert cleaned == "Product: SNACK MIX\n\nIngredients: corn, salt"

    def test_plain_text_is_joined(self):
        cleaned, sections = clean_extracted_text("Hello world\n--\nfresh  bread")

        assert sections.found is False
        assert cleaned == "Hello world fresh bread"

"""
Carve the ingredients / nutrition / product-name sections out of label text.

Each section has an ordered chain of fallback rules; the first rule that
yields a non-empty capture wins. The rules are evaluated with a linear
str.find scanner rather than alternation regexes, so matching time stays
bounded on long or adversarial OCR output.
"""
import re
from typing import Iterator, Optional, Sequence, Tuple

from labelscan.application.services.text_enhancer import collapse_whitespace, enhance_text
from labelscan.domain.entities.analysis_report import LabelSections


INGREDIENT_STOPS_BEFORE_PERIOD = (
    "contains", "may contain", "allergen", "nutrition", "manufactured", "distributed",
)
INGREDIENT_STOPS = ("nutrition", "allergen", "manufactured", "distributed")
CONTAINS_STOPS = ("may contain", "allergen", "nutrition")
NUTRITION_FACTS_STOPS = ("ingredients", "allergen", "manufactured")
CALORIES_STOPS = ("ingredients", "allergen")

PRODUCT_NAME_MAX_LENGTH = 50
MIN_LINE_LENGTH = 3

_SKIPPABLE = frozenset(":") | frozenset(" \t\n\r\f\v")
_LINE_BREAK = re.compile(r"[\n\r]+")
_LETTER = re.compile(r"[a-zA-Z]")


def fold_case(text: str) -> str:
    """Lower-case without changing the length, so indexes map back to text."""
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in text)


def _occurrences(lower: str, word: str) -> Iterator[int]:
    index = lower.find(word)
    while index != -1:
        yield index
        index = lower.find(word, index + 1)


def _skip_separators(lower: str, index: int) -> int:
    while index < len(lower) and lower[index] in _SKIPPABLE:
        index += 1
    return index


def _after_keyword(lower: str, index: int, keyword: str, plural: bool) -> int:
    end = index + len(keyword)
    if plural and lower.startswith("s", end):
        end += 1
    return _skip_separators(lower, end)


def _stop_at(lower: str, index: int, stops: Sequence[str]) -> Optional[str]:
    for stop in stops:
        if lower.startswith(stop, index):
            return stop
    return None


def _earliest_stop(lower: str, start: int, stops: Sequence[str]) -> int:
    """Start of the first stop word at or after start, else end of text."""
    found = [lower.find(stop, start) for stop in stops]
    found = [index for index in found if index != -1]
    return min(found) if found else len(lower)


def _through_last_stop_before_period(
    lower: str, start: int, stops: Sequence[str]
) -> Optional[int]:
    """End of the capture running up to the next period.

    Runs with no period reach the end of the text. Otherwise the capture
    ends with the last stop word that starts before the period, or there
    is no capture.
    """
    period = lower.find(".", start)
    if period == -1:
        return len(lower)

    last = max((lower.rfind(stop, start, period), stop) for stop in stops)
    if last[0] == -1:
        return None
    index = last[0]
    return index + len(_stop_at(lower, index, stops))


def _bounded_section(
    text: str, lower: str, keyword: str, plural: bool, stops: Sequence[str]
) -> Optional[str]:
    for index in _occurrences(lower, keyword):
        start = _after_keyword(lower, index, keyword, plural)
        end = _through_last_stop_before_period(lower, start, stops)
        if end is not None:
            return text[start:end]
    return None


def _lazy_section(
    text: str, lower: str, keyword: str, plural: bool, stops: Sequence[str]
) -> Optional[str]:
    index = lower.find(keyword)
    if index == -1:
        return None
    start = _after_keyword(lower, index, keyword, plural)
    return text[start:_earliest_stop(lower, start, stops)]


def _nutrition_facts_section(text: str, lower: str) -> Optional[str]:
    for index in _occurrences(lower, "nutrition"):
        cursor = index + len("nutrition")
        while cursor < len(lower) and lower[cursor].isspace():
            cursor += 1
        if not lower.startswith("fact", cursor):
            continue
        start = _after_keyword(lower, cursor, "fact", plural=True)
        return text[start:_earliest_stop(lower, start, NUTRITION_FACTS_STOPS)]
    return None


def _calories_section(text: str, lower: str) -> Optional[str]:
    for index in _occurrences(lower, "calories"):
        start = _after_keyword(lower, index, "calories", plural=False)
        if start >= len(lower) or not lower[start].isdigit():
            continue
        digits_end = start
        while digits_end < len(lower) and lower[digits_end].isdigit():
            digits_end += 1
        return text[start:_earliest_stop(lower, digits_end, CALORIES_STOPS)]
    return None


def _first_capture(candidates: Sequence[Optional[str]]) -> Optional[str]:
    for capture in candidates:
        if capture:
            return capture.strip()
    return None


def extract_ingredients(text: str) -> Optional[str]:
    lower = fold_case(text)
    rules = (
        lambda: _bounded_section(text, lower, "ingredient", True, INGREDIENT_STOPS_BEFORE_PERIOD),
        lambda: _lazy_section(text, lower, "ingredient", True, INGREDIENT_STOPS),
        lambda: _bounded_section(text, lower, "contains", False, CONTAINS_STOPS),
    )
    return _first_capture(rule() for rule in rules)


def extract_nutrition(text: str) -> Optional[str]:
    lower = fold_case(text)
    rules = (
        lambda: _nutrition_facts_section(text, lower),
        lambda: _calories_section(text, lower),
    )
    return _first_capture(rule() for rule in rules)


def extract_product_name(text: str) -> Optional[str]:
    first_line = re.split(r"[\n\r]", text, maxsplit=1)[0]
    if first_line and len(first_line) < PRODUCT_NAME_MAX_LENGTH and re.match(r"[A-Z]", first_line):
        return first_line.strip()
    return None


def extract_sections(text: str) -> LabelSections:
    if not text:
        return LabelSections()
    return LabelSections(
        ingredients=extract_ingredients(text),
        nutrition=extract_nutrition(text),
        product_name=extract_product_name(text),
    )


def format_sections(sections: LabelSections) -> str:
    blocks = []
    if sections.product_name:
        blocks.append(f"Product: {sections.product_name}")
    if sections.ingredients:
        ingredients = collapse_whitespace(sections.ingredients)
        ingredients = re.sub(r"[()]", lambda m: f" {m.group(0)} ", ingredients)
        blocks.append(f"Ingredients: {collapse_whitespace(ingredients).strip()}")
    if sections.nutrition:
        blocks.append(f"Nutrition: {collapse_whitespace(sections.nutrition).strip()}")
    return "\n\n".join(blocks)


def _is_content_line(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= MIN_LINE_LENGTH and bool(_LETTER.search(stripped))


def clean_extracted_text(text: str) -> Tuple[str, LabelSections]:
    """Drop noise lines, enhance the rest and, when sections are found, lay them out."""
    if not text:
        return "", LabelSections()

    lines = [enhance_text(line) for line in _LINE_BREAK.split(text) if _is_content_line(line)]
    joined = "\n".join(line for line in lines if line)
    sections = extract_sections(joined)

    if sections.found:
        return format_sections(sections), sections
    return collapse_whitespace(joined).strip(), sections

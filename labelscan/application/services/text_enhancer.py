import re


# Whole-token misreads seen on printed labels, matched case-insensitively.
# Multi-word entries tolerate any run of whitespace between the parts.
COMMON_FIXES = {
    "ingredlents": "ingredients",
    "ingred1ents": "ingredients",
    "nutr1tion": "nutrition",
    "nutr1t1on": "nutrition",
    "prote1n": "protein",
    "sod1um": "sodium",
    "calc1um": "calcium",
    "v1tamin": "vitamin",
    "vitam1n": "vitamin",
    "calo ries": "calories",
    "carbo hydrate": "carbohydrate",
    "mono sodium": "monosodium",
}

KEPT_SINGLE_LETTERS = {"a", "A", "I"}
VITAMIN_LOOKBEHIND = 10


def _fix_pattern(wrong: str) -> re.Pattern:
    parts = [re.escape(part) for part in wrong.split()]
    return re.compile(r"\b" + r"\s+".join(parts) + r"\b", re.IGNORECASE)


_FIXES = [(_fix_pattern(wrong), right) for wrong, right in COMMON_FIXES.items()]
_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"\s*([,.:])\s*")
_PUNCTUATION_RUN = re.compile(r"([,.:]) (?=[,.:])")
_SINGLE_LETTER = re.compile(r"\b[a-zA-Z]\b")


def apply_corrections(text: str) -> str:
    for pattern, right in _FIXES:
        text = pattern.sub(right, text)
    return text


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def normalize_punctuation(text: str) -> str:
    """One space after each , . : and none before; runs like '...' stay together."""
    text = _PUNCTUATION.sub(r"\1 ", text)
    return _PUNCTUATION_RUN.sub(r"\1", text)


def drop_stray_letters(text: str) -> str:
    def keep_or_drop(match: re.Match) -> str:
        letter = match.group(0)
        if letter in KEPT_SINGLE_LETTERS:
            return letter
        # "Vitamin C", "vitamin: d"
        before = match.string[max(0, match.start() - VITAMIN_LOOKBEHIND):match.start()]
        if "vitamin" in before.lower():
            return letter
        return ""

    return _SINGLE_LETTER.sub(keep_or_drop, text)


def enhance_text(text: str) -> str:
    """Correct common misreads and normalise spacing. Idempotent."""
    if not text:
        return ""

    enhanced = apply_corrections(text)
    enhanced = normalize_punctuation(collapse_whitespace(enhanced))
    enhanced = drop_stray_letters(enhanced)
    # removals can join the halves of a split word or leave a space before punctuation
    enhanced = apply_corrections(enhanced)
    enhanced = normalize_punctuation(collapse_whitespace(enhanced))
    return enhanced.strip()

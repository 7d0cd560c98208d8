import re


KEYWORD_BONUSES = (
    ("ingredients", 20),
    ("nutrition", 15),
    ("calories", 15),
    ("protein", 10),
    ("carbohydrate", 10),
    ("fat", 10),
    ("sodium", 10),
    ("sugar", 10),
)

# (minimum word count exclusive, bonus); cumulative
WORD_COUNT_BONUSES = ((10, 20), (20, 10), (50, 10))
ALPHANUMERIC_BONUS = 20
SPECIAL_CHARACTER_PENALTY = 30
SPECIAL_CHARACTER_RATIO = 0.3

FOOD_LABEL_KEYWORDS = (
    "ingredients",
    "nutrition",
    "calories",
    "protein",
    "carbohydrate",
    "sugar",
    "sodium",
    "fat",
    "vitamin",
    "mineral",
    "serving",
    "contains",
    "allergen",
    "manufactured",
    "distributed",
    "net wt",
    "best before",
)
FOOD_LABEL_MIN_KEYWORDS = 3

_SPECIAL_CHARACTER = re.compile(r"[^a-zA-Z0-9\s.,()%-]")
_LETTER = re.compile(r"[a-zA-Z]")
_DIGIT = re.compile(r"[0-9]")


def assess_text_quality(text: str) -> int:
    """Score how plausible raw OCR text is as a food label, 0-100."""
    if not text:
        return 0

    score = 0
    lower = text.lower()

    for keyword, bonus in KEYWORD_BONUSES:
        if keyword in lower:
            score += bonus

    word_count = sum(1 for word in text.split() if len(word) > 2)
    for minimum, bonus in WORD_COUNT_BONUSES:
        if word_count > minimum:
            score += bonus

    if _LETTER.search(text) and _DIGIT.search(text):
        score += ALPHANUMERIC_BONUS

    special = len(_SPECIAL_CHARACTER.findall(text))
    if special / len(text) > SPECIAL_CHARACTER_RATIO:
        score -= SPECIAL_CHARACTER_PENALTY

    return min(100, max(0, score))


def count_food_keywords(text: str) -> int:
    lower = text.lower()
    return sum(1 for keyword in FOOD_LABEL_KEYWORDS if keyword in lower)


def looks_like_food_label(text: str) -> bool:
    if not text:
        return False
    return count_food_keywords(text) >= FOOD_LABEL_MIN_KEYWORDS

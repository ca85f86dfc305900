import re
from typing import Iterable, List

# Heuristic only: quantities, units and preparation words are stripped so that
# "2 cups chopped onion" reads as "onion".

UNIT_WORDS = (
    "cup", "tbsp", "tsp", "oz", "lb", "gram", "kg", "ml", "l",
    "clove", "piece", "slice", "can", "package", "packet", "bunch", "head",
    "stalk", "teaspoon", "tablespoon", "ounce", "pound", "kilogram",
    "milliliter", "liter", "jar", "bottle", "box", "bag", "strip", "sprig",
    "leaf", "leaves",
)

PREPARATION_WORDS = (
    "whole", "diced", "chopped", "sliced", "minced", "grated", "peeled",
    "seeded", "stemmed", "trimmed", "halved", "quartered", "crushed",
    "ground", "powder", "fresh", "frozen", "dried", "canned",
)

# Always assumed on hand; never block a strict match
STAPLES = frozenset({"salt", "pepper", "water", "oil", "butter", "sugar", "flour"})

MIN_MATCH_LENGTH = 3

DIGITS_PUNCT_RE = re.compile(r"[\d\W_]+")
SPACES_RE = re.compile(r"\s+")


def build_strip_pattern(words: Iterable[str]) -> re.Pattern:
    """Compile a whole-word pattern for ``words`` and their plurals."""
    alternatives = "|".join(sorted((re.escape(w) for w in words), key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})(?:e?s)?\b")


STRIP_PATTERN = build_strip_pattern(UNIT_WORDS + PREPARATION_WORDS)


def normalize_ingredient(s: str, pattern: re.Pattern = STRIP_PATTERN) -> str:
    """Reduce a recipe ingredient line to an approximate bare name."""
    if not s:
        return ""
    w = s.lower()
    w = DIGITS_PUNCT_RE.sub(" ", w)
    w = pattern.sub(" ", w)
    return SPACES_RE.sub(" ", w).strip()


def normalize_ingredients(
    items: Iterable[str], pattern: re.Pattern = STRIP_PATTERN
) -> List[str]:
    out = []
    for item in items:
        n = normalize_ingredient(item, pattern)
        if n:
            out.append(n)
    return out


def is_exempt(ingredient: str) -> bool:
    """Short leftovers and pantry staples never need to be matched."""
    return len(ingredient) < MIN_MATCH_LENGTH or ingredient in STAPLES


def overlaps(ingredient: str, term: str) -> bool:
    return ingredient in term or term in ingredient


def is_ingredient_match(ingredient: str, terms: Iterable[str]) -> bool:
    """Return True if the normalized ingredient overlaps any search term.

    Partial matches count in both directions, so "chicken" satisfies
    "chicken breast" and the other way round.
    """
    return any(overlaps(ingredient, t) for t in terms)

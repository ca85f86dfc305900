import json
import re
from typing import List, Optional

# "1 hrs", "2 hour"; "30 mins", "45 minutes"
HOURS_RE = re.compile(r"(\d+)\s*(?:hrs?|hours?)", re.IGNORECASE)
MINUTES_RE = re.compile(r"(\d+)\s*(?:mins?|minutes?)", re.IGNORECASE)

NUMBERED_START_RE = re.compile(r"^\d+\.")
NUMBERED_SPLIT_RE = re.compile(r"\d+\.\s*")
SENTENCE_SPLIT_RE = re.compile(r"\.\s+(?=[A-Z])|\.\n+")

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

OPENERS = "(["
CLOSERS = ")]"


def parse_int(value) -> Optional[int]:
    """Return the leading integer of ``value`` or None.

    Accepts ints and strings such as ``"42"`` or ``"42 mins"``. Floats and
    booleans are not accepted as ids.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    m = LEADING_INT_RE.match(str(value))
    if not m:
        return None
    return int(m.group(1))


def parse_literal_list(text: str) -> list:
    """Parse a single-quoted list such as ``"['flour', 'sugar']"``.

    Quotes are swapped for double quotes and the result decoded as JSON.
    Anything that is not a JSON array afterwards is treated as empty.
    """
    if not text:
        return []
    try:
        parsed = json.loads(text.replace("'", '"'))
    except ValueError:
        return []
    if not isinstance(parsed, list):
        return []
    return parsed


def parse_time_to_minutes(text: str) -> int:
    if not text:
        return 0
    total = 0
    hours = HOURS_RE.search(text)
    if hours:
        total += int(hours.group(1)) * 60
    mins = MINUTES_RE.search(text)
    if mins:
        total += int(mins.group(1))
    return total


def _try_json_list(text: str) -> Optional[list]:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, list) else None


def _ingredient_from_json(item) -> str:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict) and item.get("name"):
        return str(item["name"]).strip()
    return json.dumps(item)


def split_top_level(text: str, sep: str = ",") -> List[str]:
    """Split on ``sep`` only where no parenthesis or bracket is open.

    >>> split_top_level("onion, garlic (2 cloves, minced), salt")
    ['onion', 'garlic (2 cloves, minced)', 'salt']
    """
    tokens: List[str] = []
    current: List[str] = []
    depth = 0
    for ch in text:
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            # a stray closer must not block later splits
            depth = max(depth - 1, 0)
        elif ch == sep and depth == 0:
            tokens.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    tokens.append("".join(current).strip())
    return [t for t in tokens if t]


def parse_ingredients(text: str) -> List[str]:
    """Turn a prose or JSON ingredients field into a list of strings."""
    if not text:
        return []
    items = _try_json_list(text)
    if items is not None:
        parsed = [_ingredient_from_json(item) for item in items]
        return [p for p in parsed if p]
    return split_top_level(text)


def parse_steps(text: str) -> List[str]:
    """Turn a directions field into a list of steps.

    JSON arrays are taken as-is (non-empty strings only). Numbered lists
    ("1. Mix 2. Bake") are split on their markers, anything else on sentence
    boundaries. If nothing survives, the whole text is one step.
    """
    if not text or not text.strip():
        return []
    items = _try_json_list(text)
    if items is not None:
        return [s.strip() for s in items if isinstance(s, str) and s.strip()]

    text = text.strip()
    if NUMBERED_START_RE.match(text):
        parts = NUMBERED_SPLIT_RE.split(text)
        return [p.strip() for p in parts if p.strip()]

    steps = []
    for part in SENTENCE_SPLIT_RE.split(text):
        part = part.strip()
        if part.endswith("."):
            part = part[:-1].rstrip()
        if part:
            steps.append(part)
    return steps or [text]

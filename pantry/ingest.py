"""Row normalization for the recipe dataset.

Two incompatible row layouts appear in the source data:

* ``structured``: Food.com style rows (``id``, ``name``, ``minutes``, ...)
  whose list fields are single-quoted literals like ``"['flour', 'sugar']"``.
* ``prose``: scraped rows carrying ``recipe_name``/``Name``, a free-text
  ``total_time`` and comma separated ``ingredients``/``directions``.

``detect_schema`` picks the layout per row; each layout has one normalizer in
``NORMALIZERS`` and every normalizer returns the same ``RecipeRecord``.
"""
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from .logging_utils import get_logger
from .models import RecipeRecord
from .parsing import (
    parse_ingredients,
    parse_int,
    parse_literal_list,
    parse_steps,
    parse_time_to_minutes,
)

logger = get_logger(__name__)

STRUCTURED = "structured"
PROSE = "prose"

PROSE_NAME_FIELDS = ("recipe_name", "Name")
PROSE_TIME_FIELDS = ("total_time", "Total Time")
PROSE_DIRECTION_FIELDS = ("directions", "Directions")


class RowSchemaError(ValueError):
    """Raised when a row cannot be read as any known layout."""


def _first(row: Mapping, fields: Iterable[str]) -> str:
    for f in fields:
        value = row.get(f)
        if value:
            return str(value)
    return ""


def _text(row: Mapping, field: str) -> str:
    value = row.get(field)
    return str(value).strip() if value else ""


def _strings(items: list) -> tuple:
    out = []
    for item in items:
        s = str(item).strip()
        if s:
            out.append(s)
    return tuple(out)


def _numbers(items: list) -> tuple:
    out = []
    for item in items:
        if isinstance(item, bool):
            continue
        if isinstance(item, (int, float)):
            out.append(float(item))
    return tuple(out)


def detect_schema(row: Mapping) -> str:
    if not isinstance(row, Mapping):
        raise RowSchemaError(f"row is {type(row).__name__}, not a mapping")
    if _first(row, PROSE_NAME_FIELDS):
        return PROSE
    return STRUCTURED


def normalize_structured(row: Mapping, fallback_id: int) -> RecipeRecord:
    source_id = parse_int(row.get("id"))
    ingredients = _strings(parse_literal_list(row.get("ingredients") or ""))
    steps = _strings(parse_literal_list(row.get("steps") or ""))

    declared = parse_int(row.get("n_ingredients")) or 0
    if declared and declared != len(ingredients):
        logger.debug(
            "n_ingredients=%s disagrees with %s parsed ingredients for id=%s",
            declared, len(ingredients), source_id,
        )

    return RecipeRecord(
        id=source_id if source_id and source_id > 0 else fallback_id,
        name=_text(row, "name"),
        ingredients=ingredients,
        steps=steps,
        minutes=max(parse_int(row.get("minutes")) or 0, 0),
        description=_text(row, "description"),
        tags=_strings(parse_literal_list(row.get("tags") or "")),
        nutrition=_numbers(parse_literal_list(row.get("nutrition") or "")),
        source_schema=STRUCTURED,
    )


def normalize_prose(row: Mapping, fallback_id: int) -> RecipeRecord:
    source_id = parse_int(row.get("id"))
    return RecipeRecord(
        id=source_id if source_id and source_id > 0 else fallback_id,
        name=_first(row, PROSE_NAME_FIELDS).strip(),
        ingredients=tuple(parse_ingredients(_text(row, "ingredients"))),
        steps=tuple(parse_steps(_first(row, PROSE_DIRECTION_FIELDS))),
        minutes=parse_time_to_minutes(_first(row, PROSE_TIME_FIELDS)),
        description=_text(row, "description"),
        source_schema=PROSE,
    )


NORMALIZERS: Dict[str, Callable[[Mapping, int], RecipeRecord]] = {
    STRUCTURED: normalize_structured,
    PROSE: normalize_prose,
}


def normalize_row(row: Mapping, fallback_id: int) -> Optional[RecipeRecord]:
    """Normalize one raw row; None if the result is not a usable recipe."""
    recipe = NORMALIZERS[detect_schema(row)](row, fallback_id)
    if not recipe.name or not recipe.ingredients:
        return None
    return recipe


def _next_free_id(start: int, taken: set) -> int:
    candidate = max(start, 1)
    while candidate in taken:
        candidate += 1
    return candidate


def normalize_rows(rows: Iterable[Mapping]) -> List[RecipeRecord]:
    """Normalize every row, skipping unusable or malformed ones.

    Rows without a source id take the first unused id at or after their
    1-based position among kept rows. A row repeating an id that is already
    taken is renumbered the same way, so ids stay unique and no usable row
    is lost.
    """
    recipes: List[RecipeRecord] = []
    seen_ids = set()
    skipped = 0
    for position, row in enumerate(rows, start=1):
        fallback_id = _next_free_id(len(recipes) + 1, seen_ids)
        try:
            recipe = normalize_row(row, fallback_id)
        except Exception as exc:
            logger.warning("Skipping malformed row %s: %r", position, exc)
            skipped += 1
            continue
        if recipe is None:
            logger.debug("Row %s has no name or no ingredients", position)
            continue
        if recipe.id in seen_ids:
            new_id = _next_free_id(fallback_id, seen_ids)
            logger.warning(
                "Row %s repeats id %s; renumbered to %s", position, recipe.id, new_id
            )
            recipe = replace(recipe, id=new_id)
        seen_ids.add(recipe.id)
        recipes.append(recipe)
    if skipped:
        logger.info("Skipped %s malformed row(s)", skipped)
    return recipes

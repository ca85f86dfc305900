"""Ingredient search over the loaded recipe collection.

Two ingredient matching modes:

* broad (default): keep a recipe if its ingredient text contains any of the
  caller's terms;
* strict (``use_only_saved``): keep a recipe only if every non-staple
  ingredient is covered by the caller's terms and at least one ingredient
  overlaps a term.

Time, ingredient-count and exclusion filters then apply in either mode.
Survivors keep the store's order.
"""
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .logging_utils import get_logger
from .models import RecipeRecord
from .normalize import is_exempt, is_ingredient_match, normalize_ingredients
from .parsing import parse_int
from .recipes import RecipeStore

logger = get_logger(__name__)

TERM_SPLIT_RE = re.compile(r"[\s,]+")
TRUE_VALUES = {"true", "1", "yes", "on"}


def extract_terms(value) -> Tuple[str, ...]:
    """Search terms from free text ("chicken, rice") or a list of terms."""
    if not value:
        return ()
    if isinstance(value, str):
        pieces = TERM_SPLIT_RE.split(value)
    else:
        pieces = [str(v) for v in value]
    return tuple(p for p in (s.strip().lower() for s in pieces) if p)


def extract_exclusions(value) -> Tuple[str, ...]:
    if not value:
        return ()
    pieces = value.split(",") if isinstance(value, str) else [str(v) for v in value]
    return tuple(p for p in (s.strip().lower() for s in pieces) if p)


def parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class SearchFilters:
    terms: Tuple[str, ...] = ()
    use_only_saved: bool = False
    max_time: Optional[int] = None
    max_ingredients: Optional[int] = None
    exclude: Tuple[str, ...] = ()

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "SearchFilters":
        """Build filters from plain request key/value pairs.

        Missing or blank values impose no constraint and numbers that do not
        parse are ignored rather than rejected.
        """
        return cls(
            terms=extract_terms(query.get("ingredients")),
            use_only_saved=parse_flag(query.get("use_only_saved")),
            max_time=parse_int(query.get("max_time")),
            max_ingredients=parse_int(query.get("max_ingredients")),
            exclude=extract_exclusions(query.get("exclude_ingredients")),
        )


def matches_any_term(recipe: RecipeRecord, terms: Sequence[str]) -> bool:
    text = recipe.ingredient_text()
    return any(t in text for t in terms)


def matches_saved_only(recipe: RecipeRecord, terms: Sequence[str]) -> bool:
    normalized = normalize_ingredients(recipe.ingredients)
    all_covered = all(
        is_exempt(ing) or is_ingredient_match(ing, terms) for ing in normalized
    )
    # staples count toward overlap as well
    has_overlap = any(is_ingredient_match(ing, terms) for ing in normalized)
    return all_covered and has_overlap


def filter_recipes(
    recipes: Sequence[RecipeRecord], filters: SearchFilters
) -> List[RecipeRecord]:
    results = list(recipes)

    if filters.terms:
        match = matches_saved_only if filters.use_only_saved else matches_any_term
        results = [r for r in results if match(r, filters.terms)]

    if filters.max_time is not None:
        results = [r for r in results if r.minutes <= filters.max_time]

    if filters.max_ingredients is not None:
        results = [r for r in results if r.n_ingredients <= filters.max_ingredients]

    if filters.exclude:
        results = [
            r for r in results
            if not any(x in r.ingredient_text() for x in filters.exclude)
        ]

    return results


class RecipeSearch:
    def __init__(self, store: RecipeStore):
        self.store = store

    def search(self, query) -> List[RecipeRecord]:
        """Return every recipe passing all filters in ``query``.

        ``query`` is either a ``SearchFilters`` or a mapping of request
        fields. No result cap is applied here.
        """
        if not self.store.is_loaded:
            logger.warning("Recipes not loaded yet")
            return []
        filters = query
        if not isinstance(query, SearchFilters):
            filters = SearchFilters.from_query(query)
        return filter_recipes(self.store.get_all_recipes(), filters)

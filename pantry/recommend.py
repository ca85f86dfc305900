from typing import Iterable, List, Set

from .models import RecipeRecord
from .recipes import RecipeStore
from .schemas import Recommendation, RecommendationResponse

POPULAR_COUNT = 5
MAX_RECOMMENDATIONS = 10
MIN_SHARED_INGREDIENTS = 2

POPULAR_REASON = "Popular recipe from our collection"
NO_BOOKMARKS_MESSAGE = "Please bookmark some recipes to get personalized recommendations"


def _to_recommendation(recipe: RecipeRecord, reason: str) -> Recommendation:
    return Recommendation(
        id=recipe.id,
        title=recipe.name,
        description=recipe.description,
        recommended_ingredients=list(recipe.ingredients),
        cooking_time=recipe.minutes,
        reason_for_recommendation=reason,
    )


def _ingredient_set(recipe: RecipeRecord) -> Set[str]:
    return {i.strip().lower() for i in recipe.ingredients}


def recommend(store: RecipeStore, bookmarked_ids: Iterable) -> RecommendationResponse:
    """Suggest recipes sharing ingredients with the caller's bookmarks.

    Bookmark storage lives outside this package; callers pass the ids.
    Shortfalls are topped up with the first recipes of the collection; only
    an empty bookmark list gets the "please bookmark" message.
    """
    all_recipes = store.get_all_recipes()
    requested = list(bookmarked_ids)
    bookmarked = [r for r in (store.get_recipe_by_id(i) for i in requested) if r]

    if not requested:
        return RecommendationResponse(
            message=NO_BOOKMARKS_MESSAGE,
            recommendations=[
                _to_recommendation(r, POPULAR_REASON)
                for r in all_recipes[:POPULAR_COUNT]
            ],
        )

    excluded = {r.id for r in bookmarked}
    picks: List[Recommendation] = []

    for source in bookmarked:
        source_ings = _ingredient_set(source)
        for recipe in all_recipes:
            if recipe.id in excluded:
                continue
            shared = len(source_ings & _ingredient_set(recipe))
            if shared >= MIN_SHARED_INGREDIENTS:
                reason = f'Similar to "{source.name}" (shares {shared} ingredients)'
                picks.append(_to_recommendation(recipe, reason))
                excluded.add(recipe.id)

    if len(picks) < POPULAR_COUNT:
        fill = [r for r in all_recipes if r.id not in excluded]
        picks.extend(
            _to_recommendation(r, POPULAR_REASON)
            for r in fill[:POPULAR_COUNT - len(picks)]
        )

    return RecommendationResponse(
        based_on=len(bookmarked),
        recommendations=picks[:MAX_RECOMMENDATIONS],
    )

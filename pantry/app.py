from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import schemas
from .config import settings
from .logging_utils import get_logger, init_logging
from .recipes import RecipeStore
from .recommend import recommend
from .search import RecipeSearch

init_logging(settings.log_level)
logger = get_logger(__name__)

store = RecipeStore(settings.dataset_path, load_timeout=settings.load_timeout)


def get_store() -> RecipeStore:
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the dataset once at startup; endpoints call load() again as a no-op
    s = get_store()
    s.load()
    logger.info("Serving %s recipes", len(s))
    yield


app = FastAPI(title="Pantry Recipe Search", lifespan=lifespan)

# Allow CORS for API clients (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def loaded_store(store: RecipeStore = Depends(get_store)) -> RecipeStore:
    store.load()
    return store


@app.get("/api/health")
def health():
    return {"status": "OK", "message": "Pantry recipe search is running"}


@app.get("/api/recipes/search", response_model=schemas.SearchResponse)
def search_recipes(
    ingredients: Optional[str] = None,
    use_only_saved: Optional[str] = None,
    max_time: Optional[str] = None,
    max_ingredients: Optional[str] = None,
    exclude_ingredients: Optional[str] = None,
    store: RecipeStore = Depends(loaded_store),
):
    # numeric fields arrive as text so malformed values are ignored, not 422
    query = {
        "ingredients": ingredients,
        "use_only_saved": use_only_saved,
        "max_time": max_time,
        "max_ingredients": max_ingredients,
        "exclude_ingredients": exclude_ingredients,
    }
    results = RecipeSearch(store).search(query)
    limited = results[: settings.search_result_limit]
    return {
        "count": len(limited),
        "total": len(results),
        "recipes": [schemas.Recipe.model_validate(r) for r in limited],
    }


@app.get("/api/recipes/all", response_model=schemas.RecipeListResponse)
def list_recipes(store: RecipeStore = Depends(loaded_store)):
    recipes = store.get_all_recipes()
    return {
        "count": len(recipes),
        "recipes": [schemas.Recipe.model_validate(r) for r in recipes],
    }


@app.get("/api/recipes/{recipe_id}", response_model=schemas.RecipeDetailResponse)
def get_recipe(recipe_id: str, store: RecipeStore = Depends(loaded_store)):
    r = store.get_recipe_by_id(recipe_id)
    if r is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"recipe": schemas.Recipe.model_validate(r)}


@app.get("/api/recommendations", response_model=schemas.RecommendationResponse)
def recommendations(
    bookmarked: str = "", store: RecipeStore = Depends(loaded_store)
):
    ids = [b.strip() for b in bookmarked.split(",") if b.strip()]
    return recommend(store, ids)

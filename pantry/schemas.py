from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    id: int
    name: str = Field(..., json_schema_extra={"example": "garlic soup"})
    minutes: int = 0
    n_steps: int = 0
    steps: List[str] = Field(
        default_factory=list,
        json_schema_extra={
            "example": [
                "peel the garlic",
                "simmer with the onion for 30 minutes",
                "season with salt and serve hot",
            ]
        },
    )
    description: str = ""
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={
            "example": ["1 onion, diced", "garlic (2 cloves, minced)", "salt"]
        },
    )
    n_ingredients: int = 0
    tags: List[str] = Field(default_factory=list)
    nutrition: List[float] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class SearchResponse(BaseModel):
    count: int
    total: int
    recipes: List[Recipe]


class RecipeListResponse(BaseModel):
    count: int
    recipes: List[Recipe]


class RecipeDetailResponse(BaseModel):
    recipe: Recipe


class Recommendation(BaseModel):
    id: int
    title: str
    description: str = ""
    recommended_ingredients: List[str] = Field(default_factory=list)
    cooking_time: int = 0
    reason_for_recommendation: str


class RecommendationResponse(BaseModel):
    based_on: int = 0
    message: Optional[str] = None
    recommendations: List[Recommendation]

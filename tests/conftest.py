import sys
from pathlib import Path

# Ensure project root is on sys.path so `pantry` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pandas as pd
import pytest

from pantry.models import RecipeRecord


STRUCTURED_ROWS = [
    {
        "id": "101",
        "name": "chicken rice bowl",
        "minutes": "25",
        "n_steps": "2",
        "steps": "['cook rice', 'grill chicken']",
        "description": "weeknight bowl",
        "ingredients": "['chicken breast', 'rice', 'salt']",
        "n_ingredients": "3",
        "tags": "['30-minutes-or-less', 'main-dish']",
        "nutrition": "[410.2, 12.0, 3.0]",
    },
    {
        "id": "102",
        "name": "peanut noodles",
        "minutes": "15",
        "n_steps": "1",
        "steps": "['toss everything']",
        "description": "",
        "ingredients": "['noodles', 'peanut butter', 'soy sauce']",
        "n_ingredients": "3",
        "tags": "[]",
        "nutrition": "[]",
    },
]

PROSE_ROWS = [
    {
        "recipe_name": "Garlic Soup",
        "total_time": "1 hrs 30 mins",
        "ingredients": "onion, garlic (2 cloves, minced), salt",
        "directions": "Peel the garlic. Simmer everything.\nServe hot.",
    },
    {
        "recipe_name": "Plain Water",
        "total_time": "5 mins",
        "ingredients": "",
        "directions": "1. Pour. 2. Drink.",
    },
]


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, name="recipes.csv"):
        path = tmp_path / name
        pd.DataFrame(rows).to_csv(path, index=False)
        return path
    return _write


@pytest.fixture
def dataset(write_csv):
    return write_csv(STRUCTURED_ROWS + PROSE_ROWS)


def make_recipe(rid, ingredients, name=None, minutes=0):
    return RecipeRecord(
        id=rid,
        name=name or f"recipe {rid}",
        ingredients=tuple(ingredients),
        minutes=minutes,
    )

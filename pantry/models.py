from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class RecipeRecord:
    """Canonical recipe, independent of the row schema it was read from."""

    id: int
    name: str
    ingredients: Tuple[str, ...]  # free text, may carry quantities/units
    steps: Tuple[str, ...] = ()
    minutes: int = 0
    description: str = ""
    tags: Tuple[str, ...] = ()
    nutrition: Tuple[float, ...] = ()
    source_schema: str = field(default="", compare=False)

    @property
    def n_ingredients(self) -> int:
        return len(self.ingredients)

    @property
    def n_steps(self) -> int:
        return len(self.steps)

    def ingredient_text(self) -> str:
        """All ingredients joined and lower-cased, for substring checks."""
        return " ".join(self.ingredients).lower()

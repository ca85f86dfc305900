import enum
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd

from .ingest import normalize_rows
from .logging_utils import get_logger
from .models import RecipeRecord
from .parsing import parse_int

logger = get_logger(__name__)


class LoadState(str, enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


def _skip_bad_line(fields: List[str]) -> None:
    logger.warning("Skipping CSV line with %s fields: %.80r", len(fields), fields)
    return None


def read_rows(path) -> List[Mapping[str, str]]:
    """Read a CSV file into a list of row dicts with raw string values.

    Every column is read as text and empty cells stay empty strings. Lines
    with too many fields are logged and skipped; bytes that are not UTF-8
    are replaced rather than failing the whole file.
    """
    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        encoding="utf-8",
        encoding_errors="replace",
        engine="python",
        on_bad_lines=_skip_bad_line,
    )
    # short lines leave missing cells as NaN
    return df.fillna("").to_dict(orient="records")


class RecipeStore:
    """Load-once, read-only collection of canonical recipes.

    ``load()`` may be called any number of times and from several threads;
    exactly one call reads the dataset, the others wait for it and return.
    A missing, unreadable or slow dataset leaves the store loaded and empty.
    """

    def __init__(self, path, load_timeout: float = 30.0):
        self.path = Path(path)
        self.load_timeout = load_timeout
        self._lock = threading.Lock()
        self._state = LoadState.UNLOADED
        self._recipes: Tuple[RecipeRecord, ...] = ()
        self._by_id: Dict[int, RecipeRecord] = {}

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is LoadState.LOADED

    def load(self) -> None:
        if self.is_loaded:
            return
        with self._lock:
            if self.is_loaded:
                return
            self._state = LoadState.LOADING
            rows = self._read_with_timeout()
            try:
                recipes = normalize_rows(rows)
            except Exception:
                logger.exception("Recipe normalization failed; starting empty")
                recipes = []
            self._recipes = tuple(recipes)
            self._by_id = {r.id: r for r in recipes}
            self._state = LoadState.LOADED
            logger.info("Loaded %s recipes from %s", len(recipes), self.path)

    def _read_with_timeout(self) -> List[Mapping[str, str]]:
        if not self.path.exists():
            logger.warning(
                "Recipe CSV file not found at %s. Starting with empty recipe list.",
                self.path,
            )
            return []
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="recipe-load")
        future = executor.submit(read_rows, self.path)
        try:
            return future.result(timeout=self.load_timeout)
        except FutureTimeout:
            logger.error(
                "Reading %s took longer than %ss; starting with empty recipe list",
                self.path, self.load_timeout,
            )
            return []
        except (OSError, ValueError) as exc:
            logger.error("Error loading recipes from %s: %r", self.path, exc)
            return []
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def get_all_recipes(self) -> Tuple[RecipeRecord, ...]:
        return self._recipes

    def get_recipe_by_id(self, recipe_id) -> Optional[RecipeRecord]:
        """Return the recipe whose id equals ``int(recipe_id)``, or None."""
        key = parse_int(recipe_id)
        if key is None:
            return None
        return self._by_id.get(key)

    def __len__(self) -> int:
        return len(self._recipes)

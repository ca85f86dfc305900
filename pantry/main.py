import sys

from .config import settings
from .logging_utils import init_logging
from .recipes import RecipeStore
from .search import RecipeSearch


def main(argv=None):
    """Print recipes matching the terms on the command line.

    Usage: python -m pantry.main [--strict] [term ...]
    """
    args = list(sys.argv[1:] if argv is None else argv)
    strict = "--strict" in args
    terms = [a for a in args if a != "--strict"]

    init_logging(settings.log_level)
    store = RecipeStore(settings.dataset_path, load_timeout=settings.load_timeout)
    store.load()
    print(f"Loaded {len(store)} recipe(s).")

    if terms:
        found = RecipeSearch(store).search(
            {"ingredients": ",".join(terms), "use_only_saved": strict}
        )
        print(f"{len(found)} match(es) for {', '.join(terms)}.")
    else:
        found = list(store.get_all_recipes())
    for r in found[: settings.search_result_limit]:
        print(f"- [{r.id}] {r.name} ({r.minutes} min)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

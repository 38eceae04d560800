"""Process-wide access to the foundation foods corpus.

Usage
-----
    load_foundation_foods()
    foundation_foods("raw kale")  # [FoodProfile(code="323505", name="Kale, raw", ...)]
"""

import threading

from foundation_foods.app_logging import configure_logging
from foundation_foods.containers import AppContainer, build_container
from foundation_foods.domain.foods import FoodProfile

_LOCK = threading.Lock()
_CONTAINER: AppContainer | None = None


def default_container() -> AppContainer:
    """Return the process-wide container, creating it on first use."""
    global _CONTAINER
    with _LOCK:
        if _CONTAINER is None:
            configure_logging()
            _CONTAINER = build_container()
        return _CONTAINER


def load_foundation_foods() -> dict[str, FoodProfile]:
    """Load the foundation foods corpus and its search index, once."""
    return default_container().search_service.load()


def foundation_foods_csv() -> str:
    """Return the location the corpus is loaded from."""
    return default_container().settings.corpus_location()


def foundation_foods(query: str) -> list[FoodProfile]:
    """Find foods matching a code, name or category query.

    Returns every food tied for the most distinct matched terms, or an empty
    list if the corpus has not been loaded yet.
    """
    return default_container().search_service.search(query)

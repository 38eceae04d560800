"""Process-wide foundation foods corpus with lazy, single load."""

import logging
import threading
from dataclasses import dataclass, field

from foundation_foods.adapters.csv_tables import load_corpus
from foundation_foods.adapters.text_source import TextSource
from foundation_foods.domain.foods import FoodProfile
from foundation_foods.services.search import SearchIndex, build_index, search

_logger = logging.getLogger(__name__)


@dataclass
class FoodSearchService:
    """Loads the composition corpus once and answers text queries."""

    source: str
    text_source: TextSource
    _index: SearchIndex | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    @property
    def loaded(self) -> bool:
        """Whether the corpus and index have been built."""
        return self._index is not None

    def load(self) -> dict[str, FoodProfile]:
        """Load the corpus and build its index, once per service."""
        index = self._index
        if index is not None:
            return index.corpus
        with self._lock:
            if self._index is None:
                corpus = load_corpus(self.text_source.read_text(self.source))
                self._index = build_index(corpus.values())
                _logger.info(
                    "Loaded %s foundation foods from %s", len(corpus), self.source
                )
            return self._index.corpus

    def search(self, query: str) -> list[FoodProfile]:
        """Return the best matching foods, or nothing if not loaded yet."""
        if not query or not query.strip():
            return []
        return search(self._index, query)

    def lookup(self, query: str) -> list[FoodProfile]:
        """Load the corpus if needed, then search it."""
        self.load()
        return self.search(query)

    def get(self, code: str) -> FoodProfile | None:
        """Return a food by its code, if loaded and present."""
        if self._index is None:
            return None
        return self._index.corpus.get(code)

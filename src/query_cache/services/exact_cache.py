"""Exact-match cache tier.

Three namespaces share one KeyValueStore:

    query_result:{hash(normalized query)}   30 min absolute, 10 min sliding
    embedding:{hash(text)}                  24 h absolute, low priority
    search:{search_type}:{hash(query)}      15 min absolute, 5 min sliding

Only query results are keyed on the normalized query; embeddings and search
results are keyed on the raw text.
"""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from query_cache.config import settings
from query_cache.entities import CachedQueryResult
from query_cache.protocols import CachePriority, KeyValueStore
from query_cache.utils import make_cache_key, normalize_query, truncate

logger = logging.getLogger(__name__)

QUERY_RESULT_NAMESPACE = "query_result"
EMBEDDING_NAMESPACE = "embedding"
SEARCH_NAMESPACE = "search"


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


class ExactCache:
    """Exact-key cache over a time-bounded key/value store.

    Hit/miss accounting is left to the caller; this class only stores and
    fetches.
    """

    def __init__(
        self,
        store: KeyValueStore,
        query_result_ttl: float | None = None,
        query_result_sliding: float | None = None,
        embedding_ttl: float | None = None,
        search_result_ttl: float | None = None,
        search_result_sliding: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._query_result_ttl = _or_default(query_result_ttl, settings.query_result_ttl)
        self._query_result_sliding = _or_default(
            query_result_sliding, settings.query_result_sliding
        )
        self._embedding_ttl = _or_default(embedding_ttl, settings.embedding_cache_ttl)
        self._search_result_ttl = _or_default(search_result_ttl, settings.search_result_ttl)
        self._search_result_sliding = _or_default(
            search_result_sliding, settings.search_result_sliding
        )
        self._clock = clock

    @staticmethod
    def query_key(query: str) -> str:
        """Key of the query-result slot for ``query``."""
        return make_cache_key(QUERY_RESULT_NAMESPACE, normalize_query(query))

    @staticmethod
    def embedding_key(text: str) -> str:
        return make_cache_key(EMBEDDING_NAMESPACE, text)

    @staticmethod
    def search_key(search_type: str, query: str) -> str:
        return make_cache_key(f"{SEARCH_NAMESPACE}:{search_type}", query)

    # Query results

    def lookup(self, query: str) -> CachedQueryResult | None:
        """Return the cached result for ``query`` or None."""
        key = self.query_key(query)
        cached = self._store.try_get(key)
        if cached is not None:
            logger.info("Cache HIT for query: '%s' (Hash: %s)", truncate(query, 50), key[-8:])
        return cached

    def store(self, query: str, response: str, sources: Sequence[str]) -> str:
        """Cache a query response.

        Args:
            query: The raw query
            response: The response text
            sources: Source identifiers, order preserved

        Returns:
            The cache key of the stored entry
        """
        normalized = normalize_query(query)
        key = make_cache_key(QUERY_RESULT_NAMESPACE, normalized)
        cached = CachedQueryResult(
            query=query,
            normalized_query=normalized,
            response=response,
            sources=tuple(sources),
            cached_at=self._clock(),
        )
        self._store.set(
            key,
            cached,
            absolute_expiration=self._query_result_ttl,
            sliding_expiration=self._query_result_sliding,
            priority=CachePriority.NORMAL,
        )
        logger.info(
            "Cached response for query (Hash: %s), expires in %d min",
            key[-8:],
            self._query_result_ttl // 60,
        )
        return key

    # Embeddings

    def get_embedding(self, text: str) -> list[float] | None:
        cached = self._store.try_get(self.embedding_key(text))
        return list(cached) if cached is not None else None

    def store_embedding(self, text: str, embedding: Sequence[float]) -> None:
        # Embeddings can be recomputed, so they go first under pressure
        self._store.set(
            self.embedding_key(text),
            tuple(embedding),
            absolute_expiration=self._embedding_ttl,
            priority=CachePriority.LOW,
        )

    # Search results

    def get_search_results(self, search_type: str, query: str) -> list[Any] | None:
        cached = self._store.try_get(self.search_key(search_type, query))
        if cached is None:
            return None
        logger.debug("Search cache HIT for %s: '%s'", search_type, truncate(query, 30))
        return list(cached)

    def store_search_results(self, search_type: str, query: str, results: Sequence[Any]) -> None:
        self._store.set(
            self.search_key(search_type, query),
            tuple(results),
            absolute_expiration=self._search_result_ttl,
            sliding_expiration=self._search_result_sliding,
            priority=CachePriority.NORMAL,
        )

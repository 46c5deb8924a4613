"""Query cache service: the two-tier cache facade.

This service orchestrates the exact-match tier (normalized-query hash over a
key/value store) and the semantic tier (embedding similarity), and owns the
hit/miss accounting for both.

Known limitation: the key/value store contract has no clear or
enumeration primitive, so ``clear_cache`` only empties the semantic tier and
resets the counters. Exact-tier entries leave when their TTL expires.
"""

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from query_cache.config import settings
from query_cache.entities import CachedQueryResult, CacheStatistics
from query_cache.protocols import EmbeddingProvider, KeyValueStore
from query_cache.repositories import MemoryKeyValueStore
from query_cache.exceptions import EmbeddingUnavailableError
from query_cache.utils import as_vector, truncate

from .exact_cache import ExactCache
from .semantic_cache import SemanticCache

logger = logging.getLogger(__name__)


class QueryCacheService:
    """Two-tier query cache.

    Lookup order is exact key first, then semantic similarity. The semantic
    tier is optional: without an embedding provider every semantic method
    returns immediately and the service behaves as an exact-match cache.

    Example:
        ```python
        from query_cache.repositories import OllamaEmbeddingProvider
        from query_cache.services import QueryCacheService

        # Exact-match only
        cache = QueryCacheService.create()

        # Exact + semantic
        cache = QueryCacheService.create(embedding_provider=OllamaEmbeddingProvider.create())

        cached = cache.get_cached_response(question)
        if cached is None:
            cached = await cache.get_semantically_cached_response(question)
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        semantic_cache: SemanticCache,
        embedding_provider: EmbeddingProvider | None = None,
        embedding_timeout: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache service.

        Args:
            store: Key/value store backing the exact tier (required).
            semantic_cache: Semantic tier (required).
            embedding_provider: Optional provider. None disables semantic caching.
            embedding_timeout: Seconds to wait for one embedding. Defaults to settings.
            clock: Time source in seconds, injectable for tests.
        """
        self._exact = ExactCache(store, clock=clock)
        self._semantic = semantic_cache
        self._embeddings = embedding_provider
        self._embedding_timeout = (
            embedding_timeout if embedding_timeout is not None else settings.embedding_timeout
        )
        self._clock = clock

        self._hits = 0
        self._misses = 0
        self._semantic_hits = 0
        self._stats_lock = threading.Lock()

        logger.info(
            "QueryCacheService initialized (Semantic caching: %s)",
            "Enabled" if self.semantic_enabled else "Disabled",
        )

    @classmethod
    def create(
        cls,
        embedding_provider: EmbeddingProvider | None = None,
        store: KeyValueStore | None = None,
        similarity_threshold: float | None = None,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "QueryCacheService":
        """Factory method to create QueryCacheService with sensible defaults.

        Args:
            embedding_provider: Optional provider for the semantic tier.
            store: Exact-tier store. If None, an in-memory store sized by settings.
            similarity_threshold: Semantic threshold. If None, uses settings.
            max_entries: Semantic capacity. If None, uses settings.
            clock: Time source in seconds.

        Returns:
            Configured QueryCacheService
        """
        if store is None:
            store = MemoryKeyValueStore.create(
                size_limit=settings.exact_cache_size_limit or None,
                clock=clock,
            )
        return cls(
            store=store,
            semantic_cache=SemanticCache(
                max_entries=max_entries,
                similarity_threshold=similarity_threshold,
            ),
            embedding_provider=embedding_provider,
            clock=clock,
        )

    @property
    def semantic_enabled(self) -> bool:
        return self._embeddings is not None

    # Query result cache

    def get_cached_response(self, query: str) -> CachedQueryResult | None:
        """Get the cached response for an exact (normalized) query match.

        Args:
            query: The raw query

        Returns:
            The cached result, or None on miss
        """
        cached = self._exact.lookup(query)
        with self._stats_lock:
            if cached is not None:
                self._hits += 1
            else:
                self._misses += 1
        return cached

    def cache_response(self, query: str, response: str, sources: Sequence[str]) -> str:
        """Cache a response in the exact tier.

        Returns:
            The cache key of the stored entry
        """
        return self._exact.store(query, response, sources)

    # Embedding cache

    def get_cached_embedding(self, text: str) -> list[float] | None:
        return self._exact.get_embedding(text)

    def cache_embedding(self, text: str, embedding: Sequence[float]) -> None:
        self._exact.store_embedding(text, embedding)

    # Search result cache

    def get_cached_search_results(self, search_type: str, query: str) -> list[Any] | None:
        """Get cached search results.

        The element type is opaque to the cache; callers get back what they
        stored for the same ``search_type``.
        """
        return self._exact.get_search_results(search_type, query)

    def cache_search_results(self, search_type: str, query: str, results: Sequence[Any]) -> None:
        self._exact.store_search_results(search_type, query, results)

    # Semantic cache

    async def _embed(self, provider: EmbeddingProvider, text: str) -> np.ndarray:
        """Embed text through the embedding cache, bounded by the timeout.

        Raises:
            EmbeddingUnavailableError: If the vector is not flat and non-empty
            ValueError: If the vector holds non-numeric or ragged values
        """
        cached = self._exact.get_embedding(text)
        raw = cached
        if raw is None:
            raw = await asyncio.wait_for(provider.encode(text), timeout=self._embedding_timeout)

        vector = as_vector(raw)
        if vector.ndim != 1 or vector.size == 0:
            raise EmbeddingUnavailableError(f"Malformed embedding of shape {vector.shape}")
        if cached is None:
            self._exact.store_embedding(text, vector.tolist())
        return vector

    async def get_semantically_cached_response(self, query: str) -> CachedQueryResult | None:
        """Find a cached response for a semantically similar query.

        Business logic:
        1. Embed the query (outside any lock)
        2. Scan the semantic tier for the best match above the threshold
        3. Count a semantic hit (and a hit) or a miss

        Embedding failures and timeouts are logged and treated as "no
        match"; they never propagate.

        Args:
            query: The raw query

        Returns:
            A copy of the matched result, or None
        """
        if self._embeddings is None:
            return None

        try:
            vector = await self._embed(self._embeddings, query)
        except Exception:
            logger.warning("Error in semantic cache lookup", exc_info=True)
            return None

        # Scan and count together so a concurrent clear_cache lands before or after both
        with self._stats_lock:
            match = self._semantic.find_similar(vector, self._clock())
            if match is None:
                self._misses += 1
                return None
            self._semantic_hits += 1
            self._hits += 1

        result, similarity = match
        logger.info(
            "Semantic cache HIT: '%s' matched '%s' (similarity: %.4f)",
            truncate(query, 40),
            truncate(result.query, 40),
            similarity,
        )
        return result

    async def add_to_semantic_cache(
        self, query: str, response: str, sources: Sequence[str]
    ) -> bool:
        """Add a response to the semantic tier.

        Embedding failures are logged and the add is skipped.

        Returns:
            True if a new entry was added
        """
        if self._embeddings is None:
            return False

        try:
            vector = await self._embed(self._embeddings, query)
        except Exception:
            logger.warning("Error adding to semantic cache", exc_info=True)
            return False

        return self._semantic.insert(query, vector, response, sources, self._clock())

    # Statistics

    def get_statistics(self) -> CacheStatistics:
        """Get a consistent snapshot of the cache counters."""
        with self._stats_lock:
            return CacheStatistics.from_counters(
                hits=self._hits,
                misses=self._misses,
                semantic_hits=self._semantic_hits,
                semantic_cache_size=self._semantic.size,
            )

    def clear_cache(self) -> int:
        """Empty the semantic tier and reset all counters.

        Exact-tier entries are not removed (see module docstring).

        Returns:
            Number of semantic entries removed
        """
        with self._stats_lock:
            removed = self._semantic.clear()
            self._hits = 0
            self._misses = 0
            self._semantic_hits = 0
        logger.info("Cache statistics and semantic cache reset")
        return removed

    async def is_healthy(self) -> bool:
        """Check if the semantic tier's provider is reachable.

        Returns:
            True when semantic caching is disabled or the provider answers
        """
        if self._embeddings is None:
            return True
        return await self._embeddings.is_available()

    @property
    def semantic_cache(self) -> SemanticCache:
        """Get the semantic tier (for testing)."""
        return self._semantic

    @property
    def embedding_provider(self) -> EmbeddingProvider | None:
        """Get the embedding provider (for testing)."""
        return self._embeddings

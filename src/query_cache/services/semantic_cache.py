"""Semantic cache tier.

Holds a bounded, insertion-ordered list of (query, embedding, response)
entries and answers lookups by cosine similarity. Every operation runs
under one lock: insert is purge, FIFO eviction, dedup check and append,
and none of those may interleave with a scan.

No embedding is computed here. Callers embed first and only hand over the
vector, so the lock is never held across network calls.
"""

import logging
import threading
from collections.abc import Sequence

from query_cache.config import settings
from query_cache.entities import CachedQueryResult, SemanticCacheEntry
from query_cache.utils import as_vector, cosine_similarity, truncate
from query_cache.utils.vector_math import Vector

logger = logging.getLogger(__name__)


class SemanticCache:
    """Bounded in-memory cache matched by embedding similarity.

    Example:
        ```python
        cache = SemanticCache(max_entries=500, similarity_threshold=0.95, ttl=1800)
        cache.insert("find me a quick breakfast", vector, "Banana Pancakes", ["recipe:0"], now)
        match = cache.find_similar(other_vector, now)
        ```
    """

    def __init__(
        self,
        max_entries: int | None = None,
        similarity_threshold: float | None = None,
        ttl: float | None = None,
    ) -> None:
        """Initialize the semantic cache.

        Args:
            max_entries: Capacity. Defaults to settings.semantic_max_entries.
            similarity_threshold: Minimum cosine similarity for a hit and for
                dedup on insert. Defaults to settings.
            ttl: Entry lifetime in seconds. Defaults to the query-result TTL.
        """
        self._max_entries = (
            max_entries if max_entries is not None else settings.semantic_max_entries
        )
        if self._max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {self._max_entries}")
        self._threshold = (
            similarity_threshold
            if similarity_threshold is not None
            else settings.semantic_similarity_threshold
        )
        self._ttl = ttl if ttl is not None else settings.semantic_cache_ttl
        self._entries: list[SemanticCacheEntry] = []
        self._lock = threading.Lock()

    def find_similar(
        self, query_vector: Vector, now: float
    ) -> tuple[CachedQueryResult, float] | None:
        """Find the most similar live entry.

        Expired entries are skipped, not removed. The first entry reaching
        the maximum similarity wins.

        Args:
            query_vector: Embedding of the incoming query
            now: Current time (Unix timestamp)

        Returns:
            (result copy, similarity) if the best similarity reaches the
            threshold, otherwise None
        """
        vector = as_vector(query_vector)
        with self._lock:
            best_match: SemanticCacheEntry | None = None
            best_similarity = 0.0

            for entry in self._entries:
                if entry.age(now) > self._ttl:
                    continue

                similarity = cosine_similarity(vector, entry.embedding)
                if similarity > best_similarity:
                    best_similarity = similarity
                    best_match = entry

            if best_match is None or best_similarity < self._threshold:
                return None

            logger.debug(
                "Semantic match '%s' (similarity: %.4f)",
                truncate(best_match.query, 40),
                best_similarity,
            )
            return best_match.to_result(), best_similarity

    def insert(
        self,
        query: str,
        embedding: Vector,
        response: str,
        sources: Sequence[str],
        now: float,
    ) -> bool:
        """Add an entry unless a near-duplicate is already cached.

        Steps, all under the lock:
        1. Drop entries older than the TTL
        2. At capacity, drop the oldest (size - capacity + 1) entries
        3. Skip the insert if any survivor is at least threshold-similar
        4. Append the new entry

        Returns:
            True if the entry was added, False if it was a near-duplicate
        """
        vector = as_vector(embedding)
        with self._lock:
            self._entries = [e for e in self._entries if e.age(now) <= self._ttl]

            if len(self._entries) >= self._max_entries:
                overflow = len(self._entries) - self._max_entries + 1
                del self._entries[:overflow]

            if any(cosine_similarity(vector, e.embedding) >= self._threshold for e in self._entries):
                return False

            self._entries.append(
                SemanticCacheEntry(
                    query=query,
                    embedding=vector,
                    response=response,
                    sources=tuple(sources),
                    cached_at=now,
                )
            )
            logger.info(
                "Added to semantic cache: '%s' (cache size: %d)",
                truncate(query, 40),
                len(self._entries),
            )
            return True

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def entries(self) -> list[CachedQueryResult]:
        """Snapshot of the entries in insertion order, as copies."""
        with self._lock:
            return [e.to_result() for e in self._entries]

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def ttl(self) -> float:
        return self._ttl

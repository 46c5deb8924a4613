"""Semantic cache entry domain entity."""

from dataclasses import dataclass, field

import numpy as np

from .cached_query_result import CachedQueryResult


@dataclass(frozen=True)
class SemanticCacheEntry:
    """Domain entity for one entry of the semantic cache.

    Owned by SemanticCache. The embedding is a read-only array so the
    similarity scan can use it without copying.

    Attributes:
        query: The original query text
        embedding: The query embedding (read-only float64 array)
        response: The cached response text
        sources: Source identifiers
        cached_at: When the entry was created (Unix timestamp)
    """

    query: str
    embedding: np.ndarray = field(repr=False, compare=False)
    response: str
    sources: tuple[str, ...]
    cached_at: float

    def age(self, now: float) -> float:
        """Seconds since the entry was created."""
        return now - self.cached_at

    def to_result(self) -> CachedQueryResult:
        """Copy the entry out as a CachedQueryResult."""
        return CachedQueryResult(
            query=self.query,
            normalized_query=self.query.lower(),
            response=self.response,
            sources=self.sources,
            cached_at=self.cached_at,
        )

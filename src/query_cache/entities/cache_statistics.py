"""Cache statistics domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStatistics:
    """Point-in-time snapshot of cache counters.

    Attributes:
        hits: Exact and semantic hits
        misses: Exact and semantic misses
        semantic_hits: Hits served by the semantic tier
        hit_rate: hits / (hits + misses) * 100, or 0 before any lookup
        semantic_cache_size: Entries currently held by the semantic tier
    """

    hits: int
    misses: int
    semantic_hits: int
    hit_rate: float
    semantic_cache_size: int

    @classmethod
    def from_counters(
        cls, hits: int, misses: int, semantic_hits: int, semantic_cache_size: int
    ) -> "CacheStatistics":
        total = hits + misses
        return cls(
            hits=hits,
            misses=misses,
            semantic_hits=semantic_hits,
            hit_rate=hits / total * 100 if total > 0 else 0.0,
            semantic_cache_size=semantic_cache_size,
        )

"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .answer import Answer
from .cache_statistics import CacheStatistics
from .cached_query_result import CachedQueryResult
from .catalog_item import CatalogItem, ScoredItem
from .semantic_cache_entry import SemanticCacheEntry

__all__ = [
    "Answer",
    "CacheStatistics",
    "CachedQueryResult",
    "CatalogItem",
    "ScoredItem",
    "SemanticCacheEntry",
]

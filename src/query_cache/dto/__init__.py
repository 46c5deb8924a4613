"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CheckCacheRequest, QueryRequest, SearchRequest, StoreCacheRequest
from .responses import (
    CacheCheckResponse,
    CachedResultItem,
    CacheStatsResponse,
    CacheStoreResponse,
    ClearCacheResponse,
    HealthCheckResponse,
    QueryResponse,
    SearchResponse,
    SearchResultItem,
)

__all__ = [
    "CheckCacheRequest",
    "StoreCacheRequest",
    "SearchRequest",
    "QueryRequest",
    "CachedResultItem",
    "CacheCheckResponse",
    "CacheStoreResponse",
    "CacheStatsResponse",
    "ClearCacheResponse",
    "HealthCheckResponse",
    "SearchResultItem",
    "SearchResponse",
    "QueryResponse",
]

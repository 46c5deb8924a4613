"""Response DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class CachedResultItem(BaseModel):
    """A cached query result."""

    query: str = Field(..., description="The query the entry was stored under")
    normalized_query: str = Field(..., description="The normalized form of that query")
    response: str = Field(..., description="The cached response")
    sources: list[str] = Field(default_factory=list, description="Source identifiers, in order")
    cached_at: float = Field(..., description="Timestamp when the entry was cached (Unix timestamp)")


class CacheCheckResponse(BaseModel):
    """Response DTO for cache check operation."""

    query: str = Field(..., description="The original query")
    is_hit: bool = Field(..., description="Whether either tier returned a result")
    match_type: Literal["exact", "semantic"] | None = Field(
        None,
        description="Which tier served the hit",
    )
    result: CachedResultItem | None = Field(None, description="The cached result on a hit")
    lookup_time_ms: float = Field(..., description="Time taken for the cache lookup in milliseconds")


class CacheStoreResponse(BaseModel):
    """Response DTO for cache store operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    key: str = Field(..., description="The exact-tier cache key")
    semantic_added: bool = Field(
        ...,
        description="Whether a new semantic entry was added (False for near-duplicates)",
    )
    message: str = Field(..., description="Human-readable status message")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    semantic_hits: int = Field(..., ge=0)
    hit_rate: float = Field(..., description="Hit rate in percent", ge=0.0, le=100.0)
    semantic_cache_size: int = Field(..., ge=0)
    semantic_enabled: bool = Field(..., description="Whether an embedding provider is configured")


class ClearCacheResponse(BaseModel):
    """Response DTO for cache clear operation."""

    success: bool
    deleted_count: int = Field(..., description="Semantic entries removed", ge=0)
    message: str


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    semantic_enabled: bool = Field(..., description="Whether semantic caching is configured")
    embedding_healthy: bool = Field(..., description="Whether the embedding service is reachable")


class SearchResultItem(BaseModel):
    """Single ranked catalog item."""

    key: int
    name: str
    category: str
    description: str
    score: float = Field(..., description="Cosine similarity to the query", ge=-1.0, le=1.0)


class SearchResponse(BaseModel):
    """Response DTO for catalog search."""

    query: str
    results: list[SearchResultItem] = Field(default_factory=list)
    search_time_ms: float


class QueryResponse(BaseModel):
    """Response DTO for the cached answer pipeline."""

    question: str
    answer: str
    sources: list[str] = Field(default_factory=list)
    from_cache: bool = Field(..., description="Served by the exact or semantic tier")

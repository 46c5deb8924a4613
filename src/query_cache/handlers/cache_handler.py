"""HTTP handlers for cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import time

from fastapi import HTTPException, status

from query_cache.dto import (
    CacheCheckResponse,
    CachedResultItem,
    CacheStatsResponse,
    CacheStoreResponse,
    CheckCacheRequest,
    ClearCacheResponse,
    HealthCheckResponse,
    StoreCacheRequest,
)
from query_cache.entities import CachedQueryResult
from query_cache.services import QueryCacheService


def to_result_item(result: CachedQueryResult) -> CachedResultItem:
    return CachedResultItem(
        query=result.query,
        normalized_query=result.normalized_query,
        response=result.response,
        sources=list(result.sources),
        cached_at=result.cached_at,
    )


class CacheHandler:
    """HTTP handlers for cache operations.

    This handler delegates business logic to QueryCacheService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses
    """

    def __init__(self, cache_service: QueryCacheService) -> None:
        """Initialize the cache handler.

        Args:
            cache_service: The cache service for business logic (required).
        """
        self._cache = cache_service

    async def check_cache(self, request: CheckCacheRequest) -> CacheCheckResponse:
        """Handle POST /cache/check requests.

        Args:
            request: The check cache request DTO

        Returns:
            CacheCheckResponse with the hit status and the tier that served it

        Raises:
            HTTPException: If an error occurs during cache check
        """
        try:
            start_time = time.time()

            match_type = None
            cached = self._cache.get_cached_response(request.query)
            if cached is not None:
                match_type = "exact"
            elif request.use_semantic:
                cached = await self._cache.get_semantically_cached_response(request.query)
                if cached is not None:
                    match_type = "semantic"

            lookup_time_ms = (time.time() - start_time) * 1000

            return CacheCheckResponse(
                query=request.query,
                is_hit=cached is not None,
                match_type=match_type,
                result=to_result_item(cached) if cached is not None else None,
                lookup_time_ms=lookup_time_ms,
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to check cache: {e}",
            ) from e

    async def store_cache(self, request: StoreCacheRequest) -> CacheStoreResponse:
        """Handle POST /cache/store requests.

        Stores in the exact tier and, when enabled, the semantic tier.

        Raises:
            HTTPException: If an error occurs during storage
        """
        try:
            key = self._cache.cache_response(request.query, request.response, request.sources)
            semantic_added = await self._cache.add_to_semantic_cache(
                request.query, request.response, request.sources
            )

            return CacheStoreResponse(
                success=True,
                key=key,
                semantic_added=semantic_added,
                message="Entry stored successfully",
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to store entry: {e}",
            ) from e

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        stats = self._cache.get_statistics()
        return CacheStatsResponse(
            hits=stats.hits,
            misses=stats.misses,
            semantic_hits=stats.semantic_hits,
            hit_rate=stats.hit_rate,
            semantic_cache_size=stats.semantic_cache_size,
            semantic_enabled=self._cache.semantic_enabled,
        )

    async def clear_cache(self) -> ClearCacheResponse:
        """Handle DELETE /cache requests.

        Exact-tier entries are left to expire on their own.
        """
        count = self._cache.clear_cache()
        return ClearCacheResponse(
            success=True,
            deleted_count=count,
            message="Semantic cache and statistics reset; exact entries expire by TTL",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await self._cache.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            semantic_enabled=self._cache.semantic_enabled,
            embedding_healthy=is_healthy,
        )

from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from query_cache.api.dependencies import CacheHandlerDep, SearchHandlerDep, lifespan
from query_cache.config import settings
from query_cache.dto import (
    CacheCheckResponse,
    CacheStatsResponse,
    CacheStoreResponse,
    CheckCacheRequest,
    ClearCacheResponse,
    HealthCheckResponse,
    QueryRequest,
    QueryResponse,
    SearchRequest,
    SearchResponse,
    StoreCacheRequest,
)

app = FastAPI(
    title="Query Cache API",
    description="Two-tier (exact + semantic) query cache in front of catalog similarity search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Query Cache API",
        "version": "0.1.0",
        "description": "Two-tier (exact + semantic) query cache in front of catalog similarity search",
        "endpoints": {
            "cache": "/cache",
            "search": "/search",
            "query": "/query",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: CacheHandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/cache/check", response_model=CacheCheckResponse)
async def check_cache(request: CheckCacheRequest, handler: CacheHandlerDep) -> CacheCheckResponse:
    """Look up a query in the exact tier, then the semantic tier."""
    return await handler.check_cache(request)


@app.post("/cache/store", response_model=CacheStoreResponse)
async def store_cache(request: StoreCacheRequest, handler: CacheHandlerDep) -> CacheStoreResponse:
    """Store a query/response pair in both tiers."""
    return await handler.store_cache(request)


@app.delete("/cache", response_model=ClearCacheResponse)
async def clear_cache(handler: CacheHandlerDep) -> ClearCacheResponse:
    """Clear the semantic tier and reset statistics."""
    return await handler.clear_cache()


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: CacheHandlerDep) -> CacheStatsResponse:
    """Get cache statistics."""
    return await handler.get_stats()


@app.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest, handler: SearchHandlerDep) -> SearchResponse:
    """Rank catalog items by similarity to the query."""
    return await handler.search(request)


@app.post("/query", response_model=QueryResponse)
async def query(request: QueryRequest, handler: SearchHandlerDep) -> QueryResponse:
    """Answer a question through the two-tier cache."""
    return await handler.answer(request)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "query_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )

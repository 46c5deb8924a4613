"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CheckCacheRequest(BaseModel):
    """Request DTO for checking the cache.

    The handler tries the exact tier first, then the semantic tier.
    """

    query: str = Field(..., description="The query to look up", min_length=1)
    use_semantic: bool = Field(
        True,
        description="Fall back to the semantic tier on an exact miss",
    )


class StoreCacheRequest(BaseModel):
    """Request DTO for storing in cache."""

    query: str = Field(..., description="The original user query", min_length=1)
    response: str = Field(..., description="The response to cache", min_length=1)
    sources: list[str] = Field(
        default_factory=list,
        description="Source identifiers backing the response, in order",
    )


class SearchRequest(BaseModel):
    """Request DTO for catalog similarity search."""

    query: str = Field(..., description="Natural-language search query")
    top_k: int | None = Field(
        None,
        description="Number of results (defaults to SEARCH_TOP_K)",
        ge=1,
        le=100,
    )


class QueryRequest(BaseModel):
    """Request DTO for the cached answer pipeline."""

    question: str = Field(..., description="The user's question", min_length=1)
    top_k: int | None = Field(None, ge=1, le=100)

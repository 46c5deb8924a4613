"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from query_cache.services import QueryCacheService

    # Using factory method (recommended)
    cache = QueryCacheService.create()
    cache = QueryCacheService.create(embedding_provider=provider)

    # Or manual creation
    cache = QueryCacheService(store=store, semantic_cache=SemanticCache())
    ```
"""

from .answer_service import AnswerService
from .cache_service import QueryCacheService
from .exact_cache import ExactCache
from .search_service import SearchService
from .semantic_cache import SemanticCache

__all__ = [
    "AnswerService",
    "ExactCache",
    "QueryCacheService",
    "SearchService",
    "SemanticCache",
]

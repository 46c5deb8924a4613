"""Query Cache - two-tier (exact + semantic) caching for similarity search.

This package provides a layered architecture for query caching:

Layers:
    - protocols: Interface contracts (KeyValueStore, EmbeddingProvider, ItemCatalog)
    - repositories: Data access implementations
    - services: Business logic (exact tier, semantic tier, facade, search)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from query_cache.services import QueryCacheService

    # Exact-match only
    cache = QueryCacheService.create()

    # Exact + semantic
    cache = QueryCacheService.create(embedding_provider=provider)
    ```

For HTTP API:
    ```python
    from query_cache.api.app import app
    ```
"""

from query_cache.config import get_settings, settings
from query_cache.entities import CachedQueryResult, CacheStatistics, CatalogItem, ScoredItem
from query_cache.exceptions import (
    CatalogNotInitializedError,
    EmbeddingUnavailableError,
    QueryCacheError,
)
from query_cache.protocols import CachePriority, EmbeddingProvider, ItemCatalog, KeyValueStore
from query_cache.repositories import (
    InMemoryItemCatalog,
    MemoryKeyValueStore,
    OllamaEmbeddingProvider,
)
from query_cache.services import (
    AnswerService,
    ExactCache,
    QueryCacheService,
    SearchService,
    SemanticCache,
)
from query_cache.utils import cosine_similarity, normalize_query, top_k_similar

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CachePriority",
    "EmbeddingProvider",
    "ItemCatalog",
    "KeyValueStore",
    # Services (business logic)
    "AnswerService",
    "ExactCache",
    "QueryCacheService",
    "SearchService",
    "SemanticCache",
    # Repositories (data access)
    "InMemoryItemCatalog",
    "MemoryKeyValueStore",
    "OllamaEmbeddingProvider",
    # Entities (domain models)
    "CachedQueryResult",
    "CacheStatistics",
    "CatalogItem",
    "ScoredItem",
    # Errors
    "QueryCacheError",
    "EmbeddingUnavailableError",
    "CatalogNotInitializedError",
    # Utilities
    "cosine_similarity",
    "normalize_query",
    "top_k_similar",
]

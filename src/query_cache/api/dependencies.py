"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from query_cache.config import configure_logging, settings
from query_cache.exceptions import EmbeddingUnavailableError
from query_cache.handlers import CacheHandler, SearchHandler
from query_cache.protocols import EmbeddingProvider
from query_cache.repositories import InMemoryItemCatalog, OllamaEmbeddingProvider
from query_cache.services import AnswerService, QueryCacheService, SearchService

logger = logging.getLogger(__name__)


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


def get_search_handler(request: Request) -> SearchHandler:
    """Dependency injection for SearchHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "search_handler", None)
    if handler is None:
        raise RuntimeError("SearchHandler not initialized. Check lifespan setup.")
    return handler


def build_embedding_provider(name: str | None = None) -> EmbeddingProvider | None:
    """Create the configured embedding provider.

    Args:
        name: "ollama", "local" or "none". Defaults to settings.embedding_provider.

    Returns:
        The provider, or None when embeddings are disabled
    """
    name = name or settings.embedding_provider
    if name == "none":
        return None
    if name == "local":
        # Needs the optional "local" extra (sentence-transformers)
        from query_cache.repositories.local_embedding_provider import LocalEmbeddingProvider

        return LocalEmbeddingProvider.create()
    return OllamaEmbeddingProvider.create()


async def build_catalog(embedding_provider: EmbeddingProvider | None) -> InMemoryItemCatalog:
    """Load and embed the item catalog.

    A catalog that cannot be embedded at startup stays uninitialized; search
    requests then fail with 409 while cache endpoints keep working.
    """
    if settings.catalog_path:
        catalog = InMemoryItemCatalog.from_json(settings.catalog_path)
    else:
        catalog = InMemoryItemCatalog()

    if embedding_provider is not None:
        try:
            await catalog.initialize(embedding_provider)
        except EmbeddingUnavailableError:
            logger.warning("Catalog embedding failed; search disabled until restart", exc_info=True)
    return catalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Embedding provider and catalog (data access)
    2. Cache, search and answer services (business logic)
    3. Handlers (HTTP endpoints)

    Cleanup:
        Closes the provider and removes all services from app.state on shutdown
    """
    configure_logging()

    embedding_provider = build_embedding_provider()
    catalog = await build_catalog(embedding_provider)

    cache_service = QueryCacheService.create(
        embedding_provider=embedding_provider if settings.semantic_cache_enabled else None,
    )
    search_service = SearchService(
        catalog=catalog,
        cache=cache_service,
        embedding_provider=embedding_provider,
    )
    answer_service = AnswerService(cache=cache_service, search=search_service)

    app.state.cache_service = cache_service
    app.state.cache_handler = CacheHandler(cache_service=cache_service)
    app.state.search_handler = SearchHandler(
        search_service=search_service, answer_service=answer_service
    )
    app.state.embedding_provider = embedding_provider

    logger.info(
        "Query cache ready (provider=%s, catalog=%d items, threshold=%.2f)",
        embedding_provider.model_name if embedding_provider else "none",
        len(catalog),
        cache_service.semantic_cache.threshold,
    )

    yield

    close = getattr(embedding_provider, "close", None)
    if close is not None:
        await close()

    del app.state.search_handler
    del app.state.cache_handler
    del app.state.cache_service
    del app.state.embedding_provider
    logger.info("Query cache shut down")


# Type aliases for cleaner dependency injection
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
SearchHandlerDep = Annotated[SearchHandler, Depends(get_search_handler)]

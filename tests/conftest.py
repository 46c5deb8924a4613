"""Shared fixtures for the query cache tests."""

from pathlib import Path

import pytest
from fakes import BREAKFAST, BREAKFAST_PARAPHRASE, PASTA, FakeEmbeddingProvider, ManualClock

from query_cache.entities import CatalogItem
from query_cache.repositories import InMemoryItemCatalog, MemoryKeyValueStore
from query_cache.services import AnswerService, QueryCacheService, SearchService, SemanticCache

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

ITEMS = [
    CatalogItem(
        0, "Banana Pancakes", "Sweet banana pancakes for breakfast", "Breakfast",
        cooking_time="20 minutes",
    ),
    CatalogItem(1, "Garden Salad", "Fresh garden salad", "Lunch"),
    CatalogItem(2, "Carbonara", "Creamy carbonara pasta", "Dinner", difficulty="Medium"),
]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider(
        {
            "find me a quick breakfast": BREAKFAST,
            "quick breakfast idea": BREAKFAST_PARAPHRASE,
            "creamy pasta for dinner": PASTA,
            "Sweet banana pancakes for breakfast": BREAKFAST,
            "Fresh garden salad": [0.0, 1.0, 0.0],
            "Creamy carbonara pasta": PASTA,
        }
    )


@pytest.fixture
def cache_service(provider, clock) -> QueryCacheService:
    """Cache with semantic tier enabled and a manual clock."""
    return QueryCacheService(
        store=MemoryKeyValueStore(clock=clock),
        semantic_cache=SemanticCache(max_entries=500, similarity_threshold=0.95, ttl=1800),
        embedding_provider=provider,
        embedding_timeout=1.0,
        clock=clock,
    )


@pytest.fixture
def recipes_path() -> Path:
    return DATA_DIR / "recipes.json"


@pytest.fixture
def catalog() -> InMemoryItemCatalog:
    """Three-item catalog, not yet embedded."""
    return InMemoryItemCatalog(ITEMS)


@pytest.fixture
def search_service(catalog, cache_service, provider) -> SearchService:
    return SearchService(
        catalog=catalog,
        cache=cache_service,
        embedding_provider=provider,
        default_top_k=2,
        embedding_timeout=1.0,
    )


@pytest.fixture
def answer_service(cache_service, search_service) -> AnswerService:
    return AnswerService(cache=cache_service, search=search_service)

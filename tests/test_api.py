"""
Tests for the query cache API.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from fakes import FailingEmbeddingProvider

from query_cache.api.app import app
from query_cache.api.dependencies import get_cache_handler, get_search_handler
from query_cache.handlers import CacheHandler, SearchHandler
from query_cache.repositories import InMemoryItemCatalog
from query_cache.services import AnswerService, SearchService


@pytest.fixture
def client(catalog, provider, cache_service, search_service, answer_service):
    """Create a test client wired to in-memory services and a fake provider."""
    asyncio.run(catalog.initialize(provider))
    app.dependency_overrides[get_cache_handler] = lambda: CacheHandler(cache_service)
    app.dependency_overrides[get_search_handler] = lambda: SearchHandler(
        search_service, answer_service
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def store(client, query="find me a quick breakfast"):
    return client.post(
        "/cache/store",
        json={"query": query, "response": "Banana Pancakes", "sources": ["recipe:0"]},
    )


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Query Cache API"
    assert "cache" in data["endpoints"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "semantic_enabled": True,
        "embedding_healthy": True,
    }


def test_cache_store(client):
    response = store(client)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["semantic_added"] is True
    assert data["key"].startswith("query_result:")


def test_cache_check_miss(client):
    response = client.post("/cache/check", json={"query": "anything new"})
    assert response.status_code == 200
    data = response.json()
    assert data["is_hit"] is False
    assert data["match_type"] is None
    assert data["result"] is None


def test_cache_check_exact_hit(client):
    store(client)
    response = client.post("/cache/check", json={"query": "Find me a quick breakfast?"})
    data = response.json()
    assert data["is_hit"] is True
    assert data["match_type"] == "exact"
    assert data["result"]["response"] == "Banana Pancakes"
    assert data["result"]["sources"] == ["recipe:0"]


def test_cache_check_semantic_hit(client):
    store(client)
    response = client.post("/cache/check", json={"query": "quick breakfast idea"})
    data = response.json()
    assert data["is_hit"] is True
    assert data["match_type"] == "semantic"

    stats = client.get("/stats").json()
    assert stats["semantic_hits"] == 1
    assert stats["hits"] == 1


def test_cache_check_exact_only(client):
    store(client)
    response = client.post(
        "/cache/check", json={"query": "quick breakfast idea", "use_semantic": False}
    )
    assert response.json()["is_hit"] is False


def test_cache_check_validation(client):
    response = client.post("/cache/check", json={"query": ""})
    assert response.status_code == 422


def test_stats_and_clear(client):
    store(client)
    client.post("/cache/check", json={"query": "find me a quick breakfast"})
    client.post("/cache/check", json={"query": "unknown", "use_semantic": False})

    stats = client.get("/stats").json()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == pytest.approx(50.0)
    assert stats["semantic_cache_size"] == 1
    assert stats["semantic_enabled"] is True

    response = client.delete("/cache")
    assert response.status_code == 200
    assert response.json()["deleted_count"] == 1

    stats = client.get("/stats").json()
    assert stats["hits"] == 0
    assert stats["hit_rate"] == 0.0
    assert stats["semantic_cache_size"] == 0


def test_search(client):
    response = client.post("/search", json={"query": "creamy pasta for dinner", "top_k": 2})
    assert response.status_code == 200
    data = response.json()
    assert [r["name"] for r in data["results"]] == ["Carbonara", "Banana Pancakes"]
    assert data["results"][0]["score"] == pytest.approx(1.0)


def test_search_top_k_validation(client):
    response = client.post("/search", json={"query": "pasta", "top_k": 0})
    assert response.status_code == 422


def test_query_is_cached(client):
    first = client.post("/query", json={"question": "find me a quick breakfast", "top_k": 1})
    assert first.status_code == 200
    assert first.json()["from_cache"] is False
    assert first.json()["sources"] == ["recipe:0"]

    second = client.post("/query", json={"question": "quick breakfast idea"})
    assert second.json()["from_cache"] is True
    assert second.json()["answer"] == first.json()["answer"]


def test_search_embedding_unavailable(catalog, cache_service):
    search = SearchService(catalog, cache_service, FailingEmbeddingProvider())
    app.dependency_overrides[get_search_handler] = lambda: SearchHandler(
        search, AnswerService(cache_service, search)
    )
    try:
        response = TestClient(app).post("/search", json={"query": "pasta"})
        assert response.status_code == 503
    finally:
        app.dependency_overrides.clear()


def test_search_catalog_not_initialized(cache_service, provider):
    search = SearchService(InMemoryItemCatalog(), cache_service, provider)
    app.dependency_overrides[get_search_handler] = lambda: SearchHandler(
        search, AnswerService(cache_service, search)
    )
    try:
        response = TestClient(app).post("/search", json={"query": "creamy pasta for dinner"})
        assert response.status_code == 409
    finally:
        app.dependency_overrides.clear()

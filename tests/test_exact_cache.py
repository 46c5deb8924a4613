"""
Tests for the exact-match cache tier.
"""

import pytest

from query_cache.repositories import MemoryKeyValueStore
from query_cache.services import ExactCache


@pytest.fixture
def exact(clock) -> ExactCache:
    return ExactCache(MemoryKeyValueStore(clock=clock), clock=clock)


def test_store_then_lookup_round_trip(exact, clock):
    sources = ["recipe:3", "recipe:0", "recipe:7"]
    exact.store("Best pasta for dinner?", "Carbonara", sources)

    result = exact.lookup("Best pasta for dinner?")
    assert result is not None
    assert result.response == "Carbonara"
    assert list(result.sources) == sources
    assert result.query == "Best pasta for dinner?"
    assert result.normalized_query == "best pasta for dinner"
    assert result.cached_at == clock.now


def test_lookup_is_normalized(exact):
    exact.store("What is this?", "A recipe", [])
    assert exact.lookup("  what   is this  ") is not None
    assert ExactCache.query_key("What is this?") == ExactCache.query_key("  what   is this  ")


def test_lookup_miss(exact):
    assert exact.lookup("never stored") is None


def test_restore_replaces_entry(exact):
    exact.store("q", "first", ["a"])
    exact.store("Q", "second", ["b"])
    result = exact.lookup("q")
    assert result.response == "second"
    assert result.sources == ("b",)


def test_sources_are_snapshotted(exact):
    sources = ["recipe:1"]
    exact.store("q", "r", sources)
    sources.append("recipe:2")
    assert exact.lookup("q").sources == ("recipe:1",)


def test_query_result_expires_after_absolute_ttl(exact, clock):
    exact.store("q", "r", [])
    for _ in range(3):
        clock.advance(590)
        assert exact.lookup("q") is not None
    clock.advance(590)  # 2360s > 30 min
    assert exact.lookup("q") is None


def test_query_result_sliding_window(exact, clock):
    exact.store("q", "r", [])
    clock.advance(601)
    assert exact.lookup("q") is None


def test_embedding_round_trip(exact, clock):
    exact.store_embedding("Some Text", [0.1, 0.2])
    assert exact.get_embedding("Some Text") == [0.1, 0.2]
    # Embeddings are keyed on raw text
    assert exact.get_embedding("some text") is None

    clock.advance(24 * 3600)
    assert exact.get_embedding("Some Text") is None


def test_search_results_are_namespaced(exact, clock):
    exact.store_search_results("recipes", "pasta", [1, 2, 3])
    assert exact.get_search_results("recipes", "pasta") == [1, 2, 3]
    assert exact.get_search_results("articles", "pasta") is None

    clock.advance(301)
    assert exact.get_search_results("recipes", "pasta") is None


def test_key_formats():
    assert ExactCache.query_key("x").startswith("query_result:")
    assert ExactCache.embedding_key("x").startswith("embedding:")
    assert ExactCache.search_key("recipes", "x").startswith("search:recipes:")


def test_explicit_zero_ttl_is_respected(clock):
    exact = ExactCache(MemoryKeyValueStore(clock=clock), query_result_ttl=0, clock=clock)
    exact.store("q", "r", [])
    assert exact.lookup("q") is None

"""
Tests for the semantic cache tier.
"""

import math
import threading

import pytest

from query_cache.services import SemanticCache

NOW = 1_000.0


def one_hot(index: int, dim: int) -> list[float]:
    vector = [0.0] * dim
    vector[index] = 1.0
    return vector


@pytest.fixture
def semantic() -> SemanticCache:
    return SemanticCache(max_entries=500, similarity_threshold=0.95, ttl=1800)


def test_hit_above_threshold(semantic):
    semantic.insert("find me a quick breakfast", [1.0, 0.0], "Banana Pancakes", ["recipe:0"], NOW)

    match = semantic.find_similar([0.97, math.sqrt(1 - 0.97**2)], NOW)
    assert match is not None
    result, similarity = match
    assert result.response == "Banana Pancakes"
    assert result.sources == ("recipe:0",)
    assert similarity == pytest.approx(0.97)


def test_miss_below_threshold(semantic):
    semantic.insert("q", [1.0, 0.0], "r", [], NOW)
    assert semantic.find_similar([0.9, math.sqrt(1 - 0.81)], NOW) is None


def test_empty_cache_misses(semantic):
    assert semantic.find_similar([1.0, 0.0], NOW) is None


def test_fifo_eviction_at_capacity(semantic):
    dim = 501
    for i in range(501):
        assert semantic.insert(f"q{i}", one_hot(i, dim), f"r{i}", [], NOW)

    queries = [entry.query for entry in semantic.entries()]
    assert len(queries) == 500
    assert queries == [f"q{i}" for i in range(1, 501)]
    assert semantic.find_similar(one_hot(0, dim), NOW) is None


def test_near_duplicate_is_not_inserted(semantic):
    semantic.insert("original", [1.0, 0.0], "first", [], NOW)

    added = semantic.insert("paraphrase", [0.99, math.sqrt(1 - 0.99**2)], "second", [], NOW)

    assert added is False
    assert len(semantic) == 1
    result, _ = semantic.find_similar([1.0, 0.0], NOW)
    assert result.response == "first"


def test_ttl_boundary(semantic):
    semantic.insert("q", [1.0, 0.0], "r", [], NOW)

    assert semantic.find_similar([1.0, 0.0], NOW + 1800) is not None
    assert semantic.find_similar([1.0, 0.0], NOW + 1801) is None


def test_expired_entries_are_purged_on_insert(semantic):
    semantic.insert("old", [1.0, 0.0], "r", [], NOW)
    # Same vector, but the old entry has expired so it no longer blocks the insert
    assert semantic.insert("new", [1.0, 0.0], "r2", [], NOW + 1801) is True
    assert [e.query for e in semantic.entries()] == ["new"]


def test_equal_similarity_first_inserted_wins(semantic):
    semantic.insert("first", [1.0, 0.3], "r1", [], NOW)
    semantic.insert("second", [1.0, -0.3], "r2", [], NOW)
    assert len(semantic) == 2

    result, _ = semantic.find_similar([1.0, 0.0], NOW)
    assert result.query == "first"


def test_result_is_a_copy(semantic):
    semantic.insert("Find Breakfast", [1.0, 0.0], "r", ["recipe:0"], NOW)
    result, _ = semantic.find_similar([1.0, 0.0], NOW)
    assert result.normalized_query == "find breakfast"
    assert result.cached_at == NOW
    assert result is not semantic.find_similar([1.0, 0.0], NOW)[0]


def test_explicit_zero_ttl_is_respected():
    semantic = SemanticCache(max_entries=10, similarity_threshold=0.95, ttl=0)
    semantic.insert("q", [1.0, 0.0], "r", [], NOW)

    assert semantic.find_similar([1.0, 0.0], NOW) is not None
    assert semantic.find_similar([1.0, 0.0], NOW + 1) is None


def test_non_positive_capacity_is_rejected():
    with pytest.raises(ValueError):
        SemanticCache(max_entries=0, similarity_threshold=0.95, ttl=1800)


def test_clear(semantic):
    for i in range(3):
        semantic.insert(f"q{i}", one_hot(i, 3), "r", [], NOW)
    assert semantic.clear() == 3
    assert semantic.size == 0


def test_concurrent_inserts_respect_capacity():
    semantic = SemanticCache(max_entries=50, similarity_threshold=0.95, ttl=1800)
    dim = 400

    def insert_range(start: int) -> None:
        for i in range(start, start + 100):
            semantic.insert(f"q{i}", one_hot(i, dim), "r", [], NOW)
            semantic.find_similar(one_hot(i, dim), NOW)

    threads = [threading.Thread(target=insert_range, args=(n * 100,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert semantic.size == 50

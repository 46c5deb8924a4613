"""
Tests for the in-memory key/value store.
"""

import threading

from query_cache.protocols import CachePriority, KeyValueStore
from query_cache.repositories import MemoryKeyValueStore


def test_satisfies_protocol():
    assert isinstance(MemoryKeyValueStore(), KeyValueStore)


def test_missing_key_returns_none():
    assert MemoryKeyValueStore().try_get("nope") is None


def test_absolute_expiration(clock):
    store = MemoryKeyValueStore(clock=clock)
    store.set("k", "v", absolute_expiration=60)

    clock.advance(59)
    assert store.try_get("k") == "v"

    clock.advance(1)
    assert store.try_get("k") is None
    assert store.count() == 0


def test_sliding_expiration_resets_on_access(clock):
    store = MemoryKeyValueStore(clock=clock)
    store.set("k", "v", absolute_expiration=1800, sliding_expiration=600)

    for _ in range(3):
        clock.advance(500)
        assert store.try_get("k") == "v"

    clock.advance(601)
    assert store.try_get("k") is None


def test_absolute_expiration_caps_sliding(clock):
    store = MemoryKeyValueStore(clock=clock)
    store.set("k", "v", absolute_expiration=1800, sliding_expiration=600)

    for _ in range(3):
        clock.advance(500)
        assert store.try_get("k") == "v"

    clock.advance(300)  # t=1800, touched 300s ago
    assert store.try_get("k") is None


def test_set_replaces_value(clock):
    store = MemoryKeyValueStore(clock=clock)
    store.set("k", "old", absolute_expiration=10)
    store.set("k", "new", absolute_expiration=10)
    assert store.try_get("k") == "new"
    assert store.count() == 1


def test_unread_expired_entries_are_swept_on_write(clock):
    store = MemoryKeyValueStore(clock=clock)
    for i in range(5000):
        store.set(f"query_result:{i}", i, absolute_expiration=1800, sliding_expiration=600)
        store.set(f"search:catalog-top6:{i}", [i], absolute_expiration=900, sliding_expiration=300)
    assert store.count() == 10000

    clock.advance(2 * 86400)
    store.set("fresh", "v", absolute_expiration=1800)

    assert store.count() == 1
    assert store.try_get("fresh") == "v"


def test_sweep_runs_at_most_once_per_interval(clock):
    store = MemoryKeyValueStore(clock=clock, scan_interval=60)
    store.set("short", 1, absolute_expiration=5)

    clock.advance(10)
    store.set("a", 2)
    # Expired, but the last sweep was only 10s ago
    assert store.count() == 2

    clock.advance(50)
    store.set("b", 3)
    assert store.count() == 2
    assert store.try_get("short") is None


def test_size_limit_evicts_low_priority_first(clock):
    store = MemoryKeyValueStore(size_limit=2, clock=clock)
    store.set("low", 1, priority=CachePriority.LOW)
    store.set("a", 2)
    store.set("b", 3)

    assert store.try_get("low") is None
    assert store.try_get("a") == 2
    assert store.try_get("b") == 3


def test_size_limit_evicts_oldest_within_priority(clock):
    store = MemoryKeyValueStore(size_limit=2, clock=clock)
    store.set("a", 1)
    store.set("b", 2)
    store.set("c", 3)

    assert store.try_get("a") is None
    assert store.count() == 2


def test_size_limit_drops_expired_before_live(clock):
    store = MemoryKeyValueStore(size_limit=2, clock=clock)
    store.set("short", 1, absolute_expiration=5, priority=CachePriority.HIGH)
    store.set("a", 2, priority=CachePriority.LOW)
    clock.advance(10)
    store.set("b", 3)

    assert store.try_get("a") == 2
    assert store.try_get("b") == 3


def test_concurrent_writers():
    store = MemoryKeyValueStore(size_limit=50)

    def write(prefix: str) -> None:
        for i in range(200):
            store.set(f"{prefix}:{i}", i)
            store.try_get(f"{prefix}:{i}")

    threads = [threading.Thread(target=write, args=(str(n),)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count() == 50

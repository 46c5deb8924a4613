"""In-memory implementation of KeyValueStore.

Entries carry an optional absolute expiration and an optional sliding
expiration; whichever passes first expires the entry. Expiry is checked on
read, and writes sweep out every expired entry at most once per scan
interval, so keys that are never read again still leave the store. An
optional size limit compacts the store on write, dropping expired entries
first and then the lowest-priority, oldest ones.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from query_cache.protocols import CachePriority

logger = logging.getLogger(__name__)

DEFAULT_SCAN_INTERVAL = 60.0


@dataclass
class _StoredValue:
    value: Any
    created_at: float
    last_access: float
    expires_at: float | None
    sliding: float | None
    priority: CachePriority

    def is_expired(self, now: float) -> bool:
        if self.expires_at is not None and now >= self.expires_at:
            return True
        return self.sliding is not None and now - self.last_access >= self.sliding


class MemoryKeyValueStore:
    """Thread-safe in-process KeyValueStore.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        store = MemoryKeyValueStore.create(size_limit=10_000)
        store.set("query_result:ABCD", result, absolute_expiration=1800, sliding_expiration=600)
        ```
    """

    def __init__(
        self,
        size_limit: int | None = None,
        clock: Callable[[], float] = time.time,
        scan_interval: float = DEFAULT_SCAN_INTERVAL,
    ) -> None:
        """Initialize the store.

        Args:
            size_limit: Maximum number of entries. None or 0 means unbounded.
            clock: Time source in seconds, injectable for tests.
            scan_interval: Minimum seconds between expired-entry sweeps on write.
        """
        self._entries: dict[str, _StoredValue] = {}
        self._size_limit = size_limit or None
        self._clock = clock
        self._scan_interval = scan_interval
        self._last_scan = clock()
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        size_limit: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "MemoryKeyValueStore":
        """Factory method to create MemoryKeyValueStore with defaults.

        Args:
            size_limit: Maximum number of entries. If None, unbounded.
            clock: Time source in seconds.

        Returns:
            Configured MemoryKeyValueStore
        """
        return cls(size_limit=size_limit, clock=clock)

    def set(
        self,
        key: str,
        value: Any,
        absolute_expiration: float | None = None,
        sliding_expiration: float | None = None,
        priority: CachePriority = CachePriority.NORMAL,
    ) -> None:
        """Store a value with its expirations."""
        now = self._clock()
        stored = _StoredValue(
            value=value,
            created_at=now,
            last_access=now,
            expires_at=now + absolute_expiration if absolute_expiration is not None else None,
            sliding=sliding_expiration,
            priority=priority,
        )
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = stored
            if now - self._last_scan >= self._scan_interval:
                self._purge_expired(now)
            if self._size_limit is not None and len(self._entries) > self._size_limit:
                self._compact(now)

    def try_get(self, key: str) -> Any | None:
        """Return the live value for ``key`` and restart its sliding window."""
        with self._lock:
            stored = self._entries.get(key)
            if stored is None:
                return None
            now = self._clock()
            if stored.is_expired(now):
                del self._entries[key]
                return None
            stored.last_access = now
            return stored.value

    def count(self) -> int:
        """Return the number of entries currently held."""
        with self._lock:
            return len(self._entries)

    def _compact(self, now: float) -> None:
        """Shrink the store back to its size limit. Caller holds the lock."""
        expired = self._purge_expired(now)

        overflow = len(self._entries) - (self._size_limit or 0)
        if overflow <= 0:
            return

        # dict order is insertion order, so sorted() keeps oldest first per priority
        victims = sorted(self._entries, key=lambda k: self._entries[k].priority)[:overflow]
        for key in victims:
            del self._entries[key]
        logger.debug("Compacted %d entries (%d expired)", len(victims), expired)

    def _purge_expired(self, now: float) -> int:
        """Drop every expired entry. Caller holds the lock."""
        expired = [k for k, v in self._entries.items() if v.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._last_scan = now
        return len(expired)

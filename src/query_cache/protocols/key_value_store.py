"""Key/value store protocol.

Defines the storage contract the exact-match cache tier runs on. The
contract has no enumeration or bulk-clear primitive: entries
leave the store only through expiry or the store's own compaction.

Implementations can include:
- In-process memory store (default)
- Any time-bounded key/value store with per-entry expirations
"""

from enum import IntEnum
from typing import Any, Protocol, runtime_checkable


class CachePriority(IntEnum):
    """Eviction hint. Lower priorities are compacted first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for time-bounded key/value stores.

    Implementations must be safe to call from concurrent threads; callers
    add no synchronization of their own.

    Example:
        ```python
        store: KeyValueStore = MemoryKeyValueStore()
        store.set("embedding:ABCD", vector, absolute_expiration=86400)
        store.try_get("embedding:ABCD")
        ```
    """

    def set(
        self,
        key: str,
        value: Any,
        absolute_expiration: float | None = None,
        sliding_expiration: float | None = None,
        priority: CachePriority = CachePriority.NORMAL,
    ) -> None:
        """Store a value, replacing any existing value for the key.

        Args:
            key: The cache key
            value: The value to store
            absolute_expiration: Seconds from now after which the entry expires
            sliding_expiration: Seconds of inactivity after which the entry
                expires; every successful read restarts the window
            priority: Eviction hint used under memory pressure
        """
        ...

    def try_get(self, key: str) -> Any | None:
        """Return the live value for ``key`` or None.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if missing or expired
        """
        ...

    def count(self) -> int:
        """Return the number of entries currently held (expired included)."""
        ...

"""Cache store backends for catalog responses.

Two local backends satisfy the ``CacheStore`` protocol:

1. **MemoryCacheStore**: in-process, TTL-bounded, thread-safe.  Entries
   expire silently; an expired entry reads as a miss and is overwritten
   by the next ``set``.
2. **NullCacheStore**: always unavailable.  Forces every catalog query
   to go to the remote server.

Hosts with a distributed cache provide their own ``CacheStore``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class MemoryCacheStore:
    """In-process key/value cache with per-entry expiry.

    Parameters
    ----------
    clock:
        Returns the current time in seconds.  Defaults to
        ``time.monotonic``; tests inject a controllable clock.

    Examples
    --------
    >>> store = MemoryCacheStore()
    >>> store.set("categories", b'["tools"]', ttl_seconds=60)
    >>> store.get("categories")
    b'["tools"]'
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float]] = {}
        self._lock = threading.Lock()

    def available(self) -> bool:
        return True

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                logger.debug("Cache entry '%s' expired.", key)
                return None
            return value

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class NullCacheStore:
    """A cache backend that is never available."""

    def available(self) -> bool:
        return False

    def get(self, key: str) -> bytes | None:
        return None

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        return None

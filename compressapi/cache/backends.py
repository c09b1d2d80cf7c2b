"""Cache backend implementations."""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, List, Optional

from .core import CacheBackend, CacheEntry

logger = logging.getLogger("compressapi.cache")


class InMemoryBackend(CacheBackend):
    """
    In-process cache with per-entry TTL and lazy expiration.

    Expired entries are dropped when a lookup touches them; `purge_expired` can be
    called to sweep the rest. With `max_size` unset the cache grows without bound,
    otherwise the least recently used entry is evicted once the bound is exceeded.

    All operations run under one lock and never await while holding it, so the
    backend is safe to share between tasks and threads.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        **config
    ):
        super().__init__(**config)
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be a positive integer or None")
        self.max_size = max_size
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def _lookup(self, key: str, now: float) -> Optional[CacheEntry]:
        """Return the live entry for key, evicting it if expired. Caller holds the lock."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(now):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Optional[Any]:
        """Get value from in-memory cache."""
        with self._lock:
            now = self._clock()
            entry = self._lookup(key, now)
            if entry is None:
                self.stats.misses += 1
                return None

            # Update access order for LRU
            entry.last_access = now
            self._entries.move_to_end(key)
            self.stats.hits += 1
            return entry.value

    async def set(self, key: str, value: Any, ttl: float) -> bool:
        """Store value, replacing any previous entry and restarting its TTL."""
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        with self._lock:
            now = self._clock()
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(key=key, value=value, created_at=now, ttl=ttl, last_access=now)
            self.stats.sets += 1
            if self.max_size is not None and len(self._entries) > self.max_size:
                self._evict(now)
        return True

    def _evict(self, now: float) -> None:
        self._purge(now)
        evicted = 0
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            evicted += 1
        self.stats.evictions += evicted
        if evicted:
            logger.debug(f"Evicted {evicted} cache entries to stay within {self.max_size}")

    def _purge(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        with self._lock:
            removed = self._purge(self._clock())
        if removed:
            logger.debug(f"Purged {removed} expired cache entries")
        return removed

    async def delete(self, key: str) -> bool:
        """Delete key from in-memory cache."""
        with self._lock:
            if self._entries.pop(key, None) is not None:
                self.stats.deletes += 1
                return True
            return False

    async def clear(self) -> bool:
        """Clear all entries from in-memory cache."""
        with self._lock:
            self._entries.clear()
        return True

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache."""
        with self._lock:
            return self._lookup(key, self._clock()) is not None

    async def ttl(self, key: str) -> Optional[float]:
        """Get remaining TTL for key."""
        with self._lock:
            now = self._clock()
            entry = self._lookup(key, now)
            if entry is None:
                return None
            return entry.expires_at - now

    async def keys(self) -> List[str]:
        """Get all keys that have not expired."""
        with self._lock:
            self._purge(self._clock())
            return list(self._entries)

    def __len__(self) -> int:
        # counts entries that may have expired but not been purged yet
        with self._lock:
            return len(self._entries)

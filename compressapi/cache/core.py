"""Core cache types shared by the compression result cache."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class CacheStats:
    """Cache statistics tracking."""
    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0


@dataclass
class CacheEntry:
    """A stored value together with the clock reading it was written at."""
    key: str
    value: Any
    created_at: float
    ttl: float
    last_access: float = field(default=0.0)

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl

    def is_expired(self, now: float) -> bool:
        # visible only while now < created_at + ttl
        return now >= self.expires_at


class CacheBackend(ABC):
    """Abstract base class for cache backends."""

    def __init__(self, **config):
        self.config = config
        self.stats = CacheStats()

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: float) -> bool:
        """Set value in cache with a TTL in seconds."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete key from cache."""
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """Clear all cache entries."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if key exists in cache."""
        pass

    @abstractmethod
    async def ttl(self, key: str) -> Optional[float]:
        """Get remaining TTL for key."""
        pass

    @abstractmethod
    async def keys(self) -> List[str]:
        """Get all live keys."""
        pass

    async def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        return self.stats

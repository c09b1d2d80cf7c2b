"""
compressapi caching system.

Holds compressed response bodies keyed by encoding and content hash, with a per-entry
time-to-live. Each middleware instance owns its own cache.
"""

from .backends import InMemoryBackend
from .core import CacheBackend, CacheEntry, CacheStats
from .utils import make_cache_key

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "CacheStats",
    "InMemoryBackend",
    "make_cache_key",
]

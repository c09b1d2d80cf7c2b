"""Whole-body compression backed by the result cache."""
import logging
from typing import Callable

from ..cache import CacheBackend, make_cache_key
from ..config import CompressionConfig
from . import codecs

logger = logging.getLogger("compressapi.compression")

Compressor = Callable[..., bytes]


class BufferedCompressor:
    """
    Compresses materialized bodies, reusing earlier results for identical payloads.

    Args:
        config: Middleware configuration supplying tuning options and the cache TTL.
        cache: Store for compressed bodies, keyed by encoding and body hash.
        compressor: `compress(encoding, data, options) -> bytes`, defaults to the
            built-in codecs.
    """

    def __init__(self, config: CompressionConfig, cache: CacheBackend, compressor: Compressor = codecs.compress):
        self.config = config
        self.cache = cache
        self.compressor = compressor

    async def compress(self, encoding: str, body: bytes) -> bytes:
        cache_key = make_cache_key(encoding, body)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {encoding} body of {len(body)} bytes")
            return cached

        # compression errors propagate; a failed request is not retried
        compressed = self.compressor(encoding, body, self.config.options_for(encoding))
        await self.cache.set(cache_key, compressed, self.config.cache_ttl)
        logger.debug(f"Compressed {len(body)} -> {len(compressed)} bytes with {encoding}")
        return compressed

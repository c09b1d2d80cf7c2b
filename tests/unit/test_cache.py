"""
Unit tests for the in-memory compression result cache.
"""
import logging
import threading

import pytest

from compressapi.cache import InMemoryBackend, make_cache_key
from compressapi.cache.core import CacheEntry


class TestInMemoryBackend:
    """Test cases for TTL handling and bookkeeping."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache):
        await cache.set("key", b"value", ttl=60)
        assert await cache.get("key") == b"value"
        assert await cache.exists("key")

    @pytest.mark.asyncio
    async def test_missing_key(self, cache):
        assert await cache.get("missing") is None
        assert not await cache.exists("missing")
        assert cache.stats.misses == 1

    @pytest.mark.asyncio
    async def test_entry_visible_until_ttl_elapses(self, cache, clock):
        await cache.set("key", b"value", ttl=10)
        clock.advance(9.999)
        assert await cache.get("key") == b"value"
        clock.advance(0.001)
        assert await cache.get("key") is None

    @pytest.mark.asyncio
    async def test_expired_entry_is_evicted_on_access(self, cache, clock):
        await cache.set("key", b"value", ttl=10)
        clock.advance(11)
        assert len(cache) == 1
        assert not await cache.exists("key")
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_set_overwrites_and_restarts_ttl(self, cache, clock):
        await cache.set("key", b"old", ttl=10)
        clock.advance(8)
        await cache.set("key", b"new", ttl=10)
        clock.advance(8)
        assert await cache.get("key") == b"new"
        assert await cache.ttl("key") == pytest.approx(2)

    @pytest.mark.asyncio
    async def test_rejects_non_positive_ttl(self, cache):
        with pytest.raises(ValueError):
            await cache.set("key", b"value", ttl=0)

    @pytest.mark.asyncio
    async def test_delete_and_clear(self, cache):
        await cache.set("a", b"1", ttl=60)
        await cache.set("b", b"2", ttl=60)
        assert await cache.delete("a")
        assert not await cache.delete("a")
        await cache.clear()
        assert await cache.keys() == []

    @pytest.mark.asyncio
    async def test_purge_expired(self, cache, clock):
        await cache.set("short", b"1", ttl=5)
        await cache.set("long", b"2", ttl=50)
        clock.advance(10)
        assert await cache.purge_expired() == 1
        assert await cache.keys() == ["long"]

    @pytest.mark.asyncio
    async def test_max_size_evicts_least_recently_used(self, clock):
        cache = InMemoryBackend(max_size=2, clock=clock)
        await cache.set("a", b"1", ttl=60)
        await cache.set("b", b"2", ttl=60)
        await cache.get("a")
        await cache.set("c", b"3", ttl=60)

        assert sorted(await cache.keys()) == ["a", "c"]
        assert cache.stats.evictions == 1

    @pytest.mark.asyncio
    async def test_max_size_prefers_dropping_expired_entries(self, clock):
        cache = InMemoryBackend(max_size=2, clock=clock)
        await cache.set("a", b"1", ttl=60)
        await cache.set("b", b"2", ttl=5)
        clock.advance(10)
        await cache.set("c", b"3", ttl=60)

        assert sorted(await cache.keys()) == ["a", "c"]
        assert cache.stats.evictions == 0

    @pytest.mark.asyncio
    async def test_eviction_under_churn_logs_quietly(self, clock, caplog):
        cache = InMemoryBackend(max_size=2, clock=clock)
        with caplog.at_level(logging.DEBUG, logger="compressapi.cache"):
            for i in range(50):
                await cache.set(f"key-{i}", b"x", ttl=60)

        assert cache.stats.evictions == 48
        assert len(cache) == 2
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert len([r for r in caplog.records if "Evicted" in r.getMessage()]) == 48

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            InMemoryBackend(max_size=0)

    @pytest.mark.asyncio
    async def test_stats_hit_rate(self, cache):
        await cache.set("key", b"value", ttl=60)
        await cache.get("key")
        await cache.get("missing")
        stats = await cache.get_stats()
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.hit_rate == 50.0

    def test_concurrent_writers(self, cache):
        import asyncio

        def writer(n):
            asyncio.run(cache.set(f"key-{n}", b"x" * n, ttl=60))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 50
        assert cache.stats.sets == 50


def test_cache_entry_expiry_boundary():
    entry = CacheEntry(key="k", value=b"v", created_at=100.0, ttl=10)
    assert entry.expires_at == 110.0
    assert not entry.is_expired(109.9)
    assert entry.is_expired(110.0)


class TestCacheKey:
    """Cache keys depend on encoding and exact body bytes only."""

    def test_deterministic(self):
        assert make_cache_key("gzip", b"body") == make_cache_key("gzip", b"body")

    def test_encoding_changes_key(self):
        assert make_cache_key("gzip", b"body") != make_cache_key("br", b"body")

    def test_body_changes_key(self):
        assert make_cache_key("gzip", b"body") != make_cache_key("gzip", b"body!")

    def test_binary_bodies_do_not_collide(self):
        # both are invalid UTF-8 and would decode to the same replacement text
        assert make_cache_key("gzip", b"\xff") != make_cache_key("gzip", b"\xfe")

    def test_stable_value(self):
        import hashlib

        assert make_cache_key("br", b"abc") == hashlib.sha256(b"br:abc").hexdigest()

"""
Cache utilities and helpers.
"""

import hashlib


def make_cache_key(encoding: str, body: bytes) -> str:
    """
    Derive the cache key for a compressed body.

    The key depends only on the encoding token and the exact body bytes, so identical
    payloads share an entry regardless of route, headers or time of the request.
    """
    digest = hashlib.sha256()
    digest.update(f"{encoding}:".encode("ascii"))
    digest.update(body)
    return digest.hexdigest()

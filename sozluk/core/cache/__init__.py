"""
Cache module for the Sözlük aggregation client.

Cache Strategy:
- In-memory cache owned by each ``DictionaryService`` instance
- Cache-aside: check, compute on miss, store
- Lazy TTL expiry plus periodic sweep
- Prefix invalidation for all variants of one term

Usage:
    >>> from sozluk.core.cache import MemoryCache
    >>>
    >>> cache = MemoryCache(default_ttl=3600)
    >>> cache.set("daily:word", word, ttl=86400)
    >>> cache.get("daily:word")
"""

from sozluk.core.cache.memory import Clock, MemoryCache

__all__ = [
    "Clock",
    "MemoryCache",
]

"""
In-memory TTL cache for the Sözlük aggregation client.

This module provides the keyed store shared by every cache-aware operation:
- Per-entry TTL
- Lazy expiry on access plus a periodic sweep
- Invalidation by exact key or key prefix
- Hit/miss statistics
- A disabled mode that always computes fresh

Entries are replaced wholesale on ``set`` and never mutated in place, so
readers never see a partial entry.

Usage:
    >>> from sozluk.core.cache import MemoryCache
    >>>
    >>> cache = MemoryCache(default_ttl=3600)
    >>> cache.set("lookup:kalem:{}", record, ttl=1800)
    >>> cache.get("lookup:kalem:{}")
"""
import time
from typing import Any, Callable, Optional

from sozluk.core.constants import CACHE_CHECK_PERIOD, CACHE_LONG_TTL
from sozluk.core.logging import get_logger
from sozluk.core.models import CacheEntry, CacheStats

logger = get_logger(__name__)

Clock = Callable[[], float]


class MemoryCache:
    """
    Keyed in-memory cache with independent TTL per entry.

    ``get`` returns ``None`` for a key that was never set, has expired, or
    was invalidated; the three are indistinguishable.

    Args:
        default_ttl: TTL in seconds when ``set`` is called without one
        check_period: Minimum seconds between expired-entry sweeps
        enabled: When False every ``get`` misses and ``set`` is a no-op
        clock: Monotonic time source in seconds (injectable for tests)
    """

    def __init__(
        self,
        default_ttl: float = CACHE_LONG_TTL,
        check_period: float = CACHE_CHECK_PERIOD,
        enabled: bool = True,
        clock: Optional[Clock] = None,
    ) -> None:
        self._default_ttl = default_ttl
        self._check_period = check_period
        self._enabled = enabled
        self._clock = clock or time.monotonic

        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._last_sweep = self._clock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    # =========================================================================
    # BASIC OPERATIONS
    # =========================================================================

    def get(self, key: str) -> Any:
        """
        Get value from cache.

        Returns:
            Any: Stored value, or None when absent or expired
        """
        if not self._enabled:
            self._misses += 1
            return None

        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> bool:
        """
        Store a value, replacing any previous entry for the key.

        Returns:
            bool: True if stored (False when the cache is disabled)
        """
        if not self._enabled:
            return False

        ttl = self._default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError(f"TTL must be positive, got {ttl}")

        now = self._clock()
        self._maybe_sweep(now)
        self._entries[key] = CacheEntry(key=key, value=value, created_at=now, ttl=ttl)
        return True

    def invalidate(self, key_or_prefix: Optional[str] = None) -> int:
        """
        Remove entries by exact key or by prefix.

        An argument equal to a stored key removes only that entry; otherwise
        every key starting with it is removed. ``None`` clears the cache.

        Returns:
            int: Number of live entries removed

        Example:
            >>> cache.invalidate("lookup:kalem:")  # every option variant
            3
        """
        now = self._clock()
        if key_or_prefix is None:
            keys = list(self._entries)
        elif key_or_prefix in self._entries:
            keys = [key_or_prefix]
        else:
            keys = [key for key in self._entries if key.startswith(key_or_prefix)]

        # Expired entries are dropped too but were already gone for readers
        removed = 0
        for key in keys:
            if not self._entries.pop(key).is_expired(now):
                removed += 1

        logger.info("Cache invalidated", pattern=key_or_prefix, removed=removed)
        return removed

    def clear(self) -> None:
        """Remove every entry and reset statistics."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    # =========================================================================
    # EXPIRY
    # =========================================================================

    def sweep(self) -> int:
        """
        Remove every expired entry.

        Returns:
            int: Number of entries removed
        """
        now = self._clock()
        self._last_sweep = now

        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.debug("Cache sweep", removed=len(expired))
        return len(expired)

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep >= self._check_period:
            self.sweep()

    # =========================================================================
    # STATISTICS
    # =========================================================================

    def stats(self) -> CacheStats:
        now = self._clock()
        live = sum(1 for entry in self._entries.values() if not entry.is_expired(now))
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            live_entries=live,
            enabled=self._enabled,
        )

    def keys(self) -> list[str]:
        now = self._clock()
        return [key for key, entry in self._entries.items() if not entry.is_expired(now)]

    def __len__(self) -> int:
        return len(self.keys())

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._clock())


__all__ = ["MemoryCache", "Clock"]

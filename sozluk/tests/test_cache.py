"""
In-memory cache: TTL expiry, invalidation, disabled mode, statistics.
"""

import pytest

from sozluk.core.cache import MemoryCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCache(default_ttl=60, check_period=600, clock=clock)


class TestExpiry:
    def test_get_within_ttl(self, cache):
        cache.set("k", "v", ttl=0.1)
        assert cache.get("k") == "v"

    def test_get_after_ttl_is_absent(self, cache, clock):
        cache.set("k", "v", ttl=0.1)
        clock.advance(0.2)
        assert cache.get("k") is None
        assert "k" not in cache

    def test_default_ttl_applies(self, cache, clock):
        cache.set("k", "v")
        clock.advance(59)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None

    def test_set_replaces_entry(self, cache):
        cache.set("k", "old")
        cache.set("k", "new")
        assert cache.get("k") == "new"

    def test_non_positive_ttl_rejected(self, cache):
        with pytest.raises(ValueError):
            cache.set("k", "v", ttl=0)

    def test_sweep_removes_expired_entries(self, cache, clock):
        cache.set("short", 1, ttl=1)
        cache.set("long", 2, ttl=10_000)
        clock.advance(700)

        # The next set is past the check period and triggers a sweep
        cache.set("new", 3)

        assert cache.keys() == ["long", "new"]
        assert "short" not in cache._entries


class TestInvalidation:
    def test_exact_key(self, cache):
        cache.set("lookup:kalem:a", 1)
        cache.set("lookup:kalem:ab", 2)

        assert cache.invalidate("lookup:kalem:a") == 1
        assert cache.get("lookup:kalem:ab") == 2

    def test_prefix(self, cache):
        cache.set("lookup:kalem:{}", 1)
        cache.set('lookup:kalem:{"sources":["general"]}', 2)
        cache.set("lookup:kalemlik:{}", 3)
        cache.set("proverbs:kalem", 4)

        assert cache.invalidate("lookup:kalem:") == 2
        assert sorted(cache.keys()) == ["lookup:kalemlik:{}", "proverbs:kalem"]

    def test_none_clears_everything(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.invalidate() == 2
        assert len(cache) == 0

    def test_unknown_prefix_removes_nothing(self, cache):
        cache.set("a", 1)
        assert cache.invalidate("zzz") == 0

    def test_expired_exact_key_not_counted(self, cache, clock):
        cache.set("k2", 1, ttl=1)
        clock.advance(10)

        assert cache.invalidate("k2") == 0
        assert cache.get("k2") is None

    def test_expired_entries_not_counted_by_prefix_or_clear(self, cache, clock):
        cache.set("lookup:a", 1, ttl=1)
        cache.set("lookup:b", 2, ttl=100)
        cache.set("other", 3, ttl=1)
        clock.advance(10)

        assert cache.invalidate("lookup:") == 1
        assert cache.invalidate() == 0
        assert len(cache) == 0


class TestDisabledCache:
    def test_get_always_misses(self, clock):
        cache = MemoryCache(enabled=False, clock=clock)
        assert cache.set("k", "v") is False
        assert cache.get("k") is None

        stats = cache.stats()
        assert stats.enabled is False
        assert stats.live_entries == 0
        assert stats.misses == 1


class TestStatistics:
    def test_hits_misses_and_live_entries(self, cache, clock):
        cache.set("a", 1, ttl=10)
        cache.set("b", 2, ttl=100)

        cache.get("a")
        cache.get("a")
        cache.get("missing")
        clock.advance(50)

        stats = cache.stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.live_entries == 1
        assert stats.hit_rate == pytest.approx(2 / 3, abs=1e-4)

    def test_expired_get_counts_as_miss(self, cache, clock):
        cache.set("a", 1, ttl=1)
        clock.advance(2)
        cache.get("a")
        assert cache.stats().misses == 1

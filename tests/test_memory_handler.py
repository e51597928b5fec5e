"""Behavioral tests for the in-process cache handler."""

import pytest

from cachefolio import MemoryHandler, create_handler


@pytest.fixture
def cache():
    return MemoryHandler()


class TestMemoryHandler:
    """Test that the memory backend honors the shared contract."""

    def test_round_trip(self, cache, clock):
        assert cache.set("k", {"a": [1, 2]}) is True
        assert cache.get("k") == {"a": [1, 2]}

    def test_expiry(self, cache, clock):
        cache.set("k", "v", 5)
        clock.advance(6)
        assert cache.get("k", "default") == "default"

    def test_zero_ttl(self, cache, clock):
        assert cache.set("k", "v", 0) is True
        assert cache.has("k") is False

    def test_negative_ttl(self, cache, clock):
        cache.set("k", "old")
        assert cache.set("k", "new", -1) is False
        assert cache.get("k") == "old"

    def test_default_ttl_option(self, clock):
        """Test that default_ttl applies when set() gets no ttl."""
        cache = create_handler("memory", {"default_ttl": 10})
        cache.set("k", "v")
        clock.advance(11)
        assert cache.has("k") is False

    def test_explicit_ttl_beats_default(self, clock):
        cache = MemoryHandler({"default_ttl": 10})
        cache.set("k", "v", 100)
        clock.advance(11)
        assert cache.has("k") is True

    def test_counters(self, cache, clock):
        cache.set("n", 1)
        assert cache.increment("n", 4) == 5
        assert cache.decrement("n", 2) == 3
        assert cache.increment("missing") == 0

    def test_clear_scoped(self, clock):
        cache = MemoryHandler({"prefix": "a_"})
        cache.set("k", 1)
        cache.set_options({"prefix": "b_"})
        cache.set("k", 2)
        cache.clear()
        assert cache.has("k") is False
        cache.set_options({"prefix": "a_"})
        assert cache.get("k") == 1

    def test_close_releases_entries(self, clock):
        with MemoryHandler() as cache:
            cache.set("k", "v")
        assert cache.has("k") is False

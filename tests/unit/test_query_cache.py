"""
Unit tests for QueryCache and its key helpers.

Run: pytest tests/unit/test_query_cache.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from services.query_cache import QueryCache, detail_key, list_key


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------

class TestKeys:

    def test_list_key_ignores_param_order(self):
        assert list_key("roles", page=0, size=10, search="x") == list_key("roles", search="x", size=10, page=0)

    def test_list_key_drops_empty_filters(self):
        assert list_key("questions", page=0, pillar=None, search="") == list_key("questions", page=0)

    def test_different_filters_do_not_collide(self):
        assert list_key("questions", pillar="AI") != list_key("questions", pillar="TECH")

    def test_detail_key_normalizes_id(self):
        assert detail_key("roles", 7) == detail_key("roles", "7")

    def test_detail_key_nested(self):
        assert detail_key("roles", 7, "versions")[:3] == detail_key("roles", 7)


# ---------------------------------------------------------------------------
# QueryCache
# ---------------------------------------------------------------------------

class TestQueryCache:

    def test_fetch_loads_once(self):
        cache = QueryCache()
        calls = []

        def loader():
            calls.append(1)
            return "value"

        assert cache.fetch(("a",), loader) == "value"
        assert cache.fetch(("a",), loader) == "value"
        assert len(calls) == 1

    def test_loader_error_is_not_cached(self):
        cache = QueryCache()

        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.fetch(("a",), failing)
        assert ("a",) not in cache
        assert cache.fetch(("a",), lambda: 1) == 1

    def test_invalidate_prefix_removes_all_pages(self):
        cache = QueryCache()
        cache.set(list_key("roles", page=0), "p0")
        cache.set(list_key("roles", page=1, search="x"), "p1")
        cache.set(detail_key("roles", 1), "role")
        cache.set(list_key("questions", page=0), "q")

        removed = cache.invalidate(("roles", "list"))

        assert removed == 2
        assert detail_key("roles", 1) in cache
        assert list_key("questions", page=0) in cache

    def test_invalidate_detail_drops_nested(self):
        cache = QueryCache()
        cache.set(detail_key("roles", 1), "role")
        cache.set(detail_key("roles", 1, "versions"), [])
        cache.set(detail_key("roles", 10), "other")

        cache.invalidate(detail_key("roles", 1))

        assert detail_key("roles", 1) not in cache
        assert detail_key("roles", 1, "versions") not in cache
        assert detail_key("roles", 10) in cache

    def test_ttl_expiry_refetches(self):
        clock = FakeClock()
        cache = QueryCache(ttl_seconds=30, clock=clock)
        cache.fetch(("a",), lambda: "old")

        clock.now = 29
        assert cache.fetch(("a",), lambda: "new") == "old"
        clock.now = 30
        assert cache.fetch(("a",), lambda: "new") == "new"

    def test_remove_and_clear(self):
        cache = QueryCache()
        cache.set(("a",), 1)
        cache.set(("b",), 2)

        assert cache.remove(("a",)) is True
        assert cache.remove(("a",)) is False
        cache.clear()
        assert len(cache) == 0

    def test_distinct_searches_stay_bounded(self):
        cache = QueryCache(ttl_seconds=30, max_entries=100, clock=FakeClock())

        for i in range(10_000):
            cache.fetch(list_key("roles", search=str(i)), lambda: i)

        assert len(cache) == 100
        assert list_key("roles", search="9999") in cache
        assert list_key("roles", search="0") not in cache

    def test_without_ttl_entries_stay_until_evicted(self):
        clock = FakeClock()
        cache = QueryCache(max_entries=2, clock=clock)
        cache.set(("a",), 1)
        cache.set(("b",), 2)
        clock.now = 10_000

        assert cache.get(("a",)) == 1
        cache.set(("c",), 3)
        assert ("b",) not in cache
        assert ("a",) in cache

    def test_expired_entries_are_skipped_by_invalidate(self):
        clock = FakeClock()
        cache = QueryCache(ttl_seconds=30, clock=clock)
        cache.set(list_key("roles", page=0), "p0")
        clock.now = 31
        cache.set(list_key("roles", page=1), "p1")

        assert cache.invalidate(("roles", "list")) == 1
        assert len(cache) == 0

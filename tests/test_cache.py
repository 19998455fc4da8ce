"""Unit tests for the 2Q result cache."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from geodist.infrastructure.cache import TwoQueueCache


class TestBasics:
    def test_miss_returns_none(self):
        cache = TwoQueueCache(4)
        assert cache.get("missing") is None

    def test_insert_then_get(self):
        cache = TwoQueueCache(4)
        cache.insert("a", 1.5)
        assert cache.get("a") == 1.5
        assert "a" in cache

    def test_zero_value_is_a_hit(self):
        cache = TwoQueueCache(4)
        cache.insert("same", 0.0)
        assert cache.get("same") == 0.0
        assert cache.stats()["hits"] == 1

    def test_insert_overwrites(self):
        cache = TwoQueueCache(4)
        cache.insert("a", 1.0)
        cache.insert("a", 2.0)
        assert cache.get("a") == 2.0
        assert len(cache) == 1

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_rejects_non_positive_capacity(self, capacity):
        with pytest.raises(ValueError):
            TwoQueueCache(capacity)

    def test_clear(self):
        cache = TwoQueueCache(4)
        cache.insert("a", 1.0)
        cache.clear()
        assert len(cache) == 0
        assert cache.stats()["misses"] == 0


class TestEviction:
    def test_capacity_never_exceeded(self):
        cache = TwoQueueCache(8)
        for i in range(100):
            cache.insert(i, float(i))
            if i % 3 == 0:
                cache.get(i)
            assert len(cache) <= 8

    def test_second_reference_promotes(self):
        cache = TwoQueueCache(8)
        cache.insert("a", 1.0)
        assert cache.stats()["recent"] == 1
        cache.get("a")
        stats = cache.stats()
        assert stats["recent"] == 0
        assert stats["frequent"] == 1

    def test_scan_does_not_evict_frequent_entries(self):
        cache = TwoQueueCache(8)
        hot = [f"hot-{i}" for i in range(4)]
        for key in hot:
            cache.insert(key, 1.0)
            cache.get(key)

        for i in range(1000):
            cache.insert(f"scan-{i}", 2.0)

        for key in hot:
            assert key in cache

    def test_unreferenced_entries_evicted_first_in_first_out(self):
        cache = TwoQueueCache(4)
        for key in "abcde":
            cache.insert(key, 1.0)
        assert "a" not in cache
        assert "e" in cache

    def test_ghost_hit_admits_as_frequent(self):
        cache = TwoQueueCache(4)
        for key in "abcde":
            cache.insert(key, 1.0)
        assert "a" not in cache
        assert cache.stats()["ghost"] >= 1

        cache.insert("a", 1.0)
        assert "a" in cache
        assert cache.stats()["frequent"] == 1

    def test_frequent_evicted_least_recently_used(self):
        cache = TwoQueueCache(4)
        for key in "abcd":
            cache.insert(key, 1.0)
            cache.get(key)
        cache.get("a")  # b is now the least recently used
        cache.insert("e", 1.0)
        assert "b" not in cache
        assert "a" in cache
        assert "e" in cache


class TestConcurrency:
    def test_get_or_compute_runs_once_per_key(self):
        cache = TwoQueueCache(16)
        calls = 0
        calls_lock = threading.Lock()

        def slow_compute():
            nonlocal calls
            with calls_lock:
                calls += 1
            time.sleep(0.01)
            return 42.0

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(
                pool.map(lambda _: cache.get_or_compute("k", slow_compute), range(32))
            )

        assert results == [42.0] * 32
        assert calls == 1

    def test_failed_compute_is_not_cached(self):
        cache = TwoQueueCache(4)

        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_compute("k", boom)
        assert "k" not in cache
        assert cache.get_or_compute("k", lambda: 1.0) == 1.0

    def test_parallel_inserts_keep_invariants(self):
        cache = TwoQueueCache(32)

        def worker(offset: int):
            for i in range(200):
                key = (offset, i % 50)
                if cache.get(key) is None:
                    cache.insert(key, float(i))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stats = cache.stats()
        assert stats["size"] == stats["recent"] + stats["frequent"]
        assert stats["size"] <= 32
        assert stats["ghost"] <= cache.ghost_capacity

"""
tests/formatting/test_cache.py

Covers:
  - One formatter per pattern, reused across calls
  - Concurrent first use of a pattern (single construction)
  - Memory-pressure clearing and one-time subscription
  - The process-wide default cache
"""

import threading
import time

import pytest

from datekit.formatting import (
    DateFormatter,
    FormatCache,
    MemoryPressureSignal,
    cached_formatter,
    default_cache,
    memory_pressure,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def signal():
    return MemoryPressureSignal("test-pressure")


@pytest.fixture
def built():
    """Patterns in the order the counting factory built them."""
    return []


@pytest.fixture
def cache(signal, built):
    def factory(pattern):
        built.append(pattern)
        time.sleep(0.005)
        return DateFormatter(pattern)
    return FormatCache(signal=signal, factory=factory)


def run_threads(fn, n):
    barrier = threading.Barrier(n)
    results = [None] * n

    def worker(i):
        barrier.wait()
        results[i] = fn()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


# ── Lookup ────────────────────────────────────────────────────────────────────

class TestLookup:

    def test_built_on_first_miss(self, cache, built):
        assert "yyyy" not in cache
        cache.get("yyyy")
        assert "yyyy" in cache
        assert built == ["yyyy"]

    def test_same_instance_for_same_pattern(self, cache, built):
        assert cache.get("MM") is cache.get("MM")
        assert built == ["MM"]

    def test_different_patterns_different_formatters(self, cache):
        assert cache.get("MM") is not cache.get("dd")
        assert len(cache) == 2

    def test_formatter_carries_pattern(self, cache):
        assert cache.get("yyyy-MM-dd").pattern == "yyyy-MM-dd"

    def test_concurrent_first_use_builds_once(self, cache, built):
        results = run_threads(lambda: cache.get("yyyy-MM-dd HH:mm:ss"), 64)
        assert built == ["yyyy-MM-dd HH:mm:ss"]
        assert all(r is results[0] for r in results)

    def test_concurrent_mixed_patterns(self, cache, built):
        patterns = ["yyyy", "MM", "dd", "HH"]
        run_threads(lambda: [cache.get(p) for p in patterns], 32)
        assert sorted(built) == sorted(patterns)

    def test_repr_lists_patterns(self, cache):
        cache.get("dd")
        assert "'dd'" in repr(cache)


# ── Clearing ──────────────────────────────────────────────────────────────────

class TestClearing:

    def test_clear_drops_everything(self, cache, built):
        cache.get("yyyy")
        cache.get("MM")
        cache.clear()
        assert len(cache) == 0
        cache.get("yyyy")
        assert built == ["yyyy", "MM", "yyyy"]

    def test_memory_pressure_clears(self, cache, signal):
        cache.get("yyyy")
        assert signal.fire() == 1
        assert len(cache) == 0

    def test_not_subscribed_before_first_use(self, cache, signal):
        assert not cache.subscribed
        assert signal.listener_count == 0

    def test_subscribes_exactly_once(self, cache, signal):
        run_threads(lambda: cache.get("dd"), 50)
        cache.get("MM")
        assert cache.subscribed
        assert signal.listener_count == 1

    def test_clear_concurrent_with_get(self, cache):
        stop = threading.Event()

        def churn():
            while not stop.is_set():
                cache.clear()

        clearer = threading.Thread(target=churn)
        clearer.start()
        try:
            for _ in range(200):
                assert cache.get("yyyy").pattern == "yyyy"
        finally:
            stop.set()
            clearer.join()


# ── Memory-pressure signal ────────────────────────────────────────────────────

class TestSignal:

    def test_fire_without_listeners(self, signal):
        assert signal.fire() == 0

    def test_fire_calls_each_listener(self, signal):
        calls = []
        signal.subscribe(lambda: calls.append("a"))
        signal.subscribe(lambda: calls.append("b"))
        assert signal.fire() == 2
        assert calls == ["a", "b"]

    def test_fires_repeatedly(self, signal):
        calls = []
        signal.subscribe(lambda: calls.append(1))
        signal.fire()
        signal.fire()
        assert len(calls) == 2

    def test_unsubscribe(self, signal):
        calls = []
        listener = signal.subscribe(lambda: calls.append(1))
        signal.unsubscribe(listener)
        signal.unsubscribe(listener)
        signal.fire()
        assert calls == []


# ── Default cache ─────────────────────────────────────────────────────────────

class TestDefaultCache:

    def test_cached_formatter_uses_default_cache(self):
        assert cached_formatter("yyyy") is default_cache.get("yyyy")

    def test_process_signal_clears_default_cache(self):
        cached_formatter("yyyy")
        memory_pressure.fire()
        assert "yyyy" not in default_cache

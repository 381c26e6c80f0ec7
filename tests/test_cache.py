"""Tests for the bounded LRU cache."""

import threading

import pytest

from jpeg_resizer.services.image.cache import BoundedCache


def test_get_missing_returns_none():
    cache = BoundedCache(2)

    assert cache.get("missing") is None
    assert not cache.contains("missing")


def test_put_and_get():
    cache = BoundedCache(2)
    cache.put("a", b"A")

    assert cache.contains("a")
    assert cache.get("a") == b"A"


def test_capacity_is_never_exceeded():
    cache = BoundedCache(5)
    for i in range(50):
        cache.put(f"key-{i}", b"x")
        assert len(cache) <= 5

    assert cache.get_stats()["evictions"] == 45


def test_refreshed_entries_survive_overflow():
    cache = BoundedCache(4)
    for key in ("a", "b", "c", "d"):
        cache.put(key, key.encode())

    # Refresh a subset, then overflow by two
    cache.get("a")
    cache.put("b", b"B2")
    cache.put("e", b"e")
    cache.put("f", b"f")

    assert cache.contains("a")
    assert cache.get("b") == b"B2"
    assert not cache.contains("c")
    assert not cache.contains("d")


def test_contains_does_not_refresh():
    cache = BoundedCache(2)
    cache.put("a", b"a")
    cache.put("b", b"b")

    assert cache.contains("a")
    cache.put("c", b"c")

    assert not cache.contains("a")
    assert cache.contains("b")


def test_overwrite_keeps_size():
    cache = BoundedCache(2)
    cache.put("a", b"1")
    cache.put("a", b"2")

    assert len(cache) == 1
    assert cache.get("a") == b"2"


def test_invalid_capacity():
    with pytest.raises(ValueError):
        BoundedCache(0)


def test_clear_and_stats():
    cache = BoundedCache(3)
    cache.put("a", b"12345")
    cache.get("a")
    cache.get("b")

    stats = cache.get_stats()
    assert stats["entries"] == 1
    assert stats["total_bytes"] == 5
    assert stats["hits"] == 1
    assert stats["misses"] == 1

    assert cache.clear() == 1
    assert len(cache) == 0


def test_concurrent_puts_stay_bounded():
    cache = BoundedCache(32)

    def writer(offset: int) -> None:
        for i in range(500):
            cache.put(f"{offset}-{i % 64}", b"x")
            cache.get(f"{offset}-{(i * 7) % 64}")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 32

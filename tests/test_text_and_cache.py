from __future__ import annotations

from ign_check.core.cache import TTLCache
from ign_check.core.text import cache_key, clean_username, sanitize_input


def test_clean_username_replaces_every_plus() -> None:
    assert clean_username("John+Doe") == "John Doe"
    assert clean_username("a+b+c") == "a b c"
    assert clean_username("NoPlusHere") == "NoPlusHere"


def test_sanitize_input_trims_and_strips_markup_chars() -> None:
    assert sanitize_input("  <b>12345</b> ") == "b12345/b"
    assert sanitize_input("Name#TAG") == "Name#TAG"


def test_cache_key_keeps_id_and_zone_apart() -> None:
    assert cache_key("mlbb", "469123581", "2418") == cache_key("mlbb", "469123581", "2418")
    assert cache_key("mlbb", "1:zone:2", None) != cache_key("mlbb", "1", "2")
    assert cache_key("mlbb", "1", "2") != cache_key("mlbb", "12", None)
    assert cache_key("genshin", "800000001", None) != cache_key("genshin", "800000001", "")


def test_ttl_cache_expires_entries() -> None:
    now = 100.0
    cache: TTLCache[str] = TTLCache(default_ttl_s=10.0, _monotonic=lambda: now)

    cache.set("k", "v")
    assert cache.get("k") == "v"
    assert len(cache) == 1

    now = 111.0
    assert cache.get("k") is None
    assert len(cache) == 0


def test_ttl_cache_per_entry_ttl_and_clear() -> None:
    now = 0.0
    cache: TTLCache[int] = TTLCache(default_ttl_s=10.0, _monotonic=lambda: now)
    cache.set("short", 1, ttl_s=1.0)
    cache.set("long", 2)

    now = 5.0
    assert cache.get("short") is None
    assert cache.get("long") == 2

    cache.clear()
    assert cache.get("long") is None


def test_ttl_cache_set_purges_expired_entries() -> None:
    now = 0.0
    cache: TTLCache[int] = TTLCache(default_ttl_s=10.0, max_entries=20_000, _monotonic=lambda: now)
    for i in range(10_000):
        cache.set(f"id-{i}", i)
    assert len(cache) == 10_000

    now = 11.0
    cache.set("fresh", 1)
    assert len(cache) == 1
    assert cache.get("fresh") == 1


def test_ttl_cache_evicts_oldest_write_over_capacity() -> None:
    cache: TTLCache[int] = TTLCache(default_ttl_s=60.0, max_entries=2, _monotonic=lambda: 0.0)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    cache.set("c", 3)

    assert len(cache) == 2
    assert cache.get("b") is None
    assert cache.get("a") == 10
    assert cache.get("c") == 3

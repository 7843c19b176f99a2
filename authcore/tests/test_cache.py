from __future__ import annotations

from authcore.infrastructure.cache import InMemoryTTLCache
from authcore.infrastructure.reset_tokens import FORGET_PASSWORD_PREFIX, CacheResetTokenStore


def test_entries_expire_after_ttl(clock) -> None:
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(clock=clock)
    cache.set("k", 1, ttl_seconds=10)

    clock.advance(9.9)
    assert cache.get("k") == 1
    clock.advance(0.1)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_set_overwrites_value_and_ttl(clock) -> None:
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(clock=clock)
    cache.set("k", 1, ttl_seconds=5)
    clock.advance(4)
    cache.set("k", 2, ttl_seconds=5)
    clock.advance(4)

    assert cache.get("k") == 2


def test_pop_returns_value_once(clock) -> None:
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(clock=clock)
    cache.set("k", 7, ttl_seconds=5)

    assert cache.pop("k") == 7
    assert cache.pop("k") is None
    assert cache.get("k") is None


def test_pop_ignores_expired_entries(clock) -> None:
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(clock=clock)
    cache.set("k", 7, ttl_seconds=5)
    clock.advance(5)

    assert cache.pop("k") is None


def test_invalidate_and_clear(clock) -> None:
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(clock=clock)
    cache.set("a", 1, ttl_seconds=5)
    cache.set("b", 2, ttl_seconds=5)

    cache.invalidate("a")
    assert cache.get("a") is None
    assert len(cache) == 1

    cache.clear()
    assert cache.get("b") is None


def test_reset_tokens_are_namespaced(clock) -> None:
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(clock=clock)
    store = CacheResetTokenStore(cache)

    store.put("abc", 3, ttl_seconds=60)

    assert cache.get(FORGET_PASSWORD_PREFIX + "abc") == 3
    assert cache.get("abc") is None
    assert store.get("abc") == 3
    assert store.take("abc") == 3
    assert store.get("abc") is None


def test_reset_token_put_overwrites(reset_tokens) -> None:
    reset_tokens.put("abc", 1, ttl_seconds=60)
    reset_tokens.put("abc", 2, ttl_seconds=60)

    assert reset_tokens.get("abc") == 2

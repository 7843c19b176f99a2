# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from threading import Lock
from typing import Generic, TypeVar

from authcore.shared.logging import logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):  # noqa: UP046
    value: V
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemoryTTLCache(Generic[K, V]):  # noqa: UP046
    """Key/value store whose entries vanish once their TTL has elapsed.

    Expired entries are dropped lazily on access; nothing scans the store.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = Lock()
        self._store: dict[K, CacheEntry[V]] = {}

    def set(self, key: K, value: V, ttl_seconds: float) -> None:
        expires_at = self._clock() + ttl_seconds
        with self._lock:
            self._store[key] = CacheEntry(value=value, expires_at=expires_at)
        logger.debug(f"cache: set key ttl={ttl_seconds}s")

    def get(self, key: K) -> V | None:
        with self._lock:
            entry = self._live_entry(key)
        return entry.value if entry else None

    def pop(self, key: K) -> V | None:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            del self._store[key]
        logger.debug("cache: pop key")
        return entry.value

    def invalidate(self, key: K) -> None:
        with self._lock:
            removed = self._store.pop(key, None)
        if removed is not None:
            logger.debug("cache: invalidated key")

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._store)
            self._store.clear()
        logger.debug(f"cache: cleared entries={dropped}")

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._store.values() if not entry.is_expired(now))

    def _live_entry(self, key: K) -> CacheEntry[V] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._store.pop(key, None)
            return None
        return entry


__all__ = ["InMemoryTTLCache"]

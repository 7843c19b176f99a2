# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.users.repositories import ResetTokenStore
from authcore.infrastructure.cache import InMemoryTTLCache

FORGET_PASSWORD_PREFIX = "forget-password:"


class CacheResetTokenStore(ResetTokenStore):
    def __init__(self, cache: InMemoryTTLCache[str, int] | None = None) -> None:
        self._cache: InMemoryTTLCache[str, int] = cache if cache is not None else InMemoryTTLCache()

    def put(self, token: str, user_id: int, ttl_seconds: int) -> None:
        self._cache.set(FORGET_PASSWORD_PREFIX + token, user_id, ttl_seconds)

    def get(self, token: str) -> int | None:
        return self._cache.get(FORGET_PASSWORD_PREFIX + token)

    def take(self, token: str) -> int | None:
        return self._cache.pop(FORGET_PASSWORD_PREFIX + token)


__all__ = ["FORGET_PASSWORD_PREFIX", "CacheResetTokenStore"]

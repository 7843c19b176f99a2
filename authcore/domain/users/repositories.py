# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User


class UserRepository(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def create(self, *, username: str, email: str, password_hash: str) -> User: ...
    def persist(self, user: User) -> User: ...


class SessionStore(Protocol):
    def get_user_id(self) -> int | None: ...
    def set_user_id(self, user_id: int) -> None: ...
    def destroy(self) -> None: ...
    def clear_cookie(self) -> None: ...


class ResetTokenStore(Protocol):
    def put(self, token: str, user_id: int, ttl_seconds: int) -> None: ...
    def get(self, token: str) -> int | None: ...
    def take(self, token: str) -> int | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class Notifier(Protocol):
    def send(self, to: str, body_html: str) -> None: ...

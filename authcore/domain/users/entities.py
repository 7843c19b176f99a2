# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:
    id: int | None
    username: str
    email: str
    password_hash: str
    created_at: datetime

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(slots=True, frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(slots=True, frozen=True)
class UserResponse:
    """Either a user or a non-empty list of field errors, never both."""

    errors: tuple[FieldError, ...] = field(default_factory=tuple)
    user: User | None = None

    def __post_init__(self) -> None:
        if self.errors and self.user is not None:
            raise ValueError("UserResponse cannot carry both a user and errors")
        if not self.errors and self.user is None:
            raise ValueError("UserResponse needs a user or at least one error")

    @classmethod
    def success(cls, user: User) -> UserResponse:
        return cls(user=user)

    @classmethod
    def failure(cls, *errors: FieldError) -> UserResponse:
        return cls(errors=tuple(errors))

    @property
    def ok(self) -> bool:
        return self.user is not None

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authcore.shared.errors.base import DomainError, InfrastructureError


class DuplicateKeyError(DomainError):
    """A unique constraint rejected a write; ``field`` names the column."""

    code = "duplicate_key"
    status = HTTPStatus.CONFLICT

    def __init__(self, field: str) -> None:
        super().__init__(context={"field": field})
        self.field = field


class SessionDestroyError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__("session_destroy_failed")

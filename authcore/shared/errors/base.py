# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Exceptions that know how they should look on the wire.

Subclasses pin ``code`` and ``status`` as class attributes; callers only pass
what varies per raise (usually ``context``).
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any


class AppError(Exception):
    code: str = "app_error"
    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        code: str | None = None,
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.code = code or type(self).code
        self.status = status or type(self).status
        self.context = dict(context) if context else None
        super().__init__(self.code)

    def to_dict(self) -> dict[str, Any]:
        if not self.context:
            return {"error": self.code}
        return {"error": self.code, "context": self.context}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status={int(self.status)})"


class DomainError(AppError):
    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR


class ValidationError(AppError):
    code = "validation_error"
    status = HTTPStatus.UNPROCESSABLE_ENTITY

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Registration input rules.

Every check returns as soon as one rule fails, so callers get at most one
field error per call.
"""

from __future__ import annotations

from authcore.domain.users.entities import FieldError

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 3


def _password_error(field: str, password: str) -> FieldError | None:
    if len(password) < MIN_PASSWORD_LENGTH:
        return FieldError(field=field, message=f"length must be greater than {MIN_PASSWORD_LENGTH - 1}")
    return None


def validate_register(*, username: str, email: str, password: str) -> list[FieldError]:
    if "@" not in email:
        return [FieldError(field="email", message="invalid email")]

    if len(username) < MIN_USERNAME_LENGTH:
        return [
            FieldError(
                field="username",
                message=f"length must be greater than {MIN_USERNAME_LENGTH - 1}",
            )
        ]

    # "@" is reserved so login can tell emails from usernames.
    if "@" in username:
        return [FieldError(field="username", message="cannot include an @")]

    error = _password_error("password", password)
    return [error] if error else []


def validate_new_password(password: str) -> list[FieldError]:
    error = _password_error("newPassword", password)
    return [error] if error else []


__all__ = ["validate_new_password", "validate_register"]

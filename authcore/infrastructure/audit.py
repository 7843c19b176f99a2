# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Security-relevant account events, written to the application log."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from authcore.shared.logging import logger


class AuditAction(str, Enum):
    REGISTER = "register"
    REGISTER_FAILED = "register_failed"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_CHANGE_FAILED = "password_change_failed"


_REDACT_KEY_PARTS = ("password", "token", "secret", "hash", "sid")


def _redact(details: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: "***REDACTED***" if any(part in key.lower() for part in _REDACT_KEY_PARTS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> None:
    parts = [f"AUDIT {action.value}", f"user_id={user_id}", f"ip={ip_address}", f"success={success}"]
    if details:
        parts.append(f"details={_redact(details)}")
    logger.log("INFO" if success else "WARNING", " | ".join(parts))


__all__ = ["AuditAction", "audit_log"]

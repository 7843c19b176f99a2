# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction applied to every log record before it reaches a sink."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

# Records bound with this extra key skip redaction (development mail previews).
MAIL_PREVIEW = "mail_preview"

_ASSIGNED = r"\s*[:=]\s*['\"]?"

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # secret_key=..., token=..., sid=..., session_id=...
    (re.compile(rf"((?:secret[_-]?key|token|sid|session[_-]?id){_ASSIGNED})([\w\-.]{{20,}})", re.I), rf"\1{REDACTED}"),
    # password=..., password_hash=..., new_password=...
    (re.compile(rf"((?:new_?)?password(?:_hash)?{_ASSIGNED})([^'\"\s]{{3,}})", re.I), rf"\1{REDACTED}"),
    # Reset links carry the token in the path.
    (re.compile(r"(/change-password/)([\w\-]{20,})"), rf"\1{REDACTED}"),
    # Credentials inside database URLs.
    (re.compile(r"((?:postgres|postgresql|mysql)(?:\+\w+)?://[^:/@\s]+:)([^@\s]+)@"), rf"\1{REDACTED}@"),
    # Cookie headers.
    (re.compile(r"(cookie\s*:\s*['\"]?)([^'\"]{10,})", re.I), rf"\1{REDACTED}"),
    # Email local parts; the domain stays for debugging delivery.
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    if record["extra"].get(MAIL_PREVIEW):
        return True
    record["message"] = sanitize_message(record["message"])
    return True

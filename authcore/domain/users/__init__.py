# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import FieldError, User, UserResponse
from .exceptions import DuplicateKeyError, SessionDestroyError

__all__ = [
    "DuplicateKeyError",
    "FieldError",
    "SessionDestroyError",
    "User",
    "UserResponse",
]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace

from authcore.application.services.credentials_validation import validate_new_password
from authcore.domain.users.entities import FieldError, UserResponse
from authcore.domain.users.repositories import (
    PasswordHasher,
    ResetTokenStore,
    SessionStore,
    UserRepository,
)
from authcore.shared.logging import logger


class ChangePasswordUseCase:
    """Redeem a reset token for a new password and sign the user in."""

    def __init__(
        self,
        *,
        users: UserRepository,
        reset_tokens: ResetTokenStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._reset_tokens = reset_tokens
        self._password_hasher = password_hasher

    def execute(self, token: str, new_password: str, session: SessionStore) -> UserResponse:
        errors = validate_new_password(new_password)
        if errors:
            return UserResponse.failure(*errors)

        # Taking the token removes it, so it can only be redeemed once.
        user_id = self._reset_tokens.take(token)
        if user_id is None:
            return UserResponse.failure(FieldError(field="token", message="token expired"))

        user = self._users.find_by_id(user_id)
        if user is None:
            return UserResponse.failure(
                FieldError(field="token", message="user no longer exists")
            )

        updated = self._users.persist(
            replace(user, password_hash=self._password_hasher.hash(new_password))
        )
        session.set_user_id(updated.id)
        logger.info(f"auth.change_password: ok user_id={updated.id}")
        return UserResponse.success(updated)

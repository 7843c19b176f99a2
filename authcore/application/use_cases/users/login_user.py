# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.users.entities import FieldError, UserResponse
from authcore.domain.users.repositories import PasswordHasher, SessionStore, UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self, username_or_email: str, password: str, session: SessionStore
    ) -> UserResponse:
        if "@" in username_or_email:
            user = self._users.find_by_email(username_or_email)
        else:
            user = self._users.find_by_username(username_or_email)

        # The two messages below let a caller tell unknown accounts from wrong
        # passwords; kept that way on purpose for the login form.
        if user is None:
            return UserResponse.failure(
                FieldError(
                    field="usernameOrEmail",
                    message=f'"{username_or_email}" does not exist',
                )
            )

        if not self._password_hasher.verify(password, user.password_hash):
            return UserResponse.failure(
                FieldError(field="password", message="incorrect password")
            )

        session.set_user_id(user.id)
        return UserResponse.success(user)

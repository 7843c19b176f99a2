# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.application.services.credentials_validation import validate_register
from authcore.domain.users.entities import FieldError, UserResponse
from authcore.domain.users.exceptions import DuplicateKeyError
from authcore.domain.users.repositories import PasswordHasher, SessionStore, UserRepository
from authcore.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self, username: str, email: str, password: str, session: SessionStore
    ) -> UserResponse:
        errors = validate_register(username=username, email=email, password=password)
        if errors:
            return UserResponse.failure(*errors)

        hashed = self._password_hasher.hash(password)
        user = self._users.create(username=username, email=email, password_hash=hashed)

        # Anything other than a uniqueness violation propagates and no session is set.
        try:
            persisted = self._users.persist(user)
        except DuplicateKeyError as exc:
            logger.info(f"auth.register: duplicate {exc.field}")
            return UserResponse.failure(
                FieldError(field=exc.field, message=f"{exc.field} already taken")
            )

        if persisted.id is None:
            raise RuntimeError("user repository returned an unsaved user from persist()")
        session.set_user_id(persisted.id)
        return UserResponse.success(persisted)

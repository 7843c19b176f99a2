# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.application.use_cases.users import (
    ChangePasswordUseCase,
    CurrentUserUseCase,
    ForgotPasswordUseCase,
    LoginUserUseCase,
    LogoutUserUseCase,
    RegisterUserUseCase,
)
from authcore.domain.users.repositories import (
    Notifier,
    PasswordHasher,
    ResetTokenStore,
    UserRepository,
)
from authcore.infrastructure.notifier import build_notifier
from authcore.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authcore.infrastructure.reset_tokens import CacheResetTokenStore
from authcore.infrastructure.sessions import SessionCookieSigner, SqlAlchemySessionBackend
from authcore.interfaces.http.controllers.auth_controller import AuthController
from authcore.shared.config import AppConfig, load_config


class Container:
    """Builds each collaborator once, on first access.

    Tests swap a piece by subclassing and overriding its property.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    # Adapters

    @cached_property
    def users(self) -> UserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def reset_tokens(self) -> ResetTokenStore:
        return CacheResetTokenStore()

    @cached_property
    def notifier(self) -> Notifier:
        return build_notifier(self.config.mail)

    @cached_property
    def session_backend(self) -> SqlAlchemySessionBackend:
        return SqlAlchemySessionBackend()

    @cached_property
    def session_signer(self) -> SessionCookieSigner:
        return SessionCookieSigner(self.config.secret_key, salt=self.config.security.session_salt)

    # HTTP

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            current_user_use_case=CurrentUserUseCase(users=self.users),
            register_use_case=RegisterUserUseCase(users=self.users, password_hasher=self.hasher),
            login_use_case=LoginUserUseCase(users=self.users, password_hasher=self.hasher),
            logout_use_case=LogoutUserUseCase(),
            forgot_password_use_case=ForgotPasswordUseCase(
                users=self.users,
                reset_tokens=self.reset_tokens,
                notifier=self.notifier,
                frontend_url=self.config.reset.frontend_url,
            ),
            change_password_use_case=ChangePasswordUseCase(
                users=self.users, reset_tokens=self.reset_tokens, password_hasher=self.hasher
            ),
        )

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from html import escape

from authcore.domain.users.repositories import Notifier, ResetTokenStore, UserRepository
from authcore.shared.logging import logger

RESET_TOKEN_TTL_SECONDS = 60 * 60 * 24 * 3


def _new_token() -> str:
    return secrets.token_urlsafe(32)


def reset_link(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/change-password/{token}"


class ForgotPasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        reset_tokens: ResetTokenStore,
        notifier: Notifier,
        frontend_url: str,
        token_factory: Callable[[], str] = _new_token,
    ) -> None:
        self._users = users
        self._reset_tokens = reset_tokens
        self._notifier = notifier
        self._frontend_url = frontend_url
        self._token_factory = token_factory

    def execute(self, email: str) -> bool:
        user = self._users.find_by_email(email)
        # Same answer for unknown addresses so accounts cannot be probed.
        if user is None:
            logger.info("auth.forgot_password: no account for address")
            return True

        token = self._token_factory()
        self._reset_tokens.put(token, user.id, RESET_TOKEN_TTL_SECONDS)

        link = escape(reset_link(self._frontend_url, token), quote=True)
        self._notifier.send(email, f'<div><a href="{link}">reset password</a></div>')
        logger.info(f"auth.forgot_password: reset link issued user_id={user.id}")
        return True

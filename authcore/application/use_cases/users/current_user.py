# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authcore.domain.users.entities import User
from authcore.domain.users.repositories import SessionStore, UserRepository


class CurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, session: SessionStore) -> User | None:
        user_id = session.get_user_id()
        if user_id is None:
            return None
        # A session pointing at a removed user reads as anonymous.
        return self._users.find_by_id(user_id)

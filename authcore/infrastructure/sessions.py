# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side sessions keyed by a signed cookie.

The cookie only carries a random session id signed with ``itsdangerous``;
the user id lives in the ``sessions`` table. A row is written the first
time a request stores a user id, so anonymous visitors never get one.
"""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from itsdangerous import BadSignature, URLSafeTimedSerializer
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from authcore.domain.users.exceptions import SessionDestroyError
from authcore.domain.users.repositories import SessionStore
from authcore.infrastructure.db.models import SessionRecord
from authcore.infrastructure.db.session import session_scope
from authcore.shared.logging import logger


class SessionCookieSigner:
    def __init__(self, secret_key: str, *, salt: str) -> None:
        if not secret_key:
            raise ValueError("SessionCookieSigner requires a non-empty secret key")
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=salt)

    def sign(self, sid: str) -> str:
        return self._serializer.dumps(sid)

    def unsign(self, value: str, *, max_age: int) -> str | None:
        if not value:
            return None
        try:
            sid = self._serializer.loads(value, max_age=max_age)
        except BadSignature:
            # Also covers SignatureExpired.
            return None
        return sid if isinstance(sid, str) and sid else None


class SqlAlchemySessionBackend:
    def load(self, sid: str) -> int | None:
        with session_scope() as session:
            return session.scalars(
                select(SessionRecord.user_id).where(
                    SessionRecord.sid == sid,
                    SessionRecord.expires_at > datetime.now(UTC),
                )
            ).first()

    def save(self, sid: str, user_id: int, max_age: int) -> None:
        expires_at = datetime.now(UTC) + timedelta(seconds=max_age)
        with session_scope() as session:
            row = session.scalars(select(SessionRecord).where(SessionRecord.sid == sid)).first()
            if row is None:
                session.add(SessionRecord(sid=sid, user_id=user_id, expires_at=expires_at))
            else:
                row.user_id = user_id
                row.expires_at = expires_at

    def delete(self, sid: str) -> None:
        with session_scope() as session:
            session.execute(delete(SessionRecord).where(SessionRecord.sid == sid))


class RequestSession(SessionStore):
    """The session of a single request."""

    def __init__(self, backend: SqlAlchemySessionBackend, sid: str | None, *, max_age: int) -> None:
        self._backend = backend
        self._max_age = max_age
        self.sid = sid
        self.modified = False
        self.cookie_cleared = False
        self._loaded = False
        self._user_id: int | None = None

    def get_user_id(self) -> int | None:
        if not self._loaded:
            self._user_id = self._backend.load(self.sid) if self.sid else None
            self._loaded = True
        return self._user_id

    def set_user_id(self, user_id: int) -> None:
        # A sid that did not already belong to this user is never promoted;
        # otherwise a planted cookie would become the victim's session.
        if self.sid is not None and self.get_user_id() != user_id:
            self._backend.delete(self.sid)
            self.sid = None
        if self.sid is None:
            self.sid = secrets.token_urlsafe(32)
        self._backend.save(self.sid, user_id, self._max_age)
        self._user_id = user_id
        self._loaded = True
        self.modified = True

    def destroy(self) -> None:
        if self.sid is not None:
            try:
                self._backend.delete(self.sid)
            except SQLAlchemyError as exc:
                raise SessionDestroyError() from exc
            logger.debug("session: destroyed")
        self.sid = None
        self._user_id = None
        self._loaded = True
        self.modified = False

    def clear_cookie(self) -> None:
        self.cookie_cleared = True


__all__ = ["RequestSession", "SessionCookieSigner", "SqlAlchemySessionBackend"]

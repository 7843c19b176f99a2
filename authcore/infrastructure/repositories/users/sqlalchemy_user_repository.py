# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from authcore.domain.users.entities import User as DomainUser
from authcore.domain.users.exceptions import DuplicateKeyError
from authcore.domain.users.repositories import UserRepository
from authcore.infrastructure.db.models import User
from authcore.infrastructure.db.session import session_scope
from authcore.shared.logging import logger

UNIQUE_FIELDS = ("username", "email")
_PG_UNIQUE_VIOLATION = "23505"

# Named constraints from the model plus Postgres defaults for unnamed ones.
_CONSTRAINT_FIELDS = {
    name: field
    for field in UNIQUE_FIELDS
    for name in (f"uq_users_{field}", f"users_{field}_key")
}
# Only the first line: the DETAIL line repeats the offending value.
_PG_CONSTRAINT_RE = re.compile(r'violates unique constraint "([^"]+)"')
_SQLITE_COLUMN_RE = re.compile(r"UNIQUE constraint failed: users\.(\w+)")


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=created_at,
    )


def duplicate_field(exc: IntegrityError) -> str | None:
    """Name the unique column an IntegrityError refers to, if any.

    Postgres drivers expose the SQLSTATE and usually the constraint name,
    which is otherwise parsed from the message. SQLite only reports
    ``UNIQUE constraint failed: users.<column>``.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    message = str(orig)

    if sqlstate is None:
        match = _SQLITE_COLUMN_RE.search(message)
        column = match.group(1) if match else None
        return column if column in UNIQUE_FIELDS else None

    if sqlstate != _PG_UNIQUE_VIOLATION:
        return None
    constraint = getattr(getattr(orig, "diag", None), "constraint_name", None)
    if not constraint:
        match = _PG_CONSTRAINT_RE.search(message.partition("\n")[0])
        constraint = match.group(1) if match else None
    return _CONSTRAINT_FIELDS.get(constraint) if constraint else None


class SqlAlchemyUserRepository(UserRepository):
    def find_by_id(self, user_id: int) -> DomainUser | None:
        return self._find_one(User.id == user_id)

    def find_by_username(self, username: str) -> DomainUser | None:
        return self._find_one(User.username == username)

    def find_by_email(self, email: str) -> DomainUser | None:
        return self._find_one(User.email == email)

    def create(self, *, username: str, email: str, password_hash: str) -> DomainUser:
        return DomainUser(
            id=None,
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )

    def persist(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope() as session:
                if user.id is None:
                    row = User(
                        username=user.username,
                        email=user.email,
                        password_hash=user.password_hash,
                        created_at=user.created_at,
                    )
                    session.add(row)
                else:
                    row = session.get(User, user.id)
                    if row is None:
                        raise LookupError(f"user {user.id} does not exist")
                    row.username = user.username
                    row.email = user.email
                    row.password_hash = user.password_hash
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            field = duplicate_field(exc)
            if field is None:
                raise
            logger.info(f"users.persist: unique violation on {field}")
            raise DuplicateKeyError(field) from exc

    def _find_one(self, criterion) -> DomainUser | None:
        with session_scope() as session:
            row = session.scalars(select(User).where(criterion)).first()
            if not row:
                return None
            return _to_domain(row)

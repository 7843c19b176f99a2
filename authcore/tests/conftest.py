from __future__ import annotations

import os
import tempfile
from dataclasses import replace
from datetime import UTC, datetime

# Must be set before authcore reads its configuration.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "test"
os.environ["MAIL_BACKEND"] = "log"
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.mkdtemp(prefix="authcore-"), "test.log"))

import pytest

from authcore.domain.users.entities import User
from authcore.domain.users.exceptions import DuplicateKeyError, SessionDestroyError
from authcore.domain.users.repositories import (
    Notifier,
    PasswordHasher,
    SessionStore,
    UserRepository,
)
from authcore.infrastructure.cache import InMemoryTTLCache
from authcore.infrastructure.reset_tokens import CacheResetTokenStore


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self._seq = 1

    def find_by_id(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def create(self, *, username: str, email: str, password_hash: str) -> User:
        return User(
            id=None,
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )

    def persist(self, user: User) -> User:
        for other in self.users.values():
            if other.id == user.id:
                continue
            if other.username == user.username:
                raise DuplicateKeyError("username")
            if other.email == user.email:
                raise DuplicateKeyError("email")
        if user.id is None:
            user = replace(user, id=self._seq)
            self._seq += 1
        self.users[user.id] = user
        return user


class FakeSession(SessionStore):
    def __init__(self, user_id: int | None = None, *, fail_destroy: bool = False) -> None:
        self.user_id = user_id
        self.fail_destroy = fail_destroy
        self.destroyed = False
        self.cookie_cleared = False
        self.writes = 0

    def get_user_id(self) -> int | None:
        return self.user_id

    def set_user_id(self, user_id: int) -> None:
        self.user_id = user_id
        self.writes += 1

    def destroy(self) -> None:
        if self.fail_destroy:
            raise SessionDestroyError()
        self.destroyed = True
        self.user_id = None

    def clear_cookie(self) -> None:
        self.cookie_cleared = True


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send(self, to: str, body_html: str) -> None:
        self.sent.append((to, body_html))


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def session_factory():
    return FakeSession


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def reset_tokens(clock: FakeClock) -> CacheResetTokenStore:
    return CacheResetTokenStore(InMemoryTTLCache(clock=clock))


@pytest.fixture()
def database():
    from authcore.infrastructure.db import ENGINE, Base, init_db

    init_db()
    yield
    Base.metadata.drop_all(bind=ENGINE)

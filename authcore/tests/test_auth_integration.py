from __future__ import annotations

import re
from functools import cached_property

import pytest
from sqlalchemy.exc import OperationalError

from authcore.app import create_app
from authcore.domain.users.repositories import Notifier
from authcore.infrastructure.container import Container
from authcore.infrastructure.sessions import SqlAlchemySessionBackend

_RESET_LINK = re.compile(r'href="http://localhost:3000/change-password/([^"]+)"')


class _RecordingContainer(Container):
    def __init__(self, notifier) -> None:
        super().__init__()
        self._recording_notifier = notifier

    @cached_property
    def notifier(self) -> Notifier:
        return self._recording_notifier


@pytest.fixture()
def client(database, notifier):
    app = create_app(_RecordingContainer(notifier))
    return app.test_client()


def _register(client, username="alice", email="alice@example.com", password="secret123"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def test_register_me_logout_flow(client) -> None:
    resp = _register(client)
    user = resp.get_json()["user"]
    assert client.get_cookie("qid") is not None

    me = client.get("/api/auth/me").get_json()
    assert me["user"] == user

    assert client.post("/api/auth/logout").get_json() == {"ok": True}
    assert client.get_cookie("qid") is None
    assert client.get("/api/auth/me").get_json() == {"user": None}


def test_failed_register_sets_no_cookie(client) -> None:
    resp = _register(client, username="al")

    assert resp.get_json()["errors"][0]["field"] == "username"
    assert client.get_cookie("qid") is None


def test_duplicate_register_reports_field(client) -> None:
    _register(client)

    resp = _register(client, email="other@example.com")

    assert resp.get_json() == {
        "errors": [{"field": "username", "message": "username already taken"}]
    }


def test_login_by_email_after_logout(client) -> None:
    user = _register(client).get_json()["user"]
    client.post("/api/auth/logout")

    resp = client.post(
        "/api/auth/login",
        json={"usernameOrEmail": "alice@example.com", "password": "secret123"},
    )

    assert resp.get_json()["user"]["id"] == user["id"]
    assert client.get("/api/auth/me").get_json()["user"]["id"] == user["id"]


def test_tampered_cookie_is_anonymous(client) -> None:
    _register(client)
    client.set_cookie("qid", "forged-value")

    assert client.get("/api/auth/me").get_json() == {"user": None}


def test_forgot_then_change_password(client, notifier) -> None:
    _register(client)
    client.post("/api/auth/logout")

    assert client.post(
        "/api/auth/forgot-password", json={"email": "alice@example.com"}
    ).get_json() == {"ok": True}
    assert len(notifier.sent) == 1
    to, body = notifier.sent[0]
    assert to == "alice@example.com"
    token = _RESET_LINK.search(body).group(1)

    resp = client.post(
        "/api/auth/change-password", json={"token": token, "newPassword": "n3w-password"}
    )
    assert resp.get_json()["user"]["username"] == "alice"
    assert client.get("/api/auth/me").get_json()["user"]["username"] == "alice"

    reuse = client.post(
        "/api/auth/change-password", json={"token": token, "newPassword": "again-123"}
    )
    assert reuse.get_json() == {"errors": [{"field": "token", "message": "token expired"}]}

    client.post("/api/auth/logout")
    old = client.post(
        "/api/auth/login", json={"usernameOrEmail": "alice", "password": "secret123"}
    )
    assert old.get_json()["errors"][0]["field"] == "password"


def test_security_headers(client) -> None:
    resp = client.get("/api/auth/me")

    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["Cache-Control"] == "no-store"


class _LockedSessionBackend(SqlAlchemySessionBackend):
    def delete(self, sid: str) -> None:
        raise OperationalError("DELETE FROM sessions", {}, Exception("database is locked"))


class _LockedSessionContainer(_RecordingContainer):
    @cached_property
    def session_backend(self) -> SqlAlchemySessionBackend:
        return _LockedSessionBackend()


def test_logout_clears_cookie_when_destroy_fails(database, notifier) -> None:
    client = create_app(_LockedSessionContainer(notifier)).test_client()
    _register(client)
    assert client.get_cookie("qid") is not None

    resp = client.post("/api/auth/logout")

    assert resp.get_json() == {"ok": False}
    deletions = [
        header
        for header in resp.headers.getlist("Set-Cookie")
        if header.startswith("qid=") and "Max-Age=0" in header
    ]
    assert deletions
    assert client.get_cookie("qid") is None

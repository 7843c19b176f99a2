# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response, g, request

from authcore.infrastructure.sessions import (
    RequestSession,
    SessionCookieSigner,
    SqlAlchemySessionBackend,
)
from authcore.shared.config.settings import SecurityConfig


def current_session() -> RequestSession:
    return g.auth_session


def configure_sessions(
    app: Flask,
    *,
    backend: SqlAlchemySessionBackend,
    signer: SessionCookieSigner,
    security: SecurityConfig,
) -> None:
    @app.before_request
    def _load_session() -> None:
        raw = request.cookies.get(security.cookie_name, "")
        sid = signer.unsign(raw, max_age=security.session_max_age) if raw else None
        g.auth_session = RequestSession(backend, sid, max_age=security.session_max_age)

    @app.after_request
    def _write_cookie(response: Response) -> Response:
        session: RequestSession | None = g.get("auth_session")
        if session is None:
            return response
        if session.cookie_cleared:
            response.delete_cookie(
                security.cookie_name,
                httponly=True,
                samesite=security.cookie_samesite,
                secure=security.cookie_secure,
            )
        elif session.modified and session.sid:
            response.set_cookie(
                security.cookie_name,
                signer.sign(session.sid),
                max_age=security.session_max_age,
                httponly=True,
                samesite=security.cookie_samesite,
                secure=security.cookie_secure,
            )
        return response


__all__ = ["configure_sessions", "current_session"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from authcore.shared.config import load_config
from authcore.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
_MASKED_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _visible_headers() -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _MASKED_HEADERS else value
        for name, value in request.headers.items()
    }


def configure_request_logging(app: Flask) -> None:
    """One line per request in and out, tagged with a correlation id.

    The id comes from ``X-Request-ID`` when the caller sends one and is echoed
    back on the response.
    """
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(8)
        g.request_started = time.perf_counter()
        set_correlation_id(g.request_id)

        line = f"http.in: {request.method} {request.path} ip={client_ip()}"
        if verbose:
            line += f" headers={_visible_headers()} bytes={request.content_length or 0}"
        logger.info(line)

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("request_id", "-"))
        logger.info(
            f"http.out: {request.method} {request.path} "
            f"status={response.status_code} elapsed={elapsed_ms:.1f}ms"
        )
        return response

    @app.teardown_request
    def _reset(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http.failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "client_ip", "configure_request_logging"]

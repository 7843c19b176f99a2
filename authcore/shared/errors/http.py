# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from authcore.shared.config import load_config
from authcore.shared.logging import logger

from .base import AppError

INTERNAL_ERROR_BODY = {"error": "internal_error"}


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(app: Flask) -> None:
    """JSON bodies for every failure a view can raise.

    ``AppError`` keeps its own status. Werkzeug HTTP errors (404, 405) pass
    through untouched. Everything else is a 500 whose details only reach the
    log, with a traceback when ``DEBUG_LOGGING`` is on.
    """
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        logger.warning(f"http.error: {exc.code} status={int(exc.status)} {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        where = f"{request.method} {request.path}"
        if verbose:
            logger.exception(f"http.error: unhandled {type(exc).__name__} on {where}")
        else:
            logger.error(f"http.error: unhandled {type(exc).__name__} on {where}")
        return jsonify(INTERNAL_ERROR_BODY), HTTPStatus.INTERNAL_SERVER_ERROR

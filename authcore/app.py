# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask

from authcore.infrastructure.container import Container
from authcore.infrastructure.db import init_db
from authcore.interfaces.http.session_binding import configure_sessions
from authcore.shared.config import load_config
from authcore.shared.logging import logger, setup_logging
from authcore.shared.middleware.error_handler import configure_error_handling
from authcore.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    config = load_config()
    setup_logging(debug_mode=config.debug_logging)
    init_db()

    container = container or Container(config)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["authcore.container"] = container

    configure_error_handling(app)
    configure_request_logging(app)
    configure_sessions(
        app,
        backend=container.session_backend,
        signer=container.session_signer,
        security=config.security,
    )

    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=4000, debug=True)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from ticket_verifier.container import Container
from ticket_verifier.container import container as default_container
from ticket_verifier.infrastructure.db import init_db
from ticket_verifier.shared.logging import logger, setup_logging
from ticket_verifier.shared.middleware.error_handler import configure_error_handling
from ticket_verifier.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or default_container
    config = container.config

    setup_logging(debug_mode=config.debug_logging)
    init_db(container.engine)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        # werkzeug stops reading the body past this; the store enforces the exact image cap
        MAX_CONTENT_LENGTH=config.upload.max_request_bytes,
    )
    configure_error_handling(app)
    configure_request_logging(app)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}},
        "methods": ["GET", "POST", "PUT", "DELETE"],
        "allow_headers": ["Content-Type", "Authorization"],
    }
    if config.security.cors_credentials and "*" not in config.security.allowed_origins:
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    # eagerly builds the upload store so the upload root exists before the first request
    app.register_blueprint(container.uploads_controller.as_blueprint())
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.tickets_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    _app = create_app()
    _config = default_container.config
    _app.run(host=_config.host, port=_config.port, threaded=True)

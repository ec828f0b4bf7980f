# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from ticket_verifier.shared.config import load_config
from ticket_verifier.shared.logging import logger

from .base import AppError

_INTERNAL_ERROR_BODY = {"success": False, "error": "internal_error", "message": "Server error"}


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def _where() -> str:
    return f"{request.method} {request.path}"


def register_error_handler(app: Flask) -> None:
    """Map every failure to a JSON body; server-side details only ever reach the log."""
    debug_mode = load_config().debug_logging

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} on {_where()}")
        else:
            logger.info(f"{int(exc.status)} {exc.code} on {_where()}")
        return handle_app_error(exc)

    @app.errorhandler(RequestEntityTooLarge)
    def _on_body_too_large(exc: RequestEntityTooLarge):
        # the domain import would be circular at module load
        from ticket_verifier.domain.tickets.exceptions import UploadTooLargeError

        logger.info(f"body over {app.config.get('MAX_CONTENT_LENGTH')} bytes on {_where()}")
        return handle_app_error(UploadTooLargeError())

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"unhandled {type(exc).__name__} on {_where()}")
        else:
            logger.error(f"unhandled {type(exc).__name__} on {_where()}")
        return jsonify(_INTERNAL_ERROR_BODY), HTTPStatus.INTERNAL_SERVER_ERROR

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request/response access logging with a per-request correlation id."""

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from ticket_verifier.shared.config import load_config
from ticket_verifier.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    sanitize_message,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"
_MASKED_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _describe_headers() -> str:
    parts = []
    for key, value in request.headers.items():
        shown = "<masked>" if key.lower() in _MASKED_HEADERS else sanitize_message(value)
        parts.append(f"{key}={shown}")
    return ", ".join(parts)


def configure_request_logging(app: Flask) -> None:
    debug_mode = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8))
        g.request_started = time.perf_counter()
        if debug_mode:
            # only the declared length; reading the body here would drain multipart streams
            logger.debug(
                f"-> {request.method} {request.path} from {_client_ip()} "
                f"length={request.content_length} headers=[{_describe_headers()}]"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        logger.info(
            f"{request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms ip={_client_ip()}"
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]

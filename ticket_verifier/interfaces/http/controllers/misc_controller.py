# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, Response, jsonify
from sqlalchemy.exc import SQLAlchemyError

from ticket_verifier.shared.logging import logger


class MiscController:
    def __init__(self, *, database_probe: Callable[[], object]) -> None:
        self._database_probe = database_probe

    def health(self) -> Response:
        try:
            self._database_probe()
        except SQLAlchemyError as exc:
            logger.warning(f"health: database unreachable ({type(exc).__name__})")
            return jsonify(ok=False, database="error")
        return jsonify(ok=True, database="ok")

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__, url_prefix="/api")
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

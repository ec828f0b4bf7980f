# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, abort, send_file

from ticket_verifier.infrastructure.storage import PUBLIC_PREFIX, LocalUploadStore


class UploadsController:
    def __init__(self, *, store: LocalUploadStore) -> None:
        self._store = store

    def serve(self, name: str) -> Response:
        path = self._store.locate(name)
        if path is None:
            abort(404)
        return send_file(path, conditional=True)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("uploads", __name__, url_prefix=f"/{PUBLIC_PREFIX}")
        bp.add_url_rule("/<path:name>", view_func=self.serve, methods=["GET"])
        return bp

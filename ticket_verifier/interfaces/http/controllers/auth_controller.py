# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from ticket_verifier.application.use_cases.users.login_user import LoginUserUseCase
from ticket_verifier.application.use_cases.users.register_user import RegisterUserUseCase
from ticket_verifier.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginSuccessDTO,
    MessageDTO,
    RegisterRequestDTO,
)
from ticket_verifier.shared.errors.validation import raise_validation_error
from ticket_verifier.shared.logging import logger

_MISSING_CREDENTIALS = "Username and password are required"


def _credentials_payload() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_credentials_payload())
        except ValidationError as exc:
            raise_validation_error(exc, message=_MISSING_CREDENTIALS)

        user = self._register_use_case.execute(dto.username, dto.password)

        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(MessageDTO(message="Registration successful").model_dump()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_credentials_payload())
        except ValidationError as exc:
            raise_validation_error(exc, message=_MISSING_CREDENTIALS)

        token = self._login_use_case.execute(dto.username, dto.password)

        logger.info("auth.login: ok")
        return jsonify(LoginSuccessDTO(token=token).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp

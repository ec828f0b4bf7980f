from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from ticket_verifier.application.use_cases.users.login_user import LoginUserUseCase
from ticket_verifier.application.use_cases.users.register_user import RegisterUserUseCase
from ticket_verifier.domain.users.entities import User
from ticket_verifier.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from ticket_verifier.interfaces.http.controllers.auth_controller import AuthController
from ticket_verifier.shared.errors import StorageError
from ticket_verifier.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _register(flask_app: Flask, controller: AuthController) -> Flask:
    flask_app.register_blueprint(controller.as_blueprint())
    return flask_app


def test_register_endpoint_returns_201(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, username: str, password: str) -> User:
            register_called["args"] = (username, password)
            return User(id=1, username=username, password_hash="hash")

    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, StubRegister()),
        login_use_case=MagicMock(),
    )

    with _register(flask_app, controller).test_client() as client:
        response = client.post(
            "/api/register", json={"username": "alice", "password": "secret123"}
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "secret123")
    assert response.get_json() == {"message": "Registration successful"}


def test_register_accepts_form_body(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.return_value = User(id=1, username="alice", password_hash="hash")
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/register", data={"username": "alice", "password": "pw"})

    assert response.status_code == 201
    register.execute.assert_called_once_with("alice", "pw")


@pytest.mark.parametrize(
    "body",
    [{}, {"username": "alice"}, {"password": "pw"}, {"username": "", "password": "pw"}],
)
def test_register_missing_fields_returns_400(flask_app: Flask, body: dict) -> None:
    register = MagicMock()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/register", json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["message"] == "Username and password are required"
    register.execute.assert_not_called()


def test_register_duplicate_returns_409(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = UserAlreadyExistsError()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/register", json={"username": "alice", "password": "pw"})

    assert response.status_code == 409
    assert response.get_json()["error"] == "user_already_exists"


def test_register_storage_failure_hides_detail(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = StorageError()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/register", json={"username": "alice", "password": "pw"})

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "error": "storage_error",
        "message": "Server error",
    }


def test_login_returns_token(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = "signed.jwt.token"
    controller = AuthController(
        register_use_case=MagicMock(), login_use_case=cast(LoginUserUseCase, login)
    )

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/login", json={"username": "alice", "password": "pw"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Login successful", "token": "signed.jwt.token"}


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    controller = AuthController(register_use_case=MagicMock(), login_use_case=MagicMock())

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/login", json={"username": "a"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_login_rejection_is_generic_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {
        "success": False,
        "error": "invalid_credentials",
        "message": "Invalid username or password",
    }


def test_register_accepts_long_passwords(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.return_value = User(id=1, username="alice", password_hash="hash")
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    long_password = "p" * 1000

    with _register(flask_app, controller).test_client() as client:
        response = client.post("/api/register", json={"username": "alice", "password": long_password})

    assert response.status_code == 201
    register.execute.assert_called_once_with("alice", long_password)

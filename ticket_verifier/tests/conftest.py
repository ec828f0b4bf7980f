from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="ticket-verifier-tests-"))

# must be in place before ticket_verifier.* is imported: the engine is built from config at import
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy-for-hs256"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'tickets.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP / "uploads")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"

from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from ticket_verifier.app import create_app  # noqa: E402
from ticket_verifier.container import Container  # noqa: E402
from ticket_verifier.infrastructure.db import ENGINE, Base, SessionLocal  # noqa: E402
from ticket_verifier.infrastructure.db import models  # noqa: E402,F401
from ticket_verifier.shared.config import load_config  # noqa: E402
from ticket_verifier.shared.config.settings import UploadConfig  # noqa: E402


@pytest.fixture()
def database() -> Iterator[None]:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def upload_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture()
def container(database: None, upload_root: Path) -> Container:
    config = load_config().model_copy(
        update={"upload": UploadConfig(directory=upload_root)}
    )
    return Container(config=config, session_factory=SessionLocal)


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client

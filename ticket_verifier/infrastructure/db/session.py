# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from ticket_verifier.shared.config import load_config
from ticket_verifier.shared.config.settings import DatabaseConfig
from ticket_verifier.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def _connect_args(database: DatabaseConfig) -> dict[str, object]:
    if database.url.startswith("sqlite"):
        return {
            "check_same_thread": False,
            "timeout": database.connect_timeout,
        }
    return {"connect_timeout": database.connect_timeout}


def _pool_args(database: DatabaseConfig) -> dict[str, object]:
    # in-memory sqlite runs on a single-connection pool without overflow settings
    if database.url == "sqlite://" or database.url.startswith("sqlite:///:memory:"):
        return {}
    return {
        "pool_size": database.pool_size,
        "max_overflow": database.max_overflow,
        "pool_timeout": database.pool_timeout,
    }


def build_engine(database: DatabaseConfig) -> Engine:
    return create_engine(
        database.url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        connect_args=_connect_args(database),
        **_pool_args(database),
    )


ENGINE: Engine = build_engine(_config.database)


def build_session_factory(engine: Engine) -> scoped_session[Session]:
    return scoped_session(
        sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    )


SessionLocal = build_session_factory(ENGINE)


def engine_of(session_factory: Callable[[], Session]) -> Engine:
    """Engine a session factory is bound to."""
    session = session_factory()
    try:
        bind = session.get_bind()
    finally:
        session.close()
        remove = getattr(session_factory, "remove", None)
        if callable(remove):
            remove()
    return bind.engine if isinstance(bind, Connection) else bind


def init_db(engine: Engine = ENGINE) -> None:
    from ticket_verifier.infrastructure.db import models  # noqa: F401 (registers tables)

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ensured on {engine.url.render_as_string(hide_password=True)}")

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-operation transaction scope over a SQLAlchemy session factory."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from ticket_verifier.shared.logging import logger


def _release(factory: Callable[[], Session], session: Session) -> None:
    session.close()
    # scoped_session keeps a session per thread; drop it so the next operation starts clean
    remove = getattr(factory, "remove", None)
    if callable(remove):
        remove()


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Yield a session that commits on clean exit and rolls back on any exception.

    Each repository call runs in its own scope, so a request never holds a
    transaction open across a file write.
    """
    session = factory()
    try:
        yield session
    except BaseException as exc:
        logger.debug(f"uow: rollback after {type(exc).__name__}")
        session.rollback()
        raise
    else:
        try:
            session.commit()
        except Exception:
            session.rollback()
            raise
    finally:
        _release(factory, session)


__all__ = ["unit_of_work_scope"]

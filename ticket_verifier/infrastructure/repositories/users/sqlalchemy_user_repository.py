# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ticket_verifier.domain.users.entities import User as DomainUser
from ticket_verifier.domain.users.exceptions import UserAlreadyExistsError
from ticket_verifier.domain.users.repositories import UserRepository
from ticket_verifier.infrastructure.db.models import User
from ticket_verifier.infrastructure.unit_of_work import unit_of_work_scope
from ticket_verifier.shared.errors import StorageError
from ticket_verifier.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(id=row.id, username=row.username, password_hash=row.password_hash)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(User).filter(User.username == username).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.exception("users.repo: lookup failed")
            raise StorageError() from exc

    def add(self, username: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(username=username, password_hash=password_hash)
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            logger.info(f"users.repo: duplicate username={username}")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.exception("users.repo: insert failed")
            raise StorageError() from exc

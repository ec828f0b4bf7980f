# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ticket_verifier.domain.tickets.entities import Ticket as DomainTicket
from ticket_verifier.domain.tickets.entities import TicketSubmission
from ticket_verifier.domain.tickets.repositories import TicketRepository
from ticket_verifier.infrastructure.db.models import Ticket
from ticket_verifier.infrastructure.unit_of_work import unit_of_work_scope
from ticket_verifier.shared.errors import StorageError
from ticket_verifier.shared.logging import logger


def _to_domain(row: Ticket) -> DomainTicket:
    return DomainTicket(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        phone_number=row.phone_number,
        email=row.email,
        card_type=row.card_type,
        code=row.code,
        image_path=row.image_path,
    )


class SqlAlchemyTicketRepository(TicketRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, submission: TicketSubmission, image_path: str) -> DomainTicket:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Ticket(
                    first_name=submission.first_name,
                    last_name=submission.last_name,
                    phone_number=submission.phone_number,
                    email=submission.email,
                    card_type=submission.card_type,
                    code=submission.code,
                    image_path=image_path,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            logger.exception("tickets.repo: insert failed")
            raise StorageError() from exc

    def list_all(self) -> Sequence[DomainTicket]:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                rows = session.query(Ticket).order_by(Ticket.id.asc()).all()
                return [_to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("tickets.repo: listing failed")
            raise StorageError() from exc

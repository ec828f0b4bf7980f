from __future__ import annotations

import io
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from ticket_verifier.application.services.upload_policy import UploadPolicy
from ticket_verifier.application.use_cases.tickets.submit_ticket import SubmitTicketUseCase
from ticket_verifier.domain.tickets.entities import IncomingUpload, Ticket, TicketSubmission
from ticket_verifier.domain.users.exceptions import UserAlreadyExistsError
from ticket_verifier.infrastructure.db import SessionLocal
from ticket_verifier.infrastructure.repositories.tickets.sqlalchemy_ticket_repository import (
    SqlAlchemyTicketRepository,
)
from ticket_verifier.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from ticket_verifier.infrastructure.storage import LocalUploadStore
from ticket_verifier.shared.errors import StorageError

SUBMISSION = TicketSubmission(
    first_name="Ada",
    last_name="Lovelace",
    phone_number="0612345678",
    email="ada@example.com",
    card_type="visa",
    code="ABC-123",
)


class _BrokenSession(Session):
    def flush(self, objects=None) -> None:
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    def query(self, *entities, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_user_round_trip(database: None) -> None:
    users = SqlAlchemyUserRepository(SessionLocal)

    created = users.add("alice", "$2b$04$hash")
    found = users.find_by_username("alice")

    assert created.id > 0
    assert found == created
    assert users.find_by_username("bob") is None


def test_duplicate_username_is_a_conflict_not_a_storage_error(database: None) -> None:
    users = SqlAlchemyUserRepository(SessionLocal)
    users.add("alice", "h1")

    with pytest.raises(UserAlreadyExistsError):
        users.add("alice", "h2")

    assert users.find_by_username("alice").password_hash == "h1"


def test_tickets_are_listed_in_primary_key_order(database: None) -> None:
    tickets = SqlAlchemyTicketRepository(SessionLocal)

    first = tickets.add(SUBMISSION, "uploads/1.jpg")
    second = tickets.add(SUBMISSION, "uploads/2.png")

    assert first.id < second.id
    assert list(tickets.list_all()) == [first, second]
    assert second.image_path == "uploads/2.png"


def test_empty_ticket_list(database: None) -> None:
    assert list(SqlAlchemyTicketRepository(SessionLocal).list_all()) == []


def test_driver_failures_become_storage_errors(database: None) -> None:
    from ticket_verifier.infrastructure.db import ENGINE

    def factory() -> Session:
        return _BrokenSession(bind=ENGINE)

    with pytest.raises(StorageError):
        SqlAlchemyUserRepository(factory).add("alice", "hash")
    with pytest.raises(StorageError):
        SqlAlchemyUserRepository(factory).find_by_username("alice")
    with pytest.raises(StorageError):
        SqlAlchemyTicketRepository(factory).add(SUBMISSION, "uploads/1.jpg")
    with pytest.raises(StorageError):
        SqlAlchemyTicketRepository(factory).list_all()


def test_concurrent_submissions_in_one_millisecond_get_distinct_rows(
    database: None, tmp_path: Path
) -> None:
    tickets = SqlAlchemyTicketRepository(SessionLocal)
    submit = SubmitTicketUseCase(
        tickets=tickets,
        uploads=LocalUploadStore(tmp_path / "uploads", clock=lambda: 1_700_000_000.123),
        policy=UploadPolicy(),
    )
    barrier = threading.Barrier(2)

    def worker(index: int) -> Ticket:
        upload = IncomingUpload(
            filename=f"scan-{index}.png", mimetype="image/png", stream=io.BytesIO(b"png" * 10)
        )
        barrier.wait()
        try:
            return submit.execute(SUBMISSION, upload)
        finally:
            SessionLocal.remove()

    with ThreadPoolExecutor(max_workers=2) as pool:
        created = list(pool.map(worker, range(2)))

    rows = list(tickets.list_all())
    assert len(rows) == 2
    assert {row.id for row in rows} == {ticket.id for ticket in created}
    assert len({row.image_path for row in rows}) == 2
    assert all(row.image_path.startswith("uploads/1700000000123-") for row in rows)

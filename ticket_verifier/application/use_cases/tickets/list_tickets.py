# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from ticket_verifier.domain.tickets.entities import Ticket
from ticket_verifier.domain.tickets.repositories import TicketRepository


class ListTicketsUseCase:
    def __init__(self, *, tickets: TicketRepository) -> None:
        self._tickets = tickets

    def execute(self) -> Sequence[Ticket]:
        return self._tickets.list_all()

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ticket_verifier.domain.tickets.entities import TicketSubmission


class TicketSubmissionDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    phone_number: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=1, max_length=255)
    card_type: str = Field(min_length=1, max_length=64)
    code: str = Field(min_length=1, max_length=255)

    def to_domain(self) -> TicketSubmission:
        return TicketSubmission(**self.model_dump())


class TicketCreatedDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Ticket verified and saved"
    ticket_id: int = Field(serialization_alias="ticketId")

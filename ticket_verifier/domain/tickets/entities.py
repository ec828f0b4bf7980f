# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, BinaryIO


@dataclass(slots=True, frozen=True)
class TicketSubmission:

    first_name: str
    last_name: str
    phone_number: str
    email: str
    card_type: str
    code: str


@dataclass(slots=True, frozen=True)
class Ticket:

    id: int
    first_name: str
    last_name: str
    phone_number: str
    email: str
    card_type: str
    code: str
    image_path: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class IncomingUpload:
    """File part of a multipart request, before any policy decision."""

    filename: str
    mimetype: str
    stream: BinaryIO
    declared_size: int | None = None


@dataclass(slots=True, frozen=True)
class StoredUpload:

    name: str
    image_path: str
    size: int

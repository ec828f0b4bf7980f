# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import BinaryIO, Protocol

from .entities import StoredUpload, Ticket, TicketSubmission


class TicketRepository(Protocol):
    def add(self, submission: TicketSubmission, image_path: str) -> Ticket: ...
    def list_all(self) -> Sequence[Ticket]: ...


class UploadStore(Protocol):
    def place(self, stream: BinaryIO, extension: str, *, max_bytes: int) -> StoredUpload: ...

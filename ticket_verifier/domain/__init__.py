# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .tickets.entities import IncomingUpload, StoredUpload, Ticket, TicketSubmission
from .users.entities import SessionClaims, User

__all__ = [
    "IncomingUpload",
    "SessionClaims",
    "StoredUpload",
    "Ticket",
    "TicketSubmission",
    "User",
]

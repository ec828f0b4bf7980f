# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from ticket_verifier.application.services.upload_policy import UploadPolicy
from ticket_verifier.domain.tickets.entities import IncomingUpload, Ticket, TicketSubmission
from ticket_verifier.domain.tickets.repositories import TicketRepository, UploadStore
from ticket_verifier.shared.errors import StorageError
from ticket_verifier.shared.logging import logger


class SubmitTicketUseCase:
    """Check the image against the upload policy, store it, then insert the ticket row."""

    def __init__(
        self,
        *,
        tickets: TicketRepository,
        uploads: UploadStore,
        policy: UploadPolicy,
    ) -> None:
        self._tickets = tickets
        self._uploads = uploads
        self._policy = policy

    def execute(self, submission: TicketSubmission, upload: IncomingUpload) -> Ticket:
        extension = self._policy.check(upload.filename, upload.mimetype, upload.declared_size)
        stored = self._uploads.place(upload.stream, extension, max_bytes=self._policy.max_bytes)

        try:
            ticket = self._tickets.add(submission, stored.image_path)
        except StorageError:
            # TODO: reconcile files under the upload root that no ticket row references
            logger.warning(f"tickets.submit: insert failed, orphaned upload {stored.image_path}")
            raise

        logger.info(
            f"tickets.submit: stored ticket_id={ticket.id} image={stored.image_path} size={stored.size}"
        )
        return ticket

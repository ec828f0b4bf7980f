# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from ticket_verifier.application.use_cases.tickets.list_tickets import ListTicketsUseCase
from ticket_verifier.application.use_cases.tickets.submit_ticket import SubmitTicketUseCase
from ticket_verifier.domain.tickets.entities import IncomingUpload
from ticket_verifier.domain.tickets.exceptions import TicketIncompleteError
from ticket_verifier.interfaces.http.dto.tickets import TicketCreatedDTO, TicketSubmissionDTO

IMAGE_FIELD = "image"


class TicketsController:
    def __init__(
        self,
        *,
        submit_use_case: SubmitTicketUseCase,
        list_use_case: ListTicketsUseCase,
    ) -> None:
        self._submit_use_case = submit_use_case
        self._list_use_case = list_use_case

    def submit(self) -> tuple[Response, int]:
        # one combined rejection for any missing part, checked before anything is written
        try:
            dto = TicketSubmissionDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise TicketIncompleteError() from exc

        image = request.files.get(IMAGE_FIELD)
        if image is None or not image.filename:
            raise TicketIncompleteError()

        upload = IncomingUpload(
            filename=image.filename,
            mimetype=image.mimetype,
            stream=image.stream,
            declared_size=image.content_length or None,
        )
        ticket = self._submit_use_case.execute(dto.to_domain(), upload)

        payload = TicketCreatedDTO(ticket_id=ticket.id).model_dump(by_alias=True)
        return jsonify(payload), 200

    def list_tickets(self) -> tuple[Response, int]:
        tickets = self._list_use_case.execute()
        return jsonify([ticket.to_dict() for ticket in tickets]), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("tickets", __name__, url_prefix="/api")
        bp.add_url_rule("/verifier-ticket", view_func=self.submit, methods=["POST"])
        bp.add_url_rule("/tickets", view_func=self.list_tickets, methods=["GET"])
        return bp

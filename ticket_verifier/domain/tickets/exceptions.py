# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from ticket_verifier.shared.errors.base import DomainError


class TicketIncompleteError(DomainError):
    code = "missing_fields"
    status = HTTPStatus.BAD_REQUEST
    message = "All fields are required"


class UploadPolicyError(DomainError):
    code = "invalid_image"
    status = HTTPStatus.BAD_REQUEST
    message = "Only jpeg, jpg, png and gif images are allowed"


class UploadTooLargeError(UploadPolicyError):
    code = "file_too_large"
    message = "Image exceeds the maximum upload size"

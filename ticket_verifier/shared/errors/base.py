# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Exception hierarchy rendered as ``{"success": false, "error": ..., "message": ...}`` bodies."""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar


class AppError(Exception):
    """Base for every error the HTTP layer turns into a JSON response.

    Subclasses set ``code``, ``status`` and ``message`` as class attributes;
    any of them can be overridden per instance.
    """

    code: ClassVar[str] = "app_error"
    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR
    message: ClassVar[str | None] = None

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        # instance attributes shadow the class defaults
        if code is not None:
            self.code = code  # type: ignore[misc]
        if status is not None:
            self.status = status  # type: ignore[misc]
        if message is not None:
            self.message = message  # type: ignore[misc]
        self.context = dict(context) if context else None
        super().__init__(self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": False, "error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = self.context
        return payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status={int(self.status)})"


class DomainError(AppError):
    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST


class InfrastructureError(AppError):
    code = "infrastructure_error"


class StorageError(InfrastructureError):
    """Database or filesystem failure. The public message never carries driver detail."""

    code = "storage_error"
    message = "Server error"


class ValidationError(AppError):
    code = "validation_error"
    status = HTTPStatus.BAD_REQUEST
    message = "Invalid request"

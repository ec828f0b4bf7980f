# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Upload acceptance rules: extension, declared MIME type and size."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from ticket_verifier.domain.tickets.exceptions import UploadPolicyError, UploadTooLargeError
from ticket_verifier.shared.logging import logger

_JPEG_TYPES = frozenset({"image/jpeg", "image/jpg", "image/pjpeg"})

DEFAULT_ALLOWED_TYPES: Mapping[str, frozenset[str]] = {
    "jpeg": _JPEG_TYPES,
    "jpg": _JPEG_TYPES,
    "png": frozenset({"image/png"}),
    "gif": frozenset({"image/gif"}),
}

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


def _extension_of(filename: str) -> str:
    _, ext = os.path.splitext(filename or "")
    return ext[1:].lower()


def _normalise_mimetype(mimetype: str | None) -> str:
    return (mimetype or "").split(";", 1)[0].strip().lower()


@dataclass(slots=True, frozen=True)
class UploadPolicy:
    max_bytes: int = DEFAULT_MAX_BYTES
    allowed_types: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: dict(DEFAULT_ALLOWED_TYPES)
    )

    def check_type(self, filename: str, mimetype: str | None) -> str:
        """Return the lower-cased extension if both extension and MIME type pass."""
        extension = _extension_of(filename)
        accepted = self.allowed_types.get(extension)
        declared = _normalise_mimetype(mimetype)
        if not accepted or declared not in accepted:
            logger.info(f"upload.policy: rejected ext={extension or '-'} mime={declared or '-'}")
            raise UploadPolicyError()
        return extension

    def check_size(self, size: int | None) -> None:
        if size is not None and size > self.max_bytes:
            logger.info(f"upload.policy: rejected size={size} cap={self.max_bytes}")
            raise UploadTooLargeError()

    def check(self, filename: str, mimetype: str | None, size: int | None = None) -> str:
        extension = self.check_type(filename, mimetype)
        self.check_size(size)
        return extension


__all__ = ["DEFAULT_ALLOWED_TYPES", "DEFAULT_MAX_BYTES", "UploadPolicy"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

# applied in order; bearer/authorization before the bare JWT rule
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(authorization\s*:\s*)(\S+(?:\s+\S+)?)", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(bearer\s+)([\w\-.]{20,})", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"\beyJ[\w\-]+\.[\w\-]+\.[\w\-]+"), "***JWT***"),
    (re.compile(r"((?:token|secret[_-]?key)\s*[:=]\s*['\"]?)([^'\"\s,}]{6,})", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(password(?:_hash)?\s*[:=]\s*['\"]?)([^'\"\s,}]+)", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"([a-z][a-z0-9+]*://[^:/@\s]+:)([^@\s]+)(@)", re.I), rf"\1{_REDACTED}\3"),
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-z]{2,})", re.I), r"***@\1"),
    (re.compile(r"(phone(?:_number)?\s*[:=]\s*['\"]?)(\+?[\d\s\-]{7,20})", re.I), r"\1***"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: masks the message in place and never drops the record."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["sanitize_message", "sanitize_record"]

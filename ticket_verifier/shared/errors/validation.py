# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def invalid_fields(exc: PydanticValidationError) -> list[str]:
    """Top-level field names pydantic rejected, in declaration order, without repeats."""
    seen: dict[str, None] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        seen.setdefault(str(loc[0]), None)
    return list(seen)


def raise_validation_error(exc: PydanticValidationError, *, message: str) -> NoReturn:
    raise ValidationError(message=message, context={"fields": invalid_fields(exc)}) from exc


__all__ = ["invalid_fields", "raise_validation_error"]

"""loguru setup shared by the app, the WSGI entry point and the tests."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _root_logger

from .sensitive_filter import sanitize_record

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")


def _attach_correlation_id(record: dict[str, Any]) -> None:
    record["extra"].setdefault("correlation_id", _correlation_id.get())


logger = _root_logger.patch(_attach_correlation_id)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


class _StdlibBridge(logging.Handler):
    """Forwards werkzeug/sqlalchemy stdlib records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _sinks(level: str) -> list[dict[str, Any]]:
    common = {
        "level": level,
        "format": _FORMAT,
        "backtrace": False,
        "diagnose": False,
        "filter": sanitize_record,
    }
    sinks: list[dict[str, Any]] = [{"sink": sys.stderr, "colorize": True, **common}]
    log_file = os.getenv("LOG_FILE")
    if log_file:
        Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        sinks.append(
            {"sink": log_file, "colorize": False, "enqueue": True, "encoding": "utf-8", **common}
        )
    return sinks


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Replace every loguru handler; stderr always, LOG_FILE when set. Safe to call repeatedly."""
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    _root_logger.configure(handlers=_sinks(level))

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Logging configuration for didkey.

Library modules only create module loggers. Handlers are installed by
:func:`configure_logging`, which the CLI calls once at start-up.

Records may carry did:key context through ``extra``:

    logger.info("Resolution failed", extra={"did": did, "error": exc})

``did`` is rendered by both formatters. ``error`` must be a
:class:`~didkey.core.exceptions.DidKeyException`; the JSON formatter emits its
``to_dict()`` so codes and details stay machine-readable.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .exceptions import DidKeyException

PACKAGE_LOGGER = "didkey"

# Logs every point decompression at DEBUG; held at INFO or above
CRYPTO_LOGGER = "didkey.crypto"


def _error_of(record: logging.LogRecord) -> DidKeyException | None:
    error = getattr(record, "error", None)
    if isinstance(error, DidKeyException):
        return error
    if record.exc_info and isinstance(record.exc_info[1], DidKeyException):
        return record.exc_info[1]
    return None


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with did:key context when present."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        did = getattr(record, "did", None)
        if did is not None:
            log_data["did"] = str(did)

        error = _error_of(record)
        if error is not None:
            log_data["error"] = error.to_dict()

        if record.levelno >= logging.WARNING:
            log_data["source"] = f"{record.module}:{record.lineno}"

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Terminal output: ``time level logger: message [did] (Error: ...)``."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__(fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S")
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        did = getattr(record, "did", None)
        if did is not None:
            line = f"{line} [{did}]"

        error = _error_of(record)
        if error is not None and record.exc_info is None:
            line = f"{line} ({type(error).__name__}: {error.message})"

        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{line}{self.RESET}" if color else line


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> logging.Logger:
    """Install stderr (and optional file) handlers for didkey.

    ``level`` applies to the ``didkey`` loggers only; other libraries stay at
    WARNING. ``didkey.crypto`` is held at INFO or above, so DEBUG shows
    resolution steps without one line per decompressed point.

    Unset arguments fall back to ``DIDKEY_LOG_LEVEL``, ``DIDKEY_LOG_FORMAT``
    (``json``/``text``, otherwise JSON when stderr is not a terminal) and
    ``DIDKEY_LOG_FILE``.

    Returns:
        The ``didkey`` package logger.
    """
    from .config import get_config

    config = get_config()

    level = config.log_level if level is None else level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if json_format is None:
        log_format = config.log_format.lower()
        json_format = log_format == "json" if log_format in ("json", "text") else not sys.stderr.isatty()

    log_file = config.log_file if log_file is None else log_file

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(JSONFormatter() if json_format else StandardFormatter())
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    logging.getLogger(CRYPTO_LOGGER).setLevel(max(level, logging.INFO))

    return package_logger

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Structured logging for the DAG engine.

Engine components log through get_engine_logger(); records are written to
stdout as JSON lines, or as plain text when configured for interactive use.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


# LogRecord attributes that are not user supplied `extra=` fields
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with `extra=` fields merged in"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable single-line records"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


_FORMATTERS = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def get_logger(name: str, log_level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """
    Get a logger writing to stdout in the given format.

    Calling it again for the same name replaces the handler rather than
    stacking a second one.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_FORMATTERS.get(log_format, JSONFormatter)())
    logger.handlers = [handler]
    return logger


def log_event(logger: logging.Logger, event: str, level: str = "INFO", **fields: Any) -> None:
    """Log `event` with `fields` attached as structured extras"""
    getattr(logger, level.lower())(event, extra=fields)


def get_engine_logger(component: str) -> logging.Logger:
    """Logger for an engine component (runner, loader...) using the configured level and format"""
    from dagengine.core.config import get_config
    config = get_config()
    return get_logger(f"dagengine.{component}", config.log_level, config.log_format)

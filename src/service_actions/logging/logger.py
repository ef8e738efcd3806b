"""Logging setup for command line runs.

Records are emitted to stderr, either as one JSON object per line or as a
single-line text format, and carry the run context injected by
``ContextFilter``. Configuration is declarative via ``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet


TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(run_id)s] %(message)s"

# Keys every LogRecord has; anything else arrived through ``extra=`` or a filter
_STANDARD_ATTRIBUTES: FrozenSet[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"asctime", "message"}

# OpenTelemetry logging instrumentation names
_TRACE_ATTRIBUTES = {"otelTraceID": "trace_id", "otelSpanID": "span_id"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, then context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRIBUTES or key in entry:
                continue
            entry[_TRACE_ATTRIBUTES.get(key, key)] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Configure the root logger.

    Logs go to stderr so that stdout stays free for the run summary.

    Args:
        level: Root log level name
        log_format: ``json`` or ``text``
    """
    level = level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "actions_json": {"()": "service_actions.logging.logger.CustomJsonFormatter"},
            "actions_text": {"format": TEXT_FORMAT},
        },
        "filters": {
            "actions_context": {"()": "service_actions.logging.filters.ContextFilter"},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "level": level,
                "formatter": "actions_text" if log_format == "text" else "actions_json",
                "filters": ["actions_context"],
            },
        },
        "root": {"level": level, "handlers": ["stderr"]},
    })

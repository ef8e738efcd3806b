"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of every log line emitted during one catalog run.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional
from service_actions.__version__ import __version__

run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)
run_mode_var: ContextVar[Optional[str]] = ContextVar("run_mode", default=None)

_static_environment: Optional[str] = None
_static_extra: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds run context variables to log records.

    Static context (environment, extra attributes) is set once per process
    with ``set_logging_context``; run context (run id, mode) is set per run
    with ``set_run_context``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "run_id", run_id_var.get())
        setattr(record, "run_mode", run_mode_var.get())
        setattr(record, "tool_name", "service-actions")
        setattr(record, "tool_version", __version__)

        if _static_environment is not None:
            setattr(record, "environment", _static_environment)
        for key, value in _static_extra.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Set process-wide static attributes added to every record."""
    global _static_environment, _static_extra
    _static_environment = environment
    _static_extra = dict(extra or {})


def set_run_context(
    run_id: Optional[str] = None,
    run_mode: Optional[str] = None,
) -> None:
    """Set run context variables."""
    if run_id is not None:
        run_id_var.set(run_id)
    if run_mode is not None:
        run_mode_var.set(run_mode)


def clear_run_context() -> None:
    """Clear all run context variables."""
    run_id_var.set(None)
    run_mode_var.set(None)

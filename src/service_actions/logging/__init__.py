"""Logging infrastructure for service action tracking.

This module provides structured logging with JSON output and per-run
context tracking, configured declaratively via ``logging.config.dictConfig``.
"""

from service_actions.logging.filters import ContextFilter
from service_actions.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]

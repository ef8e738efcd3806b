"""Utility functions and helpers for service action tracking."""

from service_actions.utils.datetime import (
    get_current_timestamp,
    get_history_date,
)
from service_actions.utils.decorators import traced

__all__ = [
    # DateTime utilities
    "get_current_timestamp",
    "get_history_date",
    # Decorators
    "traced",
]

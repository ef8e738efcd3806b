"""Common exceptions for service action tracking.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are ActionsError
    instances carrying an ErrorCode and structured details.

    Errors are either fatal (the run aborts before anything partial is
    written) or recoverable (the caller records a warning and continues).
    Malformed operation records and unreadable snapshots are recoverable;
    source, history and commit failures are fatal.
"""

from service_actions.common.exceptions import (
    ActionsError,
    ErrorCode,
    # Helper functions
    configuration_error,
    unsorted_snapshot_error,
    source_unavailable_error,
    malformed_operation_error,
    snapshot_unreadable_error,
    history_write_error,
    commit_write_error,
    export_write_error,
)

__all__ = [
    # Base Exception and Error Codes
    "ActionsError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "unsorted_snapshot_error",
    "source_unavailable_error",
    "malformed_operation_error",
    "snapshot_unreadable_error",
    "history_write_error",
    "commit_write_error",
    "export_write_error",
]

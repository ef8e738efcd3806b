import logging
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for service action tracking.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has a specific prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Input validation errors
        SOURCE_*: Catalog source (Azure Resource Manager) errors
        DATA_*: Record and snapshot content errors
        WRITE_*: Destination file errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    UNSORTED_SNAPSHOT = "VALIDATION_002"

    # Source errors
    SOURCE_UNAVAILABLE = "SOURCE_001"

    # Data errors
    MALFORMED_OPERATION = "DATA_001"
    SNAPSHOT_UNREADABLE = "DATA_002"

    # Write errors
    HISTORY_WRITE_FAILURE = "WRITE_001"
    COMMIT_WRITE_FAILURE = "WRITE_002"
    EXPORT_WRITE_FAILURE = "WRITE_003"


class ActionsError(Exception):
    """Base exception for all service action tracking errors.

    This exception class uses error codes for categorization
    instead of creating numerous specific exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        fatal: Whether the error aborts the run. Non-fatal errors are
            turned into warnings by the caller and the run continues.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        fatal: bool = True
    ):
        """Initialize the error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
            fatal: Whether the error aborts the run
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.fatal = fatal

        # Lazy import to avoid circular dependency
        from service_actions.logging import get_logger
        logger = get_logger(__name__)
        logger.log(
            logging.ERROR if fatal else logging.WARNING,
            message,
            extra={"error_code": error_code.value, "details": self.details, "fatal": fatal},
            exc_info=cause is not None and fatal,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "fatal": self.fatal
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "ActionsError":
        """Create exception from error code.

        Per-record data problems are recoverable by default, everything
        else aborts the run unless the caller says otherwise.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for ActionsError

        Returns:
            ActionsError instance
        """
        if error_code in [
            ErrorCode.MALFORMED_OPERATION,
            ErrorCode.SNAPSHOT_UNREADABLE,
        ]:
            kwargs.setdefault('fatal', False)

        return cls(message=message, error_code=error_code, **kwargs)


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> ActionsError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        ActionsError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return ActionsError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def unsorted_snapshot_error(
    side: str,
    previous_key: str,
    next_key: str,
    **kwargs
) -> ActionsError:
    """Create an error for operation sets that are not sorted by key.

    Args:
        side: Which input was unsorted ("previous" or "current")
        previous_key: Key that should have come later
        next_key: Key found after it
        **kwargs: Additional error details

    Returns:
        ActionsError with UNSORTED_SNAPSHOT code
    """
    details = kwargs.get('details', {})
    details.update({"side": side, "previous_key": previous_key, "next_key": next_key})

    return ActionsError(
        message=f"The {side} operation set is not sorted by operation: "
                f"'{previous_key}' precedes '{next_key}'",
        error_code=ErrorCode.UNSORTED_SNAPSHOT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def source_unavailable_error(
    message: str,
    url: Optional[str] = None,
    status_code: Optional[int] = None,
    **kwargs
) -> ActionsError:
    """Create an error for an unreachable or empty catalog source.

    Args:
        message: Error message
        url: Request URL that failed
        status_code: HTTP status code, if a response was received
        **kwargs: Additional error details

    Returns:
        ActionsError with SOURCE_UNAVAILABLE code
    """
    details = kwargs.get('details', {})
    if url:
        details["url"] = url
    if status_code is not None:
        details["status_code"] = status_code

    return ActionsError(
        message=message,
        error_code=ErrorCode.SOURCE_UNAVAILABLE,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def malformed_operation_error(
    operation: str,
    namespace: Optional[str] = None,
    **kwargs
) -> ActionsError:
    """Create a non-fatal error for an operation string without '/'.

    Args:
        operation: The offending operation string
        namespace: Provider namespace the record was listed under
        **kwargs: Additional error details

    Returns:
        ActionsError with MALFORMED_OPERATION code, fatal=False
    """
    details = kwargs.get('details', {})
    details["operation"] = operation
    if namespace:
        details["namespace"] = namespace

    return ActionsError(
        message=f"Skipped malformed operation '{operation}': expected '<provider>/<resource>/<action>'",
        error_code=ErrorCode.MALFORMED_OPERATION,
        details=details,
        fatal=False,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'fatal']}
    )


def snapshot_unreadable_error(
    path: str,
    reason: str,
    **kwargs
) -> ActionsError:
    """Create a non-fatal error for a snapshot file that could not be fully read.

    Args:
        path: Snapshot file path
        reason: What was wrong with the file
        **kwargs: Additional error details

    Returns:
        ActionsError with SNAPSHOT_UNREADABLE code, fatal=False
    """
    details = kwargs.get('details', {})
    details["path"] = path

    return ActionsError(
        message=f"Snapshot {path}: {reason}",
        error_code=ErrorCode.SNAPSHOT_UNREADABLE,
        details=details,
        fatal=False,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'fatal']}
    )


def history_write_error(
    path: str,
    original_error: Exception,
    **kwargs
) -> ActionsError:
    """Create a history log write error.

    Args:
        path: History log path
        original_error: The underlying exception

    Returns:
        ActionsError with HISTORY_WRITE_FAILURE code
    """
    details = kwargs.get('details', {})
    details["path"] = path

    return ActionsError(
        message=f"Failed to append to history log {path}: {str(original_error)}",
        error_code=ErrorCode.HISTORY_WRITE_FAILURE,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def commit_write_error(
    paths: list,
    original_error: Exception,
    **kwargs
) -> ActionsError:
    """Create a snapshot commit error.

    Args:
        paths: Destination paths of the commit
        original_error: The underlying exception

    Returns:
        ActionsError with COMMIT_WRITE_FAILURE code
    """
    details = kwargs.get('details', {})
    details["paths"] = [str(p) for p in paths]

    return ActionsError(
        message=f"Failed to commit snapshot: {str(original_error)}",
        error_code=ErrorCode.COMMIT_WRITE_FAILURE,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def export_write_error(
    path: str,
    original_error: Exception,
    **kwargs
) -> ActionsError:
    """Create a table export error.

    Args:
        path: Destination path of the export
        original_error: The underlying exception

    Returns:
        ActionsError with EXPORT_WRITE_FAILURE code
    """
    details = kwargs.get('details', {})
    details["path"] = path

    return ActionsError(
        message=f"Failed to write {path}: {str(original_error)}",
        error_code=ErrorCode.EXPORT_WRITE_FAILURE,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )

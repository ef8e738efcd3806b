"""Date helpers for history entries and export notes."""

from datetime import date, datetime, timezone
from typing import Optional


HISTORY_DATE_FORMAT = "%Y-%m-%d"


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)


def get_history_date(moment: Optional[date] = None) -> str:
    """Format the date stamped on a history entry.

    Args:
        moment: Date or datetime to format, defaults to today (UTC)

    Returns:
        Date string in format 'YYYY-MM-DD'
    """
    if moment is None:
        moment = get_current_timestamp()
    return moment.strftime(HISTORY_DATE_FORMAT)

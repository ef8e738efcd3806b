"""History log rendering and appending.

The history log is a cumulative, append-only text file. Each run adds one
entry; the banner is written only when the file is first created.
"""

import os
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from service_actions.common.exceptions import history_write_error
from service_actions.constants import HISTORY_BANNER, HISTORY_DIVIDER, HISTORY_TEXT_LAYOUT
from service_actions.export.text import format_fixed_width
from service_actions.logging import get_logger
from service_actions.types import DeltaEntry, DeltaStatus, OperationRecord, ServiceNameDelta
from .differ import count_by_status

logger = get_logger(__name__)


def _delta_table(title: str, entries: Sequence[DeltaEntry]) -> List[str]:
    rows = (
        (entry.operation, str(entry.record.is_data_action), entry.record.description)
        for entry in entries
    )
    return [f"{title} ({len(entries)}):", *format_fixed_width(rows, HISTORY_TEXT_LAYOUT), ""]


def _name_list(title: str, names: Sequence[str]) -> List[str]:
    if not names:
        return [f"{title} (none)"]
    return [title, *(f"    {name}" for name in names)]


def render_history_entry(
    date: str,
    current_operations: Iterable[OperationRecord],
    service_name_delta: ServiceNameDelta,
    operation_delta: Sequence[DeltaEntry],
    source_warnings: Sequence[str] = (),
) -> str:
    """Render one history log entry.

    Args:
        date: Run date, ``YYYY-MM-DD``
        current_operations: Current Operations record set, placeholders included
        service_name_delta: Provider names that appeared or disappeared
        operation_delta: Output of ``compute_operation_delta``
        source_warnings: Warnings raised while extracting, copied verbatim

    Returns:
        The entry text, ending with a newline
    """
    current_operations = tuple(current_operations)
    total = sum(1 for record in current_operations if not record.is_placeholder)
    providers = len({record.provider_name.lower() for record in current_operations})
    new_count, deprecated_count = count_by_status(operation_delta)

    lines = [
        HISTORY_DIVIDER,
        f"{date}: {total} actions across {providers} services. "
        f"{new_count + deprecated_count} changes: {new_count} new; {deprecated_count} deprecated.",
    ]
    if source_warnings:
        lines.append("Warnings:")
        lines.extend(f"    {warning}" for warning in source_warnings)
    lines.append("")
    lines.extend(_name_list("New service names:", service_name_delta.new))
    lines.extend(_name_list("Deprecated service names:", service_name_delta.deprecated))
    lines.append("")

    deprecated = [e for e in operation_delta if e.status is DeltaStatus.DEPRECATED]
    new = [e for e in operation_delta if e.status is DeltaStatus.NEW]
    lines.extend(_delta_table("Deprecated actions", deprecated))
    lines.extend(_delta_table("New actions", new))

    return "\n".join(lines) + "\n"


def append_history(
    path: Union[str, Path],
    entry: str,
    banner: str = HISTORY_BANNER,
) -> None:
    """Append an entry to the history log, creating it with a banner.

    Prior content is never rewritten. The banner and entry go out in a
    single write.

    Raises:
        ActionsError: HISTORY_WRITE_FAILURE if the file cannot be written
    """
    path = Path(path)
    try:
        text = entry if path.exists() and path.stat().st_size > 0 else banner + entry
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8", newline="") as stream:
            stream.write(text)
            stream.flush()
            os.fsync(stream.fileno())
    except OSError as e:
        raise history_write_error(str(path), e) from e

    logger.info(f"Appended history entry to {path}")

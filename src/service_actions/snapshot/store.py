"""Operations snapshot persistence.

The stored snapshot is the Operations table CSV of the previous committed
run. Loading is forgiving: a missing file is an empty snapshot and a damaged
one yields whatever rows could be parsed plus warnings. Committing replaces
the stored tables all or nothing.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from service_actions.common.exceptions import (
    ActionsError,
    commit_write_error,
    snapshot_unreadable_error,
)
from service_actions.constants import (
    FEATURES_TEXT_LAYOUT,
    NO_OPERATIONS_NAME,
    OPERATIONS_TEXT_LAYOUT,
    SERVICES_TEXT_LAYOUT,
)
from service_actions.export import (
    features_frame,
    frame_to_csv,
    operations_frame,
    render_frame_text,
    services_frame,
    write_atomically,
)
from service_actions.logging import get_logger
from service_actions.types import (
    ActionsBaseModel,
    FeatureRecord,
    OperationRecord,
    ServiceRecord,
    parse_provider_name,
)
from service_actions.utils.decorators import traced

logger = get_logger(__name__)

PathLike = Union[str, Path]


class SnapshotLoad(ActionsBaseModel):
    """Records read from a stored snapshot, plus problems met while reading."""

    records: Tuple[OperationRecord, ...] = ()
    warnings: Tuple[str, ...] = ()


def text_rendering_path(csv_path: PathLike) -> Path:
    """Path of the fixed-width rendering written beside a CSV table."""
    return Path(csv_path).with_suffix(".txt")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def _row_to_record(row: Dict[str, str]) -> Optional[OperationRecord]:
    """Convert one CSV row; ``None`` for the note row and blank rows."""
    operation = row.get("Operation", "").strip()
    resource_name = row.get("ResourceName", "")
    if not operation:
        if not resource_name or row.get("OperationName") != NO_OPERATIONS_NAME:
            return None
        return OperationRecord(
            namespace=row.get("ProviderNamespace", ""),
            provider_name=resource_name,
            operation_name=NO_OPERATIONS_NAME,
            resource_name=resource_name,
            description=row.get("Description", ""),
        )

    return OperationRecord(
        namespace=row.get("ProviderNamespace", ""),
        provider_name=parse_provider_name(operation),
        operation=operation,
        operation_name=row.get("OperationName", ""),
        resource_name=resource_name,
        description=row.get("Description", ""),
        is_data_action=_parse_bool(row.get("IsDataAction", "")),
    )


@traced(
    span_name="service_actions.snapshot.load",
    attribute_getter=lambda path: {"snapshot.path": str(path)},
)
def load_operations_snapshot(path: PathLike) -> SnapshotLoad:
    """Load a stored Operations snapshot.

    Args:
        path: Operations table CSV

    Returns:
        SnapshotLoad with the parsed records in file order and any warnings.
        A missing file gives an empty snapshot without warnings.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No snapshot at {path}; every current operation will be reported as new")
        return SnapshotLoad()

    bad_lines: List[List[str]] = []

    def _collect_bad_line(line: List[str]) -> None:
        bad_lines.append(line)
        return None

    try:
        frame = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8",
            engine="python",
            on_bad_lines=_collect_bad_line,
        )
    except pd.errors.EmptyDataError:
        error = snapshot_unreadable_error(str(path), "file is empty")
        return SnapshotLoad(warnings=(error.message,))
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        error = snapshot_unreadable_error(str(path), f"could not be parsed ({e})", cause=e)
        return SnapshotLoad(warnings=(error.message,))

    warnings: List[str] = []
    if bad_lines:
        error = snapshot_unreadable_error(str(path), f"skipped {len(bad_lines)} malformed line(s)")
        warnings.append(error.message)

    if "Operation" not in frame.columns:
        error = snapshot_unreadable_error(str(path), "no Operation column; treating it as empty")
        warnings.append(error.message)
        return SnapshotLoad(warnings=tuple(warnings))

    frame = frame.fillna("")
    records: List[OperationRecord] = []
    for row in frame.to_dict(orient="records"):
        try:
            record = _row_to_record(row)
        except ActionsError as e:
            warnings.append(f"Snapshot {path}: {e.message}")
            continue
        if record is not None:
            records.append(record)

    logger.info(f"Loaded {len(records)} records from snapshot {path}")
    return SnapshotLoad(records=tuple(records), warnings=tuple(warnings))


@traced(span_name="service_actions.snapshot.commit")
def commit(
    operations: Sequence[OperationRecord],
    operations_path: PathLike,
    services: Optional[Sequence[ServiceRecord]] = None,
    services_path: Optional[PathLike] = None,
    features: Optional[Sequence[FeatureRecord]] = None,
    features_path: Optional[PathLike] = None,
    note: Optional[str] = None,
) -> List[Path]:
    """Replace the stored snapshot and, optionally, the Services and Features tables.

    Each table is written as CSV with a fixed-width ``.txt`` rendering
    beside it. Nothing is replaced unless every file could be written.

    Args:
        operations: Current Operations record set
        operations_path: Destination of the Operations snapshot
        services: Optional Services record set
        services_path: Destination of the Services table
        features: Optional Features record set
        features_path: Destination of the Features table
        note: Optional note row text for the Operations table

    Returns:
        Paths written

    Raises:
        ActionsError: COMMIT_WRITE_FAILURE; no destination is modified
    """
    frames = [(operations_frame(operations, note=note), operations_path, OPERATIONS_TEXT_LAYOUT)]
    if services is not None and services_path:
        frames.append((services_frame(services), services_path, SERVICES_TEXT_LAYOUT))
    if features is not None and features_path:
        frames.append((features_frame(features), features_path, FEATURES_TEXT_LAYOUT))

    contents: Dict[PathLike, str] = {}
    for frame, csv_path, layout in frames:
        contents[Path(csv_path)] = frame_to_csv(frame)
        contents[text_rendering_path(csv_path)] = render_frame_text(frame, layout)

    try:
        written = write_atomically(contents)
    except OSError as e:
        raise commit_write_error(list(contents), e) from e

    logger.info(f"Committed {len(written)} files: {', '.join(os.fspath(p) for p in written)}")
    return written

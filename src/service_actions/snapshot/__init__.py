"""Snapshot Differ: delta computation, history log and snapshot store."""

from .differ import (
    compute_operation_delta,
    compute_service_name_delta,
    count_by_status,
    sort_by_operation,
)
from .history import append_history, render_history_entry
from .store import SnapshotLoad, commit, load_operations_snapshot, text_rendering_path

__all__ = [
    "compute_operation_delta",
    "compute_service_name_delta",
    "count_by_status",
    "sort_by_operation",
    "append_history",
    "render_history_entry",
    "SnapshotLoad",
    "commit",
    "load_operations_snapshot",
    "text_rendering_path",
]

from service_actions.__version__ import __version__

from service_actions.api import RunOptions, RunResult, run_catalog
from service_actions.catalog import (
    extract_catalog,
    extract_features,
    extract_operations,
    extract_services,
)
from service_actions.snapshot import (
    append_history,
    commit,
    compute_operation_delta,
    compute_service_name_delta,
    load_operations_snapshot,
    render_history_entry,
)
from service_actions.types import (
    DeltaEntry,
    DeltaStatus,
    FeatureRecord,
    OperationRecord,
    ServiceNameDelta,
    ServiceRecord,
)

from service_actions.common.exceptions import ActionsError, ErrorCode


__all__ = [
    "__version__",

    "RunOptions",
    "RunResult",
    "run_catalog",

    "extract_catalog",
    "extract_features",
    "extract_operations",
    "extract_services",

    "append_history",
    "commit",
    "compute_operation_delta",
    "compute_service_name_delta",
    "load_operations_snapshot",
    "render_history_entry",

    "DeltaEntry",
    "DeltaStatus",
    "FeatureRecord",
    "OperationRecord",
    "ServiceNameDelta",
    "ServiceRecord",

    # Exceptions (public API)
    "ActionsError",
    "ErrorCode",
]

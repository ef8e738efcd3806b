"""Run orchestration.

One invocation extracts the catalog once, then, depending on the mode,
either writes a single table (services or features only) or diffs the
Operations snapshot against the stored one, appends the history entry and
optionally commits.
"""

import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import model_validator

from service_actions.catalog import extract_catalog, extract_features, extract_services
from service_actions.common.exceptions import (
    configuration_error,
    export_write_error,
    source_unavailable_error,
)
from service_actions.constants import (
    FEATURES_TEXT_LAYOUT,
    SERVICES_TEXT_LAYOUT,
    RunMode,
)
from service_actions.export import (
    build_note,
    features_frame,
    frame_to_csv,
    render_frame_text,
    services_frame,
    write_atomically,
)
from service_actions.logging import get_logger
from service_actions.logging.filters import clear_run_context, set_run_context
from service_actions.protocols import CatalogSource, ProgressObserver
from service_actions.snapshot import (
    append_history,
    commit,
    compute_operation_delta,
    compute_service_name_delta,
    count_by_status,
    load_operations_snapshot,
    render_history_entry,
    sort_by_operation,
    text_rendering_path,
)
from service_actions.types import ActionsBaseModel
from service_actions.utils import get_history_date

logger = get_logger(__name__)


class RunOptions(ActionsBaseModel):
    """Effective options of one run: settings with command line overrides applied."""

    input_snapshot_path: str = "AzureServiceActions.csv"
    output_snapshot_path: Optional[str] = None
    history_log_path: str = "AzureHistory.txt"
    services_path: str = "AzureServices.csv"
    features_path: str = "AzureServiceFeatures.csv"
    commit: bool = False
    services_only: bool = False
    features_only: bool = False
    add_note: bool = False
    scan_documentation: bool = False

    @model_validator(mode="after")
    def check_exclusive_modes(self) -> "RunOptions":
        if self.services_only and self.features_only:
            raise configuration_error(
                "services_only and features_only cannot be combined",
                config_key="services_only",
            )
        return self

    @classmethod
    def from_settings(cls, settings: Any = None, **overrides: Any) -> "RunOptions":
        """Build options from the settings singleton plus explicit overrides.

        Overrides that are ``None`` are ignored, so unset command line flags
        fall through to the configured values.
        """
        if settings is None:
            from service_actions.settings import get_settings
            settings = get_settings()

        output = settings.output
        values: Dict[str, Any] = {
            "input_snapshot_path": output.input_snapshot_path,
            "output_snapshot_path": output.output_snapshot_path,
            "history_log_path": output.history_log_path,
            "services_path": output.services_path,
            "features_path": output.features_path,
            "commit": output.commit,
            "add_note": output.add_note,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def mode(self) -> RunMode:
        if self.services_only:
            return RunMode.SERVICES_ONLY
        if self.features_only:
            return RunMode.FEATURES_ONLY
        return RunMode.FULL

    @property
    def effective_output_snapshot_path(self) -> str:
        return self.output_snapshot_path or self.input_snapshot_path


class RunResult(ActionsBaseModel):
    """Summary of a completed run."""

    run_id: str
    mode: RunMode
    date: str
    operation_count: int = 0
    provider_count: int = 0
    feature_count: int = 0
    new_count: int = 0
    deprecated_count: int = 0
    service_names_added: Tuple[str, ...] = ()
    service_names_removed: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    history_path: Optional[str] = None
    committed: bool = False
    written_paths: Tuple[str, ...] = ()

    @property
    def change_count(self) -> int:
        return self.new_count + self.deprecated_count


def _write_table(frame, csv_path: str, layout) -> List[Path]:
    contents = {
        Path(csv_path): frame_to_csv(frame),
        text_rendering_path(csv_path): render_frame_text(frame, layout),
    }
    try:
        return write_atomically(contents)
    except OSError as e:
        raise export_write_error(csv_path, e) from e


def _list_operations(source: CatalogSource):
    raw_operations = tuple(source.list_provider_operations())
    if not raw_operations:
        raise source_unavailable_error("The catalog source returned no operations")
    return raw_operations


def _run_features_only(options: RunOptions, source: CatalogSource, run_id: str, date: str) -> RunResult:
    features = extract_features(source.list_provider_features())
    written = _write_table(features_frame(features.records), options.features_path, FEATURES_TEXT_LAYOUT)
    return RunResult(
        run_id=run_id,
        mode=RunMode.FEATURES_ONLY,
        date=date,
        feature_count=len(features.records),
        written_paths=tuple(str(p) for p in written),
    )


def _run_services_only(
    options: RunOptions,
    source: CatalogSource,
    observer: Optional[ProgressObserver],
    run_id: str,
    date: str,
) -> RunResult:
    raw_operations = _list_operations(source)
    services = extract_services(raw_operations, source.list_provider_features(), observer)
    written = _write_table(services_frame(services.records), options.services_path, SERVICES_TEXT_LAYOUT)
    return RunResult(
        run_id=run_id,
        mode=RunMode.SERVICES_ONLY,
        date=date,
        provider_count=len(services.records),
        warnings=services.warnings,
        written_paths=tuple(str(p) for p in written),
    )


def _run_full(
    options: RunOptions,
    source: CatalogSource,
    observer: Optional[ProgressObserver],
    run_id: str,
    date: str,
) -> RunResult:
    raw_operations = _list_operations(source)
    extraction = extract_catalog(raw_operations, source.list_provider_features(), observer)
    current = extraction.operations.records

    previous = load_operations_snapshot(options.input_snapshot_path)
    warnings = tuple(dict.fromkeys(extraction.warnings + previous.warnings))

    name_delta = compute_service_name_delta(previous.records, current)
    delta = compute_operation_delta(sort_by_operation(previous.records), sort_by_operation(current))
    new_count, deprecated_count = count_by_status(delta)

    entry = render_history_entry(date, current, name_delta, delta, warnings)
    append_history(options.history_log_path, entry)

    logger.info(
        f"{new_count + deprecated_count} changes since the stored snapshot: "
        f"{new_count} new; {deprecated_count} deprecated"
    )

    written: List[Path] = []
    provider_count = len({record.provider_name.lower() for record in current})
    if options.commit:
        note = None
        if options.add_note:
            note = build_note(date, extraction.operations.operation_count, provider_count)
        written = commit(
            current,
            options.effective_output_snapshot_path,
            services=extraction.services.records,
            services_path=options.services_path,
            features=extraction.features.records,
            features_path=options.features_path,
            note=note,
        )
    else:
        logger.info("Dry run: the stored snapshot was left unchanged")

    return RunResult(
        run_id=run_id,
        mode=RunMode.FULL,
        date=date,
        operation_count=extraction.operations.operation_count,
        provider_count=provider_count,
        feature_count=len(extraction.features.records),
        new_count=new_count,
        deprecated_count=deprecated_count,
        service_names_added=name_delta.new,
        service_names_removed=name_delta.deprecated,
        warnings=warnings,
        history_path=options.history_log_path,
        committed=options.commit,
        written_paths=tuple(str(p) for p in written),
    )


def run_catalog(
    options: RunOptions,
    source: CatalogSource,
    observer: Optional[ProgressObserver] = None,
    *,
    date: Optional[str] = None,
) -> RunResult:
    """Run one catalog extraction and, in full mode, the snapshot diff.

    Args:
        options: Effective run options
        source: Catalog source to pull from
        observer: Optional progress observer
        date: History entry date, ``YYYY-MM-DD``; today (UTC) when omitted

    Returns:
        RunResult summarizing what was found and written

    Raises:
        ActionsError: SOURCE_UNAVAILABLE before any file is touched,
            HISTORY_WRITE_FAILURE, COMMIT_WRITE_FAILURE or EXPORT_WRITE_FAILURE
    """
    run_id = str(uuid.uuid4())
    mode = options.mode
    date = date or get_history_date()
    set_run_context(run_id=run_id, run_mode=mode.value)
    try:
        logger.info(f"Starting {mode.value} run {run_id}")
        if options.scan_documentation:
            logger.warning("Documentation scanning is not supported; the option is ignored")

        if mode is RunMode.FEATURES_ONLY:
            result = _run_features_only(options, source, run_id, date)
        elif mode is RunMode.SERVICES_ONLY:
            result = _run_services_only(options, source, observer, run_id, date)
        else:
            result = _run_full(options, source, observer, run_id, date)

        logger.info(f"Finished {mode.value} run {run_id}")
        return result
    finally:
        clear_run_context()

"""Command line entry point: ``service-actions``.

Usage:
  service-actions                       # diff against the stored snapshot, dry run
  service-actions --commit              # diff, then replace the stored snapshot
  service-actions --services-only       # write the Services table only
  service-actions --features-only       # write the Features table only
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from service_actions.api import RunOptions, run_catalog
from service_actions.common.exceptions import ActionsError
from service_actions.constants import LogFormat
from service_actions.logging import get_logger, setup_logging
from service_actions.logging.filters import set_logging_context
from service_actions.settings import get_settings
from service_actions.source import get_catalog_source

logger = get_logger(__name__)


class LoggingProgressObserver:
    """Logs extraction progress in quarter steps per activity."""

    def __init__(self, step_percent: int = 25):
        self.step_percent = step_percent
        self._last_step: Dict[str, int] = {}

    def update(self, activity: str, completed: int, total: int) -> None:
        if total <= 0:
            return
        step = (completed * 100 // total) // self.step_percent
        if step > self._last_step.get(activity, 0):
            self._last_step[activity] = step
            logger.info(f"Extracting {activity}: {completed}/{total} ({completed * 100 // total}%)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="service-actions",
        description="Track new and deprecated Azure resource provider operations.",
    )
    parser.add_argument("--input-snapshot", dest="input_snapshot_path",
                        help="Operations snapshot of the previous run")
    parser.add_argument("--output-snapshot", dest="output_snapshot_path",
                        help="Where --commit writes the current snapshot (default: input snapshot)")
    parser.add_argument("--history", dest="history_log_path",
                        help="Append-only history log")
    parser.add_argument("--services-path", dest="services_path",
                        help="Services table export")
    parser.add_argument("--features-path", dest="features_path",
                        help="Features table export")
    parser.add_argument("--commit", action="store_true", default=None,
                        help="Replace the stored snapshot (default: dry run)")
    parser.add_argument("--services-only", action="store_true", default=None,
                        help="Only write the Services table")
    parser.add_argument("--features-only", action="store_true", default=None,
                        help="Only write the Features table")
    parser.add_argument("--add-note", action="store_true", default=None,
                        help="Prepend a note row to the Operations table")
    parser.add_argument("--scan-documentation", action="store_true", default=None,
                        help="Reserved; has no effect")
    parser.add_argument("--subscription-id",
                        help="Subscription used to list feature registrations")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper)
    parser.add_argument("--log-format", choices=[f.value for f in LogFormat])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"service-actions: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level=args.log_level or settings.log_level,
        log_format=args.log_format or settings.log_format.value,
    )
    set_logging_context(environment=settings.app_env)

    try:
        options = RunOptions.from_settings(
            settings,
            input_snapshot_path=args.input_snapshot_path,
            output_snapshot_path=args.output_snapshot_path,
            history_log_path=args.history_log_path,
            services_path=args.services_path,
            features_path=args.features_path,
            commit=args.commit,
            services_only=args.services_only,
            features_only=args.features_only,
            add_note=args.add_note,
            scan_documentation=args.scan_documentation,
        )

        source_settings = settings.source
        if args.subscription_id:
            source_settings = source_settings.model_copy(update={"subscription_id": args.subscription_id})
        source = get_catalog_source(source_settings)
        try:
            result = run_catalog(options, source, LoggingProgressObserver())
        finally:
            source.close()
    except ActionsError as e:
        if not e.fatal:
            raise
        print(f"service-actions: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

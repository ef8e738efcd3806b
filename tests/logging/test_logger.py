import json
import logging

from service_actions.logging.filters import ContextFilter, clear_run_context, set_run_context
from service_actions.logging.logger import CustomJsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="service_actions.snapshot",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Skipped %d line(s)",
        args=(2,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_and_extras():
    set_run_context(run_id="run-7", run_mode="full")
    try:
        record = _record(error_code="DATA_002")
        ContextFilter().filter(record)
        payload = json.loads(CustomJsonFormatter().format(record))
    finally:
        clear_run_context()

    assert payload["message"] == "Skipped 2 line(s)"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "service_actions.snapshot"
    assert payload["run_id"] == "run-7"
    assert payload["error_code"] == "DATA_002"
    assert "timestamp" in payload

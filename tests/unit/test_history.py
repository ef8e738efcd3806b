"""Tests for history entry rendering and the append-only history log."""

import pytest

from service_actions.common.exceptions import ActionsError, ErrorCode
from service_actions.constants import HISTORY_BANNER, HISTORY_DIVIDER
from service_actions.snapshot import (
    append_history,
    compute_operation_delta,
    compute_service_name_delta,
    render_history_entry,
    sort_by_operation,
)
from service_actions.types import OperationRecord, ServiceRecord


def _op(operation: str, is_data_action: bool = False, description: str = "") -> OperationRecord:
    return OperationRecord(
        namespace="Test Namespace",
        provider_name=operation.split("/")[0],
        operation=operation,
        description=description,
        is_data_action=is_data_action,
    )


@pytest.fixture
def previous():
    return sort_by_operation([
        _op("Microsoft.Compute/virtualMachines/read"),
        _op("Microsoft.Retired/things/read", description="Read a retired thing"),
    ])


@pytest.fixture
def current():
    return sort_by_operation([
        _op("Microsoft.Compute/virtualMachines/read"),
        _op("Microsoft.Compute/virtualMachines/start/action", description="Starts a VM"),
        _op("Microsoft.Storage/storageAccounts/blobServices/containers/blobs/read", True, "Reads a blob"),
        OperationRecord.placeholder(ServiceRecord(namespace="-", provider_name="Microsoft.Quantum")),
    ])


def _entry(previous, current, warnings=()):
    return render_history_entry(
        "2024-05-01",
        current,
        compute_service_name_delta(previous, current),
        compute_operation_delta(previous, current),
        warnings,
    )


class TestRenderHistoryEntry:
    """Test the text of one history entry."""

    def test_summary_line(self, previous, current):
        lines = _entry(previous, current).splitlines()

        assert lines[0] == HISTORY_DIVIDER
        assert lines[1] == (
            "2024-05-01: 3 actions across 3 services. 3 changes: 2 new; 1 deprecated."
        )

    def test_provider_count_ignores_case(self):
        current = [
            _op("Microsoft.Insights/alertRules/read"),
            _op("microsoft.insights/metrics/read"),
        ]

        text = render_history_entry("2024-05-01", current, compute_service_name_delta([], current), (), ())

        assert "2024-05-01: 2 actions across 1 services." in text

    def test_service_name_lists(self, previous, current):
        text = _entry(previous, current)

        assert "New service names:\n    Microsoft.Quantum\n    Microsoft.Storage\n" in text
        assert "Deprecated service names:\n    Microsoft.Retired\n" in text

    def test_empty_name_lists(self, current):
        text = _entry(current, current)

        assert "New service names: (none)" in text
        assert "Deprecated service names: (none)" in text
        assert "0 changes: 0 new; 0 deprecated." in text

    def test_deprecated_table_precedes_new_table(self, previous, current):
        text = _entry(previous, current)

        deprecated_at = text.index("Deprecated actions (1):")
        new_at = text.index("New actions (2):")
        assert deprecated_at < new_at
        assert text.index("Microsoft.Retired/things/read") < new_at
        assert text.index("Microsoft.Compute/virtualMachines/start/action") > new_at

    def test_tables_have_header_and_underline(self, previous, current):
        lines = _entry(previous, current).splitlines()

        header_at = lines.index("New actions (2):") + 1
        assert lines[header_at].startswith("Operation")
        assert lines[header_at].split() == ["Operation", "IsDataAction", "Description"]
        assert lines[header_at + 1].split() == ["---------", "------------", "-----------"]

    def test_data_action_and_description_columns(self, previous, current):
        row = next(
            line for line in _entry(previous, current).splitlines()
            if line.startswith("Microsoft.Storage/storageAccounts/blobServices/containers/blobs/read")
        )
        assert row.split()[1:] == ["True", "Reads", "a", "blob"]

    def test_warnings_are_copied_verbatim(self, previous, current):
        warning = "Skipped malformed operation 'badstring': expected '<provider>/<resource>/<action>'"

        text = _entry(previous, current, warnings=(warning,))

        assert f"    {warning}\n" in text


class TestAppendHistory:
    """Test the append-only history log."""

    def test_banner_written_once_across_two_runs(self, tmp_path, previous, current):
        log = tmp_path / "AzureHistory.txt"
        first = _entry(previous, current)
        second = _entry(current, current)

        append_history(log, first)
        after_first = log.read_text(encoding="utf-8")
        append_history(log, second)
        content = log.read_text(encoding="utf-8")

        assert content.count(HISTORY_BANNER) == 1
        assert content.startswith(HISTORY_BANNER)
        assert content.startswith(after_first)
        assert content.endswith(second)
        assert content.count(HISTORY_DIVIDER) == 2

    def test_empty_existing_file_gets_the_banner(self, tmp_path):
        log = tmp_path / "AzureHistory.txt"
        log.touch()

        append_history(log, "entry\n")

        assert log.read_text(encoding="utf-8") == HISTORY_BANNER + "entry\n"

    def test_existing_content_is_never_rewritten(self, tmp_path):
        log = tmp_path / "AzureHistory.txt"
        log.write_text("hand-written notes\n", encoding="utf-8")

        append_history(log, "entry\n")

        assert log.read_text(encoding="utf-8") == "hand-written notes\nentry\n"

    def test_creates_missing_directories(self, tmp_path):
        log = tmp_path / "logs" / "AzureHistory.txt"

        append_history(log, "entry\n")

        assert log.read_text(encoding="utf-8") == HISTORY_BANNER + "entry\n"

    def test_write_failure_is_fatal(self, tmp_path):
        with pytest.raises(ActionsError) as exc_info:
            append_history(tmp_path, "entry\n")

        assert exc_info.value.error_code == ErrorCode.HISTORY_WRITE_FAILURE
        assert exc_info.value.fatal

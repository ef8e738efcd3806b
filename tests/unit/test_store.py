"""Tests for loading and committing the Operations snapshot."""

import pytest

from service_actions.common.exceptions import ActionsError, ErrorCode
from service_actions.constants import NO_OPERATIONS_NAME
from service_actions.snapshot import commit, load_operations_snapshot, text_rendering_path
from service_actions.types import FeatureRecord, OperationRecord, ServiceRecord


HEADER = "ProviderNamespace,Operation,OperationName,ResourceName,Description,IsDataAction\n"


@pytest.fixture
def operations():
    return (
        OperationRecord(
            namespace="Microsoft Compute",
            provider_name="Microsoft.Compute",
            operation="Microsoft.Compute/virtualMachines/read",
            operation_name="Get Virtual Machine",
            resource_name="Virtual Machines",
            description="Get the properties of a virtual machine, including its \"status\"",
        ),
        OperationRecord.placeholder(ServiceRecord(namespace="-", provider_name="Microsoft.Quantum")),
        OperationRecord(
            namespace="Microsoft Storage",
            provider_name="Microsoft.Storage",
            operation="Microsoft.Storage/storageAccounts/blobServices/containers/blobs/read",
            operation_name="Read Blob",
            resource_name="Blob",
            description="Returns a blob or a list of blobs",
            is_data_action=True,
        ),
    )


class TestLoadOperationsSnapshot:
    """Test reading the stored snapshot."""

    def test_missing_file_is_an_empty_snapshot(self, tmp_path):
        result = load_operations_snapshot(tmp_path / "AzureServiceActions.csv")

        assert result.records == ()
        assert result.warnings == ()

    def test_committed_snapshot_loads_back(self, tmp_path, operations):
        path = tmp_path / "AzureServiceActions.csv"
        commit(operations, path)

        result = load_operations_snapshot(path)

        assert result.records == operations
        assert result.warnings == ()

    def test_placeholder_keeps_its_provider(self, tmp_path, operations):
        path = tmp_path / "AzureServiceActions.csv"
        commit(operations, path)

        placeholder = next(r for r in load_operations_snapshot(path).records if r.is_placeholder)

        assert placeholder.provider_name == "Microsoft.Quantum"
        assert placeholder.operation_name == NO_OPERATIONS_NAME

    def test_note_row_is_skipped(self, tmp_path, operations):
        path = tmp_path / "AzureServiceActions.csv"
        commit(operations, path, note="Captured for testing")

        assert "Captured for testing" in path.read_text(encoding="utf-8").splitlines()[1]
        assert load_operations_snapshot(path).records == operations

    def test_bad_lines_are_skipped_with_warning(self, tmp_path):
        path = tmp_path / "AzureServiceActions.csv"
        path.write_text(
            HEADER
            + "Microsoft Web,Microsoft.Web/sites/read,Get Site,Sites,Reads a site,False\n"
            + "broken,row,with,far,too,many,fields,here\n"
            + "Microsoft Web,Microsoft.Web/sites/write,Set Site,Sites,Writes a site,False\n",
            encoding="utf-8",
        )

        result = load_operations_snapshot(path)

        assert [r.operation for r in result.records] == [
            "Microsoft.Web/sites/read",
            "Microsoft.Web/sites/write",
        ]
        assert len(result.warnings) == 1
        assert "malformed line" in result.warnings[0]

    def test_malformed_operation_is_skipped_with_warning(self, tmp_path):
        path = tmp_path / "AzureServiceActions.csv"
        path.write_text(
            HEADER
            + "Broken,badstring,,,,False\n"
            + "Microsoft Web,Microsoft.Web/sites/read,Get Site,Sites,Reads a site,True\n",
            encoding="utf-8",
        )

        result = load_operations_snapshot(path)

        assert [r.operation for r in result.records] == ["Microsoft.Web/sites/read"]
        assert result.records[0].is_data_action is True
        assert "badstring" in result.warnings[0]

    def test_missing_operation_column_yields_empty_snapshot(self, tmp_path):
        path = tmp_path / "AzureServiceActions.csv"
        path.write_text("Foo,Bar\n1,2\n", encoding="utf-8")

        result = load_operations_snapshot(path)

        assert result.records == ()
        assert "no Operation column" in result.warnings[0]

    def test_empty_file_yields_empty_snapshot(self, tmp_path):
        path = tmp_path / "AzureServiceActions.csv"
        path.write_text("", encoding="utf-8")

        result = load_operations_snapshot(path)

        assert result.records == ()
        assert "empty" in result.warnings[0]


class TestCommit:
    """Test the all-or-nothing snapshot replacement."""

    def test_writes_tables_and_renderings(self, tmp_path, operations):
        services = (ServiceRecord(namespace="Microsoft Compute", provider_name="Microsoft.Compute"),)
        features = (
            FeatureRecord(
                namespace="Microsoft Compute",
                provider_name="Microsoft.Compute",
                feature_name="EncryptionAtHost",
                registration_state="Registered",
            ),
        )

        written = commit(
            operations,
            tmp_path / "AzureServiceActions.csv",
            services=services,
            services_path=tmp_path / "AzureServices.csv",
            features=features,
            features_path=tmp_path / "AzureServiceFeatures.csv",
        )

        assert sorted(p.name for p in written) == [
            "AzureServiceActions.csv",
            "AzureServiceActions.txt",
            "AzureServiceFeatures.csv",
            "AzureServiceFeatures.txt",
            "AzureServices.csv",
            "AzureServices.txt",
        ]
        services_text = (tmp_path / "AzureServices.txt").read_text(encoding="utf-8")
        assert services_text.splitlines()[2].split() == ["Microsoft", "Compute", "Microsoft.Compute"]

    def test_replaces_previous_snapshot(self, tmp_path, operations):
        path = tmp_path / "AzureServiceActions.csv"
        path.write_text(HEADER + "old,Old.Provider/x/read,,,,False\n", encoding="utf-8")

        commit(operations[:1], path)

        assert "Old.Provider" not in path.read_text(encoding="utf-8")
        assert text_rendering_path(path).exists()

    def test_failure_leaves_destinations_untouched(self, tmp_path, operations):
        path = tmp_path / "AzureServiceActions.csv"
        path.write_text("previous snapshot\n", encoding="utf-8")
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(ActionsError) as exc_info:
            commit(
                operations,
                path,
                features=(),
                features_path=blocker / "AzureServiceFeatures.csv",
            )

        assert exc_info.value.error_code == ErrorCode.COMMIT_WRITE_FAILURE
        assert path.read_text(encoding="utf-8") == "previous snapshot\n"
        assert not text_rendering_path(path).exists()
        assert not list(tmp_path.glob(".*.tmp"))

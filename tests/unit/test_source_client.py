"""Tests for the Azure Resource Manager catalog source."""

from unittest.mock import MagicMock, patch

import pytest
import requests
from azure.core.exceptions import ClientAuthenticationError

from service_actions.common.exceptions import ActionsError, ErrorCode
from service_actions.protocols import CatalogSource
from service_actions.settings import SourceSettings
from service_actions.source import ArmCatalogSource


PROVIDER_PAYLOAD = {
    "value": [
        {
            "id": "/providers/Microsoft.Authorization/providerOperations/Microsoft.Compute",
            "name": "Microsoft.Compute",
            "displayName": "Microsoft Compute",
            "operations": [
                {
                    "name": "Microsoft.Compute/register/action",
                    "displayName": "Register Subscription for Compute",
                    "description": "Registers Subscription with Microsoft.Compute resource provider",
                    "isDataAction": False,
                }
            ],
            "resourceTypes": [
                {
                    "name": "virtualMachines",
                    "displayName": "Virtual Machines",
                    "operations": [
                        {
                            "name": "Microsoft.Compute/virtualMachines/read",
                            "displayName": "Get Virtual Machine",
                            "description": "Get the properties of a virtual machine",
                            "isDataAction": False,
                        }
                    ],
                }
            ],
        }
    ]
}

FEATURE_PAYLOAD = {
    "value": [
        {
            "id": "/subscriptions/sub-1/providers/Microsoft.Features/providers/Microsoft.Compute/features/EncryptionAtHost",
            "name": "Microsoft.Compute/EncryptionAtHost",
            "properties": {"state": "Registered"},
            "type": "Microsoft.Features/providers/features",
        }
    ]
}


def _response(payload=None, status_code=200):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.text = "error body"
    response.json.return_value = payload
    return response


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
    monkeypatch.delenv("AZURE_MANAGEMENT_ENDPOINT", raising=False)
    return SourceSettings(management_endpoint="https://management.example.com/", subscription_id="sub-1")


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def source(settings, session):
    source = ArmCatalogSource(settings, credential=MagicMock())
    source._session = session
    return source


class TestArmCatalogSource:
    """Test listing and flattening of the ARM catalog."""

    def test_implements_catalog_source(self, source):
        assert isinstance(source, CatalogSource)

    def test_flattens_provider_and_resource_type_operations(self, source, session):
        session.get.return_value = _response(PROVIDER_PAYLOAD)

        operations = source.list_provider_operations()

        assert [(o.operation, o.resource_name) for o in operations] == [
            ("Microsoft.Compute/register/action", "Microsoft Compute"),
            ("Microsoft.Compute/virtualMachines/read", "Virtual Machines"),
        ]
        assert all(o.provider_namespace == "Microsoft Compute" for o in operations)
        url = session.get.call_args[0][0]
        assert url == (
            "https://management.example.com/providers/Microsoft.Authorization/providerOperations"
            "?api-version=2022-04-01&$expand=resourceTypes"
        )

    def test_follows_next_link(self, source, session):
        first = {"value": PROVIDER_PAYLOAD["value"], "nextLink": "https://management.example.com/page2"}
        second = {"value": [{"name": "Microsoft.Web", "displayName": "Microsoft Web",
                             "operations": [{"name": "Microsoft.Web/sites/read"}]}]}
        session.get.side_effect = [_response(first), _response(second)]

        operations = source.list_provider_operations()

        assert len(operations) == 3
        assert session.get.call_args_list[1][0][0] == "https://management.example.com/page2"

    def test_http_error_is_source_unavailable(self, source, session):
        session.get.return_value = _response(status_code=503)

        with pytest.raises(ActionsError) as exc_info:
            source.list_provider_operations()

        assert exc_info.value.error_code == ErrorCode.SOURCE_UNAVAILABLE
        assert exc_info.value.details["status_code"] == 503
        assert session.get.call_count == 1

    def test_transport_error_is_source_unavailable(self, source, session):
        session.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ActionsError) as exc_info:
            source.list_provider_operations()

        assert exc_info.value.error_code == ErrorCode.SOURCE_UNAVAILABLE
        assert exc_info.value.fatal

    def test_invalid_json_is_source_unavailable(self, source, session):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response

        with pytest.raises(ActionsError) as exc_info:
            source.list_provider_operations()

        assert exc_info.value.error_code == ErrorCode.SOURCE_UNAVAILABLE

    def test_lists_features(self, source, session):
        session.get.return_value = _response(FEATURE_PAYLOAD)

        features = source.list_provider_features()

        assert len(features) == 1
        assert features[0].provider_name == "Microsoft.Compute"
        assert features[0].feature_name == "EncryptionAtHost"
        assert features[0].registration_state == "Registered"
        assert session.get.call_args[0][0] == (
            "https://management.example.com/subscriptions/sub-1/providers/Microsoft.Features"
            "/features?api-version=2021-07-01"
        )

    def test_lists_features_of_one_provider(self, source, session):
        session.get.return_value = _response({"value": []})

        source.list_provider_features("Microsoft.Compute")

        assert "/providers/Microsoft.Features/providers/Microsoft.Compute/features?" in session.get.call_args[0][0]

    def test_features_require_a_subscription(self, monkeypatch, session):
        monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
        source = ArmCatalogSource(SourceSettings(subscription_id=None), credential=MagicMock())
        source._session = session

        with pytest.raises(ActionsError) as exc_info:
            source.list_provider_features()

        assert exc_info.value.error_code == ErrorCode.CONFIG_ERROR
        session.get.assert_not_called()

    def test_close_releases_session(self, source, session):
        source.close()

        session.close.assert_called_once()
        assert source._session is None


class TestAuthentication:
    """Test the bearer token session."""

    def test_session_carries_bearer_token(self, settings):
        credential = MagicMock()
        credential.get_token.return_value = MagicMock(token="secret-token")

        with patch("service_actions.source.client.requests.Session") as session_cls:
            ArmCatalogSource(settings, credential=credential)._get_session()

        credential.get_token.assert_called_once_with("https://management.example.com/.default")
        headers = session_cls.return_value.headers.update.call_args[0][0]
        assert headers["Authorization"] == "Bearer secret-token"

    def test_token_failure_is_source_unavailable(self, settings):
        credential = MagicMock()
        credential.get_token.side_effect = ClientAuthenticationError("no credential available")

        with pytest.raises(ActionsError) as exc_info:
            ArmCatalogSource(settings, credential=credential).list_provider_operations()

        assert exc_info.value.error_code == ErrorCode.SOURCE_UNAVAILABLE

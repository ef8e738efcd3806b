"""Azure Resource Manager catalog source.

Lists provider operations (tenant-wide) and feature registrations
(per subscription) through the ARM REST API, authenticating with the
ambient Azure credential chain.
"""

from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING

import requests
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential

from service_actions.common.exceptions import configuration_error, source_unavailable_error
from service_actions.logging import get_logger
from service_actions.types import RawFeature, RawOperation
from service_actions.utils.decorators import traced

if TYPE_CHECKING:
    from service_actions.settings import SourceSettings

logger = get_logger(__name__)


class ArmCatalogSource:
    """Catalog source backed by Azure Resource Manager.

    Every call is a single blocking pass over the paged ARM listing. No
    retries are attempted: any transport failure, non-success status or
    undecodable body raises a fatal SOURCE_UNAVAILABLE error.
    """

    def __init__(self, settings: 'SourceSettings', credential: Optional[Any] = None):
        """Initialize the source.

        Args:
            settings: Source settings (endpoint, api versions, subscription)
            credential: Azure credential exposing ``get_token``; defaults to
                ``DefaultAzureCredential`` created on first request
        """
        self.settings = settings
        self._credential = credential
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Get or create the authenticated HTTP session."""
        if self._session is None:
            if self._credential is None:
                self._credential = DefaultAzureCredential()
            try:
                token = self._credential.get_token(self.settings.token_scope)
            except AzureError as e:
                raise source_unavailable_error(
                    "Could not acquire an Azure Resource Manager token",
                    url=self.settings.management_endpoint,
                    cause=e,
                ) from e

            session = requests.Session()
            session.headers.update({
                "Authorization": f"Bearer {token.token}",
                "Accept": "application/json",
            })
            self._session = session
        return self._session

    def _get_json(self, url: str) -> Dict[str, Any]:
        try:
            response = self._get_session().get(url, timeout=self.settings.request_timeout_seconds)
        except requests.RequestException as e:
            raise source_unavailable_error(
                f"Catalog request failed: {e}", url=url, cause=e
            ) from e

        if not response.ok:
            raise source_unavailable_error(
                f"Catalog request returned HTTP {response.status_code}: {response.text[:200]}",
                url=url,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise source_unavailable_error(
                "Catalog response is not valid JSON", url=url, cause=e
            ) from e
        if not isinstance(payload, dict):
            raise source_unavailable_error("Catalog response is not a JSON object", url=url)
        return payload

    def _get_paged(self, url: str) -> List[Dict[str, Any]]:
        """Collect ``value`` items across ``nextLink`` pages."""
        items: List[Dict[str, Any]] = []
        next_url: Optional[str] = url
        pages = 0
        while next_url:
            payload = self._get_json(next_url)
            items.extend(payload.get("value") or [])
            next_url = payload.get("nextLink")
            pages += 1
        logger.debug(f"Fetched {len(items)} items in {pages} page(s) from {url}")
        return items

    @traced(
        span_name="service_actions.source.list_provider_operations",
        attributes={"source.system": "azure.resource_manager"},
    )
    def list_provider_operations(self) -> List[RawOperation]:
        url = (
            f"{self.settings.management_endpoint}/providers/Microsoft.Authorization/providerOperations"
            f"?api-version={self.settings.operations_api_version}&$expand=resourceTypes"
        )
        providers = self._get_paged(url)
        operations = list(self._flatten_operations(providers))
        logger.info(f"Listed {len(operations)} operations across {len(providers)} providers")
        return operations

    @staticmethod
    def _flatten_operations(providers: List[Dict[str, Any]]) -> Iterator[RawOperation]:
        """Flatten provider and resource-type level operations.

        The provider display name becomes the namespace; provider-level
        operations use it as their resource name too.
        """
        for provider in providers:
            namespace = provider.get("displayName") or provider.get("name") or ""
            for op in provider.get("operations") or []:
                yield _to_raw_operation(op, namespace, namespace)
            for resource_type in provider.get("resourceTypes") or []:
                resource_name = resource_type.get("displayName") or resource_type.get("name") or ""
                for op in resource_type.get("operations") or []:
                    yield _to_raw_operation(op, namespace, resource_name)

    @traced(
        span_name="service_actions.source.list_provider_features",
        attributes={"source.system": "azure.resource_manager"},
        attribute_getter=lambda self, provider_namespace=None: {
            "source.provider_namespace": provider_namespace,
        },
    )
    def list_provider_features(self, provider_namespace: Optional[str] = None) -> List[RawFeature]:
        subscription_id = self.settings.subscription_id
        if not subscription_id:
            raise configuration_error(
                "A subscription is required to list feature registrations; "
                "set AZURE_SUBSCRIPTION_ID or pass --subscription-id",
                config_key="AZURE_SUBSCRIPTION_ID",
            )

        scope = f"{self.settings.management_endpoint}/subscriptions/{subscription_id}/providers/Microsoft.Features"
        if provider_namespace:
            scope = f"{scope}/providers/{provider_namespace}"
        url = f"{scope}/features?api-version={self.settings.features_api_version}"

        features = [_to_raw_feature(item) for item in self._get_paged(url)]
        logger.info(f"Listed {len(features)} feature registrations")
        return features

    def close(self) -> None:
        """Close the HTTP session and release resources."""
        if self._session is not None:
            self._session.close()
            self._session = None


def _to_raw_operation(op: Dict[str, Any], namespace: str, resource_name: str) -> RawOperation:
    return RawOperation(
        provider_namespace=namespace,
        operation=op.get("name") or "",
        operation_name=op.get("displayName") or "",
        resource_name=resource_name,
        is_data_action=bool(op.get("isDataAction")),
        description=op.get("description") or "",
    )


def _to_raw_feature(item: Dict[str, Any]) -> RawFeature:
    # name is "<provider>/<feature>"
    provider_name, _, feature_name = (item.get("name") or "").partition("/")
    properties = item.get("properties") or {}
    return RawFeature(
        provider_name=provider_name,
        feature_name=feature_name,
        registration_state=properties.get("state") or "",
        description=properties.get("description") or "",
    )

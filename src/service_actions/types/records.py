"""Catalog record models.

Raw models mirror what the catalog source returns; the normalized records
are what the extractor emits, the exports write and the differ compares.
"""

from typing import Optional

from pydantic import field_validator

from service_actions.common.exceptions import malformed_operation_error
from service_actions.constants import (
    FEATURE_ONLY_DESCRIPTION,
    NO_OPERATIONS_NAME,
    OPERATION_SEPARATOR,
    PLACEHOLDER_NAMESPACE,
)
from service_actions.types.base import ActionsBaseModel


def parse_provider_name(operation: str, namespace: Optional[str] = None) -> str:
    """Return the provider name of an operation string.

    The provider name is everything before the first '/', e.g.
    ``Microsoft.Compute`` for ``Microsoft.Compute/virtualMachines/read``.

    Raises:
        ActionsError: MALFORMED_OPERATION (non-fatal) when the string has no
            '/' or nothing before it.
    """
    provider, separator, _ = operation.strip().partition(OPERATION_SEPARATOR)
    if not separator or not provider:
        raise malformed_operation_error(operation, namespace=namespace)
    return provider


class RawOperation(ActionsBaseModel):
    """One operation entry as listed by the catalog source."""

    provider_namespace: str = ""
    operation: str
    operation_name: str = ""
    resource_name: str = ""
    is_data_action: bool = False
    description: str = ""


class RawFeature(ActionsBaseModel):
    """One feature entry as listed by the catalog source."""

    namespace: Optional[str] = None
    provider_name: str
    feature_name: str
    registration_state: str = ""
    description: str = ""


class ServiceRecord(ActionsBaseModel):
    namespace: str
    provider_name: str
    description: str = ""

    @property
    def is_feature_only(self) -> bool:
        return self.namespace == PLACEHOLDER_NAMESPACE


class FeatureRecord(ActionsBaseModel):
    namespace: str
    provider_name: str
    feature_name: str
    registration_state: str = ""
    description: str = ""


class OperationRecord(ActionsBaseModel):
    """A permission operation of a resource provider.

    ``operation`` is the natural key of a snapshot. A record with an empty
    operation is the placeholder of a provider without discovered
    operations; it carries no permission identity and is never diffed.
    """

    namespace: str
    provider_name: str
    operation: str = ""
    operation_name: str = ""
    resource_name: str = ""
    description: str = ""
    is_data_action: bool = False

    @field_validator("operation")
    @classmethod
    def strip_operation(cls, v: str) -> str:
        return v.strip()

    @property
    def is_placeholder(self) -> bool:
        return not self.operation

    @property
    def key(self) -> str:
        """Comparison key; Azure matches permission strings case-insensitively."""
        return self.operation.lower()

    @classmethod
    def placeholder(cls, service: ServiceRecord) -> "OperationRecord":
        """Build the placeholder row for a provider without operations.

        The provider name is kept in ``resource_name`` as well, so that a
        snapshot reloaded from the Operations table (which has no
        ProviderName column) still knows which provider the row belongs to.
        """
        return cls(
            namespace=service.namespace,
            provider_name=service.provider_name,
            operation="",
            operation_name=NO_OPERATIONS_NAME,
            resource_name=service.provider_name,
            description=FEATURE_ONLY_DESCRIPTION,
            is_data_action=False,
        )

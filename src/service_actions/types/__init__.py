"""Record and delta models shared by the extractor, the differ and the exports."""

from service_actions.types.base import ActionsBaseModel
from service_actions.types.delta import DeltaEntry, DeltaStatus, ServiceNameDelta
from service_actions.types.records import (
    FeatureRecord,
    OperationRecord,
    RawFeature,
    RawOperation,
    ServiceRecord,
    parse_provider_name,
)

__all__ = [
    "ActionsBaseModel",
    "DeltaEntry",
    "DeltaStatus",
    "ServiceNameDelta",
    "FeatureRecord",
    "OperationRecord",
    "RawFeature",
    "RawOperation",
    "ServiceRecord",
    "parse_provider_name",
]

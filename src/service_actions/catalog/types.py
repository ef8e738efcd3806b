"""Result types returned by the catalog extractor."""

from typing import Tuple

from service_actions.types import ActionsBaseModel, FeatureRecord, OperationRecord, ServiceRecord


class ServiceExtraction(ActionsBaseModel):
    records: Tuple[ServiceRecord, ...] = ()
    warnings: Tuple[str, ...] = ()


class OperationExtraction(ActionsBaseModel):
    records: Tuple[OperationRecord, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def operation_count(self) -> int:
        """Number of real (non-placeholder) operations."""
        return sum(1 for r in self.records if not r.is_placeholder)

    @property
    def empty_provider_count(self) -> int:
        """Number of providers represented only by a placeholder."""
        return sum(1 for r in self.records if r.is_placeholder)


class FeatureExtraction(ActionsBaseModel):
    records: Tuple[FeatureRecord, ...] = ()


class CatalogExtraction(ActionsBaseModel):
    """Services, operations and features of one run, plus merged warnings."""

    services: ServiceExtraction
    operations: OperationExtraction
    features: FeatureExtraction
    warnings: Tuple[str, ...] = ()

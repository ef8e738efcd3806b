"""Snapshot delta types."""

from enum import Enum
from typing import Tuple

from service_actions.types.base import ActionsBaseModel
from service_actions.types.records import OperationRecord


class DeltaStatus(str, Enum):
    NEW = "New"
    DEPRECATED = "Deprecated"

    def swapped(self) -> "DeltaStatus":
        return DeltaStatus.DEPRECATED if self is DeltaStatus.NEW else DeltaStatus.NEW


class DeltaEntry(ActionsBaseModel):
    """An operation that appeared or disappeared between two snapshots.

    Wraps the original record rather than annotating it.
    """

    record: OperationRecord
    status: DeltaStatus

    @property
    def operation(self) -> str:
        return self.record.operation

    @property
    def key(self) -> str:
        return self.record.key

    def with_swapped_status(self) -> "DeltaEntry":
        return DeltaEntry(record=self.record, status=self.status.swapped())


class ServiceNameDelta(ActionsBaseModel):
    """Provider names that appeared or disappeared, each sorted alphabetically."""

    new: Tuple[str, ...] = ()
    deprecated: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.new and not self.deprecated

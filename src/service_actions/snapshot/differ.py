"""Snapshot differ.

Compares two Operations snapshots keyed by operation and reports which
operations are new and which are deprecated, plus which provider names
appeared or disappeared.

The operation delta is a merge ("zipper") scan over two inputs sorted by
operation key. It yields exactly the symmetric difference by key, sorted
by key, with New and Deprecated entries interleaved:

    previous: a   c d
    current:  a b   d e
    delta:      b+ c- e+

Placeholder rows (empty operation) carry no permission identity and are
dropped before the scan.
"""

from typing import Dict, Iterable, List, Sequence, Tuple, Union

from service_actions.common.exceptions import unsorted_snapshot_error
from service_actions.types import (
    DeltaEntry,
    DeltaStatus,
    OperationRecord,
    ServiceNameDelta,
    ServiceRecord,
)

ProviderScoped = Union[ServiceRecord, OperationRecord]


def sort_by_operation(records: Iterable[OperationRecord]) -> Tuple[OperationRecord, ...]:
    """Return the records sorted by operation key, the order the differ expects."""
    return tuple(sorted(records, key=lambda r: r.key))


def _names_by_folded(records: Iterable[ProviderScoped]) -> Dict[str, str]:
    """First-seen spelling of each provider name, keyed case-insensitively."""
    names: Dict[str, str] = {}
    for record in records:
        if record.provider_name:
            names.setdefault(record.provider_name.lower(), record.provider_name)
    return names


def compute_service_name_delta(
    previous: Iterable[ProviderScoped],
    current: Iterable[ProviderScoped],
) -> ServiceNameDelta:
    """Compare the distinct provider names of two record sets.

    Either side may be ServiceRecords or OperationRecords; both carry a
    provider name. Names match case-insensitively, like operation keys;
    new names are spelled as on the current side, deprecated names as on
    the previous side. Informational only: it never changes the operation delta.
    """
    previous_names = _names_by_folded(previous)
    current_names = _names_by_folded(current)
    return ServiceNameDelta(
        new=tuple(sorted(current_names[k] for k in current_names.keys() - previous_names.keys())),
        deprecated=tuple(sorted(previous_names[k] for k in previous_names.keys() - current_names.keys())),
    )


def _comparable(records: Sequence[OperationRecord], side: str) -> List[OperationRecord]:
    """Drop placeholders and repeated keys, and check the ordering.

    Repeated keys are adjacent in sorted input; only the first is kept so
    the scan matches the set definition of the delta.
    """
    kept: List[OperationRecord] = []
    for record in records:
        if record.is_placeholder:
            continue
        if kept:
            last = kept[-1].key
            if record.key < last:
                raise unsorted_snapshot_error(side, kept[-1].operation, record.operation)
            if record.key == last:
                continue
        kept.append(record)
    return kept


def compute_operation_delta(
    previous: Sequence[OperationRecord],
    current: Sequence[OperationRecord],
) -> Tuple[DeltaEntry, ...]:
    """Compute the New/Deprecated delta between two sorted snapshots.

    Args:
        previous: Prior snapshot, sorted by operation key
        current: Current snapshot, sorted by operation key

    Returns:
        Delta entries sorted by operation key. Deprecated entries wrap the
        previous record, New entries the current one.

    Raises:
        ActionsError: UNSORTED_SNAPSHOT when either input is out of order
    """
    old = _comparable(previous, "previous")
    new = _comparable(current, "current")

    delta: List[DeltaEntry] = []
    i = j = 0
    while j < len(new):
        if i < len(old) and old[i].key < new[j].key:
            delta.append(DeltaEntry(record=old[i], status=DeltaStatus.DEPRECATED))
            i += 1
        elif i < len(old) and old[i].key == new[j].key:
            i += 1
            j += 1
        else:
            delta.append(DeltaEntry(record=new[j], status=DeltaStatus.NEW))
            j += 1
    delta.extend(DeltaEntry(record=record, status=DeltaStatus.DEPRECATED) for record in old[i:])

    return tuple(delta)


def count_by_status(delta: Iterable[DeltaEntry]) -> Tuple[int, int]:
    """Return ``(new, deprecated)`` counts of a delta."""
    new = deprecated = 0
    for entry in delta:
        if entry.status is DeltaStatus.NEW:
            new += 1
        else:
            deprecated += 1
    return new, deprecated

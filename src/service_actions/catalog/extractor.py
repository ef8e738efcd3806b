"""Catalog extractor.

Turns the unordered raw listings of the catalog source into the three
normalized record sets: Services, Operations and Features.

All functions are pure: they take immutable input collections and return
new tuples. Per-record problems (an operation string without '/') never
abort the extraction; the record is skipped and a warning naming it is
returned alongside the records.

Example:
    >>> result = extract_catalog(source.list_provider_operations(),
    ...                          source.list_provider_features())
    >>> result.operations.operation_count
    14230
    >>> result.warnings
    ("Skipped malformed operation 'badstring': ...",)
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from service_actions.common.exceptions import ActionsError
from service_actions.constants import (
    EXCLUDED_PROVIDER_NAMES,
    EXCLUDED_PROVIDER_PREFIXES,
    PLACEHOLDER_NAMESPACE,
)
from service_actions.logging import get_logger
from service_actions.protocols import ProgressObserver
from service_actions.types import (
    FeatureRecord,
    OperationRecord,
    RawFeature,
    RawOperation,
    ServiceRecord,
    parse_provider_name,
)
from .types import CatalogExtraction, FeatureExtraction, OperationExtraction, ServiceExtraction

logger = get_logger(__name__)


def _report(observer: Optional[ProgressObserver], activity: str, completed: int, total: int) -> None:
    if observer is not None:
        observer.update(activity, completed, total)


def _is_excluded_provider(name: str) -> bool:
    """Private and test providers only ever show up in the feature listing."""
    folded = name.lower()
    return folded in EXCLUDED_PROVIDER_NAMES or folded.startswith(EXCLUDED_PROVIDER_PREFIXES)


def _service_sort_key(record: ServiceRecord) -> Tuple[str, str]:
    return record.provider_name.lower(), record.namespace.lower()


def _operation_sort_key(record: OperationRecord) -> Tuple[str, str]:
    return record.provider_name.lower(), record.key


ParsedOperation = Tuple[RawOperation, str]


def _parse_operations(raw_operations: Iterable[RawOperation]) -> Tuple[List[ParsedOperation], List[str]]:
    """Pair each raw operation with its provider name; malformed ones become warnings."""
    parsed: List[ParsedOperation] = []
    warnings: List[str] = []
    for raw in raw_operations:
        try:
            parsed.append((raw, parse_provider_name(raw.operation, raw.provider_namespace)))
        except ActionsError as e:
            warnings.append(e.message)
    return parsed, warnings


def _services_from_parsed(
    parsed: Sequence[ParsedOperation],
    raw_features: Iterable[RawFeature],
    observer: Optional[ProgressObserver],
) -> List[ServiceRecord]:
    by_namespace: Dict[str, List[str]] = defaultdict(list)
    for raw, provider in parsed:
        by_namespace[raw.provider_namespace].append(provider)

    # lower-cased provider name -> (first-seen spelling, namespace)
    providers: Dict[str, Tuple[str, str]] = {}
    namespaces = sorted(by_namespace)
    for index, namespace in enumerate(namespaces, start=1):
        for provider in by_namespace[namespace]:
            providers.setdefault(provider.lower(), (provider, namespace))
        _report(observer, "services", index, len(namespaces))

    feature_only: Dict[str, str] = {}
    for feature in raw_features:
        name = feature.provider_name.strip()
        folded = name.lower()
        if not name or folded in providers or _is_excluded_provider(name):
            continue
        feature_only.setdefault(folded, name)

    records = [
        ServiceRecord(namespace=namespace, provider_name=provider)
        for provider, namespace in providers.values()
    ]
    records.extend(
        ServiceRecord(namespace=PLACEHOLDER_NAMESPACE, provider_name=name)
        for name in feature_only.values()
    )

    if feature_only:
        logger.info(
            f"{len(feature_only)} providers found only through the feature listing: "
            f"{', '.join(sorted(feature_only.values()))}"
        )
    return sorted(records, key=_service_sort_key)


def _operations_from_parsed(
    parsed: Sequence[ParsedOperation],
    services: Iterable[ServiceRecord],
    observer: Optional[ProgressObserver],
) -> List[OperationRecord]:
    services = tuple(services)
    spelling = {service.provider_name.lower(): service.provider_name for service in services}
    records: List[OperationRecord] = []

    for index, (raw, provider) in enumerate(parsed, start=1):
        _report(observer, "operations", index, len(parsed))
        records.append(OperationRecord(
            namespace=raw.provider_namespace,
            provider_name=spelling.get(provider.lower(), provider),
            operation=raw.operation,
            operation_name=raw.operation_name,
            resource_name=raw.resource_name,
            description=raw.description,
            is_data_action=raw.is_data_action,
        ))

    covered = {record.provider_name.lower() for record in records}
    records.extend(
        OperationRecord.placeholder(service)
        for service in services
        if service.provider_name.lower() not in covered
    )
    return sorted(records, key=_operation_sort_key)


def extract_services(
    raw_operations: Iterable[RawOperation],
    raw_features: Iterable[RawFeature] = (),
    observer: Optional[ProgressObserver] = None,
) -> ServiceExtraction:
    """Derive one ServiceRecord per distinct provider.

    Providers come from the operation listing first: operations are grouped
    by namespace and each provider name is the prefix of its operation
    strings. Provider names match case-insensitively; the first spelling
    seen is kept. Providers that only the feature listing knows about are
    appended with the placeholder namespace ``"-"``, except private and
    test providers. Feature provider names are trimmed before matching.

    Args:
        raw_operations: Unordered operation entries of the source
        raw_features: Unordered feature entries of the source
        observer: Optional progress observer

    Returns:
        ServiceExtraction sorted by provider name, then namespace
    """
    parsed, warnings = _parse_operations(raw_operations)
    return ServiceExtraction(
        records=tuple(_services_from_parsed(parsed, raw_features, observer)),
        warnings=tuple(warnings),
    )


def extract_operations(
    raw_operations: Iterable[RawOperation],
    services: Iterable[ServiceRecord],
    observer: Optional[ProgressObserver] = None,
) -> OperationExtraction:
    """Map raw operations 1:1 to OperationRecords.

    Every service without at least one operation gets a placeholder record
    (empty operation, ``** No operations discovered **``), so Services and
    Operations always agree on the set of providers. Operation records
    take the provider spelling of their service.

    Args:
        raw_operations: Unordered operation entries of the source
        services: Services extracted from the same listing
        observer: Optional progress observer

    Returns:
        OperationExtraction sorted by provider name, then operation
    """
    parsed, warnings = _parse_operations(raw_operations)
    return OperationExtraction(
        records=tuple(_operations_from_parsed(parsed, services, observer)),
        warnings=tuple(warnings),
    )


def extract_features(
    raw_features: Iterable[RawFeature],
    namespaces: Optional[Mapping[str, str]] = None,
) -> FeatureExtraction:
    """Map raw features 1:1 to FeatureRecords.

    Nothing is synthesized or filtered. Features-only runs call this
    without ``namespaces`` and never cross-reference the operation
    listing.

    Args:
        raw_features: Unordered feature entries of the source
        namespaces: Optional lower-cased provider name to namespace lookup,
            used when the feature entry carries no namespace of its own

    Returns:
        FeatureExtraction sorted by provider name, then feature name
    """
    lookup = namespaces or {}
    records = [
        FeatureRecord(
            namespace=raw.namespace or lookup.get(raw.provider_name.strip().lower(), PLACEHOLDER_NAMESPACE),
            provider_name=raw.provider_name.strip(),
            feature_name=raw.feature_name,
            registration_state=raw.registration_state,
            description=raw.description,
        )
        for raw in raw_features
    ]
    records.sort(key=lambda r: (r.provider_name.lower(), r.feature_name.lower()))
    return FeatureExtraction(records=tuple(records))


def extract_catalog(
    raw_operations: Iterable[RawOperation],
    raw_features: Iterable[RawFeature] = (),
    observer: Optional[ProgressObserver] = None,
) -> CatalogExtraction:
    """Run the full extraction: services, operations and features.

    Each raw operation is parsed once and shared by the service and the
    operation pass, so a malformed operation yields exactly one warning.
    """
    raw_features = tuple(raw_features)
    parsed, warnings = _parse_operations(raw_operations)

    services = ServiceExtraction(
        records=tuple(_services_from_parsed(parsed, raw_features, observer)),
        warnings=tuple(warnings),
    )
    operations = OperationExtraction(
        records=tuple(_operations_from_parsed(parsed, services.records, observer)),
        warnings=tuple(warnings),
    )
    namespaces = {
        service.provider_name.lower(): service.namespace
        for service in services.records
        if not service.is_feature_only
    }
    features = extract_features(raw_features, namespaces)

    logger.info(
        f"Extracted {operations.operation_count} operations; "
        f"{operations.empty_provider_count} of {len(services.records)} providers have none"
    )

    return CatalogExtraction(
        services=services,
        operations=operations,
        features=features,
        warnings=tuple(dict.fromkeys(warnings)),
    )

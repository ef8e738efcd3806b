"""Catalog constants and enumerations.

This module contains the sentinel values and enum types used while
extracting and diffing the provider catalog.
"""

from enum import Enum


# Namespace recorded for providers discovered only through the feature listing
PLACEHOLDER_NAMESPACE = "-"

# Placeholder operation for a provider without discovered operations
NO_OPERATIONS_NAME = "** No operations discovered **"
FEATURE_ONLY_DESCRIPTION = (
    "No operations were listed for this provider; "
    "it was discovered only through the feature listing."
)

# Feature providers that never surface as real services
EXCLUDED_PROVIDER_PREFIXES = ("private.",)
EXCLUDED_PROVIDER_NAMES = frozenset({"providers.test"})

OPERATION_SEPARATOR = "/"


class RunMode(str, Enum):
    """Which part of the catalog a run extracts.

    Values:
        FULL: Services, operations and features, followed by the snapshot diff
        SERVICES_ONLY: Services table only, no diff
        FEATURES_ONLY: Features table only; skips the operation enumeration
            and does not cross-reference providers missing from it
    """

    FULL = "full"
    SERVICES_ONLY = "services"
    FEATURES_ONLY = "features"


class LogFormat(str, Enum):
    """Console log output format."""

    JSON = "json"
    TEXT = "text"

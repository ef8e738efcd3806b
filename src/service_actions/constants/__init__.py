"""Constants module for service action tracking.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other package modules.

Organization:
    - catalog: Sentinels and run modes for catalog extraction
    - tables: Export columns and fixed-width text layouts
"""

from service_actions.constants.catalog import (
    EXCLUDED_PROVIDER_NAMES,
    EXCLUDED_PROVIDER_PREFIXES,
    FEATURE_ONLY_DESCRIPTION,
    NO_OPERATIONS_NAME,
    OPERATION_SEPARATOR,
    PLACEHOLDER_NAMESPACE,
    LogFormat,
    RunMode,
)
from service_actions.constants.tables import (
    FEATURES_COLUMNS,
    FEATURES_TEXT_LAYOUT,
    HISTORY_BANNER,
    HISTORY_DIVIDER,
    HISTORY_TEXT_LAYOUT,
    OPERATIONS_COLUMNS,
    OPERATIONS_TEXT_LAYOUT,
    SERVICES_COLUMNS,
    SERVICES_TEXT_LAYOUT,
    ColumnLayout,
)

__all__ = [
    "EXCLUDED_PROVIDER_NAMES",
    "EXCLUDED_PROVIDER_PREFIXES",
    "FEATURE_ONLY_DESCRIPTION",
    "NO_OPERATIONS_NAME",
    "OPERATION_SEPARATOR",
    "PLACEHOLDER_NAMESPACE",
    "LogFormat",
    "RunMode",
    "FEATURES_COLUMNS",
    "FEATURES_TEXT_LAYOUT",
    "HISTORY_BANNER",
    "HISTORY_DIVIDER",
    "HISTORY_TEXT_LAYOUT",
    "OPERATIONS_COLUMNS",
    "OPERATIONS_TEXT_LAYOUT",
    "SERVICES_COLUMNS",
    "SERVICES_TEXT_LAYOUT",
    "ColumnLayout",
]

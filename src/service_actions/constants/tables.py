"""Table layouts for CSV exports and fixed-width text renderings."""

from typing import Optional, Sequence, Tuple


SERVICES_COLUMNS = ("ProviderNamespace", "ProviderName", "Description")
FEATURES_COLUMNS = (
    "ProviderNamespace",
    "ProviderName",
    "FeatureName",
    "RegistrationState",
    "Description",
)
OPERATIONS_COLUMNS = (
    "ProviderNamespace",
    "Operation",
    "OperationName",
    "ResourceName",
    "Description",
    "IsDataAction",
)

# (column, width); a width of None takes the remainder of the line
ColumnLayout = Sequence[Tuple[str, Optional[int]]]

SERVICES_TEXT_LAYOUT: ColumnLayout = (
    ("ProviderNamespace", 56),
    ("ProviderName", 40),
    ("Description", None),
)
FEATURES_TEXT_LAYOUT: ColumnLayout = (
    ("ProviderName", 56),
    ("RegistrationState", 40),
    ("FeatureName", None),
)
OPERATIONS_TEXT_LAYOUT: ColumnLayout = (
    ("ProviderNamespace", 60),
    ("Operation", 100),
    ("OperationName", 100),
    ("Description", None),
)
HISTORY_TEXT_LAYOUT: ColumnLayout = (
    ("Operation", 100),
    ("IsDataAction", 14),
    ("Description", None),
)

HISTORY_DIVIDER = "=" * 120
HISTORY_BANNER = (
    "Azure service actions history\n"
    "One entry per run: new and deprecated resource provider operations "
    "compared with the previous snapshot.\n"
)

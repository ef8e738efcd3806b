"""Tabular exports of the catalog record sets.

Each builder returns a pandas DataFrame whose columns are the published
export columns, in order. Booleans are written as ``True``/``False``.
"""

from typing import Iterable, Optional

import pandas as pd

from service_actions.constants import FEATURES_COLUMNS, OPERATIONS_COLUMNS, SERVICES_COLUMNS
from service_actions.types import FeatureRecord, OperationRecord, ServiceRecord


def services_frame(records: Iterable[ServiceRecord]) -> pd.DataFrame:
    rows = [(r.namespace, r.provider_name, r.description) for r in records]
    return pd.DataFrame(rows, columns=list(SERVICES_COLUMNS))


def features_frame(records: Iterable[FeatureRecord]) -> pd.DataFrame:
    rows = [
        (r.namespace, r.provider_name, r.feature_name, r.registration_state, r.description)
        for r in records
    ]
    return pd.DataFrame(rows, columns=list(FEATURES_COLUMNS))


def operations_frame(records: Iterable[OperationRecord], note: Optional[str] = None) -> pd.DataFrame:
    """Build the Operations table.

    Args:
        records: Operation records in output order
        note: Optional text for a leading note row (empty Operation,
            the note in Description)
    """
    rows = []
    if note:
        rows.append(("", "", "", "", note, ""))
    rows.extend(
        (
            r.namespace,
            r.operation,
            r.operation_name,
            r.resource_name,
            r.description,
            str(r.is_data_action),
        )
        for r in records
    )
    return pd.DataFrame(rows, columns=list(OPERATIONS_COLUMNS))


def build_note(date: str, operation_count: int, provider_count: int) -> str:
    """Text of the Operations table note row."""
    return (
        f"Captured {date}: {operation_count} operations across {provider_count} providers. "
        f"Rows with an empty Operation are providers without discovered operations."
    )


def frame_to_csv(frame: pd.DataFrame) -> str:
    return frame.to_csv(index=False, lineterminator="\n")

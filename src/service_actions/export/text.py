"""Fixed-width text renderings of the export tables."""

from typing import Iterable, List, Optional, Sequence

import pandas as pd

from service_actions.constants import ColumnLayout


def _cell(value: str, width: Optional[int]) -> str:
    # Long values are not truncated; they push the rest of the line right.
    if width is None:
        return value
    return value.ljust(width - 1) + " "


def format_fixed_width(rows: Iterable[Sequence[str]], layout: ColumnLayout) -> List[str]:
    """Format rows as fixed-width lines under a header and an underline.

    Args:
        rows: Cell values in layout order
        layout: ``(column, width)`` pairs; ``None`` width takes the remainder

    Returns:
        Lines without trailing newlines: header, underline, one line per row
    """
    widths = [width for _, width in layout]
    header = "".join(_cell(name, width) for name, width in layout).rstrip()
    underline = "".join(_cell("-" * len(name), width) for name, width in layout).rstrip()
    lines = [header, underline]
    for row in rows:
        lines.append("".join(_cell(str(value), width) for value, width in zip(row, widths)).rstrip())
    return lines


def render_frame_text(frame: pd.DataFrame, layout: ColumnLayout) -> str:
    """Render the layout's columns of an export table as fixed-width text."""
    columns = [name for name, _ in layout]
    rows = frame[columns].astype(str).itertuples(index=False, name=None)
    return "\n".join(format_fixed_width(rows, layout)) + "\n"

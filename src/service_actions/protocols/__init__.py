"""Protocol definitions for service action tracking.

Protocols provide type-safe interfaces without requiring inheritance,
following Python's structural subtyping (duck typing with type hints).
"""

from .source import CatalogSource, ProgressObserver

__all__ = [
    "CatalogSource",
    "ProgressObserver",
]

"""Table exports: pandas frames, CSV text, fixed-width renderings and atomic writes."""

from .tables import build_note, features_frame, frame_to_csv, operations_frame, services_frame
from .text import format_fixed_width, render_frame_text
from .writer import write_atomically

__all__ = [
    "build_note",
    "features_frame",
    "frame_to_csv",
    "operations_frame",
    "services_frame",
    "format_fixed_width",
    "render_frame_text",
    "write_atomically",
]

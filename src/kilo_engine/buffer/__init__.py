"""Row store, coordinate mapping and the document edit API."""

from .row import Row
from .coords import expand_tabs, raw_to_rendered, rendered_to_raw, tab_width
from .document import Document
from .state import BufferState, Cursor
from .validation import clamp_cursor

__all__ = [
    "Row",
    "Document",
    "BufferState",
    "Cursor",
    "clamp_cursor",
    "expand_tabs",
    "raw_to_rendered",
    "rendered_to_raw",
    "tab_width",
]

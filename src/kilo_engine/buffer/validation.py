"""Cursor clamping shared by the editing façade."""

from __future__ import annotations

from .document import Document
from .state import Cursor


def clamp_cursor(document: Document, cursor: Cursor) -> Cursor:
    """Pull ``cursor`` back inside the document.

    The row may sit one past the last row (the empty line an editor shows
    after the end of the file); there the only valid column is 0.
    """

    row, col = cursor
    row = max(0, min(row, document.line_count))
    if row == document.line_count:
        return (row, 0)
    col = max(0, min(col, document.get_row(row).size))
    return (row, col)

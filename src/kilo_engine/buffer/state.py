"""Cursor and search bookkeeping for an editing session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (row, raw column)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor info tied to a Document version."""

    cursor: Cursor = (0, 0)
    saved_cursor: Optional[Cursor] = None
    last_change_tick: int = 0

    @property
    def row(self) -> int:
        return self.cursor[0]

    @property
    def column(self) -> int:
        return self.cursor[1]

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def save_cursor(self) -> None:
        if self.saved_cursor is None:
            self.saved_cursor = self.cursor

    def restore_cursor(self) -> None:
        if self.saved_cursor is not None:
            self.cursor = self.saved_cursor
        self.saved_cursor = None

    def forget_saved_cursor(self) -> None:
        self.saved_cursor = None

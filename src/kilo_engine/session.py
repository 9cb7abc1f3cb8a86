"""Cursor-level editing façade combining a document, cursor state and search."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Iterable, Literal, Optional

from kilo_engine.buffer import BufferState, Cursor, Document, clamp_cursor
from kilo_engine.buffer.coords import raw_to_rendered
from kilo_engine.config import EngineConfig
from kilo_engine.runtime import telemetry
from kilo_engine.search import FORWARD, SearchMatch, SearchOverlay
from kilo_engine.syntax.registry import ProfileRegistry

Direction = Literal["left", "right", "up", "down"]

LOGGER_NAME = "kilo_engine.buffer"


@dataclass(slots=True)
class SessionView:
    version: int
    dirty: int
    cursor: Cursor
    render_column: int
    line_count: int
    profile: Optional[str]


class EditSession:
    """Applies key-level edits (typing, Enter, Backspace, search) to a document."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        state: Optional[BufferState] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.name = name
        self.config = config or EngineConfig()
        self.document = document or Document(tab_stop=self.config.tab_stop)
        self.state = state or BufferState()
        self.search = SearchOverlay(self.document)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        filename: Optional[str] = None,
        registry: Optional[ProfileRegistry] = None,
        config: Optional[EngineConfig] = None,
        name: str = "default",
    ) -> "EditSession":
        config = config or EngineConfig()
        document = Document.from_lines(
            lines, filename=filename, registry=registry, tab_stop=config.tab_stop
        )
        return cls(name=name, document=document, config=config)

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def render_column(self) -> int:
        row, col = self.state.cursor
        if not self.document.has_row(row):
            return 0
        return raw_to_rendered(self.document.get_row(row), col, self.document.tab_stop)

    def snapshot(self) -> SessionView:
        profile = self.document.active_profile
        return SessionView(
            version=self.document.version,
            dirty=self.document.dirty,
            cursor=self.state.cursor,
            render_column=self.render_column,
            line_count=self.document.line_count,
            profile=profile.name if profile else None,
        )

    def set_cursor(self, row: int, col: int) -> Cursor:
        self.state.set_cursor(*clamp_cursor(self.document, (row, col)))
        return self.state.cursor

    # -- editing ---------------------------------------------------------

    def insert_char(self, char: str) -> None:
        with Transaction(self, "insert_char"):
            row, col = self.state.cursor
            if row == self.document.line_count:
                self.document.insert_row(row, "")
            self.document.insert_char(row, col, char)
            self.state.set_cursor(row, col + len(char))

    def insert_newline(self) -> None:
        with Transaction(self, "insert_newline"):
            row, col = self.state.cursor
            if row == self.document.line_count or col == 0:
                self.document.insert_row(row, "")
            else:
                self.document.split_row_at(row, col)
            self.state.set_cursor(row + 1, 0)

    def delete_char(self) -> None:
        """Backspace: remove the char left of the cursor or join with the row above."""

        with Transaction(self, "delete_char"):
            row, col = self.state.cursor
            if row >= self.document.line_count:
                return
            if col == 0 and row == 0:
                return
            if col > 0:
                self.document.delete_char(row, col - 1)
                self.state.set_cursor(row, col - 1)
                return
            join_col = self.document.get_row(row - 1).size
            self.document.join_row_with_next(row - 1)
            self.state.set_cursor(row - 1, join_col)

    def delete_forward(self) -> None:
        """Delete key: step right, then backspace."""

        before = self.state.cursor
        self.move_cursor("right")
        if self.state.cursor != before:
            self.delete_char()

    # -- movement --------------------------------------------------------

    def move_cursor(self, direction: Direction) -> Cursor:
        row, col = self.state.cursor
        count = self.document.line_count
        size = self.document.get_row(row).size if row < count else None

        if direction == "left":
            if col > 0:
                col -= 1
            elif row > 0:
                row -= 1
                col = self.document.get_row(row).size
        elif direction == "right":
            if size is not None and col < size:
                col += 1
            elif size is not None and col == size:
                row += 1
                col = 0
        elif direction == "up":
            if row > 0:
                row -= 1
        elif direction == "down":
            if row < count:
                row += 1
        else:
            raise ValueError(f"Unknown direction '{direction}'")

        return self.set_cursor(row, col)

    def home(self) -> Cursor:
        return self.set_cursor(self.state.row, 0)

    def end(self) -> Cursor:
        row = self.state.row
        if not self.document.has_row(row):
            return self.state.cursor
        return self.set_cursor(row, self.document.get_row(row).size)

    # -- search ----------------------------------------------------------

    def search_step(self, query: str, direction: int = FORWARD) -> Optional[SearchMatch]:
        query = query[: self.config.query_max_len]
        self.state.save_cursor()
        with telemetry.span(
            "search::step",
            logger_name="kilo_engine.search",
            metadata={"query": query, "direction": direction},
        ) as handle:
            match = self.search.step(query, direction)
            if match is not None:
                handle.add_metadata("row", match.row)
                self.state.set_cursor(match.row, match.column)
        return match

    def search_end(self, *, accept: bool = True) -> None:
        """Leave search; a cancelled search puts the cursor back."""

        self.search.cancel()
        if accept:
            self.state.forget_saved_cursor()
        else:
            self.state.restore_cursor()

    # -- persistence -----------------------------------------------------

    def write_to(self, sink: Callable[[str], object]) -> int:
        """Serialize, hand the text to ``sink`` and mark the document clean."""

        with Transaction(self, "write"):
            text, length = self.document.serialize()
            sink(text)
            self.document.mark_clean()
            telemetry.record_event(
                "buffer.write",
                data={"buffer": self.name, "bytes": length},
                logger_name=LOGGER_NAME,
            )
            return length


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, session: EditSession, label: str) -> None:
        self.session = session
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_version = 0

    def __enter__(self) -> "Transaction":
        if self.session.search.active:
            # Edits invalidate the saved overlay span.
            self.session.search.cancel()
            self.session.state.forget_saved_cursor()
        self._before_version = self.session.document.version
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            logger_name=LOGGER_NAME,
            component=True,
            metadata={"buffer": self.session.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        version = self.session.document.version
        if version != self._before_version:
            self.session.state.last_change_tick = version
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["EditSession", "SessionView", "Transaction", "Direction"]

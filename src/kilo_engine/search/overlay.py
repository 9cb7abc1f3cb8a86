"""Incremental substring search with a reversible highlight overlay."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from kilo_engine.buffer.coords import rendered_to_raw
from kilo_engine.buffer.document import Document
from kilo_engine.runtime import telemetry
from kilo_engine.syntax.models import HighlightClass

LOGGER_NAME = "kilo_engine.search"

FORWARD = 1
BACKWARD = -1


@dataclass(frozen=True, slots=True)
class SearchMatch:
    """Location of a match; ``column`` is raw, ``render_column`` rendered."""

    row: int
    column: int
    render_column: int
    length: int


@dataclass(slots=True)
class SavedSpan:
    row: int
    start: int
    classes: List[HighlightClass]
    version: int


def _normalize_direction(direction: int) -> int:
    if direction == 0:
        raise ValueError("direction must be +1 or -1")
    return FORWARD if direction > 0 else BACKWARD


def find(
    document: Document,
    query: str,
    from_row: Optional[int] = None,
    direction: int = FORWARD,
) -> Optional[SearchMatch]:
    """Scan rows cyclically starting one step past ``from_row``.

    ``from_row=None`` starts a fresh search: row 0, forward. Each row is
    visited at most once and the first occurrence inside a row wins.
    """

    step = _normalize_direction(direction)
    count = document.line_count
    if not query or count == 0:
        return None
    if from_row is None:
        current, step = -1, FORWARD
    else:
        current = from_row

    for _ in range(count):
        current += step
        if current < 0:
            current = count - 1
        elif current >= count:
            current = 0
        row = document.get_row(current)
        offset = row.render.find(query)
        if offset != -1:
            return SearchMatch(
                row=current,
                column=rendered_to_raw(row, offset, document.tab_stop),
                render_column=offset,
                length=len(query),
            )
    return None


class SearchOverlay:
    """Drives repeated ``find`` steps and paints the current match.

    The document must not be mutated while an overlay is active; the saved
    highlight span is written back by index on the next step or on cancel.
    """

    def __init__(self, document: Document) -> None:
        self.document = document
        self.query = ""
        self.last_match: Optional[int] = None
        self.direction = FORWARD
        self._saved: Optional[SavedSpan] = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def step(self, query: str, direction: int = FORWARD) -> Optional[SearchMatch]:
        """Restore the previous overlay, then find and paint the next match."""

        self.restore()
        if query != self.query:
            self.query = query
            self.last_match = None
        self.direction = _normalize_direction(direction)
        if self.last_match is None:
            self.direction = FORWARD

        match = find(self.document, query, self.last_match, self.direction)
        if match is None:
            return None

        self.last_match = match.row
        self._paint(match)
        return match

    def _paint(self, match: SearchMatch) -> None:
        row = self.document.get_row(match.row)
        start = match.render_column
        end = min(start + match.length, row.render_size)
        self._saved = SavedSpan(
            row=match.row,
            start=start,
            classes=list(row.highlight[start:end]),
            version=self.document.version,
        )
        row.highlight[start:end] = [HighlightClass.SEARCH_MATCH] * (end - start)

    def restore(self) -> None:
        """Write the saved classes back verbatim to the painted span."""

        saved = self._saved
        self._saved = None
        if saved is None:
            return
        if saved.version != self.document.version:
            telemetry.record_event(
                "search.stale_overlay",
                level="warning",
                data={"row": saved.row, "version": saved.version},
                logger_name=LOGGER_NAME,
            )
        if not self.document.has_row(saved.row):
            return
        row = self.document.get_row(saved.row)
        end = saved.start + len(saved.classes)
        if end > row.render_size:
            return
        row.highlight[saved.start : end] = saved.classes

    def cancel(self) -> None:
        """Restore the overlay and forget the search position."""

        self.restore()
        self.query = ""
        self.last_match = None
        self.direction = FORWARD


__all__ = [
    "BACKWARD",
    "FORWARD",
    "SearchMatch",
    "SearchOverlay",
    "find",
]

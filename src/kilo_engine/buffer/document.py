"""Row store and the document edit API."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from kilo_engine.config import DEFAULT_TAB_STOP
from kilo_engine.syntax import highlighter
from kilo_engine.syntax.defaults import load_default_profiles
from kilo_engine.syntax.models import LanguageProfile
from kilo_engine.syntax.registry import ProfileRegistry

from .coords import expand_tabs
from .row import Row

NEWLINE = "\n"


class Document:
    """Ordered rows plus the active language profile and a dirty counter.

    Every operation addresses rows by index and treats out-of-range input as
    a silent no-op (columns are clamped instead). Row objects returned by
    :meth:`get_row` are only valid until the next mutation.
    """

    def __init__(
        self,
        *,
        tab_stop: int = DEFAULT_TAB_STOP,
        profile: Optional[LanguageProfile] = None,
        filename: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        if tab_stop <= 0:
            raise ValueError("tab_stop must be positive")
        self._rows: List[Row] = []
        self.tab_stop = tab_stop
        self.active_profile = profile
        self.filename = filename
        self.encoding = encoding
        self.dirty = 0
        self.version = 0

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        filename: Optional[str] = None,
        registry: Optional[ProfileRegistry] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
        profile: Optional[LanguageProfile] = None,
    ) -> "Document":
        """Build a clean document from loader output (newlines stripped).

        An explicit ``profile`` wins; otherwise one is selected from
        ``filename`` against ``registry`` (default profiles when omitted).
        """

        document = cls(tab_stop=tab_stop, profile=profile, filename=filename)
        if profile is None and filename:
            document.active_profile = (
                registry if registry is not None else load_default_profiles()
            ).select_for_filename(filename)
        for line in lines:
            document.insert_row(document.line_count, line)
        document.dirty = 0
        document.version = 0
        return document

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Document":
        """Split flat text on ``\\n`` only; trailing ``\\r`` is dropped per line.

        Form feeds and a ``\\r`` inside a line stay part of the row.
        """

        pieces = text.split(NEWLINE)
        if pieces[-1] == "":
            pieces.pop()
        return cls.from_lines((piece.rstrip("\r") for piece in pieces), **kwargs)

    # -- row store -----------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._rows)

    def get_row(self, index: int) -> Row:
        return self._rows[index]

    def has_row(self, index: int) -> bool:
        return 0 <= index < len(self._rows)

    def rows(self) -> Sequence[Row]:
        return tuple(self._rows)

    def lines(self) -> Sequence[str]:
        return tuple(row.raw for row in self._rows)

    def _touch(self) -> None:
        self.dirty += 1
        self.version += 1

    def _renumber(self, start: int) -> None:
        for index in range(start, len(self._rows)):
            self._rows[index].index = index

    def _rerender(self, index: int) -> None:
        row = self._rows[index]
        row.render = expand_tabs(row.raw, self.tab_stop)
        highlighter.refresh(self._rows, self.active_profile, index)

    # -- profile selection ---------------------------------------------

    def set_profile(self, profile: Optional[LanguageProfile]) -> None:
        self.active_profile = profile
        highlighter.highlight_all(self._rows, profile)

    def select_profile(
        self,
        filename: Optional[str] = None,
        registry: Optional[ProfileRegistry] = None,
    ) -> Optional[LanguageProfile]:
        """Pick a profile by filename; no match disables highlighting."""

        if filename is not None:
            self.filename = filename
        source = registry if registry is not None else load_default_profiles()
        profile = source.select_for_filename(self.filename)
        self.set_profile(profile)
        return profile

    # -- edit API --------------------------------------------------------

    def insert_row(self, at: int, text: str) -> None:
        if at < 0 or at > len(self._rows):
            return
        row = Row(index=at, raw=text, render=expand_tabs(text, self.tab_stop))
        self._rows.insert(at, row)
        self._renumber(at + 1)
        # The old occupant of ``at`` now follows a different row, so it is
        # rescanned even when the new row's comment state did not change.
        highlighter.refresh(self._rows, self.active_profile, at, through=at + 1)
        self._touch()

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= len(self._rows):
            return
        del self._rows[at]
        self._renumber(at)
        highlighter.refresh(self._rows, self.active_profile, at)
        self._touch()

    def insert_char(self, row: int, column: int, char: str) -> None:
        if not self.has_row(row) or not char:
            return
        target = self._rows[row]
        if column < 0 or column > target.size:
            column = target.size
        target.raw = target.raw[:column] + char + target.raw[column:]
        self._rerender(row)
        self._touch()

    def delete_char(self, row: int, column: int) -> None:
        if not self.has_row(row):
            return
        target = self._rows[row]
        if column < 0 or column >= target.size:
            return
        target.raw = target.raw[:column] + target.raw[column + 1 :]
        self._rerender(row)
        self._touch()

    def append_string(self, row: int, text: str) -> None:
        if not self.has_row(row):
            return
        self._rows[row].raw += text
        self._rerender(row)
        self._touch()

    def truncate_row(self, row: int, column: int) -> None:
        """Drop everything from ``column`` to the end of the row."""

        if not self.has_row(row):
            return
        target = self._rows[row]
        column = max(0, min(column, target.size))
        if column == target.size:
            return
        target.raw = target.raw[:column]
        self._rerender(row)
        self._touch()

    def split_row_at(self, row: int, column: int) -> None:
        """Break ``row`` at ``column``; the tail becomes row ``row + 1``."""

        if not self.has_row(row):
            return
        target = self._rows[row]
        column = max(0, min(column, target.size))
        if column == 0:
            self.insert_row(row, "")
            return
        tail = target.raw[column:]
        self.insert_row(row + 1, tail)
        self.truncate_row(row, column)

    def join_row_with_next(self, row: int) -> None:
        """Append row ``row + 1`` onto ``row`` and remove it."""

        if not self.has_row(row) or not self.has_row(row + 1):
            return
        self.append_string(row, self._rows[row + 1].raw)
        self.delete_row(row + 1)

    # -- serialization ---------------------------------------------------

    def to_text(self) -> str:
        return "".join(f"{row.raw}{NEWLINE}" for row in self._rows)

    def serialize(self) -> tuple[str, int]:
        """Return the newline-joined text and its encoded byte length."""

        text = self.to_text()
        return text, len(text.encode(self.encoding))

    def mark_clean(self) -> None:
        self.dirty = 0


__all__ = ["Document"]

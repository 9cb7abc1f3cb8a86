"""Raw <-> rendered column conversion for tab-expanded rows."""

from __future__ import annotations

from typing import Union

from kilo_engine.config import DEFAULT_TAB_STOP

from .row import Row

TAB = "\t"

RowLike = Union[Row, str]


def _raw_text(row: RowLike) -> str:
    return row.raw if isinstance(row, Row) else row


def _check_tab_stop(tab_stop: int) -> None:
    if tab_stop <= 0:
        raise ValueError("tab_stop must be positive")


def tab_width(rendered_column: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Columns a tab occupies when it starts at ``rendered_column``."""

    return tab_stop - (rendered_column % tab_stop)


def expand_tabs(raw: str, tab_stop: int = DEFAULT_TAB_STOP) -> str:
    """Replace every tab with spaces up to the next multiple of ``tab_stop``."""

    _check_tab_stop(tab_stop)
    if TAB not in raw:
        return raw
    out: list[str] = []
    width = 0
    for ch in raw:
        if ch == TAB:
            step = tab_width(width, tab_stop)
            out.append(" " * step)
            width += step
        else:
            out.append(ch)
            width += 1
    return "".join(out)


def raw_to_rendered(
    row: RowLike, raw_column: int, tab_stop: int = DEFAULT_TAB_STOP
) -> int:
    """Rendered column of ``raw_column``, clamped to ``0..len(raw)`` first."""

    _check_tab_stop(tab_stop)
    raw = _raw_text(row)
    raw_column = max(0, min(raw_column, len(raw)))
    rendered = 0
    for ch in raw[:raw_column]:
        rendered += tab_width(rendered, tab_stop) if ch == TAB else 1
    return rendered


def rendered_to_raw(
    row: RowLike, rendered_column: int, tab_stop: int = DEFAULT_TAB_STOP
) -> int:
    """Inverse of :func:`raw_to_rendered`.

    A rendered column that falls inside an expanded tab maps to the raw
    index of that tab; columns past the end map to ``len(raw)``.
    """

    _check_tab_stop(tab_stop)
    raw = _raw_text(row)
    current = 0
    for raw_column, ch in enumerate(raw):
        current += tab_width(current, tab_stop) if ch == TAB else 1
        if current > rendered_column:
            return raw_column
    return len(raw)


__all__ = [
    "expand_tabs",
    "raw_to_rendered",
    "rendered_to_raw",
    "tab_width",
]

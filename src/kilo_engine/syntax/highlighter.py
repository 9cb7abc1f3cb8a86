"""Incremental per-row syntax highlighter.

Each row is scanned once, left to right, over its render buffer. The only
state carried across rows is the block-comment flag: when a rescan flips a
row's ``open_block_comment`` the following row is rescanned too, and so on
until a row's flag comes out unchanged or the document ends.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, MutableSequence, Optional

from kilo_engine.runtime import telemetry

from .models import HighlightClass, LanguageProfile

if TYPE_CHECKING:
    from kilo_engine.buffer.row import Row

SEPARATORS = frozenset(",.()+-/*=~%<>[];")
QUOTES = ('"', "'")

LOGGER_NAME = "kilo_engine.syntax"


def is_separator(ch: str) -> bool:
    """Whitespace, end of row (empty string) or punctuation."""

    return not ch or ch.isspace() or ch in SEPARATORS


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def scan_row(row: Row, profile: Optional[LanguageProfile], in_comment: bool) -> bool:
    """Rebuild ``row.highlight`` and return the block-comment state at row end.

    ``in_comment`` is the state inherited from the previous row.
    """

    text = row.render
    size = len(text)
    hl = [HighlightClass.NORMAL] * size
    row.highlight = hl
    if profile is None:
        return False

    keywords = profile.keywords
    scs = profile.singleline_comment_start
    mcs = profile.multiline_comment_start
    mce = profile.multiline_comment_end
    block_comments = profile.has_block_comments
    strings = profile.highlights_strings
    numbers = profile.highlights_numbers

    prev_sep = True
    in_string = ""
    i = 0
    while i < size:
        ch = text[i]
        prev_hl = hl[i - 1] if i > 0 else HighlightClass.NORMAL

        if scs and not in_string and not in_comment:
            if text.startswith(scs, i):
                hl[i:] = [HighlightClass.COMMENT] * (size - i)
                break

        if block_comments and not in_string:
            if in_comment:
                hl[i] = HighlightClass.BLOCK_COMMENT
                if text.startswith(mce, i):
                    end = min(i + len(mce), size)
                    hl[i:end] = [HighlightClass.BLOCK_COMMENT] * (end - i)
                    i = end
                    in_comment = False
                    prev_sep = True
                else:
                    i += 1
                continue
            if text.startswith(mcs, i):
                end = min(i + len(mcs), size)
                hl[i:end] = [HighlightClass.BLOCK_COMMENT] * (end - i)
                i = end
                in_comment = True
                continue

        if strings:
            if in_string:
                hl[i] = HighlightClass.STRING
                if ch == "\\" and i + 1 < size:
                    hl[i + 1] = HighlightClass.STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in QUOTES:
                in_string = ch
                hl[i] = HighlightClass.STRING
                i += 1
                continue

        if numbers:
            if (_is_digit(ch) and (prev_sep or prev_hl == HighlightClass.NUMBER)) or (
                ch == "." and prev_hl == HighlightClass.NUMBER
            ):
                hl[i] = HighlightClass.NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            matched = None
            for keyword in keywords:
                word = keyword.text
                end = i + len(word)
                if text.startswith(word, i) and is_separator(text[end : end + 1]):
                    matched = keyword
                    break
            if matched is not None:
                end = i + len(matched.text)
                hl[i:end] = [matched.highlight] * (end - i)
                i = end
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return in_comment


def refresh(
    rows: MutableSequence[Row],
    profile: Optional[LanguageProfile],
    start: int,
    *,
    through: Optional[int] = None,
) -> int:
    """Rescan ``rows[start..through]`` and then cascade while state flips.

    Returns the number of rows rescanned. ``through`` defaults to ``start``.
    """

    count = len(rows)
    if start < 0 or start >= count:
        return 0
    last_forced = start if through is None else min(max(through, start), count - 1)

    scanned = 0
    index = start
    while index < count:
        row = rows[index]
        inherited = index > 0 and rows[index - 1].open_block_comment
        open_comment = scan_row(row, profile, inherited)
        changed = open_comment != row.open_block_comment
        row.open_block_comment = open_comment
        scanned += 1
        if index >= last_forced and not changed:
            break
        index += 1

    if scanned > last_forced - start + 1:
        telemetry.record_event(
            "syntax.cascade",
            level="debug",
            data={"start": start, "rows": scanned},
            logger_name=LOGGER_NAME,
        )
    return scanned


def highlight_all(rows: MutableSequence[Row], profile: Optional[LanguageProfile]) -> int:
    """Rescan every row, top to bottom."""

    if not rows:
        return 0
    return refresh(rows, profile, 0, through=len(rows) - 1)


__all__ = [
    "SEPARATORS",
    "is_separator",
    "scan_row",
    "refresh",
    "highlight_all",
]

from __future__ import annotations

from typing import List, Sequence

from kilo_engine.buffer import Document
from kilo_engine.syntax import (
    C_PROFILE,
    PYTHON_PROFILE,
    HighlightClass,
    LanguageProfile,
    is_separator,
)

H = HighlightClass
N = H.NORMAL
BC = H.BLOCK_COMMENT
K1 = H.KEYWORD1


def make_document(
    lines: Sequence[str], profile: LanguageProfile | None = C_PROFILE
) -> Document:
    return Document.from_lines(lines, profile=profile)


def classes(document: Document, row: int) -> List[HighlightClass]:
    return list(document.get_row(row).highlight)


def test_separator_set() -> None:
    for ch in " \t,.()+-/*=~%<>[];":
        assert is_separator(ch)
    assert is_separator("")
    for ch in "a_Z9\"'{":
        assert not is_separator(ch)


def test_block_comment_spans_rows() -> None:
    document = make_document(["/* start", "middle", "end */ int x;"])

    assert classes(document, 0) == [BC] * len("/* start")
    assert classes(document, 1) == [BC] * len("middle")
    assert classes(document, 2) == [BC] * 6 + [N] + [K1] * 3 + [N] * 3
    assert [row.open_block_comment for row in document.rows()] == [True, True, False]


def test_closing_comment_cascades_to_following_rows() -> None:
    document = make_document(["/* start", "middle", "end */ int x;"])

    document.append_string(0, " */")

    assert classes(document, 0) == [BC] * len("/* start */")
    assert classes(document, 1) == [N] * len("middle")
    assert classes(document, 2) == [N] * 7 + [K1] * 3 + [N] * 3
    assert [row.open_block_comment for row in document.rows()] == [False] * 3


def test_unterminated_comment_reaches_end_of_file() -> None:
    document = make_document(["int a;", "/* open", "x = 1;", "y"])

    assert [row.open_block_comment for row in document.rows()] == [
        False,
        True,
        True,
        True,
    ]
    assert classes(document, 1) == [BC] * len("/* open")
    assert classes(document, 2) == [BC] * len("x = 1;")
    assert classes(document, 3) == [BC]


def test_cascade_over_large_file_is_iterative() -> None:
    lines = ["/*"] + ["x"] * 5000
    document = make_document(lines)
    assert document.get_row(5000).open_block_comment is True

    document.append_string(0, "*/")

    assert document.get_row(5000).open_block_comment is False
    assert classes(document, 5000) == [N]


def test_keyword_requires_separator_boundary() -> None:
    document = make_document(["intake = 1;", "int intake;"])

    first = classes(document, 0)
    assert K1 not in first and H.KEYWORD2 not in first
    assert first[9] == H.NUMBER

    second = classes(document, 1)
    assert second[:3] == [K1] * 3
    assert second[4:10] == [N] * 6


def test_secondary_keywords_use_keyword2() -> None:
    document = make_document(["size_t n = NULL;"])

    row = classes(document, 0)
    assert row[:6] == [H.KEYWORD2] * 6
    assert row[11:15] == [H.KEYWORD2] * 4


def test_strings_and_escapes() -> None:
    document = make_document(['x = "a\\"b" + 1;'])

    row = classes(document, 0)
    assert row[4:10] == [H.STRING] * 6
    assert row[10:13] == [N] * 3
    assert row[13] == H.NUMBER
    assert row[14] == N


def test_comment_markers_inside_strings_are_ignored() -> None:
    document = make_document(['"// not a comment"', "'/*'", "int y;"])

    assert classes(document, 0) == [H.STRING] * len('"// not a comment"')
    assert classes(document, 1) == [H.STRING] * 4
    assert document.get_row(1).open_block_comment is False
    assert classes(document, 2)[:3] == [K1] * 3


def test_numbers_and_decimals() -> None:
    document = make_document(["3.14 x1 (42)"])

    row = classes(document, 0)
    assert row[:4] == [H.NUMBER] * 4
    assert row[5:7] == [N, N]
    assert row[9:11] == [H.NUMBER] * 2


def test_single_line_comment_ends_row() -> None:
    document = make_document(["int a; // note /* x"])

    row = classes(document, 0)
    assert row[:3] == [K1] * 3
    assert row[7:] == [H.COMMENT] * (len(row) - 7)
    assert document.get_row(0).open_block_comment is False


def test_tabs_are_highlighted_in_render_space() -> None:
    document = make_document(["\tint x;"])

    row = document.get_row(0)
    assert row.render == "    int x;"
    assert list(row.highlight[4:7]) == [K1] * 3


def test_profile_without_block_comments() -> None:
    document = make_document(["def f(): # /* hi", "return 1"], PYTHON_PROFILE)

    first = classes(document, 0)
    assert first[:3] == [K1] * 3
    assert first[9:] == [H.COMMENT] * (len(first) - 9)
    assert document.get_row(0).open_block_comment is False
    assert classes(document, 1)[:6] == [K1] * 6


def test_no_profile_means_all_normal() -> None:
    document = make_document(["/* int 42 */", '"s"'], profile=None)

    for row in document.rows():
        assert set(row.highlight) <= {N}
        assert row.open_block_comment is False


def test_render_and_highlight_lengths_stay_equal() -> None:
    document = make_document(["\tif (x) {", "/*\t*/", ""])

    document.insert_char(0, 1, "\t")
    document.delete_char(1, 0)
    document.insert_row(2, "\t\t'str")
    document.append_string(3, "\t")
    document.split_row_at(0, 3)
    document.join_row_with_next(1)
    document.delete_row(0)

    for row in document.rows():
        assert len(row.render) == len(row.highlight)

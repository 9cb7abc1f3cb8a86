import pytest

from kilo_engine.buffer import Row, expand_tabs, raw_to_rendered, rendered_to_raw

SAMPLES = ("", "plain", "\t", "a\tb", "\t\tx", "ab\tcd\t\tef", "int\tx;\t// c")


def test_expand_tabs_pads_to_next_stop() -> None:
    assert expand_tabs("a\tb", 4) == "a   b"
    assert expand_tabs("a\tb", 8) == "a" + " " * 7 + "b"
    assert expand_tabs("abcd\te", 4) == "abcd    e"
    assert expand_tabs("no tabs", 4) == "no tabs"


def test_raw_to_rendered_counts_tab_width() -> None:
    assert raw_to_rendered("\tab", 1, 4) == 4
    assert raw_to_rendered("a\tb", 2, 4) == 4
    assert raw_to_rendered("a\tb", 3, 4) == 5


def test_raw_to_rendered_clamps_column() -> None:
    assert raw_to_rendered("abc", 10, 4) == 3
    assert raw_to_rendered("abc", -2, 4) == 0


def test_rendered_column_inside_tab_maps_to_tab() -> None:
    for rendered in (1, 2, 3):
        assert rendered_to_raw("a\tb", rendered, 4) == 1
    assert rendered_to_raw("a\tb", 4, 4) == 2
    assert rendered_to_raw("a\tb", 40, 4) == 3


def test_accepts_rows() -> None:
    row = Row(index=0, raw="\tx")
    assert raw_to_rendered(row, 1, 8) == 8
    assert rendered_to_raw(row, 8, 8) == 1


@pytest.mark.parametrize("tab_stop", [1, 2, 4, 8])
def test_raw_round_trip_is_exact(tab_stop: int) -> None:
    for raw in SAMPLES:
        for column in range(len(raw) + 1):
            rendered = raw_to_rendered(raw, column, tab_stop)
            assert rendered >= column
            assert rendered_to_raw(raw, rendered, tab_stop) == column


@pytest.mark.parametrize("tab_stop", [2, 4, 8])
def test_rendered_columns_snap_back_to_tab_boundary(tab_stop: int) -> None:
    for raw in SAMPLES:
        width = len(expand_tabs(raw, tab_stop))
        for rendered in range(width + 1):
            column = rendered_to_raw(raw, rendered, tab_stop)
            assert raw_to_rendered(raw, column, tab_stop) <= rendered


def test_non_positive_tab_stop_rejected() -> None:
    with pytest.raises(ValueError):
        expand_tabs("\t", 0)

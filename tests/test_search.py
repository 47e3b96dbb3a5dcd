"""Tests for incremental search with highlight overlay."""

from inn.core.syntax import HL_MATCH
from inn.utils.keys import ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, ARROW_UP, ENTER, ESC
from inn.utils.search import SearchEngine

from conftest import make_buffer


class TestSearchEngine:
    def test_finds_match_and_maps_column(self, c_buffer) -> None:
        engine = SearchEngine(c_buffer)
        result = engine.step("y", ord("y"))
        assert (result.row, result.column) == (1, 4)
        assert c_buffer.rows[1].hl[4] == HL_MATCH

    def test_next_wraps_to_only_match(self, c_buffer) -> None:
        engine = SearchEngine(c_buffer)
        engine.step("y", ord("y"))
        result = engine.step("y", ARROW_DOWN)
        assert (result.row, result.column) == (1, 4)
        result = engine.step("y", ARROW_RIGHT)
        assert result.row == 1

    def test_single_match_near_end_wraps(self) -> None:
        buf = make_buffer(["a", "b", "c", "d", "target"])
        engine = SearchEngine(buf)
        assert engine.step("target", ord("t")).row == 4
        assert engine.step("target", ARROW_DOWN).row == 4
        assert engine.step("target", ARROW_UP).row == 4

    def test_directions(self) -> None:
        buf = make_buffer(["foo", "bar", "foo", "baz"])
        engine = SearchEngine(buf)
        assert engine.step("foo", ord("o")).row == 0
        assert engine.step("foo", ARROW_DOWN).row == 2
        assert engine.step("foo", ARROW_DOWN).row == 0
        assert engine.step("foo", ARROW_LEFT).row == 2
        assert engine.step("foo", ARROW_UP).row == 0

    def test_query_edit_restarts_from_top(self) -> None:
        buf = make_buffer(["ab", "abc", "ab"])
        engine = SearchEngine(buf)
        assert engine.step("ab", ord("b")).row == 0
        assert engine.step("ab", ARROW_DOWN).row == 1
        assert engine.step("abc", ord("c")).row == 1
        assert engine.step("ab", 127).row == 0

    def test_overlay_is_restored(self, c_buffer) -> None:
        original = list(c_buffer.rows[1].hl)
        engine = SearchEngine(c_buffer)
        engine.step("y = 2", ord("2"))
        assert c_buffer.rows[1].hl[4:9] == [HL_MATCH] * 5
        engine.step("y = 2", ENTER)
        assert c_buffer.rows[1].hl == original

    def test_moving_between_matches_restores_previous_row(self) -> None:
        buf = make_buffer(["int a;", "int b;"], "t.c")
        first = list(buf.rows[0].hl)
        engine = SearchEngine(buf)
        engine.step("int", ord("t"))
        engine.step("int", ARROW_DOWN)
        assert buf.rows[0].hl == first
        assert buf.rows[1].hl[0:3] == [HL_MATCH] * 3

    def test_not_found(self, c_buffer) -> None:
        before = [list(row.hl) for row in c_buffer.rows]
        engine = SearchEngine(c_buffer)
        assert engine.step("nothing", ord("g")) is None
        assert [row.hl for row in c_buffer.rows] == before

    def test_empty_query_never_matches(self, c_buffer) -> None:
        assert SearchEngine(c_buffer).step("", 127) is None

    def test_escape_resets(self, c_buffer) -> None:
        engine = SearchEngine(c_buffer)
        engine.step("int", ord("t"))
        engine.step("int", ESC)
        assert engine.last_match == -1
        assert engine.saved_hl is None

    def test_match_after_tab_maps_to_raw_column(self) -> None:
        buf = make_buffer(["\tfoo"])
        result = SearchEngine(buf).step("foo", ord("o"))
        assert result.offset == 8
        assert result.column == 1

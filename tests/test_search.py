"""Test literal forward search."""

import pytest
from fox.model import TextModel, Position
from fox.search import find_forward


def test_finds_on_later_line():
    lines = ["abc", "def", "ghi"]
    assert find_forward(lines, "gh", Position(0, 0)) == Position(2, 0)


def test_start_line_searched_from_column():
    assert find_forward(["abab"], "ab", Position(0, 1)) == Position(0, 2)


def test_match_at_start_position():
    assert find_forward(["xabc"], "abc", Position(0, 1)) == Position(0, 1)


def test_wraps_to_earlier_row():
    lines = ["abc", "def", "def"]
    assert find_forward(lines, "def", Position(2, 3)) == Position(1, 0)


def test_wrap_stops_before_start_line():
    """Text before the start column on the start line is never matched."""
    assert find_forward(["def xx"], "def", Position(0, 3)) is None
    assert find_forward(["xab", "cd"], "x", Position(0, 2)) is None


def test_wrap_finds_rows_above_start_line():
    assert find_forward(["def", "def xx"], "def", Position(1, 3)) == Position(0, 0)


def test_case_sensitive():
    assert find_forward(["Hello"], "hello", Position(0, 0)) is None


def test_absent_pattern():
    assert find_forward(["abc", "def", "def"], "xyz", Position(0, 0)) is None


def test_empty_pattern_never_matches():
    assert find_forward(["abc"], "", Position(0, 0)) is None


def test_out_of_range_start_is_clamped():
    assert find_forward(["abc", "def"], "a", Position(7, 99)) == Position(0, 0)


def test_pattern_does_not_span_lines():
    assert find_forward(["ab", "cd"], "bc", Position(0, 0)) is None


class TestFindNext:
    """Search through the model: selection brackets the match."""

    @pytest.fixture
    def model(self):
        return TextModel(["abc", "def", "def"])

    def test_selects_match(self, model):
        model.move_to(2, 3)
        assert model.find_next("def")
        assert model.anchor == Position(1, 0)
        assert model.cursor == Position(1, 3)
        assert model.selected_text() == "def"

    def test_repeated_search_advances(self, model):
        assert model.find_next("def")
        assert model.cursor == Position(1, 3)
        assert model.find_next("def")
        assert model.anchor == Position(2, 0)
        assert model.find_next("def")
        assert model.anchor == Position(1, 0)

    def test_not_found_leaves_state(self, model):
        model.move_to(1, 1)
        model.extend_selection(1)
        assert not model.find_next("xyz")
        assert model.cursor == Position(1, 1)
        assert model.anchor == Position(1, 2)

    def test_single_line_after_only_match_is_not_found(self):
        model = TextModel(["def"])
        model.move_to(0, 3)
        assert not model.find_next("def")
        assert model.cursor == Position(0, 3)
        assert not model.has_selection

    def test_explicit_start(self, model):
        assert model.find_next("c", start=Position(0, 0))
        assert model.cursor == Position(0, 3)

    def test_search_does_not_set_dirty(self, model):
        model.find_next("e")
        assert not model.dirty

"""Test frame composition with styling disabled, so frames are plain text."""

import blessed
import pytest

from fox.highlight import Highlighter, Palette, get_style
from fox.model import Position, TextModel
from fox.overlay import OverlayKind, OverlayState
from fox.render import (cursor_screen_position, gutter_width, render_frame,
                        visual_column, _selected_columns)
from fox.viewport import Viewport

WIDTH, HEIGHT = 20, 6


@pytest.fixture(scope="module")
def term():
    return blessed.Terminal(force_styling=None)


@pytest.fixture(scope="module")
def palette():
    return Palette.from_style(get_style("gruvbox-dark"))


def render(term, palette, model, overlay=None, status=None, help_text=""):
    return render_frame(term, model, title="notes.txt", overlay=overlay or OverlayState(),
                        status=status, highlighter=Highlighter(), palette=palette,
                        width=WIDTH, height=HEIGHT, help_text=help_text)


def make_model(lines):
    return TextModel(lines, viewport=Viewport(height=HEIGHT))


def test_visual_column_expands_tabs():
    assert visual_column("\tab", 1) == 4
    assert visual_column("a\tb", 3) == 6
    assert visual_column("abc", 2) == 2


def test_gutter_fits_largest_visible_number():
    model = TextModel(["x"] * 200, viewport=Viewport(height=24))
    assert gutter_width(model) == 4  # " 22 "
    model.viewport.scroll = 95
    assert gutter_width(model) == 5  # " 117 "


def test_cursor_position_accounts_for_gutter_and_tab():
    model = make_model(["\tx"])
    model.move_to(0, 1)
    assert cursor_screen_position(model, WIDTH) == (3 + 4, 1)


def test_cursor_position_off_screen():
    model = make_model(["a"] * 10)
    model.viewport.scroll = 5
    assert cursor_screen_position(model, WIDTH) is None


def test_frame_fills_screen_exactly(term, palette):
    model = make_model(["a line that is much longer than the screen", "b"])
    frame = render(term, palette, model)
    assert len(frame) == WIDTH * HEIGHT


def test_header_shows_title_and_dirty_marker(term, palette):
    model = make_model(["abc"])
    assert "notes.txt" in render(term, palette, model)
    assert "notes.txt*" not in render(term, palette, model)
    model.insert_char("x")
    assert "notes.txt*" in render(term, palette, model)


def test_rows_past_end_show_tilde(term, palette):
    frame = render(term, palette, make_model(["only"]))
    assert " 1 only" in frame
    assert " 2 ~" in frame


def test_tabs_and_control_characters(term, palette):
    frame = render(term, palette, make_model(["\tx", "dos\r"]))
    assert "--->x" in frame
    assert "dos?" in frame


def test_footer_shows_location_and_status(term, palette):
    model = make_model(["abc", "defg"])
    model.move_to(1, 2)
    frame = render(term, palette, model, status="Saved!")
    footer = frame[-WIDTH:]
    assert footer.startswith("Saved!")
    assert footer.endswith("2:3")


def test_prompt_in_footer(term, palette):
    overlay = OverlayState()
    overlay.open_prompt(OverlayKind.FIND)
    overlay.append("ab")
    frame = render(term, palette, make_model(["abc"]), overlay=overlay, status="Nope")
    footer = frame[-WIDTH:]
    assert footer.startswith("Search: ab  Nope")


def test_help_popup_draws_text(term, palette):
    overlay = OverlayState()
    overlay.open_popup(OverlayKind.HELP)
    frame = render_frame(term, make_model(["abc"]), title="t", overlay=overlay, status=None,
                         highlighter=Highlighter(), palette=palette, width=60, height=24,
                         help_text="Commands:\n ctrl-s: save")
    assert "Help!" in frame
    assert " ctrl-s: save" in frame


def test_selected_columns_multi_row():
    model = make_model(["ab", "cde", "f"])
    model.move_to(0, 1)
    model.anchor = Position(2, 1)
    assert _selected_columns(model, 0) == (1, 3)  # Includes the line break
    assert _selected_columns(model, 1) == (0, 4)
    assert _selected_columns(model, 2) == (0, 1)


def test_no_selected_columns_without_selection():
    model = make_model(["abc"])
    assert _selected_columns(model, 0) is None


def test_render_does_not_mutate_state(term, palette):
    model = make_model(["abc", "def"])
    model.move_to(1, 1)
    model.extend_selection(1)
    before = (list(model.lines), model.cursor.copy(), model.anchor.copy(), model.viewport.scroll)
    render(term, palette, model)
    render(term, palette, model)
    assert (model.lines, model.cursor, model.anchor, model.viewport.scroll) == before

"""Frame composition: editor state in, one string of terminal output out.

Nothing here touches the terminal or mutates state, so a frame can be
rebuilt after every key press.
"""

from typing import Optional

from .constants import EditorConstants
from .highlight import Highlighter, Palette, RGB
from .model import TextModel
from .overlay import OverlayState, Popup, Prompt

Cell = tuple[str, RGB, RGB]


def visual_column(line: str, column: int) -> int:
    """Screen offset of ``column`` in ``line`` once tabs are expanded."""
    prefix = line[:column]
    return len(prefix) + prefix.count('\t') * (EditorConstants.TAB_WIDTH - 1)


def gutter_width(model: TextModel) -> int:
    """Width of the line-number gutter including its padding."""
    last_number = model.viewport.scroll + model.viewport.visible_rows()
    return len(str(last_number)) + 2


def cursor_screen_position(model: TextModel, width: int) -> Optional[tuple[int, int]]:
    """Where the caret lands on screen as ``(x, y)``, or None if off-screen."""
    offset = model.cursor.row - model.viewport.scroll
    if offset < 0 or offset >= model.viewport.visible_rows():
        return None
    x = gutter_width(model) + visual_column(model.current_line, model.cursor.column)
    if x >= width:
        return None
    return (x, EditorConstants.HEADER_ROWS + offset)


def _selected_columns(model: TextModel, row: int) -> Optional[tuple[int, int]]:
    """Selected column span on ``row``; may run one past the end for the line break."""
    if not model.has_selection:
        return None
    start, end = model.selection_range()
    if row < start.row or row > end.row:
        return None
    first = start.column if row == start.row else 0
    last = end.column if row == end.row else len(model.lines[row]) + 1
    return (first, last) if first < last else None


def _line_cells(line: str, spans, selected: Optional[tuple[int, int]], palette: Palette) -> list[Cell]:
    cells = []
    column = 0
    for text, color in spans:
        for ch in text:
            if selected and selected[0] <= column < selected[1]:
                fg, bg = palette.highlight_fg, palette.highlight_bg
            elif ch == '\t':
                fg, bg = palette.gutter_bg, palette.bg
            else:
                fg, bg = color or palette.fg, palette.bg
            if ch == '\t':
                glyph = EditorConstants.TAB_GLYPH
            elif ord(ch) < 32 or ch == '\x7f':
                glyph = '?'  # Stray control characters, e.g. the \r of a CRLF file
            else:
                glyph = ch
            cells.append((glyph, fg, bg))
            column += 1
    if selected and selected[1] > len(line):
        cells.append((' ', palette.highlight_fg, palette.highlight_bg))
    return cells


def _paint(term, text: str, fg: RGB, bg: RGB) -> str:
    return term.color_rgb(*fg) + term.on_color_rgb(*bg) + text


def _emit(term, cells: list[Cell], limit: int) -> tuple[str, int]:
    """Join cells into styled runs, stopping before ``limit`` columns."""
    out = []
    used = 0
    run_text = ""
    run_style = None
    for glyph, fg, bg in cells:
        if used + len(glyph) > limit:
            glyph = glyph[:limit - used]
            if not glyph:
                break
        if (fg, bg) != run_style:
            if run_text:
                out.append(_paint(term, run_text, *run_style))
            run_text, run_style = "", (fg, bg)
        run_text += glyph
        used += len(glyph)
    if run_text:
        out.append(_paint(term, run_text, *run_style))
    return "".join(out), used


def _bar(term, text: str, width: int, palette: Palette) -> str:
    text = text[:width]
    return _paint(term, text.ljust(width), palette.fg, palette.header_bg)


def _header(term, model: TextModel, title: str, width: int, palette: Palette) -> str:
    label = title + ("*" if model.dirty else "")
    label = label[:width]
    offset = (width - len(label)) // 2
    return term.move_xy(0, 0) + _bar(term, " " * offset + label, width, palette)


def _content(term, model: TextModel, highlighter: Highlighter, width: int, palette: Palette) -> str:
    out = []
    gutter = gutter_width(model)
    available = max(0, width - gutter)
    document_rows = model.viewport.visible_range(model.line_count)
    for offset in range(model.viewport.visible_rows()):
        row = model.viewport.scroll + offset
        y = EditorConstants.HEADER_ROWS + offset
        number = f" {row + 1:>{gutter - 2}} "[:width]
        out.append(term.move_xy(0, y) + _paint(term, number, palette.gutter_fg, palette.gutter_bg))
        if row in document_rows:
            line = model.lines[row]
            cells = _line_cells(line, highlighter.spans(line), _selected_columns(model, row), palette)
        else:
            cells = [("~", palette.gutter_fg, palette.bg)]
        text, used = _emit(term, cells, available)
        out.append(text)
        if used < available:
            out.append(_paint(term, " " * (available - used), palette.fg, palette.bg))
    return "".join(out)


def _footer(term, model: TextModel, overlay: OverlayState, status: Optional[str],
            width: int, height: int, palette: Palette) -> tuple[str, Optional[int]]:
    """Footer bar plus the caret column when a prompt is being typed into."""
    location = f"{model.cursor.row + 1}:{model.cursor.column + 1}"
    left = ""
    prompt_x = None
    if isinstance(overlay.active, Prompt):
        left = f"{overlay.active.kind.label}: {overlay.active.text}"
        prompt_x = len(left)
        if status:
            left += f"  {status}"
    elif status:
        left = status
    room = max(0, width - len(location) - 1)
    left = left[:room]
    if prompt_x is not None:
        prompt_x = min(prompt_x, room)
    line = left.ljust(room) + " " + location
    return term.move_xy(0, height - 1) + _bar(term, line, width, palette), prompt_x


def _popup(term, popup: Popup, description: str, width: int, height: int, palette: Palette) -> str:
    x, y = width // 6, height // 6
    box_width, box_height = width // 6 * 4, height // 6 * 4
    if box_width < 4 or box_height < 3:
        return ""
    out = []
    for i in range(box_height):
        out.append(term.move_xy(x, y + i) + _paint(term, " " * box_width, palette.fg, palette.gutter_bg))
    inner = box_width - 2
    title = popup.kind.label[:inner]
    out.append(term.move_xy(x + 1 + (inner - len(title)) // 2, y + 1)
               + _paint(term, title, palette.fg, palette.gutter_bg))
    for i, line in enumerate(description.splitlines()[:max(0, box_height - 3)]):
        line = line.expandtabs(EditorConstants.TAB_WIDTH)[:inner]
        out.append(term.move_xy(x + 1, y + 3 + i) + _paint(term, line, palette.fg, palette.gutter_bg))
    return "".join(out)


def render_frame(term, model: TextModel, *, title: str, overlay: OverlayState,
                 status: Optional[str], highlighter: Highlighter, palette: Palette,
                 width: int, height: int, help_text: str = "") -> str:
    """Compose a full screen for the current state.

    Args:
        term: blessed Terminal used only to produce escape sequences
        model: document, caret, selection and scroll position
        title: name shown centered in the header
        overlay: the active prompt or popup, if any
        status: transient status message for the footer
        highlighter: syntax colorizer for visible lines
        palette: chrome colors
        width, height: terminal size
        help_text: body of the help popup
    """
    parts = [term.hide_cursor,
             _header(term, model, title, width, palette),
             _content(term, model, highlighter, width, palette)]
    footer, prompt_x = _footer(term, model, overlay, status, width, height, palette)
    parts.append(footer)
    if isinstance(overlay.active, Popup):
        parts.append(_popup(term, overlay.active, help_text, width, height, palette))
    parts.append(term.normal)

    if prompt_x is not None:
        parts.append(term.move_xy(prompt_x, height - 1) + term.normal_cursor)
    elif overlay.active is None and not model.has_selection:
        position = cursor_screen_position(model, width)
        if position is not None:
            parts.append(term.move_xy(*position) + term.normal_cursor)
    return "".join(parts)

"""Syntax coloring and theme colors, backed by Pygments."""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import Optional

import pygments
import pygments.lexers
import pygments.styles
import pygments.util
from pygments.token import Token

from .constants import EditorConstants

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]


@functools.lru_cache(maxsize=500)
def parse_rgb(hex_rgb: Optional[str]) -> Optional[RGB]:
    """Parse ``#rrggbb`` / ``rrggbb`` / ``#rgb``; anything else gives None."""
    if not hex_rgb:
        return None
    if hex_rgb.startswith("#"):
        hex_rgb = hex_rgb[1:]
    if len(hex_rgb) == 3:
        hex_rgb = "".join(c * 2 for c in hex_rgb)
    if len(hex_rgb) != 6:
        return None
    try:
        return tuple(int(hex_rgb[index:index + 2], 16) for index in (0, 2, 4))
    except ValueError:
        return None


def _scale(color: RGB, factor: float) -> RGB:
    return tuple(min(255, int(c / 3.0 * factor)) for c in color)


def get_style(name: str):
    try:
        return pygments.styles.get_style_by_name(name)
    except pygments.util.ClassNotFound:
        logger.warning(f"Unknown theme {name!r}, using {EditorConstants.DEFAULT_THEME}")
        return pygments.styles.get_style_by_name(EditorConstants.DEFAULT_THEME)


@dataclass(frozen=True)
class Palette:
    """Colors for the editor chrome, derived from a Pygments style."""
    bg: RGB
    fg: RGB
    gutter_bg: RGB
    gutter_fg: RGB
    highlight_bg: RGB
    highlight_fg: RGB
    header_bg: RGB

    @classmethod
    def from_style(cls, style, light_fix: bool = False) -> "Palette":
        dark = not light_fix
        bg = parse_rgb(style.background_color) or (0, 0, 0)
        fg = parse_rgb(style.style_for_token(Token.Text).get("color")) or (255, 255, 255)
        gutter_bg = (parse_rgb(getattr(style, "line_number_background_color", None))
                     or _scale(bg, 4.0 if dark else 2.0))
        gutter_fg = parse_rgb(getattr(style, "line_number_color", None)) or fg
        grey_bg = 48 if dark else 132
        grey_fg = 160 if dark else 48
        # Only trust a highlight color the style sets itself; the inherited
        # Pygments default is a pale yellow meant for dark text.
        own_highlight = parse_rgb(vars(style).get("highlight_color"))
        if own_highlight is not None:
            highlight_bg, highlight_fg = own_highlight, fg
        else:
            highlight_bg, highlight_fg = (grey_bg,) * 3, (grey_fg,) * 3
        header_bg = _scale(bg, 5.0 if dark else 1.5)
        return cls(bg, fg, gutter_bg, gutter_fg, highlight_bg, highlight_fg, header_bg)


class Highlighter:
    """Maps one line of text to ``(text, rgb)`` spans.

    Without a lexer (unknown file type) each line is a single uncolored span.
    """

    def __init__(self, lexer=None, style=None):
        self.lexer = lexer
        self.style = style

    @classmethod
    def for_path(cls, path: Optional[str], theme: str = EditorConstants.DEFAULT_THEME) -> "Highlighter":
        style = get_style(theme)
        if not path:
            return cls(None, style)
        try:
            lexer = pygments.lexers.get_lexer_for_filename(os.path.basename(path), stripnl=False)
        except pygments.util.ClassNotFound:  # No lexer for path
            logger.info(f"No syntax for {path}, rendering as plain text")
            return cls(None, style)
        return cls(lexer, style)

    @property
    def is_plain(self) -> bool:
        return self.lexer is None

    def _color_for(self, token_type) -> Optional[RGB]:
        try:
            return parse_rgb(self.style.style_for_token(token_type).get("color"))
        except KeyError:
            return None

    def spans(self, line: str) -> list[tuple[str, Optional[RGB]]]:
        if self.lexer is None or not line:
            return [(line, None)]
        result = []
        position = 0
        for token_type, text in pygments.lex(line, self.lexer):
            # Lexers add a trailing newline and rewrite \r; take the characters
            # from the line itself and only the lengths from the tokens
            end = min(len(line), position + len(text))
            if end <= position:
                break
            result.append((line[position:end], self._color_for(token_type)))
            position = end
        if position < len(line):
            result.append((line[position:], None))
        return result

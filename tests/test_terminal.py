"""Test the terminal wrapper and the editor's draw/run loop."""

from unittest.mock import MagicMock, PropertyMock, patch

import blessed
import pytest

from fox.config import Config
from fox.editor import Editor
from fox.keyboard import KeyEvent, KeyType
from fox.model import TextModel
from fox.storage import SaveError
from fox.terminal import TerminalInterface


def make_terminal():
    return TerminalInterface(blessed.Terminal(force_styling=None))


def test_get_key_without_input_returns_none():
    assert make_terminal().get_key(timeout=0) is None


def test_write_prints_frame(capsys):
    make_terminal().write("frame")
    assert capsys.readouterr().out == "frame"


def test_cleanup_leaves_raw_mode():
    terminal = make_terminal()
    curtsies_input = MagicMock()
    terminal._curtsies_input = curtsies_input
    terminal.is_fullscreen = True
    terminal.cleanup()
    curtsies_input.__exit__.assert_called_once_with(None, None, None)
    assert terminal._curtsies_input is None
    assert not terminal.is_fullscreen


def test_cleanup_survives_broken_input(caplog):
    terminal = make_terminal()
    terminal._curtsies_input = MagicMock()
    terminal._curtsies_input.__exit__.side_effect = OSError("gone")
    terminal.cleanup()
    assert terminal._curtsies_input is None
    assert "Could not leave raw mode" in caplog.text


def test_draw_follows_terminal_size():
    terminal = make_terminal()
    editor = Editor(terminal=terminal, config=Config())
    editor.model = TextModel([str(i) for i in range(50)], viewport=editor.model.viewport)
    editor.model.goto_line(30)
    with patch.object(type(terminal), 'width', PropertyMock(return_value=40)), \
         patch.object(type(terminal), 'height', PropertyMock(return_value=10)), \
         patch.object(terminal, 'write') as write:
        editor.draw()
    assert editor.model.viewport.height == 10
    assert editor.model.viewport.scroll <= 30 < editor.model.viewport.scroll + 8
    frame = write.call_args[0][0]
    assert "31:1" in frame


def test_run_loop_until_quit():
    terminal = make_terminal()
    editor = Editor(terminal=terminal, config=Config())
    keys = [
        KeyEvent(key_type=KeyType.REGULAR, value='a', raw='a'),
        KeyEvent(key_type=KeyType.CTRL, value='q', raw='\x11', is_ctrl=True),
        KeyEvent(key_type=KeyType.REGULAR, value='y', raw='y'),
        KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw='\r'),
    ]
    with patch.object(terminal, 'setup'), \
         patch.object(terminal, 'cleanup') as cleanup, \
         patch.object(editor, 'draw') as draw, \
         patch.object(editor, '_configure_tty', return_value=None), \
         patch.object(editor.keyboard, 'get_key_event', side_effect=keys):
        editor.run()
    assert not editor.running
    assert editor.model.lines == ["a"]
    assert draw.call_count == 4
    cleanup.assert_called_once_with()


def test_run_restores_terminal_when_save_fails(tmp_path):
    terminal = make_terminal()
    editor = Editor(terminal=terminal, config=Config())
    editor.load_file(str(tmp_path / "missing" / "x.txt"))
    save = KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True)
    with patch.object(terminal, 'setup'), \
         patch.object(terminal, 'cleanup') as cleanup, \
         patch.object(editor, 'draw'), \
         patch.object(editor, '_configure_tty', return_value=None), \
         patch.object(editor.keyboard, 'get_key_event', return_value=save):
        with pytest.raises(SaveError):
            editor.run()
    cleanup.assert_called_once_with()

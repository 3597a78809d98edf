"""Main editor controller."""

import logging
import sys
import termios
from typing import Optional

from .clipboard import ClipboardManager
from .commands import CommandRegistry
from .config import Config, config_location, load_config
from .constants import EditorConstants
from .highlight import Highlighter, Palette
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .model import TextModel
from .overlay import OverlayKind, OverlayState
from .render import render_frame
from .storage import expand_path, load_lines, save_lines
from .terminal import TerminalInterface
from .version import get_version
from .viewport import Viewport

logger = logging.getLogger(__name__)

HELP_TEXT = """Fox editor
Version {version}
Config: {config}

Commands:
 ctrl-h, F1: help
 ctrl-s: save
 ctrl-q: quit
 ctrl-f: search
 ctrl-k: go to line
 ctrl-v: paste
 ctrl-up/down: move line up/down
 shift-arrows: select
 esc: close prompt"""


def parse_line_number(text: str) -> Optional[int]:
    """Parse a 1-based line number; anything but a positive integer is None."""
    try:
        number = int(text)
    except ValueError:
        return None
    return number if number >= 1 else None


class Editor:
    """Owns the editing session: document, overlay and status line.

    Commands receive the editor and act on ``model`` and ``overlay``; the
    run loop redraws after every key event.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None, config: Optional[Config] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.config = config or load_config()
        self.model = TextModel(viewport=Viewport(self.terminal.height))
        self.overlay = OverlayState()
        self.command_registry = CommandRegistry()
        self.running = False
        # File handling
        self.filename: Optional[str] = None  # As given by the user, shown in the header
        self.path: Optional[str] = None  # With ~ and $VARS expanded
        self.status_message: Optional[str] = None
        self.highlighter = Highlighter.for_path(None, self.config.theme.name)
        self.palette = Palette.from_style(self.highlighter.style, self.config.theme.light_fix)

    def load_file(self, filename: str):
        """Load a file into the editor; a missing file starts an empty document.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        self.path = expand_path(filename)
        self.model = TextModel(load_lines(self.path), viewport=self.model.viewport)
        self.highlighter = Highlighter.for_path(self.path, self.config.theme.name)
        logger.info(f"Opened {self.path} ({self.model.line_count} lines)")

    def save(self):
        """Write the document to its file.

        Raises:
            SaveError: if writing fails; the session cannot continue safely.
        """
        if self.path is None:
            self.status_message = "No file name"
            return
        save_lines(self.path, self.model.lines)
        self.model.dirty = False
        self.status_message = EditorConstants.SAVED_MESSAGE

    def paste(self):
        text = ClipboardManager.paste_text()
        if text is None:
            self.status_message = EditorConstants.PASTE_FAILED_MESSAGE
            return
        self.model.insert_text(text)

    def help_text(self) -> str:
        return HELP_TEXT.format(version=get_version(), config=config_location())

    # --- Event handling ---

    def handle_key_event(self, key_event: KeyEvent):
        """Apply one key event to the editor state.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Status messages last until the next key press
        self.status_message = None

        if self.overlay.is_active:
            self._handle_overlay_key(key_event)
            return

        self.command_registry.execute(self, key_event)

    def _handle_overlay_key(self, key_event: KeyEvent):
        """Route a key to the open prompt or popup; nothing reaches the document."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.overlay.close()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            self._commit_overlay()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.overlay.backspace()
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if char and ord(char[0]) >= 32:
                self.overlay.append(char)

    def _commit_overlay(self):
        kind = self.overlay.kind
        text = self.overlay.text
        if kind == OverlayKind.CONFIRM_QUIT:
            if text in EditorConstants.QUIT_CONFIRM_ANSWERS:
                self.overlay.close()
                self.running = False
            # Any other answer leaves the question open until ESC
        elif kind == OverlayKind.FIND:
            if self.model.find_next(text):
                self.overlay.close()
            else:
                self.status_message = EditorConstants.NOT_FOUND_MESSAGE
        elif kind == OverlayKind.GOTO_LINE:
            number = parse_line_number(text)
            if number is not None:
                self.model.goto_line(number - 1)
            self.overlay.close()
        else:
            self.overlay.close()

    # --- Terminal loop ---

    def draw(self):
        """Draw the current editor state to terminal."""
        width, height = self.terminal.width, self.terminal.height
        viewport = self.model.viewport
        if viewport.height != height:
            viewport.height = height
            viewport.reconcile(self.model.cursor.row)
        frame = render_frame(
            self.terminal.term,
            self.model,
            title=self.filename or "[new file]",
            overlay=self.overlay,
            status=self.status_message,
            highlighter=self.highlighter,
            palette=self.palette,
            width=width,
            height=height,
            help_text=self.help_text(),
        )
        self.terminal.write(frame)

    def _configure_tty(self):
        """Let Ctrl-S, Ctrl-Q and Ctrl-C through as keys; return the old settings."""
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            new_settings[3] &= ~termios.ISIG
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, AttributeError, OSError) as e:
            logger.warning(f"Could not adjust terminal settings: {e}")
            return None

    def run(self):
        """Run the main editor loop until quit.

        A failed save propagates after the terminal has been restored.
        """
        self.terminal.setup()
        self.running = True
        old_settings = self._configure_tty()
        try:
            while self.running:
                self.draw()
                key_event = self.keyboard.get_key_event(timeout=None)
                if key_event:
                    self.handle_key_event(key_event)
        except KeyboardInterrupt:
            pass
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.warning(f"Could not restore terminal settings: {e}")
            self.terminal.cleanup()

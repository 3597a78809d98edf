"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and start reading raw key tokens."""
        print(self.term.enter_fullscreen + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except (OSError, ValueError) as e:
                # Teardown keeps going so the screen is still restored
                logger.warning(f"Could not leave raw mode: {e}")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def write(self, frame: str) -> None:
        """Write a fully composed frame to the screen."""
        print(frame, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name such as ``'a'`` or ``'<Ctrl-s>'``, or None.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        evt = next(self._curtsies_input)
        return str(evt)

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self) -> int:
        """Terminal height in rows, including header and footer bars."""
        return self.term.height

"""System clipboard integration (plain text)."""

import logging
from typing import Optional

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Reads the system clipboard through pyperclip."""

    @staticmethod
    def paste_text() -> Optional[str]:
        """Return clipboard text, or None when no clipboard is reachable."""
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"Clipboard paste failed: {e}")
            return None

"""Modal prompt/popup state.

At most one overlay is open at a time. Prompts live in the footer bar
(find, go to line, quit confirmation); popups are drawn as a centered box
(help). Both are held in the single ``OverlayState.active`` field.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class OverlayKind(Enum):
    """What an overlay asks for; the value is the label shown to the user."""
    CONFIRM_QUIT = "Unsaved changes, quit? (y/n)"
    FIND = "Search"
    GOTO_LINE = "Go to"
    HELP = "Help!"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class Prompt:
    kind: OverlayKind
    text: str = ""


@dataclass
class Popup:
    kind: OverlayKind
    text: str = ""


Overlay = Union[Prompt, Popup]


class OverlayState:
    """Holds the active overlay, if any, and its input buffer."""

    def __init__(self):
        self.active: Optional[Overlay] = None

    @property
    def is_active(self) -> bool:
        return self.active is not None

    @property
    def kind(self) -> Optional[OverlayKind]:
        return self.active.kind if self.active is not None else None

    @property
    def text(self) -> str:
        return self.active.text if self.active is not None else ""

    def open_prompt(self, kind: OverlayKind) -> bool:
        """Open a footer prompt; refused while another overlay is open."""
        return self._open(Prompt(kind))

    def open_popup(self, kind: OverlayKind) -> bool:
        """Open a popup box; refused while another overlay is open."""
        return self._open(Popup(kind))

    def _open(self, overlay: Overlay) -> bool:
        if self.active is not None:
            return False
        self.active = overlay
        return True

    def append(self, char: str) -> None:
        if self.active is not None:
            self.active.text += char

    def backspace(self) -> None:
        if self.active is not None and self.active.text:
            self.active.text = self.active.text[:-1]

    def close(self) -> None:
        self.active = None

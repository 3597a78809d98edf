"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .overlay import OverlayKind

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            editor: Editor instance whose state the command acts on
            key_event: The key event that triggered this command
        """
        pass


class MovementCommand(EditorCommand):
    """Caret movement; never touches document content."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._move(editor.model)

    @abstractmethod
    def _move(self, model):
        """Perform the movement."""
        pass


class DeltaMovementCommand(MovementCommand):
    """Movement by a signed step: -1 for left/up, 1 for right/down."""

    def __init__(self, delta: int = 1):
        self.delta = delta


class HorizontalCommand(DeltaMovementCommand):
    def _move(self, model):
        model.move_horizontal(self.delta)


class VerticalCommand(DeltaMovementCommand):
    def _move(self, model):
        model.move_vertical(self.delta)


class PageCommand(DeltaMovementCommand):
    def _move(self, model):
        model.page(self.delta)


class LineStartCommand(MovementCommand):
    def _move(self, model):
        model.move_line_start()


class LineEndCommand(MovementCommand):
    def _move(self, model):
        model.move_line_end()


class ExtendSelectionCommand(DeltaMovementCommand):
    """Shift+Left/Right: grow or shrink the selection from the anchor end."""
    def _move(self, model):
        model.extend_selection(self.delta)


class ExtendSelectionVerticalCommand(DeltaMovementCommand):
    """Shift+Up/Down: move the anchor a whole row."""
    def _move(self, model):
        model.extend_selection_vertical(self.delta)


class EditCommand(EditorCommand):
    """Base class for editing commands; the model tracks the dirty flag."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._edit(editor.model, key_event)

    @abstractmethod
    def _edit(self, model, key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, model, key_event):
        model.delete_backward()


class DeleteCharCommand(EditCommand):
    def _edit(self, model, key_event):
        model.delete_forward()


class InsertNewlineCommand(EditCommand):
    def _edit(self, model, key_event):
        model.split_line()


class InsertTextCommand(EditCommand):
    def _edit(self, model, key_event):
        char = key_event.value
        # Filter out control characters
        if char and (ord(char[0]) >= 32 or char == '\t'):
            for ch in char:
                model.insert_char(ch)


class SwapLineDownCommand(EditCommand):
    def _edit(self, model, key_event):
        model.swap_line_down()


class SwapLineUpCommand(EditCommand):
    def _edit(self, model, key_event):
        model.swap_line_up()


class SystemCommand(EditorCommand):
    """Base class for system commands like save, quit, find."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        self._execute_system(editor, key_event)

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.model.dirty:
            editor.overlay.open_prompt(OverlayKind.CONFIRM_QUIT)
        else:
            editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.save()


class FindCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.overlay.open_prompt(OverlayKind.FIND)


class GotoLineCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.overlay.open_prompt(OverlayKind.GOTO_LINE)


class HelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.overlay.open_popup(OverlayKind.HELP)


class PasteCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.paste()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), HorizontalCommand(-1))
        self.register((KeyType.SPECIAL, 'right'), HorizontalCommand(1))
        self.register((KeyType.SPECIAL, 'up'), VerticalCommand(-1))
        self.register((KeyType.SPECIAL, 'down'), VerticalCommand(1))
        self.register((KeyType.SPECIAL, 'home'), LineStartCommand())
        self.register((KeyType.SPECIAL, 'end'), LineEndCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageCommand(-1))
        self.register((KeyType.SPECIAL, 'page_down'), PageCommand(1))

        # Selection commands (Shift+arrow)
        self.register((KeyType.SHIFT_SPECIAL, 'left'), ExtendSelectionCommand(-1))
        self.register((KeyType.SHIFT_SPECIAL, 'right'), ExtendSelectionCommand(1))
        self.register((KeyType.SHIFT_SPECIAL, 'up'), ExtendSelectionVerticalCommand(-1))
        self.register((KeyType.SHIFT_SPECIAL, 'down'), ExtendSelectionVerticalCommand(1))

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # Line swapping; Alt+arrow for terminals that swallow Ctrl+arrow
        self.register((KeyType.CTRL_SPECIAL, 'down'), SwapLineDownCommand())
        self.register((KeyType.CTRL_SPECIAL, 'up'), SwapLineUpCommand())
        self.register((KeyType.ALT, 'down'), SwapLineDownCommand())
        self.register((KeyType.ALT, 'up'), SwapLineUpCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'f'), FindCommand())
        self.register((KeyType.CTRL, 'k'), GotoLineCommand())
        self.register((KeyType.CTRL, 'h'), HelpCommand())
        self.register((KeyType.SPECIAL, 'f1'), HelpCommand())
        self.register((KeyType.CTRL, 'v'), PasteCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if a command handled the event
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            command.execute(editor, key_event)
            return True

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            InsertTextCommand().execute(editor, key_event)
            return True

        return False

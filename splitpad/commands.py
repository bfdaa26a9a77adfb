"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .cursor import Direction
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Run the command against the editor's workspace."""


class MovementCommand(EditorCommand):
    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor, key_event):
        editor.workspace.move_cursor(self.direction, editor.budget)


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        for ch in key_event.value:
            # Filter out control characters
            if ord(ch) >= 32:
                editor.workspace.insert_char(ch, editor.budget)


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.workspace.insert_newline(editor.budget)


class InsertTabCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.workspace.insert_tab(editor.budget)


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.workspace.delete_before_cursor(editor.budget)


class UndoCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.workspace.undo(editor.budget)


class RedoCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.workspace.redo(editor.budget)


class SystemCommand(EditorCommand):
    """Base class for commands that do not touch document content."""

    def execute(self, editor, key_event):
        self._execute_system(editor, key_event)

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.workspace.active_pane.modified and not editor.quit_warning_shown:
            editor.workspace.status_message = EditorConstants.QUIT_WARNING_MESSAGE
            editor.quit_warning_shown = True
        else:
            editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class OpenCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_prompt('open')


class SearchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_prompt('search')


class FindNextCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.workspace.find_next(editor.budget)


class SplitHorizontalCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.workspace.split_horizontal()


class SplitVerticalCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.workspace.split_vertical()


class NextPaneCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.workspace.next_pane()


class CloseSplitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.workspace.close_split()


class ToggleLineNumbersCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.toggle_line_numbers()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for direction in Direction:
            self.register((KeyType.SPECIAL, direction.value), MovementCommand(direction))

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'tab'), InsertTabCommand())
        self.register((KeyType.CTRL, 'z'), UndoCommand())
        self.register((KeyType.CTRL, 'y'), RedoCommand())

        # Search
        self.register((KeyType.CTRL, 'f'), SearchCommand())
        self.register((KeyType.CTRL, 'n'), FindNextCommand())

        # Panes
        self.register((KeyType.CTRL, '\\'), SplitHorizontalCommand())
        self.register((KeyType.CTRL, '/'), SplitVerticalCommand())
        self.register((KeyType.CTRL, 'w'), NextPaneCommand())
        self.register((KeyType.CTRL, 'x'), CloseSplitCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'o'), OpenCommand())
        self.register((KeyType.CTRL, 'l'), ToggleLineNumbersCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command bound to the key event.

        Returns:
            True if a command ran
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None and key_event.key_type == KeyType.REGULAR:
            command = InsertTextCommand()
        if command is None:
            return False
        command.execute(editor, key_event)
        return True

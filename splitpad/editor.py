"""Main editor controller: event loop, prompts, and file I/O."""

import errno
import logging
import os
import select
import signal
import sys
import tempfile
import termios
from typing import Optional

from .commands import CommandRegistry, QuitCommand
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import SettingsStore
from .terminal import TerminalInterface
from .view import WorkspaceView
from .workspace import Workspace, visible_row_budget

logger = logging.getLogger(__name__)

PROMPTS = {
    'search': EditorConstants.SEARCH_PROMPT,
    'save': EditorConstants.SAVE_PROMPT,
    'open': EditorConstants.OPEN_PROMPT,
}

CANCEL_MESSAGES = {
    'search': "Search cancelled",
    'save': "Save cancelled",
    'open': "Open cancelled",
}


class Editor:
    """Terminal front end around a Workspace."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings_store: Optional[SettingsStore] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings_store = settings_store or SettingsStore()
        self.settings = self.settings_store.load()
        self.workspace = Workspace(tab_width=self.settings.tab_width)
        self.view = WorkspaceView(self.terminal.term, show_line_numbers=self.settings.show_line_numbers)
        self.command_registry = CommandRegistry()
        self.running = False
        self.prompt_mode: Optional[str] = None  # None, 'search', 'save' or 'open'
        self.prompt_input = ""
        self.quit_warning_shown = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    @property
    def budget(self) -> int:
        """Visible rows of the active pane at the current terminal size."""
        return visible_row_budget(self.terminal.height, self.workspace.split_mode)

    def _handle_resize(self, signum, frame):
        del signum, frame  # Unused
        # Wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        old_settings = None
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            # Disable IXON/IXOFF so Ctrl-S and Ctrl-Q reach us
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, AttributeError, OSError):
            old_settings = None

        try:
            need_draw = True
            while self.running:
                if need_draw:
                    self._draw()
                    need_draw = False

                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.fit_viewports()
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        need_draw = True
        except KeyboardInterrupt:
            pass
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _draw(self):
        width, height = self.terminal.width, self.terminal.height
        if width < EditorConstants.MIN_TERMINAL_WIDTH or height < EditorConstants.MIN_TERMINAL_HEIGHT:
            self.terminal.draw_error_message(
                EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                    EditorConstants.MIN_TERMINAL_WIDTH, EditorConstants.MIN_TERMINAL_HEIGHT),
                EditorConstants.CURRENT_SIZE_MESSAGE.format(width, height),
            )
            return
        frame = self.view.compose(
            self.workspace, width, height,
            prompt=PROMPTS.get(self.prompt_mode) if self.prompt_mode else None,
            prompt_input=self.prompt_input,
        )
        self.terminal.draw_frame(frame)

    # --- Input dispatch ---

    def handle_key_event(self, key_event: KeyEvent):
        if self.prompt_mode is not None:
            self._handle_prompt(key_event)
            return

        command = self.command_registry.get_command(key_event.key_type, key_event.value)
        if not isinstance(command, QuitCommand):
            self.quit_warning_shown = False
        self.command_registry.execute(self, key_event)
        # Splits and closes change the row budget of every pane
        self.fit_viewports()

    def fit_viewports(self):
        self.workspace.fit_viewports(self.budget)

    def start_prompt(self, kind: str):
        self.prompt_mode = kind
        self.prompt_input = ""

    def _handle_prompt(self, key_event: KeyEvent):
        kind = self.prompt_mode
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
            self.workspace.status_message = CANCEL_MESSAGES[kind]
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            text = self.prompt_input
            self.prompt_mode = None
            self.prompt_input = ""
            self._submit_prompt(kind, text)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            self.prompt_input += ''.join(ch for ch in key_event.value if ord(ch) >= 32)

    def _submit_prompt(self, kind: str, text: str):
        if kind == 'search':
            self.workspace.search(text, self.budget)
        elif not text:
            self.workspace.status_message = CANCEL_MESSAGES[kind]
        elif kind == 'save':
            self.save_file(text)
        elif kind == 'open':
            self.open_file(text)

    def toggle_line_numbers(self):
        self.view.show_line_numbers = not self.view.show_line_numbers
        self.settings.show_line_numbers = self.view.show_line_numbers
        self.settings_store.save(self.settings)

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file named on the command line; a missing file starts a new buffer."""
        if os.path.exists(filename):
            self.open_file(filename)
            return
        self.workspace.open_with_content("", filename=filename)
        self.workspace.status_message = f"New file: {filename}"

    def open_file(self, filename: str) -> bool:
        """Replace the active pane with a file's content.

        On failure the pane is left untouched and the error becomes the
        status message.
        """
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("open %s failed: %s", filename, e)
            self.workspace.status_message = f"Error opening: {e}"
            return False
        self.workspace.open_with_content(content, filename=filename)
        return True

    def handle_save(self):
        """Save to the pane's file, or ask for a name when it has none."""
        pane = self.workspace.active_pane
        if pane.filename:
            self.save_file(pane.filename)
        else:
            self.start_prompt('save')

    def save_file(self, filename: str) -> bool:
        """Save the active pane to a file atomically.

        Returns:
            True if save succeeded, False otherwise
        """
        pane = self.workspace.active_pane
        temp_filename = None
        try:
            dir_name = os.path.dirname(filename) or '.'
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(pane.text())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except PermissionError:
            self.workspace.status_message = f"Error: Permission denied saving {filename}"
            self._remove_temp(temp_filename)
            return False
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self.workspace.status_message = "Error: No space left on device"
            else:
                self.workspace.status_message = f"Error: Cannot save to {filename}"
            self._remove_temp(temp_filename)
            return False

        pane.mark_saved(filename)
        self.workspace.status_message = f"Saved to {filename}"
        return True

    @staticmethod
    def _remove_temp(temp_filename: Optional[str]):
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                pass

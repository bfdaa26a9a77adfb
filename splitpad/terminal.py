"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
import termios
from typing import Optional

import blessed
from curtsies import Input

from .view import Frame


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and start reading keys."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except (OSError, ValueError, termios.error):
                # stdin is not a tty; run without key input
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except (OSError, ValueError, termios.error):
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def draw_frame(self, frame: Frame):
        """Paint a composed frame and place the cursor."""
        out = [self.term.hide_cursor]
        for y, line in enumerate(frame.lines):
            out.append(self.term.move(y, 0) + line + self.term.normal)
        status_y = len(frame.lines)
        out.append(self.term.move(status_y, 0) + frame.status)
        out.append(self.term.move(status_y + 1, 0) + frame.message + self.term.clear_eol)
        out.append(self.term.move(frame.cursor_y, frame.cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.clear, end='')
        center_y = self.term.height // 2
        box_width = max(len(message1), len(message2)) + 4
        left_margin = max(0, (self.term.width - box_width) // 2)

        print(self.term.move(center_y - 2, left_margin) + "╔" + "═" * (box_width - 2) + "╗", end='')
        print(self.term.move(center_y - 1, left_margin) + "║ " + message1.center(box_width - 4) + " ║", end='')
        if message2:
            print(self.term.move(center_y, left_margin) + "║ " + message2.center(box_width - 4) + " ║", end='')
            print(self.term.move(center_y + 1, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')
        else:
            print(self.term.move(center_y, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')
        print('', end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress as a curtsies key name.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The key name string, or None when nothing arrived or input is unavailable.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        return self.term.width

    @property
    def height(self):
        """Full terminal height in rows, chrome included."""
        return self.term.height

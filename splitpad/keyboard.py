"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace', '\\')
    raw: str  # The raw key string from the input source
    is_ctrl: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'tab',
}

# Raw control bytes that are not Ctrl-<letter>
_RAW_CONTROL_PUNCTUATION = {
    '\x1c': '\\',
    '\x1f': '/',
}


class KeyboardHandler:
    """Turns raw key tokens from the terminal into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name or a raw character into a KeyEvent."""
        key_str = str(key)

        # Curtsies-style names like '<LEFT>', '<Ctrl-x>', '<PAGEDOWN>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        if len(key_str) == 1:
            if key_str in _RAW_CONTROL_PUNCTUATION:
                return KeyEvent(KeyType.CTRL, _RAW_CONTROL_PUNCTUATION[key_str], key_str, is_ctrl=True)
            if key_str == '\t':
                return KeyEvent(KeyType.SPECIAL, 'tab', key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            o = ord(key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str, is_ctrl=True)

        if key_str == '\x1b':
            return KeyEvent(KeyType.SPECIAL, 'escape', key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        lower = name.lower()
        # Curtsies spells Ctrl-\ and Ctrl-/ with the punctuation as the base
        if lower.startswith('ctrl-') and len(lower) == 6:
            base = lower[-1]
            mods = {'ctrl'}
        else:
            lower = lower.replace('+', '-')
            parts = lower.split('-')
            base = parts[-1]
            mods = set(parts[:-1])

        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(KeyType.REGULAR, ' ', ' ')
        if 'ctrl' in mods and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if base == 'i':
                return KeyEvent(KeyType.SPECIAL, 'tab', key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str, is_ctrl=True)
        if base in SPECIAL_KEYS:
            return KeyEvent(KeyType.SPECIAL, base, key_str)
        if base in ('esc', 'escape'):
            return KeyEvent(KeyType.SPECIAL, 'escape', '\x1b')
        # Unknown token: keep it as a special key nobody is bound to
        return KeyEvent(KeyType.SPECIAL, base, key_str)

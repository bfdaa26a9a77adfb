"""Test keyboard input handling."""

import pytest

from splitpad.keyboard import KeyboardHandler, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_regular_character(handler):
    event = handler.parse_key('a')
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'a'


@pytest.mark.parametrize("name,value", [
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<PAGEUP>', 'page_up'),
    ('<PAGEDOWN>', 'page_down'),
    ('<BACKSPACE>', 'backspace'),
    ('<TAB>', 'tab'),
])
def test_curtsies_special_names(handler, name, value):
    event = handler.parse_key(name)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_ctrl_letter_name(handler):
    event = handler.parse_key('<Ctrl-s>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 's'
    assert event.is_ctrl


def test_ctrl_punctuation_names(handler):
    assert handler.parse_key('<Ctrl-\\>').value == '\\'
    assert handler.parse_key('<Ctrl-/>').value == '/'
    assert handler.parse_key('<Ctrl-\\>').key_type == KeyType.CTRL


def test_ctrl_aliases_for_enter_tab_backspace(handler):
    assert handler.parse_key('<Ctrl-j>').value == 'enter'
    assert handler.parse_key('<Ctrl-m>').value == 'enter'
    assert handler.parse_key('<Ctrl-i>').value == 'tab'
    assert handler.parse_key('<Ctrl-h>').value == 'backspace'


def test_raw_control_bytes(handler):
    assert handler.parse_key('\x11').value == 'q'
    assert handler.parse_key('\x11').key_type == KeyType.CTRL
    assert handler.parse_key('\x1c').value == '\\'
    assert handler.parse_key('\x1f').value == '/'
    assert handler.parse_key('\t').value == 'tab'
    assert handler.parse_key('\r').value == 'enter'
    assert handler.parse_key('\x7f').value == 'backspace'


def test_escape(handler):
    assert handler.parse_key('\x1b').value == 'escape'
    assert handler.parse_key('<ESC>').value == 'escape'


def test_space_name_becomes_regular_space(handler):
    event = handler.parse_key('<SPACE>')
    assert event.key_type == KeyType.REGULAR
    assert event.value == ' '


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    terminal.add_key('<Ctrl-f>')
    handler = KeyboardHandler(terminal)
    event = handler.get_key_event(timeout=0)
    assert event.key_type == KeyType.CTRL
    assert event.value == 'f'
    assert handler.get_key_event(timeout=0) is None

import blessed
import pytest

from splitpad.editor import Editor
from splitpad.settings import SettingsStore


class FakeTerminal:
    """Stands in for TerminalInterface with a fixed size and no tty."""

    def __init__(self, width=80, height=24):
        self.term = blessed.Terminal(force_styling=None)
        self.width = width
        self.height = height
        self.frames = []
        self.errors = []

    def setup(self):
        pass

    def cleanup(self):
        pass

    def draw_frame(self, frame):
        self.frames.append(frame)

    def draw_error_message(self, message1, message2=""):
        self.errors.append((message1, message2))

    def get_key(self, timeout=None):
        return None


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def editor(tmp_path, fake_terminal):
    return Editor(terminal=fake_terminal, settings_store=SettingsStore(tmp_path / "config"))

"""Constants and configuration for the splitpad editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Editing
    TAB_WIDTH = 4  # Spaces inserted by the Tab key
    MAX_PANES = 2  # Workspace never holds more panes than this

    # Terminal requirements
    MIN_TERMINAL_WIDTH = 20
    MIN_TERMINAL_HEIGHT = 5
    CHROME_ROWS = 2  # Status bar + message line

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    NO_NAME = "[No Name]"
    MODIFIED_INDICATOR = " [+]"
    HELP_LINE = ("^Q:Quit ^S:Save ^O:Open ^F:Search ^N:Next ^Z:Undo ^Y:Redo "
                 "^\\:HSplit ^/:VSplit ^W:NextPane ^X:CloseSplit ^L:LineNum")
    QUIT_WARNING_MESSAGE = "File modified! Press Ctrl-Q again to quit"
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
    CURRENT_SIZE_MESSAGE = "Current size: {}x{}."

    # Prompts
    SEARCH_PROMPT = "Search: "
    SAVE_PROMPT = "Enter filename: "
    OPEN_PROMPT = "Open file: "

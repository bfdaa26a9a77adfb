"""Top-level container of panes and their split layout."""

import logging
from enum import Enum
from typing import Optional

from .constants import EditorConstants
from .cursor import Direction
from .highlight import LanguageProfile, profile_for_filename
from .pane import Pane, SearchOutcome

logger = logging.getLogger(__name__)


class SplitMode(Enum):
    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def visible_row_budget(height: int, split_mode: SplitMode) -> int:
    """Rows available to one pane for a terminal ``height`` rows tall.

    Two rows are reserved for the status bar and message line; a
    horizontal split also spends one row on the divider.
    """
    chrome = EditorConstants.CHROME_ROWS
    if split_mode is SplitMode.HORIZONTAL:
        return max(1, (height - chrome - 1) // 2)
    return max(1, height - chrome)


class Workspace:
    """Holds one or two panes and routes every action to the active one."""

    def __init__(self, tab_width: int = EditorConstants.TAB_WIDTH):
        self.panes: list[Pane] = [Pane()]
        self.active_index = 0
        self.split_mode = SplitMode.NONE
        self.status_message: Optional[str] = None
        self.tab_width = tab_width

    @property
    def active_pane(self) -> Pane:
        return self.panes[self.active_index]

    @property
    def pane_count(self) -> int:
        return len(self.panes)

    # --- Layout ---

    def _split(self, mode: SplitMode) -> bool:
        if len(self.panes) >= EditorConstants.MAX_PANES:
            return False
        # Always a fresh pane, never a copy of the current one
        self.panes.append(Pane())
        self.split_mode = mode
        logger.debug("split %s, %d panes", mode.value, len(self.panes))
        return True

    def split_horizontal(self) -> bool:
        return self._split(SplitMode.HORIZONTAL)

    def split_vertical(self) -> bool:
        return self._split(SplitMode.VERTICAL)

    def close_split(self) -> bool:
        if len(self.panes) < 2:
            return False
        self.panes.pop(self.active_index)
        if self.active_index >= len(self.panes):
            self.active_index = len(self.panes) - 1
        if len(self.panes) < 2:
            self.split_mode = SplitMode.NONE
        logger.debug("closed split, %d panes", len(self.panes))
        return True

    def fit_viewports(self, budget: int):
        """Rescroll every pane so its cursor stays visible within ``budget`` rows."""
        for pane in self.panes:
            pane.viewport.adjust_scroll(pane.cursor.row, budget)

    def next_pane(self) -> bool:
        if len(self.panes) < 2:
            return False
        self.active_index = (self.active_index + 1) % len(self.panes)
        return True

    # --- Editing actions ---

    def insert_char(self, text: str, budget: int):
        for ch in text:
            self.active_pane.insert_char(ch, budget)
        self.status_message = None

    def insert_tab(self, budget: int):
        self.active_pane.insert_tab(budget, self.tab_width)
        self.status_message = None

    def insert_newline(self, budget: int):
        self.active_pane.insert_newline(budget)
        self.status_message = None

    def delete_before_cursor(self, budget: int):
        self.active_pane.delete_before_cursor(budget)
        self.status_message = None

    def move_cursor(self, direction: Direction, budget: int):
        self.active_pane.move_cursor(direction, budget)

    def undo(self, budget: int) -> bool:
        if self.active_pane.undo(budget):
            self.status_message = "Undone"
            return True
        self.status_message = "Nothing to undo"
        return False

    def redo(self, budget: int) -> bool:
        if self.active_pane.redo(budget):
            self.status_message = "Redone"
            return True
        self.status_message = "Nothing to redo"
        return False

    # --- Search ---

    def search(self, query: str, budget: int) -> SearchOutcome:
        pane = self.active_pane
        outcome = pane.search(query, budget)
        if outcome is SearchOutcome.FOUND:
            row, col = pane.last_match
            self.status_message = f"Found at line {row + 1}, col {col + 1}"
        elif outcome is SearchOutcome.NOT_FOUND:
            self.status_message = f"Not found: {query}"
        else:
            self.status_message = "Search cancelled"
        return outcome

    def find_next(self, budget: int) -> Optional[SearchOutcome]:
        query = self.active_pane.search_query
        if not query:
            return None
        return self.search(query, budget)

    # --- Content replacement ---

    def open_with_content(self, text: str, filename: Optional[str] = None,
                          profile: Optional[LanguageProfile] = None):
        """Load ``text`` into the active pane, choosing a profile from ``filename``."""
        if profile is None:
            profile = profile_for_filename(filename)
        self.active_pane.load(text, filename=filename, profile=profile)
        logger.debug("loaded %s as %s", filename or "<buffer>", profile.name)
        if filename:
            self.status_message = f"Opened {filename}"

    def replace_all_content(self, text: str, budget: int):
        self.active_pane.replace_content(text, budget)

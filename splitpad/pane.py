"""A single independently editable view: document, history, cursor, scroll."""

import os
from enum import Enum
from typing import Optional

from .cursor import Cursor, Direction, Viewport
from .document import Document
from .highlight import PLAIN, LanguageProfile, Token, TokenClassifier
from .undo import (
    ClearAll,
    CommandLog,
    DeleteChar,
    DeleteNewline,
    EditCommand,
    InsertChar,
    InsertNewline,
)
from .constants import EditorConstants


class SearchOutcome(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"


class Pane:
    """Owns one Document together with everything needed to edit it.

    Nothing here is shared with other panes. Edits go through the command
    log so every change can be undone; cursor moves mutate the cursor
    directly and then let the viewport catch up.
    """

    def __init__(self, document: Optional[Document] = None,
                 profile: LanguageProfile = PLAIN,
                 filename: Optional[str] = None):
        self.document = document or Document()
        self.cursor = Cursor()
        self.viewport = Viewport()
        self.history = CommandLog()
        self.classifier = TokenClassifier(profile)
        self.filename = filename
        self.modified = False
        self.search_query = ""
        self.last_match: Optional[tuple[int, int]] = None

    @property
    def profile(self) -> LanguageProfile:
        return self.classifier.profile

    @property
    def display_name(self) -> str:
        if self.filename:
            return os.path.basename(self.filename) or self.filename
        return EditorConstants.NO_NAME

    def text(self) -> str:
        return self.document.text()

    def tokens_for_row(self, row: int) -> list[Token]:
        line = self.document.line(row)
        if line is None:
            return []
        return self.classifier.tokenize(line)

    # --- History ---

    def execute(self, command: EditCommand):
        self.history.execute(command, self.document)
        self.modified = True
        self.cursor.move_to(self.document, *command.cursor_after_apply(self.document))

    def undo(self, budget: int) -> bool:
        command = self.history.undo(self.document)
        if command is None:
            return False
        self.modified = self.history.can_undo()
        self.cursor.move_to(self.document, *command.cursor_after_revert(self.document))
        self.viewport.adjust_scroll(self.cursor.row, budget)
        return True

    def redo(self, budget: int) -> bool:
        command = self.history.redo(self.document)
        if command is None:
            return False
        self.modified = True
        self.cursor.move_to(self.document, *command.cursor_after_apply(self.document))
        self.viewport.adjust_scroll(self.cursor.row, budget)
        return True

    def mark_saved(self, filename: Optional[str] = None):
        if filename is not None:
            self.filename = filename
        self.modified = False

    # --- Editing ---

    def insert_char(self, ch: str, budget: int):
        # One character per command; line breaks go through insert_newline
        if len(ch) != 1 or ch in '\r\n':
            return
        self.execute(InsertChar(self.cursor.row, self.cursor.col, ch))
        self.viewport.adjust_scroll(self.cursor.row, budget)

    def insert_tab(self, budget: int, width: int = EditorConstants.TAB_WIDTH):
        for _ in range(width):
            self.insert_char(' ', budget)

    def insert_newline(self, budget: int):
        self.execute(InsertNewline(self.cursor.row, self.cursor.col))
        self.viewport.adjust_scroll(self.cursor.row, budget)

    def delete_before_cursor(self, budget: int) -> bool:
        """Backspace: delete a character, or join with the previous line at column 0."""
        row, col = self.cursor.row, self.cursor.col
        line = self.document.line(row)
        if line is None:
            return False
        if col > 0:
            self.execute(DeleteChar(row, col - 1, line[col - 1]))
        elif row > 0:
            self.execute(DeleteNewline(row, line))
        else:
            return False
        self.viewport.adjust_scroll(self.cursor.row, budget)
        return True

    def replace_content(self, text: str, budget: int):
        """Replace the whole buffer as one undoable step."""
        new_document = Document.from_text(text)
        self.execute(ClearAll(self.document.lines, new_document.lines))
        self.viewport.adjust_scroll(self.cursor.row, budget)

    def load(self, text: str, filename: Optional[str] = None,
             profile: LanguageProfile = PLAIN):
        """Start over with fresh content, history, and position."""
        self.document = Document.from_text(text)
        self.cursor = Cursor()
        self.viewport = Viewport()
        self.history.clear()
        self.classifier = TokenClassifier(profile)
        self.filename = filename
        self.modified = False
        self.last_match = None

    # --- Movement ---

    def move_cursor(self, direction: Direction, budget: int):
        self.cursor.move(self.document, direction, page_size=budget)
        self.viewport.adjust_scroll(self.cursor.row, budget)

    # --- Search ---

    def _next_search_start(self) -> tuple[int, int]:
        if self.last_match is None:
            return (self.cursor.row, self.cursor.col)
        row, col = self.last_match
        if col + 1 < self.document.line_length(row):
            return (row, col + 1)
        if row + 1 < self.document.line_count:
            return (row + 1, 0)
        return (0, 0)

    def search(self, query: str, budget: int) -> SearchOutcome:
        """Find ``query`` after the last match, or from the cursor for a new query."""
        if not query:
            return SearchOutcome.CANCELLED
        if query != self.search_query:
            self.last_match = None
        self.search_query = query

        start_row, start_col = self._next_search_start()
        match = self.document.search(query, start_row, start_col)
        if match is None:
            self.last_match = None
            return SearchOutcome.NOT_FOUND

        self.last_match = match
        self.cursor.move_to(self.document, *match)
        self.viewport.adjust_scroll(self.cursor.row, budget)
        return SearchOutcome.FOUND

    def find_next(self, budget: int) -> SearchOutcome:
        return self.search(self.search_query, budget)

"""Cursor movement and viewport scrolling."""

from dataclasses import dataclass
from enum import Enum

from .document import Document


class Direction(Enum):
    """Cursor movements understood by ``Cursor.move``."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass
class Cursor:
    row: int = 0
    col: int = 0

    def clamp(self, document: Document):
        """Pull the cursor back inside the document."""
        self.row = min(max(self.row, 0), document.line_count - 1)
        self.col = min(max(self.col, 0), document.line_length(self.row))

    def move_to(self, document: Document, row: int, col: int):
        self.row = row
        self.col = col
        self.clamp(document)

    def left(self, document: Document):
        if self.col > 0:
            self.col -= 1
        elif self.row > 0:
            self.row -= 1
            self.col = document.line_length(self.row)

    def right(self, document: Document):
        if self.col < document.line_length(self.row):
            self.col += 1
        elif self.row < document.line_count - 1:
            self.row += 1
            self.col = 0

    def up(self, document: Document, lines: int = 1):
        if self.row > 0:
            self.row = max(0, self.row - lines)
            self.col = min(self.col, document.line_length(self.row))

    def down(self, document: Document, lines: int = 1):
        if self.row < document.line_count - 1:
            self.row = min(document.line_count - 1, self.row + lines)
            self.col = min(self.col, document.line_length(self.row))

    def home(self, document: Document):
        self.col = 0

    def end(self, document: Document):
        self.col = document.line_length(self.row)

    def move(self, document: Document, direction: Direction, page_size: int = 1):
        """Apply one movement; page moves jump ``page_size`` rows."""
        if direction is Direction.LEFT:
            self.left(document)
        elif direction is Direction.RIGHT:
            self.right(document)
        elif direction is Direction.UP:
            self.up(document)
        elif direction is Direction.DOWN:
            self.down(document)
        elif direction is Direction.HOME:
            self.home(document)
        elif direction is Direction.END:
            self.end(document)
        elif direction is Direction.PAGE_UP:
            self.up(document, max(1, page_size))
        elif direction is Direction.PAGE_DOWN:
            self.down(document, max(1, page_size))


@dataclass
class Viewport:
    """Topmost visible row of a pane."""
    offset: int = 0

    def adjust_scroll(self, cursor_row: int, budget: int):
        """Scroll by the minimal amount that keeps ``cursor_row`` visible."""
        budget = max(1, budget)
        if cursor_row < self.offset:
            self.offset = cursor_row
        elif cursor_row >= self.offset + budget:
            self.offset = cursor_row - budget + 1

    def visible_rows(self, budget: int, line_count: int) -> range:
        return range(self.offset, min(line_count, self.offset + max(0, budget)))

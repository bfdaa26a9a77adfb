"""Line-oriented document storage."""

from typing import Iterable, Optional


class Document:
    """Ordered, mutable sequence of lines.

    A document always holds at least one line; an empty document is a
    single empty line. Columns index code points of a line and may equal
    the line length (end of line).

    All primitives silently ignore out-of-range coordinates. Callers are
    expected to pass clamped positions, so a bad coordinate is absorbed
    rather than reported.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: list[str] = list(lines) if lines is not None else [""]
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """Build a document from raw file content.

        Lines are split on ``\\n`` and a trailing ``\\r`` is dropped from
        each. A single trailing terminator does not create an extra empty
        line.
        """
        lines = text.split('\n')
        if text.endswith('\n'):
            lines.pop()
        lines = [line[:-1] if line.endswith('\r') else line for line in lines]
        return cls(lines)

    def text(self) -> str:
        return '\n'.join(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> Optional[str]:
        if 0 <= row < len(self._lines):
            return self._lines[row]
        return None

    def line_length(self, row: int) -> int:
        line = self.line(row)
        return len(line) if line is not None else 0

    def insert_char(self, row: int, col: int, ch: str) -> None:
        if not 0 <= row < len(self._lines):
            return
        line = self._lines[row]
        if not 0 <= col <= len(line):
            return
        self._lines[row] = line[:col] + ch + line[col:]

    def delete_char(self, row: int, col: int) -> Optional[str]:
        """Remove and return the character before ``col``.

        Returns None at column 0; joining with the previous line is a
        separate primitive.
        """
        if not 0 <= row < len(self._lines):
            return None
        line = self._lines[row]
        if not 0 < col <= len(line):
            return None
        self._lines[row] = line[:col - 1] + line[col:]
        return line[col - 1]

    def split_line_at(self, row: int, col: int) -> None:
        if not 0 <= row < len(self._lines):
            return
        line = self._lines[row]
        if not 0 <= col <= len(line):
            return
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def join_line_with_previous(self, row: int) -> Optional[str]:
        """Append line ``row`` to line ``row - 1`` and return the removed text."""
        if not 0 < row < len(self._lines):
            return None
        removed = self._lines.pop(row)
        self._lines[row - 1] += removed
        return removed

    def reset(self, lines: Iterable[str]) -> None:
        """Replace the whole content; used by whole-buffer commands only."""
        self._lines = list(lines) or [""]

    def search(self, query: str, start_row: int, start_col: int) -> Optional[tuple[int, int]]:
        """Find ``query`` scanning forward from the start position, wrapping once.

        The forward pass includes a match at the start position itself. The
        wrap-around pass covers (0, 0) up to and including the start
        position, so every match in the document is reachable.
        """
        if not query or not self._lines:
            return None
        start_row = min(max(start_row, 0), len(self._lines) - 1)
        start_col = max(start_col, 0)

        for row in range(start_row, len(self._lines)):
            search_col = start_col if row == start_row else 0
            col = self._lines[row].find(query, search_col)
            if col != -1:
                return (row, col)

        for row in range(0, start_row + 1):
            line = self._lines[row]
            if row == start_row:
                # Only matches that begin at or before the start column
                col = line.find(query, 0, start_col + len(query))
            else:
                col = line.find(query)
            if col != -1:
                return (row, col)

        return None

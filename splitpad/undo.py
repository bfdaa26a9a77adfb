"""Invertible edit commands and the undo/redo log that replays them.

Each command captures, at creation time, exactly what it needs to undo
itself. Nothing is diffed after the fact: ``apply`` and ``revert`` are
structural inverses built from the four Document primitives.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .document import Document


class EditCommand(ABC):
    """Base class for recorded document mutations."""

    @abstractmethod
    def apply(self, document: Document) -> None:
        """Perform the forward effect."""

    @abstractmethod
    def revert(self, document: Document) -> None:
        """Perform the exact inverse of ``apply``."""

    @abstractmethod
    def cursor_after_apply(self, document: Document) -> tuple[int, int]:
        """(row, col) where the caret belongs after the forward effect."""

    @abstractmethod
    def cursor_after_revert(self, document: Document) -> tuple[int, int]:
        """(row, col) where the caret belongs after the inverse effect."""


@dataclass(frozen=True)
class InsertChar(EditCommand):
    row: int
    col: int
    ch: str

    def apply(self, document):
        document.insert_char(self.row, self.col, self.ch)

    def revert(self, document):
        document.delete_char(self.row, self.col + 1)

    def cursor_after_apply(self, document):
        return (self.row, self.col + 1)

    def cursor_after_revert(self, document):
        return (self.row, self.col)


@dataclass(frozen=True)
class DeleteChar(EditCommand):
    # col is the index the deleted character occupied
    row: int
    col: int
    ch: str

    def apply(self, document):
        document.delete_char(self.row, self.col + 1)

    def revert(self, document):
        document.insert_char(self.row, self.col, self.ch)

    def cursor_after_apply(self, document):
        return (self.row, self.col)

    def cursor_after_revert(self, document):
        return (self.row, self.col + 1)


@dataclass(frozen=True)
class InsertNewline(EditCommand):
    row: int
    col: int

    def apply(self, document):
        document.split_line_at(self.row, self.col)

    def revert(self, document):
        document.join_line_with_previous(self.row + 1)

    def cursor_after_apply(self, document):
        return (self.row + 1, 0)

    def cursor_after_revert(self, document):
        return (self.row, self.col)


@dataclass(frozen=True)
class DeleteNewline(EditCommand):
    # row is the line that was joined onto row - 1
    row: int
    deleted_line: str

    def apply(self, document):
        document.join_line_with_previous(self.row)

    def revert(self, document):
        joined_length = document.line_length(self.row - 1)
        document.split_line_at(self.row - 1, joined_length - len(self.deleted_line))

    def cursor_after_apply(self, document):
        return (self.row - 1, document.line_length(self.row - 1) - len(self.deleted_line))

    def cursor_after_revert(self, document):
        return (self.row, 0)


@dataclass(frozen=True)
class ClearAll(EditCommand):
    old_content: tuple[str, ...]
    new_content: tuple[str, ...] = ("",)

    def apply(self, document):
        document.reset(self.new_content)

    def revert(self, document):
        document.reset(self.old_content)

    def cursor_after_apply(self, document):
        return (0, 0)

    def cursor_after_revert(self, document):
        return (0, 0)


class CommandLog:
    """Two-stack undo/redo history.

    Linear only: executing a new command after an undo discards the redo
    stack.
    """

    def __init__(self, max_entries: Optional[int] = None):
        self._undo_stack: list[EditCommand] = []
        self._redo_stack: list[EditCommand] = []
        self._max_entries = max_entries

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()

    def execute(self, command: EditCommand, document: Document):
        command.apply(document)
        self._undo_stack.append(command)
        # Cap history
        if self._max_entries and len(self._undo_stack) > self._max_entries:
            self._undo_stack.pop(0)
        # Any new edit invalidates redo history
        self._redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self, document: Document) -> Optional[EditCommand]:
        if not self._undo_stack:
            return None
        command = self._undo_stack.pop()
        command.revert(document)
        self._redo_stack.append(command)
        return command

    def redo(self, document: Document) -> Optional[EditCommand]:
        if not self._redo_stack:
            return None
        command = self._redo_stack.pop()
        command.apply(document)
        self._undo_stack.append(command)
        return command

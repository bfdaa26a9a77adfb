"""Tests for edit commands and the undo/redo log."""

from splitpad.document import Document
from splitpad.pane import Pane
from splitpad.undo import (
    ClearAll,
    CommandLog,
    DeleteChar,
    DeleteNewline,
    InsertChar,
    InsertNewline,
)


def test_type_then_undo():
    doc = Document()
    log = CommandLog()
    for col, ch in enumerate("abc"):
        log.execute(InsertChar(0, col, ch), doc)
    assert doc.lines == ("abc",)

    for _ in range(3):
        log.undo(doc)
    assert doc.lines == ("",)
    assert not log.can_undo()
    assert log.can_redo()


def test_undo_on_empty_log_is_noop():
    doc = Document(["abc"])
    log = CommandLog()
    assert log.undo(doc) is None
    assert log.redo(doc) is None
    assert doc.lines == ("abc",)


def test_execute_clears_redo():
    doc = Document()
    log = CommandLog()
    log.execute(InsertChar(0, 0, "a"), doc)
    log.undo(doc)
    assert log.can_redo()
    log.execute(InsertChar(0, 0, "b"), doc)
    assert not log.can_redo()
    assert doc.lines == ("b",)


def test_delete_char_inverse():
    doc = Document(["abc"])
    log = CommandLog()
    log.execute(DeleteChar(0, 1, "b"), doc)
    assert doc.lines == ("ac",)
    log.undo(doc)
    assert doc.lines == ("abc",)
    log.redo(doc)
    assert doc.lines == ("ac",)


def test_insert_newline_inverse():
    doc = Document(["hello world"])
    log = CommandLog()
    log.execute(InsertNewline(0, 5), doc)
    assert doc.lines == ("hello", " world")
    log.undo(doc)
    assert doc.lines == ("hello world",)


def test_delete_newline_inverse():
    doc = Document(["foo", "bar", "baz"])
    log = CommandLog()
    log.execute(DeleteNewline(2, "baz"), doc)
    assert doc.lines == ("foo", "barbaz")
    log.undo(doc)
    assert doc.lines == ("foo", "bar", "baz")
    log.redo(doc)
    assert doc.lines == ("foo", "barbaz")


def test_delete_newline_cursor_positions():
    doc = Document(["ab", "cd"])
    command = DeleteNewline(1, "cd")
    command.apply(doc)
    assert command.cursor_after_apply(doc) == (0, 2)
    command.revert(doc)
    assert command.cursor_after_revert(doc) == (1, 0)


def test_clear_all_inverse():
    doc = Document(["one", "two"])
    log = CommandLog()
    log.execute(ClearAll(doc.lines), doc)
    assert doc.lines == ("",)
    log.undo(doc)
    assert doc.lines == ("one", "two")


def test_clear_all_with_replacement_content():
    doc = Document(["old"])
    log = CommandLog()
    log.execute(ClearAll(doc.lines, ("new", "text")), doc)
    assert doc.lines == ("new", "text")
    log.undo(doc)
    assert doc.lines == ("old",)


def test_mixed_sequence_inverse_law():
    doc = Document(["abc", "def"])
    before = doc.lines
    log = CommandLog()
    commands = [
        InsertChar(0, 3, "x"),
        InsertNewline(0, 2),
        DeleteChar(1, 0, "c"),
        DeleteNewline(2, "def"),
    ]
    for command in commands:
        log.execute(command, doc)
    after = doc.lines
    assert after == ("ab", "xdef")

    for _ in commands:
        log.undo(doc)
    assert doc.lines == before

    for _ in commands:
        log.redo(doc)
    assert doc.lines == after


def test_max_entries_drops_oldest():
    doc = Document()
    log = CommandLog(max_entries=2)
    for col, ch in enumerate("abc"):
        log.execute(InsertChar(0, col, ch), doc)
    log.undo(doc)
    log.undo(doc)
    assert log.undo(doc) is None
    assert doc.lines == ("a",)


def test_modified_flag_tracks_undo_stack():
    pane = Pane()
    assert not pane.modified
    pane.insert_char("a", 10)
    pane.insert_char("b", 10)
    assert pane.modified
    pane.undo(10)
    assert pane.modified
    pane.undo(10)
    assert not pane.modified
    pane.redo(10)
    assert pane.modified
    assert pane.modified == pane.history.can_undo()


def test_undo_places_cursor():
    pane = Pane()
    for ch in "abc":
        pane.insert_char(ch, 10)
    pane.insert_newline(10)
    assert (pane.cursor.row, pane.cursor.col) == (1, 0)
    pane.undo(10)
    assert (pane.cursor.row, pane.cursor.col) == (0, 3)
    pane.undo(10)
    assert (pane.cursor.row, pane.cursor.col) == (0, 2)
    pane.redo(10)
    assert (pane.cursor.row, pane.cursor.col) == (0, 3)


def test_backspace_at_line_start_joins_and_undoes():
    pane = Pane()
    pane.load("ab\ncd")
    pane.cursor.row = 1
    assert pane.delete_before_cursor(10)
    assert pane.document.lines == ("abcd",)
    assert (pane.cursor.row, pane.cursor.col) == (0, 2)
    pane.undo(10)
    assert pane.document.lines == ("ab", "cd")
    assert (pane.cursor.row, pane.cursor.col) == (1, 0)


def test_backspace_at_origin_is_noop():
    pane = Pane()
    pane.load("abc")
    assert not pane.delete_before_cursor(10)
    assert not pane.history.can_undo()
    assert not pane.modified


def test_replace_content_is_one_undo_step():
    pane = Pane()
    pane.load("first\nversion")
    pane.replace_content("second\n", 10)
    assert pane.document.lines == ("second",)
    assert pane.modified
    pane.undo(10)
    assert pane.document.lines == ("first", "version")
    assert not pane.modified

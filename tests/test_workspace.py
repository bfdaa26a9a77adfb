"""Tests for panes, splits, and action routing in the Workspace."""

import blessed

from splitpad.cursor import Direction
from splitpad.highlight import PLAIN, PYTHON, RUST
from splitpad.view import WorkspaceView, layout_panes
from splitpad.workspace import SplitMode, Workspace, visible_row_budget


def type_text(ws, text, budget=10):
    for ch in text:
        ws.insert_char(ch, budget)


def test_starts_with_single_unnamed_pane():
    ws = Workspace()
    assert ws.pane_count == 1
    assert ws.split_mode is SplitMode.NONE
    assert ws.active_pane.display_name == "[No Name]"


def test_split_creation_cap():
    ws = Workspace()
    assert ws.split_horizontal()
    assert not ws.split_horizontal()
    assert ws.pane_count == 2
    assert not ws.split_vertical()
    assert ws.split_mode is SplitMode.HORIZONTAL


def test_split_creates_fresh_pane():
    ws = Workspace()
    type_text(ws, "hello")
    ws.split_vertical()
    assert ws.panes[1].document.lines == ("",)
    assert not ws.panes[1].modified
    assert ws.panes[1] is not ws.panes[0]
    assert ws.active_index == 0


def test_next_pane_cycles():
    ws = Workspace()
    assert not ws.next_pane()
    ws.split_horizontal()
    assert ws.next_pane()
    assert ws.active_index == 1
    assert ws.next_pane()
    assert ws.active_index == 0


def test_close_split_clamps_active_index():
    ws = Workspace()
    ws.split_vertical()
    ws.next_pane()
    assert ws.close_split()
    assert ws.pane_count == 1
    assert ws.active_index == 0
    assert ws.split_mode is SplitMode.NONE
    assert not ws.close_split()


def test_close_split_removes_active_pane():
    ws = Workspace()
    type_text(ws, "keep")
    ws.split_horizontal()
    ws.next_pane()
    type_text(ws, "drop")
    ws.close_split()
    assert ws.active_pane.document.lines == ("keep",)


def test_panes_are_isolated():
    ws = Workspace()
    ws.open_with_content("shared text\nline two", filename="a.txt")
    ws.split_horizontal()
    other = ws.panes[0]
    ws.next_pane()
    type_text(ws, "abc")
    ws.move_cursor(Direction.LEFT, 10)
    ws.search("b", 10)
    ws.undo(10)

    assert other.document.lines == ("shared text", "line two")
    assert (other.cursor.row, other.cursor.col) == (0, 0)
    assert not other.modified
    assert other.search_query == ""
    assert not other.history.can_undo()
    assert ws.active_pane.document.lines == ("ab",)


def test_undo_redo_messages():
    ws = Workspace()
    ws.undo(10)
    assert ws.status_message == "Nothing to undo"
    ws.insert_char("x", 10)
    assert ws.status_message is None
    ws.undo(10)
    assert ws.status_message == "Undone"
    ws.redo(10)
    assert ws.status_message == "Redone"
    ws.redo(10)
    assert ws.status_message == "Nothing to redo"


def test_insert_tab_uses_tab_width():
    ws = Workspace(tab_width=2)
    ws.insert_tab(10)
    assert ws.active_pane.document.lines == ("  ",)
    assert ws.active_pane.cursor.col == 2


def test_insert_newline_and_backspace():
    ws = Workspace()
    type_text(ws, "ab")
    ws.move_cursor(Direction.LEFT, 10)
    ws.insert_newline(10)
    assert ws.active_pane.document.lines == ("a", "b")
    ws.delete_before_cursor(10)
    assert ws.active_pane.document.lines == ("ab",)
    assert (ws.active_pane.cursor.row, ws.active_pane.cursor.col) == (0, 1)


def test_open_with_content_picks_profile_from_filename():
    ws = Workspace()
    ws.open_with_content("fn main() {}\n", filename="src/main.rs")
    pane = ws.active_pane
    assert pane.profile is RUST
    assert pane.filename == "src/main.rs"
    assert pane.display_name == "main.rs"
    assert ws.status_message == "Opened src/main.rs"
    assert not pane.modified
    assert not pane.history.can_undo()


def test_open_with_content_profile_hint_overrides_filename():
    ws = Workspace()
    ws.open_with_content("x = 1", filename="notes.txt", profile=PYTHON)
    assert ws.active_pane.profile is PYTHON


def test_open_without_filename_is_plain():
    ws = Workspace()
    ws.open_with_content("text")
    assert ws.active_pane.profile is PLAIN


def test_open_resets_pane_state():
    ws = Workspace()
    type_text(ws, "draft")
    ws.search("dr", 10)
    ws.open_with_content("fresh")
    pane = ws.active_pane
    assert (pane.cursor.row, pane.cursor.col) == (0, 0)
    assert pane.viewport.offset == 0
    assert pane.last_match is None
    assert not pane.history.can_undo()


def test_replace_all_content_is_undoable():
    ws = Workspace()
    ws.open_with_content("before")
    ws.replace_all_content("after\nwards", 10)
    assert ws.active_pane.document.lines == ("after", "wards")
    assert ws.active_pane.modified
    ws.undo(10)
    assert ws.active_pane.document.lines == ("before",)


def test_visible_row_budget():
    assert visible_row_budget(24, SplitMode.NONE) == 22
    assert visible_row_budget(24, SplitMode.VERTICAL) == 22
    assert visible_row_budget(24, SplitMode.HORIZONTAL) == 10
    assert visible_row_budget(2, SplitMode.NONE) == 1
    assert visible_row_budget(3, SplitMode.HORIZONTAL) == 1


def test_split_rescrolls_active_pane_into_its_rows():
    ws = Workspace()
    ws.open_with_content("\n".join(f"line {i}" for i in range(40)))
    for _ in range(20):
        ws.move_cursor(Direction.DOWN, visible_row_budget(24, ws.split_mode))
    assert ws.active_pane.viewport.offset == 0

    ws.split_horizontal()
    ws.fit_viewports(visible_row_budget(24, ws.split_mode))
    assert ws.active_pane.viewport.offset == 11

    frame = WorkspaceView(blessed.Terminal(force_styling=None)).compose(ws, 80, 24)
    top = layout_panes(80, 24, ws.split_mode, ws.pane_count)[0]
    assert top.top <= frame.cursor_y < top.top + top.height


def test_fit_viewports_covers_inactive_pane():
    ws = Workspace()
    ws.open_with_content("\n".join("x" for _ in range(30)))
    for _ in range(25):
        ws.move_cursor(Direction.DOWN, 28)
    ws.split_vertical()
    ws.next_pane()
    ws.fit_viewports(5)
    assert ws.panes[0].viewport.offset == 21
    assert ws.panes[1].viewport.offset == 0


def test_insert_text_is_one_command_per_character():
    ws = Workspace()
    ws.insert_char("ab", 10)
    assert ws.active_pane.document.lines == ("ab",)
    ws.undo(10)
    assert ws.active_pane.document.lines == ("a",)
    ws.undo(10)
    assert ws.active_pane.document.lines == ("",)
    assert not ws.active_pane.modified


def test_pane_insert_char_ignores_non_single_characters():
    ws = Workspace()
    pane = ws.active_pane
    pane.insert_char("ab", 10)
    pane.insert_char("", 10)
    pane.insert_char("\n", 10)
    assert pane.document.lines == ("",)
    assert not pane.history.can_undo()
    assert not pane.modified

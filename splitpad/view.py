"""Screen composition: pane layout, gutters, colours, status and message lines.

The view reads pane state and produces plain strings with blessed
formatting sequences embedded; it never mutates the workspace.
"""

from dataclasses import dataclass
from typing import Optional

import blessed

from .constants import EditorConstants
from .highlight import Token, TokenType
from .pane import Pane
from .workspace import SplitMode, Workspace, visible_row_budget

TOKEN_COLORS = {
    TokenType.KEYWORD: 'magenta',
    TokenType.STRING: 'green',
    TokenType.COMMENT: 'bright_black',
    TokenType.NUMBER: 'cyan',
    TokenType.TYPE: 'blue',
    TokenType.NORMAL: 'white',
}

HORIZONTAL_DIVIDER = '─'
VERTICAL_DIVIDER = '│'


@dataclass
class PaneRect:
    index: int
    left: int
    top: int
    width: int
    height: int


@dataclass
class Frame:
    lines: list[str]  # Text area rows, each already padded to the terminal width
    status: str
    message: str
    cursor_y: int
    cursor_x: int


def layout_panes(width: int, height: int, split_mode: SplitMode, pane_count: int) -> list[PaneRect]:
    """Screen rectangles for each pane, leaving the bottom two rows for chrome."""
    rows = visible_row_budget(height, split_mode)
    if pane_count < 2 or split_mode is SplitMode.NONE:
        return [PaneRect(0, 0, 0, width, rows)]
    if split_mode is SplitMode.HORIZONTAL:
        return [
            PaneRect(0, 0, 0, width, rows),
            PaneRect(1, 0, rows + 1, width, rows),
        ]
    split_width = width // 2
    return [
        PaneRect(0, 0, 0, split_width, rows),
        PaneRect(1, split_width + 1, 0, max(0, width - split_width - 1), rows),
    ]


def clip_tokens(tokens: list[Token], width: int) -> list[Token]:
    """Cut a token list so the texts total at most ``width`` characters."""
    clipped: list[Token] = []
    remaining = width
    for text, token_type in tokens:
        if remaining <= 0:
            break
        piece = text[:remaining]
        if piece:
            clipped.append((piece, token_type))
        remaining -= len(piece)
    return clipped


def last_content_row(pane: Pane) -> int:
    last = 0
    for row, line in enumerate(pane.document.lines):
        if line.strip():
            last = row
    return last


class WorkspaceView:
    """Renders a Workspace onto a terminal-sized grid of strings."""

    def __init__(self, term: Optional[blessed.Terminal] = None, show_line_numbers: bool = True):
        self.term = term or blessed.Terminal()
        self.show_line_numbers = show_line_numbers

    def gutter_width(self, pane: Pane) -> int:
        if not self.show_line_numbers:
            return 0
        return len(str(pane.document.line_count)) + 1

    def _style(self, name: str) -> str:
        return str(getattr(self.term, name))

    def _gutter(self, pane: Pane, row: int, active: bool, numbered_until: int) -> str:
        width = self.gutter_width(pane) - 1
        if row < pane.document.line_count and row <= numbered_until:
            color = 'yellow' if active else 'bright_black'
            label = str(row + 1)
        else:
            color = 'bright_black'
            label = '~'
        return self._style(color) + label.rjust(width) + ' ' + self._style('normal')

    def _highlight_matches(self, text: str, query: str) -> str:
        out = []
        last_end = 0
        match_style = self._style('black_on_yellow')
        normal = self._style('normal')
        idx = text.find(query)
        while idx != -1:
            out.append(text[last_end:idx])
            out.append(match_style + text[idx:idx + len(query)] + normal)
            last_end = idx + len(query)
            idx = text.find(query, last_end)
        out.append(text[last_end:])
        return ''.join(out)

    def _syntax(self, tokens: list[Token]) -> str:
        normal = self._style('normal')
        return ''.join(self._style(TOKEN_COLORS[t]) + text + normal for text, t in tokens)

    def render_row(self, pane: Pane, row: int, width: int, active: bool,
                   numbered_until: Optional[int] = None) -> str:
        """One screen row of a pane: gutter plus coloured text, padded to ``width``."""
        if numbered_until is None:
            numbered_until = max(last_content_row(pane), pane.cursor.row)
        gutter_width = min(self.gutter_width(pane), width)
        text_width = max(0, width - gutter_width)
        parts = []
        used = 0

        if self.show_line_numbers and gutter_width:
            parts.append(self._gutter(pane, row, active, numbered_until))
            used += gutter_width

        line = pane.document.line(row)
        if line is not None:
            display_line = line[:text_width]
            if pane.search_query and pane.search_query in line:
                parts.append(self._highlight_matches(display_line, pane.search_query))
            else:
                parts.append(self._syntax(clip_tokens(pane.tokens_for_row(row), text_width)))
            used += len(display_line)
        elif not self.show_line_numbers and width > 0:
            parts.append(self._style('bright_black') + '~' + self._style('normal'))
            used += 1

        parts.append(' ' * max(0, width - used))
        return ''.join(parts)

    def render_pane(self, pane: Pane, rect: PaneRect, active: bool) -> list[str]:
        numbered_until = max(last_content_row(pane), pane.cursor.row)
        line_count = pane.document.line_count
        rows = list(pane.viewport.visible_rows(rect.height, line_count))
        # Rows past the end of the document render as filler
        rows += range(line_count, line_count + rect.height - len(rows))
        return [self.render_row(pane, row, rect.width, active, numbered_until) for row in rows]

    def status_text(self, workspace: Workspace) -> str:
        pane = workspace.active_pane
        modified = EditorConstants.MODIFIED_INDICATOR if pane.modified else ""
        split = {
            SplitMode.NONE: "",
            SplitMode.HORIZONTAL: " [H-Split]",
            SplitMode.VERTICAL: " [V-Split]",
        }[workspace.split_mode]
        return (f" {pane.display_name} | Pane {workspace.active_index + 1}/{workspace.pane_count}"
                f" | Line {pane.cursor.row + 1}/{pane.document.line_count}"
                f" Col {pane.cursor.col + 1}{modified}{split}")

    def message_text(self, workspace: Workspace, prompt: Optional[str] = None,
                     prompt_input: str = "") -> str:
        if prompt is not None:
            return prompt + prompt_input
        if workspace.status_message:
            return workspace.status_message
        return EditorConstants.HELP_LINE

    def compose(self, workspace: Workspace, width: int, height: int,
                prompt: Optional[str] = None, prompt_input: str = "") -> Frame:
        rects = layout_panes(width, height, workspace.split_mode, workspace.pane_count)
        text_rows = max(0, height - EditorConstants.CHROME_ROWS)
        lines = [' ' * width for _ in range(text_rows)]

        rendered = {
            rect.index: self.render_pane(workspace.panes[rect.index], rect,
                                         rect.index == workspace.active_index)
            for rect in rects
        }

        if len(rects) == 1:
            for y, text in enumerate(rendered[0][:text_rows]):
                lines[y] = text
        elif workspace.split_mode is SplitMode.HORIZONTAL:
            top, bottom = rects
            for y, text in enumerate(rendered[0]):
                if y < text_rows:
                    lines[y] = text
            if top.height < text_rows:
                lines[top.height] = HORIZONTAL_DIVIDER * width
            for y, text in enumerate(rendered[1]):
                if bottom.top + y < text_rows:
                    lines[bottom.top + y] = text
        else:
            divider = self._style('bright_black') + VERTICAL_DIVIDER + self._style('normal')
            for y in range(min(text_rows, rects[0].height)):
                lines[y] = rendered[0][y] + divider + rendered[1][y]

        status = self._style('white_on_bright_black') + self.status_text(workspace)[:width].ljust(width) + self._style('normal')
        message = self.message_text(workspace, prompt, prompt_input)[:width]

        if prompt is not None:
            cursor_y, cursor_x = height - 1, min(len(message), max(0, width - 1))
        else:
            rect = rects[workspace.active_index] if workspace.active_index < len(rects) else rects[0]
            pane = workspace.active_pane
            cursor_y = rect.top + max(0, pane.cursor.row - pane.viewport.offset)
            cursor_x = rect.left + self.gutter_width(pane) + pane.cursor.col
            cursor_x = min(cursor_x, rect.left + max(0, rect.width - 1))

        return Frame(lines=lines, status=status, message=message, cursor_y=cursor_y, cursor_x=cursor_x)

"""Frame painter for the browser render model.

Composes a full-screen ANSI frame: a bordered content box (tree rows or a
file window) above a bordered help box. Rendering never mutates browser
state; the tree window is derived from the cursor row on every frame.
"""

from __future__ import annotations

import os
import sys

from .ansi import clip_ansi_line, display_width, pad_ansi_line
from .browser import FileFrame, Frame, TreeFrame, TreeRow
from .highlight import StyledLine
from .ui_theme import DEFAULT_THEME, UITheme

FILLER_GLYPH = "~"
HIGHLIGHT_SYMBOL = ">> "
HELP_BOX_ROWS = 3


def _border_top(title: str, inner_width: int, theme: UITheme) -> str:
    label = clip_ansi_line(title, inner_width)
    rule = "─" * max(0, inner_width - display_width(label))
    return f"{theme.border}┌{theme.reset}{theme.title}{label}{theme.reset}{theme.border}{rule}┐{theme.reset}"


def _border_row(content: str, inner_width: int, theme: UITheme) -> str:
    body = pad_ansi_line(content, inner_width)
    if "\033" in body:
        body += "\033[0m"
    return f"{theme.border}│{theme.reset}{body}{theme.border}│{theme.reset}"


def _border_bottom(inner_width: int, theme: UITheme) -> str:
    return f"{theme.border}└{'─' * inner_width}┘{theme.reset}"


def tree_window_start(rows: tuple[TreeRow, ...], height: int) -> int:
    """First visible tree row so the cursor row stays on screen."""
    cursor_idx = next((idx for idx, row in enumerate(rows) if row.is_cursor), 0)
    return max(0, cursor_idx - height + 1)


def format_tree_row(row: TreeRow, theme: UITheme) -> str:
    indent = "  " * row.depth
    marker = "  "
    if row.is_dir:
        marker = "▾ " if row.is_open else "▸ "
    if row.is_cursor:
        return f"{theme.cursor}{HIGHLIGHT_SYMBOL}{indent}{marker}{row.label}{theme.reset}"
    if row.is_dir:
        body = f"{theme.tree_marker}{marker}{theme.reset}{theme.tree_dir}{row.label}{theme.reset}"
    else:
        color = theme.checkbox_checked if row.checked else theme.tree_file
        body = f"{marker}{color}{row.label}{theme.reset}"
    return f"{' ' * len(HIGHLIGHT_SYMBOL)}{indent}{body}"


def format_styled_line(line: StyledLine, theme: UITheme) -> str:
    out: list[str] = []
    for text, color in line:
        if color and theme.reset:
            out.append(f"{color}{text}{theme.reset}")
        else:
            out.append(text)
    return "".join(out)


def compose_frame(frame: Frame, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Return the frame as ``height`` screen rows of at most ``width`` columns."""
    inner_width = max(1, width - 2)
    content_height = max(1, height - HELP_BOX_ROWS - 2)
    rows: list[str] = [_border_top(frame.title, inner_width, theme)]

    if isinstance(frame, TreeFrame):
        start = tree_window_start(frame.rows, content_height)
        for offset in range(content_height):
            idx = start + offset
            content = format_tree_row(frame.rows[idx], theme) if idx < len(frame.rows) else ""
            rows.append(_border_row(content, inner_width, theme))
        help_text = f"{theme.status}{frame.status}{theme.reset}" if frame.status else frame.help
    else:
        assert isinstance(frame, FileFrame)
        for offset in range(content_height):
            line = frame.rows[offset] if offset < len(frame.rows) else None
            if line is None:
                content = f"{theme.filler}{FILLER_GLYPH}{theme.reset}"
            else:
                content = format_styled_line(line, theme)
            rows.append(_border_row(content, inner_width, theme))
        help_text = frame.help

    rows.append(_border_bottom(inner_width, theme))
    rows.append(_border_top(" Help ", inner_width, theme))
    rows.append(_border_row(f"{theme.help}{help_text}{theme.reset}", inner_width, theme))
    rows.append(_border_bottom(inner_width, theme))
    return rows


def render_frame(frame: Frame, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> None:
    """Paint ``frame`` over the whole screen in one write."""
    out = ["\033[H\033[J", "\r\n".join(compose_frame(frame, width, height, theme))]
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "FILLER_GLYPH",
    "HIGHLIGHT_SYMBOL",
    "tree_window_start",
    "format_tree_row",
    "format_styled_line",
    "compose_frame",
    "render_frame",
]

"""Two-mode template browser: tree navigation/selection and file viewing.

The browser is the single mutator of tree cursor, open directories, the
selection set and file-view scroll. Modes are plain frozen dataclasses; the
current mode is one of ``TreeView``, ``FileView``, ``Exit`` or ``Extract``.
Each frame is described by a ``TreeFrame`` or ``FileFrame`` render model.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .highlight import StyledLine, read_template_text
from .selection import SelectionSet
from .tree_model import DirectoryEntry, FileEntry, TreeNode, find_node, flatten_visible, row_index, step_cursor

CHECKED_GLYPH = "[x]"
UNCHECKED_GLYPH = "[ ]"
TREE_HELP = "↑/k: Up | ↓/j: Down | ←/h: Collapse | →/l: Expand/View | Space: Toggle | e: Export | q: Quit"
FILE_HELP = "↑/k: Scroll Up | ↓/j: Scroll Down | ←/h: Back to Tree | q/Esc: Back to Tree | e: Export"


class Action(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    VIEW = "view"
    TOGGLE = "toggle"
    BACK = "back"
    EXPORT = "export"
    QUIT = "quit"


@dataclass(frozen=True)
class TreeView:
    pass


@dataclass(frozen=True)
class FileView:
    path: str
    lines: tuple[StyledLine, ...]
    scroll: int = 0


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Extract:
    pass


Mode = TreeView | FileView | Exit | Extract


@dataclass(frozen=True)
class TreeRow:
    """One tree row in the render model; ``checked`` is ``None`` for directories."""

    identifier: str
    depth: int
    label: str
    is_dir: bool
    is_open: bool
    is_cursor: bool
    checked: bool | None


@dataclass(frozen=True)
class TreeFrame:
    title: str
    rows: tuple[TreeRow, ...]
    help: str = TREE_HELP
    status: str = ""


@dataclass(frozen=True)
class FileFrame:
    """Windowed file view. ``None`` rows lie past end-of-file and are drawn as filler."""

    title: str
    rows: tuple[StyledLine | None, ...]
    position: str
    help: str = FILE_HELP


Frame = TreeFrame | FileFrame


def scroll_position(scroll: int, viewport_height: int, total_lines: int) -> str:
    """Return the file-view position indicator (``Empty``/``Top``/``Bottom``/``N%``)."""
    if total_lines == 0:
        return "Empty"
    if scroll == 0:
        return "Top"
    if scroll + viewport_height >= total_lines:
        return "Bottom"
    return f"{((scroll + viewport_height // 2) * 100) // total_lines}%"


def checkbox_label(name: str, checked: bool) -> str:
    return f"{CHECKED_GLYPH if checked else UNCHECKED_GLYPH} {name}"


@dataclass
class Browser:
    """Template browser state machine.

    ``highlighter`` maps ``(content, path)`` to styled lines; ``read_text``
    returns ``None`` for binary files so viewing them is silently skipped.
    """

    roots: tuple[TreeNode, ...]
    highlighter: Callable[[str, Path], list[StyledLine]]
    template_root: Path = Path(".")
    read_text: Callable[[Path], str | None] = read_template_text
    selection: SelectionSet = field(default_factory=SelectionSet)
    opened: set[str] = field(default_factory=set)
    cursor: str | None = None
    mode: Mode = field(default_factory=TreeView)
    status_message: str = ""

    def __post_init__(self) -> None:
        if self.roots and self.cursor is None:
            first_id = self.roots[0].identifier
            self.opened.add(first_id)
            self.cursor = first_id

    @property
    def finished(self) -> bool:
        return isinstance(self.mode, (Exit, Extract))

    def current_node(self) -> TreeNode | None:
        if self.cursor is None:
            return None
        return find_node(self.roots, self.cursor)

    def dispatch(self, action: Action, viewport_height: int) -> Mode:
        """Apply one action and return the resulting mode."""
        mode = self.mode
        if isinstance(mode, (Exit, Extract)):
            return mode
        if action is Action.QUIT:
            self.mode = Exit()
        elif action is Action.EXPORT:
            self.mode = Extract()
        elif isinstance(mode, FileView):
            self._dispatch_file_view(mode, action, viewport_height)
        else:
            self._dispatch_tree_view(action)
        return self.mode

    def _dispatch_tree_view(self, action: Action) -> None:
        self.status_message = ""
        if action is Action.UP:
            self.cursor = step_cursor(self._rows(), self.cursor, -1)
        elif action is Action.DOWN:
            self.cursor = step_cursor(self._rows(), self.cursor, 1)
        elif action is Action.LEFT:
            self.collapse_or_ascend()
        elif action in {Action.RIGHT, Action.VIEW}:
            self.expand_or_view()
        elif action is Action.TOGGLE:
            self.toggle_current()

    def _dispatch_file_view(self, mode: FileView, action: Action, viewport_height: int) -> None:
        if action is Action.UP:
            self.mode = FileView(mode.path, mode.lines, max(mode.scroll - 1, 0))
        elif action is Action.DOWN:
            if mode.scroll + viewport_height < len(mode.lines):
                self.mode = FileView(mode.path, mode.lines, mode.scroll + 1)
        elif action in {Action.BACK, Action.LEFT}:
            self.mode = TreeView()

    def _rows(self):
        return flatten_visible(self.roots, self.opened)

    def collapse_or_ascend(self) -> None:
        """Close the cursor directory, else move to its parent.

        When no parent exists the cursor falls back to the first root entry
        so there is always a selection on a non-empty tree.
        """
        rows = self._rows()
        idx = row_index(rows, self.cursor)
        if idx is not None:
            row = rows[idx]
            if isinstance(row.node, DirectoryEntry) and row.node.identifier in self.opened:
                self.opened.discard(row.node.identifier)
                return
            self.cursor = row.parent
        if self.cursor is None and self.roots:
            self.cursor = self.roots[0].identifier

    def expand_or_view(self) -> None:
        node = self.current_node()
        if isinstance(node, DirectoryEntry):
            self.opened.add(node.identifier)
            return
        if not isinstance(node, FileEntry):
            return
        try:
            content = self.read_text(node.path)
        except OSError as exc:
            self.status_message = f"Cannot read {node.name}: {exc.strerror or exc}"
            return
        if content is None:
            return
        lines = self.highlighter(content, node.path)
        self.mode = FileView(path=node.identifier, lines=tuple(lines), scroll=0)

    def toggle_current(self) -> None:
        node = self.current_node()
        if isinstance(node, FileEntry):
            self.selection.toggle(node.identifier)

    def frame(self, viewport_height: int) -> Frame:
        """Build the render model for the current mode."""
        mode = self.mode
        if isinstance(mode, FileView):
            return self._file_frame(mode, viewport_height)
        return self._tree_frame()

    def _tree_frame(self) -> TreeFrame:
        rows: list[TreeRow] = []
        for row in self._rows():
            node = row.node
            if isinstance(node, FileEntry):
                checked = node.identifier in self.selection
                label = checkbox_label(node.name, checked)
                rows.append(TreeRow(node.identifier, row.depth, label, False, False, node.identifier == self.cursor, checked))
            else:
                is_open = node.identifier in self.opened
                rows.append(TreeRow(node.identifier, row.depth, node.name, True, is_open, node.identifier == self.cursor, None))
        title = f" Templates: {self.template_root} ({len(self.selection)} selected) "
        return TreeFrame(title=title, rows=tuple(rows), status=self.status_message)

    def _file_frame(self, mode: FileView, viewport_height: int) -> FileFrame:
        total = len(mode.lines)
        visible: list[StyledLine | None] = []
        for offset in range(max(0, viewport_height)):
            line_idx = mode.scroll + offset
            visible.append(mode.lines[line_idx] if line_idx < total else None)
        position = scroll_position(mode.scroll, viewport_height, total)
        title = f" Viewing: {Path(mode.path).name} ({position} - line {mode.scroll + 1}/{max(total, 1)}) "
        return FileFrame(title=title, rows=tuple(visible), position=position)


__all__ = [
    "Action",
    "TreeView",
    "FileView",
    "Exit",
    "Extract",
    "Mode",
    "TreeRow",
    "TreeFrame",
    "FileFrame",
    "Frame",
    "Browser",
    "scroll_position",
    "checkbox_label",
    "CHECKED_GLYPH",
    "UNCHECKED_GLYPH",
]

"""Visible-row projection and cursor stepping over the template tree."""

from __future__ import annotations

from dataclasses import dataclass

from .types import DirectoryEntry, TreeNode


@dataclass(frozen=True)
class VisibleRow:
    """One row of the flattened tree as currently shown."""

    node: TreeNode
    depth: int
    parent: str | None


def flatten_visible(nodes: tuple[TreeNode, ...], opened: set[str]) -> list[VisibleRow]:
    """Flatten ``nodes`` into display rows, descending only into opened directories."""
    rows: list[VisibleRow] = []
    stack: list[tuple[TreeNode, int, str | None]] = [(node, 0, None) for node in reversed(nodes)]
    while stack:
        node, depth, parent = stack.pop()
        rows.append(VisibleRow(node=node, depth=depth, parent=parent))
        if isinstance(node, DirectoryEntry) and node.identifier in opened:
            stack.extend((child, depth + 1, node.identifier) for child in reversed(node.children))
    return rows


def row_index(rows: list[VisibleRow], identifier: str | None) -> int | None:
    """Return the row index of ``identifier`` or ``None`` when not visible."""
    if identifier is None:
        return None
    for idx, row in enumerate(rows):
        if row.node.identifier == identifier:
            return idx
    return None


def step_cursor(rows: list[VisibleRow], identifier: str | None, direction: int) -> str | None:
    """Move the cursor by ``direction`` rows, clamped at both ends.

    With no current cursor, stepping down lands on the first row and stepping
    up on the last one.
    """
    if not rows:
        return None
    idx = row_index(rows, identifier)
    if idx is None:
        target = 0 if direction > 0 else len(rows) - 1
    else:
        target = max(0, min(len(rows) - 1, idx + direction))
    return rows[target].node.identifier


__all__ = [
    "VisibleRow",
    "flatten_visible",
    "row_index",
    "step_cursor",
]

"""Filesystem scanning and template-tree construction."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .types import DirectoryEntry, FileEntry, TreeNode

DEFAULT_MARKER_SUFFIX = ".tt"
EXCLUDED_NAMES = frozenset({".ds_store", ".git", "node_modules"})


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child as observed by a single scan."""

    name: str
    path: Path
    is_dir: bool


def strip_marker_suffix(name: str, marker_suffix: str = DEFAULT_MARKER_SUFFIX) -> str:
    """Return ``name`` without a trailing marker suffix."""
    if marker_suffix and name.endswith(marker_suffix):
        return name[: -len(marker_suffix)]
    return name


def is_visible_entry(name: str, is_dir: bool, marker_suffix: str = DEFAULT_MARKER_SUFFIX) -> bool:
    """Visibility predicate for one directory entry.

    Fixed system names are always hidden (case-insensitive). Directories are
    otherwise visible; files only when they carry the marker suffix.
    """
    if name.lower() in EXCLUDED_NAMES:
        return False
    if is_dir:
        return True
    return len(name) > len(marker_suffix) and name.endswith(marker_suffix)


def list_directory_children(
    directory: Path,
    marker_suffix: str = DEFAULT_MARKER_SUFFIX,
) -> tuple[list[DirectoryChild], Exception | None]:
    """List visible children of ``directory`` sorted by full path string.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                    is_file = child.is_file()
                except OSError:
                    continue
                if not is_dir and not is_file:
                    continue
                if not is_visible_entry(child.name, is_dir, marker_suffix):
                    continue
                children.append(DirectoryChild(name=child.name, path=Path(child.path), is_dir=is_dir))
    except OSError as exc:
        return [], exc

    children.sort(key=lambda item: str(item.path))
    return children, None


def build_template_tree(
    root: Path,
    *,
    marker_suffix: str = DEFAULT_MARKER_SUFFIX,
    show_empty_dirs: bool = True,
) -> tuple[TreeNode, ...]:
    """Build the immutable template tree below ``root``.

    A missing root yields an empty tree. A root that exists but cannot be read
    raises the underlying ``OSError``; unreadable nested directories become
    empty directory nodes. Directories are walked with an explicit stack so
    deep trees never exhaust the interpreter stack.
    """
    if not root.exists():
        return ()

    top_children, scan_error = list_directory_children(root, marker_suffix)
    if scan_error is not None:
        raise scan_error

    listings: dict[Path, list[DirectoryChild]] = {root: top_children}
    discovery_order: list[Path] = []
    stack = [child.path for child in reversed(top_children) if child.is_dir]
    while stack:
        directory = stack.pop()
        discovery_order.append(directory)
        children, _scan_error = list_directory_children(directory, marker_suffix)
        listings[directory] = children
        stack.extend(child.path for child in reversed(children) if child.is_dir)

    # Parents are discovered before their children, so reverse order builds leaves first.
    built: dict[Path, DirectoryEntry | None] = {}
    for directory in [*reversed(discovery_order), root]:
        nodes: list[TreeNode] = []
        for child in listings[directory]:
            if child.is_dir:
                node = built[child.path]
                if node is not None:
                    nodes.append(node)
                continue
            nodes.append(
                FileEntry(
                    identifier=str(child.path),
                    name=strip_marker_suffix(child.name, marker_suffix),
                )
            )
        if directory == root:
            return tuple(nodes)
        if not nodes and not show_empty_dirs:
            built[directory] = None
            continue
        built[directory] = DirectoryEntry(
            identifier=str(directory),
            name=directory.name,
            children=tuple(nodes),
        )
    return ()


def iter_files(nodes: tuple[TreeNode, ...]) -> Iterator[FileEntry]:
    """Yield every file leaf below ``nodes`` in display order."""
    stack: list[TreeNode] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        if isinstance(node, FileEntry):
            yield node
            continue
        stack.extend(reversed(node.children))


def find_node(nodes: tuple[TreeNode, ...], identifier: str) -> TreeNode | None:
    """Return the node with ``identifier`` or ``None`` when absent."""
    stack: list[TreeNode] = list(nodes)
    while stack:
        node = stack.pop()
        if node.identifier == identifier:
            return node
        if isinstance(node, DirectoryEntry):
            stack.extend(node.children)
    return None


__all__ = [
    "DEFAULT_MARKER_SUFFIX",
    "EXCLUDED_NAMES",
    "DirectoryChild",
    "strip_marker_suffix",
    "is_visible_entry",
    "list_directory_children",
    "build_template_tree",
    "iter_files",
    "find_node",
]

"""Template tree model: immutable nodes, filesystem scanning, row projection.

This package contains non-UI tree primitives:
- file/directory node datatypes with nested children
- visibility-filtered filesystem scanning
- flattening of opened directories into display rows
"""

from __future__ import annotations

from .types import DirectoryEntry, FileEntry, TreeNode
from .fs import (
    DEFAULT_MARKER_SUFFIX,
    EXCLUDED_NAMES,
    DirectoryChild,
    build_template_tree,
    find_node,
    is_visible_entry,
    iter_files,
    list_directory_children,
    strip_marker_suffix,
)
from .navigation import VisibleRow, flatten_visible, row_index, step_cursor

__all__ = [
    "DirectoryEntry",
    "FileEntry",
    "TreeNode",
    "DEFAULT_MARKER_SUFFIX",
    "EXCLUDED_NAMES",
    "DirectoryChild",
    "build_template_tree",
    "find_node",
    "is_visible_entry",
    "iter_files",
    "list_directory_children",
    "strip_marker_suffix",
    "VisibleRow",
    "flatten_visible",
    "row_index",
    "step_cursor",
]

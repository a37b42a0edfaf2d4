"""Domain datatypes for the template file tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileEntry:
    """Template file leaf. ``identifier`` is the canonical path string."""

    identifier: str
    name: str

    @property
    def path(self) -> Path:
        return Path(self.identifier)


@dataclass(frozen=True)
class DirectoryEntry:
    """Directory node with its visible children sorted by path."""

    identifier: str
    name: str
    children: tuple["TreeNode", ...] = ()


TreeNode = DirectoryEntry | FileEntry


__all__ = [
    "FileEntry",
    "DirectoryEntry",
    "TreeNode",
]

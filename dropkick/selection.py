"""Selected-template bookkeeping layered over the immutable tree."""

from __future__ import annotations

from collections.abc import Iterator


class SelectionSet:
    """Set of selected file identifiers.

    Identifiers are canonical path strings, so membership survives any number
    of re-renders. Directories are never added; callers toggle files only.
    """

    def __init__(self) -> None:
        self._selected: set[str] = set()

    def toggle(self, identifier: str) -> bool:
        """Flip membership of ``identifier`` and return the new state."""
        if identifier in self._selected:
            self._selected.remove(identifier)
            return False
        self._selected.add(identifier)
        return True

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._selected))

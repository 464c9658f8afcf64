"""
Single-step undo history for CanvasFS.
"""

from __future__ import annotations

from canvasfs import paths
from canvasfs.exceptions import NoHistoryError
from canvasfs.types import HistoryEntry


class UndoHistory:
    """
    Keyed store holding, per path, the file content before its latest edit.

    Only one level is kept: record() overwrites unconditionally, and take()
    consumes the entry so a second consecutive undo has nothing to restore.
    Paths are expected to be normalized already.
    """

    def __init__(self) -> None:
        self._entries: dict[str, HistoryEntry] = {}

    def record(self, path: str, content: str) -> None:
        """Remember content as the state to restore for path."""
        self._entries[path] = HistoryEntry(path=path, content=content)

    def peek(self, path: str) -> HistoryEntry | None:
        """Get the entry for path without consuming it."""
        return self._entries.get(path)

    def take(self, path: str) -> str:
        """
        Remove and return the recorded content for path.

        Raises:
            NoHistoryError: If nothing is recorded for path.
        """
        entry = self._entries.pop(path, None)
        if entry is None:
            raise NoHistoryError(f"No edit history for {path}; nothing to undo", path)
        return entry.content

    def invalidate(self, path: str) -> None:
        """Forget the entry for path, if any."""
        self._entries.pop(path, None)

    def invalidate_tree(self, path: str) -> None:
        """Forget entries for path and for every path below it."""
        stale = [
            key
            for key in self._entries
            if key == path or paths.is_ancestor(path, key)
        ]
        for key in stale:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def recorded_paths(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

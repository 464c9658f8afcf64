"""
Text-edit engine for CanvasFS.

Implements the editor command set (view, create, str_replace, insert, undo)
on top of a FileTree, keeping a single-step UndoHistory per file. Every
mutator validates completely before it touches the tree, so a failed call
never leaves a partial edit behind.
"""

from __future__ import annotations

import re

from canvasfs import paths
from canvasfs.exceptions import (
    AlreadyExistsError,
    AmbiguousMatchError,
    CanvasFSError,
    InvalidRangeError,
    NoHistoryError,
    NoMatchError,
)
from canvasfs.history import UndoHistory
from canvasfs.tree import FileTree
from canvasfs.types import EditSummary, NodeKind

_LINE_PATTERN = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z")
_TERMINATORS = ("\r\n", "\n", "\r")


def split_lines(content: str) -> list[str]:
    """Split content into lines, each keeping its original terminator."""
    return _LINE_PATTERN.findall(content)


def line_count(content: str) -> int:
    """Count lines; a trailing terminator does not open a new line."""
    return len(split_lines(content))


def _terminator(line: str) -> str:
    for terminator in _TERMINATORS:
        if line.endswith(terminator):
            return terminator
    return ""


def insert_lines(content: str, insert_line: int, new_str: str) -> str:
    """
    Insert new_str as its own line(s) after line insert_line.

    insert_line 0 places the text before the first line. The caller is
    responsible for checking that insert_line lies in [0, line_count].
    """
    lines = split_lines(content)
    if not lines:
        return new_str or "\n"

    newline = _terminator(lines[0]) or "\n"
    block = new_str

    if insert_line < len(lines):
        if not _terminator(block):
            block += newline
        return "".join(lines[:insert_line]) + block + "".join(lines[insert_line:])

    if not _terminator(content):
        # An empty block still has to end a line to count as one
        return content + newline + (block or newline)
    if not _terminator(block):
        block += newline
    return content + block


class TextEditor:
    """Editor commands bound to one tree and its undo history."""

    def __init__(self, tree: FileTree | None = None, history: UndoHistory | None = None):
        self.tree = tree if tree is not None else FileTree()
        self.history = history if history is not None else UndoHistory()

    def view(self, path: str, view_range: tuple[int, int] | None = None) -> str:
        """
        Return a file's content, optionally restricted to a line range.

        Args:
            path: Path to the file.
            view_range: Optional (start, end), 1-indexed and inclusive.
                end may be -1 to mean the last line.

        Raises:
            NotFoundError: If path is absent or a directory.
            InvalidRangeError: If the range is out of bounds. Ranges are
                never clamped.
        """
        content = self.tree.read_file(path)
        if view_range is None:
            return content

        start, end = view_range
        lines = split_lines(content)
        total = len(lines)
        if end == -1:
            end = total

        if start < 1 or start > end or end > total:
            raise InvalidRangeError(
                f"Invalid view_range [{start}, {view_range[1]}]: file has {total} lines. "
                "Use 1-indexed, inclusive bounds within the file.",
                paths.normalize(path),
            )
        return "".join(lines[start - 1 : end])

    def create(self, path: str, content: str) -> EditSummary:
        """
        Create a file, or overwrite an existing one.

        Overwriting records the previous content so it can be undone. A fresh
        file starts with no history.

        Raises:
            AlreadyExistsError: If a directory occupies path or an ancestor is a file.
        """
        path = paths.normalize(path)
        kind = self.tree.kind(path)

        if kind == NodeKind.FILE:
            previous = self.tree.read_file(path)
            self.tree.write_file(path, content)
            self.history.record(path, previous)
            return EditSummary(path, "overwrite", line_count(previous), line_count(content))

        if kind == NodeKind.DIRECTORY:
            raise AlreadyExistsError(f"A directory already exists at {path}", path)

        self.tree.create_file(path, content)
        self.history.invalidate(path)
        return EditSummary(path, "create", 0, line_count(content))

    def str_replace(self, path: str, old_str: str, new_str: str) -> EditSummary:
        """
        Replace the single occurrence of old_str with new_str.

        Raises:
            NotFoundError: If path is absent or a directory.
            NoMatchError: If old_str is empty or does not occur.
            AmbiguousMatchError: If old_str occurs more than once.
        """
        path = paths.normalize(path)
        content = self.tree.read_file(path)

        if not old_str:
            raise NoMatchError("old_str must not be empty", path)

        count = content.count(old_str)
        if count == 0:
            raise NoMatchError(
                f"No match found for old_str in {path}. "
                "Make sure you're using the exact text including whitespace.",
                path,
            )
        if count > 1:
            raise AmbiguousMatchError(
                f"old_str appears {count} times in {path}. Please provide a more unique "
                "string that includes surrounding context to ensure only one match.",
                path,
                count=count,
            )

        new_content = content.replace(old_str, new_str, 1)
        self.history.record(path, content)
        self.tree.write_file(path, new_content)
        return EditSummary(path, "str_replace", line_count(content), line_count(new_content))

    def insert(self, path: str, insert_line: int, new_str: str) -> EditSummary:
        """
        Insert new_str after line insert_line (0 inserts before the first line).

        Raises:
            NotFoundError: If path is absent or a directory.
            InvalidRangeError: If insert_line is outside [0, line_count].
        """
        path = paths.normalize(path)
        content = self.tree.read_file(path)
        total = line_count(content)

        if insert_line < 0 or insert_line > total:
            raise InvalidRangeError(
                f"Invalid insert_line {insert_line}: must be between 0 and {total}",
                path,
            )

        new_content = insert_lines(content, insert_line, new_str)
        self.history.record(path, content)
        self.tree.write_file(path, new_content)
        return EditSummary(path, "insert", total, line_count(new_content))

    def undo(self, path: str) -> EditSummary:
        """
        Restore the content recorded before the last edit of path.

        Raises:
            NoHistoryError: If there is nothing to undo.
            AlreadyExistsError: If the path has since become a directory.
        """
        path = paths.normalize(path)
        if path not in self.history:
            raise NoHistoryError(f"No edit history for {path}; nothing to undo", path)

        kind = self.tree.kind(path)
        if kind == NodeKind.DIRECTORY:
            raise AlreadyExistsError(f"A directory now exists at {path}; cannot restore", path)

        previous = self.history.take(path)
        try:
            if kind == NodeKind.FILE:
                current = self.tree.read_file(path)
                self.tree.write_file(path, previous)
            else:
                current = ""
                self.tree.create_file(path, previous)
        except CanvasFSError:
            self.history.record(path, previous)
            raise

        return EditSummary(path, "undo", line_count(current), line_count(previous))

    def rename(self, old_path: str, new_path: str) -> EditSummary:
        """Rename a node and drop the history recorded under its old path."""
        old_path, new_path = self.tree.rename(old_path, new_path)
        self.history.invalidate_tree(old_path)
        return EditSummary(new_path, "rename", source=old_path)

    def delete(self, path: str) -> EditSummary:
        """Delete a node and drop the history recorded for it and its subtree."""
        path = self.tree.delete(path)
        self.history.invalidate_tree(path)
        return EditSummary(path, "delete")

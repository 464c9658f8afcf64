"""
In-memory tree store for CanvasFS.

The tree is a graph of DirectoryNode and FileNode objects rooted at a single
directory. Every node is owned by exactly one parent directory, keyed by its
name; directories keep their children in insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from canvasfs import paths
from canvasfs.exceptions import (
    AlreadyExistsError,
    CannotDeleteRootError,
    InvalidPathError,
    NotFoundError,
)
from canvasfs.types import NodeKind, TreeEntry


@dataclass
class FileNode:
    """A file holding text content."""

    content: str = ""

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE


@dataclass
class DirectoryNode:
    """A directory holding named children in insertion order."""

    children: dict[str, "Node"] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY


Node = Union[FileNode, DirectoryNode]


class FileTree:
    """
    Path-addressed tree of directories and files.

    Missing ancestor directories are created on demand by create_file,
    create_directory and rename. This is the only place nodes are ever
    created implicitly.
    """

    def __init__(self, root: DirectoryNode | None = None):
        self.root = root or DirectoryNode()

    # =========================================================================
    # Lookups
    # =========================================================================

    def _lookup(self, path: str) -> Node | None:
        """Find the node at a normalized path."""
        node: Node = self.root
        for segment in paths.split(path):
            if not isinstance(node, DirectoryNode):
                return None
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def _get_file(self, path: str) -> FileNode:
        node = self._lookup(path)
        if not isinstance(node, FileNode):
            if isinstance(node, DirectoryNode):
                raise NotFoundError(f"Path is a directory, not a file: {path}", path)
            raise NotFoundError(f"File not found: {path}", path)
        return node

    def _get_directory(self, path: str) -> DirectoryNode:
        node = self._lookup(path)
        if not isinstance(node, DirectoryNode):
            if isinstance(node, FileNode):
                raise NotFoundError(f"Path is a file, not a directory: {path}", path)
            raise NotFoundError(f"Directory not found: {path}", path)
        return node

    def exists(self, path: str) -> bool:
        """Check if any node lives at path. Never raises."""
        return self.kind(path) is not None

    def kind(self, path: str) -> NodeKind | None:
        """Get the kind of node at path, or None. Never raises."""
        try:
            node = self._lookup(paths.normalize(path))
        except InvalidPathError:
            return None
        return node.kind if node is not None else None

    def is_file(self, path: str) -> bool:
        return self.kind(path) == NodeKind.FILE

    def is_dir(self, path: str) -> bool:
        return self.kind(path) == NodeKind.DIRECTORY

    # =========================================================================
    # Implicit ancestor policy
    # =========================================================================

    def _check_ancestors(self, path: str) -> None:
        """
        Verify that every existing ancestor of path is a directory.

        Raises:
            AlreadyExistsError: If a file occupies an ancestor position.
        """
        node: Node = self.root
        for ancestor in paths.ancestors(path)[1:]:
            assert isinstance(node, DirectoryNode)
            child = node.children.get(paths.name(ancestor))
            if child is None:
                return
            if isinstance(child, FileNode):
                raise AlreadyExistsError(
                    f"A file already exists at {ancestor}, so {path} cannot be created under it",
                    ancestor,
                )
            node = child

    def _ensure_directory(self, path: str) -> DirectoryNode:
        """Return the directory at path, creating it and its ancestors as needed."""
        node = self.root
        for segment in paths.split(path):
            child = node.children.get(segment)
            if child is None:
                child = DirectoryNode()
                node.children[segment] = child
            if not isinstance(child, DirectoryNode):
                raise AlreadyExistsError(f"A file already exists at {path}", path)
            node = child
        return node

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_file(self, path: str, content: str = "") -> str:
        """
        Create a new file, creating missing ancestor directories.

        Args:
            path: Path for the new file.
            content: Initial content.

        Returns:
            The normalized path of the new file.

        Raises:
            InvalidPathError: If path is invalid or is the root.
            AlreadyExistsError: If path (or an ancestor) is already occupied.
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            raise InvalidPathError("Cannot create a file at the root path", path)
        if self._lookup(path) is not None:
            raise AlreadyExistsError(f"Path already exists: {path}", path)
        self._check_ancestors(path)

        parent = self._ensure_directory(paths.parent(path))
        parent.children[paths.name(path)] = FileNode(content)
        return path

    def create_directory(self, path: str) -> str:
        """
        Create a directory (and parent directories if needed).

        Creating a directory that already exists is a no-op.

        Raises:
            AlreadyExistsError: If a file occupies path or one of its ancestors.
        """
        path = paths.normalize(path)
        if isinstance(self._lookup(path), FileNode):
            raise AlreadyExistsError(
                f"A file already exists at {path}; it cannot become a directory", path
            )
        self._check_ancestors(path)
        self._ensure_directory(path)
        return path

    def read_file(self, path: str) -> str:
        """
        Read file contents.

        Raises:
            NotFoundError: If path does not denote a file.
        """
        return self._get_file(paths.normalize(path)).content

    def write_file(self, path: str, content: str) -> str:
        """
        Replace the full content of an existing file.

        Raises:
            NotFoundError: If the file does not exist.
        """
        path = paths.normalize(path)
        self._get_file(path).content = content
        return path

    def delete(self, path: str) -> str:
        """
        Delete a file, or a directory together with all its descendants.

        Raises:
            CannotDeleteRootError: If path is the root.
            NotFoundError: If nothing lives at path.
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            raise CannotDeleteRootError("Cannot delete the root directory", path)
        if self._lookup(path) is None:
            raise NotFoundError(f"Path not found: {path}", path)

        parent = self._get_directory(paths.parent(path))
        del parent.children[paths.name(path)]
        return path

    def rename(self, old_path: str, new_path: str) -> tuple[str, str]:
        """
        Move a node (and its whole subtree) to a new path.

        The node is appended to the end of its new parent's listing.
        Missing ancestors of new_path are created.

        Returns:
            The normalized (old_path, new_path) pair.

        Raises:
            InvalidPathError: If old_path is the root or new_path lies inside old_path.
            NotFoundError: If old_path does not exist.
            AlreadyExistsError: If new_path (or an ancestor) is occupied.
        """
        old_path = paths.normalize(old_path)
        new_path = paths.normalize(new_path)

        if old_path == paths.ROOT:
            raise InvalidPathError("Cannot rename the root directory", old_path)
        node = self._lookup(old_path)
        if node is None:
            raise NotFoundError(f"Source not found: {old_path}", old_path)
        if self._lookup(new_path) is not None:
            raise AlreadyExistsError(f"Destination already exists: {new_path}", new_path)
        if paths.is_ancestor(old_path, new_path):
            raise InvalidPathError(
                f"Cannot move {old_path} inside itself ({new_path})", new_path
            )
        self._check_ancestors(new_path)

        old_parent = self._get_directory(paths.parent(old_path))
        del old_parent.children[paths.name(old_path)]
        new_parent = self._ensure_directory(paths.parent(new_path))
        new_parent.children[paths.name(new_path)] = node
        return old_path, new_path

    # =========================================================================
    # Listing and traversal
    # =========================================================================

    def list(self, path: str = paths.ROOT) -> list[TreeEntry]:
        """
        List the children of a directory in insertion order.

        Raises:
            NotFoundError: If path is not a directory.
        """
        directory = self._get_directory(paths.normalize(path))
        return [TreeEntry(name, child.kind) for name, child in directory.children.items()]

    def walk(self, path: str = paths.ROOT) -> Iterator[tuple[str, Node]]:
        """Yield (path, node) for every descendant of path, depth-first."""
        path = paths.normalize(path)
        directory = self._get_directory(path)
        for child_name, child in directory.children.items():
            child_path = paths.join(path, child_name)
            yield child_path, child
            if isinstance(child, DirectoryNode):
                yield from self.walk(child_path)

    def files(self, path: str = paths.ROOT) -> dict[str, str]:
        """Map every file path under path to its content."""
        return {
            file_path: node.content
            for file_path, node in self.walk(path)
            if isinstance(node, FileNode)
        }

    def count(self) -> tuple[int, int]:
        """Count (directories, files) below the root."""
        directories = files = 0
        for _, node in self.walk():
            if isinstance(node, DirectoryNode):
                directories += 1
            else:
                files += 1
        return directories, files

    def render(self, path: str = paths.ROOT) -> str:
        """Render the subtree at path as an indented text listing."""
        path = paths.normalize(path)
        self._get_directory(path)
        base_depth = len(paths.split(path))
        lines = [path]
        for node_path, node in self.walk(path):
            depth = len(paths.split(node_path)) - base_depth
            suffix = "/" if isinstance(node, DirectoryNode) else ""
            lines.append(f"{'  ' * depth}{paths.name(node_path)}{suffix}")
        return "\n".join(lines)

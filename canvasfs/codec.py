"""
Snapshot codec for CanvasFS.

A snapshot is a plain nested dict mirroring the directory/file shape:

    {
        "version": 1,
        "root": {
            "type": "directory",
            "children": {
                "App.jsx": {"type": "file", "content": "..."},
                "components": {"type": "directory", "children": {...}},
            },
        },
    }

Children keep the tree's insertion order. No undo history and no transient
state is included, so the same tree always serializes to the same value.
"""

from __future__ import annotations

import json
from typing import Any

from canvasfs import paths
from canvasfs.exceptions import MalformedSnapshotError
from canvasfs.tree import DirectoryNode, FileNode, FileTree, Node

SNAPSHOT_VERSION = 1

FILE_TYPE = "file"
DIRECTORY_TYPE = "directory"


def _encode_node(node: Node) -> dict[str, Any]:
    if isinstance(node, FileNode):
        return {"type": FILE_TYPE, "content": node.content}
    return {
        "type": DIRECTORY_TYPE,
        "children": {name: _encode_node(child) for name, child in node.children.items()},
    }


def serialize(tree: FileTree) -> dict[str, Any]:
    """Convert a tree to its snapshot representation."""
    return {"version": SNAPSHOT_VERSION, "root": _encode_node(tree.root)}


def _decode_node(data: Any, location: str) -> Node:
    if not isinstance(data, dict):
        raise MalformedSnapshotError(f"Node at {location} is not an object", location)

    node_type = data.get("type")
    if node_type == FILE_TYPE:
        content = data.get("content")
        if not isinstance(content, str):
            raise MalformedSnapshotError(
                f"File at {location} has no string content", location
            )
        return FileNode(content)

    if node_type == DIRECTORY_TYPE:
        children = data.get("children", {})
        if not isinstance(children, dict):
            raise MalformedSnapshotError(
                f"Directory at {location} has invalid children", location
            )
        directory = DirectoryNode()
        for name, child in children.items():
            if not isinstance(name, str) or not paths.is_valid_name(name):
                raise MalformedSnapshotError(
                    f"Invalid entry name {name!r} in directory {location}", location
                )
            directory.children[name] = _decode_node(child, paths.join(location, name))
        return directory

    raise MalformedSnapshotError(
        f"Node at {location} is neither a file nor a directory (type={node_type!r})",
        location,
    )


def deserialize(snapshot: Any) -> FileTree:
    """
    Rebuild a tree from a snapshot.

    Raises:
        MalformedSnapshotError: If the snapshot has an unknown version, a
            node of unrecognized shape, or an entry name that cannot be a
            single path segment.
    """
    if not isinstance(snapshot, dict):
        raise MalformedSnapshotError("Snapshot must be an object")

    version = snapshot.get("version")
    if version != SNAPSHOT_VERSION:
        raise MalformedSnapshotError(f"Unsupported snapshot version: {version!r}")

    root = _decode_node(snapshot.get("root"), paths.ROOT)
    if not isinstance(root, DirectoryNode):
        raise MalformedSnapshotError("Snapshot root must be a directory", paths.ROOT)
    return FileTree(root)


def dumps(tree: FileTree, indent: int | None = None) -> str:
    """Serialize a tree to JSON text."""
    return json.dumps(serialize(tree), indent=indent, ensure_ascii=False)


def loads(text: str) -> FileTree:
    """
    Rebuild a tree from JSON text.

    Raises:
        MalformedSnapshotError: If text is not valid JSON or not a valid snapshot.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedSnapshotError(f"Snapshot is not valid JSON: {e}") from e
    return deserialize(data)

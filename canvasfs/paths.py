"""
Path model for CanvasFS.

Paths are slash-separated strings rooted at ``/``. After normalization they
never contain empty, ``.`` or ``..`` segments and never end with a slash
(except the root itself). Comparison is plain string equality.
"""

from __future__ import annotations

import re

from canvasfs.exceptions import InvalidPathError

ROOT = "/"
SEPARATOR = "/"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def has_control_chars(value: str) -> bool:
    """Return True if value contains a NUL or other control character."""
    return _CONTROL_CHARS.search(value) is not None


def normalize(raw: str) -> str:
    """
    Canonicalize a raw path.

    Relative paths are resolved against the root, so ``App.jsx`` and
    ``/App.jsx`` address the same node.

    Args:
        raw: The path supplied by the caller.

    Returns:
        The normalized path.

    Raises:
        InvalidPathError: If the path is empty, contains control characters,
            or climbs above the root.
    """
    if not isinstance(raw, str):
        raise InvalidPathError(f"Path must be a string, got {type(raw).__name__}")

    if not raw.strip():
        raise InvalidPathError("Path must be a non-empty string")

    if has_control_chars(raw):
        raise InvalidPathError(f"Path contains control characters: {raw!r}", raw)

    segments: list[str] = []
    for segment in raw.split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise InvalidPathError(f"Path escapes the root: {raw}", raw)
            segments.pop()
            continue
        segments.append(segment)

    return SEPARATOR + SEPARATOR.join(segments)


def split(path: str) -> list[str]:
    """Split a normalized path into its segments (empty for the root)."""
    return [segment for segment in path.split(SEPARATOR) if segment]


def join(parent_path: str, child_name: str) -> str:
    """Join a normalized directory path and a child name."""
    return f"/{child_name}" if parent_path == ROOT else f"{parent_path}/{child_name}"


def parent(path: str) -> str:
    """
    Get the parent directory of a normalized path.

    Raises:
        InvalidPathError: If path is the root.
    """
    if path == ROOT:
        raise InvalidPathError("The root directory has no parent", path)
    head = path.rsplit(SEPARATOR, 1)[0]
    return head or ROOT


def name(path: str) -> str:
    """Get the last segment of a normalized path ("" for the root)."""
    return path.rsplit(SEPARATOR, 1)[-1]


def ancestors(path: str) -> list[str]:
    """List the ancestors of a normalized path, root first, excluding path."""
    result = [ROOT] if path != ROOT else []
    current = ""
    for segment in split(path)[:-1]:
        current = f"{current}/{segment}"
        result.append(current)
    return result


def is_ancestor(ancestor: str, path: str) -> bool:
    """Return True if ancestor strictly contains path."""
    if ancestor == path:
        return False
    if ancestor == ROOT:
        return True
    return path.startswith(ancestor + SEPARATOR)


def is_valid_name(segment: str) -> bool:
    """Return True if segment can be used as a single child name."""
    return (
        bool(segment)
        and segment not in (".", "..")
        and SEPARATOR not in segment
        and not has_control_chars(segment)
    )

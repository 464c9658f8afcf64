"""
Custom exceptions for CanvasFS.

Every exception carries a stable ``kind`` so the tool adapter can report it
to the driving agent without inspecting messages.
"""

from __future__ import annotations

from canvasfs.types import ErrorKind


class CanvasFSError(Exception):
    """Base exception class for CanvasFS errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class InvalidPathError(CanvasFSError):
    """Raised when a path is empty, malformed or escapes the root."""

    kind = ErrorKind.INVALID_PATH


class NotFoundError(CanvasFSError):
    """Raised when a path does not denote a node of the expected kind."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(CanvasFSError):
    """Raised when a path is already occupied by a conflicting node."""

    kind = ErrorKind.ALREADY_EXISTS


class CannotDeleteRootError(CanvasFSError):
    """Raised when deleting the root directory."""

    kind = ErrorKind.CANNOT_DELETE_ROOT


class InvalidRangeError(CanvasFSError):
    """Raised for out-of-bounds line ranges or insert positions."""

    kind = ErrorKind.INVALID_RANGE


class AmbiguousMatchError(CanvasFSError):
    """Raised when the string to replace occurs more than once."""

    kind = ErrorKind.AMBIGUOUS_MATCH

    def __init__(self, message: str, path: str | None = None, count: int = 0):
        super().__init__(message, path)
        self.count = count


class NoMatchError(CanvasFSError):
    """Raised when the string to replace does not occur."""

    kind = ErrorKind.NO_MATCH


class NoHistoryError(CanvasFSError):
    """Raised when there is no recorded edit to undo."""

    kind = ErrorKind.NO_HISTORY


class UnsupportedCommandError(CanvasFSError):
    """Raised for commands or tools outside the closed vocabularies."""

    kind = ErrorKind.UNSUPPORTED_COMMAND


class ReadOnlyError(UnsupportedCommandError):
    """Raised when a mutation is attempted on a read-only workspace."""


class MalformedSnapshotError(CanvasFSError):
    """Raised when a snapshot cannot be turned back into a tree."""

    kind = ErrorKind.MALFORMED_SNAPSHOT


class InvalidArgumentsError(CanvasFSError):
    """Raised when tool arguments fail validation."""

    kind = ErrorKind.INVALID_ARGUMENTS


class ConfigurationError(CanvasFSError):
    """Raised for configuration errors."""

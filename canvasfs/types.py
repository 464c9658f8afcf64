"""
Core types for CanvasFS - the in-memory component source tree for LLM agents.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal


# =============================================================================
# Session Status
# =============================================================================


class SessionStatus(str, Enum):
    """Status of an editing session."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ABORTED = "aborted"


# =============================================================================
# Project and Session Entities
# =============================================================================


@dataclass
class Project:
    """A project owning one persisted source tree."""

    project_id: str
    name: str  # Unique, human-readable (e.g., "landing-page")
    created_at: float = field(default_factory=time.time)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, extra: dict[str, Any] | None = None) -> "Project":
        """Create a new project with a generated UUID."""
        return cls(
            project_id=str(uuid.uuid4()),
            name=name,
            created_at=time.time(),
            extra=extra or {},
        )


@dataclass
class Session:
    """A session representing a single editing run against a project."""

    session_id: str
    project_id: str  # Foreign key to Project
    started_at: float = field(default_factory=time.time)
    ended_at: float | None = None
    status: SessionStatus = SessionStatus.ACTIVE
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, project_id: str, extra: dict[str, Any] | None = None) -> "Session":
        """Create a new session with a generated UUID."""
        return cls(
            session_id=str(uuid.uuid4()),
            project_id=project_id,
            started_at=time.time(),
            status=SessionStatus.ACTIVE,
            extra=extra or {},
        )


# =============================================================================
# Tree Types
# =============================================================================


class NodeKind(str, Enum):
    """Kind of node in the tree."""

    FILE = "file"
    DIRECTORY = "directory"


class ErrorKind(str, Enum):
    """Stable error kinds reported to the driving agent."""

    INVALID_PATH = "InvalidPath"
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    CANNOT_DELETE_ROOT = "CannotDeleteRoot"
    INVALID_RANGE = "InvalidRange"
    AMBIGUOUS_MATCH = "AmbiguousMatch"
    NO_MATCH = "NoMatch"
    NO_HISTORY = "NoHistory"
    UNSUPPORTED_COMMAND = "UnsupportedCommand"
    MALFORMED_SNAPSHOT = "MalformedSnapshot"
    INVALID_ARGUMENTS = "InvalidArguments"


@dataclass(frozen=True)
class TreeEntry:
    """One child of a directory as returned by a listing."""

    name: str
    kind: NodeKind

    def as_tuple(self) -> tuple[str, NodeKind]:
        return (self.name, self.kind)


@dataclass(frozen=True)
class HistoryEntry:
    """Content of a file immediately before its most recent edit."""

    path: str
    content: str
    recorded_at: float = field(default_factory=time.time)


@dataclass(frozen=True)
class EditSummary:
    """Short description of a successful mutation, returned to the agent."""

    path: str
    operation: str
    lines_before: int = 0
    lines_after: int = 0
    source: str | None = None

    def describe(self) -> str:
        if self.source is not None:
            return f"{self.operation} {self.source} -> {self.path}"
        if self.operation == "delete":
            return f"delete {self.path}"
        delta = self.lines_after - self.lines_before
        sign = "+" if delta >= 0 else ""
        return f"{self.operation} {self.path} ({self.lines_after} lines, {sign}{delta})"


@dataclass(frozen=True)
class MutationEvent:
    """Signal emitted to observers after a successful mutation."""

    operation: str
    paths: tuple[str, ...]
    timestamp: float = field(default_factory=time.time)


@dataclass
class OperationLog:
    """Log entry for workspace operations."""

    timestamp: float
    operation: str
    path: str
    project_id: str
    details: dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: str | None = None

    @classmethod
    def create(
        cls,
        operation: str,
        path: str,
        project_id: str = "ephemeral",
        details: dict[str, Any] | None = None,
        success: bool = True,
        error_message: str | None = None,
    ) -> "OperationLog":
        return cls(
            timestamp=time.time(),
            operation=operation,
            path=path,
            project_id=project_id,
            details=details or {},
            success=success,
            error_message=error_message,
        )


# Tool result types for agent responses
ToolResultStatus = Literal["success", "error"]


@dataclass
class ToolResult:
    """Standard result format for CanvasFS tool operations."""

    status: ToolResultStatus
    message: str
    data: Any = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.error is not None:
            result["error"] = self.error.value
        if self.data is not None:
            result["data"] = self.data
        return result

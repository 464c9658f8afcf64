"""
Abstract base class for CanvasFS snapshot databases.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from canvasfs.types import OperationLog, Project, Session, SessionStatus


class BaseDatabase(ABC):
    """Abstract base class for project, session and snapshot storage backends."""

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the database schema."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the database connection."""
        pass

    # =========================================================================
    # Project operations
    # =========================================================================

    @abstractmethod
    def create_project(self, project: Project) -> None:
        """Create a new project."""
        pass

    @abstractmethod
    def get_project_by_id(self, project_id: str) -> Project | None:
        """Get a project by ID."""
        pass

    @abstractmethod
    def get_project_by_name(self, name: str) -> Project | None:
        """Get a project by name."""
        pass

    @abstractmethod
    def list_projects(self) -> list[Project]:
        """List all projects."""
        pass

    @abstractmethod
    def delete_project(self, project_id: str) -> bool:
        """Delete a project and its snapshot. Returns True if deleted."""
        pass

    # =========================================================================
    # Session operations
    # =========================================================================

    @abstractmethod
    def create_session(self, session: Session) -> None:
        """Create a new session."""
        pass

    @abstractmethod
    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        pass

    @abstractmethod
    def end_session(
        self, session_id: str, status: SessionStatus = SessionStatus.COMPLETED
    ) -> None:
        """End a session with the given status."""
        pass

    @abstractmethod
    def get_active_session_for_project(self, project_id: str) -> Session | None:
        """Get the currently active session for a project, if any."""
        pass

    # =========================================================================
    # Tree snapshot operations
    # =========================================================================

    @abstractmethod
    def save_tree_snapshot(self, project_id: str, snapshot: dict[str, Any]) -> None:
        """Store the tree snapshot for a project, replacing any previous one."""
        pass

    @abstractmethod
    def load_tree_snapshot(self, project_id: str) -> dict[str, Any] | None:
        """Load the stored tree snapshot for a project, if any."""
        pass

    # =========================================================================
    # Log operations
    # =========================================================================

    @abstractmethod
    def save_log(self, log: OperationLog) -> None:
        """Save a log entry."""
        pass

    @abstractmethod
    def get_logs(
        self, limit: int = 100, offset: int = 0, path_filter: str | None = None
    ) -> list[OperationLog]:
        """Get log entries with optional path filter."""
        pass

"""
Workspace - one editing session over an in-memory CanvasFS tree.

A Workspace owns the tree, its undo history and the text editor bound to
them, and optionally persists the tree as a snapshot per project. It is the
object the tool adapter layer and the UI talk to.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from canvasfs import codec, paths
from canvasfs.config import CanvasFSConfig
from canvasfs.databases.base import BaseDatabase
from canvasfs.databases.sqlite_db import SQLiteDatabase
from canvasfs.editor import TextEditor
from canvasfs.exceptions import CanvasFSError, ConfigurationError, ReadOnlyError
from canvasfs.history import UndoHistory
from canvasfs.tree import FileTree
from canvasfs.types import (
    EditSummary,
    MutationEvent,
    NodeKind,
    OperationLog,
    Project,
    Session,
    SessionStatus,
    TreeEntry,
)

logger = logging.getLogger(__name__)

Observer = Callable[[MutationEvent], None]
T = TypeVar("T")


class Workspace:
    """
    Workspace - an in-memory component source tree driven by an agent.

    Mutations are strictly sequential: one caller issues one operation at a
    time. Observers subscribed with subscribe() are called after every
    successful mutation so a UI can re-render its file tree and preview.
    """

    def __init__(
        self,
        config: CanvasFSConfig | None = None,
        database: BaseDatabase | None = None,
        read_only: bool = False,
    ):
        """
        Initialize the workspace.

        Args:
            config: CanvasFS configuration. Uses environment defaults if not provided.
            database: Custom database implementation.
            read_only: If True, every mutation is rejected and nothing is
                persisted on spindown.
        """
        self.config = config or CanvasFSConfig.from_env()
        self.read_only = read_only
        self.database = database or self._create_database()
        self.editor = TextEditor()

        self._observers: list[Observer] = []
        self._initialized = False

    def _debug_log(self, message: str) -> None:
        """Log a debug message if debug mode is enabled."""
        if self.config.debug:
            logger.debug("[CanvasFS] %s", message)

    def _create_database(self) -> BaseDatabase:
        """Create database based on config."""
        return SQLiteDatabase(db_path=self.config.database.sqlite_path)

    @property
    def tree(self) -> FileTree:
        return self.editor.tree

    @property
    def history(self) -> UndoHistory:
        return self.editor.history

    def initialize(self) -> None:
        """Initialize an ephemeral workspace (no project, nothing persisted)."""
        if self._initialized:
            return
        self.database.initialize()
        self._initialized = True

    def close(self) -> None:
        """Close the workspace without persisting state.

        Use spindown() instead if you want to persist the tree before closing.
        """
        if not self._initialized:
            return
        self.database.close()
        self._initialized = False

    def __enter__(self) -> "Workspace":
        """Context manager entry."""
        if not self._initialized:
            self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        if self.config.session_id:
            status = SessionStatus.ABORTED if exc_type else SessionStatus.COMPLETED
            self.spindown(status=status)
        else:
            self.close()

    # =========================================================================
    # Session Lifecycle Methods
    # =========================================================================

    def spinup(self, project_name: str, session_id: str | None = None) -> Session:
        """
        Start an editing session for a project.

        Loads or creates the project, aborts any orphaned active session,
        opens a new session and rebuilds the tree from the project's stored
        snapshot (or starts empty).

        Args:
            project_name: Unique name for the project.
            session_id: Optional custom session ID. Generated if not provided.

        Returns:
            The new session.
        """
        if self._initialized:
            raise RuntimeError("Workspace is already initialized. Call spindown() first.")

        self.database.initialize()

        project = self.database.get_project_by_name(project_name)
        if project is None:
            project = Project.create(name=project_name)
            self.database.create_project(project)

        active_session = self.database.get_active_session_for_project(project.project_id)
        if active_session:
            self._debug_log(f"Aborting orphaned session {active_session.session_id}")
            self.database.end_session(active_session.session_id, SessionStatus.ABORTED)

        # A malformed snapshot must fail before any session state is written
        snapshot = self.database.load_tree_snapshot(project.project_id)
        tree = codec.deserialize(snapshot) if snapshot is not None else None

        session = Session.create(project_id=project.project_id)
        if session_id:
            session.session_id = session_id
        self.database.create_session(session)

        self.config.project_id = project.project_id
        self.config.session_id = session.session_id
        self.config.project_name = project.name

        self.editor = TextEditor(tree)
        if tree is not None:
            self._debug_log(f"Restored tree for {project.name}: {self.tree.count()}")

        self._initialized = True
        return session

    def spindown(self, status: SessionStatus = SessionStatus.COMPLETED) -> None:
        """
        End the session and persist the tree.

        In read_only mode, only cleanup is performed.

        Args:
            status: Final session status (completed or aborted)
        """
        self._debug_log(f"spindown() called with status={status}, read_only={self.read_only}")
        if not self._initialized:
            return

        if not self.read_only:
            self.save()
            if self.config.session_id:
                self.database.end_session(self.config.session_id, status)
        else:
            self._debug_log("Read-only mode: skipping persistence on spindown")

        self.database.close()

        self.config.project_id = None
        self.config.session_id = None
        self.config.project_name = None
        self._initialized = False

    @classmethod
    def for_project(
        cls,
        project_name: str,
        config: CanvasFSConfig | None = None,
        read_only: bool = False,
    ) -> "Workspace":
        """
        Create a workspace for a project and start a new session.

        Example:
            ```python
            with Workspace.for_project("landing-page") as workspace:
                tools = workspace.get_tool_provider()
                # ... run agent session ...
            # Tree snapshot is persisted on exit
            ```
        """
        if config is None:
            config = CanvasFSConfig.default_persistent()

        workspace = cls(config=config, read_only=read_only)
        workspace.spinup(project_name)
        return workspace

    def get_tool_provider(self, provider: str | None = None):
        """
        Get a tool provider bound to this workspace.

        Args:
            provider: "openai" or "langchain". Defaults to config.agent.provider.
        """
        provider = provider or self.config.agent.provider
        if provider == "openai":
            from canvasfs.tools.openai_tools import OpenAIToolProvider

            return OpenAIToolProvider(self)
        if provider == "langchain":
            from canvasfs.tools.langchain_tools import LangChainToolProvider

            return LangChainToolProvider(self)
        raise ValueError(
            f"Unknown tool provider: {provider}. Supported: 'openai', 'langchain'"
        )

    # =========================================================================
    # Persistence
    # =========================================================================

    def snapshot(self) -> dict[str, Any]:
        """Serialize the current tree."""
        return codec.serialize(self.tree)

    def restore(self, snapshot: dict[str, Any]) -> None:
        """
        Replace the whole tree with the one described by snapshot.

        The undo history is discarded. On a malformed snapshot nothing changes.
        """
        self._check_writable("restore")
        tree = codec.deserialize(snapshot)
        self.editor = TextEditor(tree)
        self._notify("restore", paths.ROOT)

    def save(self) -> bool:
        """
        Persist the tree snapshot for the current project.

        Returns:
            True if a snapshot was stored, False for ephemeral workspaces.
        """
        if not self.config.project_id:
            return False
        if not self._initialized:
            raise ConfigurationError("Workspace is not initialized. Call spinup() first.")
        self.database.save_tree_snapshot(self.config.project_id, self.snapshot())
        self._debug_log(f"Saved snapshot for project {self.config.project_id}")
        return True

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, callback: Observer) -> Observer:
        """Register a callback invoked after each successful mutation."""
        self._observers.append(callback)
        return callback

    def unsubscribe(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, operation: str, *changed: str) -> None:
        event = MutationEvent(operation=operation, paths=tuple(changed))
        for callback in list(self._observers):
            try:
                callback(event)
            except Exception:
                logger.exception("Observer %r failed on %s", callback, operation)

    # =========================================================================
    # Read Operations
    # =========================================================================

    def exists(self, path: str) -> bool:
        return self.tree.exists(path)

    def kind(self, path: str) -> NodeKind | None:
        return self.tree.kind(path)

    def list_directory(self, path: str = paths.ROOT) -> list[TreeEntry]:
        return self.tree.list(path)

    def read_file(self, path: str) -> str:
        return self.tree.read_file(path)

    def files(self) -> dict[str, str]:
        return self.tree.files()

    def render_tree(self, path: str = paths.ROOT) -> str:
        return self.tree.render(path)

    def view(self, path: str, view_range: tuple[int, int] | None = None) -> str:
        """View a file, optionally restricted to a 1-indexed inclusive line range."""
        try:
            content = self.editor.view(path, view_range)
        except CanvasFSError as e:
            self._log_operation("view", path, success=False, error_message=e.message)
            raise
        self._log_operation("view", path, {"range": list(view_range) if view_range else None})
        return content

    # =========================================================================
    # Mutating Operations
    # =========================================================================

    def _check_writable(self, operation: str) -> None:
        if self.read_only:
            raise ReadOnlyError(
                f"'{operation}' is not available: this workspace is read-only"
            )

    def _mutate(
        self,
        operation: str,
        path: str,
        action: Callable[[], T],
        details: dict[str, Any] | None = None,
    ) -> T:
        """Run one mutation, then log it, notify observers and autosave."""
        try:
            self._check_writable(operation)
            result = action()
        except CanvasFSError as e:
            self._log_operation(
                operation, path, details, success=False, error_message=e.message
            )
            raise

        if isinstance(result, EditSummary):
            changed = [result.source, result.path] if result.source else [result.path]
        else:
            changed = [str(result)]

        # The edit is committed; failures past this point must not mask it
        try:
            self._log_operation(operation, changed[0], details)
        except Exception:
            logger.exception("Failed to log %s on %s", operation, changed[0])
        self._notify(operation, *changed)
        if self.config.autosave:
            try:
                self.save()
            except Exception:
                logger.exception("Autosave failed after %s on %s", operation, changed[0])
        return result

    def create_file(self, path: str, content: str = "") -> str:
        """Create a new file; fails if the path is occupied."""
        return self._mutate(
            "create_file",
            path,
            lambda: self.tree.create_file(path, content),
            {"size": len(content)},
        )

    def create_directory(self, path: str) -> str:
        """Create a directory and any missing ancestors."""
        return self._mutate("create_directory", path, lambda: self.tree.create_directory(path))

    def write_file(self, path: str, content: str) -> str:
        """Replace the content of an existing file, recording the previous content."""

        def action() -> str:
            normalized = paths.normalize(path)
            previous = self.tree.read_file(normalized)
            self.tree.write_file(normalized, content)
            self.history.record(normalized, previous)
            return normalized

        return self._mutate("write_file", path, action, {"size": len(content)})

    def create(self, path: str, content: str) -> EditSummary:
        """Create a file, overwriting (and recording) any existing file."""
        return self._mutate(
            "create", path, lambda: self.editor.create(path, content), {"size": len(content)}
        )

    def str_replace(self, path: str, old_str: str, new_str: str) -> EditSummary:
        """Replace the single occurrence of old_str in a file."""
        return self._mutate(
            "str_replace",
            path,
            lambda: self.editor.str_replace(path, old_str, new_str),
            {"old_length": len(old_str), "new_length": len(new_str)},
        )

    def insert(self, path: str, insert_line: int, new_str: str) -> EditSummary:
        """Insert text as new line(s) after insert_line."""
        return self._mutate(
            "insert",
            path,
            lambda: self.editor.insert(path, insert_line, new_str),
            {"insert_line": insert_line},
        )

    def undo(self, path: str) -> EditSummary:
        """Undo the last edit of a file."""
        return self._mutate("undo", path, lambda: self.editor.undo(path))

    def rename(self, old_path: str, new_path: str) -> EditSummary:
        """Move a file or directory to a new path."""
        return self._mutate(
            "rename",
            old_path,
            lambda: self.editor.rename(old_path, new_path),
            {"new_path": new_path},
        )

    def delete(self, path: str) -> EditSummary:
        """Delete a file or a directory with all its contents."""
        return self._mutate("delete", path, lambda: self.editor.delete(path))

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _log_operation(
        self,
        operation: str,
        path: str,
        details: dict | None = None,
        success: bool = True,
        error_message: str | None = None,
    ) -> None:
        """Log a workspace operation."""
        self._debug_log(
            f"{operation} {path} -> {'ok' if success else error_message}"
        )
        if not self.config.auto_log or not self._initialized:
            return

        log = OperationLog.create(
            operation=operation,
            path=str(path),
            project_id=self.config.project_id or "ephemeral",
            details=details or {},
            success=success,
            error_message=error_message,
        )
        self.database.save_log(log)


# =========================================================================
# Factory Functions
# =========================================================================


def create_workspace(config: CanvasFSConfig | None = None) -> Workspace:
    """
    Create and initialize a new ephemeral Workspace (no persistence).

    For persistent sessions, use Workspace.for_project() instead.
    """
    workspace = Workspace(config=config)
    workspace.initialize()
    return workspace

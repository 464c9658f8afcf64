"""
SQLite implementation for CanvasFS project and snapshot storage.
"""

from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path
from typing import Any

from canvasfs.databases.base import BaseDatabase
from canvasfs.types import OperationLog, Project, Session, SessionStatus


class SQLiteDatabase(BaseDatabase):
    """SQLite-based storage for projects, sessions, tree snapshots and logs."""

    def __init__(self, db_path: str | None = None):
        """
        Initialize SQLite database.

        Args:
            db_path: Path to SQLite database file. None for in-memory database.
        """
        self.db_path = db_path or ":memory:"
        self.conn: sqlite3.Connection | None = None

    def initialize(self) -> None:
        """Initialize the database schema."""
        if self.conn is not None:
            return
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self) -> None:
        """Create database tables if they don't exist."""
        assert self.conn is not None

        cursor = self.conn.cursor()

        # Projects table
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS projects (
                project_id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE,
                created_at REAL NOT NULL,
                extra TEXT NOT NULL DEFAULT '{}'
            )
        """)

        # Sessions table
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                session_id TEXT PRIMARY KEY,
                project_id TEXT NOT NULL,
                started_at REAL NOT NULL,
                ended_at REAL,
                status TEXT NOT NULL DEFAULT 'active',
                extra TEXT NOT NULL DEFAULT '{}'
            )
        """)

        # Tree snapshots table (one row per project)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tree_snapshots (
                project_id TEXT PRIMARY KEY,
                snapshot TEXT NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # Logs table
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp REAL NOT NULL,
                operation TEXT NOT NULL,
                path TEXT NOT NULL,
                project_id TEXT NOT NULL,
                details TEXT NOT NULL DEFAULT '{}',
                success INTEGER NOT NULL DEFAULT 1,
                error_message TEXT
            )
        """)

        # Create indexes
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_sessions_project ON sessions(project_id, status)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_logs_timestamp ON logs(timestamp DESC)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_logs_path ON logs(path)"
        )

        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    # =========================================================================
    # Project operations
    # =========================================================================

    def _row_to_project(self, row: sqlite3.Row) -> Project:
        return Project(
            project_id=row["project_id"],
            name=row["name"],
            created_at=row["created_at"],
            extra=json.loads(row["extra"]),
        )

    def create_project(self, project: Project) -> None:
        """Create a new project."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO projects (project_id, name, created_at, extra)
            VALUES (?, ?, ?, ?)
            """,
            (
                project.project_id,
                project.name,
                project.created_at,
                json.dumps(project.extra),
            ),
        )
        self.conn.commit()

    def get_project_by_id(self, project_id: str) -> Project | None:
        """Get a project by ID."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM projects WHERE project_id = ?", (project_id,))
        row = cursor.fetchone()
        return self._row_to_project(row) if row else None

    def get_project_by_name(self, name: str) -> Project | None:
        """Get a project by name."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM projects WHERE name = ?", (name,))
        row = cursor.fetchone()
        return self._row_to_project(row) if row else None

    def list_projects(self) -> list[Project]:
        """List all projects."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM projects ORDER BY created_at")
        return [self._row_to_project(row) for row in cursor.fetchall()]

    def delete_project(self, project_id: str) -> bool:
        """Delete a project and its snapshot. Returns True if deleted."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM tree_snapshots WHERE project_id = ?", (project_id,))
        cursor.execute("DELETE FROM sessions WHERE project_id = ?", (project_id,))
        cursor.execute("DELETE FROM projects WHERE project_id = ?", (project_id,))
        deleted = cursor.rowcount > 0
        self.conn.commit()
        return deleted

    # =========================================================================
    # Session operations
    # =========================================================================

    def _row_to_session(self, row: sqlite3.Row) -> Session:
        return Session(
            session_id=row["session_id"],
            project_id=row["project_id"],
            started_at=row["started_at"],
            ended_at=row["ended_at"],
            status=SessionStatus(row["status"]),
            extra=json.loads(row["extra"]),
        )

    def create_session(self, session: Session) -> None:
        """Create a new session."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO sessions (session_id, project_id, started_at, ended_at, status, extra)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                session.session_id,
                session.project_id,
                session.started_at,
                session.ended_at,
                session.status.value,
                json.dumps(session.extra),
            ),
        )
        self.conn.commit()

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM sessions WHERE session_id = ?", (session_id,))
        row = cursor.fetchone()
        return self._row_to_session(row) if row else None

    def end_session(
        self, session_id: str, status: SessionStatus = SessionStatus.COMPLETED
    ) -> None:
        """End a session with the given status."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            "UPDATE sessions SET ended_at = ?, status = ? WHERE session_id = ?",
            (time.time(), status.value, session_id),
        )
        self.conn.commit()

    def get_active_session_for_project(self, project_id: str) -> Session | None:
        """Get the currently active session for a project, if any."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT * FROM sessions
            WHERE project_id = ? AND status = ?
            ORDER BY started_at DESC
            LIMIT 1
            """,
            (project_id, SessionStatus.ACTIVE.value),
        )
        row = cursor.fetchone()
        return self._row_to_session(row) if row else None

    # =========================================================================
    # Tree snapshot operations
    # =========================================================================

    def save_tree_snapshot(self, project_id: str, snapshot: dict[str, Any]) -> None:
        """Store the tree snapshot for a project, replacing any previous one."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT OR REPLACE INTO tree_snapshots (project_id, snapshot, updated_at)
            VALUES (?, ?, ?)
            """,
            (project_id, json.dumps(snapshot, ensure_ascii=False), time.time()),
        )
        self.conn.commit()

    def load_tree_snapshot(self, project_id: str) -> dict[str, Any] | None:
        """Load the stored tree snapshot for a project, if any."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            "SELECT snapshot FROM tree_snapshots WHERE project_id = ?", (project_id,)
        )
        row = cursor.fetchone()
        return json.loads(row["snapshot"]) if row else None

    # =========================================================================
    # Log operations
    # =========================================================================

    def save_log(self, log: OperationLog) -> None:
        """Save a log entry."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO logs (timestamp, operation, path, project_id, details, success, error_message)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                log.timestamp,
                log.operation,
                log.path,
                log.project_id,
                json.dumps(log.details),
                int(log.success),
                log.error_message,
            ),
        )
        self.conn.commit()

    def get_logs(
        self, limit: int = 100, offset: int = 0, path_filter: str | None = None
    ) -> list[OperationLog]:
        """Get log entries with optional path filter."""
        assert self.conn is not None

        cursor = self.conn.cursor()

        if path_filter:
            cursor.execute(
                """
                SELECT * FROM logs
                WHERE path LIKE ?
                ORDER BY timestamp DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (f"%{path_filter}%", limit, offset),
            )
        else:
            cursor.execute(
                """
                SELECT * FROM logs
                ORDER BY timestamp DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )

        return [
            OperationLog(
                timestamp=row["timestamp"],
                operation=row["operation"],
                path=row["path"],
                project_id=row["project_id"],
                details=json.loads(row["details"]),
                success=bool(row["success"]),
                error_message=row["error_message"],
            )
            for row in cursor.fetchall()
        ]

"""
Configuration management for CanvasFS.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# Provider type definitions
DatabaseProvider = Literal["sqlite"]
ToolProvider = Literal["openai", "langchain"]

# Default paths
DEFAULT_CANVASFS_HOME = Path.home() / ".canvasfs"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class DatabaseConfig:
    """Configuration for the snapshot database."""

    provider: DatabaseProvider = "sqlite"
    # SQLite
    sqlite_path: str | None = None  # None means in-memory


@dataclass
class AgentConfig:
    """Configuration for the tools exposed to the driving agent."""

    provider: ToolProvider = "openai"
    text_editor_tool: str = "str_replace_editor"
    file_manager_tool: str = "file_manager"
    # Prefix each line of view output with its number
    include_line_numbers: bool = False
    # Truncate view output above this many characters (None disables)
    max_view_chars: int | None = None


@dataclass
class CanvasFSConfig:
    """Main configuration for CanvasFS."""

    # Component configurations
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)

    # Session settings (set during spinup)
    project_id: str | None = None
    session_id: str | None = None
    project_name: str | None = None
    auto_log: bool = True
    # Persist the tree after every successful mutation, not only on spindown
    autosave: bool = False

    # Debug mode - enables verbose logging for diagnosing issues
    debug: bool = False

    def get_canvasfs_home(self) -> Path:
        """Get the CanvasFS home directory."""
        return DEFAULT_CANVASFS_HOME

    @classmethod
    def from_env(cls) -> "CanvasFSConfig":
        """Create configuration from environment variables."""
        config = cls()

        config.database.sqlite_path = os.getenv("CANVASFS_DB_PATH") or None
        config.debug = os.getenv("CANVASFS_DEBUG", "").strip().lower() in _TRUTHY

        return config

    @classmethod
    def default_local(cls) -> "CanvasFSConfig":
        """Create a default local configuration (in-memory, no persistence)."""
        return cls(
            database=DatabaseConfig(provider="sqlite", sqlite_path=None),
            agent=AgentConfig(provider="openai"),
        )

    @classmethod
    def default_persistent(cls) -> "CanvasFSConfig":
        """Create a default configuration with persistence enabled.

        Uses ~/.canvasfs/canvasfs.db to store one tree snapshot per project.
        """
        home = DEFAULT_CANVASFS_HOME
        return cls(
            database=DatabaseConfig(
                provider="sqlite",
                sqlite_path=str(home / "canvasfs.db"),
            ),
            agent=AgentConfig(provider="openai"),
        )

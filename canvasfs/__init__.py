"""
CanvasFS - an in-memory component source tree for LLM agents.

CanvasFS gives an agent a virtual, hierarchical file system that it drives
through two tool families: a text editor (view, create, str_replace, insert,
undo_edit) and a file manager (rename, delete). The tree lives in memory and
can be persisted per project as a JSON snapshot.

Persistent Usage (Recommended):
    from canvasfs import Workspace
    from canvasfs.tools import OpenAIToolProvider

    # Use context manager for automatic persistence
    with Workspace.for_project("landing-page") as workspace:
        tools = OpenAIToolProvider(workspace)
        # ... run agent session ...
    # Snapshot is persisted and the session closed

Ephemeral Usage (No persistence):
    from canvasfs import create_workspace, get_openai_tools, execute_openai_tool

    workspace = create_workspace()

    # Get tools for your agent
    tools = get_openai_tools(workspace)

    # Execute tool calls from your agent
    result = execute_openai_tool(
        workspace,
        "str_replace_editor",
        {"command": "create", "path": "/App.jsx", "file_text": "export default () => null"},
    )

    # Clean up when done
    workspace.close()
"""

from canvasfs.codec import dumps, loads
from canvasfs.config import CanvasFSConfig
from canvasfs.editor import TextEditor
from canvasfs.exceptions import CanvasFSError
from canvasfs.history import UndoHistory
from canvasfs.prompts import CANVASFS_SYSTEM_PROMPT, get_canvasfs_system_prompt
from canvasfs.tools import execute_openai_tool, format_tool_message, get_openai_tools
from canvasfs.tree import FileTree
from canvasfs.types import (
    EditSummary,
    ErrorKind,
    MutationEvent,
    NodeKind,
    OperationLog,
    Project,
    Session,
    SessionStatus,
    ToolResult,
    TreeEntry,
)
from canvasfs.workspace import Workspace, create_workspace

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Workspace",
    "FileTree",
    "TextEditor",
    "UndoHistory",
    "CanvasFSConfig",
    "CanvasFSError",
    # Factory functions
    "create_workspace",
    # Snapshots
    "dumps",
    "loads",
    # Tool helpers
    "get_openai_tools",
    "execute_openai_tool",
    "format_tool_message",
    # Prompts
    "CANVASFS_SYSTEM_PROMPT",
    "get_canvasfs_system_prompt",
    # Entity types
    "Project",
    "Session",
    "SessionStatus",
    # Tree types
    "NodeKind",
    "TreeEntry",
    "EditSummary",
    "MutationEvent",
    "ErrorKind",
    "OperationLog",
    "ToolResult",
]

"""
Base classes for CanvasFS tool definitions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from canvasfs.tools.adapter import ToolAdapter

if TYPE_CHECKING:
    from canvasfs.workspace import Workspace


TEXT_EDITOR_DESCRIPTION = (
    "View, create and edit component source files. "
    "Commands: 'view' shows a file (optionally a [start, end] line range), "
    "'create' writes a whole file (overwriting an existing one), "
    "'str_replace' replaces one exact, unique occurrence of old_str with new_str, "
    "'insert' adds new_str as new line(s) after insert_line (0 = top of file), "
    "'undo_edit' reverts the last edit made to a file. "
    "Parent directories are created automatically."
)

TEXT_EDITOR_READ_ONLY_DESCRIPTION = (
    "View component source files. The workspace is read-only: only the 'view' "
    "command is available, optionally with a [start, end] line range."
)

FILE_MANAGER_DESCRIPTION = (
    "Rename/move or delete files and directories. "
    "Commands: 'rename' moves path to new_path (missing parent directories are created), "
    "'delete' removes a file or a directory with everything inside it. "
    "The root directory '/' cannot be deleted or renamed."
)


class BaseToolProvider(ABC):
    """Abstract base class for tool providers that generate agent-specific tool definitions."""

    def __init__(self, workspace: Workspace):
        """
        Initialize the tool provider.

        Args:
            workspace: The Workspace instance to operate on.
        """
        self.workspace = workspace
        self.adapter = ToolAdapter(workspace)

    @property
    def read_only(self) -> bool:
        return self.workspace.read_only

    @property
    def text_editor_tool(self) -> str:
        return self.workspace.config.agent.text_editor_tool

    @property
    def file_manager_tool(self) -> str:
        return self.workspace.config.agent.file_manager_tool

    @abstractmethod
    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get tool definitions in the format expected by the target agent framework.

        Returns:
            List of tool definitions.
        """
        pass

    @abstractmethod
    def execute_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool call and return the result.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments.

        Returns:
            String result to return to the agent.
        """
        pass

"""
LangChain-compatible tool definitions for CanvasFS operations.

Provides tools that can be used with LangChain agents via:
- LangChainToolProvider class for direct integration
- get_langchain_tools() convenience function

Example usage:
    from canvasfs import Workspace
    from canvasfs.tools.langchain_tools import LangChainToolProvider, get_langchain_tools

    # Using the provider class
    with Workspace.for_project("landing-page") as workspace:
        provider = LangChainToolProvider(workspace)
        tools = provider.get_tools()

        # Use with LangChain agent
        agent = create_react_agent(llm, tools, prompt)

    # Or use the convenience function
    tools = get_langchain_tools(workspace)
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Literal, Optional

from pydantic import BaseModel, Field

from canvasfs.tools.base import (
    FILE_MANAGER_DESCRIPTION,
    TEXT_EDITOR_DESCRIPTION,
    TEXT_EDITOR_READ_ONLY_DESCRIPTION,
    BaseToolProvider,
)

if TYPE_CHECKING:
    from langchain_core.tools import BaseTool

    from canvasfs.workspace import Workspace


class TextEditorInput(BaseModel):
    """Input schema for the CanvasFS text editor."""

    command: Literal["view", "create", "str_replace", "insert", "undo_edit"] = Field(
        description="The command to run"
    )
    path: str = Field(
        description="Absolute path of the file (e.g., '/App.jsx', '/components/Button.jsx')"
    )
    file_text: Optional[str] = Field(
        default=None, description="Required for 'create': the full content of the file"
    )
    old_str: Optional[str] = Field(
        default=None,
        description="Required for 'str_replace': the exact text to replace. Must appear exactly once in the file.",
    )
    new_str: Optional[str] = Field(
        default=None,
        description="For 'str_replace': the replacement text. Required for 'insert': the text to insert.",
    )
    insert_line: Optional[int] = Field(
        default=None,
        description="Required for 'insert': the line after which to insert (0 inserts at the top)",
    )
    view_range: Optional[list[int]] = Field(
        default=None,
        description="Optional for 'view': [start, end] line range, 1-indexed and inclusive. end=-1 reads to the last line.",
    )


class ViewOnlyInput(BaseModel):
    """Input schema for the CanvasFS text editor in read-only mode."""

    command: Literal["view"] = Field(description="The command to run")
    path: str = Field(description="Absolute path of the file (e.g., '/App.jsx')")
    view_range: Optional[list[int]] = Field(
        default=None,
        description="Optional [start, end] line range, 1-indexed and inclusive. end=-1 reads to the last line.",
    )


class FileManagerInput(BaseModel):
    """Input schema for the CanvasFS file manager."""

    command: Literal["rename", "delete"] = Field(description="The command to run")
    path: str = Field(description="Absolute path of the file or directory")
    new_path: Optional[str] = Field(
        default=None, description="Required for 'rename': the destination path"
    )


def _present(arguments: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in arguments.items() if value is not None}


class LangChainToolProvider(BaseToolProvider):
    """LangChain-compatible tool provider for CanvasFS."""

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get tool definitions as dictionaries (for compatibility with base class).

        For LangChain usage, prefer get_tools() which returns actual Tool objects.
        """
        tools = self.get_tools()
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "args_schema": tool.args_schema,
            }
            for tool in tools
        ]

    def get_tools(self) -> list[BaseTool]:
        """
        Get LangChain Tool objects for use with agents.

        In read-only mode, only the text editor is returned and it only
        accepts the 'view' command. The file manager is excluded.

        Returns:
            List of LangChain StructuredTool instances.
        """
        from langchain_core.tools import StructuredTool

        if self.read_only:
            return [
                StructuredTool.from_function(
                    func=self._text_editor,
                    name=self.text_editor_tool,
                    description=TEXT_EDITOR_READ_ONLY_DESCRIPTION,
                    args_schema=ViewOnlyInput,
                )
            ]

        return [
            StructuredTool.from_function(
                func=self._text_editor,
                name=self.text_editor_tool,
                description=TEXT_EDITOR_DESCRIPTION,
                args_schema=TextEditorInput,
            ),
            StructuredTool.from_function(
                func=self._file_manager,
                name=self.file_manager_tool,
                description=FILE_MANAGER_DESCRIPTION,
                args_schema=FileManagerInput,
            ),
        ]

    def execute_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool call and return the result as JSON string.

        Args:
            tool_name: Name of the tool.
            arguments: Tool arguments.

        Returns:
            JSON string result.
        """
        if isinstance(arguments, dict):
            arguments = _present(arguments)
        result = self.adapter.dispatch(tool_name, arguments)
        return json.dumps(result.to_dict())

    def _text_editor(self, **kwargs: Any) -> str:
        return json.dumps(self.adapter.text_editor(_present(kwargs)).to_dict())

    def _file_manager(self, **kwargs: Any) -> str:
        return json.dumps(self.adapter.file_manager(_present(kwargs)).to_dict())


def get_langchain_tools(workspace: Workspace) -> list[BaseTool]:
    """
    Convenience function to get LangChain-compatible tools.

    Args:
        workspace: The Workspace instance.

    Returns:
        List of LangChain StructuredTool instances.
    """
    provider = LangChainToolProvider(workspace)
    return provider.get_tools()


def execute_langchain_tool(
    workspace: Workspace,
    tool_name: str,
    arguments: dict[str, Any],
) -> str:
    """
    Convenience function to execute a LangChain tool call.

    Args:
        workspace: The Workspace instance.
        tool_name: Name of the tool.
        arguments: Tool arguments.

    Returns:
        JSON string result.
    """
    provider = LangChainToolProvider(workspace)
    return provider.execute_tool(tool_name, arguments)

"""
OpenAI-compatible tool definitions for CanvasFS operations.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from canvasfs.exceptions import InvalidArgumentsError
from canvasfs.tools.adapter import error_result
from canvasfs.tools.base import (
    FILE_MANAGER_DESCRIPTION,
    TEXT_EDITOR_DESCRIPTION,
    TEXT_EDITOR_READ_ONLY_DESCRIPTION,
    BaseToolProvider,
)
from canvasfs.tools.commands import (
    FILE_MANAGER_COMMANDS,
    READ_ONLY_COMMANDS,
    TEXT_EDITOR_COMMANDS,
)

if TYPE_CHECKING:
    from canvasfs.workspace import Workspace


class OpenAIToolProvider(BaseToolProvider):
    """OpenAI function calling compatible tool provider for CanvasFS."""

    def _text_editor_definition(self) -> dict[str, Any]:
        commands = READ_ONLY_COMMANDS if self.read_only else TEXT_EDITOR_COMMANDS
        properties: dict[str, Any] = {
            "command": {
                "type": "string",
                "enum": list(commands),
                "description": "The command to run",
            },
            "path": {
                "type": "string",
                "description": "Absolute path of the file (e.g., '/App.jsx', '/components/Button.jsx')",
            },
            "view_range": {
                "type": "array",
                "items": {"type": "integer"},
                "minItems": 2,
                "maxItems": 2,
                "description": "Optional for 'view': [start, end] line range, 1-indexed and inclusive. Use end=-1 to read to the last line.",
            },
        }
        if not self.read_only:
            properties.update(
                {
                    "file_text": {
                        "type": "string",
                        "description": "Required for 'create': the full content of the file",
                    },
                    "old_str": {
                        "type": "string",
                        "description": "Required for 'str_replace': the exact text to replace. Must appear exactly once in the file - include surrounding context if needed for uniqueness.",
                    },
                    "new_str": {
                        "type": "string",
                        "description": "For 'str_replace': the replacement text. Required for 'insert': the text to insert.",
                    },
                    "insert_line": {
                        "type": "integer",
                        "description": "Required for 'insert': the line after which to insert (0 inserts at the top of the file)",
                    },
                }
            )

        return {
            "type": "function",
            "function": {
                "name": self.text_editor_tool,
                "description": TEXT_EDITOR_READ_ONLY_DESCRIPTION if self.read_only else TEXT_EDITOR_DESCRIPTION,
                "parameters": {
                    "type": "object",
                    "properties": properties,
                    "required": ["command", "path"],
                },
            },
        }

    def _file_manager_definition(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.file_manager_tool,
                "description": FILE_MANAGER_DESCRIPTION,
                "parameters": {
                    "type": "object",
                    "properties": {
                        "command": {
                            "type": "string",
                            "enum": list(FILE_MANAGER_COMMANDS),
                            "description": "The command to run",
                        },
                        "path": {
                            "type": "string",
                            "description": "Absolute path of the file or directory",
                        },
                        "new_path": {
                            "type": "string",
                            "description": "Required for 'rename': the destination path",
                        },
                    },
                    "required": ["command", "path"],
                },
            },
        }

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get OpenAI function calling compatible tool definitions.

        In read-only mode only the text editor is offered, restricted to 'view'.
        """
        tools = [self._text_editor_definition()]
        if not self.read_only:
            tools.append(self._file_manager_definition())
        return tools

    def execute_tool(self, tool_name: str, arguments: dict[str, Any] | str) -> str:
        """
        Execute a tool call and return the result as JSON string.

        Args:
            tool_name: Name of the tool.
            arguments: Tool arguments, either decoded or as the raw JSON
                string found in an OpenAI tool call.

        Returns:
            JSON string result.
        """
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError as e:
                result = error_result(
                    InvalidArgumentsError(f"Tool arguments are not valid JSON: {e}")
                )
                return json.dumps(result.to_dict())

        result = self.adapter.dispatch(tool_name, arguments)
        return json.dumps(result.to_dict())


def get_openai_tools(workspace: Workspace) -> list[dict[str, Any]]:
    """
    Convenience function to get OpenAI-compatible tool definitions.

    Args:
        workspace: The Workspace instance.

    Returns:
        List of tool definitions for OpenAI function calling.
    """
    provider = OpenAIToolProvider(workspace)
    return provider.get_tool_definitions()


def execute_openai_tool(
    workspace: Workspace,
    tool_name: str,
    arguments: dict[str, Any] | str,
) -> str:
    """
    Convenience function to execute an OpenAI tool call.

    Args:
        workspace: The Workspace instance.
        tool_name: Name of the tool.
        arguments: Tool arguments.

    Returns:
        JSON string result.
    """
    provider = OpenAIToolProvider(workspace)
    return provider.execute_tool(tool_name, arguments)

"""
Human-readable progress labels for tool calls, shown in the UI while the
agent works (e.g. "Creating /App.jsx").
"""

from __future__ import annotations

from typing import Any

TEXT_EDITOR_TOOL = "str_replace_editor"
FILE_MANAGER_TOOL = "file_manager"

_TEXT_EDITOR_LABELS = {
    "create": "Creating {path}",
    "str_replace": "Editing {path}",
    "insert": "Editing {path}",
    "view": "Reading {path}",
    "undo_edit": "Undoing changes to {path}",
}


def _title_case(tool_name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in tool_name.split("_"))


def _field(args: dict[str, Any], name: str) -> str:
    # Partially streamed calls can carry any JSON value here
    value = args.get(name)
    return value if isinstance(value, str) else ""


def _text_editor_message(args: dict[str, Any]) -> str:
    path = _field(args, "path") or "file"
    label = _TEXT_EDITOR_LABELS.get(_field(args, "command"), "Editing {path}")
    return label.format(path=path)


def _file_manager_message(args: dict[str, Any]) -> str:
    path = _field(args, "path") or "file"
    command = _field(args, "command")
    if command == "rename":
        new_path = _field(args, "new_path")
        if new_path:
            return f"Renaming {path} to {new_path}"
        return f"Renaming {path}"
    if command == "delete":
        return f"Deleting {path}"
    return f"Managing {path}"


def format_tool_message(tool_name: str, args: dict[str, Any] | None = None) -> str:
    """
    Format a tool call as a short label for display.

    Args:
        tool_name: Name of the tool being called.
        args: The (possibly partial) tool arguments. None when the call has
            not streamed any arguments yet.

    Returns:
        A label such as "Renaming /a.js to /b.js". Unknown tools and calls
        without arguments fall back to the tool name in Title Case.

    Example:
        ```python
        format_tool_message("str_replace_editor", {"command": "create", "path": "App.jsx"})
        # "Creating App.jsx"
        ```
    """
    if args is None:
        return _title_case(tool_name)
    if not isinstance(args, dict):
        args = {}
    if tool_name == TEXT_EDITOR_TOOL:
        return _text_editor_message(args)
    if tool_name == FILE_MANAGER_TOOL:
        return _file_manager_message(args)
    return _title_case(tool_name)

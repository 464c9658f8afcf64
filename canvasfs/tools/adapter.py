"""
Tool adapter - turns raw agent tool calls into workspace operations.

The adapter is the only place where CanvasFS exceptions become data: every
call returns a ToolResult, whether the operation succeeded, failed with a
known error kind, or blew up unexpectedly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from canvasfs import paths
from canvasfs.editor import split_lines
from canvasfs.exceptions import CanvasFSError, UnsupportedCommandError
from canvasfs.tools.commands import (
    CreateCommand,
    DeleteCommand,
    InsertCommand,
    RenameCommand,
    StrReplaceCommand,
    UndoEditCommand,
    ViewCommand,
    decode_file_manager,
    decode_text_editor,
)
from canvasfs.types import EditSummary, ErrorKind, ToolResult

if TYPE_CHECKING:
    from canvasfs.workspace import Workspace

logger = logging.getLogger(__name__)

# Retry hints appended to error messages, keyed by error kind
_HINTS: dict[ErrorKind, str] = {
    ErrorKind.INVALID_PATH: "Use an absolute path such as '/App.jsx' with no '..' above the root.",
    ErrorKind.NOT_FOUND: "View the parent directory listing to check the path.",
    ErrorKind.ALREADY_EXISTS: "Choose a different path or delete the existing node first.",
    ErrorKind.CANNOT_DELETE_ROOT: "Delete the individual files or directories instead.",
    ErrorKind.INVALID_RANGE: "View the file without a range to see how many lines it has.",
    ErrorKind.AMBIGUOUS_MATCH: "Include more surrounding lines in old_str.",
    ErrorKind.NO_MATCH: "View the file and copy the text exactly, including whitespace.",
    ErrorKind.NO_HISTORY: "There is no earlier version of this file to restore.",
}


def format_with_line_numbers(content: str, first_line: int = 1) -> str:
    """Prefix each line with its 1-indexed number, right-aligned."""
    lines = [line.rstrip("\r\n") for line in split_lines(content)]
    if not lines:
        return ""
    width = len(str(first_line + len(lines) - 1))
    return "\n".join(
        f"{first_line + i:>{width}}| {line}" for i, line in enumerate(lines)
    )


def error_result(error: CanvasFSError) -> ToolResult:
    """Convert a CanvasFS exception into an error ToolResult."""
    message = error.message
    hint = _HINTS.get(error.kind) if error.kind is not None else None
    if hint:
        message = f"{message} {hint}"
    data = {"path": error.path} if error.path else None
    return ToolResult(status="error", message=message, data=data, error=error.kind)


class ToolAdapter:
    """Routes text-editor and file-manager tool calls to a Workspace."""

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    @property
    def _agent_config(self):
        return self.workspace.config.agent

    def dispatch(self, tool_name: str, arguments: Any) -> ToolResult:
        """
        Execute a tool call by tool name.

        Unknown tool names produce an UnsupportedCommand error result.
        """
        handlers: dict[str, Callable[[Any], ToolResult]] = {
            self._agent_config.text_editor_tool: self.text_editor,
            self._agent_config.file_manager_tool: self.file_manager,
        }
        handler = handlers.get(tool_name)
        if handler is None:
            return error_result(
                UnsupportedCommandError(
                    f"Unknown tool: {tool_name}. Available tools: {', '.join(handlers)}"
                )
            )
        return handler(arguments)

    def text_editor(self, arguments: Any) -> ToolResult:
        """Execute a text-editor command (view, create, str_replace, insert, undo_edit)."""
        return self._run(lambda: self._text_editor(decode_text_editor(arguments)))

    def file_manager(self, arguments: Any) -> ToolResult:
        """Execute a file-manager command (rename, delete)."""
        return self._run(lambda: self._file_manager(decode_file_manager(arguments)))

    def _run(self, call: Callable[[], ToolResult]) -> ToolResult:
        try:
            return call()
        except CanvasFSError as e:
            return error_result(e)
        except Exception as e:
            logger.exception("Unexpected error while executing tool call")
            return ToolResult(status="error", message=f"Tool execution failed: {e}")

    # =========================================================================
    # Text editor
    # =========================================================================

    def _text_editor(self, command) -> ToolResult:
        if isinstance(command, ViewCommand):
            return self._view(command)
        if isinstance(command, CreateCommand):
            summary = self.workspace.create(command.path, command.file_text)
            verb = "Overwrote" if summary.operation == "overwrite" else "Created"
            return self._edited(summary, f"{verb} file: {summary.path}")
        if isinstance(command, StrReplaceCommand):
            summary = self.workspace.str_replace(command.path, command.old_str, command.new_str)
            return self._edited(summary, f"Edited {summary.path}")
        if isinstance(command, InsertCommand):
            summary = self.workspace.insert(command.path, command.insert_line, command.new_str)
            return self._edited(
                summary, f"Inserted text after line {command.insert_line} of {summary.path}"
            )
        if isinstance(command, UndoEditCommand):
            summary = self.workspace.undo(command.path)
            return self._edited(summary, f"Reverted last edit to {summary.path}")
        raise UnsupportedCommandError(f"Unsupported text editor command: {command!r}")

    def _view(self, command: ViewCommand) -> ToolResult:
        path = paths.normalize(command.path)
        content = self.workspace.view(path, command.view_range)
        first_line = command.view_range[0] if command.view_range else 1
        total = len(split_lines(self.workspace.read_file(path)))
        shown = len(split_lines(content))

        output = content
        if self._agent_config.include_line_numbers:
            output = format_with_line_numbers(content, first_line)

        message = f"Read {path}"
        if command.view_range:
            message += f" (lines {first_line}-{first_line + shown - 1} of {total})"
        else:
            message += f" ({total} lines)"

        limit = self._agent_config.max_view_chars
        truncated = limit is not None and len(output) > limit
        if truncated:
            output = output[:limit]
            message += (
                f". Output truncated to {limit} characters; "
                "use view_range to read the rest"
            )

        return ToolResult(
            status="success",
            message=message,
            data={
                "path": path,
                "content": output,
                "total_lines": total,
                "truncated": truncated,
            },
        )

    def _edited(self, summary: EditSummary, message: str) -> ToolResult:
        data: dict[str, Any] = {
            "path": summary.path,
            "operation": summary.operation,
            "summary": summary.describe(),
        }
        if summary.source is None and summary.operation != "delete":
            data["lines_before"] = summary.lines_before
            data["lines_after"] = summary.lines_after
        if summary.source is not None:
            data["old_path"] = summary.source
        return ToolResult(status="success", message=message, data=data)

    # =========================================================================
    # File manager
    # =========================================================================

    def _file_manager(self, command) -> ToolResult:
        if isinstance(command, RenameCommand):
            summary = self.workspace.rename(command.path, command.new_path)
            return self._edited(summary, f"Renamed {summary.source} to {summary.path}")
        if isinstance(command, DeleteCommand):
            summary = self.workspace.delete(command.path)
            return self._edited(summary, f"Deleted: {summary.path}")
        raise UnsupportedCommandError(f"Unsupported file manager command: {command!r}")

"""
Tests for the tool adapter.
"""

import logging
from unittest.mock import MagicMock

import pytest

from canvasfs.config import AgentConfig, CanvasFSConfig
from canvasfs.tools.adapter import ToolAdapter, format_with_line_numbers
from canvasfs.types import ErrorKind
from canvasfs.workspace import create_workspace


@pytest.fixture
def adapter(workspace):
    """Create an adapter over the ephemeral workspace."""
    return ToolAdapter(workspace)


def _adapter_with(**agent_options) -> ToolAdapter:
    config = CanvasFSConfig.default_local()
    config.agent = AgentConfig(**agent_options)
    return ToolAdapter(create_workspace(config))


class TestTextEditor:
    """Test cases for text editor commands."""

    def test_create_then_view(self, adapter):
        result = adapter.text_editor(
            {"command": "create", "path": "App.jsx", "file_text": "const App = () => null;"}
        )
        assert result.ok
        assert result.message == "Created file: /App.jsx"
        assert result.data["lines_after"] == 1

        viewed = adapter.text_editor({"command": "view", "path": "/App.jsx"})
        assert viewed.data["content"] == "const App = () => null;"
        assert viewed.data["total_lines"] == 1

    def test_overwrite(self, adapter):
        adapter.text_editor({"command": "create", "path": "/a.js", "file_text": "1"})
        result = adapter.text_editor({"command": "create", "path": "/a.js", "file_text": "2"})
        assert result.message == "Overwrote file: /a.js"
        assert result.data["operation"] == "overwrite"

    def test_edit_and_undo(self, adapter, workspace):
        workspace.create_file("/a.js", "x=1")
        inserted = adapter.text_editor(
            {"command": "insert", "path": "/a.js", "insert_line": 0, "new_str": "// header"}
        )
        assert inserted.ok
        assert workspace.read_file("/a.js") == "// header\nx=1"

        undone = adapter.text_editor({"command": "undo_edit", "path": "/a.js"})
        assert undone.message == "Reverted last edit to /a.js"
        assert workspace.read_file("/a.js") == "x=1"

        again = adapter.text_editor({"command": "undo_edit", "path": "/a.js"})
        assert again.error == ErrorKind.NO_HISTORY

    def test_view_range_message(self, adapter, workspace):
        workspace.create_file("/a.js", "one\ntwo\nthree\n")
        result = adapter.text_editor({"command": "view", "path": "/a.js", "view_range": [2, -1]})
        assert result.data["content"] == "two\nthree\n"
        assert result.message == "Read /a.js (lines 2-3 of 3)"

    def test_ambiguous_match_result(self, adapter, workspace):
        workspace.create_file("/a.js", "foo foo")
        result = adapter.text_editor(
            {"command": "str_replace", "path": "/a.js", "old_str": "foo", "new_str": "bar"}
        )
        assert not result.ok
        assert result.error == ErrorKind.AMBIGUOUS_MATCH
        assert result.to_dict()["error"] == "AmbiguousMatch"
        assert "surrounding" in result.message
        assert workspace.read_file("/a.js") == "foo foo"

    def test_not_found_result(self, adapter):
        result = adapter.text_editor({"command": "view", "path": "/missing.js"})
        assert result.status == "error"
        assert result.error == ErrorKind.NOT_FOUND
        assert result.data == {"path": "/missing.js"}

    def test_unsupported_command_result(self, adapter):
        result = adapter.text_editor({"command": "compile", "path": "/a.js"})
        assert result.error == ErrorKind.UNSUPPORTED_COMMAND

    def test_invalid_arguments_result(self, adapter):
        result = adapter.text_editor({"command": "create", "path": "/a.js"})
        assert result.error == ErrorKind.INVALID_ARGUMENTS
        assert "file_text" in result.message

    def test_invalid_path_result(self, adapter):
        result = adapter.text_editor({"command": "create", "path": "/../a.js", "file_text": ""})
        assert result.error == ErrorKind.INVALID_PATH


class TestViewFormatting:
    """Test cases for line numbers and truncation."""

    def test_format_with_line_numbers(self):
        assert format_with_line_numbers("a\nb\n", 9) == " 9| a\n10| b"
        assert format_with_line_numbers("") == ""

    def test_line_numbers(self):
        adapter = _adapter_with(include_line_numbers=True)
        adapter.workspace.create_file("/a.js", "a\nb\nc")
        result = adapter.text_editor({"command": "view", "path": "/a.js", "view_range": [2, 2]})
        assert result.data["content"] == "2| b"

    def test_truncation(self):
        adapter = _adapter_with(max_view_chars=5)
        adapter.workspace.create_file("/a.js", "abcdefghij")
        result = adapter.text_editor({"command": "view", "path": "/a.js"})
        assert result.data["content"] == "abcde"
        assert result.data["truncated"] is True
        assert "truncated" in result.message


class TestFileManager:
    """Test cases for file manager commands."""

    def test_rename(self, adapter, workspace):
        workspace.create_file("/a.js", "x")
        result = adapter.file_manager({"command": "rename", "path": "/a.js", "new_path": "/lib/b.js"})
        assert result.message == "Renamed /a.js to /lib/b.js"
        assert result.data["old_path"] == "/a.js"
        assert workspace.read_file("/lib/b.js") == "x"

    def test_delete(self, adapter, workspace):
        workspace.create_file("/components/Button.jsx")
        result = adapter.file_manager({"command": "delete", "path": "/components"})
        assert result.message == "Deleted: /components"
        assert not workspace.exists("/components/Button.jsx")

    def test_delete_root(self, adapter):
        result = adapter.file_manager({"command": "delete", "path": "/"})
        assert result.error == ErrorKind.CANNOT_DELETE_ROOT


class TestDispatch:
    """Test cases for routing by tool name."""

    def test_routes_by_configured_name(self, adapter, workspace):
        result = adapter.dispatch(
            "str_replace_editor", {"command": "create", "path": "/a.js", "file_text": ""}
        )
        assert result.ok
        assert adapter.dispatch("file_manager", {"command": "delete", "path": "/a.js"}).ok
        assert not workspace.exists("/a.js")

    def test_custom_tool_names(self):
        adapter = _adapter_with(text_editor_tool="editor", file_manager_tool="files")
        assert adapter.dispatch("editor", {"command": "create", "path": "/a.js", "file_text": ""}).ok
        assert adapter.dispatch("str_replace_editor", {}).error == ErrorKind.UNSUPPORTED_COMMAND

    def test_unknown_tool(self, adapter):
        result = adapter.dispatch("bash", {"command": "ls"})
        assert result.error == ErrorKind.UNSUPPORTED_COMMAND
        assert "Unknown tool: bash" in result.message

    def test_read_only_workspace(self, read_only_workspace):
        adapter = ToolAdapter(read_only_workspace)
        assert adapter.text_editor({"command": "view", "path": "/App.jsx"}).ok
        result = adapter.file_manager({"command": "delete", "path": "/App.jsx"})
        assert result.error == ErrorKind.UNSUPPORTED_COMMAND
        assert read_only_workspace.exists("/App.jsx")

    def test_unexpected_error_becomes_result(self, caplog):
        """Test that non-CanvasFS exceptions never escape the adapter."""
        workspace = MagicMock()
        workspace.create.side_effect = RuntimeError("boom")
        adapter = ToolAdapter(workspace)

        with caplog.at_level(logging.ERROR, logger="canvasfs.tools.adapter"):
            result = adapter.text_editor({"command": "create", "path": "/a.js", "file_text": ""})

        assert result.status == "error"
        assert result.error is None
        assert "boom" in result.message
        assert caplog.records[0].exc_info is not None

"""
Tests for tool progress labels.
"""

import pytest

from canvasfs.tools.messages import format_tool_message


class TestTextEditorMessages:
    """Test cases for str_replace_editor labels."""

    @pytest.mark.parametrize(
        "args, expected",
        [
            ({"command": "create", "path": "App.jsx"}, "Creating App.jsx"),
            (
                {"command": "str_replace", "path": "components/Button.tsx", "old_str": "a", "new_str": "b"},
                "Editing components/Button.tsx",
            ),
            (
                {"command": "insert", "path": "utils/helper.js", "insert_line": 10, "new_str": "x"},
                "Editing utils/helper.js",
            ),
            ({"command": "view", "path": "README.md"}, "Reading README.md"),
            ({"command": "undo_edit", "path": "index.html"}, "Undoing changes to index.html"),
            ({"command": "reformat", "path": "index.html"}, "Editing index.html"),
            ({"command": "create", "path": ""}, "Creating file"),
            (
                {"command": "create", "path": "src/components/User Profile.tsx"},
                "Creating src/components/User Profile.tsx",
            ),
            ({}, "Editing file"),
        ],
    )
    def test_labels(self, args, expected):
        assert format_tool_message("str_replace_editor", args) == expected


class TestFileManagerMessages:
    """Test cases for file_manager labels."""

    @pytest.mark.parametrize(
        "args, expected",
        [
            (
                {"command": "rename", "path": "old-name.js", "new_path": "new-name.js"},
                "Renaming old-name.js to new-name.js",
            ),
            ({"command": "rename", "path": "old-name.js"}, "Renaming old-name.js"),
            ({"command": "delete", "path": "temp.txt"}, "Deleting temp.txt"),
            ({"command": "delete", "path": ""}, "Deleting file"),
            ({"command": "copy", "path": "a.js"}, "Managing a.js"),
        ],
    )
    def test_labels(self, args, expected):
        assert format_tool_message("file_manager", args) == expected


class TestFallback:
    """Test cases for Title Case fallbacks."""

    def test_missing_args(self):
        assert format_tool_message("str_replace_editor") == "Str Replace Editor"
        assert format_tool_message("file_manager", None) == "File Manager"

    def test_unknown_tool(self):
        assert format_tool_message("unknown_tool", {}) == "Unknown Tool"

    def test_snake_case_to_title_case(self):
        assert format_tool_message("some_custom_tool_name") == "Some Custom Tool Name"


class TestMalformedArgs:
    """Test cases for partially streamed or malformed arguments."""

    @pytest.mark.parametrize(
        "tool_name, args, expected",
        [
            ("str_replace_editor", {"command": ["create"], "path": "/a"}, "Editing /a"),
            ("str_replace_editor", {"command": "view", "path": 42}, "Reading file"),
            ("file_manager", {"command": {"op": "rename"}, "path": "/a"}, "Managing /a"),
            ("file_manager", {"command": "rename", "path": "/a", "new_path": ["/b"]}, "Renaming /a"),
            ("str_replace_editor", ["create", "/a"], "Editing file"),
            ("file_manager", "rename", "Managing file"),
        ],
    )
    def test_never_raises(self, tool_name, args, expected):
        assert format_tool_message(tool_name, args) == expected

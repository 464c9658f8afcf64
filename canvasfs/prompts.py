"""
Prompt templates for CanvasFS agent integration.

This module provides system prompt components that developers can include
in their agent's system prompt so the agent knows how to build components
with the CanvasFS tools.
"""

from __future__ import annotations

# Concise system prompt component for CanvasFS usage
CANVASFS_SYSTEM_PROMPT = """## Component Workspace (CanvasFS)

You are building UI components inside a virtual file system. Nothing is written to disk;
every file you create is rendered in a live preview.

### Layout
- The root is `/`. Always use absolute paths (e.g., `/App.jsx`, `/components/Button.jsx`).
- Parent directories are created automatically when you create or move a file.

### Available Tools
- `str_replace_editor` - View, create and edit files
  - `view` - Read a file, optionally a `view_range` of [start, end] lines
  - `create` - Write a whole file (overwrites an existing file)
  - `str_replace` - Replace one exact, unique occurrence of `old_str` with `new_str`
  - `insert` - Insert `new_str` after line `insert_line` (0 = top of file)
  - `undo_edit` - Revert the last edit to a file
- `file_manager` - Rename/move (`rename`) or `delete` files and directories

### Best Practices
1. View a file before editing it
2. Keep `old_str` short but unique - include neighbouring lines if it appears more than once
3. Prefer `str_replace` over recreating a whole file for small changes
4. Only one level of undo is kept per file"""


READ_ONLY_NOTE = """
### Read-Only Mode
This workspace is read-only. Only the `view` command is available; any other command
will fail."""


def get_canvasfs_system_prompt(
    text_editor_tool: str = "str_replace_editor",
    file_manager_tool: str = "file_manager",
    read_only: bool = False,
) -> str:
    """
    Get the CanvasFS system prompt component.

    Args:
        text_editor_tool: Name under which the text editor tool is registered.
        file_manager_tool: Name under which the file manager tool is registered.
        read_only: If True, append a note that only viewing is allowed.

    Returns:
        System prompt string to include in your agent's system prompt.

    Example:
        ```python
        from canvasfs.prompts import get_canvasfs_system_prompt

        system_prompt = f'''You are a React component designer.

        {get_canvasfs_system_prompt()}
        '''
        ```
    """
    prompt = CANVASFS_SYSTEM_PROMPT.replace(
        "`str_replace_editor`", f"`{text_editor_tool}`"
    ).replace("`file_manager`", f"`{file_manager_tool}`")
    if read_only:
        prompt += READ_ONLY_NOTE
    return prompt

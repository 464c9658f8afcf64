"""
Closed command vocabularies for the two CanvasFS tool families.

Raw tool-call arguments are decoded exactly once, here, into one of the
tagged command models below. Everything after decoding works with typed
commands instead of loose dictionaries.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from canvasfs.exceptions import InvalidArgumentsError, UnsupportedCommandError

TEXT_EDITOR_COMMANDS = ("view", "create", "str_replace", "insert", "undo_edit")
FILE_MANAGER_COMMANDS = ("rename", "delete")
READ_ONLY_COMMANDS = ("view",)


class _Command(BaseModel):
    # Agents routinely send null placeholders for fields of other commands
    model_config = ConfigDict(extra="ignore", frozen=True)

    path: str = Field(description="Absolute path of the file or directory (e.g., '/App.jsx')")


# =============================================================================
# Text editor family
# =============================================================================


class ViewCommand(_Command):
    """View a file, optionally restricted to a line range."""

    command: Literal["view"]
    view_range: Optional[tuple[int, int]] = Field(
        default=None,
        description="Optional [start, end] line range, 1-indexed and inclusive. end=-1 reads to the last line.",
    )


class CreateCommand(_Command):
    """Create a file, overwriting any existing file at path."""

    command: Literal["create"]
    file_text: str = Field(description="Full content of the file")


class StrReplaceCommand(_Command):
    """Replace the single occurrence of old_str with new_str."""

    command: Literal["str_replace"]
    old_str: str = Field(description="Exact text to replace; must occur exactly once")
    new_str: str = Field(default="", description="Replacement text")


class InsertCommand(_Command):
    """Insert new_str as new line(s) after insert_line."""

    command: Literal["insert"]
    insert_line: int = Field(description="Line after which to insert (0 = top of file)")
    new_str: str = Field(description="Text to insert")


class UndoEditCommand(_Command):
    """Revert the last edit made to a file."""

    command: Literal["undo_edit"]


TextEditorCommand = Annotated[
    Union[ViewCommand, CreateCommand, StrReplaceCommand, InsertCommand, UndoEditCommand],
    Field(discriminator="command"),
]


# =============================================================================
# File manager family
# =============================================================================


class RenameCommand(_Command):
    """Move a file or directory to new_path."""

    command: Literal["rename"]
    new_path: str = Field(description="Destination path")


class DeleteCommand(_Command):
    """Delete a file, or a directory with everything inside it."""

    command: Literal["delete"]


FileManagerCommand = Annotated[
    Union[RenameCommand, DeleteCommand],
    Field(discriminator="command"),
]

_TEXT_EDITOR_ADAPTER: TypeAdapter = TypeAdapter(TextEditorCommand)
_FILE_MANAGER_ADAPTER: TypeAdapter = TypeAdapter(FileManagerCommand)


def _format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"][1:]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def _decode(
    adapter: TypeAdapter,
    family: str,
    vocabulary: tuple[str, ...],
    arguments: Any,
) -> Any:
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError(
            f"Arguments for {family} must be an object, got {type(arguments).__name__}"
        )

    command = arguments.get("command")
    if command not in vocabulary:
        raise UnsupportedCommandError(
            f"Unsupported command {command!r} for {family}. "
            f"Allowed commands: {', '.join(vocabulary)}"
        )

    try:
        return adapter.validate_python(arguments)
    except ValidationError as e:
        raise InvalidArgumentsError(
            f"Invalid arguments for {family} '{command}': {_format_validation_error(e)}"
        ) from e


def decode_text_editor(arguments: Any):
    """
    Decode raw text editor arguments.

    Raises:
        UnsupportedCommandError: If command is missing or not in the vocabulary.
        InvalidArgumentsError: If the command's fields fail validation.
    """
    return _decode(_TEXT_EDITOR_ADAPTER, "text editor", TEXT_EDITOR_COMMANDS, arguments)


def decode_file_manager(arguments: Any):
    """
    Decode raw file manager arguments.

    Raises:
        UnsupportedCommandError: If command is missing or not in the vocabulary.
        InvalidArgumentsError: If the command's fields fail validation.
    """
    return _decode(_FILE_MANAGER_ADAPTER, "file manager", FILE_MANAGER_COMMANDS, arguments)

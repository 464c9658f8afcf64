"""Tool providers for CanvasFS agent integration."""

from canvasfs.tools.adapter import ToolAdapter
from canvasfs.tools.base import BaseToolProvider
from canvasfs.tools.commands import decode_file_manager, decode_text_editor
from canvasfs.tools.langchain_tools import (
    LangChainToolProvider,
    execute_langchain_tool,
    get_langchain_tools,
)
from canvasfs.tools.messages import format_tool_message
from canvasfs.tools.openai_tools import (
    OpenAIToolProvider,
    execute_openai_tool,
    get_openai_tools,
)

__all__ = [
    "BaseToolProvider",
    "ToolAdapter",
    "decode_text_editor",
    "decode_file_manager",
    "format_tool_message",
    # OpenAI
    "OpenAIToolProvider",
    "get_openai_tools",
    "execute_openai_tool",
    # LangChain
    "LangChainToolProvider",
    "get_langchain_tools",
    "execute_langchain_tool",
]

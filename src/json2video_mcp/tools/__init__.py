"""Tool layer for json2video render jobs and templates.

This module provides:
- ToolDispatcher: Routes tool calls to implementations
- ToolResult: Result dataclass for tool execution
- Tool exceptions for error handling
- Tool descriptors with JSON Schema inputs
"""

from __future__ import annotations

from json2video_mcp.tools.dispatcher import ToolDispatcher
from json2video_mcp.tools.exceptions import (
    MissingArgumentError,
    MissingCredentialError,
    ResourceNotFoundError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
    UpstreamError,
)
from json2video_mcp.tools.result import ToolResult, check_upstream
from json2video_mcp.tools.schemas import get_all_tool_schemas

__all__ = [
    "ToolDispatcher",
    "ToolResult",
    "ToolError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolExecutionError",
    "MissingCredentialError",
    "MissingArgumentError",
    "UpstreamError",
    "ResourceNotFoundError",
    "check_upstream",
    "get_all_tool_schemas",
]

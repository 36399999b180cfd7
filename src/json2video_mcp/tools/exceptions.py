"""Tool-specific exceptions."""

from __future__ import annotations

from typing import Any


class ToolError(Exception):
    """Base exception for tool operations."""

    code = "TOOL_ERROR"


class ToolNotFoundError(ToolError):
    """Tool name not recognized."""

    code = "INVALID_OPERATION"

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolValidationError(ToolError):
    """Tool arguments failed validation."""

    code = "INVALID_ARGUMENTS"


class MissingCredentialError(ToolValidationError):
    """No API key given in the arguments or configured for the process."""

    code = "MISSING_CREDENTIAL"

    def __init__(self) -> None:
        super().__init__(
            "API key is required (either in arguments or as environment "
            "variable JSON2VIDEO_API_KEY)"
        )


class MissingArgumentError(ToolValidationError):
    """A required tool argument is absent or empty."""

    code = "MISSING_ARGUMENT"

    def __init__(self, argument: str, tool_name: str | None = None) -> None:
        self.argument = argument
        self.tool_name = tool_name
        suffix = f" for {tool_name}" if tool_name else ""
        super().__init__(f"Missing required argument '{argument}'{suffix}")


class ToolExecutionError(ToolError):
    """Tool execution failed."""

    code = "EXECUTION_ERROR"


class UpstreamError(ToolExecutionError):
    """The json2video API failed or answered without a success flag."""

    code = "UPSTREAM_ERROR"

    def __init__(self, message: str, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)


class ResourceNotFoundError(ToolError):
    """A lookup by name found no exact match."""

    code = "NOT_FOUND"

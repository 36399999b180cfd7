"""Tool dispatcher for routing tool calls to implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from json2video_mcp.api_client import ApiClientError
from json2video_mcp.tools.exceptions import (
    MissingCredentialError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
    UpstreamError,
)
from json2video_mcp.tools.formatter import summarize_arguments
from json2video_mcp.tools.result import ToolResult
from json2video_mcp.tools.schemas import get_all_tool_schemas
from json2video_mcp.tools.template_tools import TemplateTools
from json2video_mcp.tools.validation import is_blank
from json2video_mcp.tools.video_tools import VideoTools

LOGGER = logging.getLogger(__name__)

if TYPE_CHECKING:
    from json2video_mcp.api_client import Json2VideoClient


class ToolDispatcher:
    """Route tool calls to implementations."""

    def __init__(self, client: Json2VideoClient, default_api_key: str | None = None) -> None:
        """
        Initialize dispatcher with an API client.

        Args:
            client: Json2VideoClient used for every upstream call.
            default_api_key: Process-wide key used when a call carries none.
        """
        self._default_api_key = default_api_key
        self._video_tools = VideoTools(client)
        self._template_tools = TemplateTools(client)

        self._handlers: dict[str, Callable[[dict, str], ToolResult]] = {
            "generate_video": self._video_tools.generate_video,
            "get_video_status": self._video_tools.get_video_status,
            "create_template": self._template_tools.create_template,
            "get_template": self._template_tools.get_template,
            "list_templates": self._template_tools.list_templates,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def dispatch(
        self,
        tool_name: str,
        arguments: Any = None,
        api_key: str | None = None,
    ) -> ToolResult:
        """
        Execute a tool call.

        Args:
            tool_name: One of the registered tool names.
            arguments: Tool arguments; may carry ``apiKey``.
            api_key: Explicit key, taking precedence over ``arguments["apiKey"]``
                and the configured default.

        Returns: ToolResult. Failures are returned, never raised.
        """
        args = {} if arguments is None else arguments
        LOGGER.info(
            "Tool call: %s args=%s",
            tool_name,
            summarize_arguments(args) if isinstance(args, dict) else repr(args),
        )

        handler = self._handlers.get(tool_name)
        try:
            if handler is None:
                raise ToolNotFoundError(tool_name)
            key = self.resolve_api_key(args if isinstance(args, dict) else {}, api_key)
            if not isinstance(args, dict):
                raise ToolValidationError(
                    f"Arguments for {tool_name} must be an object, got {type(args).__name__}"
                )
            result = handler(args, key)
        except ToolError as e:
            LOGGER.warning("Tool error: %s code=%s: %s", tool_name, e.code, e)
            return ToolResult.from_error(tool_name, e)
        except ApiClientError as e:
            LOGGER.warning("Tool error: %s code=%s: %s", tool_name, UpstreamError.code, e)
            upstream = {"status_code": e.status_code, "body": e.body} if e.body is not None else None
            return ToolResult.from_error(tool_name, UpstreamError(f"json2video API error: {e}", upstream))
        except Exception as e:
            LOGGER.exception("Tool exception: %s", tool_name)
            return ToolResult.from_error(tool_name, ToolExecutionError(str(e)))

        if result.success:
            LOGGER.debug("Tool success: %s", tool_name)
        else:
            LOGGER.warning("Tool error: %s code=%s", tool_name, result.error_code)
        return result

    def resolve_api_key(self, args: dict, api_key: str | None = None) -> str:
        """Pick the explicit key, then ``args['apiKey']``, then the default."""
        for candidate in (api_key, args.get("apiKey"), self._default_api_key):
            if isinstance(candidate, str) and not is_blank(candidate):
                return candidate
        raise MissingCredentialError()

    def get_tool_definitions(self) -> list[dict]:
        """Return tool descriptors."""
        return get_all_tool_schemas()

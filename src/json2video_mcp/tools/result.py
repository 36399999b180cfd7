"""Tool result dataclass."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from json2video_mcp.tools.exceptions import ToolError, UpstreamError


@dataclass
class ToolResult:
    """Result from a tool execution.

    Either a success carrying ``text`` (rendered for content blocks) and
    ``data`` (the structured payload), or a failure carrying ``error_code``,
    ``error`` and, for upstream failures, the raw ``upstream`` payload.
    """

    tool_name: str
    success: bool
    text: str = ""
    data: Any = None
    error_code: str | None = None
    error: str | None = None
    upstream: Any = None

    @classmethod
    def ok(cls, tool_name: str, text: str, data: Any = None) -> ToolResult:
        return cls(tool_name=tool_name, success=True, text=text, data=data)

    @classmethod
    def failure(
        cls,
        tool_name: str,
        code: str,
        message: str,
        upstream: Any = None,
    ) -> ToolResult:
        return cls(
            tool_name=tool_name,
            success=False,
            text=message,
            error_code=code,
            error=message,
            upstream=upstream,
        )

    @classmethod
    def from_error(cls, tool_name: str, exc: ToolError) -> ToolResult:
        """Build a failed result from a tool exception."""
        upstream = exc.payload if isinstance(exc, UpstreamError) else None
        return cls.failure(tool_name, exc.code, str(exc), upstream=upstream)

    def to_dict(self) -> dict:
        if self.success:
            return {"tool": self.tool_name, "success": True, "text": self.text, "data": self.data}
        payload = {
            "tool": self.tool_name,
            "success": False,
            "error": {"kind": self.error_code, "message": self.error},
        }
        if self.upstream is not None:
            payload["error"]["upstream"] = self.upstream
        return payload


def check_upstream(tool_name: str, payload: Any) -> ToolResult | None:
    """Return a failed result unless ``payload`` carries ``success: true``.

    Every handler runs the upstream document through here before reading it.
    """
    if isinstance(payload, dict) and payload.get("success"):
        return None
    message = f"json2video API error: {json.dumps(payload, ensure_ascii=False)}"
    return ToolResult.failure(tool_name, UpstreamError.code, message, upstream=payload)

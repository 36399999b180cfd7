"""Argument validation helpers."""

from __future__ import annotations

from typing import Any

from json2video_mcp.tools.exceptions import MissingArgumentError


def is_blank(value: Any) -> bool:
    """True for None, empty/whitespace strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def require(args: dict, name: str, tool_name: str | None = None) -> Any:
    """Return ``args[name]`` or raise MissingArgumentError if it is blank."""
    value = args.get(name)
    if is_blank(value):
        raise MissingArgumentError(name, tool_name)
    return value

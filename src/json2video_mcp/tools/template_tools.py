"""Template tool implementations."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from json2video_mcp.tools.exceptions import ResourceNotFoundError, UpstreamError
from json2video_mcp.tools.formatter import format_json, format_template_created
from json2video_mcp.tools.result import ToolResult, check_upstream
from json2video_mcp.tools.validation import is_blank, require

if TYPE_CHECKING:
    from json2video_mcp.api_client import Json2VideoClient

LOGGER = logging.getLogger(__name__)


def default_description(now: datetime | None = None) -> str:
    """Placeholder description stamped with the current UTC time."""
    now = now or datetime.now(timezone.utc)
    return f"Template created at {now.isoformat()}"


def _templates(tool_name: str, result: dict) -> tuple[list, ToolResult | None]:
    """Extract the template list; a missing list is empty, a non-list is an upstream error."""
    templates = result.get("templates")
    if templates is None:
        return [], None
    if not isinstance(templates, list):
        return [], ToolResult.failure(
            tool_name,
            UpstreamError.code,
            f"json2video API error: templates is not a list: {json.dumps(result, ensure_ascii=False)}",
            upstream=result,
        )
    return templates, None


class TemplateTools:
    """Template tool implementations."""

    def __init__(self, client: Json2VideoClient) -> None:
        self._client = client

    def create_template(self, args: dict, api_key: str) -> ToolResult:
        name = require(args, "name", "create_template")
        description = args.get("description")
        if is_blank(description):
            description = default_description()

        LOGGER.info("Creating template: %s", name)
        result = self._client.create_template(name, description, api_key)
        failure = check_upstream("create_template", result)
        if failure is not None:
            return failure
        return ToolResult.ok(
            "create_template",
            format_template_created(result.get("template")),
            data=result,
        )

    def get_template(self, args: dict, api_key: str) -> ToolResult:
        """Find a template by exact name among all templates.

        json2video has no lookup by name, so the full list is fetched and
        searched locally. The first exact match wins.
        """
        name = require(args, "name", "get_template")

        LOGGER.info("Looking up template: %s", name)
        result = self._client.list_templates(api_key)
        failure = check_upstream("get_template", result)
        if failure is not None:
            return failure

        templates, failure = _templates("get_template", result)
        if failure is not None:
            return failure

        for template in templates:
            if isinstance(template, dict) and template.get("name") == name:
                return ToolResult.ok("get_template", format_json(template), data=template)

        return ToolResult.from_error(
            "get_template",
            ResourceNotFoundError(f"Template '{name}' not found"),
        )

    def list_templates(self, args: dict, api_key: str) -> ToolResult:
        LOGGER.info("Listing all templates")
        result = self._client.list_templates(api_key)
        failure = check_upstream("list_templates", result)
        if failure is not None:
            return failure
        templates, failure = _templates("list_templates", result)
        if failure is not None:
            return failure
        return ToolResult.ok("list_templates", format_json(templates), data=templates)

"""Render job tool implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from json2video_mcp.tools.exceptions import ToolValidationError, UpstreamError
from json2video_mcp.tools.formatter import format_json, format_project_started
from json2video_mcp.tools.result import ToolResult, check_upstream
from json2video_mcp.tools.validation import require

if TYPE_CHECKING:
    from json2video_mcp.api_client import Json2VideoClient

LOGGER = logging.getLogger(__name__)


class VideoTools:
    """Render job tool implementations."""

    def __init__(self, client: Json2VideoClient) -> None:
        self._client = client

    def generate_video(self, args: dict, api_key: str) -> ToolResult:
        """Start a render job from a movie definition.

        The arguments are sent as the movie body with ``apiKey`` removed.
        """
        scenes = require(args, "scenes", "generate_video")
        if not isinstance(scenes, (list, dict)):
            raise ToolValidationError(
                f"Argument 'scenes' for generate_video must be an array or object, "
                f"got {type(scenes).__name__}"
            )
        movie = {key: value for key, value in args.items() if key != "apiKey"}

        LOGGER.info("Generating video with %d scene(s)", len(scenes))
        result = self._client.create_movie(movie, api_key)
        failure = check_upstream("generate_video", result)
        if failure is not None:
            return failure

        project = result.get("project")
        if not project:
            return ToolResult.failure(
                "generate_video",
                UpstreamError.code,
                f"json2video API error: response has no project id: {format_json(result)}",
                upstream=result,
            )
        return ToolResult.ok("generate_video", format_project_started(project), data=result)

    def get_video_status(self, args: dict, api_key: str) -> ToolResult:
        """Fetch the status document of a render job."""
        project = require(args, "project", "get_video_status")

        LOGGER.info("Getting video status for project: %s", project)
        result = self._client.get_movie(str(project), api_key)
        failure = check_upstream("get_video_status", result)
        if failure is not None:
            return failure
        return ToolResult.ok("get_video_status", format_json(result), data=result)

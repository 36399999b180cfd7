"""Tool descriptor definitions served by tools/list."""

from __future__ import annotations

import copy

API_KEY_PROPERTY: dict = {
    "type": "string",
    "description": (
        "json2video API key (optional, can also be set as environment "
        "variable JSON2VIDEO_API_KEY)"
    ),
}

GENERATE_VIDEO_SCHEMA: dict = {
    "name": "generate_video",
    "description": "Generate a video from a json2video movie definition.",
    "inputSchema": {
        "type": "object",
        "properties": {
            "apiKey": API_KEY_PROPERTY,
            "scenes": {
                "type": "array",
                "items": {"type": "object"},
                "description": "Scenes of the movie, each with its own elements",
            },
            "elements": {
                "type": "array",
                "items": {"type": "object"},
                "description": "Movie-level elements shown across all scenes",
            },
            "resolution": {
                "type": "string",
                "enum": [
                    "sd",
                    "hd",
                    "full-hd",
                    "squared",
                    "instagram-story",
                    "instagram-feed",
                    "twitter-landscape",
                    "twitter-portrait",
                    "custom",
                ],
                "description": "Output resolution preset",
            },
            "width": {
                "type": "integer",
                "description": "Width in pixels (resolution: custom)",
            },
            "height": {
                "type": "integer",
                "description": "Height in pixels (resolution: custom)",
            },
            "quality": {
                "type": "string",
                "enum": ["low", "medium", "high"],
                "description": "Rendering quality",
            },
            "template": {
                "type": "string",
                "description": "Template ID to render instead of inline scenes",
            },
            "variables": {
                "type": "object",
                "description": "Values for template variables",
            },
            "comment": {
                "type": "string",
                "description": "Free text stored with the movie",
            },
        },
        "required": ["scenes"],
    },
}

GET_VIDEO_STATUS_SCHEMA: dict = {
    "name": "get_video_status",
    "description": "Get the status or result of a generated video.",
    "inputSchema": {
        "type": "object",
        "properties": {
            "apiKey": API_KEY_PROPERTY,
            "project": {
                "type": "string",
                "description": "Project ID from video generation",
            },
        },
        "required": ["project"],
    },
}

CREATE_TEMPLATE_SCHEMA: dict = {
    "name": "create_template",
    "description": "Create a new template in json2video.",
    "inputSchema": {
        "type": "object",
        "properties": {
            "apiKey": API_KEY_PROPERTY,
            "name": {
                "type": "string",
                "description": "Name of the template",
            },
            "description": {
                "type": "string",
                "description": "Description of the template",
            },
        },
        "required": ["name"],
    },
}

GET_TEMPLATE_SCHEMA: dict = {
    "name": "get_template",
    "description": "Get template details from json2video.",
    "inputSchema": {
        "type": "object",
        "properties": {
            "apiKey": API_KEY_PROPERTY,
            "name": {
                "type": "string",
                "description": "Name of the template to search for",
            },
        },
        "required": ["name"],
    },
}

LIST_TEMPLATES_SCHEMA: dict = {
    "name": "list_templates",
    "description": "List all available templates from json2video.",
    "inputSchema": {
        "type": "object",
        "properties": {
            "apiKey": API_KEY_PROPERTY,
        },
    },
}

ALL_TOOL_SCHEMAS: list[dict] = [
    LIST_TEMPLATES_SCHEMA,
    GET_TEMPLATE_SCHEMA,
    CREATE_TEMPLATE_SCHEMA,
    GENERATE_VIDEO_SCHEMA,
    GET_VIDEO_STATUS_SCHEMA,
]


def get_all_tool_schemas() -> list[dict]:
    """Return all tool descriptors.

    Each descriptor has 'name', 'description' and a JSON Schema
    'inputSchema'. Copies are returned so callers may mutate them.

    Available tools:
        - list_templates: List all templates
        - get_template: Find a template by exact name
        - create_template: Create a template
        - generate_video: Start a render job
        - get_video_status: Poll a render job
    """
    return copy.deepcopy(ALL_TOOL_SCHEMAS)

"""Text formatting utilities for tool responses."""

from __future__ import annotations

import json
from typing import Any

# Upper bound for a single argument value in log summaries
SUMMARY_VALUE_LIMIT = 80

REDACTED_KEYS = frozenset({"apiKey", "api_key"})


def format_json(value: Any) -> str:
    """Pretty-print a JSON document with two-space indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def text_content(text: str) -> dict:
    """Wrap text in a content block."""
    return {"type": "text", "text": text}


def format_project_started(project: str) -> str:
    return f"Video generation started. Project ID: {project}"


def format_template_created(template: Any) -> str:
    return f"Template created successfully. Template ID: {template}"


def summarize_arguments(arguments: dict | None) -> str:
    """Summarize tool arguments for a log line.

    Credentials are masked and long values are cut to SUMMARY_VALUE_LIMIT.
    """
    if not arguments:
        return "{}"
    parts = []
    for key in sorted(arguments):
        if key in REDACTED_KEYS:
            parts.append(f"{key}=***")
            continue
        rendered = json.dumps(arguments[key], ensure_ascii=False, default=str)
        if len(rendered) > SUMMARY_VALUE_LIMIT:
            rendered = rendered[: SUMMARY_VALUE_LIMIT - 3] + "..."
        parts.append(f"{key}={rendered}")
    return "{" + ", ".join(parts) + "}"

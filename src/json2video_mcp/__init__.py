"""json2video tool server."""

__version__ = "1.3.0"

SERVER_NAME = "json2video-mcp"

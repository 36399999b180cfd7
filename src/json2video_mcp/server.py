"""Line-delimited JSON-RPC 2.0 tool server over stdin/stdout."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from . import SERVER_NAME, __version__
from .tools import ToolDispatcher, ToolResult
from .tools.formatter import text_content

LOGGER = logging.getLogger(__name__)

DEFAULT_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32004

# Tool error kind -> JSON-RPC error code
ERROR_CODES: Dict[str, int] = {
    "INVALID_OPERATION": METHOD_NOT_FOUND,
    "MISSING_CREDENTIAL": INVALID_PARAMS,
    "MISSING_ARGUMENT": INVALID_PARAMS,
    "INVALID_ARGUMENTS": INVALID_PARAMS,
    "UPSTREAM_ERROR": INTERNAL_ERROR,
    "EXECUTION_ERROR": INTERNAL_ERROR,
    "NOT_FOUND": RESOURCE_NOT_FOUND,
}

# Earlier protocol revisions named operations by short verbs
LEGACY_OPERATIONS: Dict[str, str] = {
    "generate": "generate_video",
    "get": "get_video_status",
}

LEGACY_UNKNOWN_ACTION = "Unknown action. Use 'generate' or 'get'."


def rpc_result(request_id: Any, result: Any) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def rpc_error(request_id: Any, code: int, message: str, data: Any = None) -> dict:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def tool_error(request_id: Any, result: ToolResult) -> dict:
    """Map a failed ToolResult onto a JSON-RPC error object."""
    data: Dict[str, Any] = {"kind": result.error_code}
    if result.upstream is not None:
        data["upstream"] = result.upstream
    code = ERROR_CODES.get(result.error_code or "", INTERNAL_ERROR)
    return rpc_error(request_id, code, result.error or "Tool call failed", data)


class StdioServer:
    """Reads one JSON message per line and writes one response per request.

    Three message shapes are accepted:
    - JSON-RPC 2.0 tool protocol (initialize, ping, tools/list, tools/call)
    - JSON-RPC 2.0 short methods ``generate``/``get`` answered with the raw
      upstream document
    - legacy ``{"action": ..., "data": ...}`` lines without an envelope

    A request without an ``id`` is still answered, with ``"id": null``.
    Methods under ``notifications/`` are never answered.
    """

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def serve(self) -> None:
        """Process lines until EOF or interrupt."""
        LOGGER.info("%s %s running on stdio", SERVER_NAME, __version__)
        try:
            for line in self._stdin:
                response = self.handle_line(line)
                if response is not None:
                    self._write(response)
        except KeyboardInterrupt:
            LOGGER.info("Interrupted; shutting down")
        else:
            LOGGER.info("Input closed; shutting down")

    def handle_line(self, line: str) -> Optional[dict]:
        """Return the response for one input line, or None if none is due."""
        line = line.strip()
        if not line:
            return None
        try:
            message = json.loads(line)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Unparseable message: %s", exc)
            return rpc_error(None, PARSE_ERROR, f"Parse error: {exc}")

        try:
            return self.handle_message(message)
        except Exception as exc:
            LOGGER.exception("Failed to process message")
            request_id = message.get("id") if isinstance(message, dict) else None
            return rpc_error(request_id, INTERNAL_ERROR, f"Failed to process message: {exc}")

    def handle_message(self, message: Any) -> Optional[dict]:
        if not isinstance(message, dict):
            return rpc_error(None, INVALID_REQUEST, "Invalid request: expected a JSON object")
        if "jsonrpc" not in message and "action" in message:
            return self._handle_legacy(message)

        request_id = message.get("id")
        method = message.get("method")
        if not isinstance(method, str) or not method:
            return rpc_error(request_id, INVALID_REQUEST, "Invalid request: missing method")
        if method.startswith("notifications/"):
            LOGGER.debug("Notification: %s", method)
            return None

        params = message.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            return rpc_error(request_id, INVALID_PARAMS, "Invalid params: expected an object")

        if method == "initialize":
            return rpc_result(request_id, self._initialize(params))
        if method == "ping":
            return rpc_result(request_id, {})
        if method == "tools/list":
            return rpc_result(request_id, {"tools": self.dispatcher.get_tool_definitions()})
        if method == "tools/call":
            return self._call_tool(request_id, params)
        if method in LEGACY_OPERATIONS:
            result = self.dispatcher.dispatch(
                LEGACY_OPERATIONS[method],
                params,
                api_key=message.get("apiKey"),
            )
            if not result.success:
                return tool_error(request_id, result)
            return rpc_result(request_id, result.data)

        LOGGER.warning("Unknown method: %s", method)
        return rpc_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    def _initialize(self, params: dict) -> dict:
        return {
            "protocolVersion": params.get("protocolVersion") or DEFAULT_PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def _call_tool(self, request_id: Any, params: dict) -> dict:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            return rpc_error(request_id, INVALID_PARAMS, "Invalid params: missing tool name")

        result = self.dispatcher.dispatch(name, params.get("arguments"))
        if not result.success:
            return tool_error(request_id, result)
        return rpc_result(request_id, {"content": [text_content(result.text)]})

    def _handle_legacy(self, message: dict) -> dict:
        action = message.get("action")
        operation = LEGACY_OPERATIONS.get(action) if isinstance(action, str) else None
        if operation is None:
            return {"error": LEGACY_UNKNOWN_ACTION}
        result = self.dispatcher.dispatch(
            operation,
            message.get("data"),
            api_key=message.get("apiKey"),
        )
        if not result.success:
            return {"error": result.error}
        return result.data

    def _write(self, response: dict) -> None:
        self._stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
        self._stdout.flush()

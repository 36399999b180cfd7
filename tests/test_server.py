"""Tests for the stdio JSON-RPC server."""

import io
import json
from unittest.mock import MagicMock

import pytest

from json2video_mcp import SERVER_NAME, __version__
from json2video_mcp.server import DEFAULT_PROTOCOL_VERSION, StdioServer

from conftest import make_response


@pytest.fixture
def server(dispatcher) -> StdioServer:
    return StdioServer(dispatcher, stdin=io.StringIO(), stdout=io.StringIO())


def rpc(method, params=None, request_id=1) -> str:
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return json.dumps(message)


class TestProtocol:
    def test_initialize(self, server):
        response = server.handle_line(rpc("initialize", {"protocolVersion": "2025-03-26"}))
        assert response["id"] == 1
        result = response["result"]
        assert result["protocolVersion"] == "2025-03-26"
        assert result["capabilities"] == {"tools": {}}
        assert result["serverInfo"] == {"name": SERVER_NAME, "version": __version__}

    def test_initialize_default_version(self, server):
        response = server.handle_line(rpc("initialize"))
        assert response["result"]["protocolVersion"] == DEFAULT_PROTOCOL_VERSION

    def test_ping(self, server):
        assert server.handle_line(rpc("ping", request_id="a")) == {"jsonrpc": "2.0", "id": "a", "result": {}}

    def test_notification_gets_no_response(self, server):
        line = json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert server.handle_line(line) is None

    def test_blank_line_ignored(self, server):
        assert server.handle_line("   \n") is None

    def test_tools_list(self, server):
        response = server.handle_line(rpc("tools/list"))
        names = {tool["name"] for tool in response["result"]["tools"]}
        assert names == {
            "generate_video",
            "get_video_status",
            "create_template",
            "get_template",
            "list_templates",
        }

    def test_parse_error(self, server):
        response = server.handle_line("{not json")
        assert response["id"] is None
        assert response["error"]["code"] == -32700

    def test_non_object_message(self, server):
        assert server.handle_line("[1, 2]")["error"]["code"] == -32600

    def test_missing_method(self, server):
        response = server.handle_line(json.dumps({"jsonrpc": "2.0", "id": 4}))
        assert response["id"] == 4
        assert response["error"]["code"] == -32600

    def test_unknown_method(self, server):
        response = server.handle_line(rpc("resources/list"))
        assert response["error"]["code"] == -32601

    def test_invalid_params(self, server):
        response = server.handle_line(rpc("tools/call", ["list_templates"]))
        assert response["error"]["code"] == -32602

    def test_missing_id_answered_with_null(self, server, session):
        session.request.return_value = make_response({"success": True, "templates": []})
        line = json.dumps({"jsonrpc": "2.0", "method": "tools/call", "params": {"name": "list_templates"}})
        response = server.handle_line(line)
        assert response["id"] is None
        assert "result" in response


class TestToolsCall:
    def test_success_wraps_text_content(self, server, session):
        payload = {"success": True, "status": "done", "project": "abc123"}
        session.request.return_value = make_response(payload)

        response = server.handle_line(
            rpc("tools/call", {"name": "get_video_status", "arguments": {"project": "abc123"}}, request_id=7)
        )

        assert response["id"] == 7
        content = response["result"]["content"]
        assert len(content) == 1
        assert content[0]["type"] == "text"
        assert json.loads(content[0]["text"]) == payload

    def test_unknown_tool(self, server, session):
        response = server.handle_line(rpc("tools/call", {"name": "delete_everything"}))
        assert response["error"]["code"] == -32601
        assert response["error"]["data"] == {"kind": "INVALID_OPERATION"}
        session.request.assert_not_called()

    def test_missing_tool_name(self, server):
        assert server.handle_line(rpc("tools/call", {}))["error"]["code"] == -32602

    def test_missing_argument(self, server):
        response = server.handle_line(rpc("tools/call", {"name": "get_template", "arguments": {}}))
        assert response["error"]["code"] == -32602
        assert response["error"]["data"]["kind"] == "MISSING_ARGUMENT"

    def test_upstream_error_carries_payload(self, server, session):
        payload = {"success": False, "message": "not found"}
        session.request.return_value = make_response(payload)

        response = server.handle_line(
            rpc("tools/call", {"name": "get_video_status", "arguments": {"project": "x"}})
        )

        assert response["error"]["code"] == -32603
        assert response["error"]["data"] == {"kind": "UPSTREAM_ERROR", "upstream": payload}

    def test_not_found(self, server, session):
        session.request.return_value = make_response({"success": True, "templates": []})
        response = server.handle_line(
            rpc("tools/call", {"name": "get_template", "arguments": {"name": "promo"}})
        )
        assert response["error"]["code"] == -32004
        assert response["error"]["data"]["kind"] == "NOT_FOUND"

    def test_missing_credential(self, keyless_dispatcher, session):
        server = StdioServer(keyless_dispatcher, stdin=io.StringIO(), stdout=io.StringIO())
        response = server.handle_line(rpc("tools/call", {"name": "list_templates"}))
        assert response["error"]["code"] == -32602
        assert response["error"]["data"]["kind"] == "MISSING_CREDENTIAL"
        session.request.assert_not_called()


class TestShortMethods:
    def test_generate_returns_raw_document(self, server, session):
        session.request.return_value = make_response({"success": True, "project": "p1"})
        response = server.handle_line(rpc("generate", {"scenes": [{}]}))
        assert response["result"] == {"success": True, "project": "p1"}

    def test_get_uses_top_level_api_key(self, keyless_dispatcher, session):
        server = StdioServer(keyless_dispatcher, stdin=io.StringIO(), stdout=io.StringIO())
        session.request.return_value = make_response({"success": True, "project": "p1"})
        message = {"jsonrpc": "2.0", "id": 2, "method": "get", "params": {"project": "p1"}, "apiKey": "msg-key"}

        response = server.handle_line(json.dumps(message))

        assert response["result"]["project"] == "p1"
        assert session.request.call_args.kwargs["headers"]["x-api-key"] == "msg-key"

    def test_get_without_project(self, server):
        response = server.handle_line(rpc("get", {}))
        assert response["error"]["data"]["kind"] == "MISSING_ARGUMENT"


class TestLegacyActions:
    def test_generate(self, server, session):
        session.request.return_value = make_response({"success": True, "project": "p1"})
        response = server.handle_line(json.dumps({"action": "generate", "data": {"scenes": [{}]}}))
        assert response == {"success": True, "project": "p1"}

    def test_get_missing_project(self, server):
        response = server.handle_line(json.dumps({"action": "get", "data": {}}))
        assert "error" in response
        assert "project" in response["error"]

    def test_unknown_action(self, server):
        response = server.handle_line(json.dumps({"action": "delete"}))
        assert response == {"error": "Unknown action. Use 'generate' or 'get'."}

    @pytest.mark.parametrize("action", [["generate"], {"a": 1}, 3, None])
    def test_non_string_action(self, server, session, action):
        response = server.handle_line(json.dumps({"action": action}))
        assert response == {"error": "Unknown action. Use 'generate' or 'get'."}
        session.request.assert_not_called()

    def test_upstream_failure_is_error_message(self, server, session):
        session.request.return_value = make_response({"success": False, "message": "quota"})
        response = server.handle_line(json.dumps({"action": "get", "data": {"project": "p"}}))
        assert "quota" in response["error"]


class TestServeLoop:
    def test_one_response_per_request(self, dispatcher, session):
        session.request.return_value = make_response({"success": True, "templates": []})
        lines = [
            rpc("initialize", request_id=1),
            json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
            "",
            "garbage",
            rpc("tools/call", {"name": "list_templates"}, request_id=2),
            rpc("tools/call", {"name": "nope"}, request_id=3),
        ]
        stdout = io.StringIO()
        server = StdioServer(dispatcher, stdin=io.StringIO("\n".join(lines) + "\n"), stdout=stdout)

        server.serve()

        responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
        assert [r["id"] for r in responses] == [1, None, 2, 3]
        assert "error" in responses[1]
        assert "result" in responses[2]
        assert "error" in responses[3]

    def test_interrupt_stops_cleanly(self, dispatcher):
        stdin = MagicMock()
        stdin.__iter__.side_effect = KeyboardInterrupt
        stdout = io.StringIO()

        StdioServer(dispatcher, stdin=stdin, stdout=stdout).serve()

        assert stdout.getvalue() == ""

    def test_handler_crash_does_not_stop_loop(self, dispatcher, session):
        stdout = io.StringIO()
        lines = "\n".join([rpc("ping", request_id=1), rpc("ping", request_id=2)]) + "\n"
        server = StdioServer(dispatcher, stdin=io.StringIO(lines), stdout=stdout)
        original = server.handle_message

        def flaky(message):
            if message["id"] == 1:
                raise RuntimeError("boom")
            return original(message)

        server.handle_message = flaky
        server.serve()

        responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
        assert responses[0]["error"]["code"] == -32603
        assert responses[0]["id"] == 1
        assert responses[1] == {"jsonrpc": "2.0", "id": 2, "result": {}}

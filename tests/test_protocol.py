#!/usr/bin/env python3
"""Tests for JSON-RPC routing in MCPProtocolHandler."""

import asyncio

import orjson
import pytest

from profile_mcp_server.config import ServerSettings
from profile_mcp_server.context import RequestContext
from profile_mcp_server.errors import InvalidInputError
from profile_mcp_server.protocol import MCPProtocolHandler, create_error_response
from profile_mcp_server.registry import CapabilityRegistry
from profile_mcp_server.types import ServerInfo, ToolHandler
from profile_mcp_server.variants import build_registry

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_handler(variant: str = "enhanced") -> MCPProtocolHandler:
    registry = build_registry(variant, ServerSettings(variant=variant))
    return MCPProtocolHandler(ServerInfo(name="test-server", version="9.9.9"), registry)


def _make_custom_handler(*tools: ToolHandler) -> MCPProtocolHandler:
    return MCPProtocolHandler(ServerInfo(name="custom", version="0.1"), CapabilityRegistry(tools))


def _request(method: str, params=None, msg_id=1) -> dict:
    message = {"jsonrpc": "2.0", "id": msg_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def _call(name: str, arguments=None, msg_id=1) -> dict:
    params = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return _request("tools/call", params, msg_id)


@pytest.fixture
def handler():
    return _make_handler()


class TestInitialize:
    @pytest.mark.asyncio
    async def test_initialize_result(self, handler):
        response = await handler.handle_request(
            _request("initialize", {"protocolVersion": "2099-01-01", "clientInfo": {"name": "c"}})
        )
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["capabilities"] == {"tools": {}, "resources": {}}
        assert result["serverInfo"] == {"name": "test-server", "version": "9.9.9"}

    @pytest.mark.asyncio
    async def test_initialize_without_params(self, handler):
        response = await handler.handle_request(_request("initialize"))
        assert "result" in response

    @pytest.mark.asyncio
    async def test_initialized_notification_has_no_response(self, handler):
        assert await handler.handle_request({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None


class TestEnvelope:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("msg_id", ["abc", 7, 0, -1, None, "1"])
    async def test_id_echoed_with_type(self, handler, msg_id):
        response = await handler.handle_request(_request("tools/list", msg_id=msg_id))
        assert response["id"] == msg_id
        assert type(response["id"]) is type(msg_id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "message",
        [
            _request("initialize"),
            _request("tools/list"),
            _request("resources/list"),
            _call("echo", {"text": "hi"}),
            _call("echo", {}),
            _call("nope"),
            _request("resources/read", {"uri": "server://info"}),
            _request("resources/read", {"uri": "nope://x"}),
            _request("bogus/method"),
            {"jsonrpc": "2.0", "id": 5},
        ],
    )
    async def test_exactly_one_of_result_or_error(self, handler, message):
        response = await handler.handle_request(message)
        assert response["jsonrpc"] == "2.0"
        assert ("result" in response) != ("error" in response)

    @pytest.mark.asyncio
    async def test_unknown_method(self, handler):
        response = await handler.handle_request(_request("prompts/list"))
        assert response["error"] == {"code": -32601, "message": "Method not found: prompts/list"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [[1, 2], "hello", 42, None])
    async def test_non_object_message(self, handler, message):
        response = await handler.handle_request(message)
        assert response["id"] is None
        assert response["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_missing_method_keeps_id(self, handler):
        response = await handler.handle_request({"jsonrpc": "2.0", "id": 3})
        assert response["id"] == 3
        assert response["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_non_string_method(self, handler):
        response = await handler.handle_request({"jsonrpc": "2.0", "id": 4, "method": 12})
        assert response["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_notifications_never_answered(self, handler):
        assert await handler.handle_request({"jsonrpc": "2.0", "method": "tools/list"}) is None
        assert await handler.handle_request({"jsonrpc": "2.0", "method": "unknown/thing"}) is None
        assert await handler.handle_request({"jsonrpc": "2.0"}) is None

    def test_create_error_response(self):
        assert create_error_response(None, -32700, "Parse error", "bad") == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32700, "message": "Parse error", "data": "bad"},
        }


class TestListing:
    @pytest.mark.asyncio
    async def test_tools_list_matches_registry(self, handler):
        response = await handler.handle_request(_request("tools/list"))
        names = [tool["name"] for tool in response["result"]["tools"]]
        assert names == handler.registry.tool_names
        for tool in response["result"]["tools"]:
            assert set(tool) == {"name", "description", "inputSchema"}

    @pytest.mark.asyncio
    async def test_resources_list_matches_registry(self, handler):
        response = await handler.handle_request(_request("resources/list"))
        uris = [resource["uri"] for resource in response["result"]["resources"]]
        assert uris == handler.registry.resource_uris
        for resource in response["result"]["resources"]:
            assert set(resource) == {"uri", "mimeType", "name", "description"}


class TestToolsCall:
    @pytest.mark.asyncio
    async def test_echo(self, handler):
        response = await handler.handle_request(_call("echo", {"text": "hello"}))
        assert response["result"] == {"content": [{"type": "text", "text": "Echo: hello"}]}

    @pytest.mark.asyncio
    async def test_calculate(self, handler):
        response = await handler.handle_request(_call("calculate", {"expression": "2 + 3 * 4"}))
        assert response["result"]["content"][0]["text"] == "2 + 3 * 4 = 14"

    @pytest.mark.asyncio
    async def test_arguments_default_to_empty(self, handler):
        response = await handler.handle_request(_call("get_current_time"))
        assert response["result"]["content"][0]["text"].startswith("Current time: ")

    @pytest.mark.asyncio
    async def test_unknown_tool_suggests(self, handler):
        response = await handler.handle_request(_call("ecoh", {"text": "x"}))
        assert response["error"]["code"] == -32601
        assert "Did you mean 'echo'?" in response["error"]["message"]

    @pytest.mark.asyncio
    async def test_missing_tool_name(self, handler):
        response = await handler.handle_request(_request("tools/call", {"arguments": {}}))
        assert response["error"]["code"] == -32601

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [["a"], "text", 5])
    async def test_non_object_arguments(self, handler, arguments):
        response = await handler.handle_request(_call("echo", arguments))
        assert response["error"]["code"] == -32602

    @pytest.mark.asyncio
    async def test_non_object_params(self, handler):
        response = await handler.handle_request(_request("tools/call", ["echo"]))
        assert response["error"]["code"] == -32602

    @pytest.mark.asyncio
    async def test_missing_argument_failure(self, handler):
        response = await handler.handle_request(_call("echo", {}))
        error = response["error"]
        assert error["code"] == -32603
        assert error["message"] == "Tool 'echo' failed (MissingArgument)"
        assert "'text'" in error["data"]

    @pytest.mark.asyncio
    async def test_invalid_input_failure(self, handler):
        response = await handler.handle_request(_call("calculate", {"expression": "1/0"}))
        assert response["error"]["message"] == "Tool 'calculate' failed (InvalidInput)"
        assert response["error"]["data"] == "Division by zero"

    @pytest.mark.asyncio
    async def test_rejected_expression(self, handler):
        response = await handler.handle_request(_call("calculate", {"expression": "__proto__"}))
        assert response["error"]["code"] == -32603
        assert "Invalid characters" in response["error"]["data"]

    @pytest.mark.asyncio
    async def test_structured_content(self, handler):
        response = await handler.handle_request(_call("get_profile", {}))
        result = response["result"]
        assert result["structuredContent"]["userData"]["id"] == "EMP001"
        assert [block["type"] for block in result["content"]] == ["text", "resource"]

    @pytest.mark.asyncio
    async def test_numeric_profile_id_serves_default(self, handler):
        response = await handler.handle_request(_call("get_profile", {"profileId": 42}))
        result = response["result"]
        assert result["structuredContent"]["userData"]["id"] == "EMP001"
        assert "Profile '42' was not found" in result["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_echo_numeric_text(self, handler):
        response = await handler.handle_request(_call("echo", {"text": 5}))
        assert response["result"]["content"][0]["text"] == "Echo: 5"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_converted(self):
        def broken(arguments, context):
            raise RuntimeError("kaboom")

        handler = _make_custom_handler(ToolHandler.from_function(broken, name="broken"))
        response = await handler.handle_request(_call("broken", {}, msg_id="x"))
        assert response["id"] == "x"
        assert response["error"] == {
            "code": -32603,
            "message": "Tool 'broken' failed (InternalError)",
            "data": "RuntimeError: kaboom",
        }

    @pytest.mark.asyncio
    async def test_failure_after_partial_work_yields_error_only(self):
        progress = []

        async def partial(arguments, context):
            progress.append("started")
            raise InvalidInputError("gave up halfway")

        handler = _make_custom_handler(ToolHandler.from_function(partial, name="partial"))
        response = await handler.handle_request(_call("partial", {}))
        assert progress == ["started"]
        assert "result" not in response
        assert response["error"]["data"] == "gave up halfway"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def cancelled(arguments, context):
            raise asyncio.CancelledError()

        handler = _make_custom_handler(ToolHandler.from_function(cancelled, name="cancelled"))
        with pytest.raises(asyncio.CancelledError):
            await handler.handle_request(_call("cancelled", {}))

    @pytest.mark.asyncio
    async def test_context_reaches_tool(self):
        def whoami(arguments, context):
            return context.access_token or "anonymous"

        handler = _make_custom_handler(ToolHandler.from_function(whoami, name="whoami"))
        authed = await handler.handle_request(_call("whoami", {}), RequestContext(access_token="t-1"))
        anonymous = await handler.handle_request(_call("whoami", {}))
        assert authed["result"]["content"][0]["text"] == "t-1"
        assert anonymous["result"]["content"][0]["text"] == "anonymous"


class TestResourcesRead:
    @pytest.mark.asyncio
    async def test_read_server_info(self, handler):
        response = await handler.handle_request(_request("resources/read", {"uri": "server://info"}))
        [contents] = response["result"]["contents"]
        assert contents["uri"] == "server://info"
        assert contents["mimeType"] == "application/json"
        assert orjson.loads(contents["text"])["name"] == "profile-mcp-server"

    @pytest.mark.asyncio
    async def test_read_profile_html(self, handler):
        response = await handler.handle_request(_request("resources/read", {"uri": "profile://html"}))
        [contents] = response["result"]["contents"]
        assert contents["mimeType"] == "text/html"
        assert "Sarah Johnson" in contents["text"]

    @pytest.mark.asyncio
    async def test_unknown_resource(self, handler):
        response = await handler.handle_request(_request("resources/read", {"uri": "nope://x"}))
        assert response["error"] == {"code": -32602, "message": "Unknown resource: nope://x"}

    @pytest.mark.asyncio
    async def test_missing_uri(self, handler):
        response = await handler.handle_request(_request("resources/read", {}))
        assert response["error"]["code"] == -32602

    @pytest.mark.asyncio
    async def test_resource_failure(self):
        from profile_mcp_server.types import ResourceHandler

        def broken(context):
            raise ValueError("no data")

        registry = CapabilityRegistry([], [ResourceHandler.from_function("x://broken", broken)])
        handler = MCPProtocolHandler(ServerInfo(name="s", version="1"), registry)
        response = await handler.handle_request(_request("resources/read", {"uri": "x://broken"}))
        assert response["error"]["code"] == -32603
        assert response["error"]["message"] == "Resource 'x://broken' failed (InternalError)"

#!/usr/bin/env python3
"""Tests for the HTTP transport (Starlette app)."""

import asyncio
import random

import httpx
import pytest
from starlette.testclient import TestClient

from profile_mcp_server.config import ServerSettings
from profile_mcp_server.core import ProfileMCPServer
from profile_mcp_server.profiles import UserProfileClient

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

API_URL = "https://profiles.example.com/api/me"


def _token_echo(request: httpx.Request) -> httpx.Response:
    token = request.headers["authorization"].removeprefix("Bearer ")
    return httpx.Response(200, json={"name": f"user-{token}"})


def _server(upstream=_token_echo, **settings) -> ProfileMCPServer:
    client = UserProfileClient(API_URL, timeout=1.0, transport=httpx.MockTransport(upstream))
    return ProfileMCPServer(ServerSettings(**settings), profile_client=client)


def _call(name: str, arguments=None, msg_id=1) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": msg_id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments or {}},
    }


@pytest.fixture
def client():
    return TestClient(_server().create_app())


class TestMCPEndpoint:
    def test_tools_list(self, client):
        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.headers["cache-control"] == "no-cache"
        names = [tool["name"] for tool in response.json()["result"]["tools"]]
        assert "get_user_profile" in names
        assert "echo" in names

    def test_tool_error_is_http_200(self, client):
        response = client.post("/mcp", json=_call("echo"))
        assert response.status_code == 200
        assert response.json()["error"]["code"] == -32603

    @pytest.mark.parametrize("body", [b"{nope", b"", b"   "])
    def test_parse_error(self, client, body):
        response = client.post("/mcp", content=body, headers={"content-type": "application/json"})
        assert response.status_code == 400
        data = response.json()
        assert data["id"] is None
        assert data["error"]["code"] == -32700
        assert data["error"]["message"] == "Parse error"

    def test_non_object_body(self, client):
        response = client.post("/mcp", json=[1, 2])
        assert response.status_code == 200
        assert response.json()["error"]["code"] == -32600

    def test_notification_is_accepted(self, client):
        response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert response.status_code == 202
        assert response.content == b""

    def test_get_not_allowed(self, client):
        assert client.get("/mcp").status_code == 405

    def test_user_profile_with_token(self, client):
        response = client.post("/mcp", json=_call("get_user_profile"), headers={"Authorization": "Bearer abc"})
        result = response.json()["result"]
        assert result["content"][0]["text"] == "User profile received: user-abc"
        assert result["structuredContent"] == {"userData": {"name": "user-abc"}}

    def test_lowercase_bearer_prefix(self, client):
        response = client.post("/mcp", json=_call("get_user_profile"), headers={"Authorization": "bearer xyz"})
        assert response.json()["result"]["content"][0]["text"] == "User profile received: user-xyz"

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Basic abc"}, {"Authorization": "Bearer "}])
    def test_user_profile_without_token(self, client, headers):
        response = client.post("/mcp", json=_call("get_user_profile"), headers=headers)
        error = response.json()["error"]
        assert error["message"] == "Tool 'get_user_profile' failed (NotAuthenticated)"
        assert "Authentication required" in error["data"]

    def test_token_does_not_leak_to_next_request(self, client):
        client.post("/mcp", json=_call("get_user_profile"), headers={"Authorization": "Bearer first"})
        response = client.post("/mcp", json=_call("get_user_profile"))
        assert "NotAuthenticated" in response.json()["error"]["message"]

    def test_upstream_timeout(self):
        def slow(request):
            raise httpx.ReadTimeout("too slow", request=request)

        client = TestClient(_server(upstream=slow).create_app())
        response = client.post("/mcp", json=_call("get_user_profile"), headers={"Authorization": "Bearer t"})
        error = response.json()["error"]
        assert error["message"] == "Tool 'get_user_profile' failed (UpstreamTimeout)"

    def test_upstream_status(self):
        def denied(request):
            return httpx.Response(403)

        client = TestClient(_server(upstream=denied).create_app())
        response = client.post("/mcp", json=_call("get_user_profile"), headers={"Authorization": "Bearer t"})
        error = response.json()["error"]
        assert error["message"] == "Tool 'get_user_profile' failed (UpstreamFailure)"
        assert error["data"] == "API request failed: 403"


class TestConcurrentRequests:
    @pytest.mark.asyncio
    async def test_tokens_are_isolated(self):
        async def jittery(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(random.uniform(0, 0.02))
            return _token_echo(request)

        app = _server(upstream=jittery).create_app()
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:

            async def call(i: int) -> tuple[int, dict]:
                # odd ids go out without credentials
                headers = {"Authorization": f"Bearer t{i}"} if i % 2 == 0 else {}
                response = await client.post("/mcp", json=_call("get_user_profile", msg_id=i), headers=headers)
                return i, response.json()

            results = await asyncio.gather(*(call(i) for i in range(30)))

        for i, body in results:
            assert body["id"] == i
            if i % 2 == 0:
                assert body["result"]["structuredContent"]["userData"]["name"] == f"user-t{i}"
            else:
                assert "result" not in body
                assert "NotAuthenticated" in body["error"]["message"]


class TestAuxiliaryEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["server"] == "profile-mcp-server"
        assert data["timestamp"].endswith("Z")
        assert data["profiles"] == 2

    def test_health_without_profiles(self):
        data = TestClient(_server(variant="basic").create_app()).get("/health").json()
        assert data["status"] == "healthy"
        assert "profiles" not in data

    def test_root(self, client):
        data = client.get("/").json()
        assert data["variant"] == "enhanced"
        assert data["protocol"] == "MCP 2024-11-05"
        assert data["endpoints"]["mcp"] == {
            "path": "/mcp",
            "method": "POST",
            "description": "MCP protocol endpoint for JSON-RPC requests",
        }
        assert "echo" in data["tools"]
        assert "profile://html" in data["resources"]
        assert data["endpoints"]["profile"]["path"] == "/profile/{profile_id}"

    def test_root_basic_has_no_profile_page(self):
        data = TestClient(_server(variant="basic").create_app()).get("/").json()
        assert "profile" not in data["endpoints"]

    def test_oauth_metadata_not_configured(self, client):
        response = client.get("/.well-known/oauth-protected-resource")
        assert response.status_code == 503
        assert response.json()["error"] == "server_misconfig"
        assert response.json()["message"] == "Set AUTH0_ISSUER_BASE_URL and AUTH0_AUDIENCE env vars"

    def test_oauth_metadata(self):
        server = _server(auth_issuer_url="https://tenant.auth0.com/", auth_audience="https://api.example.com")
        response = TestClient(server.create_app()).get("/.well-known/oauth-protected-resource")
        assert response.status_code == 200
        assert response.json() == {
            "resource": "https://api.example.com",
            "authorization_servers": ["https://tenant.auth0.com/"],
            "scopes_supported": ["openid", "profile", "email"],
            "bearer_methods_supported": ["header"],
        }

    def test_unknown_path(self, client):
        assert client.get("/nope").status_code == 404


class TestProfilePage:
    def test_default_profile(self, client):
        response = client.get("/profile")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["cache-control"] == "no-cache"
        assert "<title>Employee Profile - Sarah Johnson</title>" in response.text

    def test_named_profile(self, client):
        response = client.get("/profile/admin")
        assert response.status_code == 200
        assert "<title>Employee Profile - Michael Chen</title>" in response.text

    def test_unknown_profile_falls_back(self, client):
        response = client.get("/profile/ghost")
        assert response.status_code == 200
        assert "Sarah Johnson" in response.text

    def test_configured_default(self):
        client = TestClient(_server(default_profile_id="admin").create_app())
        assert "Michael Chen" in client.get("/profile").text

    def test_not_mounted_for_basic(self):
        client = TestClient(_server(variant="basic").create_app())
        assert client.get("/profile").status_code == 404
        assert client.get("/profile/admin").status_code == 404

    def test_post_not_allowed(self, client):
        assert client.post("/profile").status_code == 405


class TestCors:
    def _preflight(self, client, origin):
        return client.options(
            "/mcp",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type, Authorization",
            },
        )

    def test_allowed_origin(self, client):
        response = self._preflight(client, "https://chatgpt.com")
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://chatgpt.com"
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_disallowed_origin(self, client):
        response = self._preflight(client, "https://evil.example")
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_headers(self, client):
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
            headers={"Origin": "https://chat.openai.com"},
        )
        assert response.headers["access-control-allow-origin"] == "https://chat.openai.com"
        assert response.headers["access-control-expose-headers"] == "Mcp-Session-Id"

    def test_configured_origins(self):
        client = TestClient(_server(cors_origins=("http://localhost:5173",)).create_app())
        assert self._preflight(client, "http://localhost:5173").status_code == 200
        assert self._preflight(client, "https://chatgpt.com").status_code == 400

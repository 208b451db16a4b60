"""Tests for the bearer token gate."""

import json

import pytest
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from auth import (
    UNAUTHORIZED_MESSAGE,
    authenticate,
    create_auth_middleware,
    extract_bearer_token,
    is_authorized,
)
from configuration import Configuration
from errors import AuthError, ErrorKind
from familyguy_tool import create_app
from providers import MockProvider

SECRET = "s3cret-token"


class TestBearerToken:
    """Test token extraction and comparison."""

    def test_extract_strips_prefix(self):
        assert extract_bearer_token("Bearer abc") == "abc"

    def test_extract_without_prefix(self):
        assert extract_bearer_token("abc") == "abc"

    def test_extract_missing_header(self):
        assert extract_bearer_token(None) is None

    def test_matching_token(self):
        assert is_authorized({"authorization": f"Bearer {SECRET}"}, SECRET)

    def test_bare_matching_token(self):
        assert is_authorized({"authorization": SECRET}, SECRET)

    def test_wrong_token(self):
        assert not is_authorized({"authorization": "Bearer wrong"}, SECRET)

    def test_missing_header(self):
        assert not is_authorized({}, SECRET)

    def test_authenticate_raises_auth_error(self):
        with pytest.raises(AuthError) as exc_info:
            authenticate({"authorization": "Bearer wrong"}, SECRET)
        assert exc_info.value.kind is ErrorKind.AUTH

    def test_authenticate_accepts_secret(self):
        authenticate({"authorization": f"Bearer {SECRET}"}, SECRET)

    def test_prefix_case_is_significant(self):
        assert not is_authorized({"authorization": f"bearer {SECRET}"}, SECRET)


class TestAuthMiddleware:
    """Test the Starlette middleware in front of a stub app."""

    def _client(self):
        calls = []

        async def handler(request):
            calls.append(request.url.path)
            return PlainTextResponse("ok")

        app = Starlette(routes=[Route("/mcp", handler, methods=["GET", "POST"])])
        app.add_middleware(BaseHTTPMiddleware, dispatch=create_auth_middleware(SECRET))
        return TestClient(app), calls

    def test_rejects_without_header(self):
        client, calls = self._client()
        response = client.post("/mcp")
        assert response.status_code == 401
        assert response.text == UNAUTHORIZED_MESSAGE
        assert calls == []

    def test_rejects_wrong_token(self):
        client, calls = self._client()
        response = client.post("/mcp", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert calls == []

    def test_allows_matching_token(self):
        client, calls = self._client()
        response = client.post("/mcp", headers={"Authorization": f"Bearer {SECRET}"})
        assert response.status_code == 200
        assert calls == ["/mcp"]


class TestAppAuth:
    """Test that the served MCP app is gated."""

    def test_mcp_endpoint_requires_token(self):
        settings = Configuration(gemini_api_key="key", mcp_secret_token=SECRET, _env_file=None)
        provider = MockProvider()
        client = TestClient(create_app(settings, provider))

        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})

        assert response.status_code == 401
        assert response.text == UNAUTHORIZED_MESSAGE
        assert provider.calls == []

    def test_matching_token_reaches_tool(self, pixel_data_uri):
        """An authorized client can initialize a session and call the tool."""
        settings = Configuration(gemini_api_key="key", mcp_secret_token=SECRET, _env_file=None)
        provider = MockProvider()
        headers = {
            "Authorization": f"Bearer {SECRET}",
            "Accept": "application/json, text/event-stream",
        }

        with TestClient(create_app(settings, provider)) as client:
            init = client.post("/mcp", headers=headers, json={
                "jsonrpc": "2.0",
                "id": 1,
                "method": "initialize",
                "params": {
                    "protocolVersion": "2025-03-26",
                    "capabilities": {},
                    "clientInfo": {"name": "test-client", "version": "0.0.1"},
                },
            })
            assert init.status_code == 200
            session_headers = dict(headers)
            session_id = init.headers.get("mcp-session-id")
            if session_id:
                session_headers["mcp-session-id"] = session_id

            client.post("/mcp", headers=session_headers, json={
                "jsonrpc": "2.0", "method": "notifications/initialized",
            })
            call = client.post("/mcp", headers=session_headers, json={
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "convertToFamilyGuy", "arguments": {"image_data": pixel_data_uri}},
            })

        assert call.status_code == 200
        message = _jsonrpc_message(call)
        assert message["id"] == 2
        assert message["result"].get("isError") is not True
        assert message["result"]["content"][0]["type"] == "image"
        assert len(provider.calls) == 1


def _jsonrpc_message(response):
    """Read a JSON-RPC message from a plain JSON or a server-sent events body."""
    if response.headers.get("content-type", "").startswith("application/json"):
        return response.json()
    for line in response.text.splitlines():
        if line.startswith("data:"):
            return json.loads(line[len("data:"):].strip())
    raise AssertionError(f"no JSON-RPC message in response: {response.text!r}")

from __future__ import annotations

import json
from typing import Any, Awaitable, Callable
from unittest.mock import AsyncMock

import pytest
from fastmcp import Client, FastMCP

from lark_mcp import client as lark_client
from lark_mcp.server import create_server

SUCCESS = {"code": 0, "msg": "success", "data": {}}


class StubClient:
    """Stands in for LarkClient; records every request made by a tool."""

    def __init__(self) -> None:
        self.request = AsyncMock(return_value=SUCCESS)

    def respond(self, payload: Any) -> None:
        self.request.return_value = payload

    def fail(self, exc: Exception) -> None:
        self.request.side_effect = exc


@pytest.fixture(autouse=True)
def _fresh_client(monkeypatch: pytest.MonkeyPatch):
    """Keep the memoized client and Lark credentials out of every test."""
    for key in ("LARK_APP_ID", "LARK_APP_SECRET", "LARK_DOMAIN"):
        monkeypatch.delenv(key, raising=False)
    lark_client.reset_client()
    yield
    lark_client.reset_client()


@pytest.fixture
def lark_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LARK_APP_ID", "cli_test_app_id")
    monkeypatch.setenv("LARK_APP_SECRET", "test-secret")


@pytest.fixture
def stub_client() -> StubClient:
    return StubClient()


@pytest.fixture
def server(stub_client: StubClient) -> FastMCP:
    return create_server(get_client=lambda: stub_client)


@pytest.fixture
def call_tool(server: FastMCP) -> Callable[..., Awaitable[Any]]:
    """Invoke a tool through an in-memory MCP client, errors included."""

    async def _call(name: str, arguments: dict[str, Any] | None = None):
        async with Client(server) as mcp_client:
            return await mcp_client.call_tool(name, arguments or {}, raise_on_error=False)

    return _call


def result_text(result: Any) -> str:
    assert result.content, "tool returned no content"
    return result.content[0].text


def result_json(result: Any) -> Any:
    assert not result.is_error, result_text(result)
    return json.loads(result_text(result))

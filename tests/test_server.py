from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import result_text
from fastapi.testclient import TestClient
from fastmcp import Client, FastMCP

from lark_mcp.server import build_bearer_app, create_server
from lark_mcp.tools import REGISTRARS

EXPECTED_TOOL_COUNT = 188

CATEGORIES = {
    "im",
    "docs",
    "drive",
    "bitable",
    "wiki",
    "contact",
    "calendar",
    "approval",
    "task",
    "sheets",
    "search",
    "mail",
    "vc",
    "attendance",
    "helpdesk",
    "lingo",
    "hire",
    "okr",
    "corehr",
    "ehr",
    "admin",
    "application",
    "acs",
    "ai",
    "personal_settings",
    "workplace",
}


async def _list_tools(mcp: FastMCP):
    async with Client(mcp) as client:
        return await client.list_tools()


@pytest.mark.asyncio
async def test_every_tool_is_registered_once(server: FastMCP) -> None:
    tools = await _list_tools(server)
    names = [tool.name for tool in tools]

    assert len(names) == EXPECTED_TOOL_COUNT
    assert len(set(names)) == len(names)
    assert all(name.startswith("lark_") for name in names)


@pytest.mark.asyncio
async def test_tools_carry_descriptions_and_annotations(server: FastMCP) -> None:
    for tool in await _list_tools(server):
        assert tool.description, tool.name
        assert tool.annotations is not None, tool.name
        assert tool.annotations.openWorldHint is True


@pytest.mark.asyncio
async def test_safety_levels_match_annotations(server: FastMCP) -> None:
    tools = await server.get_tools()

    for name, tool in tools.items():
        meta = tool.meta or {}
        assert meta.get("category") in CATEGORIES, name
        level = meta.get("safety_level")
        if tool.annotations.readOnlyHint:
            assert level == "safe", name
        elif tool.annotations.destructiveHint:
            assert level == "critical", name
        else:
            assert level in ("moderate", "dangerous"), name


@pytest.mark.asyncio
async def test_password_reset_is_flagged_dangerous(server: FastMCP) -> None:
    tool = await server.get_tool("lark_admin_reset_password")
    assert tool.meta["safety_level"] == "dangerous"


@pytest.mark.asyncio
@pytest.mark.parametrize("register", REGISTRARS, ids=lambda fn: fn.__name__)
async def test_each_registrar_contributes_its_own_category(register, stub_client) -> None:
    mcp = FastMCP("registrar-test")
    register(mcp, lambda: stub_client)

    tools = await mcp.get_tools()
    assert tools
    categories = {tool.meta["category"] for tool in tools.values()}
    assert len(categories) == 1


@pytest.mark.asyncio
async def test_registration_does_not_touch_the_client() -> None:
    def exploding_getter():
        raise AssertionError("client must not be built during registration")

    mcp = create_server(get_client=exploding_getter)
    assert len(await _list_tools(mcp)) == EXPECTED_TOOL_COUNT


UNSUPPORTED_TOOLS = {"lark_im_upload_image"}


def _resolve(schema: dict[str, Any], defs: dict[str, Any]) -> dict[str, Any]:
    if "$ref" in schema:
        schema = defs[schema["$ref"].rsplit("/", 1)[-1]]
    for option in schema.get("anyOf", ()):
        if option.get("type") != "null":
            return _resolve(option, defs)
    return schema


def _sample(schema: dict[str, Any], defs: dict[str, Any], description: str = "") -> Any:
    schema = _resolve(schema, defs)
    if "enum" in schema:
        return schema["enum"][0]
    if "const" in schema:
        return schema["const"]
    kind = schema.get("type")
    if kind == "integer" or kind == "number":
        return schema.get("minimum", 1)
    if kind == "boolean":
        return True
    if kind == "array":
        return [_sample(schema.get("items", {}), defs)]
    if kind == "object":
        return {}
    return '{"k": "v"}' if "JSON" in description else "x"


def _json_parameters(tool) -> list[str]:
    properties = tool.parameters.get("properties", {})
    return [name for name, prop in properties.items() if "JSON" in prop.get("description", "")]


def _minimal_arguments(tool, tmp_path) -> dict[str, Any]:
    schema = tool.parameters
    defs = schema.get("$defs", {})
    properties = schema.get("properties", {})
    arguments = {
        name: _sample(properties[name], defs, properties[name].get("description", ""))
        for name in schema.get("required", ())
    }
    if tool.name == "lark_drive_upload_file":
        source = tmp_path / "upload.txt"
        source.write_text("payload")
        arguments["file_path"] = str(source)
    return arguments


@pytest.mark.asyncio
async def test_every_tool_returns_both_envelopes(server: FastMCP, stub_client, tmp_path) -> None:
    tools = await server.get_tools()
    failures = []

    async with Client(server) as client:
        for name, tool in sorted(tools.items()):
            if name in UNSUPPORTED_TOOLS:
                continue
            arguments = _minimal_arguments(tool, tmp_path)

            payload = {"code": 0, "msg": "success", "data": {"tool": name}}
            stub_client.request.reset_mock(return_value=True, side_effect=True)
            stub_client.respond(payload)
            result = await client.call_tool(name, arguments, raise_on_error=False)
            expected = json.dumps(payload, indent=2, ensure_ascii=False)
            if result.is_error or result_text(result) != expected:
                failures.append(f"{name}: success envelope {result_text(result)!r}")
            if stub_client.request.await_count != 1:
                failures.append(f"{name}: {stub_client.request.await_count} remote calls")

            stub_client.request.reset_mock(return_value=True, side_effect=True)
            stub_client.fail(RuntimeError("boom"))
            result = await client.call_tool(name, arguments, raise_on_error=False)
            if not result.is_error or result_text(result) != "Error: boom":
                failures.append(f"{name}: error envelope {result_text(result)!r}")

    assert failures == []


@pytest.mark.asyncio
async def test_invalid_json_parameters_never_reach_the_platform(
    server: FastMCP, stub_client, tmp_path
) -> None:
    tools = await server.get_tools()
    checked = 0
    failures = []

    async with Client(server) as client:
        for name, tool in sorted(tools.items()):
            for parameter in _json_parameters(tool):
                arguments = _minimal_arguments(tool, tmp_path)
                arguments[parameter] = "{not valid json"
                stub_client.request.reset_mock(return_value=True, side_effect=True)

                result = await client.call_tool(name, arguments, raise_on_error=False)
                checked += 1
                if not result.is_error or "Invalid JSON" not in result_text(result):
                    failures.append(f"{name}.{parameter}: {result_text(result)!r}")
                if stub_client.request.await_count:
                    failures.append(f"{name}.{parameter}: platform was called")

    assert checked > 30
    assert failures == []


def test_bearer_app_health_is_open(server: FastMCP) -> None:
    client = TestClient(build_bearer_app(server, "x" * 40))

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Basic abc"},
        {"Authorization": "Bearer wrong-token"},
    ],
    ids=["missing", "wrong-scheme", "wrong-token"],
)
def test_bearer_app_rejects_unauthorized_requests(server: FastMCP, headers) -> None:
    client = TestClient(build_bearer_app(server, "x" * 40))

    response = client.post("/mcp", headers=headers, json={})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

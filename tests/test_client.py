from __future__ import annotations

import base64
import json
import logging

import httpx
import pytest

from lark_mcp.client import (
    BASE_URLS,
    TOKEN_PATH,
    LarkClient,
    LarkConfig,
    get_client,
    get_config,
    reset_client,
)
from lark_mcp.exceptions import ConfigurationError, LarkAPIError, TokenAcquisitionError


def _make_client(handler, domain: str = "feishu") -> LarkClient:
    return LarkClient(
        LarkConfig(app_id="cli_test", app_secret="secret", domain=domain),
        transport=httpx.MockTransport(handler),
    )


def _platform(api_response: httpx.Response | None = None, seen: list | None = None):
    """Build a handler that issues a token and answers every other call."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == TOKEN_PATH:
            return httpx.Response(
                200, json={"code": 0, "tenant_access_token": "t-abc", "expire": 7200}
            )
        if seen is not None:
            seen.append(request)
        return api_response or httpx.Response(
            200, json={"code": 0, "msg": "success", "data": {"ok": True}}
        )

    return handler


def test_get_config_requires_credentials() -> None:
    with pytest.raises(ConfigurationError):
        get_config()


def test_get_config_reads_environment(lark_env, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LARK_DOMAIN", "Lark")
    config = get_config()
    assert config.app_id == "cli_test_app_id"
    assert config.app_secret == "test-secret"
    assert config.domain == "lark"


def test_get_config_unknown_domain_falls_back_to_feishu(
    lark_env, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LARK_DOMAIN", "example")
    assert get_config().domain == "feishu"


def test_get_client_is_memoized(lark_env) -> None:
    first = get_client()
    assert get_client() is first
    reset_client()
    assert get_client() is not first


def test_get_client_without_credentials_raises() -> None:
    with pytest.raises(ConfigurationError):
        get_client()


def test_base_url_follows_domain() -> None:
    assert _make_client(_platform(), domain="lark").base_url == BASE_URLS["lark"]
    assert _make_client(_platform()).base_url == "https://open.feishu.cn"


@pytest.mark.asyncio
async def test_request_sends_bearer_token_and_returns_body() -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_platform(seen=seen))

    result = await client.request("GET", "/open-apis/contact/v3/users/ou_1")

    assert result == {"code": 0, "msg": "success", "data": {"ok": True}}
    assert seen[0].headers["Authorization"] == "Bearer t-abc"
    assert seen[0].url.host == "open.feishu.cn"
    await client.aclose()


@pytest.mark.asyncio
async def test_tenant_token_is_cached_between_calls() -> None:
    token_calls: list[httpx.Request] = []
    api = _platform()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == TOKEN_PATH:
            token_calls.append(request)
        return api(request)

    client = _make_client(handler)
    await client.request("GET", "/open-apis/im/v1/chats")
    await client.request("GET", "/open-apis/im/v1/chats")

    assert len(token_calls) == 1
    assert json.loads(token_calls[0].content) == {
        "app_id": "cli_test",
        "app_secret": "secret",
    }
    await client.aclose()


@pytest.mark.asyncio
async def test_query_params_drop_none_and_encode_bools_and_lists() -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_platform(seen=seen))

    await client.request(
        "GET",
        "/open-apis/vc/v1/meetings/m1",
        params={
            "with_participants": True,
            "page_token": None,
            "user_ids": ["ou_1", "ou_2"],
            "page_size": 20,
        },
    )

    params = seen[0].url.params
    assert params["with_participants"] == "true"
    assert "page_token" not in params
    assert params.get_list("user_ids") == ["ou_1", "ou_2"]
    assert params["page_size"] == "20"
    await client.aclose()


@pytest.mark.asyncio
async def test_body_drops_top_level_none_only() -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_platform(seen=seen))

    await client.request(
        "POST",
        "/open-apis/task/v2/tasks",
        body={"summary": "Write report", "description": None, "due": {"timestamp": None}},
    )

    assert json.loads(seen[0].content) == {
        "summary": "Write report",
        "due": {"timestamp": None},
    }
    await client.aclose()


@pytest.mark.asyncio
async def test_non_zero_code_raises_lark_api_error() -> None:
    client = _make_client(
        _platform(httpx.Response(200, json={"code": 99991663, "msg": "invalid token"}))
    )

    with pytest.raises(LarkAPIError) as exc_info:
        await client.request("GET", "/open-apis/im/v1/chats")

    assert exc_info.value.code == 99991663
    assert str(exc_info.value) == "[99991663] invalid token"
    await client.aclose()


@pytest.mark.asyncio
async def test_api_errors_are_logged_with_call_details(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="lark_mcp.client")
    client = _make_client(
        _platform(httpx.Response(200, json={"code": 230002, "msg": "bot not in chat"}))
    )

    with pytest.raises(LarkAPIError):
        await client.request("GET", "/open-apis/im/v1/chats/oc_1")

    sent = [r for r in caplog.records if r.levelno == logging.DEBUG and hasattr(r, "path")]
    assert sent[-1].method == "GET"
    assert sent[-1].path == "/open-apis/im/v1/chats/oc_1"
    warning = next(r for r in caplog.records if r.levelno == logging.WARNING)
    assert (warning.method, warning.path, warning.code) == (
        "GET",
        "/open-apis/im/v1/chats/oc_1",
        230002,
    )
    await client.aclose()


@pytest.mark.asyncio
async def test_http_error_with_lark_body_keeps_platform_code() -> None:
    client = _make_client(
        _platform(httpx.Response(400, json={"code": 1254043, "msg": "RecordIdNotFound"}))
    )

    with pytest.raises(LarkAPIError) as exc_info:
        await client.request("GET", "/open-apis/bitable/v1/apps/a/tables/t/records/r")

    assert exc_info.value.status_code == 400
    await client.aclose()


@pytest.mark.asyncio
async def test_binary_response_is_base64_encoded() -> None:
    payload = b"\x89PNG\r\n\x1a\n"
    client = _make_client(
        _platform(
            httpx.Response(200, content=payload, headers={"content-type": "image/png"})
        )
    )

    result = await client.request("GET", "/open-apis/drive/v1/medias/box/download")

    assert result["content_type"] == "image/png"
    assert result["size"] == len(payload)
    assert base64.b64decode(result["content_base64"]) == payload
    await client.aclose()


@pytest.mark.asyncio
async def test_multipart_upload_skips_json_body() -> None:
    seen: list[httpx.Request] = []
    client = _make_client(_platform(seen=seen))

    await client.request(
        "POST",
        "/open-apis/drive/v1/files/upload_all",
        data={"file_name": "notes.txt", "parent_type": "explorer"},
        files={"file": ("notes.txt", b"hello")},
    )

    request = seen[0]
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="file_name"' in request.content
    assert b"hello" in request.content
    await client.aclose()


@pytest.mark.asyncio
async def test_token_failure_raises_token_acquisition_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": 10003, "msg": "invalid param"})

    client = _make_client(handler)

    with pytest.raises(TokenAcquisitionError) as exc_info:
        await client.request("GET", "/open-apis/im/v1/chats")

    assert exc_info.value.code == 10003
    await client.aclose()

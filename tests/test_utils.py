from __future__ import annotations

import json

import pytest
from fastmcp.exceptions import ToolError

from lark_mcp.exceptions import LarkAPIError
from lark_mcp.utils import (
    compact,
    err,
    json_text,
    ok,
    parse_json,
    parse_optional_json,
    safe_call,
    segment,
)


def test_ok_pretty_prints_json_and_keeps_unicode() -> None:
    result = ok({"name": "飞书", "count": 2})
    text = result.content[0].text

    assert json.loads(text) == {"name": "飞书", "count": 2}
    assert "飞书" in text
    assert "\n  " in text


def test_err_raises_prefixed_tool_error() -> None:
    with pytest.raises(ToolError, match="^Error: boom$"):
        err("boom")


@pytest.mark.asyncio
async def test_safe_call_wraps_result() -> None:
    async def fetch():
        return {"code": 0, "data": {"items": []}}

    result = await safe_call(fetch)
    assert json.loads(result.content[0].text) == {"code": 0, "data": {"items": []}}


@pytest.mark.asyncio
async def test_safe_call_converts_api_errors() -> None:
    async def fetch():
        raise LarkAPIError(99991672, "Access denied")

    with pytest.raises(ToolError, match=r"^Error: \[99991672\] Access denied$"):
        await safe_call(fetch)


@pytest.mark.asyncio
async def test_safe_call_uses_class_name_for_blank_messages() -> None:
    async def fetch():
        raise TimeoutError()

    with pytest.raises(ToolError, match="^Error: TimeoutError$"):
        await safe_call(fetch)


@pytest.mark.asyncio
async def test_safe_call_reports_json_errors_raised_while_building_request() -> None:
    calls: list[str] = []

    async def request(body):
        calls.append("called")
        return body

    with pytest.raises(ToolError, match="Invalid JSON in 'fields'"):
        await safe_call(lambda: request(parse_json("{oops", name="fields")))

    assert calls == []


def test_parse_json_decodes_valid_text() -> None:
    assert parse_json('[["a", 1]]', name="values") == [["a", 1]]


def test_parse_json_names_the_parameter() -> None:
    with pytest.raises(ValueError, match="Invalid JSON in 'content'"):
        parse_json("not json", name="content")


@pytest.mark.parametrize("blank", [None, ""])
def test_parse_optional_json_treats_blank_as_missing(blank) -> None:
    assert parse_optional_json(blank, name="settings") is None


def test_compact_drops_only_none() -> None:
    assert compact({"a": 0, "b": None, "c": "", "d": False}) == {"a": 0, "c": "", "d": False}


def test_json_text_returns_the_original_string() -> None:
    text = '{"text": "hi"}'

    assert json_text(text, name="content") is text


def test_json_text_rejects_plain_text() -> None:
    with pytest.raises(ValueError, match="Invalid JSON in 'form'"):
        json_text("approve please", name="form")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("ou_123", "ou_123"),
        ("../admin", "..%2Fadmin"),
        ("a?b=c#d", "a%3Fb%3Dc%23d"),
        ("me@example.com", "me@example.com"),
        (42, "42"),
    ],
)
def test_segment_escapes_path_separators(value, expected) -> None:
    assert segment(value) == expected

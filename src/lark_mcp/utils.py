"""Shared result envelope and helpers for Lark MCP tools."""

from __future__ import annotations

import json
from typing import Any, Awaitable, Callable, NoReturn
from urllib.parse import quote

from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from .logging_config import get_logger

logger = get_logger(__name__)

# MCP tool annotations shared by all tool modules
READ_ONLY: dict[str, Any] = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

WRITE: dict[str, Any] = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "idempotentHint": False,
    "openWorldHint": True,
}

DESTRUCTIVE: dict[str, Any] = {
    "readOnlyHint": False,
    "destructiveHint": True,
    "idempotentHint": True,
    "openWorldHint": True,
}


def ok(data: Any) -> ToolResult:
    """Wrap a successful result as pretty-printed JSON text content."""
    text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    return ToolResult(content=[TextContent(type="text", text=text)])


def err(message: str) -> NoReturn:
    """Report a failure to the host as an error-flagged tool result."""
    raise ToolError(f"Error: {message}")


async def safe_call(fn: Callable[[], Awaitable[Any]]) -> ToolResult:
    """Run one Lark API call and normalise the outcome into an envelope.

    Args:
        fn: Zero-argument callable returning the awaitable to execute

    Returns:
        Success envelope with the serialized result

    Raises:
        ToolError: carrying ``Error: <message>`` for any failure
    """
    try:
        result = await fn()
    except Exception as e:
        message = str(e) or e.__class__.__name__
        logger.warning(f"Tool call failed: {message}")
        err(message)
    return ok(result)


def parse_json(text: str, *, name: str) -> Any:
    """Strictly decode a parameter documented as a JSON string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in '{name}': {e}") from e


def parse_optional_json(text: str | None, *, name: str) -> Any:
    if text is None or text == "":
        return None
    return parse_json(text, name=name)


def json_text(text: str, *, name: str) -> str:
    """Check that ``text`` decodes as JSON and return it unchanged.

    For fields the platform wants as a JSON-encoded string, such as message
    ``content`` or approval ``form``.
    """
    parse_json(text, name=name)
    return text


def compact(mapping: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in mapping.items() if v is not None}


def segment(value: Any) -> str:
    """Escape a caller-supplied ID for use as a single URL path segment."""
    # "@" is legal inside a segment and appears in mailbox IDs
    return quote(str(value), safe="@")

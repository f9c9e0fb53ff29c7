from __future__ import annotations

import pytest
from conftest import result_json, result_text

from lark_mcp.exceptions import LarkAPIError


@pytest.mark.asyncio
async def test_send_message_echoes_platform_response(call_tool, stub_client) -> None:
    response = {"code": 0, "msg": "success", "data": {"message_id": "om_1"}}
    stub_client.respond(response)

    result = await call_tool(
        "lark_im_send_message",
        {
            "receive_id_type": "chat_id",
            "receive_id": "oc_123",
            "msg_type": "text",
            "content": '{"text":"hello"}',
        },
    )

    assert result_json(result) == response
    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/im/v1/messages",
        params={"receive_id_type": "chat_id"},
        body={"receive_id": "oc_123", "msg_type": "text", "content": '{"text":"hello"}'},
    )


@pytest.mark.asyncio
async def test_send_message_forwards_arguments_unchanged(call_tool, stub_client) -> None:
    stub_client.request.side_effect = lambda method, path, **kwargs: {
        "method": method,
        "path": path,
        **kwargs,
    }

    result = await call_tool(
        "lark_im_send_message",
        {
            "receive_id_type": "open_id",
            "receive_id": "ou_123",
            "msg_type": "text",
            "content": '{"text":"hi"}',
        },
    )

    assert result_json(result) == {
        "method": "POST",
        "path": "/open-apis/im/v1/messages",
        "params": {"receive_id_type": "open_id"},
        "body": {"receive_id": "ou_123", "msg_type": "text", "content": '{"text":"hi"}'},
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool", "arguments"),
    [
        (
            "lark_im_send_message",
            {"receive_id_type": "chat_id", "receive_id": "oc_1", "msg_type": "text"},
        ),
        ("lark_im_reply_message", {"message_id": "om_1", "msg_type": "text"}),
        ("lark_im_update_message", {"message_id": "om_1", "msg_type": "text"}),
        ("lark_helpdesk_send_ticket_message", {"ticket_id": "t_1"}),
    ],
)
async def test_message_content_must_be_json(call_tool, stub_client, tool, arguments) -> None:
    result = await call_tool(tool, {**arguments, "content": "hello there"})

    assert result.is_error
    assert result_text(result).startswith("Error: Invalid JSON in 'content'")
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_message_id_is_escaped_in_path(call_tool, stub_client) -> None:
    await call_tool("lark_im_get_message", {"message_id": "om_1/../chats?x=1"})

    stub_client.request.assert_awaited_once_with(
        "GET", "/open-apis/im/v1/messages/om_1%2F..%2Fchats%3Fx%3D1"
    )


@pytest.mark.asyncio
async def test_send_message_rejects_unknown_receive_id_type(call_tool, stub_client) -> None:
    result = await call_tool(
        "lark_im_send_message",
        {
            "receive_id_type": "phone",
            "receive_id": "123",
            "msg_type": "text",
            "content": "{}",
        },
    )

    assert result.is_error
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_platform_error_becomes_error_envelope(call_tool, stub_client) -> None:
    stub_client.fail(LarkAPIError(230002, "Bot/User can NOT be out of the chat."))

    result = await call_tool("lark_im_get_chat", {"chat_id": "oc_404"})

    assert result.is_error
    assert result_text(result) == "Error: [230002] Bot/User can NOT be out of the chat."


@pytest.mark.asyncio
async def test_upload_image_reports_unsupported(call_tool, stub_client) -> None:
    result = await call_tool("lark_im_upload_image", {"image_uri": "/tmp/cat.png"})

    assert result.is_error
    assert result_text(result).startswith("Error: Image upload requires local file access")
    assert "lark_drive_upload_file" in result_text(result)
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_messages_defaults(call_tool, stub_client) -> None:
    await call_tool("lark_im_list_messages", {"container_id": "oc_1"})

    stub_client.request.assert_awaited_once_with(
        "GET",
        "/open-apis/im/v1/messages",
        params={
            "container_id_type": "chat",
            "container_id": "oc_1",
            "start_time": None,
            "end_time": None,
            "page_size": 20,
            "page_token": None,
        },
    )


@pytest.mark.asyncio
async def test_list_messages_enforces_page_size_limit(call_tool, stub_client) -> None:
    result = await call_tool("lark_im_list_messages", {"container_id": "oc_1", "page_size": 51})

    assert result.is_error
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_reaction_nests_emoji(call_tool, stub_client) -> None:
    await call_tool("lark_im_add_reaction", {"message_id": "om_1", "emoji_type": "THUMBSUP"})

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/im/v1/messages/om_1/reactions",
        body={"reaction_type": {"emoji_type": "THUMBSUP"}},
    )


@pytest.mark.asyncio
async def test_remove_chat_members_sends_ids_in_delete_body(call_tool, stub_client) -> None:
    await call_tool(
        "lark_im_remove_chat_members",
        {"chat_id": "oc_1", "id_list": ["ou_1", "ou_2"]},
    )

    stub_client.request.assert_awaited_once_with(
        "DELETE",
        "/open-apis/im/v1/chats/oc_1/members",
        params={"member_id_type": "open_id"},
        body={"id_list": ["ou_1", "ou_2"]},
    )

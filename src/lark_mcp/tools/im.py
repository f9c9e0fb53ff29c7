"""Messaging tools: messages, reactions, pins and group chats."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import DESTRUCTIVE, READ_ONLY, WRITE, err, json_text, safe_call, segment
from .common import PageSize, PageToken

ReceiveIdType = Annotated[
    Literal["open_id", "user_id", "union_id", "email", "chat_id"],
    Field(description="ID type of the message receiver"),
]

MemberIdType = Annotated[
    Literal["open_id", "user_id", "union_id", "app_id"],
    Field(description="Member ID type"),
]

MessageType = Literal[
    "text",
    "post",
    "image",
    "interactive",
    "file",
    "audio",
    "media",
    "sticker",
    "share_chat",
    "share_user",
]

MessageId = Annotated[str, Field(description="Message ID")]
ChatId = Annotated[str, Field(description="Chat ID")]


def register_im_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_im_send_message
    @mcp.tool(
        name="lark_im_send_message",
        description="Send a message to a user or chat in Feishu/Lark",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def send_message(
        receive_id_type: ReceiveIdType,
        receive_id: Annotated[str, Field(description="Receiver ID (open_id / chat_id / ...)")],
        msg_type: Annotated[MessageType, Field(description="Message type")],
        content: Annotated[
            str, Field(description='Message content as JSON string, e.g. {"text":"hello"}')
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/im/v1/messages",
                params={"receive_id_type": receive_id_type},
                body={
                    "receive_id": receive_id,
                    "msg_type": msg_type,
                    "content": json_text(content, name="content"),
                },
            )
        )

    # lark_im_reply_message
    @mcp.tool(
        name="lark_im_reply_message",
        description="Reply to a specific message",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def reply_message(
        message_id: Annotated[str, Field(description="ID of the message to reply to")],
        msg_type: Annotated[
            Literal["text", "post", "image", "interactive", "file"],
            Field(description="Reply message type"),
        ],
        content: Annotated[str, Field(description="Reply content as JSON string")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/im/v1/messages/{segment(message_id)}/reply",
                body={"msg_type": msg_type, "content": json_text(content, name="content")},
            )
        )

    # lark_im_get_message
    @mcp.tool(
        name="lark_im_get_message",
        description="Get a specific message by ID",
        annotations=READ_ONLY,
        meta={"category": "im", "safety_level": "safe"},
    )
    async def get_message(message_id: MessageId):
        return await safe_call(
            lambda: get_client().request("GET", f"/open-apis/im/v1/messages/{segment(message_id)}")
        )

    # lark_im_list_messages
    @mcp.tool(
        name="lark_im_list_messages",
        description="List messages in a chat (recent history)",
        annotations=READ_ONLY,
        meta={"category": "im", "safety_level": "safe"},
    )
    async def list_messages(
        container_id: ChatId,
        container_id_type: Literal["chat"] = "chat",
        start_time: Annotated[str | None, Field(description="Start timestamp (seconds)")] = None,
        end_time: Annotated[str | None, Field(description="End timestamp (seconds)")] = None,
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/im/v1/messages",
                params={
                    "container_id_type": container_id_type,
                    "container_id": container_id,
                    "start_time": start_time,
                    "end_time": end_time,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_im_delete_message
    @mcp.tool(
        name="lark_im_delete_message",
        description="Recall / delete a message",
        annotations=DESTRUCTIVE,
        meta={"category": "im", "safety_level": "critical"},
    )
    async def delete_message(
        message_id: Annotated[str, Field(description="Message ID to delete")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "DELETE",
                f"/open-apis/im/v1/messages/{segment(message_id)}",
            )
        )

    # lark_im_update_message
    @mcp.tool(
        name="lark_im_update_message",
        description="Edit / update an existing message",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def update_message(
        message_id: Annotated[str, Field(description="Message ID to update")],
        msg_type: Annotated[
            Literal["text", "post", "interactive"], Field(description="New message type")
        ],
        content: Annotated[str, Field(description="New content as JSON string")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "PUT",
                f"/open-apis/im/v1/messages/{segment(message_id)}",
                body={"msg_type": msg_type, "content": json_text(content, name="content")},
            )
        )

    # lark_im_add_reaction
    @mcp.tool(
        name="lark_im_add_reaction",
        description="Add an emoji reaction to a message",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def add_reaction(
        message_id: MessageId,
        emoji_type: Annotated[str, Field(description='Emoji type, e.g. "THUMBSUP", "SMILE"')],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/im/v1/messages/{segment(message_id)}/reactions",
                body={"reaction_type": {"emoji_type": emoji_type}},
            )
        )

    # lark_im_create_chat
    @mcp.tool(
        name="lark_im_create_chat",
        description="Create a new group chat",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def create_chat(
        name: Annotated[str | None, Field(description="Group name")] = None,
        description: Annotated[str | None, Field(description="Group description")] = None,
        user_id_list: Annotated[
            list[str] | None, Field(description="List of user open_ids to add")
        ] = None,
        chat_mode: Annotated[
            Literal["group", "topic", "p2p"], Field(description="Chat mode")
        ] = "group",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/im/v1/chats",
                params={"user_id_type": "open_id"},
                body={
                    "name": name,
                    "description": description,
                    "user_id_list": user_id_list,
                    "chat_mode": chat_mode,
                },
            )
        )

    # lark_im_get_chat
    @mcp.tool(
        name="lark_im_get_chat",
        description="Get information about a chat group",
        annotations=READ_ONLY,
        meta={"category": "im", "safety_level": "safe"},
    )
    async def get_chat(chat_id: ChatId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/im/v1/chats/{segment(chat_id)}",
                params={"user_id_type": "open_id"},
            )
        )

    # lark_im_list_chats
    @mcp.tool(
        name="lark_im_list_chats",
        description="List chats the bot has joined",
        annotations=READ_ONLY,
        meta={"category": "im", "safety_level": "safe"},
    )
    async def list_chats(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/im/v1/chats",
                params={
                    "user_id_type": "open_id",
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_im_add_chat_members
    @mcp.tool(
        name="lark_im_add_chat_members",
        description="Add members to a group chat",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def add_chat_members(
        chat_id: ChatId,
        id_list: Annotated[list[str], Field(description="List of user IDs to add")],
        member_id_type: MemberIdType = "open_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/im/v1/chats/{segment(chat_id)}/members",
                params={"member_id_type": member_id_type},
                body={"id_list": id_list},
            )
        )

    # lark_im_remove_chat_members
    @mcp.tool(
        name="lark_im_remove_chat_members",
        description="Remove members from a group chat",
        annotations=DESTRUCTIVE,
        meta={"category": "im", "safety_level": "critical"},
    )
    async def remove_chat_members(
        chat_id: ChatId,
        id_list: Annotated[list[str], Field(description="List of user IDs to remove")],
        member_id_type: MemberIdType = "open_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "DELETE",
                f"/open-apis/im/v1/chats/{segment(chat_id)}/members",
                params={"member_id_type": member_id_type},
                body={"id_list": id_list},
            )
        )

    # lark_im_list_chat_members
    @mcp.tool(
        name="lark_im_list_chat_members",
        description="List members of a group chat",
        annotations=READ_ONLY,
        meta={"category": "im", "safety_level": "safe"},
    )
    async def list_chat_members(
        chat_id: ChatId,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
        member_id_type: Literal["open_id", "user_id", "union_id"] = "open_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/im/v1/chats/{segment(chat_id)}/members",
                params={
                    "member_id_type": member_id_type,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_im_pin_message
    @mcp.tool(
        name="lark_im_pin_message",
        description="Pin a message in a chat",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def pin_message(
        message_id: Annotated[str, Field(description="Message ID to pin")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST", "/open-apis/im/v1/pins", body={"message_id": message_id}
            )
        )

    # lark_im_upload_image
    @mcp.tool(
        name="lark_im_upload_image",
        description="Upload an image to Feishu for sending in messages",
        annotations=WRITE,
        meta={"category": "im", "safety_level": "moderate"},
    )
    async def upload_image(
        image_uri: Annotated[str, Field(description="Local file path or URL of the image")],
        image_type: Literal["message", "avatar"] = "message",
    ):
        err(
            "Image upload requires local file access. "
            "Use lark_drive_upload_file for file uploads."
        )

"""Mail tools: sending, mail groups and public mailboxes."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_json, parse_optional_json, safe_call, segment
from .common import PageSize, PageToken

MAIL_BASE = "/open-apis/mail/v1"

MailgroupId = Annotated[str, Field(description="Mail group ID")]

WhoCanSend = Literal["ANYONE", "ALL_INTERNAL_USERS", "ALL_GROUP_MEMBERS", "CUSTOM_MEMBERS"]

MemberType = Literal[
    "USER",
    "DEPARTMENT",
    "COMPANY",
    "EXTERNAL_USER",
    "MAIL_GROUP",
    "PUBLIC_MAILBOX",
    "OTHER_MEMBER",
]


def register_mail_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_mail_send_message
    @mcp.tool(
        name="lark_mail_send_message",
        description="Send an email from a user mailbox",
        annotations=WRITE,
        meta={"category": "mail", "safety_level": "moderate"},
    )
    async def send_message(
        user_mailbox_id: Annotated[str, Field(description="User mailbox ID (email address)")],
        subject: Annotated[str, Field(description="Email subject")],
        to: Annotated[
            str, Field(description='JSON array of recipients, e.g. [{"mail_address":"a@b.com"}]')
        ],
        body_html: Annotated[str | None, Field(description="HTML body content")] = None,
        body_text: Annotated[str | None, Field(description="Plain text body content")] = None,
        cc: Annotated[str | None, Field(description="JSON array of CC recipients")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{MAIL_BASE}/user_mailboxes/{segment(user_mailbox_id)}/messages/send",
                body={
                    "subject": subject,
                    "to": parse_json(to, name="to"),
                    "cc": parse_optional_json(cc, name="cc"),
                    "body_html": body_html,
                    "body_plain_text": body_text,
                },
            )
        )

    # lark_mail_list_mailgroups
    @mcp.tool(
        name="lark_mail_list_mailgroups",
        description="List mail groups",
        annotations=READ_ONLY,
        meta={"category": "mail", "safety_level": "safe"},
    )
    async def list_mailgroups(page_size: PageSize(200) = 50, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{MAIL_BASE}/mailgroups",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_mail_create_mailgroup
    @mcp.tool(
        name="lark_mail_create_mailgroup",
        description="Create a mail group",
        annotations=WRITE,
        meta={"category": "mail", "safety_level": "moderate"},
    )
    async def create_mailgroup(
        email: Annotated[str, Field(description="Group email address")],
        name: Annotated[str | None, Field(description="Display name")] = None,
        description: Annotated[str | None, Field(description="Group description")] = None,
        who_can_send_mail: Annotated[
            WhoCanSend, Field(description="Who may send to the group")
        ] = "ALL_INTERNAL_USERS",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{MAIL_BASE}/mailgroups",
                body={
                    "email": email,
                    "name": name,
                    "description": description,
                    "who_can_send_mail": who_can_send_mail,
                },
            )
        )

    # lark_mail_get_mailgroup
    @mcp.tool(
        name="lark_mail_get_mailgroup",
        description="Get details of a mail group",
        annotations=READ_ONLY,
        meta={"category": "mail", "safety_level": "safe"},
    )
    async def get_mailgroup(mailgroup_id: MailgroupId):
        return await safe_call(
            lambda: get_client().request("GET", f"{MAIL_BASE}/mailgroups/{segment(mailgroup_id)}")
        )

    # lark_mail_add_mailgroup_member
    @mcp.tool(
        name="lark_mail_add_mailgroup_member",
        description="Add a member to a mail group",
        annotations=WRITE,
        meta={"category": "mail", "safety_level": "moderate"},
    )
    async def add_mailgroup_member(
        mailgroup_id: MailgroupId,
        email: Annotated[str | None, Field(description="Member email address")] = None,
        user_id: Annotated[str | None, Field(description="Member user ID")] = None,
        type: Annotated[MemberType, Field(description="Member type")] = "USER",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{MAIL_BASE}/mailgroups/{segment(mailgroup_id)}/members",
                body={"email": email, "user_id": user_id, "type": type},
            )
        )

    # lark_mail_list_mailgroup_members
    @mcp.tool(
        name="lark_mail_list_mailgroup_members",
        description="List members of a mail group",
        annotations=READ_ONLY,
        meta={"category": "mail", "safety_level": "safe"},
    )
    async def list_mailgroup_members(
        mailgroup_id: MailgroupId,
        page_size: PageSize(200) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{MAIL_BASE}/mailgroups/{segment(mailgroup_id)}/members",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_mail_list_public_mailboxes
    @mcp.tool(
        name="lark_mail_list_public_mailboxes",
        description="List public mailboxes",
        annotations=READ_ONLY,
        meta={"category": "mail", "safety_level": "safe"},
    )
    async def list_public_mailboxes(
        page_size: PageSize(200) = 50, page_token: PageToken = None
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{MAIL_BASE}/public_mailboxes",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_mail_create_public_mailbox
    @mcp.tool(
        name="lark_mail_create_public_mailbox",
        description="Create a public mailbox",
        annotations=WRITE,
        meta={"category": "mail", "safety_level": "moderate"},
    )
    async def create_public_mailbox(
        email: Annotated[str, Field(description="Public mailbox email address")],
        name: Annotated[str | None, Field(description="Display name")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST", f"{MAIL_BASE}/public_mailboxes", body={"email": email, "name": name}
            )
        )

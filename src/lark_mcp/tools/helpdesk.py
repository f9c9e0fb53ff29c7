"""Helpdesk tools: tickets, FAQs, categories and agent schedules."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, json_text, parse_json, safe_call, segment
from .common import PageSize, PageToken

HELPDESK_BASE = "/open-apis/helpdesk/v1"

TicketId = Annotated[str, Field(description="Ticket ID")]

# agent schedule status 1 = on duty
AGENT_ON_DUTY = 1


def register_helpdesk_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_helpdesk_get_ticket
    @mcp.tool(
        name="lark_helpdesk_get_ticket",
        description="Get details of a helpdesk ticket",
        annotations=READ_ONLY,
        meta={"category": "helpdesk", "safety_level": "safe"},
    )
    async def get_ticket(ticket_id: TicketId):
        return await safe_call(
            lambda: get_client().request("GET", f"{HELPDESK_BASE}/tickets/{segment(ticket_id)}")
        )

    # lark_helpdesk_list_tickets
    @mcp.tool(
        name="lark_helpdesk_list_tickets",
        description="List helpdesk tickets",
        annotations=READ_ONLY,
        meta={"category": "helpdesk", "safety_level": "safe"},
    )
    async def list_tickets(
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
        status: Annotated[int | None, Field(description="Ticket status filter")] = None,
        query: Annotated[str | None, Field(description="Search query")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HELPDESK_BASE}/tickets",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "status": status,
                    "query": query,
                },
            )
        )

    # lark_helpdesk_update_ticket
    @mcp.tool(
        name="lark_helpdesk_update_ticket",
        description="Update a helpdesk ticket (status, tags, custom fields)",
        annotations=WRITE,
        meta={"category": "helpdesk", "safety_level": "moderate"},
    )
    async def update_ticket(
        ticket_id: TicketId,
        update_body: Annotated[
            str, Field(description="JSON update object {status, tag_names, ...}")
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "PUT",
                f"{HELPDESK_BASE}/tickets/{segment(ticket_id)}",
                body=parse_json(update_body, name="update_body"),
            )
        )

    # lark_helpdesk_send_ticket_message
    @mcp.tool(
        name="lark_helpdesk_send_ticket_message",
        description="Send a message in a helpdesk ticket conversation",
        annotations=WRITE,
        meta={"category": "helpdesk", "safety_level": "moderate"},
    )
    async def send_ticket_message(
        ticket_id: TicketId,
        content: Annotated[str, Field(description="Message content as JSON string")],
        msg_type: Annotated[
            Literal["text", "post", "image", "interactive"], Field(description="Message type")
        ] = "text",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{HELPDESK_BASE}/tickets/{segment(ticket_id)}/messages",
                body={"msg_type": msg_type, "content": json_text(content, name="content")},
            )
        )

    # lark_helpdesk_list_faqs
    @mcp.tool(
        name="lark_helpdesk_list_faqs",
        description="List helpdesk FAQs",
        annotations=READ_ONLY,
        meta={"category": "helpdesk", "safety_level": "safe"},
    )
    async def list_faqs(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HELPDESK_BASE}/faqs",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_helpdesk_search_faqs
    @mcp.tool(
        name="lark_helpdesk_search_faqs",
        description="Search helpdesk FAQs by keyword",
        annotations=READ_ONLY,
        meta={"category": "helpdesk", "safety_level": "safe"},
    )
    async def search_faqs(
        query: Annotated[str, Field(description="Search query")],
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HELPDESK_BASE}/faqs/search",
                params={"query": query, "page_size": page_size, "page_token": page_token},
            )
        )

    # lark_helpdesk_list_categories
    @mcp.tool(
        name="lark_helpdesk_list_categories",
        description="List helpdesk knowledge base categories",
        annotations=READ_ONLY,
        meta={"category": "helpdesk", "safety_level": "safe"},
    )
    async def list_categories():
        return await safe_call(
            lambda: get_client().request("GET", f"{HELPDESK_BASE}/categories")
        )

    # lark_helpdesk_list_agent_schedules
    @mcp.tool(
        name="lark_helpdesk_list_agent_schedules",
        description="List schedules of on-duty helpdesk agents",
        annotations=READ_ONLY,
        meta={"category": "helpdesk", "safety_level": "safe"},
    )
    async def list_agent_schedules():
        return await safe_call(
            lambda: get_client().request(
                "GET", f"{HELPDESK_BASE}/agent_schedules", params={"status": [AGENT_ON_DUTY]}
            )
        )

"""Access control (ACS) tools: access records, devices, visitors and users."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_json, safe_call, segment
from .common import PageSize, PageToken

ACS_BASE = "/open-apis/acs/v1"
OPEN_ID = {"user_id_type": "open_id"}


def register_acs_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_acs_list_access_records
    @mcp.tool(
        name="lark_acs_list_access_records",
        description="List physical access control records",
        annotations=READ_ONLY,
        meta={"category": "acs", "safety_level": "safe"},
    )
    async def list_access_records(
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
        time_from: Annotated[int | None, Field(description="Start timestamp (seconds)")] = None,
        time_to: Annotated[int | None, Field(description="End timestamp (seconds)")] = None,
        user_id: Annotated[str | None, Field(description="Filter by user ID")] = None,
    ):
        # "from" and "to" are the remote query names
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ACS_BASE}/access_records",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "from": time_from,
                    "to": time_to,
                    "user_id": user_id,
                    **OPEN_ID,
                },
            )
        )

    # lark_acs_list_devices
    @mcp.tool(
        name="lark_acs_list_devices",
        description="List access control devices",
        annotations=READ_ONLY,
        meta={"category": "acs", "safety_level": "safe"},
    )
    async def list_devices():
        return await safe_call(lambda: get_client().request("GET", f"{ACS_BASE}/devices"))

    # lark_acs_create_visitor
    @mcp.tool(
        name="lark_acs_create_visitor",
        description="Register a visitor for access control",
        annotations=WRITE,
        meta={"category": "acs", "safety_level": "moderate"},
    )
    async def create_visitor(
        visitor_body: Annotated[
            str, Field(description="JSON visitor object {user, department, ...}")
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{ACS_BASE}/visitors",
                params=OPEN_ID,
                body=parse_json(visitor_body, name="visitor_body"),
            )
        )

    # lark_acs_get_user
    @mcp.tool(
        name="lark_acs_get_user",
        description="Get an access control user profile",
        annotations=READ_ONLY,
        meta={"category": "acs", "safety_level": "safe"},
    )
    async def get_user(user_id: Annotated[str, Field(description="ACS user ID")]):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ACS_BASE}/users/{segment(user_id)}",
                params=OPEN_ID,
            )
        )

    # lark_acs_list_users
    @mcp.tool(
        name="lark_acs_list_users",
        description="List access control users",
        annotations=READ_ONLY,
        meta={"category": "acs", "safety_level": "safe"},
    )
    async def list_users(page_size: PageSize(100) = 50, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ACS_BASE}/users",
                params={"page_size": page_size, "page_token": page_token, **OPEN_ID},
            )
        )

"""Personal settings tools: system statuses such as "In Meeting" or "On Leave"."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_json, safe_call, segment
from .common import PageSize, PageToken

STATUS_BASE = "/open-apis/personal_settings/v1/system_statuses"

SystemStatusId = Annotated[str, Field(description="System status ID")]
UserList = Annotated[str, Field(description='JSON array of user objects [{"user_id":"ou_xxx"}]')]


def register_personal_settings_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_personal_list_system_statuses
    @mcp.tool(
        name="lark_personal_list_system_statuses",
        description="List available system statuses (e.g. In Meeting, On Leave)",
        annotations=READ_ONLY,
        meta={"category": "personal_settings", "safety_level": "safe"},
    )
    async def list_system_statuses(page_size: PageSize(50) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET", STATUS_BASE, params={"page_size": page_size, "page_token": page_token}
            )
        )

    # lark_personal_batch_open_status
    @mcp.tool(
        name="lark_personal_batch_open_status",
        description="Batch enable a system status for users",
        annotations=WRITE,
        meta={"category": "personal_settings", "safety_level": "moderate"},
    )
    async def batch_open_status(system_status_id: SystemStatusId, user_list: UserList):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{STATUS_BASE}/{segment(system_status_id)}/batch_open",
                params={"user_id_type": "open_id"},
                body={"user_list": parse_json(user_list, name="user_list")},
            )
        )

    # lark_personal_batch_close_status
    @mcp.tool(
        name="lark_personal_batch_close_status",
        description="Batch disable a system status for users",
        annotations=WRITE,
        meta={"category": "personal_settings", "safety_level": "moderate"},
    )
    async def batch_close_status(system_status_id: SystemStatusId, user_list: UserList):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{STATUS_BASE}/{segment(system_status_id)}/batch_close",
                params={"user_id_type": "open_id"},
                body={"user_list": parse_json(user_list, name="user_list")},
            )
        )

"""Legacy EHR tools."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import PageSize, PageToken


def register_ehr_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_ehr_list_employees
    @mcp.tool(
        name="lark_ehr_list_employees",
        description="List employees from the EHR roster",
        annotations=READ_ONLY,
        meta={"category": "ehr", "safety_level": "safe"},
    )
    async def list_employees(
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
        status: Annotated[
            list[int] | None, Field(description="Status filter (2=Active, 4=Left)")
        ] = None,
        user_ids: Annotated[list[str] | None, Field(description="Filter by user IDs")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/ehr/v1/employees",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "status": status,
                    "user_ids": user_ids,
                    "user_id_type": "open_id",
                    "view": "full",
                },
            )
        )

    # lark_ehr_get_attachment
    @mcp.tool(
        name="lark_ehr_get_attachment",
        description="Download an EHR attachment (returned base64-encoded)",
        annotations=READ_ONLY,
        meta={"category": "ehr", "safety_level": "safe"},
    )
    async def get_attachment(token: Annotated[str, Field(description="Attachment token")]):
        return await safe_call(
            lambda: get_client().request("GET", f"/open-apis/ehr/v1/attachments/{segment(token)}")
        )

"""Workplace portal analytics tools."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call
from .common import PageSize, PageToken

FromDate = Annotated[str, Field(description="Start date (YYYY-MM-DD)")]
ToDate = Annotated[str, Field(description="End date (YYYY-MM-DD)")]


def register_workplace_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_workplace_search_access_data
    @mcp.tool(
        name="lark_workplace_search_access_data",
        description="Search workplace portal access analytics data",
        annotations=READ_ONLY,
        meta={"category": "workplace", "safety_level": "safe"},
    )
    async def search_access_data(
        from_date: FromDate,
        to_date: ToDate,
        page_size: PageSize(200) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/workplace/v1/workplace_access_data/search",
                params={
                    "from_date": from_date,
                    "to_date": to_date,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_workplace_search_custom_access_data
    @mcp.tool(
        name="lark_workplace_search_custom_access_data",
        description="Search custom workplace widget access analytics",
        annotations=READ_ONLY,
        meta={"category": "workplace", "safety_level": "safe"},
    )
    async def search_custom_access_data(
        from_date: FromDate,
        to_date: ToDate,
        custom_workplace_id: Annotated[
            str | None, Field(description="Custom workplace ID")
        ] = None,
        page_size: PageSize(200) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/workplace/v1/custom_workplace_access_data/search",
                params={
                    "from_date": from_date,
                    "to_date": to_date,
                    "custom_workplace_id": custom_workplace_id,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

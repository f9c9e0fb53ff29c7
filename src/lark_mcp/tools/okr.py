"""OKR tools: periods, user OKRs and progress records."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_json, safe_call, segment
from .common import PageSize, PageToken

OKR_BASE = "/open-apis/okr/v1"
OPEN_ID = {"user_id_type": "open_id"}

# progress records attached to an objective use source_type 1
SOURCE_TYPE_OKR = 1


def register_okr_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_okr_list_periods
    @mcp.tool(
        name="lark_okr_list_periods",
        description="List OKR periods",
        annotations=READ_ONLY,
        meta={"category": "okr", "safety_level": "safe"},
    )
    async def list_periods(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{OKR_BASE}/periods",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_okr_list_user_okrs
    @mcp.tool(
        name="lark_okr_list_user_okrs",
        description="List OKRs of a user",
        annotations=READ_ONLY,
        meta={"category": "okr", "safety_level": "safe"},
    )
    async def list_user_okrs(
        user_id: Annotated[str, Field(description="User open_id")],
        offset: Annotated[int, Field(ge=0, description="Result offset")] = 0,
        limit: PageSize(50, "Number of OKRs") = 20,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{OKR_BASE}/users/{segment(user_id)}/okrs",
                params={"offset": str(offset), "limit": str(limit), **OPEN_ID},
            )
        )

    # lark_okr_batch_get
    @mcp.tool(
        name="lark_okr_batch_get",
        description="Get several OKRs by ID",
        annotations=READ_ONLY,
        meta={"category": "okr", "safety_level": "safe"},
    )
    async def batch_get(
        okr_ids: Annotated[list[str], Field(description="List of OKR IDs")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET", f"{OKR_BASE}/okrs/batch_get", params={"okr_ids": okr_ids, **OPEN_ID}
            )
        )

    # lark_okr_create_progress
    @mcp.tool(
        name="lark_okr_create_progress",
        description="Create a progress record on an OKR",
        annotations=WRITE,
        meta={"category": "okr", "safety_level": "moderate"},
    )
    async def create_progress(
        okr_id: Annotated[str, Field(description="OKR ID")],
        content: Annotated[
            str, Field(description="JSON content object for the progress update")
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{OKR_BASE}/progress_records",
                params=OPEN_ID,
                body={
                    "source_id": okr_id,
                    "source_type": SOURCE_TYPE_OKR,
                    "content": parse_json(content, name="content"),
                },
            )
        )

    # lark_okr_get_progress
    @mcp.tool(
        name="lark_okr_get_progress",
        description="Get an OKR progress record",
        annotations=READ_ONLY,
        meta={"category": "okr", "safety_level": "safe"},
    )
    async def get_progress(
        progress_id: Annotated[str, Field(description="Progress record ID")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET", f"{OKR_BASE}/progress_records/{segment(progress_id)}", params=OPEN_ID
            )
        )

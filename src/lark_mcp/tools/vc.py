"""Video conferencing tools: reservations, meetings, rooms and reports."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_optional_json, safe_call, segment
from .common import PageSize, PageToken

VC_BASE = "/open-apis/vc/v1"

MeetingId = Annotated[str, Field(description="Meeting ID")]
StartDate = Annotated[str, Field(description="Start date (Unix seconds)")]
EndDate = Annotated[str, Field(description="End date (Unix seconds)")]


def register_vc_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_vc_reserve_meeting
    @mcp.tool(
        name="lark_vc_reserve_meeting",
        description="Reserve a video conference meeting",
        annotations=WRITE,
        meta={"category": "vc", "safety_level": "moderate"},
    )
    async def reserve_meeting(
        subject: Annotated[str, Field(description="Meeting subject/title")],
        start_time: Annotated[str, Field(description="Start time (Unix seconds)")],
        end_time: Annotated[str, Field(description="End time (Unix seconds)")],
        meeting_settings: Annotated[
            str | None,
            Field(description="JSON meeting settings {owner_id, join_meeting_permission, ...}"),
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{VC_BASE}/reserves/apply",
                params={"user_id_type": "open_id"},
                body={
                    "subject": subject,
                    "start_time": start_time,
                    "end_time": end_time,
                    "meeting_settings": parse_optional_json(
                        meeting_settings, name="meeting_settings"
                    ),
                },
            )
        )

    # lark_vc_get_meeting
    @mcp.tool(
        name="lark_vc_get_meeting",
        description="Get details of a video conference meeting",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def get_meeting(meeting_id: MeetingId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{VC_BASE}/meetings/{segment(meeting_id)}",
                params={"with_participants": True, "user_id_type": "open_id"},
            )
        )

    # lark_vc_list_meetings
    @mcp.tool(
        name="lark_vc_list_meetings",
        description="List meetings by meeting number",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def list_meetings(
        meeting_no: Annotated[str, Field(description="Meeting number")],
        start_time: Annotated[
            str | None, Field(description="Start time filter (Unix seconds)")
        ] = None,
        end_time: Annotated[str | None, Field(description="End time filter (Unix seconds)")] = None,
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{VC_BASE}/meetings/list_by_no",
                params={
                    "meeting_no": meeting_no,
                    "start_time": start_time,
                    "end_time": end_time,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_vc_end_meeting
    @mcp.tool(
        name="lark_vc_end_meeting",
        description="End an ongoing meeting",
        annotations=WRITE,
        meta={"category": "vc", "safety_level": "moderate"},
    )
    async def end_meeting(meeting_id: MeetingId):
        return await safe_call(
            lambda: get_client().request("PATCH", f"{VC_BASE}/meetings/{segment(meeting_id)}/end")
        )

    # lark_vc_get_recording
    @mcp.tool(
        name="lark_vc_get_recording",
        description="Get the recording of a meeting",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def get_recording(meeting_id: MeetingId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{VC_BASE}/meetings/{segment(meeting_id)}/recording",
            )
        )

    # lark_vc_list_rooms
    @mcp.tool(
        name="lark_vc_list_rooms",
        description="List meeting rooms",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def list_rooms(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{VC_BASE}/rooms",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_vc_search_rooms
    @mcp.tool(
        name="lark_vc_search_rooms",
        description="Search meeting rooms by keyword",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def search_rooms(
        query: Annotated[str, Field(description="Search keyword")],
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{VC_BASE}/rooms/search",
                params={"page_size": page_size, "page_token": page_token},
                body={"query": query},
            )
        )

    # lark_vc_get_daily_report
    @mcp.tool(
        name="lark_vc_get_daily_report",
        description="Get daily meeting usage report",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def get_daily_report(start_time: StartDate, end_time: EndDate):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{VC_BASE}/reports/get_daily",
                params={"start_time": start_time, "end_time": end_time},
            )
        )

    # lark_vc_get_top_users
    @mcp.tool(
        name="lark_vc_get_top_users",
        description="Get the users with the most meeting activity",
        annotations=READ_ONLY,
        meta={"category": "vc", "safety_level": "safe"},
    )
    async def get_top_users(
        start_time: StartDate,
        end_time: EndDate,
        limit: PageSize(100, "Number of users") = 10,
        order_by: Annotated[
            Literal["total_duration", "meeting_count"], Field(description="Ranking metric")
        ] = "total_duration",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{VC_BASE}/reports/get_top_user",
                params={
                    "start_time": start_time,
                    "end_time": end_time,
                    "limit": limit,
                    "order_by": order_by,
                },
            )
        )

"""Attendance tools: groups, shifts, clock-in results and statistics.

Users are always identified by ``employee_id``.
"""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import PageSize, PageToken

ATTENDANCE_BASE = "/open-apis/attendance/v1"
EMPLOYEE_ID = {"employee_type": "employee_id"}

EmployeeIds = Annotated[list[str], Field(description="List of employee IDs")]


def register_attendance_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_attendance_get_group
    @mcp.tool(
        name="lark_attendance_get_group",
        description="Get details of an attendance group",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def get_group(group_id: Annotated[str, Field(description="Attendance group ID")]):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ATTENDANCE_BASE}/groups/{segment(group_id)}",
                params={**EMPLOYEE_ID, "dept_type": "open_id"},
            )
        )

    # lark_attendance_search_groups
    @mcp.tool(
        name="lark_attendance_search_groups",
        description="Search attendance groups by name",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def search_groups(
        group_name: Annotated[str, Field(description="Group name to search")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST", f"{ATTENDANCE_BASE}/groups/search", body={"group_name": group_name}
            )
        )

    # lark_attendance_list_shifts
    @mcp.tool(
        name="lark_attendance_list_shifts",
        description="List attendance shifts",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def list_shifts(page_size: PageSize(100) = 50, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ATTENDANCE_BASE}/shifts",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_attendance_get_shift
    @mcp.tool(
        name="lark_attendance_get_shift",
        description="Get details of an attendance shift",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def get_shift(shift_id: Annotated[str, Field(description="Shift ID")]):
        return await safe_call(
            lambda: get_client().request("GET", f"{ATTENDANCE_BASE}/shifts/{segment(shift_id)}")
        )

    # lark_attendance_query_user_task
    @mcp.tool(
        name="lark_attendance_query_user_task",
        description="Query clock-in results of users over a date range",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def query_user_task(
        user_ids: EmployeeIds,
        check_date_from: Annotated[int, Field(description="Start date (YYYYMMDD as number)")],
        check_date_to: Annotated[int, Field(description="End date (YYYYMMDD as number)")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{ATTENDANCE_BASE}/user_tasks/query",
                params=EMPLOYEE_ID,
                body={
                    "user_ids": user_ids,
                    "check_date_from": check_date_from,
                    "check_date_to": check_date_to,
                },
            )
        )

    # lark_attendance_query_stats
    @mcp.tool(
        name="lark_attendance_query_stats",
        description="Query attendance statistics of users",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def query_stats(
        user_ids: EmployeeIds,
        start_date: Annotated[int, Field(description="Start date (YYYYMMDD as number)")],
        end_date: Annotated[int, Field(description="End date (YYYYMMDD as number)")],
        locale: Annotated[
            Literal["en", "ja", "zh"], Field(description="Language of stat headers")
        ] = "zh",
        stats_type: Annotated[
            Literal["daily", "month"], Field(description="Daily or monthly statistics")
        ] = "daily",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{ATTENDANCE_BASE}/user_stats_datas/query",
                params=EMPLOYEE_ID,
                body={
                    "user_ids": user_ids,
                    "start_date": start_date,
                    "end_date": end_date,
                    "locale": locale,
                    "stats_type": stats_type,
                },
            )
        )

    # lark_attendance_query_user_flow
    @mcp.tool(
        name="lark_attendance_query_user_flow",
        description="Query raw clock-in flow records of users",
        annotations=READ_ONLY,
        meta={"category": "attendance", "safety_level": "safe"},
    )
    async def query_user_flow(
        user_ids: EmployeeIds,
        check_time_from: Annotated[str, Field(description="Start timestamp (seconds)")],
        check_time_to: Annotated[str, Field(description="End timestamp (seconds)")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{ATTENDANCE_BASE}/user_flows/query",
                params=EMPLOYEE_ID,
                body={
                    "user_ids": user_ids,
                    "check_time_from": check_time_from,
                    "check_time_to": check_time_to,
                },
            )
        )

"""Tenant administration tools: audit logs, usage statistics, badges and passwords."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, safe_call
from .common import DepartmentIdType, PageSize, PageToken, UserIdType

ADMIN_BASE = "/open-apis/admin/v1"

StartDate = Annotated[str, Field(description="Start date (YYYY-MM-DD)")]
EndDate = Annotated[str, Field(description="End date (YYYY-MM-DD)")]


def register_admin_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_admin_list_audit_logs
    @mcp.tool(
        name="lark_admin_list_audit_logs",
        description="List tenant audit log entries",
        annotations=READ_ONLY,
        meta={"category": "admin", "safety_level": "safe"},
    )
    async def list_audit_logs(page_size: PageSize(200) = 50, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ADMIN_BASE}/audit_infos",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_admin_list_dept_stats
    @mcp.tool(
        name="lark_admin_list_dept_stats",
        description="List admin department statistics",
        annotations=READ_ONLY,
        meta={"category": "admin", "safety_level": "safe"},
    )
    async def list_dept_stats(
        start_date: StartDate,
        end_date: EndDate,
        department_id: Annotated[str | None, Field(description="Department ID filter")] = None,
        department_id_type: DepartmentIdType = "open_department_id",
        page_size: PageSize(200) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ADMIN_BASE}/admin_dept_stats",
                params={
                    "department_id_type": department_id_type,
                    "start_date": start_date,
                    "end_date": end_date,
                    "department_id": department_id,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_admin_list_user_stats
    @mcp.tool(
        name="lark_admin_list_user_stats",
        description="List admin user statistics",
        annotations=READ_ONLY,
        meta={"category": "admin", "safety_level": "safe"},
    )
    async def list_user_stats(
        start_date: StartDate,
        end_date: EndDate,
        department_id: Annotated[str | None, Field(description="Department ID filter")] = None,
        user_id: Annotated[str | None, Field(description="User ID filter")] = None,
        user_id_type: Annotated[UserIdType, Field(description="User ID type")] = "open_id",
        department_id_type: DepartmentIdType = "open_department_id",
        page_size: PageSize(200) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ADMIN_BASE}/admin_user_stats",
                params={
                    "user_id_type": user_id_type,
                    "department_id_type": department_id_type,
                    "start_date": start_date,
                    "end_date": end_date,
                    "department_id": department_id,
                    "user_id": user_id,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_admin_list_badges
    @mcp.tool(
        name="lark_admin_list_badges",
        description="List badges defined in the tenant",
        annotations=READ_ONLY,
        meta={"category": "admin", "safety_level": "safe"},
    )
    async def list_badges(page_size: PageSize(50) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{ADMIN_BASE}/badges",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_admin_reset_password
    @mcp.tool(
        name="lark_admin_reset_password",
        description="Reset a user's enterprise email password",
        annotations=WRITE,
        meta={"category": "admin", "safety_level": "dangerous"},
    )
    async def reset_password(
        user_id: Annotated[str, Field(description="User open_id")],
        password: Annotated[str, Field(description="New password")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{ADMIN_BASE}/password/reset",
                params={"user_id_type": "open_id"},
                body={"password": {"ent_email_password": password}, "user_id": user_id},
            )
        )

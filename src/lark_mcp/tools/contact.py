"""Contact directory tools: users, departments and user groups."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import DepartmentIdType, PageSize, PageToken, UserIdType


def register_contact_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_contact_get_user
    @mcp.tool(
        name="lark_contact_get_user",
        description="Get detailed information about a user",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def get_user(
        user_id: Annotated[str, Field(description="User ID")],
        user_id_type: Annotated[UserIdType, Field(description="User ID type")] = "open_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/contact/v3/users/{segment(user_id)}",
                params={"user_id_type": user_id_type},
            )
        )

    # lark_contact_batch_get_user_id
    @mcp.tool(
        name="lark_contact_batch_get_user_id",
        description="Look up user IDs by email addresses or mobile numbers",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def batch_get_user_id(
        emails: Annotated[list[str] | None, Field(description="Email addresses")] = None,
        mobiles: Annotated[list[str] | None, Field(description="Mobile numbers")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/contact/v3/users/batch_get_id",
                params={"user_id_type": "open_id"},
                body={"emails": emails, "mobiles": mobiles},
            )
        )

    # lark_contact_list_users
    @mcp.tool(
        name="lark_contact_list_users",
        description="List users that belong directly to a department",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def list_users(
        department_id: Annotated[str, Field(description='Department ID ("0" for root)')],
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
        department_id_type: DepartmentIdType = "open_department_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/contact/v3/users/find_by_department",
                params={
                    "department_id": department_id,
                    "department_id_type": department_id_type,
                    "user_id_type": "open_id",
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_contact_search_user
    @mcp.tool(
        name="lark_contact_search_user",
        description="Search users by name or keyword",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def search_user(
        query: Annotated[str, Field(description="Search keyword")],
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
        user_id_type: Annotated[UserIdType, Field(description="User ID type")] = "open_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/search/v1/user",
                params={
                    "user_id_type": user_id_type,
                    "page_size": page_size,
                    "page_token": page_token,
                },
                body={"query": query},
            )
        )

    # lark_contact_get_department
    @mcp.tool(
        name="lark_contact_get_department",
        description="Get information about a department",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def get_department(
        department_id: Annotated[str, Field(description="Department ID")],
        department_id_type: DepartmentIdType = "open_department_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/contact/v3/departments/{segment(department_id)}",
                params={"department_id_type": department_id_type, "user_id_type": "open_id"},
            )
        )

    # lark_contact_list_departments
    @mcp.tool(
        name="lark_contact_list_departments",
        description="List sub-departments of a department",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def list_departments(
        parent_department_id: Annotated[
            str, Field(description='Parent department ID ("0" for root)')
        ],
        fetch_child: Annotated[
            bool, Field(description="Recursively include all descendants")
        ] = False,
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
        department_id_type: DepartmentIdType = "open_department_id",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/contact/v3/departments/{segment(parent_department_id)}/children",
                params={
                    "department_id_type": department_id_type,
                    "user_id_type": "open_id",
                    "fetch_child": fetch_child,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_contact_list_groups
    @mcp.tool(
        name="lark_contact_list_groups",
        description="List user groups in the tenant",
        annotations=READ_ONLY,
        meta={"category": "contact", "safety_level": "safe"},
    )
    async def list_groups(
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
        type: Annotated[
            int | None, Field(description="Group type: 1 = normal, 2 = dynamic")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/contact/v3/group/simplelist",
                params={"page_size": page_size, "page_token": page_token, "type": type},
            )
        )

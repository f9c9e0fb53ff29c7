"""Core HR tools: employees, organisation structure, contracts and offboarding."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import PageSize, PageToken

COREHR_V1 = "/open-apis/corehr/v1"
COREHR_V2 = "/open-apis/corehr/v2"
OPEN_ID = {"user_id_type": "open_id"}


def register_corehr_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    def list_tool(name: str, description: str, resource: str) -> None:
        """Register a plain paginated list over a v1 catalogue resource."""

        @mcp.tool(
            name=name,
            description=description,
            annotations=READ_ONLY,
            meta={"category": "corehr", "safety_level": "safe"},
        )
        async def list_resource(page_size: PageSize(100) = 50, page_token: PageToken = None):
            return await safe_call(
                lambda: get_client().request(
                    "GET",
                    f"{COREHR_V1}/{resource}",
                    params={"page_size": page_size, "page_token": page_token},
                )
            )

    # lark_corehr_search_employees
    @mcp.tool(
        name="lark_corehr_search_employees",
        description="Search employees in Core HR",
        annotations=READ_ONLY,
        meta={"category": "corehr", "safety_level": "safe"},
    )
    async def search_employees(
        fields: Annotated[list[str] | None, Field(description="Fields to return")] = None,
        employment_id_list: Annotated[
            list[str] | None, Field(description="Filter by employment IDs")
        ] = None,
        work_email_list: Annotated[
            list[str] | None, Field(description="Filter by work emails")
        ] = None,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{COREHR_V2}/employees/search",
                params={"page_size": page_size, "page_token": page_token, **OPEN_ID},
                body={
                    "fields": fields,
                    "employment_id_list": employment_id_list,
                    "work_email_list": work_email_list,
                },
            )
        )

    # lark_corehr_list_departments
    @mcp.tool(
        name="lark_corehr_list_departments",
        description="List Core HR departments",
        annotations=READ_ONLY,
        meta={"category": "corehr", "safety_level": "safe"},
    )
    async def list_departments(
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
        department_id_list: Annotated[
            list[str] | None, Field(description="Filter by department IDs")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{COREHR_V1}/departments",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "department_id_list": department_id_list,
                },
            )
        )

    # lark_corehr_get_department
    @mcp.tool(
        name="lark_corehr_get_department",
        description="Get a Core HR department",
        annotations=READ_ONLY,
        meta={"category": "corehr", "safety_level": "safe"},
    )
    async def get_department(department_id: Annotated[str, Field(description="Department ID")]):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{COREHR_V1}/departments/{segment(department_id)}",
            )
        )

    list_tool("lark_corehr_list_job_levels", "List job levels", "job_levels")
    list_tool("lark_corehr_list_job_families", "List job families", "job_families")
    list_tool("lark_corehr_list_companies", "List companies", "companies")
    list_tool("lark_corehr_list_locations", "List work locations", "locations")

    # lark_corehr_get_contract
    @mcp.tool(
        name="lark_corehr_get_contract",
        description="Get an employment contract",
        annotations=READ_ONLY,
        meta={"category": "corehr", "safety_level": "safe"},
    )
    async def get_contract(contract_id: Annotated[str, Field(description="Contract ID")]):
        return await safe_call(
            lambda: get_client().request("GET", f"{COREHR_V1}/contracts/{segment(contract_id)}")
        )

    # lark_corehr_search_offboarding
    @mcp.tool(
        name="lark_corehr_search_offboarding",
        description="Search offboarding records",
        annotations=READ_ONLY,
        meta={"category": "corehr", "safety_level": "safe"},
    )
    async def search_offboarding(
        employment_ids: Annotated[
            list[str] | None, Field(description="Filter by employment IDs")
        ] = None,
        apply_initiating_time_begin: Annotated[
            str | None, Field(description="Start time filter")
        ] = None,
        apply_initiating_time_end: Annotated[
            str | None, Field(description="End time filter")
        ] = None,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{COREHR_V1}/offboardings/search",
                params={"page_size": page_size, "page_token": page_token, **OPEN_ID},
                body={
                    "employment_ids": employment_ids,
                    "apply_initiating_time_begin": apply_initiating_time_begin,
                    "apply_initiating_time_end": apply_initiating_time_end,
                },
            )
        )

    list_tool("lark_corehr_list_employee_types", "List employee types", "employee_types")

"""Recruitment tools: jobs, applications, talents, interviews and offers."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import PageSize, PageToken

HIRE_BASE = "/open-apis/hire/v1"
OPEN_ID = {"user_id_type": "open_id"}

ApplicationId = Annotated[str, Field(description="Application ID")]


def register_hire_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_hire_list_jobs
    @mcp.tool(
        name="lark_hire_list_jobs",
        description="List recruitment jobs",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def list_jobs(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/jobs",
                params={"page_size": page_size, "page_token": page_token, **OPEN_ID},
            )
        )

    # lark_hire_get_job
    @mcp.tool(
        name="lark_hire_get_job",
        description="Get job details",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def get_job(job_id: Annotated[str, Field(description="Job ID")]):
        return await safe_call(
            lambda: get_client().request(
                "GET", f"{HIRE_BASE}/jobs/{segment(job_id)}/get_detail", params=OPEN_ID
            )
        )

    # lark_hire_list_applications
    @mcp.tool(
        name="lark_hire_list_applications",
        description="List job applications",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def list_applications(
        job_id: Annotated[str | None, Field(description="Filter by job ID")] = None,
        talent_id: Annotated[str | None, Field(description="Filter by talent ID")] = None,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/applications",
                params={
                    "job_id": job_id,
                    "talent_id": talent_id,
                    "page_size": page_size,
                    "page_token": page_token,
                    **OPEN_ID,
                },
            )
        )

    # lark_hire_get_application
    @mcp.tool(
        name="lark_hire_get_application",
        description="Get a job application",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def get_application(application_id: ApplicationId):
        return await safe_call(
            lambda: get_client().request(
                "GET", f"{HIRE_BASE}/applications/{segment(application_id)}", params=OPEN_ID
            )
        )

    # lark_hire_get_application_detail
    @mcp.tool(
        name="lark_hire_get_application_detail",
        description="Get full details of a job application (talent, job, evaluations)",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def get_application_detail(application_id: ApplicationId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/applications/{segment(application_id)}/get_detail",
                params=OPEN_ID,
            )
        )

    # lark_hire_get_talent
    @mcp.tool(
        name="lark_hire_get_talent",
        description="Get talent (candidate) information",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def get_talent(talent_id: Annotated[str, Field(description="Talent ID")]):
        return await safe_call(
            lambda: get_client().request(
                "GET", f"{HIRE_BASE}/talents/{segment(talent_id)}", params=OPEN_ID
            )
        )

    # lark_hire_list_interviews
    @mcp.tool(
        name="lark_hire_list_interviews",
        description="List interviews of an application",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def list_interviews(
        application_id: ApplicationId,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/applications/{segment(application_id)}/interviews",
                params={"page_size": page_size, "page_token": page_token, **OPEN_ID},
            )
        )

    # lark_hire_get_offer
    @mcp.tool(
        name="lark_hire_get_offer",
        description="Get offer details",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def get_offer(offer_id: Annotated[str, Field(description="Offer ID")]):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/offers/{segment(offer_id)}",
                params=OPEN_ID,
            )
        )

    # lark_hire_list_offers
    @mcp.tool(
        name="lark_hire_list_offers",
        description="List offers of a talent",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def list_offers(
        talent_id: Annotated[str, Field(description="Talent ID to list offers for")],
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/offers",
                params={
                    "talent_id": talent_id,
                    "page_size": page_size,
                    "page_token": page_token,
                    **OPEN_ID,
                },
            )
        )

    # lark_hire_list_job_processes
    @mcp.tool(
        name="lark_hire_list_job_processes",
        description="List recruitment processes",
        annotations=READ_ONLY,
        meta={"category": "hire", "safety_level": "safe"},
    )
    async def list_job_processes(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{HIRE_BASE}/job_processes",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

"""Application directory tools: app info, usage analytics and feedback."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import PageSize, PageToken

APP_BASE = "/open-apis/application/v6/applications"

AppId = Annotated[str, Field(description="Application ID")]
CycleType = Annotated[int, Field(description="1=Daily, 2=Weekly, 3=Monthly")]


def register_application_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_app_get
    @mcp.tool(
        name="lark_app_get",
        description="Get information about a Feishu application",
        annotations=READ_ONLY,
        meta={"category": "application", "safety_level": "safe"},
    )
    async def get_app(app_id: AppId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{APP_BASE}/{segment(app_id)}",
                params={"lang": "zh_cn"},
            )
        )

    # lark_app_list
    @mcp.tool(
        name="lark_app_list",
        description="List Feishu applications in the organization",
        annotations=READ_ONLY,
        meta={"category": "application", "safety_level": "safe"},
    )
    async def list_apps(
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
        lang: Annotated[
            Literal["zh_cn", "en_us", "ja_jp"], Field(description="Language of app names")
        ] = "zh_cn",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                APP_BASE,
                params={"page_size": page_size, "page_token": page_token, "lang": lang},
            )
        )

    # lark_app_usage_overview
    @mcp.tool(
        name="lark_app_usage_overview",
        description="Get application usage statistics overview",
        annotations=READ_ONLY,
        meta={"category": "application", "safety_level": "safe"},
    )
    async def usage_overview(
        app_id: AppId,
        date: Annotated[str, Field(description="Date (YYYY-MM-DD)")],
        cycle_type: CycleType,
        ability: Annotated[
            Literal["app", "mp", "h5", "bot", "gadget"] | None,
            Field(description="App ability to report on"),
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{APP_BASE}/{segment(app_id)}/app_usage/overview",
                params={"department_id_type": "open_department_id"},
                body={"date": date, "cycle_type": cycle_type, "ability": ability},
            )
        )

    # lark_app_department_overview
    @mcp.tool(
        name="lark_app_department_overview",
        description="Get application usage by department",
        annotations=READ_ONLY,
        meta={"category": "application", "safety_level": "safe"},
    )
    async def department_overview(
        app_id: AppId,
        date: Annotated[str, Field(description="Date (YYYY-MM-DD)")],
        cycle_type: CycleType,
        department_id: Annotated[str | None, Field(description="Department ID filter")] = None,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{APP_BASE}/{segment(app_id)}/app_usage/department_overview",
                params={"department_id_type": "open_department_id"},
                body={
                    "date": date,
                    "cycle_type": cycle_type,
                    "department_id": department_id,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_app_list_feedback
    @mcp.tool(
        name="lark_app_list_feedback",
        description="List user feedback for an application",
        annotations=READ_ONLY,
        meta={"category": "application", "safety_level": "safe"},
    )
    async def list_feedback(
        app_id: AppId,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
        feedback_type: Annotated[
            int | None, Field(description="1=Positive, 2=Negative")
        ] = None,
        status: Annotated[
            int | None,
            Field(description="0=Unprocessed, 1=Processing, 2=Processed, 3=Closed"),
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{APP_BASE}/{segment(app_id)}/feedbacks",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "feedback_type": feedback_type,
                    "status": status,
                    "user_id_type": "open_id",
                },
            )
        )

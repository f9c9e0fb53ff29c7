"""Approval tools: definitions, instances, tasks and comments."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import (
    READ_ONLY,
    WRITE,
    json_text,
    parse_optional_json,
    safe_call,
    segment,
)
from .common import ApprovalLocale, PageSize, PageToken

ApprovalCode = Annotated[str, Field(description="Approval definition code")]
InstanceCode = Annotated[str, Field(description="Instance code")]
TaskId = Annotated[str, Field(description="Task ID")]


def register_approval_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_approval_list_definitions
    @mcp.tool(
        name="lark_approval_list_definitions",
        description="List approval definitions",
        annotations=READ_ONLY,
        meta={"category": "approval", "safety_level": "safe"},
    )
    async def list_definitions(
        page_size: PageSize(200) = 20,
        page_token: PageToken = None,
        locale: ApprovalLocale = "zh-CN",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/approval/v4/approvals",
                params={"page_size": page_size, "page_token": page_token, "locale": locale},
            )
        )

    # lark_approval_get_definition
    @mcp.tool(
        name="lark_approval_get_definition",
        description="Get an approval definition (form schema and process nodes)",
        annotations=READ_ONLY,
        meta={"category": "approval", "safety_level": "safe"},
    )
    async def get_definition(approval_code: ApprovalCode, locale: ApprovalLocale = "zh-CN"):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/approval/v4/approvals/{segment(approval_code)}",
                params={"locale": locale},
            )
        )

    # lark_approval_create_instance
    @mcp.tool(
        name="lark_approval_create_instance",
        description="Submit a new approval instance",
        annotations=WRITE,
        meta={"category": "approval", "safety_level": "moderate"},
    )
    async def create_instance(
        approval_code: ApprovalCode,
        open_id: Annotated[str, Field(description="Submitter open_id")],
        form: Annotated[
            str,
            Field(
                description=(
                    'JSON string of form data, e.g. [{"id":"widget1","type":"input","value":"xxx"}]'
                )
            ),
        ],
        node_approver_open_id_list: Annotated[
            str | None, Field(description="JSON array of node-level approver overrides")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/approval/v4/instances",
                body={
                    "approval_code": approval_code,
                    "open_id": open_id,
                    "form": json_text(form, name="form"),
                    "node_approver_open_id_list": parse_optional_json(
                        node_approver_open_id_list, name="node_approver_open_id_list"
                    ),
                },
            )
        )

    # lark_approval_get_instance
    @mcp.tool(
        name="lark_approval_get_instance",
        description="Get details of an approval instance",
        annotations=READ_ONLY,
        meta={"category": "approval", "safety_level": "safe"},
    )
    async def get_instance(
        instance_id: Annotated[str, Field(description="Approval instance ID")],
        locale: ApprovalLocale = "zh-CN",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/approval/v4/instances/{segment(instance_id)}",
                params={"locale": locale},
            )
        )

    # lark_approval_list_instances
    @mcp.tool(
        name="lark_approval_list_instances",
        description="Query approval instances of a definition within a time range",
        annotations=READ_ONLY,
        meta={"category": "approval", "safety_level": "safe"},
    )
    async def list_instances(
        approval_code: ApprovalCode,
        start_time: Annotated[str, Field(description="Start timestamp (ms)")],
        end_time: Annotated[str, Field(description="End timestamp (ms)")],
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/approval/v4/instances/query",
                params={"page_size": page_size, "page_token": page_token},
                body={
                    "approval_code": approval_code,
                    "instance_start_time_from": start_time,
                    "instance_start_time_to": end_time,
                },
            )
        )

    # lark_approval_approve_task
    @mcp.tool(
        name="lark_approval_approve_task",
        description="Approve an approval task",
        annotations=WRITE,
        meta={"category": "approval", "safety_level": "moderate"},
    )
    async def approve_task(
        approval_code: ApprovalCode,
        instance_code: InstanceCode,
        user_id: Annotated[str, Field(description="Approver open_id")],
        task_id: TaskId,
        comment: Annotated[str | None, Field(description="Approval comment")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/approval/v4/tasks/approve",
                body={
                    "approval_code": approval_code,
                    "instance_code": instance_code,
                    "user_id": user_id,
                    "task_id": task_id,
                    "comment": comment,
                },
            )
        )

    # lark_approval_reject_task
    @mcp.tool(
        name="lark_approval_reject_task",
        description="Reject an approval task",
        annotations=WRITE,
        meta={"category": "approval", "safety_level": "moderate"},
    )
    async def reject_task(
        approval_code: ApprovalCode,
        instance_code: InstanceCode,
        user_id: Annotated[str, Field(description="Approver open_id")],
        task_id: TaskId,
        comment: Annotated[str | None, Field(description="Rejection reason")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/approval/v4/tasks/reject",
                body={
                    "approval_code": approval_code,
                    "instance_code": instance_code,
                    "user_id": user_id,
                    "task_id": task_id,
                    "comment": comment,
                },
            )
        )

    # lark_approval_transfer_task
    @mcp.tool(
        name="lark_approval_transfer_task",
        description="Transfer an approval task to another user",
        annotations=WRITE,
        meta={"category": "approval", "safety_level": "moderate"},
    )
    async def transfer_task(
        approval_code: ApprovalCode,
        instance_code: InstanceCode,
        user_id: Annotated[str, Field(description="Current approver open_id")],
        task_id: TaskId,
        transfer_user_id: Annotated[str, Field(description="Target user open_id")],
        comment: Annotated[str | None, Field(description="Transfer comment")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/approval/v4/tasks/transfer",
                body={
                    "approval_code": approval_code,
                    "instance_code": instance_code,
                    "user_id": user_id,
                    "task_id": task_id,
                    "transfer_user_id": transfer_user_id,
                    "comment": comment,
                },
            )
        )

    # lark_approval_add_comment
    @mcp.tool(
        name="lark_approval_add_comment",
        description="Add a comment to an approval instance",
        annotations=WRITE,
        meta={"category": "approval", "safety_level": "moderate"},
    )
    async def add_comment(
        instance_id: Annotated[str, Field(description="Instance ID")],
        content: Annotated[str, Field(description="Comment content")],
        user_id: Annotated[str | None, Field(description="Commenter open_id")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/approval/v4/instances/{segment(instance_id)}/comments",
                params={"user_id_type": "open_id"},
                body={"content": content, "user_id": user_id},
            )
        )

    # lark_approval_cancel_instance
    @mcp.tool(
        name="lark_approval_cancel_instance",
        description="Cancel / withdraw an approval instance",
        annotations=WRITE,
        meta={"category": "approval", "safety_level": "moderate"},
    )
    async def cancel_instance(
        approval_code: ApprovalCode,
        instance_code: InstanceCode,
        user_id: Annotated[str, Field(description="Submitter open_id")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/approval/v4/instances/cancel",
                body={
                    "approval_code": approval_code,
                    "instance_code": instance_code,
                    "user_id": user_id,
                },
            )
        )

"""Task v2 tools: tasks, comments, members and task lists.

Task patches must name the fields they change, so ``update_fields`` is
always derived from the keys of the submitted ``task`` object.
"""

import time
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import (
    DESTRUCTIVE,
    READ_ONLY,
    WRITE,
    parse_json,
    parse_optional_json,
    safe_call,
    segment,
)
from .common import PageSize, PageToken

TASK_BASE = "/open-apis/task/v2"

TaskGuid = Annotated[str, Field(description="Task GUID")]

MEMBERS_EXAMPLE = 'JSON array of member objects, e.g. [{"id":"ou_xxx","role":"assignee"}]'


def _patch_body(task: Any) -> dict[str, Any]:
    if not isinstance(task, dict) or not task:
        raise ValueError("'update_fields' must be a non-empty JSON object")
    return {"task": task, "update_fields": list(task)}


def register_task_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_task_create
    @mcp.tool(
        name="lark_task_create",
        description="Create a new task in Feishu Tasks",
        annotations=WRITE,
        meta={"category": "task", "safety_level": "moderate"},
    )
    async def create_task(
        summary: Annotated[str, Field(description="Task title / summary")],
        description: Annotated[str | None, Field(description="Task description")] = None,
        due: Annotated[str | None, Field(description="Due timestamp (milliseconds)")] = None,
        members: Annotated[str | None, Field(description=MEMBERS_EXAMPLE)] = None,
        origin: Annotated[
            str | None, Field(description="JSON origin object {platform_i18n_name, href}")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{TASK_BASE}/tasks",
                params={"user_id_type": "open_id"},
                body={
                    "summary": summary,
                    "description": description,
                    "due": {"timestamp": due, "is_all_day": False} if due else None,
                    "members": parse_optional_json(members, name="members"),
                    "origin": parse_optional_json(origin, name="origin"),
                },
            )
        )

    # lark_task_get
    @mcp.tool(
        name="lark_task_get",
        description="Get details of a task by ID",
        annotations=READ_ONLY,
        meta={"category": "task", "safety_level": "safe"},
    )
    async def get_task(task_guid: TaskGuid):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{TASK_BASE}/tasks/{segment(task_guid)}",
                params={"user_id_type": "open_id"},
            )
        )

    # lark_task_update
    @mcp.tool(
        name="lark_task_update",
        description="Update a task (summary, description, due date, etc.)",
        annotations=WRITE,
        meta={"category": "task", "safety_level": "moderate"},
    )
    async def update_task(
        task_guid: TaskGuid,
        update_fields: Annotated[
            str,
            Field(
                description=(
                    'JSON object with fields to update, e.g. {"summary":"new title",'
                    '"completed_at":"1700000000000"}'
                )
            ),
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "PATCH",
                f"{TASK_BASE}/tasks/{segment(task_guid)}",
                params={"user_id_type": "open_id"},
                body=_patch_body(parse_json(update_fields, name="update_fields")),
            )
        )

    # lark_task_delete
    @mcp.tool(
        name="lark_task_delete",
        description="Delete a task",
        annotations=DESTRUCTIVE,
        meta={"category": "task", "safety_level": "critical"},
    )
    async def delete_task(task_guid: TaskGuid):
        return await safe_call(
            lambda: get_client().request("DELETE", f"{TASK_BASE}/tasks/{segment(task_guid)}")
        )

    # lark_task_complete
    @mcp.tool(
        name="lark_task_complete",
        description="Mark a task as completed",
        annotations=WRITE,
        meta={"category": "task", "safety_level": "moderate"},
    )
    async def complete_task(task_guid: TaskGuid):
        return await safe_call(
            lambda: get_client().request(
                "PATCH",
                f"{TASK_BASE}/tasks/{segment(task_guid)}",
                params={"user_id_type": "open_id"},
                body=_patch_body({"completed_at": str(int(time.time() * 1000))}),
            )
        )

    # lark_task_list
    @mcp.tool(
        name="lark_task_list",
        description="List tasks (optionally filtered by completion status)",
        annotations=READ_ONLY,
        meta={"category": "task", "safety_level": "safe"},
    )
    async def list_tasks(
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
        completed: Annotated[
            bool | None, Field(description="Filter by completion status")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{TASK_BASE}/tasks",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "completed": completed,
                    "user_id_type": "open_id",
                },
            )
        )

    # lark_task_add_comment
    @mcp.tool(
        name="lark_task_add_comment",
        description="Add a comment to a task",
        annotations=WRITE,
        meta={"category": "task", "safety_level": "moderate"},
    )
    async def add_comment(
        task_guid: TaskGuid,
        content: Annotated[str, Field(description="Comment content")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{TASK_BASE}/comments",
                body={"content": content, "resource_type": "task", "resource_id": task_guid},
            )
        )

    # lark_task_list_comments
    @mcp.tool(
        name="lark_task_list_comments",
        description="List comments on a task",
        annotations=READ_ONLY,
        meta={"category": "task", "safety_level": "safe"},
    )
    async def list_comments(
        task_guid: TaskGuid,
        page_size: PageSize(100) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{TASK_BASE}/comments",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "resource_type": "task",
                    "resource_id": task_guid,
                },
            )
        )

    # lark_task_add_members
    @mcp.tool(
        name="lark_task_add_members",
        description="Add members (assignees/followers) to a task",
        annotations=WRITE,
        meta={"category": "task", "safety_level": "moderate"},
    )
    async def add_members(
        task_guid: TaskGuid,
        members: Annotated[str, Field(description=MEMBERS_EXAMPLE)],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{TASK_BASE}/tasks/{segment(task_guid)}/add_members",
                params={"user_id_type": "open_id"},
                body={"members": parse_json(members, name="members")},
            )
        )

    # lark_task_list_tasklists
    @mcp.tool(
        name="lark_task_list_tasklists",
        description="List task lists",
        annotations=READ_ONLY,
        meta={"category": "task", "safety_level": "safe"},
    )
    async def list_tasklists(page_size: PageSize(100) = 50, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{TASK_BASE}/tasklists",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "user_id_type": "open_id",
                },
            )
        )

    # lark_task_create_tasklist
    @mcp.tool(
        name="lark_task_create_tasklist",
        description="Create a new task list",
        annotations=WRITE,
        meta={"category": "task", "safety_level": "moderate"},
    )
    async def create_tasklist(name: Annotated[str, Field(description="Task list name")]):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{TASK_BASE}/tasklists",
                params={"user_id_type": "open_id"},
                body={"name": name},
            )
        )

"""Drive tools: files, folders, permissions, search, export and upload."""

from pathlib import Path
from typing import Annotated, Literal

from anyio import to_thread
from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import DESTRUCTIVE, READ_ONLY, WRITE, safe_call, segment
from .common import DriveFileType, PageSize, PageToken

# upload_all accepts files up to 20MB; larger files need chunked upload
MAX_UPLOAD_BYTES = 20 * 1024 * 1024

FileType = Annotated[DriveFileType, Field(description="File type")]

SearchDocType = Literal["doc", "docx", "sheet", "bitable", "folder", "mindnote", "slides"]


def register_drive_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_drive_list_files
    @mcp.tool(
        name="lark_drive_list_files",
        description="List files and folders in a Feishu Drive folder",
        annotations=READ_ONLY,
        meta={"category": "drive", "safety_level": "safe"},
    )
    async def list_files(
        folder_token: Annotated[
            str | None, Field(description="Folder token (empty = root folder)")
        ] = None,
        page_size: PageSize(200) = 50,
        page_token: PageToken = None,
        order_by: Annotated[
            Literal["EditedTime", "CreatedTime"] | None, Field(description="Sort order")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/drive/v1/files",
                params={
                    "folder_token": folder_token,
                    "page_size": page_size,
                    "page_token": page_token,
                    "order_by": order_by,
                },
            )
        )

    # lark_drive_get_file_meta
    @mcp.tool(
        name="lark_drive_get_file_meta",
        description="Get metadata of a file or document in Drive",
        annotations=READ_ONLY,
        meta={"category": "drive", "safety_level": "safe"},
    )
    async def get_file_meta(
        file_token: Annotated[str, Field(description="File token")],
        file_type: FileType,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/drive/v1/metas/batch_query",
                params={"user_id_type": "open_id"},
                body={
                    "request_docs": [{"doc_token": file_token, "doc_type": file_type}],
                    "with_url": True,
                },
            )
        )

    # lark_drive_create_folder
    @mcp.tool(
        name="lark_drive_create_folder",
        description="Create a new folder in Feishu Drive",
        annotations=WRITE,
        meta={"category": "drive", "safety_level": "moderate"},
    )
    async def create_folder(
        name: Annotated[str, Field(description="Folder name")],
        folder_token: Annotated[str, Field(description="Parent folder token")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/drive/v1/files/create_folder",
                body={"name": name, "folder_token": folder_token},
            )
        )

    # lark_drive_move_file
    @mcp.tool(
        name="lark_drive_move_file",
        description="Move a file or folder to a different folder",
        annotations=WRITE,
        meta={"category": "drive", "safety_level": "moderate"},
    )
    async def move_file(
        file_token: Annotated[str, Field(description="File token to move")],
        type: FileType,
        folder_token: Annotated[str, Field(description="Destination folder token")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/drive/v1/files/{segment(file_token)}/move",
                body={"type": type, "folder_token": folder_token},
            )
        )

    # lark_drive_delete_file
    @mcp.tool(
        name="lark_drive_delete_file",
        description="Delete a file or folder from Drive (moves to trash)",
        annotations=DESTRUCTIVE,
        meta={"category": "drive", "safety_level": "critical"},
    )
    async def delete_file(
        file_token: Annotated[str, Field(description="File token to delete")],
        type: FileType,
    ):
        return await safe_call(
            lambda: get_client().request(
                "DELETE",
                f"/open-apis/drive/v1/files/{segment(file_token)}",
                params={"type": type},
            )
        )

    # lark_drive_copy_file
    @mcp.tool(
        name="lark_drive_copy_file",
        description="Copy a file to another folder",
        annotations=WRITE,
        meta={"category": "drive", "safety_level": "moderate"},
    )
    async def copy_file(
        file_token: Annotated[str, Field(description="Source file token")],
        name: Annotated[str, Field(description="Name for the copy")],
        type: Annotated[
            Literal["doc", "docx", "sheet", "bitable", "file", "mindnote", "slides"],
            Field(description="File type"),
        ],
        folder_token: Annotated[str, Field(description="Destination folder token")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/drive/v1/files/{segment(file_token)}/copy",
                body={"name": name, "type": type, "folder_token": folder_token},
            )
        )

    # lark_drive_create_permission
    @mcp.tool(
        name="lark_drive_create_permission",
        description="Share a file with a user/group (add permission member)",
        annotations=WRITE,
        meta={"category": "drive", "safety_level": "moderate"},
    )
    async def create_permission(
        token: Annotated[str, Field(description="File token")],
        type: FileType,
        member_type: Annotated[
            Literal[
                "email",
                "openid",
                "unionid",
                "openchat",
                "opendepartmentid",
                "userid",
                "groupid",
                "wikispaceid",
            ],
            Field(description="Member type"),
        ],
        member_id: Annotated[str, Field(description="Member ID")],
        perm: Annotated[
            Literal["view", "edit", "full_access"], Field(description="Permission level")
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/drive/v1/permissions/{segment(token)}/members",
                params={"type": type, "need_notification": True},
                body={"member_type": member_type, "member_id": member_id, "perm": perm},
            )
        )

    # lark_drive_search_files
    @mcp.tool(
        name="lark_drive_search_files",
        description="Search for files in Feishu Drive",
        annotations=READ_ONLY,
        meta={"category": "drive", "safety_level": "safe"},
    )
    async def search_files(
        search_key: Annotated[str, Field(description="Search keyword")],
        count: PageSize(50, "Number of results") = 20,
        offset: Annotated[int, Field(ge=0, description="Result offset")] = 0,
        owner_ids: Annotated[
            list[str] | None, Field(description="Filter by owner open_ids")
        ] = None,
        docs_types: Annotated[
            list[SearchDocType] | None, Field(description="Filter by doc types")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/suite/docs-api/search/object",
                body={
                    "search_key": search_key,
                    "count": count,
                    "offset": offset,
                    "owner_ids": owner_ids,
                    "docs_types": docs_types,
                },
            )
        )

    # lark_drive_export
    @mcp.tool(
        name="lark_drive_export",
        description="Export a document to a file format (PDF, DOCX, etc.)",
        annotations=WRITE,
        meta={"category": "drive", "safety_level": "moderate"},
    )
    async def export(
        file_token: Annotated[str, Field(description="File token")],
        type: Annotated[
            Literal["doc", "docx", "sheet", "bitable"], Field(description="Source file type")
        ],
        file_extension: Annotated[
            Literal["docx", "pdf", "xlsx", "csv"], Field(description="Target export format")
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/drive/v1/export_tasks",
                body={"file_token": file_token, "type": type, "file_extension": file_extension},
            )
        )

    # lark_drive_upload_file
    @mcp.tool(
        name="lark_drive_upload_file",
        description="Upload a local file (up to 20MB) into a Drive folder",
        annotations=WRITE,
        meta={"category": "drive", "safety_level": "moderate"},
    )
    async def upload_file(
        file_path: Annotated[str, Field(description="Path of the local file to upload")],
        folder_token: Annotated[str, Field(description="Destination folder token")],
        file_name: Annotated[
            str | None, Field(description="Name in Drive (defaults to the local file name)")
        ] = None,
    ):
        async def upload():
            path = Path(file_path).expanduser()
            size = path.stat().st_size
            if size > MAX_UPLOAD_BYTES:
                raise ValueError(
                    f"File is {size} bytes; uploads are limited to {MAX_UPLOAD_BYTES} bytes"
                )
            content = await to_thread.run_sync(path.read_bytes)
            name = file_name or path.name
            return await get_client().request(
                "POST",
                "/open-apis/drive/v1/files/upload_all",
                data={
                    "file_name": name,
                    "parent_type": "explorer",
                    "parent_node": folder_token,
                    "size": str(len(content)),
                },
                files={"file": (name, content)},
            )

        return await safe_call(upload)

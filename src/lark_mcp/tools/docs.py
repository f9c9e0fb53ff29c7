"""Docx document and block tools.

Block operations always target the latest revision (``document_revision_id=-1``).
"""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import DESTRUCTIVE, READ_ONLY, WRITE, parse_json, safe_call, segment
from .common import PageSize, PageToken

LATEST_REVISION = -1

DocumentId = Annotated[str, Field(description="Document ID")]
BlockId = Annotated[str, Field(description="Block ID")]


def _document_path(document_id: str, suffix: str = "") -> str:
    return f"/open-apis/docx/v1/documents/{segment(document_id)}{suffix}"


def register_docs_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_docs_create_document
    @mcp.tool(
        name="lark_docs_create_document",
        description="Create a new Feishu document",
        annotations=WRITE,
        meta={"category": "docs", "safety_level": "moderate"},
    )
    async def create_document(
        title: Annotated[str | None, Field(description="Document title")] = None,
        folder_token: Annotated[
            str | None, Field(description="Folder token to create the doc in")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/docx/v1/documents",
                body={"title": title, "folder_token": folder_token},
            )
        )

    # lark_docs_get_document
    @mcp.tool(
        name="lark_docs_get_document",
        description="Get metadata of a Feishu document (title, revision, etc.)",
        annotations=READ_ONLY,
        meta={"category": "docs", "safety_level": "safe"},
    )
    async def get_document(
        document_id: Annotated[str, Field(description="Document ID (doc token)")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _document_path(document_id),
            )
        )

    # lark_docs_get_raw_content
    @mcp.tool(
        name="lark_docs_get_raw_content",
        description="Get the plain-text content of a Feishu document",
        annotations=READ_ONLY,
        meta={"category": "docs", "safety_level": "safe"},
    )
    async def get_raw_content(document_id: DocumentId):
        return await safe_call(
            lambda: get_client().request(
                "GET", _document_path(document_id, "/raw_content")
            )
        )

    # lark_docs_list_blocks
    @mcp.tool(
        name="lark_docs_list_blocks",
        description="List all blocks in a Feishu document",
        annotations=READ_ONLY,
        meta={"category": "docs", "safety_level": "safe"},
    )
    async def list_blocks(
        document_id: DocumentId,
        page_size: PageSize(500) = 100,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _document_path(document_id, "/blocks"),
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "document_revision_id": LATEST_REVISION,
                },
            )
        )

    # lark_docs_get_block
    @mcp.tool(
        name="lark_docs_get_block",
        description="Get a specific block in a document",
        annotations=READ_ONLY,
        meta={"category": "docs", "safety_level": "safe"},
    )
    async def get_block(document_id: DocumentId, block_id: BlockId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _document_path(document_id, f"/blocks/{segment(block_id)}"),
                params={"document_revision_id": LATEST_REVISION},
            )
        )

    # lark_docs_create_block
    @mcp.tool(
        name="lark_docs_create_block",
        description=(
            "Append child blocks under a parent block in a document. "
            "Use block_id = document_id to append to root."
        ),
        annotations=WRITE,
        meta={"category": "docs", "safety_level": "moderate"},
    )
    async def create_block(
        document_id: DocumentId,
        block_id: Annotated[str, Field(description="Parent block ID (use document_id for root)")],
        children: Annotated[
            str,
            Field(
                description=(
                    "JSON array of block objects to insert. Each block needs "
                    "block_type and corresponding content field."
                )
            ),
        ],
        index: Annotated[int | None, Field(description="Insert position index (-1 = end)")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _document_path(document_id, f"/blocks/{segment(block_id)}/children"),
                params={"document_revision_id": LATEST_REVISION},
                body={
                    "children": parse_json(children, name="children"),
                    "index": -1 if index is None else index,
                },
            )
        )

    # lark_docs_update_block
    @mcp.tool(
        name="lark_docs_update_block",
        description="Update the content of a block (e.g. change text, update a table cell)",
        annotations=WRITE,
        meta={"category": "docs", "safety_level": "moderate"},
    )
    async def update_block(
        document_id: DocumentId,
        block_id: Annotated[str, Field(description="Block ID to update")],
        update_body: Annotated[
            str,
            Field(
                description=(
                    "JSON object describing the update. Must contain the appropriate "
                    "update action for the block type."
                )
            ),
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "PATCH",
                _document_path(document_id, f"/blocks/{segment(block_id)}"),
                params={"document_revision_id": LATEST_REVISION},
                body=parse_json(update_body, name="update_body"),
            )
        )

    # lark_docs_delete_block
    @mcp.tool(
        name="lark_docs_delete_block",
        description="Delete child blocks under a parent block",
        annotations=DESTRUCTIVE,
        meta={"category": "docs", "safety_level": "critical"},
    )
    async def delete_block(
        document_id: DocumentId,
        block_id: Annotated[str, Field(description="Parent block ID whose children to delete")],
        start_index: Annotated[int, Field(description="Start index of children to delete")],
        end_index: Annotated[
            int, Field(description="End index (exclusive) of children to delete")
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "DELETE",
                _document_path(document_id, f"/blocks/{segment(block_id)}/children/batch_delete"),
                params={"document_revision_id": LATEST_REVISION},
                body={"start_index": start_index, "end_index": end_index},
            )
        )

"""Enterprise search tools: messages, documents and custom data sources."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call, segment
from .common import PageSize, PageToken

Query = Annotated[str, Field(description="Search query")]


def register_search_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_search_messages
    @mcp.tool(
        name="lark_search_messages",
        description="Search messages across chats in Feishu",
        annotations=READ_ONLY,
        meta={"category": "search", "safety_level": "safe"},
    )
    async def search_messages(
        query: Annotated[str, Field(description="Search query keyword")],
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
        chat_ids: Annotated[list[str] | None, Field(description="Filter by chat IDs")] = None,
        from_user_ids: Annotated[
            list[str] | None, Field(description="Filter by sender open_ids")
        ] = None,
        message_type: Annotated[
            Literal["file", "image", "media"] | None,
            Field(description="Filter by message type"),
        ] = None,
        start_time: Annotated[str | None, Field(description="Start timestamp (seconds)")] = None,
        end_time: Annotated[str | None, Field(description="End timestamp (seconds)")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/search/v2/message",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "user_id_type": "open_id",
                },
                body={
                    "query": query,
                    "from_ids": from_user_ids,
                    "chat_ids": chat_ids,
                    "message_type": message_type,
                    "start_time": start_time,
                    "end_time": end_time,
                },
            )
        )

    # lark_search_docs
    @mcp.tool(
        name="lark_search_docs",
        description="Search across Feishu documents, spreadsheets, and other file types",
        annotations=READ_ONLY,
        meta={"category": "search", "safety_level": "safe"},
    )
    async def search_docs(
        query: Query,
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
        docs_types: Annotated[
            list[Literal["doc", "docx", "sheet", "bitable", "mindnote", "slides", "wiki"]]
            | None,
            Field(description="Filter by doc types"),
        ] = None,
        owner_ids: Annotated[
            list[str] | None, Field(description="Filter by owner open_ids")
        ] = None,
        chat_ids: Annotated[
            list[str] | None, Field(description="Filter by shared chat IDs")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/search/v2/app",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "user_id_type": "open_id",
                },
                body={
                    "query": query,
                    "docs_types": docs_types,
                    "owner_ids": owner_ids,
                    "chat_ids": chat_ids,
                },
            )
        )

    # lark_search_data_source
    @mcp.tool(
        name="lark_search_data_source",
        description="Search items in a custom data source (for enterprise search)",
        annotations=READ_ONLY,
        meta={"category": "search", "safety_level": "safe"},
    )
    async def search_data_source(
        query: Query,
        data_source_id: Annotated[str, Field(description="Data source ID")],
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/search/v2/data_sources/{segment(data_source_id)}/items",
                params={"page_size": page_size, "page_token": page_token},
                body={"query": query},
            )
        )

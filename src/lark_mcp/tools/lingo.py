"""Lingo (enterprise glossary) tools."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_json, parse_optional_json, safe_call, segment
from .common import PageSize, PageToken

LINGO_BASE = "/open-apis/lingo/v1"


def register_lingo_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_lingo_list_entities
    @mcp.tool(
        name="lark_lingo_list_entities",
        description="List glossary entries",
        annotations=READ_ONLY,
        meta={"category": "lingo", "safety_level": "safe"},
    )
    async def list_entities(
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
        provider: Annotated[str | None, Field(description="Filter by provider")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{LINGO_BASE}/entities",
                params={"page_size": page_size, "page_token": page_token, "provider": provider},
            )
        )

    # lark_lingo_search_entities
    @mcp.tool(
        name="lark_lingo_search_entities",
        description="Search glossary entries by keyword",
        annotations=READ_ONLY,
        meta={"category": "lingo", "safety_level": "safe"},
    )
    async def search_entities(
        query: Annotated[str | None, Field(description="Search keyword")] = None,
        classification_filter: Annotated[
            str | None, Field(description="JSON classification filter")
        ] = None,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{LINGO_BASE}/entities/search",
                params={"page_size": page_size, "page_token": page_token},
                body={
                    "query": query,
                    "classification_filter": parse_optional_json(
                        classification_filter, name="classification_filter"
                    ),
                },
            )
        )

    # lark_lingo_get_entity
    @mcp.tool(
        name="lark_lingo_get_entity",
        description="Get a glossary entry by ID",
        annotations=READ_ONLY,
        meta={"category": "lingo", "safety_level": "safe"},
    )
    async def get_entity(entity_id: Annotated[str, Field(description="Entity ID")]):
        return await safe_call(
            lambda: get_client().request("GET", f"{LINGO_BASE}/entities/{segment(entity_id)}")
        )

    # lark_lingo_create_entity
    @mcp.tool(
        name="lark_lingo_create_entity",
        description="Create a glossary entry",
        annotations=WRITE,
        meta={"category": "lingo", "safety_level": "moderate"},
    )
    async def create_entity(
        main_keys: Annotated[
            str,
            Field(
                description=(
                    'JSON array of main terms, e.g. [{"key":"MCP","display_status":'
                    '{"allow_highlight":true,"allow_search":true}}]'
                )
            ),
        ],
        description: Annotated[str, Field(description="Term description/definition")],
        aliases: Annotated[str | None, Field(description="JSON array of alias terms")] = None,
        related_meta: Annotated[str | None, Field(description="JSON related metadata")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"{LINGO_BASE}/entities",
                body={
                    "main_keys": parse_json(main_keys, name="main_keys"),
                    "description": description,
                    "aliases": parse_optional_json(aliases, name="aliases"),
                    "related_meta": parse_optional_json(related_meta, name="related_meta"),
                },
            )
        )

    # lark_lingo_list_classifications
    @mcp.tool(
        name="lark_lingo_list_classifications",
        description="List glossary classifications",
        annotations=READ_ONLY,
        meta={"category": "lingo", "safety_level": "safe"},
    )
    async def list_classifications(page_size: PageSize(100) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"{LINGO_BASE}/classifications",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

"""Wiki (knowledge base) tools."""

from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, safe_call, segment
from .common import PageSize, PageToken

SpaceId = Annotated[str, Field(description="Wiki space ID")]

ObjType = Annotated[
    Literal["doc", "docx", "sheet", "mindnote", "bitable", "file", "slides"],
    Field(description="Object type"),
]


def register_wiki_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_wiki_list_spaces
    @mcp.tool(
        name="lark_wiki_list_spaces",
        description="List wiki spaces the app can access",
        annotations=READ_ONLY,
        meta={"category": "wiki", "safety_level": "safe"},
    )
    async def list_spaces(page_size: PageSize(50) = 20, page_token: PageToken = None):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/wiki/v2/spaces",
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_wiki_get_space
    @mcp.tool(
        name="lark_wiki_get_space",
        description="Get information about a wiki space",
        annotations=READ_ONLY,
        meta={"category": "wiki", "safety_level": "safe"},
    )
    async def get_space(space_id: SpaceId):
        return await safe_call(
            lambda: get_client().request("GET", f"/open-apis/wiki/v2/spaces/{segment(space_id)}")
        )

    # lark_wiki_list_nodes
    @mcp.tool(
        name="lark_wiki_list_nodes",
        description="List child nodes in a wiki space (top level when no parent is given)",
        annotations=READ_ONLY,
        meta={"category": "wiki", "safety_level": "safe"},
    )
    async def list_nodes(
        space_id: SpaceId,
        parent_node_token: Annotated[
            str | None, Field(description="Parent node token (omit for top level)")
        ] = None,
        page_size: PageSize(50) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/wiki/v2/spaces/{segment(space_id)}/nodes",
                params={
                    "parent_node_token": parent_node_token,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_wiki_get_node
    @mcp.tool(
        name="lark_wiki_get_node",
        description="Get wiki node info by node token",
        annotations=READ_ONLY,
        meta={"category": "wiki", "safety_level": "safe"},
    )
    async def get_node(token: Annotated[str, Field(description="Wiki node token")]):
        return await safe_call(
            lambda: get_client().request(
                "GET", "/open-apis/wiki/v2/spaces/get_node", params={"token": token}
            )
        )

    # lark_wiki_create_node
    @mcp.tool(
        name="lark_wiki_create_node",
        description="Create a new node (page) in a wiki space",
        annotations=WRITE,
        meta={"category": "wiki", "safety_level": "moderate"},
    )
    async def create_node(
        space_id: SpaceId,
        obj_type: ObjType,
        parent_node_token: Annotated[
            str | None, Field(description="Parent node token (omit for top level)")
        ] = None,
        title: Annotated[str | None, Field(description="Node title")] = None,
        node_type: Annotated[
            Literal["origin", "shortcut"], Field(description="Node type")
        ] = "origin",
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/wiki/v2/spaces/{segment(space_id)}/nodes",
                body={
                    "obj_type": obj_type,
                    "parent_node_token": parent_node_token,
                    "title": title,
                    "node_type": node_type,
                },
            )
        )

    # lark_wiki_move_node
    @mcp.tool(
        name="lark_wiki_move_node",
        description="Move a wiki node to a different parent or space",
        annotations=WRITE,
        meta={"category": "wiki", "safety_level": "moderate"},
    )
    async def move_node(
        space_id: SpaceId,
        node_token: Annotated[str, Field(description="Node token to move")],
        target_parent_token: Annotated[
            str | None, Field(description="New parent node token")
        ] = None,
        target_space_id: Annotated[str | None, Field(description="Target space ID")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/wiki/v2/spaces/{segment(space_id)}/nodes/{segment(node_token)}/move",
                body={
                    "target_parent_token": target_parent_token,
                    "target_space_id": target_space_id,
                },
            )
        )

    # lark_wiki_move_docs_to_wiki
    @mcp.tool(
        name="lark_wiki_move_docs_to_wiki",
        description="Move an existing cloud document into a wiki space",
        annotations=WRITE,
        meta={"category": "wiki", "safety_level": "moderate"},
    )
    async def move_docs_to_wiki(
        space_id: SpaceId,
        obj_type: ObjType,
        obj_token: Annotated[str, Field(description="Document token to move")],
        parent_wiki_token: Annotated[
            str | None, Field(description="Parent wiki node token")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                f"/open-apis/wiki/v2/spaces/{segment(space_id)}/nodes/move_docs_to_wiki",
                body={
                    "parent_wiki_token": parent_wiki_token,
                    "obj_type": obj_type,
                    "obj_token": obj_token,
                },
            )
        )

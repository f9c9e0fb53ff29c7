"""Spreadsheet tools."""

from typing import Annotated, Literal
from urllib.parse import quote

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, WRITE, parse_json, safe_call, segment

SpreadsheetToken = Annotated[str, Field(description="Spreadsheet token")]


def _values_path(spreadsheet_token: str, suffix: str) -> str:
    return f"/open-apis/sheets/v2/spreadsheets/{segment(spreadsheet_token)}/{suffix}"


def register_sheets_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_sheets_get_spreadsheet
    @mcp.tool(
        name="lark_sheets_get_spreadsheet",
        description="Get metadata of a Feishu spreadsheet",
        annotations=READ_ONLY,
        meta={"category": "sheets", "safety_level": "safe"},
    )
    async def get_spreadsheet(spreadsheet_token: SpreadsheetToken):
        return await safe_call(
            lambda: get_client().request(
                "GET", f"/open-apis/sheets/v3/spreadsheets/{segment(spreadsheet_token)}"
            )
        )

    # lark_sheets_list_sheets
    @mcp.tool(
        name="lark_sheets_list_sheets",
        description="List all sheets (tabs) in a spreadsheet",
        annotations=READ_ONLY,
        meta={"category": "sheets", "safety_level": "safe"},
    )
    async def list_sheets(spreadsheet_token: SpreadsheetToken):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                f"/open-apis/sheets/v3/spreadsheets/{segment(spreadsheet_token)}/sheets/query",
            )
        )

    # lark_sheets_read_range
    @mcp.tool(
        name="lark_sheets_read_range",
        description="Read cell values from a range in a sheet (e.g. Sheet1!A1:C10)",
        annotations=READ_ONLY,
        meta={"category": "sheets", "safety_level": "safe"},
    )
    async def read_range(
        spreadsheet_token: SpreadsheetToken,
        range: Annotated[
            str, Field(description="Cell range, e.g. 'Sheet1!A1:C10' or 'sheetId!A1:C10'")
        ],
        value_render_option: Annotated[
            Literal["ToString", "Formula", "FormattedValue", "UnformattedValue"],
            Field(description="How to render cell values"),
        ] = "ToString",
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _values_path(spreadsheet_token, f"values/{quote(range, safe='!:')}"),
                params={"valueRenderOption": value_render_option},
            )
        )

    # lark_sheets_write_range
    @mcp.tool(
        name="lark_sheets_write_range",
        description="Write values to a range in a sheet",
        annotations=WRITE,
        meta={"category": "sheets", "safety_level": "moderate"},
    )
    async def write_range(
        spreadsheet_token: SpreadsheetToken,
        range: Annotated[str, Field(description="Cell range, e.g. 'Sheet1!A1:C3'")],
        values: Annotated[
            str,
            Field(description='JSON 2D array of values, e.g. [["a","b","c"],["d","e","f"]]'),
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "PUT",
                _values_path(spreadsheet_token, "values"),
                body={
                    "valueRange": {"range": range, "values": parse_json(values, name="values")}
                },
            )
        )

    # lark_sheets_append_rows
    @mcp.tool(
        name="lark_sheets_append_rows",
        description="Append rows to the end of a sheet",
        annotations=WRITE,
        meta={"category": "sheets", "safety_level": "moderate"},
    )
    async def append_rows(
        spreadsheet_token: SpreadsheetToken,
        range: Annotated[
            str, Field(description="Sheet range (determines which sheet to append to)")
        ],
        values: Annotated[str, Field(description="JSON 2D array of row values to append")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _values_path(spreadsheet_token, "values_append"),
                body={
                    "valueRange": {"range": range, "values": parse_json(values, name="values")}
                },
            )
        )

    # lark_sheets_create_sheet
    @mcp.tool(
        name="lark_sheets_create_sheet",
        description="Add a new sheet (tab) to a spreadsheet",
        annotations=WRITE,
        meta={"category": "sheets", "safety_level": "moderate"},
    )
    async def create_sheet(
        spreadsheet_token: SpreadsheetToken,
        title: Annotated[str, Field(description="New sheet tab name")],
        index: Annotated[int | None, Field(ge=0, description="Insert position index")] = None,
    ):
        properties = {"title": title}
        if index is not None:
            properties["index"] = index

        return await safe_call(
            lambda: get_client().request(
                "POST",
                _values_path(spreadsheet_token, "sheets_batch_update"),
                body={"requests": [{"addSheet": {"properties": properties}}]},
            )
        )

    # lark_sheets_create_spreadsheet
    @mcp.tool(
        name="lark_sheets_create_spreadsheet",
        description="Create a new Feishu spreadsheet",
        annotations=WRITE,
        meta={"category": "sheets", "safety_level": "moderate"},
    )
    async def create_spreadsheet(
        title: Annotated[str, Field(description="Spreadsheet title")],
        folder_token: Annotated[
            str | None, Field(description="Folder token to create in")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/sheets/v3/spreadsheets",
                body={"title": title, "folder_token": folder_token},
            )
        )

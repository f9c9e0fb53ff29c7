"""Bitable (multi-dimensional table) tools: tables, fields, records and views."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import (
    DESTRUCTIVE,
    READ_ONLY,
    WRITE,
    compact,
    parse_json,
    parse_optional_json,
    safe_call,
    segment,
)
from .common import PageSize, PageToken

AppToken = Annotated[str, Field(description="Bitable app token")]
TableId = Annotated[str, Field(description="Table ID")]
RecordId = Annotated[str, Field(description="Record ID")]

FIELD_TYPES = (
    "1=Text, 2=Number, 3=SingleSelect, 4=MultiSelect, 5=DateTime, 7=Checkbox, "
    "11=Person, 13=Phone, 15=URL, 17=Attachment, 18=Link, 20=Formula, 21=DuplexLink, "
    "22=Location, 23=Group, 1001=CreatedTime, 1002=ModifiedTime, 1003=CreatedUser, "
    "1004=ModifiedUser, 1005=AutoNumber"
)


def _app_path(app_token: str, suffix: str = "") -> str:
    return f"/open-apis/bitable/v1/apps/{segment(app_token)}/tables{suffix}"


def register_bitable_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_bitable_get_meta
    @mcp.tool(
        name="lark_bitable_get_meta",
        description="Get metadata of a Bitable app (its tables)",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def get_meta(app_token: AppToken):
        return await safe_call(lambda: get_client().request("GET", _app_path(app_token)))

    # lark_bitable_list_tables
    @mcp.tool(
        name="lark_bitable_list_tables",
        description="List all tables in a Bitable app",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def list_tables(
        app_token: AppToken,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _app_path(app_token),
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_bitable_create_table
    @mcp.tool(
        name="lark_bitable_create_table",
        description="Create a new table in a Bitable app",
        annotations=WRITE,
        meta={"category": "bitable", "safety_level": "moderate"},
    )
    async def create_table(
        app_token: AppToken,
        name: Annotated[str, Field(description="Table name")],
        default_view_name: Annotated[str | None, Field(description="Default view name")] = None,
        fields: Annotated[
            str | None,
            Field(description='JSON array of field definitions, e.g. [{"field_name":"Name","type":1}]'),
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _app_path(app_token),
                body={
                    "table": compact(
                        {
                            "name": name,
                            "default_view_name": default_view_name,
                            "fields": parse_optional_json(fields, name="fields"),
                        }
                    )
                },
            )
        )

    # lark_bitable_list_fields
    @mcp.tool(
        name="lark_bitable_list_fields",
        description="List all fields (columns) in a Bitable table",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def list_fields(
        app_token: AppToken,
        table_id: TableId,
        page_size: PageSize(100) = 100,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _app_path(app_token, f"/{segment(table_id)}/fields"),
                params={"page_size": page_size, "page_token": page_token},
            )
        )

    # lark_bitable_create_field
    @mcp.tool(
        name="lark_bitable_create_field",
        description="Add a new field (column) to a Bitable table",
        annotations=WRITE,
        meta={"category": "bitable", "safety_level": "moderate"},
    )
    async def create_field(
        app_token: AppToken,
        table_id: TableId,
        field_name: Annotated[str, Field(description="Field name")],
        type: Annotated[int, Field(description=f"Field type code: {FIELD_TYPES}")],
        property: Annotated[
            str | None, Field(description="JSON object with type-specific field properties")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _app_path(app_token, f"/{segment(table_id)}/fields"),
                body={
                    "field_name": field_name,
                    "type": type,
                    "property": parse_optional_json(property, name="property"),
                },
            )
        )

    # lark_bitable_list_records
    @mcp.tool(
        name="lark_bitable_list_records",
        description="List records (rows) in a Bitable table",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def list_records(
        app_token: AppToken,
        table_id: TableId,
        view_id: Annotated[str | None, Field(description="View ID to read through")] = None,
        filter: Annotated[
            str | None, Field(description='Filter formula, e.g. CurrentValue.[Status]="Done"')
        ] = None,
        sort: Annotated[
            str | None, Field(description='Sort expression, e.g. ["Created DESC"]')
        ] = None,
        page_size: PageSize(500) = 100,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _app_path(app_token, f"/{segment(table_id)}/records"),
                params={
                    "view_id": view_id,
                    "filter": filter,
                    "sort": sort,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_bitable_search_records
    @mcp.tool(
        name="lark_bitable_search_records",
        description="Search records in a Bitable table with structured filter conditions",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def search_records(
        app_token: AppToken,
        table_id: TableId,
        view_id: Annotated[str | None, Field(description="View ID")] = None,
        field_names: Annotated[
            list[str] | None, Field(description="Only return these fields")
        ] = None,
        filter: Annotated[
            str | None,
            Field(
                description=(
                    'JSON filter object, e.g. {"conjunction":"and","conditions":'
                    '[{"field_name":"Status","operator":"is","value":["Done"]}]}'
                )
            ),
        ] = None,
        sort: Annotated[
            str | None,
            Field(description='JSON sort array, e.g. [{"field_name":"Created","desc":true}]'),
        ] = None,
        page_size: PageSize(500) = 100,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _app_path(app_token, f"/{segment(table_id)}/records/search"),
                params={"page_size": page_size, "page_token": page_token},
                body={
                    "view_id": view_id,
                    "field_names": field_names,
                    "filter": parse_optional_json(filter, name="filter"),
                    "sort": parse_optional_json(sort, name="sort"),
                },
            )
        )

    # lark_bitable_get_record
    @mcp.tool(
        name="lark_bitable_get_record",
        description="Get a single record by ID",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def get_record(app_token: AppToken, table_id: TableId, record_id: RecordId):
        return await safe_call(
            lambda: get_client().request(
                "GET", _app_path(app_token, f"/{segment(table_id)}/records/{segment(record_id)}")
            )
        )

    # lark_bitable_create_record
    @mcp.tool(
        name="lark_bitable_create_record",
        description="Create a new record (row) in a Bitable table",
        annotations=WRITE,
        meta={"category": "bitable", "safety_level": "moderate"},
    )
    async def create_record(
        app_token: AppToken,
        table_id: TableId,
        fields: Annotated[
            str, Field(description='JSON object of field values, e.g. {"Name":"Alice","Age":30}')
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _app_path(app_token, f"/{segment(table_id)}/records"),
                body={"fields": parse_json(fields, name="fields")},
            )
        )

    # lark_bitable_update_record
    @mcp.tool(
        name="lark_bitable_update_record",
        description="Update an existing record",
        annotations=WRITE,
        meta={"category": "bitable", "safety_level": "moderate"},
    )
    async def update_record(
        app_token: AppToken,
        table_id: TableId,
        record_id: RecordId,
        fields: Annotated[str, Field(description="JSON object of field values to update")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "PUT",
                _app_path(app_token, f"/{segment(table_id)}/records/{segment(record_id)}"),
                body={"fields": parse_json(fields, name="fields")},
            )
        )

    # lark_bitable_delete_record
    @mcp.tool(
        name="lark_bitable_delete_record",
        description="Delete a record",
        annotations=DESTRUCTIVE,
        meta={"category": "bitable", "safety_level": "critical"},
    )
    async def delete_record(app_token: AppToken, table_id: TableId, record_id: RecordId):
        return await safe_call(
            lambda: get_client().request(
                "DELETE",
                _app_path(app_token, f"/{segment(table_id)}/records/{segment(record_id)}"),
            )
        )

    # lark_bitable_batch_create_records
    @mcp.tool(
        name="lark_bitable_batch_create_records",
        description="Create multiple records at once (max 500)",
        annotations=WRITE,
        meta={"category": "bitable", "safety_level": "moderate"},
    )
    async def batch_create_records(
        app_token: AppToken,
        table_id: TableId,
        records: Annotated[
            str, Field(description='JSON array of records, e.g. [{"fields":{"Name":"Alice"}}]')
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _app_path(app_token, f"/{segment(table_id)}/records/batch_create"),
                body={"records": parse_json(records, name="records")},
            )
        )

    # lark_bitable_batch_update_records
    @mcp.tool(
        name="lark_bitable_batch_update_records",
        description="Update multiple records at once (max 500)",
        annotations=WRITE,
        meta={"category": "bitable", "safety_level": "moderate"},
    )
    async def batch_update_records(
        app_token: AppToken,
        table_id: TableId,
        records: Annotated[
            str,
            Field(
                description='JSON array of records with IDs, e.g. [{"record_id":"rec1","fields":{...}}]'
            ),
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _app_path(app_token, f"/{segment(table_id)}/records/batch_update"),
                body={"records": parse_json(records, name="records")},
            )
        )

    # lark_bitable_list_views
    @mcp.tool(
        name="lark_bitable_list_views",
        description="List views of a Bitable table",
        annotations=READ_ONLY,
        meta={"category": "bitable", "safety_level": "safe"},
    )
    async def list_views(
        app_token: AppToken,
        table_id: TableId,
        page_size: PageSize(100) = 20,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _app_path(app_token, f"/{segment(table_id)}/views"),
                params={"page_size": page_size, "page_token": page_token},
            )
        )

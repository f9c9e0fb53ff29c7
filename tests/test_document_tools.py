from __future__ import annotations

from pathlib import Path

import pytest
from conftest import result_json, result_text

from lark_mcp.tools.drive import MAX_UPLOAD_BYTES


@pytest.mark.asyncio
async def test_bitable_update_record_rejects_malformed_fields(call_tool, stub_client) -> None:
    result = await call_tool(
        "lark_bitable_update_record",
        {
            "app_token": "bascn1",
            "table_id": "tbl1",
            "record_id": "rec1",
            "fields": "{not valid json",
        },
    )

    assert result.is_error
    assert result_text(result).startswith("Error: Invalid JSON in 'fields'")
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_bitable_update_record_sends_decoded_fields(call_tool, stub_client) -> None:
    await call_tool(
        "lark_bitable_update_record",
        {
            "app_token": "bascn1",
            "table_id": "tbl1",
            "record_id": "rec1",
            "fields": '{"Status": "Done", "Score": 5}',
        },
    )

    stub_client.request.assert_awaited_once_with(
        "PUT",
        "/open-apis/bitable/v1/apps/bascn1/tables/tbl1/records/rec1",
        body={"fields": {"Status": "Done", "Score": 5}},
    )


@pytest.mark.asyncio
async def test_bitable_create_table_omits_unset_properties(call_tool, stub_client) -> None:
    await call_tool("lark_bitable_create_table", {"app_token": "bascn1", "name": "Tasks"})

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/bitable/v1/apps/bascn1/tables",
        body={"table": {"name": "Tasks"}},
    )


@pytest.mark.asyncio
async def test_docs_create_block_appends_at_end_by_default(call_tool, stub_client) -> None:
    await call_tool(
        "lark_docs_create_block",
        {
            "document_id": "doxcn1",
            "block_id": "doxcn1",
            "children": '[{"block_type": 2, "text": {"elements": []}}]',
        },
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/docx/v1/documents/doxcn1/blocks/doxcn1/children",
        params={"document_revision_id": -1},
        body={"children": [{"block_type": 2, "text": {"elements": []}}], "index": -1},
    )


@pytest.mark.asyncio
async def test_drive_list_files_defaults(call_tool, stub_client) -> None:
    await call_tool("lark_drive_list_files", {})

    stub_client.request.assert_awaited_once_with(
        "GET",
        "/open-apis/drive/v1/files",
        params={"folder_token": None, "page_size": 50, "page_token": None, "order_by": None},
    )


@pytest.mark.asyncio
async def test_drive_upload_file_posts_multipart(call_tool, stub_client, tmp_path) -> None:
    source = tmp_path / "report.txt"
    source.write_bytes(b"quarterly numbers")
    stub_client.respond({"code": 0, "msg": "success", "data": {"file_token": "box1"}})

    result = await call_tool(
        "lark_drive_upload_file",
        {"file_path": str(source), "folder_token": "fldcn1"},
    )

    assert result_json(result)["data"] == {"file_token": "box1"}
    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/drive/v1/files/upload_all",
        data={
            "file_name": "report.txt",
            "parent_type": "explorer",
            "parent_node": "fldcn1",
            "size": "17",
        },
        files={"file": ("report.txt", b"quarterly numbers")},
    )


@pytest.mark.asyncio
async def test_drive_upload_file_missing_path(call_tool, stub_client, tmp_path) -> None:
    result = await call_tool(
        "lark_drive_upload_file",
        {"file_path": str(tmp_path / "absent.bin"), "folder_token": "fldcn1"},
    )

    assert result.is_error
    assert result_text(result).startswith("Error: ")
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_drive_upload_file_enforces_size_limit(
    call_tool, stub_client, tmp_path, monkeypatch
) -> None:
    source = tmp_path / "big.bin"
    with source.open("wb") as handle:
        handle.truncate(MAX_UPLOAD_BYTES + 1)
    reads = []
    monkeypatch.setattr(Path, "read_bytes", lambda self: reads.append(self) or b"")

    result = await call_tool(
        "lark_drive_upload_file",
        {"file_path": str(source), "folder_token": "fldcn1"},
    )

    assert result.is_error
    assert "limited to" in result_text(result)
    stub_client.request.assert_not_awaited()
    assert reads == []


@pytest.mark.asyncio
async def test_wiki_move_docs_to_wiki_path(call_tool, stub_client) -> None:
    await call_tool(
        "lark_wiki_move_docs_to_wiki",
        {"space_id": "7001", "obj_type": "docx", "obj_token": "doxcn1"},
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/wiki/v2/spaces/7001/nodes/move_docs_to_wiki",
        body={"parent_wiki_token": None, "obj_type": "docx", "obj_token": "doxcn1"},
    )


@pytest.mark.asyncio
async def test_wiki_create_node_defaults_to_origin(call_tool, stub_client) -> None:
    await call_tool("lark_wiki_create_node", {"space_id": "7001", "obj_type": "docx"})

    _, kwargs = stub_client.request.call_args
    assert kwargs["body"]["node_type"] == "origin"


@pytest.mark.asyncio
async def test_sheets_read_range_puts_range_in_path(call_tool, stub_client) -> None:
    await call_tool(
        "lark_sheets_read_range",
        {"spreadsheet_token": "shtcn1", "range": "Sheet1!A1:C10"},
    )

    stub_client.request.assert_awaited_once_with(
        "GET",
        "/open-apis/sheets/v2/spreadsheets/shtcn1/values/Sheet1!A1:C10",
        params={"valueRenderOption": "ToString"},
    )


@pytest.mark.asyncio
async def test_sheets_write_range_wraps_values(call_tool, stub_client) -> None:
    await call_tool(
        "lark_sheets_write_range",
        {"spreadsheet_token": "shtcn1", "range": "Sheet1!A1:B1", "values": '[["a", 1]]'},
    )

    stub_client.request.assert_awaited_once_with(
        "PUT",
        "/open-apis/sheets/v2/spreadsheets/shtcn1/values",
        body={"valueRange": {"range": "Sheet1!A1:B1", "values": [["a", 1]]}},
    )


@pytest.mark.asyncio
async def test_sheets_create_sheet_without_index(call_tool, stub_client) -> None:
    await call_tool("lark_sheets_create_sheet", {"spreadsheet_token": "shtcn1", "title": "Q3"})

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/sheets/v2/spreadsheets/shtcn1/sheets_batch_update",
        body={"requests": [{"addSheet": {"properties": {"title": "Q3"}}}]},
    )

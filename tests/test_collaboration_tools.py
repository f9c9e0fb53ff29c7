from __future__ import annotations

import time

import pytest
from conftest import result_text


@pytest.mark.asyncio
async def test_calendar_create_event_nests_times_and_location(call_tool, stub_client) -> None:
    await call_tool(
        "lark_calendar_create_event",
        {
            "calendar_id": "feishu.cn_cal1",
            "summary": "Planning",
            "start_time": "1700000000",
            "end_time": "1700003600",
            "location": "Room 4",
        },
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/calendar/v4/calendars/feishu.cn_cal1/events",
        body={
            "summary": "Planning",
            "description": None,
            "need_notification": True,
            "start_time": {"timestamp": "1700000000"},
            "end_time": {"timestamp": "1700003600"},
            "attendee_ability": "can_invite_others",
            "location": {"name": "Room 4"},
        },
    )


@pytest.mark.asyncio
async def test_calendar_freebusy_uses_batch_endpoint(call_tool, stub_client) -> None:
    await call_tool(
        "lark_calendar_freebusy",
        {
            "time_min": "2024-01-01T09:00:00+08:00",
            "time_max": "2024-01-01T18:00:00+08:00",
            "user_ids": ["ou_1", "ou_2"],
        },
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/calendar/v4/freebusy/batch",
        params={"user_id_type": "open_id"},
        body={
            "time_min": "2024-01-01T09:00:00+08:00",
            "time_max": "2024-01-01T18:00:00+08:00",
            "user_ids": ["ou_1", "ou_2"],
        },
    )


@pytest.mark.asyncio
async def test_approval_form_is_validated_but_sent_as_string(call_tool, stub_client) -> None:
    form = '[{"id":"widget1","type":"input","value":"laptop"}]'

    await call_tool(
        "lark_approval_create_instance",
        {"approval_code": "APPROVAL1", "open_id": "ou_1", "form": form},
    )

    _, kwargs = stub_client.request.call_args
    assert kwargs["body"]["form"] == form


@pytest.mark.asyncio
async def test_approval_rejects_malformed_form(call_tool, stub_client) -> None:
    result = await call_tool(
        "lark_approval_create_instance",
        {"approval_code": "APPROVAL1", "open_id": "ou_1", "form": "[{"},
    )

    assert result.is_error
    assert "Invalid JSON in 'form'" in result_text(result)
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_task_update_names_changed_fields(call_tool, stub_client) -> None:
    await call_tool(
        "lark_task_update",
        {"task_guid": "t1", "update_fields": '{"summary": "New title", "description": "x"}'},
    )

    stub_client.request.assert_awaited_once_with(
        "PATCH",
        "/open-apis/task/v2/tasks/t1",
        params={"user_id_type": "open_id"},
        body={
            "task": {"summary": "New title", "description": "x"},
            "update_fields": ["summary", "description"],
        },
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", ["{}", "[1, 2]"])
async def test_task_update_requires_non_empty_object(call_tool, stub_client, payload) -> None:
    result = await call_tool("lark_task_update", {"task_guid": "t1", "update_fields": payload})

    assert result.is_error
    stub_client.request.assert_not_awaited()


@pytest.mark.asyncio
async def test_task_complete_stamps_completion_in_milliseconds(call_tool, stub_client) -> None:
    before = int(time.time() * 1000)
    await call_tool("lark_task_complete", {"task_guid": "t1"})
    after = int(time.time() * 1000)

    _, kwargs = stub_client.request.call_args
    assert kwargs["body"]["update_fields"] == ["completed_at"]
    assert before <= int(kwargs["body"]["task"]["completed_at"]) <= after


@pytest.mark.asyncio
async def test_task_create_wraps_due(call_tool, stub_client) -> None:
    await call_tool("lark_task_create", {"summary": "Ship", "due": "1700000000000"})

    _, kwargs = stub_client.request.call_args
    assert kwargs["body"]["due"] == {"timestamp": "1700000000000", "is_all_day": False}


@pytest.mark.asyncio
async def test_mail_send_maps_plain_text_body(call_tool, stub_client) -> None:
    await call_tool(
        "lark_mail_send_message",
        {
            "user_mailbox_id": "me@example.com",
            "subject": "Hi",
            "to": '[{"mail_address": "you@example.com"}]',
            "body_text": "hello",
        },
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/mail/v1/user_mailboxes/me@example.com/messages/send",
        body={
            "subject": "Hi",
            "to": [{"mail_address": "you@example.com"}],
            "cc": None,
            "body_html": None,
            "body_plain_text": "hello",
        },
    )


@pytest.mark.asyncio
async def test_search_docs_forwards_filters(call_tool, stub_client) -> None:
    await call_tool(
        "lark_search_docs",
        {"query": "roadmap", "docs_types": ["docx", "sheet"], "owner_ids": ["ou_1"]},
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/search/v2/app",
        params={"page_size": 20, "page_token": None, "user_id_type": "open_id"},
        body={
            "query": "roadmap",
            "docs_types": ["docx", "sheet"],
            "owner_ids": ["ou_1"],
            "chat_ids": None,
        },
    )


@pytest.mark.asyncio
async def test_vc_get_meeting_includes_participants(call_tool, stub_client) -> None:
    await call_tool("lark_vc_get_meeting", {"meeting_id": "69001"})

    stub_client.request.assert_awaited_once_with(
        "GET",
        "/open-apis/vc/v1/meetings/69001",
        params={"with_participants": True, "user_id_type": "open_id"},
    )

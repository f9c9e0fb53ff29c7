from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_contact_get_user_passes_id_type(call_tool, stub_client) -> None:
    await call_tool("lark_contact_get_user", {"user_id": "u1", "user_id_type": "user_id"})

    stub_client.request.assert_awaited_once_with(
        "GET", "/open-apis/contact/v3/users/u1", params={"user_id_type": "user_id"}
    )


@pytest.mark.asyncio
async def test_acs_access_records_maps_time_window(call_tool, stub_client) -> None:
    await call_tool(
        "lark_acs_list_access_records",
        {"time_from": 1700000000, "time_to": 1700086400},
    )

    stub_client.request.assert_awaited_once_with(
        "GET",
        "/open-apis/acs/v1/access_records",
        params={
            "page_size": 50,
            "page_token": None,
            "from": 1700000000,
            "to": 1700086400,
            "user_id": None,
            "user_id_type": "open_id",
        },
    )


@pytest.mark.asyncio
async def test_attendance_stats_defaults_to_daily(call_tool, stub_client) -> None:
    await call_tool(
        "lark_attendance_query_stats",
        {"user_ids": ["e1"], "start_date": 20240101, "end_date": 20240131},
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/attendance/v1/user_stats_datas/query",
        params={"employee_type": "employee_id"},
        body={
            "user_ids": ["e1"],
            "start_date": 20240101,
            "end_date": 20240131,
            "locale": "zh",
            "stats_type": "daily",
        },
    )


@pytest.mark.asyncio
async def test_okr_pagination_is_sent_as_strings(call_tool, stub_client) -> None:
    await call_tool("lark_okr_list_user_okrs", {"user_id": "ou_1", "offset": 5})

    stub_client.request.assert_awaited_once_with(
        "GET",
        "/open-apis/okr/v1/users/ou_1/okrs",
        params={"offset": "5", "limit": "20", "user_id_type": "open_id"},
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool", "resource"),
    [
        ("lark_corehr_list_job_levels", "job_levels"),
        ("lark_corehr_list_job_families", "job_families"),
        ("lark_corehr_list_companies", "companies"),
        ("lark_corehr_list_locations", "locations"),
    ],
)
async def test_corehr_catalogue_lists(call_tool, stub_client, tool, resource) -> None:
    await call_tool(tool, {"page_size": 10})

    stub_client.request.assert_awaited_once_with(
        "GET",
        f"/open-apis/corehr/v1/{resource}",
        params={"page_size": 10, "page_token": None},
    )


@pytest.mark.asyncio
async def test_helpdesk_schedules_filter_on_duty(call_tool, stub_client) -> None:
    await call_tool("lark_helpdesk_list_agent_schedules", {})

    stub_client.request.assert_awaited_once_with(
        "GET", "/open-apis/helpdesk/v1/agent_schedules", params={"status": [1]}
    )


@pytest.mark.asyncio
async def test_admin_reset_password_body(call_tool, stub_client) -> None:
    await call_tool("lark_admin_reset_password", {"user_id": "ou_1", "password": "S3cret!pw"})

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/admin/v1/password/reset",
        params={"user_id_type": "open_id"},
        body={"password": {"ent_email_password": "S3cret!pw"}, "user_id": "ou_1"},
    )


@pytest.mark.asyncio
async def test_workplace_access_data_uses_query_only(call_tool, stub_client) -> None:
    await call_tool(
        "lark_workplace_search_access_data",
        {"from_date": "2024-01-01", "to_date": "2024-01-31"},
    )

    stub_client.request.assert_awaited_once_with(
        "POST",
        "/open-apis/workplace/v1/workplace_access_data/search",
        params={
            "from_date": "2024-01-01",
            "to_date": "2024-01-31",
            "page_size": 50,
            "page_token": None,
        },
    )

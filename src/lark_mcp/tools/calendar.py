"""Calendar tools: calendars, events, attendees and free/busy."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import DESTRUCTIVE, READ_ONLY, WRITE, parse_json, safe_call, segment
from .common import PageSize, PageToken

CalendarId = Annotated[str, Field(description="Calendar ID")]
EventId = Annotated[str, Field(description="Event ID")]


def _calendar_path(calendar_id: str, suffix: str = "") -> str:
    return f"/open-apis/calendar/v4/calendars/{segment(calendar_id)}{suffix}"


def register_calendar_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_calendar_list
    @mcp.tool(
        name="lark_calendar_list",
        description="List calendars visible to the app",
        annotations=READ_ONLY,
        meta={"category": "calendar", "safety_level": "safe"},
    )
    async def list_calendars(
        page_size: PageSize(500) = 50,
        page_token: PageToken = None,
        sync_token: Annotated[
            str | None, Field(description="Sync token for incremental sync")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                "/open-apis/calendar/v4/calendars",
                params={
                    "page_size": page_size,
                    "page_token": page_token,
                    "sync_token": sync_token,
                },
            )
        )

    # lark_calendar_get
    @mcp.tool(
        name="lark_calendar_get",
        description="Get calendar details",
        annotations=READ_ONLY,
        meta={"category": "calendar", "safety_level": "safe"},
    )
    async def get_calendar(calendar_id: CalendarId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _calendar_path(calendar_id),
            )
        )

    # lark_calendar_create_event
    @mcp.tool(
        name="lark_calendar_create_event",
        description=(
            "Create a calendar event. Invite people afterwards with lark_calendar_add_attendees."
        ),
        annotations=WRITE,
        meta={"category": "calendar", "safety_level": "moderate"},
    )
    async def create_event(
        calendar_id: CalendarId,
        summary: Annotated[str, Field(description="Event title")],
        start_time: Annotated[str, Field(description="Start time as Unix timestamp (seconds)")],
        end_time: Annotated[str, Field(description="End time as Unix timestamp (seconds)")],
        description: Annotated[str | None, Field(description="Event description")] = None,
        location: Annotated[str | None, Field(description="Event location name")] = None,
        need_notification: Annotated[bool, Field(description="Send notification")] = True,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _calendar_path(calendar_id, "/events"),
                body={
                    "summary": summary,
                    "description": description,
                    "need_notification": need_notification,
                    "start_time": {"timestamp": start_time},
                    "end_time": {"timestamp": end_time},
                    "attendee_ability": "can_invite_others",
                    "location": {"name": location} if location else None,
                },
            )
        )

    # lark_calendar_list_events
    @mcp.tool(
        name="lark_calendar_list_events",
        description="List events in a calendar within a time range",
        annotations=READ_ONLY,
        meta={"category": "calendar", "safety_level": "safe"},
    )
    async def list_events(
        calendar_id: CalendarId,
        start_time: Annotated[
            str | None, Field(description="Start of time range (Unix seconds)")
        ] = None,
        end_time: Annotated[
            str | None, Field(description="End of time range (Unix seconds)")
        ] = None,
        page_size: PageSize(500) = 50,
        page_token: PageToken = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _calendar_path(calendar_id, "/events"),
                params={
                    "start_time": start_time,
                    "end_time": end_time,
                    "page_size": page_size,
                    "page_token": page_token,
                },
            )
        )

    # lark_calendar_get_event
    @mcp.tool(
        name="lark_calendar_get_event",
        description="Get details of a calendar event",
        annotations=READ_ONLY,
        meta={"category": "calendar", "safety_level": "safe"},
    )
    async def get_event(calendar_id: CalendarId, event_id: EventId):
        return await safe_call(
            lambda: get_client().request(
                "GET",
                _calendar_path(calendar_id, f"/events/{segment(event_id)}"),
            )
        )

    # lark_calendar_delete_event
    @mcp.tool(
        name="lark_calendar_delete_event",
        description="Delete a calendar event",
        annotations=DESTRUCTIVE,
        meta={"category": "calendar", "safety_level": "critical"},
    )
    async def delete_event(
        calendar_id: CalendarId,
        event_id: EventId,
        need_notification: Annotated[bool, Field(description="Notify attendees")] = True,
    ):
        return await safe_call(
            lambda: get_client().request(
                "DELETE",
                _calendar_path(calendar_id, f"/events/{segment(event_id)}"),
                params={"need_notification": need_notification},
            )
        )

    # lark_calendar_add_attendees
    @mcp.tool(
        name="lark_calendar_add_attendees",
        description="Add attendees to a calendar event",
        annotations=WRITE,
        meta={"category": "calendar", "safety_level": "moderate"},
    )
    async def add_attendees(
        calendar_id: CalendarId,
        event_id: EventId,
        attendees: Annotated[
            str,
            Field(
                description=(
                    'JSON array of attendee objects, e.g. [{"type":"user","user_id":"ou_xxx"}]'
                )
            ),
        ],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                _calendar_path(calendar_id, f"/events/{segment(event_id)}/attendees"),
                params={"user_id_type": "open_id"},
                body={"attendees": parse_json(attendees, name="attendees")},
            )
        )

    # lark_calendar_freebusy
    @mcp.tool(
        name="lark_calendar_freebusy",
        description="Query free/busy status for users in a time range",
        annotations=READ_ONLY,
        meta={"category": "calendar", "safety_level": "safe"},
    )
    async def freebusy(
        time_min: Annotated[str, Field(description="Start of range (RFC3339)")],
        time_max: Annotated[str, Field(description="End of range (RFC3339)")],
        user_ids: Annotated[list[str], Field(description="List of user open_ids to query")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/calendar/v4/freebusy/batch",
                params={"user_id_type": "open_id"},
                body={"time_min": time_min, "time_max": time_max, "user_ids": user_ids},
            )
        )

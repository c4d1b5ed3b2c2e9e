"""Tool handlers for the Toggl MCP server.

Each handler validates its arguments, performs one request/response cycle
against the Toggl API (two for ``stop_time_entry``) and formats the outcome
as text. Validation, transport and decode failures propagate as exceptions;
API errors become flagged results through :func:`api_errors_as_result`.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime, timedelta, timezone
from typing import Any

from toggl_mcp.toggl import APIError, Project, TimeEntry, TimeEntryRequest, TogglClient, UserInfo
from toggl_mcp.tools.formatting import format_duration, format_elapsed
from toggl_mcp.tools.params import (
    ParameterError,
    optional_number,
    optional_string,
    require_number,
    require_string,
)
from toggl_mcp.tools.result import ToolResult

logger = logging.getLogger(__name__)

Handler = Callable[[TogglClient, dict[str, Any]], Awaitable[ToolResult]]

DATE_FORMAT = "%Y-%m-%d"
NO_RUNNING_ENTRY = "No running time entry found"
CURRENT_ENTRY_ENDPOINT = "/me/time_entries/current"


def api_errors_as_result(prefix: str) -> Callable[[Handler], Handler]:
    """Turn an :class:`APIError` raised by a handler into a flagged result.

    Args:
        prefix: Text placed before the API error message.
    """

    def decorator(handler: Handler) -> Handler:
        @functools.wraps(handler)
        async def wrapper(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
            try:
                return await handler(client, arguments)
            except APIError as e:
                return ToolResult.error(f"{prefix}: {e}")

        return wrapper

    return decorator


def _parse_date(value: str, key: str) -> date:
    message = f"has an invalid format (use YYYY-MM-DD): {value!r}"
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise ParameterError(key, message) from e
    # strptime also accepts unpadded fields such as 2025-1-5
    if parsed.isoformat() != value:
        raise ParameterError(key, message)
    return parsed


async def _get_current_entry(client: TogglClient) -> TimeEntry | None:
    """Fetch the running entry, or None when nothing is running."""
    try:
        # Toggl answers 200 with a null body when no entry is running
        return await client.request("GET", CURRENT_ENTRY_ENDPOINT, TimeEntry | None)
    except APIError as e:
        if e.is_not_found:
            return None
        raise


@api_errors_as_result("Authentication failed")
async def handle_test_connection(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
    user = await client.request("GET", "/me", UserInfo)
    return ToolResult(
        "✅ Authentication successful!\n"
        f"User: {user.fullname}\n"
        f"Email: {user.email}\n"
        f"Default Workspace ID: {user.default_workspace_id}"
    )


@api_errors_as_result("Failed to start time entry")
async def handle_start_time_entry(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
    description = require_string(arguments, "description")
    workspace_id = require_number(arguments, "workspace_id")

    entry = TimeEntryRequest(
        description=description,
        start=datetime.now(timezone.utc),
        duration=-1,
        project_id=optional_number(arguments, "project_id"),
    )

    result = await client.request(
        "POST",
        f"/workspaces/{workspace_id}/time_entries",
        TimeEntry,
        json=entry.to_api_dict(),
    )
    return ToolResult(f"Started time entry: {result.description} (ID: {result.id})")


@api_errors_as_result("Failed to stop time entry")
async def handle_stop_time_entry(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
    workspace_id = require_number(arguments, "workspace_id")

    current = await _get_current_entry(client)
    if current is None:
        return ToolResult(NO_RUNNING_ENTRY)

    # The entry may be stopped elsewhere between these calls; Toggl then
    # rejects the PATCH and the API error is reported as usual.
    await client.request(
        "PATCH",
        f"/workspaces/{workspace_id}/time_entries/{current.id}/stop",
        TimeEntry,
    )
    return ToolResult(f"Stopped time entry: {current.description} (ID: {current.id})")


@api_errors_as_result("Failed to get current entry")
async def handle_get_current_time_entry(
    client: TogglClient, arguments: dict[str, Any]
) -> ToolResult:
    current = await _get_current_entry(client)
    if current is None:
        return ToolResult(NO_RUNNING_ENTRY)

    elapsed = timedelta(0)
    if current.start is not None:
        elapsed = datetime.now(timezone.utc) - current.start

    return ToolResult(
        f"Current time entry: {current.description} "
        f"(ID: {current.id}, Running for: {format_elapsed(elapsed)})"
    )


def _format_time_entries(entries: list[TimeEntry], start_date: str, end_date: str) -> str:
    lines = [f"Found {len(entries)} time entries:"]

    if not entries:
        lines += [
            "",
            "No time entries found. This could be because:",
            "- No time entries exist in the specified date range",
            "- You need to specify a date range (start_date, end_date)",
            "- The default query only returns recent entries",
        ]

        if start_date and start_date == end_date:
            next_day = _parse_date(start_date, "start_date") + timedelta(days=1)
            lines += [
                "",
                "⚠️  LIKELY ISSUE: You used the same date for start_date and end_date!",
                "The end_date is exclusive, so this range contains no time at all.",
                f"To get entries for {start_date}, use:",
                f"  start_date: {start_date}",
                f"  end_date: {next_day.isoformat()}",
                f"OR use the 'get_time_entries_for_day' tool with date: {start_date}",
            ]
    else:
        for entry in entries:
            project_info = ""
            if entry.project_id is not None:
                project_info = f" (Project ID: {entry.project_id})"
            lines.append(
                f"- {entry.description} (ID: {entry.id}){project_info} "
                f"{format_duration(entry.duration)}"
            )

    return "\n".join(lines) + "\n"


async def _list_time_entries(client: TogglClient, start_date: str, end_date: str) -> ToolResult:
    params: dict[str, str] = {}
    if start_date:
        _parse_date(start_date, "start_date")
        params["start_date"] = start_date
    if end_date:
        _parse_date(end_date, "end_date")
        params["end_date"] = end_date

    entries = await client.request(
        "GET", "/me/time_entries", list[TimeEntry], params=params or None
    )
    return ToolResult(_format_time_entries(entries, start_date, end_date))


@api_errors_as_result("Failed to get time entries")
async def handle_get_time_entries(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
    return await _list_time_entries(
        client,
        optional_string(arguments, "start_date"),
        optional_string(arguments, "end_date"),
    )


@api_errors_as_result("Failed to get time entries")
async def handle_get_time_entries_for_day(
    client: TogglClient, arguments: dict[str, Any]
) -> ToolResult:
    day = require_string(arguments, "date")
    next_day = _parse_date(day, "date") + timedelta(days=1)
    return await _list_time_entries(client, day, next_day.isoformat())


@api_errors_as_result("Failed to create project")
async def handle_create_project(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
    name = require_string(arguments, "name")
    workspace_id = require_number(arguments, "workspace_id")

    project: dict[str, Any] = {"name": name, "active": True}
    if color := optional_string(arguments, "color"):
        project["color"] = color
    if (client_id := optional_number(arguments, "client_id")) is not None:
        project["client_id"] = client_id

    result = await client.request(
        "POST", f"/workspaces/{workspace_id}/projects", Project, json=project
    )
    return ToolResult(f"Created project: {result.name} (ID: {result.id})")


@api_errors_as_result("Failed to get projects")
async def handle_get_projects(client: TogglClient, arguments: dict[str, Any]) -> ToolResult:
    workspace_id = require_number(arguments, "workspace_id")

    params: dict[str, str] = {}
    active = arguments.get("active")
    if isinstance(active, bool):
        params["active"] = "true" if active else "false"

    projects = await client.request(
        "GET", f"/workspaces/{workspace_id}/projects", list[Project], params=params or None
    )

    lines = [f"Found {len(projects)} projects:"]
    for project in projects:
        status = "active" if project.active else "inactive"
        lines.append(f"- {project.name} (ID: {project.id}, {status})")
    return ToolResult("\n".join(lines) + "\n")

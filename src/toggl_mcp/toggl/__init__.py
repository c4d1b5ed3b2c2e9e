"""Toggl Track API integration."""

from toggl_mcp.toggl.client import TOGGL_API_BASE, TogglClient, decode_response
from toggl_mcp.toggl.errors import (
    APIError,
    DecodeError,
    RequestBuildError,
    RequestExecutionError,
    ResponseReadError,
    TogglError,
)
from toggl_mcp.toggl.models import Project, TimeEntry, TimeEntryRequest, UserInfo

__all__ = [
    "TOGGL_API_BASE",
    "TogglClient",
    "decode_response",
    "APIError",
    "DecodeError",
    "RequestBuildError",
    "RequestExecutionError",
    "ResponseReadError",
    "TogglError",
    "Project",
    "TimeEntry",
    "TimeEntryRequest",
    "UserInfo",
]

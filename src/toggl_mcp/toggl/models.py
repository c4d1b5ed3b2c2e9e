"""Pydantic models for Toggl API payloads."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class TogglEntity(BaseModel):
    """Fields shared by Toggl workspace entities."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    workspace_id: int = 0
    at: datetime | None = None


class TimeEntry(TogglEntity):
    """Toggl time entry model.

    A negative duration (Toggl uses -1) marks a running entry.
    """

    project_id: int | None = None
    description: str = ""
    start: datetime | None = None
    stop: datetime | None = None
    duration: int = 0
    tags: list[str] | None = None
    tag_ids: list[int] | None = None

    @property
    def is_running(self) -> bool:
        """Whether the entry is still in progress."""
        return self.duration < 0


class Project(TogglEntity):
    """Toggl project model."""

    name: str = ""
    active: bool = False
    color: str | None = None
    client_id: int | None = None


class UserInfo(BaseModel):
    """Authenticated user as returned by /me."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    email: str = ""
    fullname: str = ""
    default_workspace_id: int = 0


class TimeEntryRequest(BaseModel):
    """Payload for creating a time entry."""

    model_config = ConfigDict(frozen=True)

    description: str
    start: datetime
    duration: int
    project_id: int | None = None
    tags: list[str] | None = None
    created_with: str = "toggl-mcp"

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API-compatible dictionary.

        Returns:
            JSON-ready dictionary without unset optional fields.
        """
        return self.model_dump(mode="json", exclude_none=True)

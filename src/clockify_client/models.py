"""Pydantic models for Clockify API requests and responses."""

import re
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_iso8601_duration(duration_str: str | None) -> float:
    """Parse ISO 8601 duration string to hours.

    Args:
        duration_str: Duration in ISO 8601 format (e.g., 'PT4H', 'PT30M', 'PT1H30M')

    Returns:
        Duration in hours as a float.
    """
    if not duration_str:
        return 0.0

    # PT[n]H[n]M[n]S
    pattern = r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?"
    match = re.match(pattern, duration_str)

    if not match:
        return 0.0

    hours, minutes, seconds = match.groups()
    total_hours = 0.0

    if hours:
        total_hours += float(hours)
    if minutes:
        total_hours += float(minutes) / 60
    if seconds:
        total_hours += float(seconds) / 3600

    return total_hours


def format_timestamp(dt: datetime) -> str:
    """Format a datetime the way Clockify expects it on write (UTC, second precision).

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(TIMESTAMP_FORMAT)


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class AccountSettings(BaseModel):
    """Clockify user settings model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    week_start: str | None = Field(default=None, alias="weekStart")
    time_zone: str | None = Field(default=None, alias="timeZone")
    time_format: str | None = Field(default=None, alias="timeFormat")
    date_format: str | None = Field(default=None, alias="dateFormat")


class Workspace(BaseModel):
    """Clockify workspace model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    rounding_minutes: int = 0


class Client(BaseModel):
    """Clockify client model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    workspace_id: str | None = Field(default=None, alias="workspaceId")
    id: int | str
    name: str = ""


class Project(BaseModel):
    """Clockify project model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    workspace_id: str | None = Field(default=None, alias="workspaceId")
    id: str
    name: str = ""
    archived: bool = False
    billable: bool = False

    @property
    def is_active(self) -> bool:
        """Whether the project is active (not archived)."""
        return not self.archived


class Task(BaseModel):
    """Clockify task model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project_id: str | None = Field(default=None, alias="projectId")
    id: str
    name: str = ""


class Tag(BaseModel):
    """Clockify tag model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    workspace_id: str | None = Field(default=None, alias="workspaceId")
    id: str
    name: str = ""


class TimeInterval(BaseModel):
    """Start, end and duration of a time entry. A running entry has no end."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    duration: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    @property
    def duration_hours(self) -> float:
        """Get duration in hours from ISO 8601 duration string."""
        return parse_iso8601_duration(self.duration)


class TimeEntry(BaseModel):
    """Clockify time entry model, as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    workspace_id: str | None = Field(default=None, alias="workspaceId")
    id: str | None = None
    project_id: str | None = Field(default=None, alias="projectId")
    task_id: str | None = Field(default=None, alias="taskId")
    user_id: str | None = Field(default=None, alias="userId")
    description: str | None = None
    time_interval: TimeInterval = Field(default_factory=TimeInterval, alias="timeInterval")
    tag_ids: list[str] | None = Field(default=None, alias="tagIds")
    billable: bool = False

    @property
    def start_time(self) -> datetime | None:
        """Get start time of entry."""
        return self.time_interval.start

    @property
    def end_time(self) -> datetime | None:
        """Get end time of entry."""
        return self.time_interval.end

    @property
    def duration_hours(self) -> float:
        """Get duration in hours from ISO 8601 duration string."""
        return self.time_interval.duration_hours

    @property
    def is_running(self) -> bool:
        """True while the timer has not been stopped."""
        return self.time_interval.end is None


class TimeEntryRequest(BaseModel):
    """Payload for creating or updating a time entry.

    The API accepts a different shape on write than it returns on read, and
    ids are always assigned by the server, so this model has no ``id`` field
    and rejects one if given.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    start: datetime | None = None
    project_id: str | None = Field(default=None, alias="projectId")
    task_id: str | None = Field(default=None, alias="taskId")
    description: str | None = None
    end: datetime | None = None
    tag_ids: list[str] | None = Field(default=None, alias="tagIds")
    billable: bool = False

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API-compatible dictionary.

        Empty fields are left out entirely.

        Returns:
            Dictionary for API submission.
        """
        data: dict[str, Any] = {}
        if self.start:
            data["start"] = format_timestamp(self.start)
        if self.project_id:
            data["projectId"] = self.project_id
        if self.task_id:
            data["taskId"] = self.task_id
        if self.description:
            data["description"] = self.description
        if self.end:
            data["end"] = format_timestamp(self.end)
        if self.tag_ids:
            data["tagIds"] = list(self.tag_ids)
        if self.billable:
            data["billable"] = True
        return data


class Account(BaseModel):
    """Clockify user account, as returned by ``GET /user``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    email: str = ""
    workspaces: list[Workspace] = Field(default_factory=list)
    clients: list[Client] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    time_entries: list[TimeEntry] = Field(default_factory=list)
    settings: AccountSettings = Field(default_factory=AccountSettings)

"""Pytest configuration and fixtures."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from clockify_client import Session
from clockify_client.utils import disable_log
from clockify_client.utils.logging import PACKAGE_LOGGER

API_PREFIX = "/api/v1"


class FakeClockify:
    """In-memory stand-in for the Clockify API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
    ) -> None:
        """Answer ``method path`` with a fixed status and body."""

        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        self.routes[(method, API_PREFIX + path)] = respond

    def add_handler(
        self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        """Answer ``method path`` by calling ``handler``."""
        self.routes[(method, API_PREFIX + path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found", "code": 404})
        return route(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_api() -> FakeClockify:
    """Create an empty fake Clockify API."""
    return FakeClockify()


@pytest.fixture
def session(fake_api: FakeClockify) -> Session:
    """Create a session whose requests are answered by the fake API."""
    with Session("test_api_key", transport=httpx.MockTransport(fake_api.handler)) as s:
        yield s


@pytest.fixture(autouse=True)
def reset_package_logger() -> None:
    """Undo enable_log()/disable_log() between tests."""
    yield
    disable_log()
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)


@pytest.fixture
def time_entry_payload() -> dict[str, Any]:
    """A time entry as the API returns it."""
    return {
        "id": "entry_789",
        "description": "Working on feature X",
        "tagIds": ["tag_1", "tag_2"],
        "userId": "user_123",
        "billable": True,
        "taskId": "task_456",
        "projectId": "project_123",
        "workspaceId": "workspace_123",
        "timeInterval": {
            "start": "2024-01-15T08:00:00Z",
            "end": "2024-01-15T10:30:00Z",
            "duration": "PT2H30M",
        },
        "customFieldValues": [],
        "type": "REGULAR",
        "isLocked": False,
    }


@pytest.fixture
def account_payload(time_entry_payload: dict[str, Any]) -> dict[str, Any]:
    """A user account as the API returns it."""
    return {
        "id": "user_123",
        "name": "John Doe",
        "email": "john.doe@example.com",
        "activeWorkspace": "workspace_123",
        "workspaces": [
            {"id": "workspace_123", "name": "Acme", "rounding_minutes": 15},
        ],
        "clients": [
            {"workspaceId": "workspace_123", "id": 42, "name": "Big Client"},
        ],
        "projects": [
            {
                "workspaceId": "workspace_123",
                "id": "project_123",
                "name": "Test Project",
                "archived": False,
                "billable": True,
            },
            {
                "workspaceId": "workspace_123",
                "id": "project_456",
                "name": "Old Project",
                "archived": True,
                "billable": False,
            },
        ],
        "tasks": [
            {"projectId": "project_123", "id": "task_456", "name": "Development"},
        ],
        "tags": [
            {"workspaceId": "workspace_123", "id": "tag_1", "name": "meeting"},
            {"workspaceId": "workspace_123", "id": "tag_2", "name": "remote"},
        ],
        "time_entries": [time_entry_payload],
        "settings": {
            "weekStart": "MONDAY",
            "timeZone": "Europe/Prague",
            "timeFormat": "HOUR24",
            "dateFormat": "DD/MM/YYYY",
        },
    }

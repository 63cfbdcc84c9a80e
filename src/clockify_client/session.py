"""Clockify API session: HTTP transport helpers and resource operations."""

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from clockify_client.errors import DecodeError, NetworkError, TransportError
from clockify_client.models import (
    Account,
    Client,
    Project,
    Tag,
    Task,
    TimeEntry,
    TimeEntryRequest,
    Workspace,
    format_timestamp,
    utc_now,
)

CLOCKIFY_API = "https://api.clockify.me/api/v1"
DEFAULT_TIMEOUT = 30.0

ModelT = TypeVar("ModelT", bound=BaseModel)


def _quote(segment: str) -> str:
    """Percent-encode an id for use as a single path segment."""
    return quote(str(segment), safe="")


class Session:
    """An authenticated session against the Clockify REST API.

    A session holds the API token and the ``httpx.Client`` used to talk to the
    service. Construction does no I/O.
    """

    BASE_URL = CLOCKIFY_API

    def __init__(
        self,
        api_token: str,
        *,
        base_url: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            api_token: Clockify API key. Sent as ``X-Api-Key`` when non-empty.
            base_url: API root. Defaults to the public Clockify API.
            client: HTTP client to use. The session does not close it.
            timeout: Request timeout in seconds for a client the session creates.
            transport: Transport for a client the session creates.
            logger: Destination for diagnostic trace lines.

        Raises:
            ValueError: If both ``client`` and ``transport`` are given.
        """
        if client is not None and transport is not None:
            raise ValueError("Pass either client or transport, not both")

        self.api_token = api_token
        self.base_url = base_url or self.BASE_URL
        self.logger = logger or logging.getLogger(__name__)

        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    # Resource operations

    def get_account(self) -> Account:
        """Get the current user's account information.

        Returns:
            The account of the user owning the API token.

        Raises:
            TransportError: If the server rejects the request.
            NetworkError: If the server cannot be reached.
            DecodeError: If the response is not an account.
        """
        data = self.get(self.base_url, "/user")
        return self._decode(Account, data)

    def get_user_id(self) -> str:
        """Get current user's ID."""
        return self.get_account().id

    def get_workspaces(self) -> list[Workspace]:
        """List all workspaces the user has access to."""
        data = self.get(self.base_url, "/workspaces")
        return self._decode_list(Workspace, data)

    def get_projects(self, workspace_id: str) -> list[Project]:
        """List all projects in a workspace.

        Args:
            workspace_id: Workspace ID.

        Returns:
            List of projects.
        """
        self.logger.debug(f"Getting projects for workspace {workspace_id}")
        data = self.get(self.base_url, f"/workspaces/{_quote(workspace_id)}/projects")
        return self._decode_list(Project, data)

    def get_clients(self, workspace_id: str) -> list[Client]:
        """List all clients in a workspace."""
        data = self.get(self.base_url, f"/workspaces/{_quote(workspace_id)}/clients")
        return self._decode_list(Client, data)

    def get_tags(self, workspace_id: str) -> list[Tag]:
        """List all tags in a workspace."""
        data = self.get(self.base_url, f"/workspaces/{_quote(workspace_id)}/tags")
        return self._decode_list(Tag, data)

    def get_tasks(self, workspace_id: str, project_id: str) -> list[Task]:
        """List all tasks in a project.

        Args:
            workspace_id: Workspace ID.
            project_id: Project ID.

        Returns:
            List of tasks.
        """
        path = f"/workspaces/{_quote(workspace_id)}/projects/{_quote(project_id)}/tasks"
        data = self.get(self.base_url, path)
        return self._decode_list(Task, data)

    def get_time_entry(self, workspace_id: str, entry_id: str) -> TimeEntry:
        """Get a single time entry.

        Args:
            workspace_id: Workspace ID.
            entry_id: Time entry ID.

        Returns:
            The time entry.
        """
        path = f"/workspaces/{_quote(workspace_id)}/time-entries/{_quote(entry_id)}"
        data = self.get(self.base_url, path)
        return self._decode(TimeEntry, data)

    def get_time_entries(
        self,
        workspace_id: str,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TimeEntry]:
        """Get time entries for a user.

        Only the first page the server returns is fetched.

        Args:
            workspace_id: Workspace ID.
            user_id: User ID.
            start: Only entries starting at or after this time.
            end: Only entries starting at or before this time.

        Returns:
            List of time entries.
        """
        params: dict[str, str] = {}
        if start:
            params["start"] = format_timestamp(start)
        if end:
            params["end"] = format_timestamp(end)

        data = self.get(
            self.base_url,
            f"/workspaces/{_quote(workspace_id)}/user/{_quote(user_id)}/time-entries",
            params,
        )
        return self._decode_list(TimeEntry, data)

    def start_time_entry(self, workspace_id: str, request: TimeEntryRequest) -> TimeEntry:
        """Create a new time entry.

        An entry without an end keeps running until stopped.

        Args:
            workspace_id: Workspace ID.
            request: Time entry to create.

        Returns:
            The created entry, with its server-assigned ID.
        """
        path = f"/workspaces/{_quote(workspace_id)}/time-entries"
        data = self.post(self.base_url, path, request)
        return self._decode(TimeEntry, data)

    def update_time_entry(
        self, workspace_id: str, entry_id: str, request: TimeEntryRequest
    ) -> TimeEntry:
        """Replace the contents of an existing time entry.

        Args:
            workspace_id: Workspace ID.
            entry_id: Time entry ID.
            request: New contents of the entry.

        Returns:
            The updated entry.
        """
        self.logger.debug(f"Updating time entry {entry_id}")
        path = f"/workspaces/{_quote(workspace_id)}/time-entries/{_quote(entry_id)}"
        data = self.put(self.base_url, path, request)
        return self._decode(TimeEntry, data)

    def continue_time_entry(self, entry: TimeEntry, duronly: bool = False) -> TimeEntry:
        """Start a new running entry that continues ``entry``.

        The new entry copies project, task, description, tags and billable
        flag from ``entry`` and starts now.

        Args:
            entry: Entry to continue. Must belong to a workspace.
            duronly: Accepted for compatibility; Clockify has no
                duration-only entries, so it has no effect.

        Returns:
            The newly started entry.

        Raises:
            ValueError: If ``entry`` has no workspace ID.
        """
        if not entry.workspace_id:
            raise ValueError("Cannot continue a time entry without a workspace ID")

        self.logger.debug(f"Continuing timer {entry!r}")
        request = TimeEntryRequest(
            start=utc_now(),
            project_id=entry.project_id,
            task_id=entry.task_id,
            description=entry.description,
            tag_ids=list(entry.tag_ids) if entry.tag_ids else None,
            billable=entry.billable,
        )
        return self.start_time_entry(entry.workspace_id, request)

    def stop_time_entry(self, workspace_id: str, user_id: str) -> TimeEntry:
        """Stop the user's running time entry, setting its end to now.

        Args:
            workspace_id: Workspace ID.
            user_id: User ID.

        Returns:
            The stopped entry.
        """
        self.logger.debug(f"Stopping timer of user {user_id}")
        request = TimeEntryRequest(end=utc_now())
        path = f"/workspaces/{_quote(workspace_id)}/user/{_quote(user_id)}/time-entries"
        data = self.patch(self.base_url, path, request)
        return self._decode(TimeEntry, data)

    def delete_time_entry(self, workspace_id: str, entry_id: str) -> bytes:
        """Delete a time entry.

        Args:
            workspace_id: Workspace ID.
            entry_id: Time entry ID.

        Returns:
            The raw response body.
        """
        self.logger.debug(f"Deleting time entry {entry_id}")
        path = f"/workspaces/{_quote(workspace_id)}/time-entries/{_quote(entry_id)}"
        return self.delete(self.base_url, path)

    # Transport helpers

    def get(
        self, base_url: str, path: str, params: Mapping[str, Any] | None = None
    ) -> bytes:
        """Issue a GET request, appending ``params`` as a query string."""
        request_url = base_url + path
        if params:
            request_url = str(httpx.URL(request_url).copy_merge_params(dict(params)))

        self.logger.debug(f"GETing from URL: {request_url}")
        return self._request("GET", request_url)

    def post(self, base_url: str, path: str, data: Any = None) -> bytes:
        """Issue a POST request with ``data`` encoded as JSON."""
        request_url = base_url + path
        body = self._encode(data)

        self.logger.debug(f"POSTing to URL: {request_url}")
        self.logger.debug(f"data: {body.decode()}")
        return self._request("POST", request_url, body)

    def put(self, base_url: str, path: str, data: Any = None) -> bytes:
        """Issue a PUT request with ``data`` encoded as JSON."""
        request_url = base_url + path
        body = self._encode(data)

        self.logger.debug(f"PUTing to URL {request_url}: {body.decode()}")
        return self._request("PUT", request_url, body)

    def patch(self, base_url: str, path: str, data: Any = None) -> bytes:
        """Issue a PATCH request with ``data`` encoded as JSON."""
        request_url = base_url + path
        body = self._encode(data)

        self.logger.debug(f"PATCHing to URL {request_url}: {body.decode()}")
        return self._request("PATCH", request_url, body)

    def delete(self, base_url: str, path: str) -> bytes:
        """Issue a DELETE request. No body is sent."""
        request_url = base_url + path

        self.logger.debug(f"DELETEing URL: {request_url}")
        return self._request("DELETE", request_url)

    def _request(self, method: str, request_url: str, body: bytes | None = None) -> bytes:
        """Send a request and return the fully read response body.

        Raises:
            NetworkError: If no response was received.
            ValueError: If the request URL cannot be parsed.
            TransportError: If the status is outside [200, 400).
        """
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["X-Api-Key"] = self.api_token

        try:
            response = self.client.request(method, request_url, content=body, headers=headers)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid request URL {request_url!r}: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"{method} {request_url} failed: {e}") from e

        content = response.content
        if response.status_code < 200 or response.status_code >= 400:
            status_line = f"{response.status_code} {response.reason_phrase}".strip()
            raise TransportError(status_line, response.status_code, content, response)

        return content

    @staticmethod
    def _encode(data: Any) -> bytes:
        if data is None:
            return b""
        if isinstance(data, TimeEntryRequest):
            data = data.to_api_dict()
        elif isinstance(data, BaseModel):
            data = data.model_dump(mode="json", by_alias=True)
        return json.dumps(data).encode()

    def _decode(self, model: type[ModelT], data: bytes) -> ModelT:
        try:
            result = model.model_validate(json.loads(data))
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, ValidationError) as e:
            raise DecodeError(f"Could not decode {model.__name__}: {e}", data) from e

        self.logger.debug(f"Unmarshaled {data!r} into {result!r}")
        return result

    def _decode_list(self, model: type[ModelT], data: bytes) -> list[ModelT]:
        try:
            payload = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            raise DecodeError(f"Could not decode list of {model.__name__}: {e}", data) from e

        if not isinstance(payload, list):
            raise DecodeError(
                f"Expected a list of {model.__name__}, got {type(payload).__name__}", data
            )

        try:
            results = [model.model_validate(item) for item in payload]
        except ValidationError as e:
            raise DecodeError(f"Could not decode list of {model.__name__}: {e}", data) from e

        self.logger.debug(f"Unmarshaled {data!r} into {results!r}")
        return results

    def close(self) -> None:
        """Close the HTTP client if the session created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "Session":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()


def open_session(api_token: str, **kwargs: Any) -> Session:
    """Open a session using an existing API token.

    Keyword arguments are passed on to :class:`Session`.
    """
    return Session(api_token, **kwargs)

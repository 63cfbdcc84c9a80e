"""Client library for the Clockify time tracking REST API.

See https://clockify.me/developers-api for the API itself.
"""

import logging

from clockify_client.errors import ClockifyError, DecodeError, NetworkError, TransportError
from clockify_client.models import (
    Account,
    AccountSettings,
    Client,
    Project,
    Tag,
    Task,
    TimeEntry,
    TimeEntryRequest,
    TimeInterval,
    Workspace,
)
from clockify_client.session import CLOCKIFY_API, Session, open_session
from clockify_client.utils import disable_log, enable_log

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CLOCKIFY_API",
    "Account",
    "AccountSettings",
    "Client",
    "ClockifyError",
    "DecodeError",
    "NetworkError",
    "Project",
    "Session",
    "Tag",
    "Task",
    "TimeEntry",
    "TimeEntryRequest",
    "TimeInterval",
    "TransportError",
    "Workspace",
    "disable_log",
    "enable_log",
    "open_session",
]

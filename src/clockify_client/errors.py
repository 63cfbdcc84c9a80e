"""Exceptions raised by the Clockify client."""

import httpx


class ClockifyError(Exception):
    """Base class for all Clockify client errors."""


class NetworkError(ClockifyError):
    """The request never got a response (DNS, connect, timeout, TLS)."""


class TransportError(ClockifyError):
    """The server answered with a status outside [200, 400).

    The body is kept on the exception so callers can inspect what the
    server said.
    """

    def __init__(
        self,
        status_line: str,
        status_code: int,
        content: bytes = b"",
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(status_line)
        self.status_line = status_line
        self.status_code = status_code
        self.content = content
        self.response = response


class DecodeError(ClockifyError):
    """The response body is not valid JSON or not the expected shape."""

    def __init__(self, message: str, content: bytes = b"") -> None:
        super().__init__(message)
        self.content = content

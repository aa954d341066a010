"""Exception hierarchy shared by every arangokit component.

Three kinds of failure reach callers:

- ``HttpClientError``: the transport could not complete the exchange.
- ``SerdeError``: a payload could not be serialized, or a response body could
  not be parsed or matched to the expected shape.
- ``ArangoError``: the server answered with its error envelope.

Nothing in the library retries; every error is raised once to the caller.
"""

from __future__ import annotations

from typing import Any


class ClientError(RuntimeError):
    """Base class for every error raised by arangokit."""


class HttpClientError(ClientError):
    """Raised when the HTTP transport fails before a response is available."""

    def __init__(self, description: str) -> None:
        super().__init__(f"HTTP client error: {description}")
        self.description = description


class SerdeError(ClientError):
    """Raised when JSON encoding or decoding fails."""

    def __init__(self, message: str) -> None:
        super().__init__(f"error from serde: {message}")
        self.message = message


class ArangoError(ClientError):
    """Raised when the ArangoDB HTTP API reports an error."""

    def __init__(
        self,
        code: int,
        error_num: int,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{message}({error_num})")
        self.code = code
        self.error_num = error_num
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        """HTTP status code of the error response."""
        return self.code


class InvalidServerError(ClientError):
    """Raised when the remote endpoint does not identify itself as ArangoDB."""

    def __init__(self, server: str) -> None:
        super().__init__(f"Server is not ArangoDB: {server}")
        self.server = server


class InsufficientPermissionError(ClientError):
    """Raised when the authenticated user lacks the access an operation needs."""

    def __init__(self, permission: Any, operation: str) -> None:
        super().__init__(f"Insufficient permission ({permission}) to operate: {operation}")
        self.permission = permission
        self.operation = operation


__all__ = [
    "ArangoError",
    "ClientError",
    "HttpClientError",
    "InsufficientPermissionError",
    "InvalidServerError",
    "SerdeError",
]

"""Centralized internal error hierarchy.

These exceptions give semantic categories to the failures that can happen
at the bridge's network boundaries. Raise them inside the HTTP and socket
layers only; the public session API never lets them escape.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport failures (connect, send, DNS).
  OAuthError           – Token rejected or identity missing from validation.
  ParsingError         – Response body could not be decoded or validated.
  QueryError           – Query API answered with a non-200 status.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Covers DNS failures, refused connections and resets on either the chat
    socket or the HTTP client.
    """


class OAuthError(InternalError):
    """Exception raised when an access token is rejected or unusable."""


class ParsingError(InternalError):
    """Exception raised for response parsing or schema validation errors."""


class QueryError(InternalError):
    """Exception raised when the query API answers with a non-200 status.

    Args:
        message: Error message.
        status: HTTP status code returned by the server.
    """

    def __init__(self, message: str, *, status: int) -> None:
        super().__init__(message, data={"status": status})

    @property
    def status(self) -> int:
        return int(self.data["status"])  # type: ignore[arg-type]


__all__ = [
    "InternalError",
    "NetworkError",
    "OAuthError",
    "ParsingError",
    "QueryError",
]

"""Error taxonomy and handling helpers."""

from .handling import classify_error, handle_api_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    InternalError,
    NetworkError,
    OAuthError,
    ParsingError,
    QueryError,
)

__all__ = [
    "InternalError",
    "NetworkError",
    "OAuthError",
    "ParsingError",
    "QueryError",
    "classify_error",
    "handle_api_error",
    "log_error",
]

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

import httpx
from pydantic import ValidationError

from ..logging_config import log_structured_error
from .internal import (
    InternalError,
    NetworkError,
    OAuthError,
    ParsingError,
    QueryError,
)

T = TypeVar("T")


def classify_error(error: Exception) -> str:
    """Return the aggregation bucket for an exception."""
    if isinstance(error, NetworkError | httpx.TransportError | OSError):
        return "network"
    if isinstance(error, OAuthError):
        return "auth"
    if isinstance(error, QueryError):
        return "query"
    if isinstance(error, ParsingError | ValidationError | ValueError):
        return "parsing"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict = None) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


def handle_api_error(operation: Callable[[], T], context: str) -> T:
    """Run a query API operation and translate failures into the internal taxonomy.

    The failure is logged once here with structured context; callers only
    need to catch ``InternalError``.

    Args:
        operation: The blocking operation to execute.
        context: Descriptive context for the operation (e.g., "Twitch viewer count").

    Returns:
        The result of the operation if successful.

    Raises:
        NetworkError: Transport level failure (DNS, connect, read).
        QueryError: Non-200 status reported by the operation.
        ParsingError: Body was not JSON or did not match the expected schema.
        InternalError: Anything else raised as an InternalError.
    """
    try:
        return operation()
    except (
        httpx.HTTPError,
        OSError,
        ValidationError,
        ValueError,
        InternalError,
    ) as e:
        error_context: dict[str, object] = {"operation": context, "timestamp": time.time()}
        if isinstance(e, QueryError):
            error_context["http_status"] = e.status
        if isinstance(e, httpx.RequestError):
            try:
                error_context["url"] = str(e.request.url)
            except RuntimeError:
                pass

        log_error(f"API operation failed in {context}", e, context=error_context)

        if isinstance(e, InternalError):
            raise
        if isinstance(e, httpx.HTTPError | OSError):
            raise NetworkError(
                f"Network connectivity issue in {context}. Check internet connection and DNS resolution. Error: {str(e)}"
            ) from e
        raise ParsingError(
            f"Unexpected response body in {context}. Error: {str(e)}"
        ) from e


__all__ = ["classify_error", "handle_api_error", "log_error"]

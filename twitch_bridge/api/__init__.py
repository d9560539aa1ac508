"""Twitch query API client and response models."""

from .models import (  # noqa: F401
    ChatterData,
    ChattersResponse,
    Pagination,
    StreamData,
    StreamsResponse,
    TokenValidation,
)
from .twitch import QueryResult, TwitchAPI  # noqa: F401

__all__ = [
    "ChatterData",
    "ChattersResponse",
    "Pagination",
    "QueryResult",
    "StreamData",
    "StreamsResponse",
    "TokenValidation",
    "TwitchAPI",
]

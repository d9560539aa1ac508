"""Polled bridge between Twitch chat and a host application's update loop."""

from .api import QueryResult, TwitchAPI  # noqa: F401
from .config import BridgeConfig, load_config  # noqa: F401
from .events import EventHub  # noqa: F401
from .irc import (  # noqa: F401
    ChatMessage,
    FirstConnect,
    Ignored,
    ServerPing,
    SessionState,
    SocketConnection,
    StreamConnection,
    Subscription,
    parse_chat_line,
)
from .sampler import sample  # noqa: F401
from .session import Credentials, TwitchSession  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "BridgeConfig",
    "ChatMessage",
    "Credentials",
    "EventHub",
    "FirstConnect",
    "Ignored",
    "QueryResult",
    "ServerPing",
    "SessionState",
    "SocketConnection",
    "StreamConnection",
    "Subscription",
    "TwitchAPI",
    "TwitchSession",
    "load_config",
    "parse_chat_line",
    "sample",
]

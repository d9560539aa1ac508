"""IRC subsystem package.

Contains the chat connection, line parser, keepalive timer and event models
used by the session.
"""

from .connection import SocketConnection, StreamConnection  # noqa: F401
from .heartbeat import KeepaliveTimer  # noqa: F401
from .models import (  # noqa: F401
    ChatEvent,
    ChatMessage,
    FirstConnect,
    Ignored,
    ServerPing,
    SessionState,
    Subscription,
)
from .parser import parse_chat_line  # noqa: F401

__all__ = [
    "ChatEvent",
    "ChatMessage",
    "FirstConnect",
    "Ignored",
    "KeepaliveTimer",
    "ServerPing",
    "SessionState",
    "SocketConnection",
    "StreamConnection",
    "Subscription",
    "parse_chat_line",
]

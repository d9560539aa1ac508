"""Chat event and connection state models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class SessionState(Enum):
    UNAUTHENTICATED = auto()
    VALIDATING = auto()
    CONNECTED = auto()
    DISCONNECTED = auto()


@dataclass(frozen=True, slots=True)
class ChatMessage:
    nick: str
    text: str


@dataclass(frozen=True, slots=True)
class Subscription:
    subscriber: str
    raw_line: str


@dataclass(frozen=True, slots=True)
class FirstConnect:
    pass


@dataclass(frozen=True, slots=True)
class ServerPing:
    """PING sent by the server; answered by the session, never forwarded."""

    payload: str = ":tmi.twitch.tv"


@dataclass(frozen=True, slots=True)
class Ignored:
    raw_line: str = ""


ChatEvent = ChatMessage | Subscription | FirstConnect | ServerPing | Ignored

__all__ = [
    "ChatEvent",
    "ChatMessage",
    "FirstConnect",
    "Ignored",
    "ServerPing",
    "SessionState",
    "Subscription",
]

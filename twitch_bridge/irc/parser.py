"""Line classification for the Twitch chat protocol.

Only substring matching is done here; IRCv3 tags are not parsed. A single
line may produce more than one event because welcome detection does not
stop the PRIVMSG check for the same line.
"""

from __future__ import annotations

import logging

from ..logs.logger import logger
from .models import (
    ChatEvent,
    ChatMessage,
    FirstConnect,
    Ignored,
    ServerPing,
    Subscription,
)


def parse_chat_line(line: str | None) -> list[ChatEvent]:
    """Classify one raw protocol line.

    Never raises. The returned list is never empty; lines that match
    nothing (or are malformed) yield a single ``Ignored``.
    """
    if not line:
        return [Ignored("")]

    if line == "PING" or line.startswith("PING "):
        payload = line[4:].strip() or ":tmi.twitch.tv"
        return [ServerPing(payload)]

    if "USERNOTICE" in line and "msg-id=sub" in line:
        subscriber = _extract_nick(line)
        if subscriber:
            return [Subscription(subscriber=subscriber, raw_line=line)]

    events: list[ChatEvent] = []
    if "Welcome" in line:
        events.append(FirstConnect())

    if "PRIVMSG" not in line:
        return events or [Ignored(line)]

    message = _build_chat_message(line)
    if message is None:
        logger.log_event(
            "irc", "malformed_line", level=logging.DEBUG, kind="PRIVMSG", raw=line
        )
        return events or [Ignored(line)]
    events.append(message)
    return events


def _extract_nick(line: str) -> str | None:
    # ':nick!user@host ...' -> 'nick'; an empty nick counts as missing
    bang = line.find("!")
    if bang <= 1:
        return None
    return line[1:bang]


def _build_chat_message(line: str) -> ChatMessage | None:
    nick = _extract_nick(line)
    if nick is None:
        return None
    colon = line.find(":", 2)
    if colon < 0:
        return None
    return ChatMessage(nick=nick, text=line[colon + 1 :])


__all__ = ["parse_chat_line"]

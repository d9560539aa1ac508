"""Polled chat session: validation, connection, keepalive and dispatch.

The host owns a :class:`TwitchSession` and drives it from a single thread:
``start`` once, ``tick`` at a fixed rate, ``stop`` when done. ``tick`` never
blocks. The query helpers (:meth:`TwitchSession.get_viewer_count`,
:meth:`TwitchSession.get_random_chatters`) block for a full HTTP round trip
and must be called from somewhere that tolerates that.

A dropped connection is retried on every tick with no backoff and no
attempt limit. A server that keeps refusing will be reconnected to at the
host's tick rate.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .api.twitch import TwitchAPI
from .config.model import BridgeConfig
from .errors.internal import NetworkError
from .events import EventHub
from .irc.connection import SocketConnection, StreamConnection
from .irc.heartbeat import KeepaliveTimer
from .irc.models import (
    ChatEvent,
    ChatMessage,
    FirstConnect,
    ServerPing,
    SessionState,
    Subscription,
)
from .irc.parser import parse_chat_line
from .logs.logger import logger
from .sampler import sample

ConnectionFactory = Callable[[], StreamConnection]


@dataclass(frozen=True)
class Credentials:
    """Authenticated identity. Either every field is set or none is."""

    access_token: str = ""
    login: str = ""
    user_id: str = ""
    client_id: str = ""

    def __post_init__(self) -> None:
        fields = (self.access_token, self.login, self.user_id, self.client_id)
        if any(fields) and not all(fields):
            raise ValueError("Credentials must be fully populated or empty")

    @classmethod
    def empty(cls) -> Credentials:
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


class TwitchSession:
    """One user's connection to their own chat channel.

    Args:
        api: Query API client. A default ``TwitchAPI`` is created if omitted.
        connection_factory: Zero-argument callable returning a fresh
            :class:`StreamConnection`. Defaults to a plain TCP socket to the
            configured chat host.
        config: Session settings.
        events: Event hub to notify. A new one is created if omitted.
        rng: Random source for chatter sampling.
    """

    def __init__(
        self,
        api: TwitchAPI | None = None,
        connection_factory: ConnectionFactory | None = None,
        config: BridgeConfig | None = None,
        events: EventHub | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or BridgeConfig()
        self.api = api or TwitchAPI(timeout=self.config.http_timeout)
        self.events = events or EventHub()
        self._connection_factory = connection_factory or self._default_connection
        self._rng = rng
        self._credentials = Credentials.empty()
        self._channel = ""
        self._connection: StreamConnection | None = None
        self._keepalive = KeepaliveTimer(self.config.keepalive_interval)
        self._state = SessionState.UNAUTHENTICATED

    # ---- Properties ----
    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._connection is not None and self._connection.is_alive()

    @property
    def keepalive_elapsed(self) -> float:
        return self._keepalive.elapsed_total

    # ---- Lifecycle ----
    def start(self, access_token: str) -> bool:
        """Validate ``access_token`` and join the owner's chat channel.

        Returns:
            bool: False if validation failed; the session then stays
            unauthenticated and no connection is attempted.
        """
        if self._credentials.is_authenticated:
            self.stop()

        self._state = SessionState.VALIDATING
        logger.log_event("session", "validating")
        validation = self.api.validate_token(access_token) if access_token else None
        if validation is None:
            self._state = SessionState.UNAUTHENTICATED
            logger.log_event("session", "validation_failed", level=logging.ERROR)
            return False

        self._credentials = Credentials(
            access_token=access_token,
            login=validation.login,
            user_id=validation.user_id,
            client_id=validation.client_id,
        )
        # A user's chat channel shares their login name
        self._channel = validation.login
        logger.log_event(
            "session",
            "validated",
            user=validation.login,
            login=validation.login,
            user_id=validation.user_id,
            client_id=validation.client_id,
        )
        self.events.emit_first_connect()
        self._connect()
        return True

    def stop(self) -> None:
        """Close the connection and forget the credentials.

        Safe to call repeatedly; listeners are only notified the first time.
        """
        if not self._credentials.is_authenticated and self._connection is None:
            return
        user = self._credentials.login
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self._credentials = Credentials.empty()
        self._channel = ""
        self._keepalive.reset()
        self._state = SessionState.UNAUTHENTICATED
        logger.log_event("session", "stopped", user=user)
        self.events.emit_disconnect()

    def tick(self, elapsed: float) -> None:
        """Advance the session by ``elapsed`` host time units. Never blocks."""
        if not self._credentials.is_authenticated or self._connection is None:
            return

        if self._keepalive.advance(elapsed):
            if self._send(f"PING {self.config.irc_host}"):
                logger.log_event(
                    "irc", "keepalive_ping", level=logging.DEBUG, user=self._channel
                )

        if not self._connection.is_alive():
            logger.log_event(
                "irc", "reconnect", level=logging.WARNING, user=self._channel
            )
            self._connect()
            return

        if not self._connection.has_line():
            return

        line = self._connection.read_line()
        if not line:
            return
        for event in parse_chat_line(line):
            self._dispatch(event)

    def __enter__(self) -> TwitchSession:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()

    # ---- Query API ----
    def get_viewer_count(self) -> int:
        """Current viewer count of the owner's stream.

        Blocks for the HTTP round trip. 0 means offline, not authenticated
        or a failed query; these cases are not distinguished.
        """
        if not self._credentials.user_id:
            logger.log_event(
                "session",
                "not_authenticated",
                level=logging.ERROR,
                operation="Viewer count",
            )
            return 0
        creds = self._credentials
        return self.api.get_viewer_count(creds.user_id, creds.access_token, creds.client_id)

    def get_random_chatters(self, count: int) -> list[str]:
        """Up to ``count`` distinct chatter logins, chosen uniformly at random.

        Blocks for the HTTP round trip. An empty list means an empty chat,
        no authentication or a failed query.
        """
        if not self._credentials.user_id:
            logger.log_event(
                "session",
                "not_authenticated",
                level=logging.ERROR,
                operation="Chatter sample",
            )
            return []
        creds = self._credentials
        chatters = self.api.get_chatters(creds.user_id, creds.access_token, creds.client_id)
        if not chatters:
            logger.log_event(
                "session", "no_chatters", level=logging.WARNING, user=creds.login
            )
            return []
        return sample(chatters, count, self._rng)

    # ---- Internals ----
    def _default_connection(self) -> StreamConnection:
        return SocketConnection(self.config.irc_host, self.config.irc_port)

    def _connect(self) -> None:
        if self._connection is not None:
            self._connection.close()
        connection = self._connection_factory()
        # Kept even if opening fails so the next tick retries
        self._connection = connection
        logger.log_event(
            "irc",
            "connecting",
            level=logging.DEBUG,
            user=self._channel,
            host=self.config.irc_host,
            port=self.config.irc_port,
        )
        try:
            connection.open()
            connection.send_line(f"PASS oauth:{self._credentials.access_token}")
            connection.send_line(f"NICK {self._credentials.login.lower()}")
            connection.send_line(f"JOIN #{self._channel.lower()}")
        except NetworkError as e:
            connection.close()
            self._state = SessionState.DISCONNECTED
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.ERROR,
                user=self._channel,
                error=str(e),
            )
            return
        self._state = SessionState.CONNECTED
        logger.log_event("irc", "connected", user=self._credentials.login, channel=self._channel)

    def _send(self, line: str) -> bool:
        if self._connection is None:
            return False
        try:
            self._connection.send_line(line)
        except NetworkError as e:
            self._state = SessionState.DISCONNECTED
            logger.log_event(
                "irc", "send_failed", level=logging.WARNING, user=self._channel, error=str(e)
            )
            return False
        return True

    def _dispatch(self, event: ChatEvent) -> None:
        if isinstance(event, ChatMessage):
            logger.log_event(
                "irc",
                "privmsg",
                level=logging.DEBUG,
                user=self._credentials.login,
                channel=self._channel,
                nick=event.nick,
                text=event.text,
            )
            self.events.emit_message(event.nick, event.text)
        elif isinstance(event, Subscription):
            logger.log_event(
                "irc", "subscription", user=self._credentials.login, subscriber=event.subscriber
            )
            self.events.emit_subscription(event.subscriber, event.raw_line)
        elif isinstance(event, FirstConnect):
            logger.log_event("irc", "first_connect", level=logging.DEBUG, user=self._channel)
            self.events.emit_first_connect()
        elif isinstance(event, ServerPing):
            if self._send(f"PONG {event.payload}"):
                logger.log_event("irc", "server_ping", level=logging.DEBUG, user=self._channel)


__all__ = ["ConnectionFactory", "Credentials", "TwitchSession"]

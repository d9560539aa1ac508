from __future__ import annotations

from collections import deque
from unittest.mock import Mock

import pytest

from twitch_bridge.api.models import TokenValidation
from twitch_bridge.api.twitch import TwitchAPI
from twitch_bridge.errors.internal import NetworkError
from twitch_bridge.events import EventHub
from twitch_bridge.session import TwitchSession


class FakeConnection:
    """In-memory StreamConnection that records writes and serves queued lines."""

    def __init__(self, lines=None, *, open_error: Exception | None = None):
        self.lines: deque[str] = deque(lines or [])
        self.sent: list[str] = []
        self.open_error = open_error
        self.opened = False
        self.closed = False
        self.alive = False
        self.read_calls = 0

    def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened = True
        self.alive = True

    def send_line(self, text: str) -> None:
        if not self.alive:
            raise NetworkError("send on closed connection")
        self.sent.append(text)

    def is_alive(self) -> bool:
        return self.alive

    def has_line(self) -> bool:
        return bool(self.lines)

    def read_line(self) -> str:
        self.read_calls += 1
        return self.lines.popleft() if self.lines else ""

    def close(self) -> None:
        self.closed = True
        self.alive = False


class ConnectionFactory:
    """Hands out FakeConnections and remembers every one it created."""

    def __init__(self):
        self.created: list[FakeConnection] = []
        self.next_open_error: Exception | None = None

    def __call__(self) -> FakeConnection:
        conn = FakeConnection(open_error=self.next_open_error)
        self.created.append(conn)
        return conn

    @property
    def last(self) -> FakeConnection:
        return self.created[-1]


@pytest.fixture
def validation():
    return TokenValidation(client_id="cid", login="Bob", user_id="123")


@pytest.fixture
def api(validation):
    mock_api = Mock(spec=TwitchAPI)
    mock_api.validate_token.return_value = validation
    mock_api.get_viewer_count.return_value = 0
    mock_api.get_chatters.return_value = []
    return mock_api


@pytest.fixture
def connections():
    return ConnectionFactory()


@pytest.fixture
def events():
    return EventHub()


@pytest.fixture
def session(api, connections, events):
    return TwitchSession(api=api, connection_factory=connections, events=events)


@pytest.fixture
def recorder(events):
    """Register a listener on every event and collect what fires."""
    seen: list[tuple] = []
    events.add_message_listener(lambda nick, text: seen.append(("message", nick, text)))
    events.add_subscription_listener(lambda sub, raw: seen.append(("subscription", sub, raw)))
    events.add_first_connect_listener(lambda: seen.append(("first_connect",)))
    events.add_disconnect_listener(lambda: seen.append(("disconnect",)))
    return seen

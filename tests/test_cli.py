from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from twitch_bridge import cli
from twitch_bridge.events import EventHub


class _FakeSession:
    """Stands in for TwitchSession; records calls made by the host."""

    instances: list[_FakeSession] = []

    def __init__(self, config=None, *, start_ok=True, viewers=0, chatters=None):
        self.config = config
        self.events = EventHub()
        self.api = Mock()
        self.start_ok = start_ok
        self.viewers = viewers
        self.chatters = chatters or []
        self.started_with = None
        self.stopped = False
        self.ticks: list[float] = []
        _FakeSession.instances.append(self)

    def start(self, token):
        self.started_with = token
        return self.start_ok

    def stop(self):
        self.stopped = True

    def tick(self, elapsed):
        self.ticks.append(elapsed)

    def get_viewer_count(self):
        return self.viewers

    def get_random_chatters(self, count):
        return self.chatters[:count]


@pytest.fixture(autouse=True)
def _quiet_logging():
    _FakeSession.instances.clear()
    with patch("twitch_bridge.cli.LoggerConfigurator") as configurator:
        yield configurator


@pytest.fixture
def token_env(monkeypatch):
    for var in ("TWITCH_IRC_HOST", "TWITCH_IRC_PORT", "TWITCH_TICK_RATE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TWITCH_ACCESS_TOKEN", "oauth:secret")


def test_health_check_ok(token_env, _quiet_logging):
    assert cli.main(["--health-check"]) == 0
    _quiet_logging.assert_called_once_with({"report_on_exit": False})


def test_health_check_without_token(monkeypatch):
    monkeypatch.delenv("TWITCH_ACCESS_TOKEN", raising=False)
    assert cli.main(["--health-check"]) == 1


def test_health_check_invalid_config():
    assert cli._health_check({"TWITCH_ACCESS_TOKEN": "x", "TWITCH_IRC_PORT": "abc"}) == 1


def test_missing_token_exits_with_error(monkeypatch):
    monkeypatch.delenv("TWITCH_ACCESS_TOKEN", raising=False)
    factory = Mock()
    assert cli.main([], session_factory=factory) == 1
    factory.assert_not_called()


def test_invalid_config_exits_with_error(token_env, monkeypatch):
    monkeypatch.setenv("TWITCH_IRC_PORT", "0")
    assert cli.main([], session_factory=_FakeSession) == 1


def test_failed_start_exits_with_error(token_env):
    def factory(config):
        return _FakeSession(config, start_ok=False)

    assert cli.main(["--viewers"], session_factory=factory) == 1
    session = _FakeSession.instances[0]
    assert session.started_with == "secret"
    session.api.close.assert_called_once()


def test_viewers(token_env, capsys):
    def factory(config):
        return _FakeSession(config, viewers=12)

    assert cli.main(["--viewers"], session_factory=factory) == 0

    assert "Viewers: 12" in capsys.readouterr().out
    session = _FakeSession.instances[0]
    assert session.stopped is True
    session.api.close.assert_called_once()


def test_chatters(token_env, capsys):
    def factory(config):
        return _FakeSession(config, chatters=["alice", "carl", "dana"])

    assert cli.main(["--chatters", "2"], session_factory=factory) == 0

    lines = capsys.readouterr().out.splitlines()
    assert "alice" in lines
    assert "carl" in lines
    assert "dana" not in lines


def test_keyboard_interrupt_stops_session(token_env):
    with patch("twitch_bridge.cli.run_loop", side_effect=KeyboardInterrupt):
        assert cli.main([], session_factory=_FakeSession) == 0
    assert _FakeSession.instances[0].stopped is True


def test_printers_attached(capsys):
    session = _FakeSession()
    cli.attach_printers(session)

    session.events.emit_message("alice", "hello")
    session.events.emit_subscription("dana", "raw")
    session.events.emit_first_connect()
    session.events.emit_disconnect()

    out = capsys.readouterr().out
    assert "alice: hello" in out
    assert "dana subscribed" in out
    assert "Connected to chat" in out
    assert "Disconnected" in out


def test_run_loop_passes_elapsed_time():
    session = _FakeSession()
    times = iter([0.0, 0.5, 0.75, 1.5])
    sleeps: list[float] = []

    cli.run_loop(session, 4.0, sleep=sleeps.append, clock=lambda: next(times), max_ticks=3)

    assert session.ticks == [0.5, 0.25, 0.75]
    assert sleeps == [0.25, 0.25, 0.25]

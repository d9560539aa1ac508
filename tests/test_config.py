import pytest
from pydantic import ValidationError

from twitch_bridge.config import BridgeConfig, load_config


class TestBridgeConfig:
    def test_defaults(self):
        config = BridgeConfig()
        assert config.access_token is None
        assert config.irc_host == "irc.chat.twitch.tv"
        assert config.irc_port == 6667
        assert config.keepalive_interval == 60.0
        assert config.http_timeout is None
        assert config.tick_rate == 30.0

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("abc123", "abc123"),
            ("  abc123\n", "abc123"),
            ("oauth:abc123", "abc123"),
            ("OAuth:abc123", "abc123"),
            ("oauth:", None),
            ("   ", None),
        ],
    )
    def test_token_normalization(self, raw, expected):
        assert BridgeConfig(access_token=raw).access_token == expected

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"irc_port": 0},
            {"irc_port": 70000},
            {"keepalive_interval": 0},
            {"http_timeout": -1},
            {"tick_rate": 0},
            {"irc_host": "  "},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            BridgeConfig(**kwargs)


class TestLoadConfig:
    def test_empty_environment(self):
        assert load_config({}) == BridgeConfig()

    def test_reads_variables(self):
        config = load_config(
            {
                "TWITCH_ACCESS_TOKEN": "oauth:tok",
                "TWITCH_IRC_HOST": "irc.example.test",
                "TWITCH_IRC_PORT": "6697",
                "TWITCH_KEEPALIVE_INTERVAL": "30",
                "TWITCH_HTTP_TIMEOUT": "5.5",
                "TWITCH_TICK_RATE": "60",
            }
        )
        assert config.access_token == "tok"
        assert config.irc_host == "irc.example.test"
        assert config.irc_port == 6697
        assert config.keepalive_interval == 30.0
        assert config.http_timeout == 5.5
        assert config.tick_rate == 60.0

    def test_blank_values_keep_defaults(self):
        config = load_config({"TWITCH_IRC_PORT": "  ", "TWITCH_IRC_HOST": ""})
        assert config.irc_port == 6667
        assert config.irc_host == "irc.chat.twitch.tv"

    def test_invalid_value_raises_value_error(self):
        with pytest.raises(ValueError):
            load_config({"TWITCH_IRC_PORT": "not-a-port"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TWITCH_ACCESS_TOKEN", "fromenv")
        assert load_config().access_token == "fromenv"

"""Configuration loading from environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import ValidationError

from .model import BridgeConfig

ENV_FIELDS: dict[str, str] = {
    "TWITCH_ACCESS_TOKEN": "access_token",
    "TWITCH_IRC_HOST": "irc_host",
    "TWITCH_IRC_PORT": "irc_port",
    "TWITCH_KEEPALIVE_INTERVAL": "keepalive_interval",
    "TWITCH_HTTP_TIMEOUT": "http_timeout",
    "TWITCH_TICK_RATE": "tick_rate",
}


def load_config(environ: Mapping[str, str] | None = None) -> BridgeConfig:
    """Build a :class:`BridgeConfig` from environment variables.

    Unset or blank variables keep their defaults.

    Raises:
        ValueError: If a variable cannot be converted or is out of range.
    """
    env = os.environ if environ is None else environ
    raw: dict[str, str] = {}
    for var, field in ENV_FIELDS.items():
        value = env.get(var)
        if value is not None and value.strip():
            raw[field] = value.strip()
    try:
        config = BridgeConfig.model_validate(raw)
    except ValidationError as e:
        logging.error(f"⚠️ Invalid configuration: {e}")
        raise ValueError(str(e)) from e
    logging.debug(
        f"Configuration loaded host={config.irc_host}:{config.irc_port} "
        f"keepalive={config.keepalive_interval}s token={'set' if config.access_token else 'missing'}"
    )
    return config

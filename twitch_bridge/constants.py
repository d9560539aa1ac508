"""
Endpoints and tunable defaults for the Twitch chat bridge

Tunables read an environment variable of the same name at import time and
fall back to the default when it is unset or unparsable.
"""

import os
from collections.abc import Callable
from typing import TypeVar

N = TypeVar("N", int, float)


def _get_env_number(name: str, default: N, cast: Callable[[str], N]) -> N:
    """Return ``cast(os.environ[name])``, or ``default`` with a warning if that fails."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        print(f"Warning: Invalid {cast.__name__} value for {name}='{value}', using default {default}")
        return default


# Chat (IRC) endpoint. Plain TCP, no TLS.
IRC_HOST = "irc.chat.twitch.tv"
IRC_PORT = 6667

# Query API endpoints
VALIDATE_URL = "https://id.twitch.tv/oauth2/validate"
HELIX_BASE_URL = "https://api.twitch.tv/helix"

# Client PING once the accumulated tick time exceeds this
KEEPALIVE_INTERVAL_SECONDS = _get_env_number("KEEPALIVE_INTERVAL_SECONDS", 60.0, float)

# Bytes per socket recv
RECV_BUFFER_SIZE = _get_env_number("RECV_BUFFER_SIZE", 4096, int)

# Ticks per second driven by the command-line host
TICK_RATE_HZ = _get_env_number("TICK_RATE_HZ", 30.0, float)

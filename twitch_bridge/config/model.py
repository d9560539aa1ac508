from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ..constants import IRC_HOST, IRC_PORT, KEEPALIVE_INTERVAL_SECONDS, TICK_RATE_HZ


class BridgeConfig(BaseModel):
    """Runtime settings for a chat session and the command-line host.

    Attributes:
        access_token: User access token, without the ``oauth:`` prefix.
        irc_host: Chat server host name.
        irc_port: Chat server TCP port.
        keepalive_interval: Tick time between client PINGs.
        http_timeout: Query API timeout in seconds; None waits forever.
        tick_rate: Ticks per second driven by the command-line host.
    """

    access_token: str | None = None
    irc_host: str = IRC_HOST
    irc_port: int = Field(default=IRC_PORT, ge=1, le=65535)
    keepalive_interval: float = Field(default=KEEPALIVE_INTERVAL_SECONDS, gt=0)
    http_timeout: float | None = Field(default=None, gt=0)
    tick_rate: float = Field(default=TICK_RATE_HZ, gt=0)

    @field_validator("access_token", mode="before")
    @classmethod
    def normalize_token(cls, v: object) -> object:
        """Strip whitespace and the IRC ``oauth:`` prefix; blank means unset."""
        if not isinstance(v, str):
            return v
        token = v.strip()
        if token.lower().startswith("oauth:"):
            token = token[len("oauth:") :]
        return token or None

    @field_validator("irc_host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        host = v.strip()
        if not host:
            raise ValueError("irc_host must not be empty")
        return host

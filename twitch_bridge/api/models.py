"""Response shapes for the Twitch query API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Response(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TokenValidation(_Response):
    """Identity bound to an access token (``/oauth2/validate``)."""

    client_id: str = ""
    login: str = ""
    user_id: str = ""
    scopes: list[str] = Field(default_factory=list)
    expires_in: int | None = None

    @property
    def is_complete(self) -> bool:
        # client_id is required too: Credentials are all-or-nothing
        return bool(self.login and self.user_id and self.client_id)


class Pagination(_Response):
    cursor: str | None = None


class ChatterData(_Response):
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""


class ChattersResponse(_Response):
    data: list[ChatterData] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    total: int = 0


class StreamData(_Response):
    viewer_count: int = 0


class StreamsResponse(_Response):
    data: list[StreamData] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


__all__ = [
    "ChatterData",
    "ChattersResponse",
    "Pagination",
    "StreamData",
    "StreamsResponse",
    "TokenValidation",
]

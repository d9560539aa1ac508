"""Thin synchronous Twitch query API client.

Wraps only the endpoints the chat bridge needs: token validation, stream
viewer count and the chatter list. Every call blocks for the full HTTP round
trip, so none of them belong on the per-tick path.

Failures never raise out of the public helpers; they collapse to ``None``,
``0`` or ``[]`` and are logged. :meth:`TwitchAPI.query` keeps the richer
:class:`QueryResult` for callers that want to know why.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from ..constants import HELIX_BASE_URL, VALIDATE_URL
from ..errors.handling import handle_api_error, log_error
from ..errors.internal import InternalError, OAuthError, QueryError
from ..logs.logger import logger
from .models import ChattersResponse, StreamsResponse, TokenValidation

M = TypeVar("M", bound=BaseModel)


@dataclass
class QueryResult:
    """Outcome of a single query API call.

    Attributes:
        ok: True when the server answered 200 with a decodable body.
        status: HTTP status code, or None if no response was received.
        data: Decoded body (a pydantic model when one was requested).
        error: The internal error describing the failure, if any.
    """

    ok: bool
    status: int | None = None
    data: Any = None
    error: InternalError | None = None


class TwitchAPI:
    """Blocking client for the Twitch token validation and Helix endpoints.

    Args:
        client: Optional ``httpx.Client``. One is created (and owned) if omitted.
        timeout: Request timeout in seconds. ``None`` disables timeouts.
    """

    BASE_URL = HELIX_BASE_URL
    VALIDATE_URL = VALIDATE_URL

    def __init__(self, client: httpx.Client | None = None, timeout: float | None = None):
        self._owns_client = client is None
        self._client = client or httpx.Client()
        self.timeout = timeout

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> TwitchAPI:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def query(
        self,
        url: str,
        *,
        headers: dict[str, str],
        context: str,
        params: dict[str, str] | None = None,
        model: type[M] | None = None,
    ) -> QueryResult:
        """Perform a GET request and decode the JSON body.

        Args:
            url: Absolute endpoint URL.
            headers: Request headers (authorization included).
            context: Human description used in error logs.
            params: Query string parameters.
            model: Optional pydantic model to validate the body against.

        Returns:
            QueryResult: never raises for transport, status or decode failures.
        """

        def operation() -> tuple[int, Any]:
            resp = self._client.get(
                url, headers=headers, params=params, timeout=self.timeout
            )
            logging.debug(
                f"Twitch API response: status={resp.status_code}, url={url}"
            )
            if resp.status_code != 200:
                raise QueryError(
                    f"{context} returned HTTP {resp.status_code}",
                    status=resp.status_code,
                )
            payload = resp.json()
            if model is not None:
                payload = model.model_validate(payload)
            return resp.status_code, payload

        try:
            status, data = handle_api_error(operation, context)
        except InternalError as e:
            status_o = e.data.get("status")
            return QueryResult(
                ok=False,
                status=status_o if isinstance(status_o, int) else None,
                error=e,
            )
        return QueryResult(ok=True, status=status, data=data)

    # ---- High level helpers ----
    def validate_token(self, access_token: str) -> TokenValidation | None:
        """Validate an OAuth access token and return the identity bound to it.

        The validation endpoint uses the ``OAuth`` scheme and takes no
        Client-Id, since the client id is one of the things it returns.

        Returns:
            TokenValidation | None: None if the request failed or the body
            lacks ``login``, ``user_id`` or ``client_id``.
        """
        result = self.query(
            self.VALIDATE_URL,
            headers={"Authorization": f"OAuth {access_token}"},
            context="Twitch token validation",
            model=TokenValidation,
        )
        if not result.ok:
            return None
        validation: TokenValidation = result.data
        if not validation.is_complete:
            log_error(
                "Token validation returned no identity",
                OAuthError("login, user_id or client_id missing"),
                context={"status": result.status},
            )
            return None
        return validation

    def get_viewer_count(self, user_id: str, access_token: str, client_id: str) -> int:
        """Return the live viewer count for ``user_id``.

        Returns:
            int: 0 when the stream is offline or the request failed.
        """
        result = self.query(
            f"{self.BASE_URL}/streams",
            headers=self._auth_headers(access_token, client_id),
            params={"user_id": user_id},
            context="Twitch viewer count",
            model=StreamsResponse,
        )
        if not result.ok or not result.data.data:
            return 0
        count = result.data.data[0].viewer_count
        logger.log_event("api", "viewer_count", level=logging.DEBUG, count=count)
        return count

    def get_chatters(self, user_id: str, access_token: str, client_id: str) -> list[str]:
        """Return the login names of everyone in ``user_id``'s chat.

        Every entry is returned as the server sent it, blank logins included.
        Only the first page is read; the pagination cursor is not followed.
        """
        result = self.query(
            f"{self.BASE_URL}/chat/chatters",
            headers=self._auth_headers(access_token, client_id),
            params={"broadcaster_id": user_id, "moderator_id": user_id},
            context="Twitch chatters list",
            model=ChattersResponse,
        )
        if not result.ok:
            return []
        logins = [c.user_login for c in result.data.data]
        logger.log_event("api", "chatters", level=logging.DEBUG, count=len(logins))
        return logins

    @staticmethod
    def _auth_headers(access_token: str, client_id: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Client-Id": client_id,
        }


__all__ = ["QueryResult", "TwitchAPI"]

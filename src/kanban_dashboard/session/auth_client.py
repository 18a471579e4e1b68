# src/kanban_dashboard/session/auth_client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.ports import AuthResponse

logger = logging.getLogger(__name__)


def _make_timeout(seconds: float) -> httpx.Timeout:
    return httpx.Timeout(seconds, connect=min(seconds, 5.0))


class HttpAuthClient:
    """
    Client for the remote login endpoint.

    POST {base_url}/login with JSON {"username", "password"}.
    Success bodies carry `jwt_token`, failure bodies carry `error_msg`;
    the HTTP status tells them apart. A single attempt per call, no retries.

    Transport errors (httpx.HTTPError) propagate to the caller.
    A body that is not a JSON object is reported as an empty payload.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise RuntimeError("Auth base URL is not set. Set KANBAN_AUTH_BASE_URL in your .env.")
        self._base_url = base_url.strip().rstrip("/")
        self._timeout = _make_timeout(timeout_seconds)
        # Injected by tests (httpx.MockTransport); None means the real network.
        self._transport = transport

    @property
    def login_url(self) -> str:
        return f"{self._base_url}/login"

    async def login(self, username: str, password: str) -> AuthResponse:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            logger.info("Login request url=%s user=%s", self.login_url, username)
            resp = await client.post(
                self.login_url,
                json={"username": username, "password": password},
            )

        payload: dict[str, Any] = {}
        try:
            body = resp.json()
            if isinstance(body, dict):
                payload = body
        except ValueError:
            logger.warning("Login response is not JSON (status=%s)", resp.status_code)

        logger.info("Login response status=%s", resp.status_code)
        return AuthResponse(status_code=resp.status_code, payload=payload)

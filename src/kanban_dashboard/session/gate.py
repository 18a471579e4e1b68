# src/kanban_dashboard/session/gate.py

from __future__ import annotations

"""
Session gate.

Two states: LOGGED_OUT and LOGGED_IN.
- LOGGED_OUT -> LOGGED_IN only through a successful login().
- LOGGED_IN -> LOGGED_OUT through logout(), which always succeeds locally.

The gate starts LOGGED_IN when a token is already stored. Stored tokens are
trusted as-is: there is no expiry check and no call to validate them.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

import httpx

from ..core.ports import AuthClient, SlotStorage, TokenRepo

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_SLOT = "jwt_token"


class SessionState(StrEnum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


class Screen(StrEnum):
    LOGIN = "login"
    BOARD = "board"


@dataclass(frozen=True, slots=True)
class LoginResult:
    ok: bool
    error_msg: str = ""


class SlotTokenRepo:
    """Session token kept in one storage slot."""

    def __init__(self, storage: SlotStorage, slot: str = DEFAULT_TOKEN_SLOT) -> None:
        self._storage = storage
        self._slot = slot

    def load_token(self) -> str | None:
        try:
            token = self._storage.get_item(self._slot)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable token in slot=%s: %s", self._slot, e)
            return None
        return token or None

    def save_token(self, token: str) -> None:
        self._storage.set_item(self._slot, token)

    def clear_token(self) -> None:
        self._storage.remove_item(self._slot)


def friendly_login_error_message(err: Exception) -> str:
    if isinstance(err, httpx.TimeoutException):
        return "Login server did not respond in time. Try again."
    if isinstance(err, httpx.HTTPError):
        return "Could not reach the login server. Check your connection."
    msg = str(err).strip()
    return msg or "Login failed."


class SessionGate:
    def __init__(self, auth: AuthClient, tokens: TokenRepo) -> None:
        self._auth = auth
        self._tokens = tokens
        self._state = SessionState.LOGGED_IN if tokens.load_token() else SessionState.LOGGED_OUT
        logger.debug("SessionGate ready state=%s", self._state)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def screen(self) -> Screen:
        return Screen.BOARD if self._state is SessionState.LOGGED_IN else Screen.LOGIN

    @property
    def token(self) -> str | None:
        return self._tokens.load_token()

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Submit credentials once.

        Never raises for expected failures: server rejections, transport errors and
        unusable responses all come back as LoginResult(ok=False, error_msg=...).
        """
        username = (username or "").strip()
        if not username or not password:
            return LoginResult(ok=False, error_msg="Username and password are required.")

        try:
            resp = await self._auth.login(username, password)
        except (httpx.HTTPError, RuntimeError) as e:
            msg = friendly_login_error_message(e)
            logger.info("Login failed user=%s: %s", username, msg)
            return LoginResult(ok=False, error_msg=msg)

        if not resp.ok:
            msg = str(resp.payload.get("error_msg") or f"Login failed (HTTP {resp.status_code}).")
            logger.info("Login rejected user=%s status=%s", username, resp.status_code)
            return LoginResult(ok=False, error_msg=msg)

        token = resp.payload.get("jwt_token")
        if not isinstance(token, str) or not token:
            logger.warning("Login response has no jwt_token (status=%s)", resp.status_code)
            return LoginResult(ok=False, error_msg="Login server returned no token.")

        self._tokens.save_token(token)
        self._state = SessionState.LOGGED_IN
        logger.info("Logged in user=%s", username)
        return LoginResult(ok=True)

    def logout(self) -> None:
        self._tokens.clear_token()
        self._state = SessionState.LOGGED_OUT
        logger.info("Logged out")

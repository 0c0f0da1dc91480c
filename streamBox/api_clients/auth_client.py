from __future__ import annotations

from typing import Any, Dict

import requests

from streamBox.settings import AUTH_BASE_URL, HTTP_TIMEOUT, TOKEN_EXPIRES_MINS
from streamBox.utils import log_debug
from streamBox.api_clients.errors import AuthError


class AuthClient:
    """
    DummyJSON-style auth endpoints: login, current profile, token refresh.
    Every failure surfaces as `AuthError` carrying the server's `message`
    when it sent one.
    """

    def __init__(self, base_url: str = AUTH_BASE_URL, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _call(self, method: str, path: str, default_msg: str, **kw) -> Dict[str, Any]:
        try:
            resp = self.session.request(
                method, f"{self.base_url}{path}", timeout=HTTP_TIMEOUT, **kw
            )
        except requests.RequestException as exc:
            log_debug(f"Auth network error on {path}: {exc}")
            raise AuthError(default_msg) from exc

        if resp.ok:
            try:
                return resp.json()
            except ValueError as exc:
                raise AuthError(default_msg, resp.status_code) from exc

        try:
            message = resp.json().get("message") or default_msg
        except ValueError:
            message = default_msg
        log_debug(f"Auth HTTP {resp.status_code} on {path}: {message}")
        raise AuthError(message, resp.status_code)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Return the auth payload (profile + `accessToken`/`refreshToken`)."""
        return self._call(
            "POST", "/auth/login",
            "Login failed. Please check your credentials.",
            json={
                "username": username,
                "password": password,
                "expiresInMins": TOKEN_EXPIRES_MINS,
            },
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        return self._call(
            "GET", "/auth/me",
            "Failed to get user profile",
            headers={"Authorization": f"Bearer {token}"},
        )

    def refresh_token(self, refresh_token: str) -> Dict[str, Any]:
        """Return `{"accessToken": ..., "refreshToken": ...}`."""
        return self._call(
            "POST", "/auth/refresh",
            "Failed to refresh token",
            json={"refreshToken": refresh_token, "expiresInMins": TOKEN_EXPIRES_MINS},
        )

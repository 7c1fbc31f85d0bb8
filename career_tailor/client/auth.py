from __future__ import annotations

import logging
import time
from typing import Protocol

import httpx

from career_tailor.client.errors import TailoringAuthError

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    async def get_access_token(self) -> str | None: ...


class StaticSessionProvider:
    """Hands out a token obtained elsewhere (CLI flag, env var, test)."""

    def __init__(self, access_token: str | None):
        self._access_token = (access_token or "").strip() or None

    async def get_access_token(self) -> str | None:
        return self._access_token

    def sign_out(self) -> None:
        self._access_token = None


class SupabasePasswordSession:
    """Signs in against Supabase Auth with email/password and caches the token until expiry."""

    def __init__(
        self,
        *,
        supabase_url: str,
        anon_key: str,
        email: str,
        password: str,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._token_url = f"{supabase_url.rstrip('/')}/auth/v1/token"
        self._anon_key = anon_key
        self._email = email
        self._password = password
        self._http = http_client
        self._access_token: str | None = None
        self._expires_at = 0.0

    async def get_access_token(self) -> str | None:
        if self._access_token and time.time() < self._expires_at - 30:
            return self._access_token
        await self._sign_in()
        return self._access_token

    async def _sign_in(self) -> None:
        client = self._http or httpx.AsyncClient()
        try:
            response = await client.post(
                self._token_url,
                params={"grant_type": "password"},
                headers={"apikey": self._anon_key},
                json={"email": self._email, "password": self._password},
            )
        finally:
            if self._http is None:
                await client.aclose()

        if response.status_code >= 400:
            logger.warning("supabase_sign_in_failed status=%s", response.status_code)
            raise TailoringAuthError("Sign-in failed. Check your email and password.")

        body = response.json()
        self._access_token = body.get("access_token") or None
        self._expires_at = time.time() + float(body.get("expires_in") or 3600)
        logger.info("supabase_sign_in_ok expires_in=%s", body.get("expires_in"))

    def sign_out(self) -> None:
        self._access_token = None
        self._expires_at = 0.0

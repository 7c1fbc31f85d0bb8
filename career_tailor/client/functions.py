from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from career_tailor.client.auth import SessionProvider
from career_tailor.client.errors import RemoteFunctionError, TailoringAuthError
from career_tailor.core.config import settings

logger = logging.getLogger(__name__)

ANALYZE_BENCHMARK = "analyze-benchmark"
SCORE_VS_BENCHMARK = "score-vs-benchmark"
GENERATE_GAP_CHECKLIST = "generate-gap-checklist"


class FunctionsClient:
    """Invokes the remote analysis functions with the caller's access token.

    Every function takes a JSON body and answers with
    ``{"success": bool, <payload>, "error"?: str, "metrics"?: {...}}``.
    Non-2xx responses and ``success: false`` bodies raise ``RemoteFunctionError``
    carrying the remote message verbatim. There are no retries.
    """

    def __init__(
        self,
        sessions: SessionProvider,
        *,
        base_url: str | None = None,
        anon_key: str | None = None,
        timeout_s: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        resolved = base_url or settings.resolved_functions_url
        if not resolved:
            raise RuntimeError("SUPABASE_URL or FUNCTIONS_BASE_URL must be set to call analysis functions.")
        self._base_url = resolved.rstrip("/")
        self._anon_key = anon_key if anon_key is not None else settings.supabase_anon_key
        self._sessions = sessions
        self._owns_client = http_client is None
        if http_client is not None:
            self._http = http_client
        elif timeout_s is not None or settings.functions_timeout_s is not None:
            self._http = httpx.AsyncClient(timeout=timeout_s or settings.functions_timeout_s)
        else:
            self._http = httpx.AsyncClient()

    async def invoke(self, name: str, body: dict[str, Any]) -> dict[str, Any]:
        token = await self._sessions.get_access_token()
        if not token:
            raise TailoringAuthError()

        headers = {"Authorization": f"Bearer {token}"}
        if self._anon_key:
            headers["apikey"] = self._anon_key

        started = time.perf_counter()
        response = await self._http.post(f"{self._base_url}/{name}", json=body, headers=headers)
        latency_ms = int((time.perf_counter() - started) * 1000)

        payload = _json_or_none(response)
        if response.status_code >= 400:
            message = _remote_message(payload) or f"{name} failed with HTTP {response.status_code}"
            logger.warning("function_http_error name=%s status=%s latency_ms=%s", name, response.status_code, latency_ms)
            raise RemoteFunctionError(message, function=name, status_code=response.status_code)

        if not isinstance(payload, dict):
            raise RemoteFunctionError(f"{name} returned an invalid response", function=name, status_code=response.status_code)

        if not payload.get("success", False):
            message = _remote_message(payload) or f"{name} did not succeed"
            logger.warning("function_failed name=%s latency_ms=%s error=%s", name, latency_ms, message)
            raise RemoteFunctionError(message, function=name, status_code=response.status_code)

        logger.info("function_ok name=%s latency_ms=%s metrics=%s", name, latency_ms, payload.get("metrics"))
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> FunctionsClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _remote_message(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, str) and error.strip():
        return error
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None

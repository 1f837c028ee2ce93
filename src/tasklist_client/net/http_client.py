# src/tasklist_client/net/http_client.py

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional

import httpx

from ..core.errors import NETWORK_ERROR_STATUS, TIMEOUT_STATUS, HttpError, as_http_error
from ..core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10_000

TIMEOUT_MESSAGE = "Request timeout - Please check your connection"
NETWORK_MESSAGE = "Network error - Please check your connection"

_DEFAULT_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _normalize_base_url(base_url: str) -> str:
    base = (base_url or "").strip()
    return base[:-1] if base.endswith("/") else base


def _is_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type") or ""
    return "application/json" in content_type.lower()


def _status_fallback(response: httpx.Response) -> str:
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def _extract_error_message(response: httpx.Response) -> str:
    """
    Pull a human-readable message out of an error response.

    JSON bodies: `message`, then `error`. Anything else (or an unreadable body)
    -> "HTTP <status>: <reason>".
    """
    if not _is_json(response):
        return _status_fallback(response)
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        return _status_fallback(response)

    if isinstance(data, dict):
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return _status_fallback(response)


class AsyncHttpClient:
    """
    JSON HTTP client bound to one base URL.

    Every verb returns a Result instead of raising:
    - Ok(decoded JSON) for 2xx JSON responses, Ok({}) for 2xx without a JSON body
    - Err(HttpError(<server message>, status)) for non-2xx responses
    - Err(HttpError(..., 408)) when the call exceeds the configured timeout
    - Err(HttpError(..., 0)) for transport failures and anything unexpected

    The underlying httpx.AsyncClient is created lazily; pass `transport` to
    substitute it (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        default_headers: Optional[Dict[str, str]] = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = _normalize_base_url(base_url)
        # timeout_ms <= 0 disables the deadline
        self._timeout_s = int(timeout_ms) / 1000.0 if int(timeout_ms) > 0 else None
        self._headers: Dict[str, str] = {**_DEFAULT_HEADERS, **(default_headers or {})}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Dict[str, str]:
        """Headers attached to every call (copy)."""
        return dict(self._headers)

    def build_url(self, path: str) -> str:
        clean = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{clean}"

    # ---- auth ----

    def set_auth_token(self, token: str) -> None:
        self._headers["Authorization"] = f"Bearer {token}"

    def clear_auth_token(self) -> None:
        self._headers.pop("Authorization", None)

    # ---- verbs ----

    async def get(self, path: str) -> Result[Any]:
        return await self.request("GET", path)

    async def post(self, path: str, body: Any) -> Result[Any]:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: Any = None) -> Result[Any]:
        return await self.request("PUT", path, body)

    async def patch(self, path: str, body: Any) -> Result[Any]:
        return await self.request("PATCH", path, body)

    async def delete(self, path: str) -> Result[Any]:
        return await self.request("DELETE", path)

    # ---- lifecycle ----

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Our own deadline (asyncio.wait_for) is authoritative; httpx gets no timeout.
            self._client = httpx.AsyncClient(timeout=None, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- core ----

    async def request(self, method: str, path: str, body: Any = None) -> Result[Any]:
        url = self.build_url(path)
        content = None if body is None else json.dumps(body)

        logger.info("HTTP %s %s", method, url)
        t0 = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self._get_client().request(
                    method,
                    url,
                    content=content,
                    headers=dict(self._headers),
                ),
                timeout=self._timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(
                "HTTP %s %s timed out after %.2fs", method, url, time.monotonic() - t0
            )
            return Err(HttpError(TIMEOUT_MESSAGE, TIMEOUT_STATUS))
        except httpx.TransportError as e:
            logger.warning("HTTP %s %s transport error: %s", method, url, e.__class__.__name__)
            return Err(as_http_error(e, NETWORK_MESSAGE))
        except Exception as e:
            logger.exception("HTTP %s %s failed unexpectedly", method, url)
            return Err(as_http_error(e))

        elapsed = time.monotonic() - t0

        if not response.is_success:
            message = _extract_error_message(response)
            logger.info(
                "HTTP %s %s -> %s (%.2fs): %s",
                method,
                url,
                response.status_code,
                elapsed,
                message,
            )
            return Err(HttpError(message, response.status_code))

        logger.info("HTTP %s %s -> %s (%.2fs)", method, url, response.status_code, elapsed)

        if not _is_json(response) or not response.content:
            return Ok({})

        try:
            return Ok(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
            logger.warning("HTTP %s %s: invalid JSON body (%s)", method, url, e)
            return Err(HttpError(f"Invalid JSON response: {e}", NETWORK_ERROR_STATUS))

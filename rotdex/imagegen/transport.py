"""HTTP transport used by provider clients."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Mapping, Protocol

import aiohttp

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def send(self, endpoint: str, body: Mapping[str, Any]) -> dict[str, Any]:
        """POST ``body`` as JSON and return the decoded 2xx response.

        Raises TransportError for non-2xx statuses (with ``status`` and raw
        ``body``) and for failures where no response arrived (``status=None``).
        """
        ...


class AiohttpTransport:
    """JSON-over-HTTP transport backed by a lazily created aiohttp session."""

    def __init__(
        self,
        base_url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_seconds: float = 60.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self._headers, timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def send(self, endpoint: str, body: Mapping[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        session = self._ensure_session()
        logger.debug("POST %s", url)
        try:
            async with session.post(url, json=dict(body), headers=self._headers) as resp:
                text = await resp.text()
                if resp.status < 200 or resp.status >= 300:
                    logger.warning("POST %s returned status %s.", url, resp.status)
                    raise TransportError(
                        f"HTTP {resp.status} from {url}", status=resp.status, body=text
                    )
        except asyncio.TimeoutError as exc:
            raise TransportError(f"Timed out calling {url}") from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"Connection to {url} failed: {exc}") from exc

        if not text:
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TransportError(
                f"Invalid JSON from {url}", status=resp.status, body=text
            ) from exc
        if not isinstance(payload, dict):
            raise TransportError(f"Unexpected JSON payload from {url}", status=resp.status, body=text)
        return payload

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "AiohttpTransport":
        self._ensure_session()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

"""Shared JSON-over-HTTP plumbing for the Maps and LLM providers.

Each provider gets one lazily created ``httpx.AsyncClient``. Credentials are
checked on every call, so a missing key fails before any I/O with the
provider's own "not configured" error; transport, HTTP and decoding failures
surface as the provider's "unavailable" error.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx


@dataclass(slots=True, frozen=True)
class ProviderAuth:
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


class ProviderClient:
    def __init__(
        self,
        name: str,
        *,
        base_url: Callable[[], str],
        timeout: Callable[[], httpx.Timeout],
        auth: Callable[[], ProviderAuth],
        unavailable: type[Exception],
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.name = name
        self._base_url = base_url
        self._timeout = timeout
        self._auth = auth
        self._unavailable = unavailable
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        base_url=self._base_url().rstrip("/"),
                        timeout=self._timeout(),
                        transport=self._transport,
                    )
        return self._client

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        auth = self._auth()
        client = await self._get_client()
        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout
        try:
            response = await client.request(
                method,
                path,
                params={**(params or {}), **auth.params},
                json=payload,
                headers=auth.headers,
                **extra,
            )
        except httpx.HTTPError as exc:
            raise self._unavailable(f"{self.name} request failed: {exc}") from exc
        if response.status_code >= 400:
            raise self._unavailable(
                f"{self.name} error {response.status_code}: {response.text[:200]}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise self._unavailable(f"Invalid JSON from {self.name}") from exc

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["ProviderAuth", "ProviderClient"]

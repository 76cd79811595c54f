"""Google Maps web services (geocoding, directions); the key rides as ``?key=``."""

from __future__ import annotations

from typing import Any

import httpx

from .provider_client import ProviderAuth, ProviderClient
from .settings import settings


class MapsNotConfigured(RuntimeError):
    """GOOGLE_MAPS_API_KEY is missing; callers must not retry."""


class MapsUnavailable(RuntimeError):
    pass


def maps_auth() -> ProviderAuth:
    if not settings.GOOGLE_MAPS_API_KEY:
        raise MapsNotConfigured("GOOGLE_MAPS_API_KEY not configured")
    return ProviderAuth(params={"key": settings.GOOGLE_MAPS_API_KEY})


def _timeout() -> httpx.Timeout:
    return httpx.Timeout(
        settings.MAPS_TIMEOUT_SECONDS, connect=settings.MAPS_CONNECT_TIMEOUT_SECONDS
    )


_maps = ProviderClient(
    "Maps",
    base_url=lambda: settings.MAPS_API_BASE,
    timeout=_timeout,
    auth=maps_auth,
    unavailable=MapsUnavailable,
)


async def get_json(path: str, params: dict[str, Any]) -> dict[str, Any]:
    """GET a Maps endpoint. A provider status such as ``ZERO_RESULTS`` comes back as-is."""
    return await _maps.request_json("GET", path, params=params)


async def close_maps_client() -> None:
    await _maps.aclose()


__all__ = ["MapsNotConfigured", "MapsUnavailable", "close_maps_client", "get_json", "maps_auth"]

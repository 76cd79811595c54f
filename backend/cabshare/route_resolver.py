from __future__ import annotations

import logging
from dataclasses import dataclass

from .campus import looks_like_hostel
from .maps_client import MapsUnavailable, get_json
from .settings import settings

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ResolvedPlace:
    raw_query: str
    canonical_id: str | None
    formatted_label: str

    @property
    def route_param(self) -> str:
        """Value to hand the directions API for this place."""
        if self.canonical_id:
            return f"place_id:{self.canonical_id}"
        return self.raw_query


def campus_place(raw_place: str) -> ResolvedPlace | None:
    """Map hostel codes ("SD hall", "KMS") to the campus gate, offline."""
    if not looks_like_hostel(raw_place):
        return None
    return ResolvedPlace(
        raw_query=raw_place,
        canonical_id=settings.CAMPUS_PLACE_ID,
        formatted_label=settings.CAMPUS_LABEL,
    )


async def resolve(raw_place: str) -> ResolvedPlace | None:
    """Resolve a place string to the geocoder's first candidate.

    Returns ``None`` when the place is unresolved: a non-OK status, an empty
    result list or a failed request. ``MapsNotConfigured`` propagates.
    """
    campus = campus_place(raw_place)
    if campus is not None:
        logger.info("Resolved %r to campus via hostel code", raw_place)
        return campus

    params = {
        "address": raw_place,
        "components": f"country:{settings.GEO_COUNTRY_BIAS}",
        "region": settings.GEO_REGION_BIAS,
        "language": settings.GEO_LANGUAGE,
    }
    try:
        data = await get_json("/geocode/json", params)
    except MapsUnavailable as exc:
        logger.warning("Geocode request failed for %r: %s", raw_place, exc)
        return None

    status = data.get("status")
    results = data.get("results") or []
    if status != "OK" or not results:
        logger.info("Geocode unresolved for %r (status=%s)", raw_place, status)
        return None

    first = results[0]
    place_id = first.get("place_id")
    label = first.get("formatted_address") or raw_place
    return ResolvedPlace(raw_query=raw_place, canonical_id=place_id, formatted_label=label)


__all__ = ["ResolvedPlace", "campus_place", "resolve"]

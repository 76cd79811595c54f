from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .maps_client import MapsUnavailable, get_json
from .route_resolver import ResolvedPlace, campus_place, resolve
from .settings import settings

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DistanceResult:
    distance_km: float
    duration_mins: int
    origin_label: str
    dest_label: str


@dataclass(slots=True, frozen=True)
class RouteMetrics:
    distance_km: float
    duration_min: int


def round_half_up(value: float, ndigits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _leg_duration_seconds(leg: dict[str, Any]) -> float:
    # live traffic estimate wins when the provider has one
    in_traffic = leg.get("duration_in_traffic") or {}
    if in_traffic.get("value") is not None:
        return float(in_traffic["value"])
    return float((leg.get("duration") or {}).get("value", 0.0))


async def _first_leg(origin: str, destination: str) -> dict[str, Any] | None:
    params = {
        "origin": origin,
        "destination": destination,
        "mode": "driving",
        "units": "metric",
        "departure_time": "now",
        "alternatives": "false",
        "region": settings.GEO_REGION_BIAS,
    }
    try:
        data = await get_json("/directions/json", params)
    except MapsUnavailable as exc:
        logger.warning("Directions request failed: %s", exc)
        return None

    status = data.get("status")
    routes = data.get("routes") or []
    if status != "OK" or not routes:
        logger.info(
            "No route %s -> %s (status=%s, error=%s)",
            origin,
            destination,
            status,
            data.get("error_message"),
        )
        return None
    legs = routes[0].get("legs") or []
    if not legs:
        return None
    return legs[0]


async def compute_distance(origin_raw: str, destination_raw: str) -> DistanceResult | None:
    """Driving distance and time between two free-text places.

    Both ends are geocoded concurrently; an end that fails to resolve is sent
    to the directions API as its raw text. Returns ``None`` when no route comes
    back. Only ``MapsNotConfigured`` is raised.
    """
    started = time.perf_counter()
    origin, dest = await asyncio.gather(resolve(origin_raw), resolve(destination_raw))
    origin_param = origin.route_param if origin else origin_raw
    dest_param = dest.route_param if dest else destination_raw

    leg = await _first_leg(origin_param, dest_param)
    if leg is None:
        return None

    meters = float((leg.get("distance") or {}).get("value", 0.0))
    result = DistanceResult(
        distance_km=round_half_up(meters / 1000.0, 1),
        duration_mins=int(round_half_up(_leg_duration_seconds(leg) / 60.0)),
        origin_label=_label(origin, leg.get("start_address"), origin_raw),
        dest_label=_label(dest, leg.get("end_address"), destination_raw),
    )
    logger.info(
        "Distance %s -> %s distance=%.1fkm duration=%smin latency=%.1fms",
        result.origin_label,
        result.dest_label,
        result.distance_km,
        result.duration_mins,
        (time.perf_counter() - started) * 1000,
    )
    return result


def _label(place: ResolvedPlace | None, leg_address: str | None, raw: str) -> str:
    if place is not None:
        return place.formatted_label
    return leg_address or raw


async def route_metrics(origin: str, destination: str) -> RouteMetrics | None:
    """Distance/time for a posted ride; hostel pickups route from the campus gate."""
    campus = campus_place(origin)
    origin_param = campus.route_param if campus else origin
    leg = await _first_leg(origin_param, destination)
    if leg is None:
        return None
    meters = float((leg.get("distance") or {}).get("value", 0.0))
    return RouteMetrics(
        distance_km=meters / 1000.0,
        duration_min=int(round_half_up(_leg_duration_seconds(leg) / 60.0)),
    )


__all__ = [
    "DistanceResult",
    "RouteMetrics",
    "compute_distance",
    "round_half_up",
    "route_metrics",
]

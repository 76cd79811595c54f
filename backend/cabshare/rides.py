"""Posting, listing and embedding backfill for rides."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import date, datetime

from .contracts import RideCreate, RideRecord
from .distance import RouteMetrics, route_metrics
from .embeddings import embed_text, ride_to_text
from .llm_client import LLMNotConfigured
from .maps_client import MapsNotConfigured
from .ranking import route_key
from .storage import DB, RideStore

logger = logging.getLogger(__name__)


async def _embedding_for_post(text: str) -> list[float]:
    try:
        return await embed_text(text)
    except LLMNotConfigured:
        logger.warning("Posting ride without embedding: embeddings not configured")
        return []


async def _metrics_for_post(pickup: str, drop: str) -> RouteMetrics | None:
    try:
        return await route_metrics(pickup, drop)
    except MapsNotConfigured:
        logger.warning("Posting ride without distance: maps not configured")
        return None


async def post_ride(
    payload: RideCreate, *, store: RideStore = DB, now_ms: int | None = None
) -> RideRecord:
    """Store a new ride with its embedding and route metrics.

    A ride is still posted when either provider is down or unconfigured; the
    embedding can be filled in later by ``backfill_embeddings``.
    """
    created_at = now_ms if now_ms is not None else int(time.time() * 1000)
    text = ride_to_text(payload.pickup_text, payload.drop_text, payload.datetime_iso)
    embedding, metrics = await asyncio.gather(
        _embedding_for_post(text),
        _metrics_for_post(payload.pickup_text, payload.drop_text),
    )
    ride = RideRecord(
        **payload.model_dump(),
        id=f"{payload.requester_name}-{created_at}",
        embedding=embedding,
        distance_km=metrics.distance_km if metrics else None,
        duration_min=metrics.duration_min if metrics else None,
        route_key=route_key(payload.pickup_text, payload.drop_text),
        created_at=created_at,
    )
    store.add(ride)
    logger.info(
        "Posted ride %s (embedding=%d dims, distance=%s)",
        ride.id,
        len(ride.embedding),
        ride.distance_km,
    )
    return ride


def list_rides(
    as_of: date | datetime | None = None, *, show_all: bool = False, store: RideStore = DB
) -> list[RideRecord]:
    """All rides, or only those departing on ``as_of``'s day (today by default)."""
    rides = store.list_rides()
    if show_all:
        return rides
    day = as_of or date.today()
    if isinstance(day, datetime):
        day = day.date()
    prefix = day.isoformat()
    return [ride for ride in rides if prefix in ride.datetime_iso]


async def backfill_embeddings(*, store: RideStore = DB) -> tuple[int, int]:
    """Embed every stored ride that has no embedding yet; returns (updated, total)."""
    rides = store.list_rides()
    updated = 0
    for ride in rides:
        if ride.embedding:
            continue
        vector = await embed_text(ride_to_text(ride.pickup_text, ride.drop_text, ride.datetime_iso))
        if not vector:
            logger.warning("Backfill skipped ride %s: embedding unavailable", ride.id)
            continue
        store.set_embedding(ride.id, vector)
        updated += 1
    logger.info("Embedding backfill updated %d of %d rides", updated, len(rides))
    return updated, len(rides)


__all__ = ["backfill_embeddings", "list_rides", "post_ride"]

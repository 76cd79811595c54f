from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ...contracts import DirectionsRequest, DistanceOut, ResolvedPlaceOut
from ...distance import compute_distance
from ...route_resolver import resolve

router = APIRouter(tags=["maps"])


@router.get("/maps/geocode", response_model=ResolvedPlaceOut)
async def geocode(query: str = Query(..., min_length=1, max_length=160)) -> ResolvedPlaceOut:
    place = await resolve(query)
    if place is None:
        raise HTTPException(404, "Place could not be resolved")
    return ResolvedPlaceOut(
        raw_query=place.raw_query,
        canonical_id=place.canonical_id,
        formatted_label=place.formatted_label,
    )


@router.post("/maps/directions", response_model=DistanceOut)
async def directions(req: DirectionsRequest) -> DistanceOut:
    info = await compute_distance(req.origin, req.destination)
    if info is None:
        raise HTTPException(400, "No driving route found between these places")
    return DistanceOut(
        distance_km=info.distance_km,
        duration_mins=info.duration_mins,
        origin_label=info.origin_label,
        dest_label=info.dest_label,
    )


__all__ = ["router"]

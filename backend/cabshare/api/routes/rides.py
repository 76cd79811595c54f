from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from ...contracts import (
    BackfillResponse,
    MatchSignalsOut,
    RideCreate,
    RideRecord,
    RideSearchRequest,
    RideSearchResponse,
    RideSearchResult,
)
from ...ranking import ScoredCandidate, search_rides
from ...rides import backfill_embeddings, list_rides, post_ride
from ...storage import DB

router = APIRouter(tags=["rides"])


def _to_result(candidate: ScoredCandidate) -> RideSearchResult:
    signals = candidate.signals
    return RideSearchResult(
        rank=candidate.rank,
        score=round(candidate.score, 4),
        ride=candidate.ride,
        signals=MatchSignalsOut(
            embedding_sim=round(signals.embedding_sim, 4),
            pickup_match=signals.pickup_match,
            drop_match=signals.drop_match,
            same_day_match=signals.same_day_match,
            exact_route_match=signals.exact_route_match,
        ),
    )


@router.get("/rides", response_model=list[RideRecord])
def rides_index(
    show_all: bool = False,
    on: date | None = Query(None, description="Departure day; defaults to today"),
):
    return list_rides(on, show_all=show_all)


@router.post("/rides", response_model=RideRecord, status_code=201)
async def rides_create(payload: RideCreate) -> RideRecord:
    return await post_ride(payload)


@router.get("/rides/{ride_id}", response_model=RideRecord)
def rides_detail(ride_id: str) -> RideRecord:
    ride = DB.get(ride_id)
    if ride is None:
        raise HTTPException(404, "Ride not found")
    return ride


@router.post("/rides/search", response_model=RideSearchResponse)
async def rides_search(req: RideSearchRequest) -> RideSearchResponse:
    results = await search_rides(req.to_query(), DB.list_rides(), mode=req.mode)
    return RideSearchResponse(mode=req.mode, results=[_to_result(c) for c in results])


@router.post("/rides/backfill", response_model=BackfillResponse)
async def rides_backfill() -> BackfillResponse:
    updated, total = await backfill_embeddings()
    return BackfillResponse(updated=updated, total=total)


__all__ = ["router"]

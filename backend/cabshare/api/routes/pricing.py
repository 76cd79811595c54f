from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ...contracts import PriceRequest, PriceResponse
from ...pricing import PriceValidationError, estimate

router = APIRouter(tags=["pricing"])


@router.post("/price", response_model=PriceResponse)
def price(req: PriceRequest) -> PriceResponse:
    try:
        quote = estimate(req.distance_km, req.duration_min, req.seats, req.demand_index)
    except PriceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return PriceResponse(total=quote.total, per_seat=quote.per_seat)


__all__ = ["router"]

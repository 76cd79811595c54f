from __future__ import annotations

import math
from dataclasses import dataclass

BASE_FARE = 20
FUEL_PER_KM = 8
TIME_PER_MIN = 0.8
MINIMUM_TOTAL = 50
ROUND_STEP = 5


class PriceValidationError(ValueError):
    pass


@dataclass(slots=True, frozen=True)
class PriceEstimate:
    total: int
    per_seat: int


def round_to_step(value: float, step: int = ROUND_STEP) -> int:
    """Round half up to the nearest multiple of ``step``."""
    return int(math.floor(value / step + 0.5)) * step


def estimate(
    distance_km: float | None,
    duration_min: float | None,
    seats: int | None,
    demand_index: float = 1.0,
) -> PriceEstimate:
    if distance_km is None or duration_min is None or seats is None:
        raise PriceValidationError("distance_km, duration_min, seats required")
    if seats < 1:
        raise PriceValidationError("seats must be >= 1")
    if distance_km < 0 or duration_min < 0:
        raise PriceValidationError("distance_km and duration_min must be >= 0")
    if demand_index <= 0:
        raise PriceValidationError("demand_index must be > 0")

    raw = (BASE_FARE + distance_km * FUEL_PER_KM + duration_min * TIME_PER_MIN) * demand_index
    total = max(MINIMUM_TOTAL, round_to_step(raw))
    return PriceEstimate(total=total, per_seat=round_to_step(total / seats))


__all__ = ["PriceEstimate", "PriceValidationError", "estimate", "round_to_step"]

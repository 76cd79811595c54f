"""In-process ride store.

Durable storage lives outside this service; this keeps posted rides in
insertion order for the lifetime of the process.
"""

from __future__ import annotations

from threading import Lock

from .contracts import FeedbackRecord, RideRecord


class RideStore:
    def __init__(self) -> None:
        self._rides: dict[str, RideRecord] = {}
        self._lock = Lock()

    def add(self, ride: RideRecord) -> RideRecord:
        with self._lock:
            if ride.id in self._rides:
                raise ValueError(f"Ride {ride.id} already exists")
            self._rides[ride.id] = ride
        return ride

    def get(self, ride_id: str) -> RideRecord | None:
        with self._lock:
            return self._rides.get(ride_id)

    def list_rides(self) -> list[RideRecord]:
        with self._lock:
            return list(self._rides.values())

    def set_embedding(self, ride_id: str, embedding: list[float]) -> RideRecord:
        """Backfill an embedding; the only mutation a stored ride allows."""
        with self._lock:
            current = self._rides.get(ride_id)
            if current is None:
                raise KeyError(ride_id)
            updated = current.model_copy(update={"embedding": list(embedding)})
            self._rides[ride_id] = updated
        return updated

    def clear(self) -> None:
        with self._lock:
            self._rides.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rides)


class FeedbackStore:
    """Feedback keyed by submitter; a repeat submission replaces the earlier one."""

    def __init__(self) -> None:
        self._entries: dict[str, FeedbackRecord] = {}
        self._lock = Lock()

    def upsert(self, entry: FeedbackRecord) -> FeedbackRecord:
        with self._lock:
            self._entries[entry.id] = entry
        return entry

    def list_feedback(self) -> list[FeedbackRecord]:
        with self._lock:
            return list(self._entries.values())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


DB = RideStore()
FEEDBACK = FeedbackStore()

__all__ = ["DB", "FEEDBACK", "FeedbackStore", "RideStore"]

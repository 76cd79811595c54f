from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .validators import (
    ensure_iso_datetime,
    normalize_display_name,
    normalize_email,
    normalize_note,
    normalize_phone,
    normalize_place,
)


# --- Rides ---
class RideCreate(BaseModel):
    requester_name: str
    phone: str | None = None
    email: str | None = None
    pickup_text: str
    drop_text: str
    datetime_iso: str
    seats: int
    notes: str | None = None

    @field_validator("seats")
    @classmethod
    def _seats_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("seats must be >= 1")
        return v

    @field_validator("requester_name")
    @classmethod
    def _requester_name(cls, value: str) -> str:
        return normalize_display_name(value, field="requester_name")

    @field_validator("pickup_text", "drop_text")
    @classmethod
    def _place(cls, value: str, info) -> str:
        return normalize_place(value, field=info.field_name)

    @field_validator("datetime_iso")
    @classmethod
    def _datetime(cls, value: str) -> str:
        return ensure_iso_datetime(value, field="datetime_iso")

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str | None) -> str | None:
        return normalize_phone(value)

    @field_validator("notes")
    @classmethod
    def _notes(cls, value: str | None) -> str | None:
        return normalize_note(value)


class RideRecord(RideCreate):
    id: str
    embedding: list[float] = Field(default_factory=list)
    distance_km: float | None = None
    duration_min: int | None = None
    route_key: str = ""
    created_at: int = 0


class RideQuery(BaseModel):
    pickup_text: str = ""
    drop_text: str = ""
    free_keywords: str = ""
    date_iso: str | None = None
    as_of: datetime = Field(default_factory=datetime.now)


SearchMode = Literal["smart", "exact"]


class RideSearchRequest(BaseModel):
    pickup: str = Field("", max_length=160)
    drop: str = Field("", max_length=160)
    keywords: str = Field("", max_length=200)
    date: str | None = Field(None, description="Date prefix such as 2026-10-18")
    mode: SearchMode = "smart"

    def to_query(self) -> RideQuery:
        return RideQuery(
            pickup_text=self.pickup,
            drop_text=self.drop,
            free_keywords=self.keywords,
            date_iso=self.date,
        )


class MatchSignalsOut(BaseModel):
    embedding_sim: float
    pickup_match: bool
    drop_match: bool
    same_day_match: bool
    exact_route_match: bool


class RideSearchResult(BaseModel):
    rank: int
    score: float
    ride: RideRecord
    signals: MatchSignalsOut


class RideSearchResponse(BaseModel):
    mode: SearchMode
    results: list[RideSearchResult]


class BackfillResponse(BaseModel):
    updated: int
    total: int


# --- Feedback ---
FEEDBACK_MESSAGE_MAX_LENGTH = 2000


class FeedbackCreate(BaseModel):
    name: str
    email: str
    phone: str
    message: str | None = None
    consent: bool

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return normalize_display_name(value, field="name")

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str) -> str:
        cleaned = normalize_phone(value)
        if cleaned is None:
            raise ValueError("phone is required")
        return cleaned

    @field_validator("message")
    @classmethod
    def _message(cls, value: str | None) -> str | None:
        return normalize_note(value, field="message", max_length=FEEDBACK_MESSAGE_MAX_LENGTH)

    @field_validator("consent")
    @classmethod
    def _consent(cls, value: bool) -> bool:
        if not value:
            raise ValueError("consent is required to store feedback")
        return value


class FeedbackRecord(FeedbackCreate):
    id: str
    created_at: int = 0


# --- Chat ---
class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str = Field(max_length=2000)


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1, max_length=50)


class ChatResponse(BaseModel):
    reply: str


# --- Maps ---
class DirectionsRequest(BaseModel):
    origin: str = Field(min_length=1, max_length=160)
    destination: str = Field(min_length=1, max_length=160)


class DistanceOut(BaseModel):
    distance_km: float
    duration_mins: int
    origin_label: str
    dest_label: str


class ResolvedPlaceOut(BaseModel):
    raw_query: str
    canonical_id: str | None = None
    formatted_label: str


# --- Pricing ---
class PriceRequest(BaseModel):
    # pricing.estimate reports missing fields; the route turns that into a 400
    distance_km: float | None = None
    duration_min: float | None = None
    seats: int | None = None
    demand_index: float = 1.0


class PriceResponse(BaseModel):
    total: int
    per_seat: int

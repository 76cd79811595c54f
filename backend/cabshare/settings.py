from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE = REPO_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE), env_file_encoding="utf-8", extra="ignore"
    )

    DEBUG: bool = False

    # CORS allow origins (comma-separated). Default empty (no cross-origin).
    CORS_ALLOW_ORIGINS: str = ""

    # Google Maps (geocoding + directions)
    GOOGLE_MAPS_API_KEY: str | None = None
    MAPS_API_BASE: str = "https://maps.googleapis.com/maps/api"
    MAPS_TIMEOUT_SECONDS: float = 8.0
    MAPS_CONNECT_TIMEOUT_SECONDS: float = 3.0
    GEO_COUNTRY_BIAS: str = "IN"
    GEO_REGION_BIAS: str = "in"
    GEO_LANGUAGE: str = "en"

    # Campus context
    CAMPUS_INSTITUTION: str = "NIT Rourkela"
    CAMPUS_REGION: str = "Odisha"
    # Words that already pin a place to campus; comma-separated
    CAMPUS_MENTION_TERMS: str = "nit,rourkela"
    # Google place id of the NIT Rourkela main gate
    CAMPUS_PLACE_ID: str = "ChIJw2HVu3IfIDoRWntq53BcqwA"
    CAMPUS_LABEL: str = "NIT Rourkela Main Gate, Rourkela, Odisha"

    # Embeddings / chat (OpenAI-compatible)
    OPENAI_API_KEY: str | None = None
    OPENAI_API_BASE: str = "https://api.openai.com/v1"
    OPENAI_TIMEOUT_SECONDS: float = 15.0
    OPENAI_CONNECT_TIMEOUT_SECONDS: float = 5.0
    EMBEDDING_MODEL: str = "text-embedding-3-small"
    EMBEDDING_DIMENSIONS: int = 768
    CHAT_MODEL: str = "gpt-4o-mini"
    CHAT_MAX_TOKENS: int = 400
    CHAT_TEMPERATURE: float = 0.3

    # Ranking
    RANKING_WEIGHTS: str = "sim=1.0,pickup=0.25,drop=0.25,date=0.10,route_key=0.15"
    SHORTLIST_SIZE: int = 36

    # Observability
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"
    SENTRY_RELEASE: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.2

    @property
    def allow_origins(self) -> list[str]:
        s = (self.CORS_ALLOW_ORIGINS or "").strip()
        if s == "*":
            return ["*"]
        if s == "":
            return []
        return [part.strip() for part in s.split(",") if part.strip()]

    @property
    def campus_mention_terms(self) -> list[str]:
        return [t.strip().lower() for t in self.CAMPUS_MENTION_TERMS.split(",") if t.strip()]

    @property
    def campus_suffix(self) -> str:
        return f", {self.CAMPUS_INSTITUTION}, {self.CAMPUS_REGION}"

    @property
    def parsed_ranking_weights(self) -> RankingWeights:
        return RankingWeights.from_string(self.RANKING_WEIGHTS)


@dataclass(slots=True, frozen=True)
class RankingWeights:
    sim: float = 1.0
    pickup: float = 0.25
    drop: float = 0.25
    date: float = 0.10
    route_key: float = 0.15

    @classmethod
    def from_string(cls, payload: str | None) -> RankingWeights:
        base = cls()
        if not payload:
            return base
        mapping: dict[str, float] = {}
        for part in payload.split(","):
            if "=" not in part:
                continue
            key, value = part.split("=", 1)
            key = key.strip().lower()
            try:
                mapping[key] = float(value.strip())
            except ValueError:
                continue
        return cls(
            sim=mapping.get("sim", base.sim),
            pickup=mapping.get("pickup", base.pickup),
            drop=mapping.get("drop", base.drop),
            date=mapping.get("date", base.date),
            route_key=mapping.get("route_key", base.route_key),
        )


settings = Settings()

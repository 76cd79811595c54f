"""Rank posted rides against a search.

Two modes:

* ``exact``: plain case-insensitive substring filtering, insertion order kept.
* ``smart``: every ride gets a hybrid score

      sim * cosine(query, ride) + pickup * pickup_match + drop * drop_match
      + date * same_day + route_key bonus

  and the list is stable-sorted by score (descending) and cut to the shortlist
  size. Rides without an embedding still compete on the string signals.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .contracts import RideQuery, RideRecord, SearchMode
from .embeddings import embed_text, ride_to_text
from .settings import RankingWeights, settings
from .vector_math import cosine_similarity

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MatchSignals:
    embedding_sim: float = 0.0
    pickup_match: bool = False
    drop_match: bool = False
    same_day_match: bool = False
    exact_route_match: bool = False


@dataclass(slots=True)
class ScoredCandidate:
    ride: RideRecord
    score: float
    signals: MatchSignals
    rank: int = 0


@dataclass(slots=True, frozen=True)
class _Terms:
    pickup: str
    drop: str
    keywords: str
    date: str
    route_key: str | None


def route_key(pickup: str, drop: str) -> str:
    return f"{pickup.strip().lower()}__{drop.strip().lower()}"


def describe_query(query: RideQuery) -> str:
    keywords = query.free_keywords.strip().lower()
    text = ride_to_text(query.pickup_text, query.drop_text, query.date_iso)
    return f"{text} Keywords: {keywords}" if keywords else text


def _terms(query: RideQuery) -> _Terms:
    pickup = query.pickup_text.strip().lower()
    drop = query.drop_text.strip().lower()
    key = route_key(query.pickup_text, query.drop_text) if pickup and drop else None
    return _Terms(
        pickup=pickup,
        drop=drop,
        keywords=query.free_keywords.strip().lower(),
        date=(query.date_iso or "").strip(),
        route_key=key,
    )


def _ride_route_key(ride: RideRecord) -> str:
    return ride.route_key or route_key(ride.pickup_text, ride.drop_text)


def matches_exact(ride: RideRecord, terms: _Terms) -> bool:
    if terms.pickup and terms.pickup not in ride.pickup_text.lower():
        return False
    if terms.drop and terms.drop not in ride.drop_text.lower():
        return False
    if terms.keywords:
        haystacks = (ride.pickup_text, ride.drop_text, ride.requester_name, ride.notes or "")
        if not any(terms.keywords in h.lower() for h in haystacks):
            return False
    if terms.date and terms.date not in ride.datetime_iso:
        return False
    return True


def match_signals(
    ride: RideRecord, terms: _Terms, query_embedding: Sequence[float]
) -> MatchSignals:
    sim = cosine_similarity(query_embedding, ride.embedding) if ride.embedding else 0.0
    return MatchSignals(
        embedding_sim=sim,
        pickup_match=bool(terms.pickup) and terms.pickup in ride.pickup_text.lower(),
        drop_match=bool(terms.drop) and terms.drop in ride.drop_text.lower(),
        same_day_match=bool(terms.date) and terms.date in ride.datetime_iso,
        exact_route_match=terms.route_key is not None
        and _ride_route_key(ride) == terms.route_key,
    )


def hybrid_score(signals: MatchSignals, weights: RankingWeights) -> float:
    total = weights.sim * signals.embedding_sim
    total += weights.pickup * signals.pickup_match
    total += weights.drop * signals.drop_match
    total += weights.date * signals.same_day_match
    if signals.exact_route_match:
        total += weights.route_key
    return total


def rank(
    query: RideQuery,
    candidates: Sequence[RideRecord],
    *,
    mode: SearchMode = "smart",
    query_embedding: Sequence[float] = (),
    weights: RankingWeights | None = None,
    limit: int | None = None,
) -> list[ScoredCandidate]:
    terms = _terms(query)

    if mode == "exact":
        kept = [ride for ride in candidates if matches_exact(ride, terms)]
        return [
            ScoredCandidate(ride=ride, score=0.0, signals=match_signals(ride, terms, ()), rank=i)
            for i, ride in enumerate(kept, start=1)
        ]

    weights = weights or settings.parsed_ranking_weights
    scored = []
    for ride in candidates:
        signals = match_signals(ride, terms, query_embedding)
        scored.append(
            ScoredCandidate(ride=ride, score=hybrid_score(signals, weights), signals=signals)
        )
    # sorted() is stable, so equal scores keep candidate order
    ranked = sorted(scored, key=lambda c: c.score, reverse=True)
    shortlist = ranked[: limit if limit is not None else settings.SHORTLIST_SIZE]
    for i, candidate in enumerate(shortlist, start=1):
        candidate.rank = i
    return shortlist


async def search_rides(
    query: RideQuery, candidates: Sequence[RideRecord], *, mode: SearchMode = "smart"
) -> list[ScoredCandidate]:
    """Embed the query (smart mode only) and rank ``candidates`` against it."""
    query_embedding: list[float] = []
    if mode == "smart":
        query_embedding = await embed_text(describe_query(query))
        if not query_embedding:
            logger.info("Query embedding unavailable; ranking on string signals only")
    results = rank(query, candidates, mode=mode, query_embedding=query_embedding)
    logger.info(
        "Ranked %d of %d rides (mode=%s, top=%.3f)",
        len(results),
        len(candidates),
        mode,
        results[0].score if results else 0.0,
    )
    return results


__all__ = [
    "MatchSignals",
    "ScoredCandidate",
    "describe_query",
    "hybrid_score",
    "match_signals",
    "matches_exact",
    "rank",
    "route_key",
    "search_rides",
]

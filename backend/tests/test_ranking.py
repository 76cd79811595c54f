import asyncio

import pytest
from backend.cabshare import ranking
from backend.cabshare.contracts import RideQuery
from backend.cabshare.ranking import (
    MatchSignals,
    describe_query,
    hybrid_score,
    rank,
    route_key,
    search_rides,
)
from backend.cabshare.settings import RankingWeights


def test_route_key_normalizes_case_and_whitespace():
    assert route_key(" Main Gate ", "STATION") == "main gate__station"


def test_hybrid_score_adds_weighted_signals():
    signals = MatchSignals(
        embedding_sim=0.5,
        pickup_match=True,
        drop_match=True,
        same_day_match=False,
        exact_route_match=True,
    )

    assert hybrid_score(signals, RankingWeights()) == pytest.approx(1.15)


def test_weights_parse_from_string():
    weights = RankingWeights.from_string("sim=2, pickup=0.5, bogus, date=oops")

    assert weights.sim == 2.0
    assert weights.pickup == 0.5
    assert weights.date == RankingWeights().date


def test_exact_mode_filters_and_keeps_order(ride_factory):
    rides = [
        ride_factory(id="a", pickup_text="SD Hall", drop_text="Rourkela Station"),
        ride_factory(id="b", pickup_text="KMS", drop_text="Airport"),
        ride_factory(id="c", pickup_text="sd hall annex", drop_text="ROURKELA STATION"),
    ]
    query = RideQuery(pickup_text="sd hall", drop_text="station")

    results = rank(query, rides, mode="exact")

    assert [r.ride.id for r in results] == ["a", "c"]
    assert [r.rank for r in results] == [1, 2]
    assert all(r.score == 0.0 for r in results)


def test_exact_mode_keywords_and_date(ride_factory):
    rides = [
        ride_factory(id="a", notes="AC cab, luggage ok", datetime_iso="2026-10-18T08:00:00"),
        ride_factory(id="b", notes="AC cab", datetime_iso="2026-10-19T08:00:00"),
        ride_factory(id="c", notes=None, datetime_iso="2026-10-18T10:00:00"),
    ]
    query = RideQuery(free_keywords=" ac CAB ", date_iso="2026-10-18")

    assert [r.ride.id for r in rank(query, rides, mode="exact")] == ["a"]


def test_exact_mode_is_not_truncated(ride_factory):
    rides = [ride_factory(id=f"r{i}") for i in range(50)]

    assert len(rank(RideQuery(), rides, mode="exact")) == 50


def test_smart_mode_truncates_to_shortlist_and_is_stable(ride_factory):
    rides = [ride_factory(id=f"r{i}") for i in range(50)]

    results = rank(RideQuery(), rides, mode="smart")

    assert len(results) == 36
    # all scores tie, so candidate order is kept
    assert [r.ride.id for r in results] == [f"r{i}" for i in range(36)]
    assert [r.rank for r in results] == list(range(1, 37))


def test_smart_mode_orders_by_embedding(ride_factory):
    rides = [
        ride_factory(id="far", embedding=[0.0, 1.0]),
        ride_factory(id="near", embedding=[1.0, 0.1]),
    ]

    results = rank(RideQuery(), rides, mode="smart", query_embedding=[1.0, 0.0])

    assert [r.ride.id for r in results] == ["near", "far"]
    assert results[0].signals.embedding_sim > 0.9


def test_rides_without_embedding_compete_on_text(ride_factory):
    rides = [
        ride_factory(id="vector", pickup_text="Panposh", embedding=[0.0, 1.0]),
        ride_factory(id="text", pickup_text="SD Hall", drop_text="Airport", embedding=[]),
    ]
    query = RideQuery(pickup_text="sd hall")

    results = rank(query, rides, mode="smart", query_embedding=[1.0, 0.0])

    assert results[0].ride.id == "text"
    assert results[0].signals.pickup_match
    assert results[0].score == pytest.approx(0.25)


def test_route_key_bonus_applies_to_exact_route(ride_factory):
    rides = [
        ride_factory(id="partial", pickup_text="SD Hall gate", drop_text="Rourkela Station"),
        ride_factory(id="exact", pickup_text="sd hall", drop_text="ROURKELA STATION"),
    ]
    query = RideQuery(pickup_text="SD Hall ", drop_text="Rourkela Station")

    results = rank(query, rides, mode="smart")

    assert [r.ride.id for r in results] == ["exact", "partial"]
    assert results[0].signals.exact_route_match
    assert not results[1].signals.exact_route_match


def test_describe_query_appends_keywords():
    query = RideQuery(pickup_text="Main Gate", drop_text="Station", free_keywords=" AC Cab ")

    assert describe_query(query) == "Ride from Main Gate to Station. Keywords: ac cab"


def test_search_rides_embeds_query_in_smart_mode(monkeypatch, ride_factory):
    seen = []

    async def fake_embed(text):
        seen.append(text)
        return [1.0, 0.0]

    monkeypatch.setattr(ranking, "embed_text", fake_embed)
    rides = [ride_factory(id="a", embedding=[1.0, 0.0])]

    results = asyncio.run(search_rides(RideQuery(pickup_text="SD Hall"), rides, mode="smart"))

    assert seen == ["Ride from SD Hall to ."]
    assert results[0].score == pytest.approx(1.25)


def test_search_rides_exact_mode_skips_embedding(monkeypatch, ride_factory):
    async def fail_embed(text):  # noqa: ARG001
        raise AssertionError("exact mode must not embed")

    monkeypatch.setattr(ranking, "embed_text", fail_embed)

    results = asyncio.run(search_rides(RideQuery(), [ride_factory()], mode="exact"))

    assert len(results) == 1


def test_identical_embedding_and_route_beats_unrelated_ride(ride_factory):
    rides = [
        ride_factory(id="unrelated", pickup_text="KMS", drop_text="Airport", embedding=[0.8, -0.6]),
        ride_factory(id="match", pickup_text="SD Hall", drop_text="Station", embedding=[0.6, 0.8]),
    ]
    query = RideQuery(pickup_text="SD Hall", drop_text="Station")

    results = rank(query, rides, mode="smart", query_embedding=[0.6, 0.8])

    assert results[0].ride.id == "match"
    assert results[0].score > results[1].score
    assert results[1].score == pytest.approx(0.0, abs=1e-9)


def test_exact_mode_is_deterministic(ride_factory):
    rides = [ride_factory(id=f"r{i}", pickup_text="SD Hall" if i % 2 else "KMS") for i in range(10)]
    query = RideQuery(pickup_text="sd")

    first = [r.ride.id for r in rank(query, rides, mode="exact")]
    second = [r.ride.id for r in rank(query, rides, mode="exact")]

    assert first == second == ["r1", "r3", "r5", "r7", "r9"]

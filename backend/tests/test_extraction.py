import pytest
from backend.cabshare.extraction import (
    ExtractionInputError,
    expand_campus_alias,
    extract_locations,
    extract_quoted_pair,
    has_distance_intent,
    parse_route_intent,
    sanitize_place,
)


def test_from_to_pattern_wins_first():
    pair = extract_locations("What is the distance from Main Gate to Rourkela Railway Station?")

    assert pair is not None
    assert pair.origin == "Main Gate"
    assert pair.destination == "Rourkela Railway Station"
    assert pair.pattern == "from_to"


def test_destination_stops_at_punctuation():
    pair = extract_locations("from SD hall to Panposh Market, please book early")

    assert pair.destination == "Panposh Market"


def test_between_pattern():
    pair = extract_locations("How long is the drive between SAC and Big Bazaar.")

    assert (pair.origin, pair.destination, pair.pattern) == ("SAC", "Big Bazaar", "between")


def test_how_far_pattern():
    pair = extract_locations("How far Rourkela Station to Panposh Market")

    assert (pair.origin, pair.destination, pair.pattern) == (
        "Rourkela Station",
        "Panposh Market",
        "how_far",
    )


def test_generic_pattern():
    pair = extract_locations("Rourkela Station to Birsa Munda Airport")

    assert (pair.origin, pair.destination, pair.pattern) == (
        "Rourkela Station",
        "Birsa Munda Airport",
        "generic",
    )


def test_reversed_from_swaps_groups():
    pair = extract_locations("Panposh Market from Main Gate")

    assert pair.origin == "Main Gate"
    assert pair.destination == "Panposh Market"
    assert pair.pattern == "reversed_from"


def test_identical_places_are_rejected():
    assert extract_locations("Main Gate to main gate") is None


def test_text_without_a_route_returns_none():
    assert extract_locations("Is there a cab tomorrow morning?") is None


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_input_is_an_error(text):
    with pytest.raises(ExtractionInputError):
        extract_locations(text)


def test_sanitize_place_trims_edge_punctuation_only():
    assert sanitize_place("  , Main   Gate ;") == "Main Gate"
    assert sanitize_place("St. Mary's") == "St. Mary's"


def test_expand_campus_alias():
    assert expand_campus_alias("SAC") == "SAC, NIT Rourkela, Odisha"
    assert expand_campus_alias("Main Gate") == "Main Gate, NIT Rourkela, Odisha"
    # already pinned to campus
    assert expand_campus_alias("NIT main gate") == "NIT main gate"
    # alias must be a whole word
    assert expand_campus_alias("Sachivalaya") == "Sachivalaya"


def test_quoted_pair_expands_aliases():
    pair = extract_quoted_pair('"Main Gate" "Rourkela Station"')

    assert pair.origin == "Main Gate, NIT Rourkela, Odisha"
    assert pair.destination == "Rourkela Station"
    assert pair.pattern == "quoted"


def test_parse_route_intent_falls_back_to_quotes():
    pair = parse_route_intent("'Main Gate', 'Rourkela Station'")

    assert pair is not None
    assert pair.pattern == "quoted"


def test_parse_route_intent_prefers_cascade():
    pair = parse_route_intent("distance from KMS to Vedvyas")

    assert (pair.origin, pair.destination) == ("KMS", "Vedvyas")


def test_distance_intent_detection():
    assert has_distance_intent("How far is SD hall from the station?")
    assert has_distance_intent("travel time to the airport")
    assert not has_distance_intent("Can I post a ride for tomorrow?")
    assert not has_distance_intent("")


@pytest.mark.parametrize(
    "text",
    ["from A to B", "between A and B", "how far is it A to B", "B from A"],
)
def test_every_phrasing_yields_the_same_pair(text):
    pair = extract_locations(text)

    assert (pair.origin, pair.destination) == ("A", "B")


def test_single_token_has_no_route():
    assert extract_locations("X") is None


def test_alias_with_institution_is_left_alone():
    assert expand_campus_alias("Main Gate, NIT Rourkela") == "Main Gate, NIT Rourkela"


def test_institution_mentions_match_inside_words():
    assert expand_campus_alias("NITR main gate") == "NITR main gate"
    assert expand_campus_alias("Rourkela SAC building") == "Rourkela SAC building"

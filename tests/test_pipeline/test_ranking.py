"""
Unit tests for the Geo-Filter & Ranker.
"""

import random

import pytest

from toiletfinder.models.review import UserReviewEntry
from toiletfinder.models.toilet import LocationContext
from toiletfinder.pipeline.distance import distance_km
from toiletfinder.pipeline.enrichment import ReviewEnricher
from toiletfinder.pipeline.ranking import (
    GeoFilterRanker,
    available_sort_keys,
    sort_records,
    EMPTY_NO_DATA,
    EMPTY_NO_LOCALITY_MATCH,
    EMPTY_NO_SEARCH_MATCH,
    EMPTY_OUTSIDE_RADIUS,
)

USER = (28.6139, 77.2090)  # New Delhi


@pytest.fixture
def ranker():
    return GeoFilterRanker(ReviewEnricher())


@pytest.fixture
def mixed_cities(make_record):
    """Three Delhi records among five from other cities, equal ratings."""
    cities = ["Mumbai", "Delhi", "Pune", "Delhi", "Chennai", "Kolkata", "Delhi", "Jaipur"]
    return [make_record(id=f"r{i}", city=city, rating=4.0) for i, city in enumerate(cities)]


def test_place_filter_keeps_only_matching_records(ranker, mixed_cities):
    result = ranker.select(mixed_cities, LocationContext.for_place("Delhi"))

    assert [r.id for r in result.records] == ["r1", "r3", "r6"]
    assert result.empty_reason is None
    assert not result.used_fallback


def test_place_filter_matches_district_case_insensitively(ranker, make_record):
    records = [
        make_record(id="a", city="Gurgaon", district="Gurgaon"),
        make_record(id="b", city="Delhi", district="New Delhi"),
        make_record(id="c", city="Noida", district="Gautam Buddh Nagar"),
    ]

    result = ranker.select(records, LocationContext.for_place("new del"))

    assert [r.id for r in result.records] == ["b"]


def test_place_fallback_uses_enriched_seed_records(make_record, make_review):
    seed = [
        make_record(id="s1", city="Pune", rating=2.0, source="seed"),
        make_record(id="s2", city="Mumbai", source="seed"),
    ]
    ranker = GeoFilterRanker(ReviewEnricher(), fallback_records=seed)
    live = [make_record(id="l1", city="Delhi")]
    journal = [UserReviewEntry.create("s1", make_review("Spotless", 5))]

    result = ranker.select(live, LocationContext.for_place("pune"), journal_entries=journal)

    assert result.used_fallback
    assert [r.id for r in result.records] == ["s1"]
    assert len(result.records[0].reviews) == 1
    assert result.records[0].rating == 5.0


def test_place_without_any_match_is_empty_result(ranker, mixed_cities):
    result = ranker.select(mixed_cities, LocationContext.for_place("Atlantis"))

    assert result.is_empty
    assert result.empty_reason == EMPTY_NO_LOCALITY_MATCH


def test_empty_input_is_no_data(ranker):
    for location in (
        LocationContext.everywhere(),
        LocationContext.for_place("Delhi"),
        LocationContext.for_coordinates(*USER),
    ):
        result = ranker.select([], location, search_term="park", sort_key="cleanliness")
        assert result.records == []
        assert result.empty_reason == EMPTY_NO_DATA


def test_radius_filter_attaches_distance(ranker, make_record):
    records = [
        make_record(id="india-gate", latitude=28.6129, longitude=77.2295),
        make_record(id="mumbai", latitude=18.9220, longitude=72.8347),
    ]

    result = ranker.select(records, LocationContext.for_coordinates(*USER))

    [nearby] = result.records
    assert nearby.id == "india-gate"
    assert nearby.distance_km == pytest.approx(distance_km(*USER, 28.6129, 77.2295))
    assert nearby.distance_km < 10


def test_radius_filter_includes_exactly_the_records_within_radius(make_record):
    rng = random.Random(3)
    records = [
        make_record(id=str(i), latitude=USER[0] + rng.uniform(-0.3, 0.3),
                    longitude=USER[1] + rng.uniform(-0.3, 0.3))
        for i in range(60)
    ]

    for radius in (2.0, 10.0, 25.0):
        ranker = GeoFilterRanker(ReviewEnricher(), radius_km=radius)
        result = ranker.select(records, LocationContext.for_coordinates(*USER))
        kept = {r.id for r in result.records}

        for record in records:
            within = distance_km(*USER, record.latitude, record.longitude) <= radius
            assert (record.id in kept) == within


def test_nothing_within_radius_is_reported(ranker, make_record):
    records = [make_record(id="mumbai", latitude=18.9220, longitude=72.8347)]

    result = ranker.select(records, LocationContext.for_coordinates(*USER))

    assert result.is_empty
    assert result.empty_reason == EMPTY_OUTSIDE_RADIUS


def test_distance_sort_is_ascending(make_record):
    records = [
        make_record(id="gurgaon", latitude=28.4955, longitude=77.0910),
        make_record(id="red-fort", latitude=28.6562, longitude=77.2410),
        make_record(id="india-gate", latitude=28.6129, longitude=77.2295),
    ]
    ranker = GeoFilterRanker(ReviewEnricher(), radius_km=30)

    result = ranker.select(records, LocationContext.for_coordinates(*USER), sort_key="distance")

    assert [r.id for r in result.records] == ["india-gate", "red-fort", "gurgaon"]


def test_distance_sort_without_coordinates_falls_back_to_rating(ranker, make_record):
    records = [make_record(id="low", rating=2.0), make_record(id="high", rating=4.5)]

    result = ranker.select(records, LocationContext.everywhere(), sort_key="distance")

    assert [r.id for r in result.records] == ["high", "low"]


def test_rating_sort_is_descending_and_stable(make_record):
    records = [
        make_record(id="a", rating=3.0),
        make_record(id="b", rating=4.5),
        make_record(id="c", rating=3.0),
        make_record(id="d", rating=4.5),
        make_record(id="e", rating=None),
    ]

    ordered = sort_records(records, "rating")

    assert [r.id for r in ordered] == ["b", "d", "a", "c", "e"]


def test_cleanliness_sort_is_ordinal_and_stable(ranker, make_record):
    records = [
        make_record(id="a", status="Average"),
        make_record(id="b", status="Bad"),
        make_record(id="c", status="Good"),
        make_record(id="d", status="Average"),
        make_record(id="e", status="Good"),
    ]

    result = ranker.select(records, LocationContext.everywhere(), sort_key="cleanliness")

    assert [r.id for r in result.records] == ["c", "e", "a", "d", "b"]


def test_search_matches_name_address_or_landmark(ranker, make_record):
    records = [
        make_record(id="1", name="Cubbon Park Toilet"),
        make_record(id="2", address="Near City Park"),
        make_record(id="3", landmark="Park"),
        make_record(id="4", name="Railway Facility", address="Station Road", landmark="Market"),
    ]

    result = ranker.select(records, LocationContext.everywhere(), search_term="PARK")

    assert [r.id for r in result.records] == ["1", "2", "3"]


def test_search_applies_after_locality(ranker, make_record):
    records = [
        make_record(id="1", city="Delhi", name="Metro Toilet"),
        make_record(id="2", city="Mumbai", name="Metro Toilet"),
        make_record(id="3", city="Delhi", name="Market Toilet"),
    ]

    result = ranker.select(records, LocationContext.for_place("Delhi"), search_term="metro")

    assert [r.id for r in result.records] == ["1"]


def test_search_without_match_is_reported(ranker, make_record):
    result = ranker.select([make_record()], LocationContext.everywhere(), search_term="zzz")

    assert result.empty_reason == EMPTY_NO_SEARCH_MATCH


def test_available_sort_keys():
    assert "distance" in available_sort_keys(LocationContext.for_coordinates(*USER))
    assert "distance" not in available_sort_keys(LocationContext.for_place("Delhi"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

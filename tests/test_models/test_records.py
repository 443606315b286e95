"""
Unit tests for review and toilet data models.
"""

import pytest

from toiletfinder.models.review import Review, UserReviewEntry, parse_timestamp
from toiletfinder.models.toilet import GeoPoint, LocationContext, ToiletRecord


def test_review_rejects_out_of_range_rating():
    for rating in (0, 6, -1):
        with pytest.raises(ValueError):
            Review(text="x", rating=rating, date="2024-01-01T00:00:00Z")


def test_review_rejects_non_integer_rating():
    for rating in (4.5, "5", True):
        with pytest.raises(ValueError):
            Review(text="x", rating=rating, date="2024-01-01T00:00:00Z")


def test_review_from_dict_defaults():
    review = Review.from_dict({"rating": 4})

    assert review.text == ""
    assert review.date.endswith("Z")


def test_review_from_dict_replaces_unparseable_date():
    review = Review.from_dict({"text": "ok", "rating": 4, "date": "2024/01/05"})

    assert review.date != "2024/01/05"
    parse_timestamp(review.date)


def test_review_from_dict_keeps_valid_date():
    review = Review.from_dict({"text": "ok", "rating": 4, "date": "2024-01-05T08:00:00.000Z"})
    assert review.date == "2024-01-05T08:00:00.000Z"


def test_user_review_entry_dict_round_trip():
    entry = UserReviewEntry.create("42", Review(text="Clean", rating=5, date="2024-06-01T10:00:00Z"))

    data = entry.to_dict()

    assert data["toiletId"] == "42"
    assert UserReviewEntry.from_dict(data) == entry


def test_user_review_entries_get_distinct_ids():
    review = Review(text="Clean", rating=5, date="2024-06-01T10:00:00Z")
    assert UserReviewEntry.create("1", review).id != UserReviewEntry.create("1", review).id


def test_parse_timestamp_treats_naive_as_utc():
    assert parse_timestamp("2024-06-01T10:00:00") == parse_timestamp("2024-06-01T10:00:00Z")
    assert parse_timestamp("2024-06-01T12:00:00+02:00") == parse_timestamp("2024-06-01T10:00:00Z")


def test_toilet_record_rejects_unknown_status(make_record):
    with pytest.raises(ValueError, match="Invalid cleanliness status"):
        make_record(status="Sparkling")


def test_toilet_record_stores_tuples(make_record, make_review):
    record = make_record(reviews=[make_review("ok", 4)], facilities=["WiFi"])

    assert isinstance(record.reviews, tuple)
    assert record.facilities == ("WiFi",)


def test_toilet_record_to_dict(make_record):
    data = make_record(id="9", status="Good").to_dict()

    assert data["id"] == "9"
    assert data["cleanlinessStatus"] == "Good"
    assert data["isOpen"] is True
    assert "distance" not in data


def test_location_context_is_never_both():
    with pytest.raises(ValueError):
        LocationContext(place_name="Delhi", coordinates=GeoPoint(28.6, 77.2))


def test_location_context_modes():
    geo = LocationContext.for_coordinates(28.6, 77.2)
    text = LocationContext.for_place("Pune")
    everywhere = LocationContext.everywhere()

    assert geo.is_geo and not geo.is_text
    assert text.is_text and not text.is_geo
    assert not everywhere.is_geo and not everywhere.is_text
    assert geo.describe() == "Near Your Location"
    assert text.describe() == "Pune"
    assert everywhere.describe() == "All Locations"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

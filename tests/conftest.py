"""
Shared fixtures for Toilet Finder tests.
"""

import pytest

from toiletfinder.journal.review_journal import ReviewJournal
from toiletfinder.models.review import Review
from toiletfinder.models.toilet import ToiletRecord


@pytest.fixture
def make_review():
    """Factory for reviews with a fixed default date."""
    def _make(text="", rating=3, date="2024-06-01T10:00:00Z"):
        return Review(text=text, rating=rating, date=date)
    return _make


@pytest.fixture
def make_record():
    """Factory for toilet records; only the fields a test cares about need passing."""
    def _make(id="t1", city="Delhi", district=None, rating=4.0, status="Average",
              reviews=(), latitude=28.6139, longitude=77.2090, **overrides):
        fields = dict(
            id=id,
            name=f"Toilet {id}",
            address=f"{id} Main Road",
            city=city,
            district=district or city,
            state="Test State",
            landmark="Public Area",
            latitude=latitude,
            longitude=longitude,
            cleanliness_status=status,
            rating=rating,
            reviews=reviews,
        )
        fields.update(overrides)
        return ToiletRecord(**fields)
    return _make


@pytest.fixture
def memory_journal():
    return ReviewJournal()

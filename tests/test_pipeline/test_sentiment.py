"""
Unit tests for the Sentiment Classifier.
"""

import random

import pytest

from toiletfinder.models.review import Review
from toiletfinder.pipeline.sentiment import (
    SentimentClassifier,
    classify,
    count_keyword_hits,
    keyword_score,
    most_recent,
    MODE_RECENT,
)


def make_review(text, rating, date="2024-06-01T10:00:00Z"):
    return Review(text=text, rating=rating, date=date)


def test_empty_reviews_are_average():
    assert classify([]) == "Average"
    assert classify([], mode=MODE_RECENT) == "Average"


def test_clean_five_star_review_is_good():
    reviews = [make_review("very clean and well-maintained", 5)]
    assert classify(reviews) == "Good"


def test_dirty_one_star_review_is_bad():
    reviews = [make_review("very dirty and smelly", 1)]
    assert classify(reviews) == "Bad"


def test_neutral_three_star_review_is_average():
    """Rating score 0.5 with no keyword signal gives 0.5."""
    reviews = [make_review("It was okay", 3)]
    assert classify(reviews) == "Average"


def test_negative_keywords_pull_high_rating_down():
    # 0.7 * 0.75 + 0.3 * 0 = 0.525
    assert classify([make_review("dirty floor", 4)]) == "Average"
    # 0.7 * 1.0 + 0.3 * 0 = 0.7
    assert classify([make_review("dirty floor", 5)]) == "Good"


def test_low_rating_without_keywords_is_bad():
    # 0.7 * 0.25 + 0.3 * 0.5 = 0.325
    assert classify([make_review("meh", 2)]) == "Bad"


def test_keyword_hits_count_once_per_review():
    reviews = [
        make_review("very clean and well-maintained", 5),  # clean, well-maintained, maintained
        make_review("Clean clean CLEAN", 4),  # clean
        make_review("Not bad", 3),  # bad
    ]
    assert count_keyword_hits(reviews) == (4, 1)


def test_keyword_score_rules():
    assert keyword_score(0, 0) == 0.5
    assert keyword_score(3, 1) == 0.75
    assert keyword_score(1, 1) == 0.0
    assert keyword_score(0, 2) == 0.0


def test_weighted_mode_is_order_independent():
    reviews = [
        make_review("Spotless and hygienic", 5, "2024-01-01T00:00:00Z"),
        make_review("Dirty toilet with broken facilities", 1, "2024-02-01T00:00:00Z"),
        make_review("Okay condition", 3, "2024-03-01T00:00:00Z"),
        make_review("Clean with soap and water", 4, "2024-04-01T00:00:00Z"),
    ]
    expected = classify(reviews)

    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(reviews)
        rng.shuffle(shuffled)
        assert classify(shuffled) == expected


def test_recent_mode_uses_five_newest_reviews():
    """Old glowing reviews do not rescue five recent bad ones."""
    old = [make_review("Excellent", 5, f"2023-0{m}-01T00:00:00Z") for m in range(1, 4)]
    recent = [make_review("Poor", 2, f"2024-0{m}-01T00:00:00Z") for m in range(1, 6)]

    classifier = SentimentClassifier(mode=MODE_RECENT)
    assert classifier.classify(old + recent) == "Bad"
    assert classifier.classify(recent[::-1] + old[::-1]) == "Bad"

    # Weighted mode looks at all eight reviews
    assert classify(old + recent) != "Bad"


def test_recent_mode_thresholds():
    classifier = SentimentClassifier(mode=MODE_RECENT)
    assert classifier.classify([make_review("", 4)]) == "Good"
    assert classifier.classify([make_review("", 3)]) == "Average"
    assert classifier.classify([make_review("", 2)]) == "Bad"


def test_most_recent_does_not_mutate_input():
    reviews = [
        make_review("a", 1, "2024-01-01T00:00:00Z"),
        make_review("b", 2, "2024-03-01T00:00:00Z"),
        make_review("c", 3, "2024-02-01T00:00:00Z"),
    ]
    original = list(reviews)

    newest = most_recent(reviews, 2)

    assert [r.text for r in newest] == ["b", "c"]
    assert reviews == original


def test_most_recent_handles_mixed_timestamp_formats():
    reviews = [
        make_review("naive", 3, "2024-05-01T12:00:00"),
        make_review("offset", 4, "2024-05-01T13:00:00+00:00"),
        make_review("millis", 5, "2024-05-01T14:00:00.000Z"),
    ]
    assert [r.text for r in most_recent(reviews, 3)] == ["millis", "offset", "naive"]


def test_unparseable_dates_sort_as_oldest():
    undated = make_review("Filthy", 1, "2024/01/05")
    dated = [make_review("Clean", 5, f"2024-01-0{d}T00:00:00Z") for d in range(1, 6)]

    assert most_recent([undated] + dated, 5) == sorted(dated, key=lambda r: r.date, reverse=True)
    assert classify([undated] + dated, mode=MODE_RECENT) == "Good"


def test_recent_mode_with_unparseable_date_does_not_raise():
    reviews = [make_review("clean", 5, "2024/01/05"), make_review("ok", 4, "2024-01-06T00:00:00Z")]

    assert classify(reviews, mode=MODE_RECENT) == "Good"


def test_invalid_mode_rejected():
    with pytest.raises(ValueError, match="Invalid mode"):
        SentimentClassifier(mode="bayesian")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

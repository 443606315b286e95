"""
Sentiment Classifier.

Turns a set of reviews into a three-level cleanliness label by blending the
star ratings with a keyword scan of the review text.
"""

import logging
from datetime import datetime, timezone
from typing import List, Sequence, Tuple

from toiletfinder.models.review import Review, parse_timestamp
from toiletfinder.models.toilet import STATUS_GOOD, STATUS_AVERAGE, STATUS_BAD
import config.settings as settings

logger = logging.getLogger(__name__)

OLDEST = datetime.min.replace(tzinfo=timezone.utc)

MODE_WEIGHTED = "weighted"
MODE_RECENT = "recent"

POSITIVE_KEYWORDS = (
    "clean", "good", "excellent", "great", "nice", "well-maintained", "hygienic",
    "spotless", "fresh", "pleasant", "tidy", "proper", "satisfied", "recommended",
    "impressive", "maintained", "facilities", "soap", "water"
)

NEGATIVE_KEYWORDS = (
    "dirty", "bad", "terrible", "awful", "smelly", "unhygienic", "poor", "broken",
    "disgusting", "filthy", "mess", "stink", "avoid", "horrible", "worst", "nasty",
    "unmaintained", "issues", "problems", "complaint"
)


def count_keyword_hits(reviews: Sequence[Review]) -> Tuple[int, int]:
    """
    Count positive and negative keyword hits across reviews.

    Each keyword scores once per review whose lower-cased text contains it.
    Hits are summed over all reviews.
    """
    positive_score = 0
    negative_score = 0

    for review in reviews:
        text = review.text.lower()
        positive_score += sum(1 for keyword in POSITIVE_KEYWORDS if keyword in text)
        negative_score += sum(1 for keyword in NEGATIVE_KEYWORDS if keyword in text)

    return positive_score, negative_score


def keyword_score(positive_score: int, negative_score: int) -> float:
    """Share of positive hits, 0 when negatives dominate, 0.5 with no signal."""
    if positive_score > negative_score:
        return positive_score / (positive_score + negative_score)
    if negative_score > 0:
        return 0.0
    return 0.5


def weighted_score(reviews: Sequence[Review]) -> float:
    """Blend of normalized mean rating and keyword score in [0, 1]."""
    avg_rating = sum(review.rating for review in reviews) / len(reviews)
    rating_score = (avg_rating - 1) / 4

    positive_score, negative_score = count_keyword_hits(reviews)

    return (
        rating_score * settings.RATING_WEIGHT
        + keyword_score(positive_score, negative_score) * settings.KEYWORD_WEIGHT
    )


def review_time(review: Review) -> datetime:
    """Parsed review date; unparseable dates count as oldest."""
    try:
        return parse_timestamp(review.date)
    except (TypeError, ValueError, AttributeError):
        logger.warning(f"Unparseable review date {review.date!r}, treating as oldest")
        return OLDEST


def most_recent(reviews: Sequence[Review], limit: int) -> List[Review]:
    """
    The `limit` newest reviews by date, without mutating the input.

    Equal dates are ordered by rating and text so the selection never
    depends on input order.
    """
    ordered = sorted(
        reviews,
        key=lambda r: (review_time(r), r.rating, r.text),
        reverse=True
    )
    return ordered[:limit]


class SentimentClassifier:
    """
    Classifies a review set as Good, Average or Bad.

    Two modes:
    - weighted (default): 70% normalized mean rating, 30% keyword score
    - recent: mean rating of the five newest reviews only
    """

    def __init__(self, mode: str = MODE_WEIGHTED):
        """
        Initialize classifier.

        Args:
            mode: "weighted" or "recent"
        """
        if mode not in (MODE_WEIGHTED, MODE_RECENT):
            raise ValueError(f"Invalid mode: {mode}. Must be '{MODE_WEIGHTED}' or '{MODE_RECENT}'")
        self.mode = mode

    def classify(self, reviews: Sequence[Review]) -> str:
        """
        Classify a review set.

        Args:
            reviews: Reviews in any order

        Returns:
            "Good", "Average" or "Bad" ("Average" when there are no reviews)
        """
        if not reviews:
            return STATUS_AVERAGE

        if self.mode == MODE_RECENT:
            return self._classify_recent(reviews)
        return self._classify_weighted(reviews)

    def _classify_weighted(self, reviews: Sequence[Review]) -> str:
        final_score = weighted_score(reviews)
        logger.debug(f"Weighted score {final_score:.3f} over {len(reviews)} reviews")

        if final_score >= settings.GOOD_THRESHOLD:
            return STATUS_GOOD
        if final_score <= settings.BAD_THRESHOLD:
            return STATUS_BAD
        return STATUS_AVERAGE

    def _classify_recent(self, reviews: Sequence[Review]) -> str:
        recent = most_recent(reviews, settings.RECENT_REVIEW_WINDOW)
        avg_rating = sum(review.rating for review in recent) / len(recent)

        if avg_rating >= settings.RECENT_GOOD_RATING:
            return STATUS_GOOD
        if avg_rating <= settings.RECENT_BAD_RATING:
            return STATUS_BAD
        return STATUS_AVERAGE


def classify(reviews: Sequence[Review], mode: str = MODE_WEIGHTED) -> str:
    """Classify reviews with a one-off classifier in the given mode."""
    return SentimentClassifier(mode).classify(reviews)

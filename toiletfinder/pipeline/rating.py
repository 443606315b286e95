"""
Aggregate Rating Calculator.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from toiletfinder.models.review import Review


def round_rating(value: float) -> float:
    """Round to one decimal place, halves away from zero (4.25 -> 4.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def aggregate_rating(reviews: Sequence[Review]) -> float:
    """
    Mean star rating rounded to one decimal.

    Returns 0.0 for an empty sequence.
    """
    if not reviews:
        return 0.0

    mean = sum(review.rating for review in reviews) / len(reviews)
    return round_rating(mean)

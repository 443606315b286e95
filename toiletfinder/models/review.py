"""
Review data models.

A review belongs to the toilet it was written for; user-submitted reviews
are also kept in the review journal as UserReviewEntry records.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are read as UTC so that mixed inputs stay comparable.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Review:
    """
    A single cleanliness review.
    Immutable once created.
    """
    text: str
    rating: int  # 1-5 star rating
    date: str  # ISO-8601 timestamp

    def __post_init__(self):
        # Validate rating
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValueError(f"Invalid rating: {self.rating!r}. Must be an integer 1-5")
        if not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")

    def to_dict(self) -> dict:
        return {"text": self.text, "rating": self.rating, "date": self.date}

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        """Create Review from JSON dict. Missing or unparseable dates become now."""
        date = data.get("date")
        if date:
            try:
                parse_timestamp(date)
            except (TypeError, ValueError, AttributeError):
                logger.warning(f"Replacing unparseable review date {date!r} with current time")
                date = None

        return cls(
            text=data.get("text") or "",
            rating=data["rating"],
            date=date or utc_now_iso()
        )


@dataclass(frozen=True)
class UserReviewEntry:
    """
    Journal record for a review submitted by a user.
    Keyed by its own id and by the id of the toilet it belongs to.
    """
    id: str
    toilet_id: str
    review: Review
    timestamp: str

    @classmethod
    def create(cls, toilet_id: str, review: Review) -> "UserReviewEntry":
        """Build a new entry with a generated id, stamped now."""
        return cls(
            id=uuid.uuid4().hex,
            toilet_id=toilet_id,
            review=review,
            timestamp=utc_now_iso()
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "toiletId": self.toilet_id,
            "review": self.review.to_dict(),
            "timestamp": self.timestamp
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserReviewEntry":
        """Create UserReviewEntry from JSON dict."""
        return cls(
            id=str(data["id"]),
            toilet_id=str(data["toiletId"]),
            review=Review.from_dict(data["review"]),
            timestamp=data.get("timestamp", "")
        )

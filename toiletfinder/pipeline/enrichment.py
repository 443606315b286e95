"""
Record Merge & Enrichment.

Merges journaled user reviews into toilet records and keeps the derived
rating and cleanliness status in step with each record's reviews.
"""

import dataclasses
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from toiletfinder.journal.review_journal import ReviewJournal
from toiletfinder.models.review import Review, UserReviewEntry, utc_now_iso
from toiletfinder.models.toilet import ToiletRecord
from toiletfinder.pipeline.rating import aggregate_rating
from toiletfinder.pipeline.sentiment import SentimentClassifier

logger = logging.getLogger(__name__)


class ReviewEnricher:
    """
    Single owner of the derived fields on ToiletRecord.

    Every mutation path (journal merge, new review, refresh) goes through
    refresh(), so rating and cleanliness_status always match the reviews.
    """

    def __init__(self, classifier: Optional[SentimentClassifier] = None):
        """
        Initialize enricher.

        Args:
            classifier: Classifier used for cleanliness status (weighted mode by default)
        """
        self.classifier = classifier or SentimentClassifier()

    def refresh(
        self,
        record: ToiletRecord,
        reviews: Optional[Sequence[Review]] = None,
        recompute_rating: bool = True
    ) -> ToiletRecord:
        """
        Return a copy of record with reviews replaced and derived fields recomputed.

        Args:
            record: Record to refresh
            reviews: New review sequence (defaults to the record's own)
            recompute_rating: If False, keep the record's rating unless it is None
        """
        reviews = tuple(record.reviews if reviews is None else reviews)

        rating = record.rating
        if recompute_rating or rating is None:
            rating = aggregate_rating(reviews)

        return dataclasses.replace(
            record,
            reviews=reviews,
            rating=rating,
            cleanliness_status=self.classifier.classify(reviews)
        )

    def enrich(
        self,
        base_records: Iterable[ToiletRecord],
        journal_entries: Iterable[UserReviewEntry]
    ) -> List[ToiletRecord]:
        """
        Merge journal reviews into base records.

        Records with matching entries get their reviews extended (journal
        order) and both derived fields recomputed. Records without matches
        keep their rating unless it is missing, but their status is
        recomputed from their own reviews.

        Args:
            base_records: Records from the place source or seed set
            journal_entries: All journaled user reviews

        Returns:
            Enriched records in input order
        """
        by_toilet: Dict[str, List[Review]] = defaultdict(list)
        for entry in journal_entries:
            by_toilet[entry.toilet_id].append(entry.review)

        enriched = []
        merged_count = 0
        for record in base_records:
            user_reviews = by_toilet.get(record.id)
            if user_reviews:
                enriched.append(self.refresh(record, record.reviews + tuple(user_reviews)))
                merged_count += 1
            else:
                enriched.append(self.refresh(record, recompute_rating=False))

        logger.info(
            f"Enriched {len(enriched)} records "
            f"({merged_count} with journaled user reviews)"
        )
        return enriched

    def append_review(
        self,
        record: ToiletRecord,
        text: str,
        rating: int,
        journal: ReviewJournal
    ) -> ToiletRecord:
        """
        Record a new user review.

        The journal write completes before the updated record is returned;
        if it fails the error propagates and nothing changes.

        Args:
            record: Toilet being reviewed
            text: Review text
            rating: Star rating 1-5
            journal: Journal the review is persisted to

        Returns:
            The record with the review appended and derived fields recomputed

        Raises:
            ValueError: If rating is outside 1-5 (before anything is written)
        """
        review = Review(text=text, rating=rating, date=utc_now_iso())
        entry = UserReviewEntry.create(record.id, review)

        journal.append(entry)

        updated = self.refresh(record, record.reviews + (review,))
        updated = dataclasses.replace(updated, last_updated=entry.timestamp)

        logger.info(
            f"Added review to {record.id}: rating {record.rating} -> {updated.rating}, "
            f"status {record.cleanliness_status} -> {updated.cleanliness_status}"
        )
        return updated

"""
Toilet Finder Orchestrator.

Coordinates data loading, location selection, ranking and review submission.
"""

import logging
import threading
from typing import List, Optional

from toiletfinder.data.seed import load_seed_records
from toiletfinder.exceptions import CoordinatesUnavailable, SourceUnavailable
from toiletfinder.journal.review_journal import ReviewJournal
from toiletfinder.models.toilet import GeoPoint, LocationContext, ToiletRecord
from toiletfinder.pipeline.enrichment import ReviewEnricher
from toiletfinder.pipeline.ranking import (
    GeoFilterRanker,
    SelectionResult,
    EMPTY_OUTSIDE_RADIUS,
    SORT_RATING,
)
from toiletfinder.pipeline.statistics import CleanlinessSummary, summarize
from toiletfinder.sources.location import CoordinateProvider
from toiletfinder.sources.places import PlaceRecordConverter, PlacesClient
import config.settings as settings

logger = logging.getLogger(__name__)


class ToiletFinder:
    """
    Holds the loaded toilet list and the user's current location.

    Flow:
    1. Fetch live places → convert → enrich with journal (seed set on failure)
    2. Filter by place or radius → search → sort
    3. New reviews go to the journal first, then into the loaded list
    """

    def __init__(
        self,
        journal: ReviewJournal,
        places_client: Optional[PlacesClient] = None,
        converter: Optional[PlaceRecordConverter] = None,
        enricher: Optional[ReviewEnricher] = None,
        seed_records: Optional[List[ToiletRecord]] = None,
        radius_km: float = settings.DEFAULT_RADIUS_KM
    ):
        """
        Initialize finder.

        Args:
            journal: Review journal (injected so tests can use a memory-only one)
            places_client: Live place source; None means offline (seed data only)
            converter: Raw place converter
            enricher: Derived-field owner
            seed_records: Fallback data set (defaults to the built-in seed set)
            radius_km: Radius for "near me" filtering
        """
        self.journal = journal
        self.places_client = places_client
        self.converter = converter or PlaceRecordConverter()
        self.enricher = enricher or ReviewEnricher()
        self.seed_records = load_seed_records() if seed_records is None else list(seed_records)
        self.ranker = GeoFilterRanker(self.enricher, self.seed_records, radius_km)

        self.records: List[ToiletRecord] = []
        self.location = LocationContext.everywhere()
        self.status_message = ""
        self.using_fallback = False
        self._fetch_lock = threading.Lock()

        logger.info("ToiletFinder initialized")

    def load(self, center: Optional[GeoPoint] = None) -> bool:
        """
        Load toilets around center (or the default centre).

        Falls back to the seed set when the live source is missing, fails
        or returns nothing. A load requested while another is in flight is
        ignored.

        Returns:
            True if data was (re)loaded, False if another load was in progress
        """
        if not self._fetch_lock.acquire(blocking=False):
            logger.warning("Load already in progress, ignoring duplicate request")
            return False

        try:
            self.status_message = ""
            try:
                base_records = self._fetch_live(center)
                self.using_fallback = False
            except SourceUnavailable as e:
                logger.error(f"Live fetch failed: {e}")
                self.status_message = "Unable to fetch live data. Using cached data instead."
                base_records = self.seed_records
                self.using_fallback = True

            self.records = self.enricher.enrich(base_records, self.journal.entries())
            logger.info(
                f"Loaded {len(self.records)} toilets "
                f"({'seed' if self.using_fallback else 'live'} data)"
            )
            return True
        finally:
            self._fetch_lock.release()

    def _fetch_live(self, center: Optional[GeoPoint]) -> List[ToiletRecord]:
        if self.places_client is None:
            raise SourceUnavailable("No live place source configured")

        center = center or GeoPoint(settings.DEFAULT_LATITUDE, settings.DEFAULT_LONGITUDE)
        raw_places = self.places_client.fetch_toilets(center.latitude, center.longitude)
        records = self.converter.convert_all(raw_places)
        if not records:
            raise SourceUnavailable("No data received from place source")
        return records

    def select_place(self, place_name: str) -> None:
        """Filter by place name; clears any coordinate location."""
        self.location = LocationContext.for_place(place_name) if place_name else LocationContext.everywhere()
        logger.info(f"Location set to {self.location.describe()}")

    def clear_location(self) -> None:
        self.location = LocationContext.everywhere()

    def use_current_location(self, provider: CoordinateProvider) -> bool:
        """
        Switch to "near me" mode and reload around the user's position.

        Returns:
            True on success. On failure the previous location stays active
            and status_message explains why.
        """
        try:
            point = provider.current_location()
        except CoordinatesUnavailable as e:
            logger.error(f"Coordinates unavailable: {e}")
            self.status_message = "Unable to get your location. Please check your location permissions."
            return False

        self.location = LocationContext(coordinates=point)
        self.load(point)
        return True

    def results(self, search_term: str = "", sort_key: str = SORT_RATING) -> SelectionResult:
        """Ordered list for the current location."""
        result = self.ranker.select(
            self.records,
            self.location,
            search_term=search_term,
            sort_key=sort_key,
            journal_entries=self.journal.entries()
        )
        if result.empty_reason == EMPTY_OUTSIDE_RADIUS:
            self.status_message = f"No toilets found within {self.ranker.radius_km:g}km of your location."
        return result

    def find(self, toilet_id: str) -> Optional[ToiletRecord]:
        """Loaded record by id, falling back to the seed set."""
        for record in self.records:
            if record.id == toilet_id:
                return record
        for record in self.seed_records:
            if record.id == toilet_id:
                return self.enricher.enrich([record], self.journal.entries_for(toilet_id))[0]
        return None

    def add_review(self, toilet_id: str, text: str, rating: int) -> ToiletRecord:
        """
        Submit a review for a toilet.

        Raises:
            KeyError: Unknown toilet id
            ValueError: Rating outside 1-5
            OSError: Journal write failed (nothing changed)
        """
        record = self.find(toilet_id)
        if record is None:
            raise KeyError(f"Toilet not found: {toilet_id}")

        updated = self.enricher.append_review(record, text, rating, self.journal)

        self.records = [updated if r.id == toilet_id else r for r in self.records]
        return updated

    def summary(self, result: SelectionResult) -> CleanlinessSummary:
        """Status counts for a result list, labelled with the current location."""
        return summarize(result.records, self.location.describe())

"""
Geo-Filter & Ranker.

Narrows a toilet list to a place or a radius around the user, applies the
text search, and sorts the result for display.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from toiletfinder.models.review import UserReviewEntry
from toiletfinder.models.toilet import (
    GeoPoint,
    LocationContext,
    ToiletRecord,
    STATUS_GOOD,
    STATUS_AVERAGE,
    STATUS_BAD,
)
from toiletfinder.pipeline.distance import distance_km
from toiletfinder.pipeline.enrichment import ReviewEnricher
import config.settings as settings

logger = logging.getLogger(__name__)

SORT_RATING = "rating"
SORT_CLEANLINESS = "cleanliness"
SORT_DISTANCE = "distance"
SORT_KEYS = (SORT_RATING, SORT_CLEANLINESS, SORT_DISTANCE)

STATUS_ORDER = {STATUS_GOOD: 2, STATUS_AVERAGE: 1, STATUS_BAD: 0}

# Reasons an empty selection can have
EMPTY_NO_DATA = "no_data"
EMPTY_OUTSIDE_RADIUS = "outside_radius"
EMPTY_NO_LOCALITY_MATCH = "no_locality_match"
EMPTY_NO_SEARCH_MATCH = "no_search_match"


@dataclass(frozen=True)
class SelectionResult:
    """
    Ordered records for display.

    empty_reason is None whenever records is non-empty.
    used_fallback is True when the seed set stood in for an unmatched place.
    """
    records: List[ToiletRecord]
    empty_reason: Optional[str] = None
    used_fallback: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.records


def available_sort_keys(location: LocationContext) -> Sequence[str]:
    """Sort keys offered for a location; distance only applies near the user."""
    if location.is_geo:
        return SORT_KEYS
    return (SORT_RATING, SORT_CLEANLINESS)


def matches_place(record: ToiletRecord, place_name: str) -> bool:
    needle = place_name.lower()
    return needle in record.city.lower() or needle in record.district.lower()


def matches_search(record: ToiletRecord, search_term: str) -> bool:
    needle = search_term.lower()
    return (
        needle in record.name.lower()
        or needle in record.address.lower()
        or needle in record.landmark.lower()
    )


def within_radius(
    records: Iterable[ToiletRecord],
    center: GeoPoint,
    radius_km: float
) -> List[ToiletRecord]:
    """Records no further than radius_km from center, with distance attached."""
    nearby = []
    for record in records:
        distance = distance_km(center.latitude, center.longitude, record.latitude, record.longitude)
        if distance <= radius_km:
            nearby.append(dataclasses.replace(record, distance_km=distance))
    return nearby


def sort_records(records: Sequence[ToiletRecord], sort_key: str) -> List[ToiletRecord]:
    """Stable sort; records with equal keys keep their relative order."""
    if sort_key == SORT_DISTANCE:
        return sorted(
            records,
            key=lambda r: r.distance_km if r.distance_km is not None else float("inf")
        )
    if sort_key == SORT_CLEANLINESS:
        return sorted(records, key=lambda r: STATUS_ORDER[r.cleanliness_status], reverse=True)
    return sorted(records, key=lambda r: r.rating or 0.0, reverse=True)


class GeoFilterRanker:
    """
    Filter and sort pipeline over in-memory records.

    Pipeline:
    1. Locality filter (radius around coordinates, or place name match
       with seed-set fallback)
    2. Text search over name, address and landmark
    3. Stable sort by rating, cleanliness or distance
    """

    def __init__(
        self,
        enricher: ReviewEnricher,
        fallback_records: Sequence[ToiletRecord] = (),
        radius_km: float = settings.DEFAULT_RADIUS_KM
    ):
        """
        Initialize ranker.

        Args:
            enricher: Used to merge journal reviews into fallback records
            fallback_records: Seed set searched when a place matches nothing
            radius_km: Radius for coordinate-based filtering
        """
        self.enricher = enricher
        self.fallback_records = list(fallback_records)
        self.radius_km = radius_km

    def select(
        self,
        records: Sequence[ToiletRecord],
        location: LocationContext,
        search_term: str = "",
        sort_key: str = SORT_RATING,
        journal_entries: Iterable[UserReviewEntry] = ()
    ) -> SelectionResult:
        """
        Produce the ordered display list.

        Args:
            records: Enriched records currently loaded
            location: Place name, coordinates, or neither
            search_term: Optional case-insensitive text filter
            sort_key: "rating", "cleanliness" or "distance"
            journal_entries: Journal used to enrich fallback records

        Returns:
            SelectionResult; empty results carry a reason instead of raising
        """
        if sort_key not in SORT_KEYS:
            logger.warning(f"Unknown sort key '{sort_key}', sorting by {SORT_RATING}")
            sort_key = SORT_RATING
        elif sort_key == SORT_DISTANCE and not location.is_geo:
            logger.warning("Distance sort needs coordinates, sorting by rating instead")
            sort_key = SORT_RATING

        if not records:
            return SelectionResult([], EMPTY_NO_DATA)

        # STAGE 1: Locality filter
        used_fallback = False
        if location.is_geo:
            filtered = within_radius(records, location.coordinates, self.radius_km)
            if not filtered:
                logger.info(f"No toilets within {self.radius_km} km of {location.coordinates}")
                return SelectionResult([], EMPTY_OUTSIDE_RADIUS)
        elif location.is_text:
            filtered = [r for r in records if matches_place(r, location.place_name)]
            if not filtered:
                filtered = self._fallback(location.place_name, journal_entries)
                used_fallback = bool(filtered)
            if not filtered:
                logger.info(f"No toilets found for '{location.place_name}'")
                return SelectionResult([], EMPTY_NO_LOCALITY_MATCH)
        else:
            filtered = list(records)

        # STAGE 2: Text search
        if search_term:
            filtered = [r for r in filtered if matches_search(r, search_term)]
            if not filtered:
                return SelectionResult([], EMPTY_NO_SEARCH_MATCH, used_fallback)

        # STAGE 3: Sort
        ordered = sort_records(filtered, sort_key)

        logger.debug(f"Selected {len(ordered)} of {len(records)} records, sorted by {sort_key}")
        return SelectionResult(ordered, None, used_fallback)

    def _fallback(
        self,
        place_name: str,
        journal_entries: Iterable[UserReviewEntry]
    ) -> List[ToiletRecord]:
        """Seed records matching place_name, enriched with the journal."""
        matches = [r for r in self.fallback_records if matches_place(r, place_name)]
        if not matches:
            return []

        logger.info(f"Using {len(matches)} seed records for '{place_name}'")
        return self.enricher.enrich(matches, journal_entries)

"""
Place source adapter.

Fetches toilets from the Geoapify Places API and converts the raw place
records into ToiletRecord objects.
"""

import logging
import uuid
from typing import Dict, List, Optional

import requests

from toiletfinder.exceptions import SourceUnavailable
from toiletfinder.models.review import Review, utc_now_iso
from toiletfinder.models.toilet import ToiletRecord, SOURCE_LIVE
import config.settings as settings

logger = logging.getLogger(__name__)

LANDMARK_TYPES = (
    "Metro Station", "Railway Station", "Bus Stand", "Market", "Hospital", "School", "Park"
)


def extract_landmark(address: str) -> str:
    """First landmark type named in the address, or "Public Area"."""
    address_lower = (address or "").lower()
    for landmark in LANDMARK_TYPES:
        if landmark.lower() in address_lower:
            return landmark
    return settings.DEFAULT_LANDMARK


def _feature_to_place(feature: Dict) -> Dict:
    """Flatten a GeoJSON feature into a raw place dict."""
    props = feature.get("properties") or {}
    coordinates = (feature.get("geometry") or {}).get("coordinates") or [None, None]
    return {
        "id": props.get("place_id") or feature.get("id"),
        "name": props.get("name"),
        "address": props.get("address_line1") or props.get("address"),
        "city": props.get("city"),
        "district": props.get("district") or props.get("county"),
        "state": props.get("state"),
        "latitude": coordinates[1] if len(coordinates) > 1 else None,
        "longitude": coordinates[0] if coordinates else None
    }


def parse_places_response(data) -> List[Dict]:
    """
    Extract raw place dicts from any of the response shapes the API returns.

    Handles a GeoJSON FeatureCollection, a bare list, and objects wrapping
    the list under "toilets" or "data". Anything else yields an empty list.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if data.get("type") == "FeatureCollection" and isinstance(data.get("features"), list):
            return [_feature_to_place(feature) for feature in data["features"]]
        if isinstance(data.get("toilets"), list):
            return data["toilets"]
        if isinstance(data.get("data"), list):
            return data["data"]

    logger.warning(f"Unexpected API response structure: {type(data).__name__}")
    return []


class PlacesClient:
    """
    Thin client for the Geoapify Places API.

    Owns retries and timeouts for the place source.
    """

    def __init__(
        self,
        api_key: str = settings.GEOAPIFY_API_KEY,
        base_url: str = settings.PLACES_API_URL,
        timeout_seconds: int = settings.PLACES_TIMEOUT_SECONDS,
        max_retries: int = settings.PLACES_MAX_RETRIES,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize places client.

        Args:
            api_key: Geoapify API key
            base_url: Places endpoint
            timeout_seconds: Per-request timeout
            max_retries: Attempts before giving up
            session: Optional requests session (shared connection pool)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.session = session or requests.Session()

        logger.info(f"Initialized PlacesClient with base_url={base_url}, retries={max_retries}")

    def fetch_toilets(
        self,
        latitude: float = settings.DEFAULT_LATITUDE,
        longitude: float = settings.DEFAULT_LONGITUDE,
        radius_m: int = settings.PLACES_SEARCH_RADIUS_M
    ) -> List[Dict]:
        """
        Fetch raw toilet places around a coordinate.

        Args:
            latitude: Search centre latitude
            longitude: Search centre longitude
            radius_m: Search radius in metres

        Returns:
            List of raw place dicts (may be empty)

        Raises:
            SourceUnavailable: No API key, or every attempt failed
        """
        if not self.api_key:
            raise SourceUnavailable("GEOAPIFY_API_KEY is not set")

        params = {
            "categories": settings.PLACES_CATEGORY,
            "filter": f"circle:{longitude},{latitude},{radius_m}",
            "limit": settings.PLACES_RESULT_LIMIT,
            "apiKey": self.api_key
        }

        last_error = None
        for attempt in range(self.max_retries):
            try:
                response = self.session.get(self.base_url, params=params, timeout=self.timeout_seconds)
                response.raise_for_status()
                places = parse_places_response(response.json())
                logger.info(f"Fetched {len(places)} places around ({latitude}, {longitude})")
                return places

            except requests.HTTPError as e:
                last_error = e
                body = e.response.text if e.response is not None else ""
                logger.error(f"HTTP error from places API (attempt {attempt + 1}): {e} {body}")

            except (requests.RequestException, ValueError) as e:
                last_error = e
                logger.error(f"Places API request failed (attempt {attempt + 1}): {e}")

        raise SourceUnavailable(f"Places API unavailable after {self.max_retries} attempts: {last_error}")


class PlaceRecordConverter:
    """
    Converts raw place dicts into ToiletRecord objects.

    Missing fields fall back to defaults so one malformed record never stops
    the rest of a batch from converting.
    """

    def convert(self, raw: Dict) -> ToiletRecord:
        """
        Convert one raw place.

        Raises:
            ValueError / TypeError: If the record is not a mapping or its
                coordinates are not numeric
        """
        if not isinstance(raw, dict):
            raise TypeError(f"Expected a place dict, got {type(raw).__name__}")

        city = raw.get("city") or settings.DEFAULT_CITY
        address = raw.get("address") or settings.DEFAULT_ADDRESS
        is_open = raw.get("isOpen")

        rating = self._convert_rating(raw.get("rating"), raw.get("id"))
        facilities = raw.get("facilities") or settings.DEFAULT_FACILITIES
        if isinstance(facilities, str):
            facilities = [facilities]

        return ToiletRecord(
            id=str(raw.get("id") or uuid.uuid4().hex[:9]),
            name=raw.get("name") or settings.DEFAULT_NAME,
            address=address,
            city=city,
            district=raw.get("district") or raw.get("city") or settings.DEFAULT_DISTRICT,
            state=raw.get("state") or settings.DEFAULT_STATE,
            landmark=raw.get("landmark") or extract_landmark(raw.get("address") or ""),
            latitude=float(raw.get("latitude") or 0.0),
            longitude=float(raw.get("longitude") or 0.0),
            rating=rating,
            reviews=self._convert_reviews(raw.get("reviews") or [], raw.get("id")),
            is_open=True if is_open is None else bool(is_open),
            facilities=facilities,
            last_updated=utc_now_iso(),
            source=SOURCE_LIVE
        )

    def convert_all(self, raw_records: List[Dict]) -> List[ToiletRecord]:
        """Convert a batch, skipping records that cannot be converted at all."""
        records = []
        for raw in raw_records:
            try:
                records.append(self.convert(raw))
            except (TypeError, ValueError) as e:
                logger.error(f"Skipping unconvertible place record: {e}")
                continue

        logger.info(f"Converted {len(records)} of {len(raw_records)} place records")
        return records

    def _convert_rating(self, raw_rating, place_id) -> Optional[float]:
        """Numeric rating, or None so enrichment derives it from reviews."""
        if raw_rating is None:
            return None
        try:
            return float(raw_rating)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric rating {raw_rating!r} for place {place_id}")
            return None

    def _convert_reviews(self, raw_reviews: List[Dict], place_id) -> List[Review]:
        reviews = []
        for item in raw_reviews:
            try:
                reviews.append(Review.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Dropping invalid review for place {place_id}: {e}")
        return reviews

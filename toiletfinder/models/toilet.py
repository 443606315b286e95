"""
Toilet data models.

ToiletRecord is the normalized shape every place takes as soon as it enters
the system, whether it came from the live place source or the seed set.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from toiletfinder.models.review import Review, utc_now_iso

STATUS_GOOD = "Good"
STATUS_AVERAGE = "Average"
STATUS_BAD = "Bad"
CLEANLINESS_STATUSES = (STATUS_GOOD, STATUS_AVERAGE, STATUS_BAD)

SOURCE_LIVE = "live"
SOURCE_SEED = "seed"


@dataclass(frozen=True)
class ToiletRecord:
    """
    A public toilet with its reviews and derived cleanliness fields.

    rating and cleanliness_status are derived from reviews and are only
    recomputed by ReviewEnricher. A rating of None marks a live record that
    arrived without one. distance_km is set by the geo-filter.
    """
    id: str
    name: str
    address: str
    city: str
    district: str
    state: str
    landmark: str
    latitude: float
    longitude: float
    cleanliness_status: str = STATUS_AVERAGE
    rating: Optional[float] = None
    reviews: Tuple[Review, ...] = ()
    is_open: bool = True
    facilities: Tuple[str, ...] = ()
    last_updated: str = field(default_factory=utc_now_iso)
    source: str = SOURCE_LIVE
    distance_km: Optional[float] = None

    def __post_init__(self):
        if self.cleanliness_status not in CLEANLINESS_STATUSES:
            raise ValueError(
                f"Invalid cleanliness status: {self.cleanliness_status}. "
                f"Must be one of {', '.join(CLEANLINESS_STATUSES)}"
            )
        if self.source not in (SOURCE_LIVE, SOURCE_SEED):
            raise ValueError(f"Invalid source: {self.source}")
        # Accept lists from callers, store tuples
        object.__setattr__(self, "reviews", tuple(self.reviews))
        object.__setattr__(self, "facilities", tuple(self.facilities))

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "district": self.district,
            "state": self.state,
            "landmark": self.landmark,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "cleanlinessStatus": self.cleanliness_status,
            "rating": self.rating,
            "reviews": [review.to_dict() for review in self.reviews],
            "isOpen": self.is_open,
            "facilities": list(self.facilities),
            "lastUpdated": self.last_updated,
            "source": self.source
        }
        if self.distance_km is not None:
            data["distance"] = self.distance_km
        return data


@dataclass(frozen=True)
class GeoPoint:
    """Signed decimal-degree coordinate pair."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationContext:
    """
    Where the user is looking: a place name, a coordinate, or neither.

    At most one of place_name and coordinates is set.
    """
    place_name: Optional[str] = None
    coordinates: Optional[GeoPoint] = None

    def __post_init__(self):
        if self.place_name and self.coordinates is not None:
            raise ValueError("LocationContext takes a place name or coordinates, not both")

    @classmethod
    def everywhere(cls) -> "LocationContext":
        return cls()

    @classmethod
    def for_place(cls, place_name: str) -> "LocationContext":
        return cls(place_name=place_name)

    @classmethod
    def for_coordinates(cls, latitude: float, longitude: float) -> "LocationContext":
        return cls(coordinates=GeoPoint(latitude, longitude))

    @property
    def is_geo(self) -> bool:
        return self.coordinates is not None

    @property
    def is_text(self) -> bool:
        return bool(self.place_name) and self.coordinates is None

    def describe(self) -> str:
        """Label used in summaries and exports."""
        if self.is_geo:
            return "Near Your Location"
        if self.is_text:
            return self.place_name
        return "All Locations"

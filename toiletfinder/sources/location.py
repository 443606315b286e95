"""
Coordinate source adapter.

Any failure to obtain a position surfaces as CoordinatesUnavailable.
"""

import logging
from typing import Callable, Tuple

from toiletfinder.exceptions import CoordinatesUnavailable
from toiletfinder.models.toilet import GeoPoint

logger = logging.getLogger(__name__)


class CoordinateProvider:
    """Wraps a callable returning (latitude, longitude)."""

    def __init__(self, locate: Callable[[], Tuple[float, float]]):
        self._locate = locate

    def current_location(self) -> GeoPoint:
        """
        Current position.

        Raises:
            CoordinatesUnavailable: The lookup failed or returned an invalid position
        """
        try:
            latitude, longitude = self._locate()
            latitude, longitude = float(latitude), float(longitude)
        except CoordinatesUnavailable:
            raise
        except Exception as e:
            logger.error(f"Geolocation error: {e}")
            raise CoordinatesUnavailable(str(e)) from e

        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            raise CoordinatesUnavailable(f"Invalid position: ({latitude}, {longitude})")

        return GeoPoint(latitude, longitude)


class StaticCoordinateProvider(CoordinateProvider):
    """Fixed position, e.g. supplied on the command line."""

    def __init__(self, latitude: float, longitude: float):
        super().__init__(lambda: (latitude, longitude))

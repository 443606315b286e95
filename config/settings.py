"""
Configuration settings for Toilet Finder.

Centralized configuration for the pipeline, data sources and CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"
JOURNAL_PATH = DATA_ROOT / "user_reviews.json"

# Place source (Geoapify Places API)
GEOAPIFY_API_KEY = os.getenv("GEOAPIFY_API_KEY", "")
PLACES_API_URL = "https://api.geoapify.com/v2/places"
PLACES_CATEGORY = "amenity.toilet"
PLACES_RESULT_LIMIT = 20
PLACES_SEARCH_RADIUS_M = 10000
PLACES_TIMEOUT_SECONDS = 10
PLACES_MAX_RETRIES = 3

# Default search centre when no location is known (New Delhi)
DEFAULT_LATITUDE = 28.6139
DEFAULT_LONGITUDE = 77.2090

# Distance engine
EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 10.0

# Sentiment classifier
RATING_WEIGHT = 0.7
KEYWORD_WEIGHT = 0.3
GOOD_THRESHOLD = 0.65  # final score at or above -> Good
BAD_THRESHOLD = 0.35  # final score at or below -> Bad
RECENT_REVIEW_WINDOW = 5
RECENT_GOOD_RATING = 4.0
RECENT_BAD_RATING = 2.0

# Record defaults for incomplete source data
DEFAULT_NAME = "Public Toilet"
DEFAULT_ADDRESS = "Address not available"
DEFAULT_CITY = "Unknown City"
DEFAULT_DISTRICT = "Unknown District"
DEFAULT_STATE = "Unknown State"
DEFAULT_LANDMARK = "Public Area"
DEFAULT_FACILITIES = ["Basic Facilities"]

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "toiletfinder.log"

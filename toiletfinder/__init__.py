"""
Toilet Finder.

Find public toilets, rank them by crowd-sourced cleanliness, and record
reviews.
"""

__version__ = "0.1.0"

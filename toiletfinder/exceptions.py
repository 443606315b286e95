"""
Error taxonomy for Toilet Finder.

Empty results are not errors; see ranking.SelectionResult.
"""


class ToiletFinderError(Exception):
    """Base class for Toilet Finder errors."""


class SourceUnavailable(ToiletFinderError):
    """The place source failed or returned no records."""


class CoordinatesUnavailable(ToiletFinderError):
    """The device location could not be obtained."""

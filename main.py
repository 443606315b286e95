"""
Toilet Finder - Public Toilet Cleanliness Finder

CLI entry point for searching toilets and submitting reviews.
"""

import argparse
import logging
import sys

from toiletfinder.data.seed import SUPPORTED_LOCATIONS
from toiletfinder.exceptions import ToiletFinderError
from toiletfinder.journal.review_journal import ReviewJournal
from toiletfinder.models.toilet import LocationContext
from toiletfinder.orchestrator import ToiletFinder
from toiletfinder.pipeline.ranking import SORT_KEYS, SORT_RATING, available_sort_keys
from toiletfinder.pipeline.statistics import export_results
from toiletfinder.sources.location import StaticCoordinateProvider
from toiletfinder.sources.places import PlacesClient
import config.settings as settings

EMPTY_MESSAGES = {
    "no_data": "No toilet data available.",
    "outside_radius": "No toilets found within {radius:g}km of your location. Try a larger radius.",
    "no_locality_match": "No toilets found. Try adjusting your location.",
    "no_search_match": "No toilets match your search. Try adjusting your search criteria.",
}


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Toilet Finder - find clean public toilets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Toilets in Delhi, cleanest first
  python main.py --place Delhi --sort cleanliness

  # Toilets within 5 km of a position, nearest first
  python main.py --near 28.6139 77.2090 --radius-km 5 --sort distance

  # Place names with built-in data
  python main.py --list-places

  # Review a toilet
  python main.py --add-review 1 --rating 5 --text "Great and clean!"

Note: Set GEOAPIFY_API_KEY for live data; without it the built-in data set is used.
        """
    )

    location = parser.add_mutually_exclusive_group()
    location.add_argument("--place", default="", help="City or district name (e.g., Delhi)")
    location.add_argument(
        "--near",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="Search around this position instead of a place name"
    )

    parser.add_argument("--search", default="", help="Filter by name, address or landmark")
    parser.add_argument(
        "--sort",
        default=SORT_RATING,
        choices=SORT_KEYS,
        help=f"Sort order (default: {SORT_RATING}; distance requires --near)"
    )
    parser.add_argument(
        "--radius-km",
        type=float,
        default=settings.DEFAULT_RADIUS_KM,
        help=f"Radius for --near (default: {settings.DEFAULT_RADIUS_KM:g})"
    )
    parser.add_argument("--offline", action="store_true", help="Use the built-in data set only")

    parser.add_argument("--add-review", metavar="TOILET_ID", help="Submit a review for this toilet")
    parser.add_argument("--rating", type=int, choices=range(1, 6), help="Star rating for --add-review")
    parser.add_argument("--text", default="", help="Review text for --add-review")

    parser.add_argument("--list-places", action="store_true", help="List the supported place names and exit")
    parser.add_argument("--stats", action="store_true", help="Show cleanliness statistics")
    parser.add_argument("--export-dir", help="Write results to CSV in this directory")
    parser.add_argument(
        "--journal-path",
        default=str(settings.JOURNAL_PATH),
        help=f"User review journal (default: {settings.JOURNAL_PATH})"
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    return parser


def requested_location(args) -> LocationContext:
    if args.near:
        return LocationContext.for_coordinates(*args.near)
    return LocationContext.for_place(args.place)


def print_places():
    print("Supported places:")
    for name, state in SUPPORTED_LOCATIONS:
        print(f"  {name:<12} {state}")


def print_results(finder: ToiletFinder, result, radius_km: float):
    print(f"{len(result.records)} toilets found ({finder.location.describe()})")
    if result.used_fallback:
        print("Showing built-in data for this location.")
    print()

    if result.is_empty:
        print(EMPTY_MESSAGES[result.empty_reason].format(radius=radius_km))
        return

    for record in result.records:
        distance = f" {record.distance_km:.1f}km" if record.distance_km is not None else ""
        status = "Open" if record.is_open else "Closed"
        print(f"[{record.cleanliness_status:<7}] {record.rating:.1f}*{distance}  {record.name} (id {record.id})")
        print(f"          {record.address}, {record.city} - {record.landmark} - {status}")


def print_summary(summary):
    counts = summary.counts
    print()
    print(f"Cleanliness Overview - {summary.location}: {summary.verdict}")
    for status in ("Good", "Average", "Bad"):
        print(f"  {status:<8} {counts[status]:>3}  ({summary.percentages[status]:.0f}%)")
    print(f"  Average rating: {summary.average_rating:.1f}")


def main():
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if args.list_places:
        print_places()
        sys.exit(0)

    if args.add_review and args.rating is None:
        parser.error("--add-review requires --rating")
    if args.sort not in available_sort_keys(requested_location(args)):
        parser.error(f"--sort {args.sort} requires --near")

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    places_client = None
    if not args.offline:
        if settings.GEOAPIFY_API_KEY:
            places_client = PlacesClient()
        else:
            logger.warning("GEOAPIFY_API_KEY not set, using built-in data")

    try:
        finder = ToiletFinder(
            journal=ReviewJournal(args.journal_path),
            places_client=places_client,
            radius_km=args.radius_km
        )

        if args.add_review:
            finder.load()
            updated = finder.add_review(args.add_review, args.text, args.rating)
            print(
                f"Review saved for {updated.name}: "
                f"{updated.cleanliness_status}, {updated.rating:.1f}* "
                f"({len(updated.reviews)} reviews)"
            )
            sys.exit(0)

        if args.near:
            if not finder.use_current_location(StaticCoordinateProvider(*args.near)):
                print(finder.status_message)
                sys.exit(1)
        else:
            finder.load()
            finder.select_place(args.place)

        result = finder.results(search_term=args.search, sort_key=args.sort)

        if finder.status_message:
            print(finder.status_message)
        print_results(finder, result, args.radius_km)

        if args.stats:
            print_summary(finder.summary(result))

        if args.export_dir:
            output_path = export_results(result.records, args.export_dir, finder.location.describe())
            print(f"\nResults: {output_path}")

        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)

    except KeyError as e:
        logger.error(str(e))
        print(f"Error: {e.args[0]}")
        sys.exit(1)

    except (ToiletFinderError, ValueError, OSError) as e:
        logger.error(f"Toilet Finder failed: {e}", exc_info=True)
        print(f"Error: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()

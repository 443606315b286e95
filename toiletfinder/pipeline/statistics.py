"""
Cleanliness statistics and result export.

Counts toilets per cleanliness status for summary display and writes the
current result list to CSV.
"""

import json
import logging
import os
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Sequence

import pandas as pd

from toiletfinder.models.review import utc_now_iso
from toiletfinder.models.toilet import (
    ToiletRecord,
    CLEANLINESS_STATUSES,
    STATUS_GOOD,
    STATUS_AVERAGE,
    STATUS_BAD,
)
from toiletfinder.pipeline.rating import round_rating

logger = logging.getLogger(__name__)

VERDICT_EXCELLENT = "Excellent"
VERDICT_NEEDS_IMPROVEMENT = "Needs Improvement"
VERDICT_AVERAGE = "Average"

EXPORT_COLUMNS = [
    "ID", "Name", "Address", "City", "District", "State", "Landmark",
    "Latitude", "Longitude", "Status", "Rating", "Reviews", "Open",
    "Facilities", "Distance (km)", "Source"
]


def count_by_status(records: Sequence[ToiletRecord]) -> Dict[str, int]:
    """Number of records per cleanliness status; every status is present."""
    counts = Counter(record.cleanliness_status for record in records)
    return {status: counts.get(status, 0) for status in CLEANLINESS_STATUSES}


def overall_verdict(good: int, average: int, bad: int) -> str:
    """Headline verdict for a location from its status counts."""
    if good > bad + average:
        return VERDICT_EXCELLENT
    if bad > good + average:
        return VERDICT_NEEDS_IMPROVEMENT
    return VERDICT_AVERAGE


@dataclass
class CleanlinessSummary:
    """Status counts and headline figures for one result list."""
    location: str
    counts: Dict[str, int] = field(default_factory=dict)
    percentages: Dict[str, float] = field(default_factory=dict)
    verdict: str = VERDICT_AVERAGE
    average_rating: float = 0.0

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "total": self.total,
            "counts": dict(self.counts),
            "percentages": dict(self.percentages),
            "verdict": self.verdict,
            "average_rating": self.average_rating
        }


def summarize(records: Sequence[ToiletRecord], location: str = "All Locations") -> CleanlinessSummary:
    """
    Build the summary shown next to a result list.

    Percentages are 0 for an empty list. average_rating is the rounded mean
    of the records' ratings, ignoring records without one.
    """
    counts = count_by_status(records)
    total = sum(counts.values())

    percentages = {
        status: (counts[status] / total * 100 if total > 0 else 0.0)
        for status in CLEANLINESS_STATUSES
    }

    ratings = [record.rating for record in records if record.rating is not None]
    average_rating = round_rating(sum(ratings) / len(ratings)) if ratings else 0.0

    return CleanlinessSummary(
        location=location,
        counts=counts,
        percentages=percentages,
        verdict=overall_verdict(counts[STATUS_GOOD], counts[STATUS_AVERAGE], counts[STATUS_BAD]),
        average_rating=average_rating
    )


def results_frame(records: Sequence[ToiletRecord]) -> pd.DataFrame:
    """Tabular view of a result list, one row per toilet, in list order."""
    rows = [
        {
            "ID": r.id,
            "Name": r.name,
            "Address": r.address,
            "City": r.city,
            "District": r.district,
            "State": r.state,
            "Landmark": r.landmark,
            "Latitude": r.latitude,
            "Longitude": r.longitude,
            "Status": r.cleanliness_status,
            "Rating": r.rating,
            "Reviews": len(r.reviews),
            "Open": r.is_open,
            "Facilities": ", ".join(r.facilities),
            "Distance (km)": round(r.distance_km, 2) if r.distance_km is not None else None,
            "Source": r.source
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_results(
    records: Sequence[ToiletRecord],
    output_dir: str,
    location: str = "All Locations"
) -> str:
    """
    Write a result list to CSV with a metadata sidecar.

    Args:
        records: Ordered result list
        output_dir: Directory to write into (created if missing)
        location: Location label used in the file name and metadata

    Returns:
        Path to the generated CSV file
    """
    os.makedirs(output_dir, exist_ok=True)
    slug = re.sub(r"[^a-z0-9]+", "_", location.lower()).strip("_") or "results"
    output_path = os.path.join(output_dir, f"toilets_{slug}.csv")

    df = results_frame(records)
    df.to_csv(output_path, index=False)
    logger.info(f"Results saved to {output_path} ({len(df)} toilets)")

    metadata_path = output_path.replace(".csv", "_metadata.json")
    metadata = summarize(records, location).to_dict()
    metadata["generated_at"] = utc_now_iso()
    with open(metadata_path, 'w') as f:
        json.dump(metadata, f, indent=2)

    logger.info(f"Metadata saved to {metadata_path}")
    return output_path

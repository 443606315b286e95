"""
Seed data set.

Landmark toilets across Indian cities, used when the live place source is
unavailable or has nothing for a selected place. Reviews are generated
from a per-record seed so the set is identical on every run.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import List, Sequence

from toiletfinder.models.review import Review
from toiletfinder.models.toilet import ToiletRecord, SOURCE_SEED
from toiletfinder.pipeline.rating import aggregate_rating
from toiletfinder.pipeline.sentiment import classify

BIAS_POSITIVE = "positive"
BIAS_NEGATIVE = "negative"
BIAS_MIXED = "mixed"

POSITIVE_REVIEWS = [
    "Very clean and well-maintained toilet. Good facilities available.",
    "Excellent cleanliness standards. The staff maintains it regularly.",
    "Clean washroom with proper soap and water supply. Highly recommended.",
    "Well-maintained facility with good ventilation and cleanliness.",
    "Spotless and hygienic. Great job by the maintenance team.",
    "Clean toilet with all necessary amenities. Very satisfied.",
    "Impressive cleanliness level. The facility is well-managed.",
    "Very good condition with regular cleaning. Appreciated the effort."
]

NEGATIVE_REVIEWS = [
    "Very dirty and smelly. Needs immediate attention and cleaning.",
    "Poor maintenance and unhygienic conditions. Avoid if possible.",
    "Extremely dirty with no proper cleaning. Water supply issues too.",
    "Terrible condition. No soap, dirty floors, and bad smell.",
    "Unhygienic and poorly maintained. Needs major improvements.",
    "Dirty toilet with broken facilities. Not recommended at all.",
    "Poor cleanliness standards. The facility is in bad condition.",
    "Awful experience. Very dirty and unmaintained toilet."
]

MIXED_REVIEWS = [
    "Average cleanliness but could be better maintained.",
    "Okay condition but needs more frequent cleaning.",
    "Decent facility but some improvements needed.",
    "Not bad but has room for improvement in cleanliness.",
    "Acceptable but could use better maintenance.",
    "Okay experience, could be cleaner though."
]

REVIEW_PERIOD_START = datetime(2024, 1, 1, tzinfo=timezone.utc)
REVIEW_PERIOD_DAYS = 365

# (value, state) pairs offered in the place selector
SUPPORTED_LOCATIONS = [
    ("Delhi", "Delhi"),
    ("Mumbai", "Maharashtra"),
    ("Bangalore", "Karnataka"),
    ("Chennai", "Tamil Nadu"),
    ("Hyderabad", "Telangana"),
    ("Pune", "Maharashtra"),
    ("Kolkata", "West Bengal"),
    ("Ahmedabad", "Gujarat"),
    ("Jaipur", "Rajasthan"),
    ("Lucknow", "Uttar Pradesh"),
    ("Gurgaon", "Haryana"),
    ("Noida", "Uttar Pradesh"),
    ("Faridabad", "Haryana"),
    ("Ghaziabad", "Uttar Pradesh"),
    ("Thane", "Maharashtra"),
    ("Coimbatore", "Tamil Nadu"),
    ("Kochi", "Kerala"),
    ("Indore", "Madhya Pradesh"),
    ("Bhopal", "Madhya Pradesh"),
    ("Chandigarh", "Chandigarh"),
]


def generate_reviews(seed: str, count: int, bias: str = BIAS_MIXED) -> List[Review]:
    """
    Generate reproducible reviews for a seed record.

    Positive reviews rate 4-5, negative 1-2, mixed reviews 3; the mixed
    bias draws 40% positive, 30% mixed and 30% negative.
    """
    rng = random.Random(seed)
    reviews = []

    for _ in range(count):
        kind = bias
        if bias == BIAS_MIXED:
            roll = rng.random()
            kind = BIAS_POSITIVE if roll < 0.4 else (BIAS_MIXED if roll < 0.7 else BIAS_NEGATIVE)

        if kind == BIAS_POSITIVE:
            text, rating = rng.choice(POSITIVE_REVIEWS), rng.randint(4, 5)
        elif kind == BIAS_NEGATIVE:
            text, rating = rng.choice(NEGATIVE_REVIEWS), rng.randint(1, 2)
        else:
            text, rating = rng.choice(MIXED_REVIEWS), 3

        review_date = REVIEW_PERIOD_START + timedelta(minutes=rng.randrange(REVIEW_PERIOD_DAYS * 24 * 60))
        reviews.append(Review(
            text=text,
            rating=rating,
            date=review_date.isoformat().replace("+00:00", "Z")
        ))

    return reviews


def _seed_record(
    toilet_id: str,
    name: str,
    address: str,
    city: str,
    district: str,
    state: str,
    landmark: str,
    latitude: float,
    longitude: float,
    bias: str = BIAS_MIXED,
    facilities: Sequence[str] = (),
    is_open: bool = True
) -> ToiletRecord:
    count = random.Random(f"count-{toilet_id}").randint(3, 12)
    reviews = generate_reviews(f"reviews-{toilet_id}", count, bias)
    return ToiletRecord(
        id=toilet_id,
        name=name,
        address=address,
        city=city,
        district=district,
        state=state,
        landmark=landmark,
        latitude=latitude,
        longitude=longitude,
        cleanliness_status=classify(reviews),
        rating=aggregate_rating(reviews),
        reviews=reviews,
        is_open=is_open,
        facilities=facilities,
        last_updated=max(review.date for review in reviews),
        source=SOURCE_SEED
    )


def load_seed_records() -> List[ToiletRecord]:
    """The full seed set, freshly built."""
    return [
        # Delhi
        _seed_record("1", "Connaught Place Public Toilet", "Block A, Connaught Place", "Delhi", "New Delhi",
                     "Delhi", "Connaught Place Metro Station", 28.6315, 77.2167, BIAS_POSITIVE,
                     ["WiFi", "Disabled Access", "Electric Hand Dryer"]),
        _seed_record("2", "India Gate Public Facility", "India Gate Circle", "Delhi", "New Delhi",
                     "Delhi", "India Gate Monument", 28.6129, 77.2295, BIAS_MIXED, ["Disabled Access"]),
        _seed_record("3", "Red Fort Public Washroom", "Red Fort Complex", "Delhi", "New Delhi",
                     "Delhi", "Red Fort", 28.6562, 77.2410, BIAS_NEGATIVE, [], is_open=False),

        # Mumbai
        _seed_record("4", "Gateway of India Public Toilet", "Apollo Bunder, Colaba", "Mumbai", "Mumbai City",
                     "Maharashtra", "Gateway of India", 18.9220, 72.8347, BIAS_POSITIVE,
                     ["WiFi", "Electric Hand Dryer"]),
        _seed_record("5", "Marine Drive Public Facility", "Netaji Subhashchandra Bose Road", "Mumbai",
                     "Mumbai City", "Maharashtra", "Marine Drive", 18.9443, 72.8231, BIAS_MIXED,
                     ["Disabled Access"]),
        _seed_record("6", "Juhu Beach Public Washroom", "Juhu Beach, Juhu", "Mumbai", "Mumbai Suburban",
                     "Maharashtra", "Juhu Beach", 19.0968, 72.8265, BIAS_NEGATIVE),

        # Bangalore
        _seed_record("7", "Cubbon Park Public Toilet", "Cubbon Park, Kasturba Road", "Bangalore",
                     "Bangalore Urban", "Karnataka", "Cubbon Park", 12.9767, 77.5993, BIAS_POSITIVE,
                     ["WiFi", "Disabled Access", "Electric Hand Dryer"]),
        _seed_record("8", "Lalbagh Botanical Garden Facility", "Lalbagh Main Road", "Bangalore",
                     "Bangalore Urban", "Karnataka", "Lalbagh Botanical Garden", 12.9507, 77.5848,
                     BIAS_MIXED, ["Disabled Access"]),

        # Chennai
        _seed_record("9", "Marina Beach Public Toilet", "Marina Beach Road", "Chennai", "Chennai",
                     "Tamil Nadu", "Marina Beach", 13.0475, 80.2824, BIAS_MIXED, ["Disabled Access"]),
        _seed_record("10", "Central Railway Station Facility", "Chennai Central Railway Station", "Chennai",
                     "Chennai", "Tamil Nadu", "Chennai Central", 13.0827, 80.2707, BIAS_POSITIVE,
                     ["WiFi", "Electric Hand Dryer"]),

        # Hyderabad
        _seed_record("11", "Charminar Public Washroom", "Charminar Area, Old City", "Hyderabad", "Hyderabad",
                     "Telangana", "Charminar", 17.3616, 78.4747, BIAS_NEGATIVE),
        _seed_record("12", "Hussain Sagar Lake Facility", "Tank Bund Road", "Hyderabad", "Hyderabad",
                     "Telangana", "Hussain Sagar Lake", 17.4239, 78.4738, BIAS_POSITIVE,
                     ["WiFi", "Disabled Access"]),

        # Pune
        _seed_record("13", "Shaniwar Wada Public Toilet", "Shaniwar Peth", "Pune", "Pune",
                     "Maharashtra", "Shaniwar Wada", 18.5196, 73.8553, BIAS_MIXED, ["Disabled Access"]),

        # Kolkata
        _seed_record("14", "Victoria Memorial Public Facility", "Victoria Memorial Hall, Queens Way", "Kolkata",
                     "Kolkata", "West Bengal", "Victoria Memorial", 22.5448, 88.3426, BIAS_POSITIVE,
                     ["WiFi", "Electric Hand Dryer"]),
        _seed_record("15", "Howrah Bridge Area Toilet", "Strand Road", "Kolkata", "Kolkata",
                     "West Bengal", "Howrah Bridge", 22.5958, 88.3468, BIAS_NEGATIVE, [], is_open=False),

        # Ahmedabad
        _seed_record("16", "Sabarmati Ashram Public Toilet", "Ashram Road", "Ahmedabad", "Ahmedabad",
                     "Gujarat", "Sabarmati Ashram", 23.0615, 72.5804, BIAS_POSITIVE,
                     ["Disabled Access", "Electric Hand Dryer"]),

        # Jaipur
        _seed_record("17", "Hawa Mahal Public Washroom", "Hawa Mahal Road, Badi Choupad", "Jaipur", "Jaipur",
                     "Rajasthan", "Hawa Mahal", 26.9239, 75.8267, BIAS_MIXED, ["Disabled Access"]),
        _seed_record("18", "City Palace Public Facility", "Jaleb Chowk, City Palace", "Jaipur", "Jaipur",
                     "Rajasthan", "City Palace", 26.9255, 75.8235, BIAS_NEGATIVE),

        # Lucknow
        _seed_record("19", "Bara Imambara Public Toilet", "Husainabad", "Lucknow", "Lucknow",
                     "Uttar Pradesh", "Bara Imambara", 26.8695, 80.9177, BIAS_MIXED, ["Disabled Access"]),

        # Gurgaon
        _seed_record("20", "Cyber City Public Facility", "DLF Cyber City, Phase 2", "Gurgaon", "Gurgaon",
                     "Haryana", "DLF Cyber City", 28.4955, 77.0910, BIAS_POSITIVE,
                     ["WiFi", "Disabled Access", "Electric Hand Dryer"]),
    ]

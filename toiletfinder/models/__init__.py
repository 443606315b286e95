"""
Data models for Toilet Finder.

- Review / UserReviewEntry: reviews and the journal records that carry them
- ToiletRecord: normalized toilet with derived cleanliness fields
- GeoPoint / LocationContext: where the user is looking
"""

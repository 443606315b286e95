"""
Cleanliness classification and ranking pipeline.

Stages:
- Distance Engine
- Sentiment Classifier
- Aggregate Rating Calculator
- Record Merge & Enrichment
- Geo-Filter & Ranker
- Statistics (status counts and export)
"""

"""
Review Journal Module.

Append-only persistence for user-submitted reviews.
"""

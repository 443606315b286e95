"""
Static seed data used as a fallback for the live place source.
"""

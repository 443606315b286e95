"""
Configuration package for Toilet Finder.
"""

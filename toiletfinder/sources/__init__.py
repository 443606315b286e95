"""
External collaborators: the place source and the coordinate source.
"""

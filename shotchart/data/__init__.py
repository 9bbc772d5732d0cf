"""
Shot data sources.
"""

from .shot_store import ShotDataError, fetch_shots, load_shots_json

__all__ = [
    'ShotDataError',
    'fetch_shots',
    'load_shots_json',
]

"""
Shot Chart Analysis Modules.
"""

from .geometry import CircleBounds, PolygonBounds, point_in_circle, point_in_polygon
from .court_regions import (
    DEFAULT_REGION_CODE,
    CourtRegion,
    ShotValue,
    build_court_regions,
    classify_shot,
)
from .shot_stats import RegionStats, ShotRecord, ShotSummary, aggregate, summarize
from .color_bands import ColorTier, color_for_percentage

__all__ = [
    'CircleBounds',
    'PolygonBounds',
    'point_in_circle',
    'point_in_polygon',
    'DEFAULT_REGION_CODE',
    'CourtRegion',
    'ShotValue',
    'build_court_regions',
    'classify_shot',
    'RegionStats',
    'ShotRecord',
    'ShotSummary',
    'aggregate',
    'summarize',
    'ColorTier',
    'color_for_percentage',
]

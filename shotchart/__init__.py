"""
Shot Chart Heatmap Package.
"""

from .analysis.court_regions import build_court_regions, classify_shot
from .analysis.shot_stats import ShotRecord, aggregate, summarize
from .analysis.color_bands import color_for_percentage
from .visualization.heatmap_renderer import render_heatmap

__all__ = [
    'build_court_regions',
    'classify_shot',
    'ShotRecord',
    'aggregate',
    'summarize',
    'color_for_percentage',
    'render_heatmap',
]

"""
Shot Chart Visualization Modules.
"""

from .heatmap_renderer import render_heatmap, save_heatmap

__all__ = [
    'render_heatmap',
    'save_heatmap',
]

"""
Colour tiers for the shot-chart heatmap.

A region's make percentage is bucketed into one of four tiers, checked
top-down with the first match winning:

    pct >= 50        good           green   #22c55e
    40 <= pct < 50   average        amber   #fbbf24
    30 <= pct < 40   below-average  orange  #f97316
    pct < 30         poor           red     #ef4444
"""

from __future__ import annotations

from enum import Enum


class ColorTier(str, Enum):
    GOOD = "good"
    AVERAGE = "average"
    BELOW_AVERAGE = "below-average"
    POOR = "poor"


# (lower bound inclusive, tier), highest first
_BANDS: list[tuple[float, ColorTier]] = [
    (50.0, ColorTier.GOOD),
    (40.0, ColorTier.AVERAGE),
    (30.0, ColorTier.BELOW_AVERAGE),
]

TIER_HEX: dict[ColorTier, str] = {
    ColorTier.GOOD:          "#22c55e",
    ColorTier.AVERAGE:       "#fbbf24",
    ColorTier.BELOW_AVERAGE: "#f97316",
    ColorTier.POOR:          "#ef4444",
}


def color_for_percentage(pct: float) -> ColorTier:
    """Map a make percentage (0-100) to its colour tier."""
    for lower, tier in _BANDS:
        if pct >= lower:
            return tier
    return ColorTier.POOR


def hex_to_bgr(hex_colour: str) -> tuple[int, int, int]:
    """'#rrggbb' → (b, g, r) for OpenCV."""
    h = hex_colour.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return b, g, r


def tier_bgr(tier: ColorTier) -> tuple[int, int, int]:
    return hex_to_bgr(TIER_HEX[tier])

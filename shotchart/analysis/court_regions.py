"""
shotchart/analysis/court_regions.py — Half-court region table and shot classifier.

═══════════════════════════════════════════════════════════════════════════════
COORDINATE SYSTEM
═══════════════════════════════════════════════════════════════════════════════

Regions are laid out on a reference canvas of 800 × 600 px and scaled to the
requested court size. The basket sits near the bottom baseline:

  x=400     Centre line (width / 2)
  y=530     Basket / restricted area centre
  y=40      Top court boundary (40 px margin on every side)

═══════════════════════════════════════════════════════════════════════════════
REGION LAYOUT (reference pixels)
═══════════════════════════════════════════════════════════════════════════════

  y= 40  ┌──────────────────────────────────────────────┐
         │                   D3 (Deep 3)                │
  y=200  │      ╱──────────── AB3 ──────────────╲       │
  y=280  ├──────────┬─────────────────┬──────────────────┤
         │   W3L    │       MRT       │       W3R        │
  y=350  │     ┌────┤                 ├────┐             │
         │     │MRL │                 │MRR │             │
  y=450  ├─────┤    ├─────────────────┤    ├─────────────┤
         │ C3L │    │   PC   (RA)     │    │     C3R     │
  y=530  └─────┴────┴─────────────────┴────┴─────────────┘
        x=50  140  240               560  660          750

  RA is the one circle (centre 400,530, radius 40) and sits on top of PC.
  It is listed first, so table order resolves the overlap in its favour.
  W3L / W3R are L-shaped and wrap around the mid-range boxes down to the
  top of the corner threes.

Anything that lands in no region (outside the court outline, the sliver
between the baseline and the regions, etc.) is reported as MRT.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from shotchart.analysis.geometry import Bounds, CircleBounds, PolygonBounds, bounds_contains

logger = logging.getLogger(__name__)


REFERENCE_WIDTH = 800
REFERENCE_HEIGHT = 600

# Region a shot is assigned to when nothing else contains it
DEFAULT_REGION_CODE = "MRT"


class ShotValue(str, Enum):
    TWO_POINT = "2PT"
    THREE_POINT = "3PT"


# ── Region dataclass ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CourtRegion:
    """
    A named zone of the half court.

    Attributes:
        code:        Short identifier, e.g. "C3L"
        name:        Human-readable label, e.g. "Corner 3 Left"
        shot_value:  Scoring value of any shot landing here (authoritative)
        bounds:      PolygonBounds or CircleBounds in canvas pixels
    """
    code: str
    name: str
    shot_value: ShotValue
    bounds: Bounds

    def contains(self, x: float, y: float) -> bool:
        return bounds_contains(self.bounds, x, y)

    def centroid(self) -> tuple[float, float]:
        return self.bounds.centroid()


# ── Region registry ───────────────────────────────────────────────────────────

def _rect(x1: float, y1: float, x2: float, y2: float) -> PolygonBounds:
    return PolygonBounds(((x1, y1), (x2, y1), (x2, y2), (x1, y2)))


# (code, name, value, bounds) on the 800 × 600 reference canvas, in table order
_REFERENCE_REGIONS: list[tuple[str, str, ShotValue, Bounds]] = [
    ("RA",  "Restricted Area", ShotValue.TWO_POINT, CircleBounds(400, 530, 40)),
    ("PC",  "Paint Center",    ShotValue.TWO_POINT, _rect(240, 450, 560, 530)),
    ("MRL", "Mid-Range Left",  ShotValue.TWO_POINT, _rect(140, 350, 240, 530)),
    ("MRR", "Mid-Range Right", ShotValue.TWO_POINT, _rect(560, 350, 660, 530)),
    ("MRT", "Mid-Range Top",   ShotValue.TWO_POINT, _rect(240, 280, 560, 450)),
    ("C3L", "Corner 3 Left",   ShotValue.THREE_POINT, _rect(50, 450, 140, 530)),
    ("C3R", "Corner 3 Right",  ShotValue.THREE_POINT, _rect(660, 450, 750, 530)),
    ("W3L", "Wing 3 Left",     ShotValue.THREE_POINT, PolygonBounds((
        (50, 280), (240, 280), (240, 350), (140, 350), (140, 450), (50, 450),
    ))),
    ("W3R", "Wing 3 Right",    ShotValue.THREE_POINT, PolygonBounds((
        (560, 280), (750, 280), (750, 450), (660, 450), (660, 350), (560, 350),
    ))),
    ("AB3", "Above Break 3",   ShotValue.THREE_POINT, PolygonBounds((
        (160, 200), (640, 200), (750, 280), (50, 280),
    ))),
    ("D3",  "Deep 3",          ShotValue.THREE_POINT, PolygonBounds((
        (40, 40), (760, 40), (760, 280), (750, 280),
        (640, 200), (160, 200), (50, 280), (40, 280),
    ))),
]


def build_court_regions(
    width: float = REFERENCE_WIDTH,
    height: float = REFERENCE_HEIGHT,
) -> tuple[CourtRegion, ...]:
    """
    Build the 11-region table for a court canvas of `width` × `height` px.

    Polygon vertices scale independently on each axis; the restricted-area
    radius scales with the smaller factor so it stays a circle.

    Raises:
        ValueError: if either dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Court dimensions must be positive, got {width}x{height}")

    sx = width / REFERENCE_WIDTH
    sy = height / REFERENCE_HEIGHT

    regions = []
    for code, name, value, bounds in _REFERENCE_REGIONS:
        if isinstance(bounds, CircleBounds):
            scaled: Bounds = CircleBounds(bounds.center_x * sx,
                                          bounds.center_y * sy,
                                          bounds.radius * min(sx, sy))
        else:
            scaled = bounds.scaled(sx, sy)
        regions.append(CourtRegion(code, name, value, scaled))
    return tuple(regions)


# Table for the default 800 × 600 canvas
DEFAULT_REGIONS: tuple[CourtRegion, ...] = build_court_regions()


# ── Public classifier ─────────────────────────────────────────────────────────

def classify_region(x: float, y: float, regions: Iterable[CourtRegion]) -> Optional[CourtRegion]:
    """
    Return the first region (in table order) that contains (x, y), or None.

    Overlapping regions are resolved purely by table order: the earlier
    entry wins.
    """
    for region in regions:
        if region.contains(x, y):
            return region
    return None


def classify_shot(
    x: float,
    y: float,
    regions: Iterable[CourtRegion],
    default_code: str = DEFAULT_REGION_CODE,
) -> str:
    """
    Map a shot coordinate to a region code.

    Returns `default_code` (Mid-Range Top) when no region contains the
    point, so classification always succeeds.

    Example:
        >>> classify_shot(95, 490, build_court_regions())
        'C3L'
        >>> classify_shot(-50, -50, build_court_regions())
        'MRT'
    """
    region = classify_region(x, y, regions)
    if region is None:
        logger.debug(f"({x:.1f}, {y:.1f}) outside every region, using {default_code}")
        return default_code
    return region.code


def region_by_code(regions: Iterable[CourtRegion]) -> dict[str, CourtRegion]:
    """Lookup table keyed by region code. First definition wins on duplicates."""
    lookup: dict[str, CourtRegion] = {}
    for region in regions:
        lookup.setdefault(region.code, region)
    return lookup


# ── Debug / inspection ────────────────────────────────────────────────────────

def print_region_table(regions: Sequence[CourtRegion] = DEFAULT_REGIONS) -> None:
    """Print a summary table of all regions with their bounds."""
    header = f"{'Code':<5} {'Name':<18} {'Value':<5} {'Shape':<8} {'Centroid':>16}"
    print(header)
    print("-" * len(header))
    for r in regions:
        shape = "circle" if isinstance(r.bounds, CircleBounds) else "polygon"
        cx, cy = r.centroid()
        print(f"{r.code:<5} {r.name:<18} {r.shot_value.value:<5} {shape:<8} ({cx:>6.1f}, {cy:>6.1f})")


if __name__ == "__main__":
    print_region_table()
    print(f"\nTotal regions: {len(DEFAULT_REGIONS)}")
    test_cases = [
        (400, 525, "RA"),
        (300, 470, "PC"),
        (190, 400, "MRL"),
        (610, 400, "MRR"),
        (400, 380, "MRT"),
        (95,  490, "C3L"),
        (705, 490, "C3R"),
        (90,  400, "W3L"),
        (710, 400, "W3R"),
        (400, 250, "AB3"),
        (400, 100, "D3"),
        (5,   5,   "MRT"),
    ]
    print("\nSanity checks:")
    all_ok = True
    for cx, cy, expected in test_cases:
        result = classify_shot(cx, cy, DEFAULT_REGIONS)
        ok = "✓" if result == expected else "✗"
        if result != expected:
            all_ok = False
        print(f"  {ok}  classify_shot({cx}, {cy}) = {result!r:6s}  (expected {expected!r})")
    if all_ok:
        print("\n✓ All region checks passed.")
    else:
        print("\n✗ Some region checks FAILED — review reference coordinates.")

"""
shotchart/visualization/heatmap_renderer.py — Court heatmap / shot chart renderer.

Draws onto a plain BGR numpy image:
  - Half-court lines (boundary, paint, free-throw circle, three-point line, rim)
  - Heatmap view: each region with at least one attempt filled in its
    colour tier, with a "makes/attempts  pct%" label at the region centre
  - Shots view: one dot per shot, green for a make and red for a miss

Every call redraws the whole image from the shots and region table it is
given; nothing is cached between calls.

Usage (CLI): see shotchart/heatmap_job.py
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable, Optional, Sequence

import cv2
import numpy as np

from shotchart.analysis.color_bands import color_for_percentage, hex_to_bgr, tier_bgr
from shotchart.analysis.court_regions import CourtRegion, build_court_regions
from shotchart.analysis.geometry import CircleBounds, PolygonBounds
from shotchart.analysis.shot_stats import RegionStats, ShotRecord, aggregate

logger = logging.getLogger(__name__)

VIEW_MODES = ("heatmap", "shots")

# Court colours (BGR)
BACKGROUND_COLOUR = hex_to_bgr("#1a4d3a")
COURT_COLOUR = hex_to_bgr("#2d5b47")
LINE_COLOUR = (255, 255, 255)
RIM_COLOUR = hex_to_bgr("#ff6b35")
MADE_COLOUR = hex_to_bgr("#22c55e")
MISSED_COLOUR = hex_to_bgr("#ef4444")

COURT_MARGIN = 40
REGION_ALPHA = 0.3
LABEL_BG_ALPHA = 0.5
SHOT_MARKER_RADIUS = 4


def _pt(x: float, y: float) -> tuple[int, int]:
    return int(round(x)), int(round(y))


def new_canvas(width: int, height: int) -> np.ndarray:
    """Blank BGR canvas filled with the background colour."""
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[:] = BACKGROUND_COLOUR
    return canvas


# ── Court lines ───────────────────────────────────────────────────────────────

def _radius(r: float) -> int:
    return max(0, int(round(r)))


def draw_court(canvas: np.ndarray) -> None:
    """
    Draw the half-court markings, scaled to the canvas size.

    Canvases under 160 px on a side get a margin of a quarter of the shorter side
    instead of COURT_MARGIN.
    """
    h, w = canvas.shape[:2]
    margin = min(COURT_MARGIN, w / 4, h / 4)
    court_w = w - 2 * margin
    court_h = h - 2 * margin

    center_x = w / 2
    baseline_y = h - margin
    key_w = court_w * 0.2
    key_h = court_h * 0.35
    three_r = court_w * 0.28
    ft_r = key_w * 0.5
    arc_y = baseline_y - key_h * 0.2

    # Court surface and boundary
    cv2.rectangle(canvas, _pt(margin, margin), _pt(w - margin, baseline_y),
                  COURT_COLOUR, -1)
    cv2.rectangle(canvas, _pt(margin, margin), _pt(w - margin, baseline_y),
                  LINE_COLOUR, 3, cv2.LINE_AA)

    # Half-court line and centre circle
    cv2.line(canvas, _pt(margin, h / 2), _pt(w - margin, h / 2), LINE_COLOUR, 2, cv2.LINE_AA)
    cv2.circle(canvas, _pt(center_x, h / 2), _radius(court_w * 0.08), LINE_COLOUR, 2, cv2.LINE_AA)

    # Paint and free-throw circle
    cv2.rectangle(canvas, _pt(center_x - key_w / 2, baseline_y - key_h), _pt(center_x + key_w / 2, baseline_y),
                  LINE_COLOUR, 2, cv2.LINE_AA)
    cv2.circle(canvas, _pt(center_x, baseline_y - key_h), _radius(ft_r), LINE_COLOUR, 2, cv2.LINE_AA)

    # Three-point arc (upper half) with straight corner lines down to the baseline
    r = _radius(three_r)
    cv2.ellipse(canvas, _pt(center_x, arc_y), (r, r), 0, 180, 360, LINE_COLOUR, 2, cv2.LINE_AA)
    for side in (-1, 1):
        x = center_x + side * three_r
        cv2.line(canvas, _pt(x, arc_y), _pt(x, baseline_y), LINE_COLOUR, 2, cv2.LINE_AA)

    # Backboard, rim, restricted arc
    cv2.rectangle(canvas, _pt(center_x - 25, baseline_y - 8), _pt(center_x + 25, baseline_y - 5),
                  LINE_COLOUR, -1)
    cv2.circle(canvas, _pt(center_x, baseline_y - 16), 8, RIM_COLOUR, -1, cv2.LINE_AA)
    cv2.circle(canvas, _pt(center_x, baseline_y - 16), 8, LINE_COLOUR, 2, cv2.LINE_AA)
    cv2.ellipse(canvas, _pt(center_x, baseline_y - 20), (20, 20), 0, 180, 360, LINE_COLOUR, 2, cv2.LINE_AA)


# ── Region overlay ────────────────────────────────────────────────────────────

def _fill_region(img: np.ndarray, region: CourtRegion, colour, thickness: int = -1) -> bool:
    bounds = region.bounds
    if isinstance(bounds, CircleBounds):
        if bounds.radius <= 0:
            return False
        cv2.circle(img, _pt(bounds.center_x, bounds.center_y), int(round(bounds.radius)),
                   colour, thickness, cv2.LINE_AA)
        return True
    if isinstance(bounds, PolygonBounds) and len(bounds.vertices) >= 3:
        pts = np.array(bounds.vertices, dtype=np.float64).round().astype(np.int32)
        if thickness < 0:
            cv2.fillPoly(img, [pts], colour, cv2.LINE_AA)
        else:
            cv2.polylines(img, [pts], isClosed=True, color=colour, thickness=thickness, lineType=cv2.LINE_AA)
        return True
    logger.warning(f"Region {region.code} has unusable bounds, not drawn")
    return False


def _draw_label(canvas: np.ndarray, lines: list[str], cx: float, cy: float) -> None:
    """Centred multi-line label on a half-transparent dark box."""
    font = cv2.FONT_HERSHEY_SIMPLEX
    scale = 0.4
    thickness = 1
    pad = 4
    sizes = [cv2.getTextSize(t, font, scale, thickness)[0] for t in lines]
    line_h = max(th for _, th in sizes) + pad
    box_w = max(tw for tw, _ in sizes) + 2 * pad
    box_h = line_h * len(lines) + pad

    x0 = int(round(cx - box_w / 2))
    y0 = int(round(cy - box_h / 2))
    bg = canvas.copy()
    cv2.rectangle(bg, (x0, y0), (x0 + box_w, y0 + box_h), (0, 0, 0), -1)
    cv2.addWeighted(bg, LABEL_BG_ALPHA, canvas, 1 - LABEL_BG_ALPHA, 0, canvas)

    for i, (text, (tw, th)) in enumerate(zip(lines, sizes)):
        y = y0 + pad + line_h * i + th
        cv2.putText(canvas, text, (int(round(cx - tw / 2)), y), font, scale,
                    (255, 255, 255), thickness, cv2.LINE_AA)


def draw_region_overlay(
    canvas: np.ndarray,
    regions: Sequence[CourtRegion],
    stats: Iterable[RegionStats],
    alpha: float = REGION_ALPHA,
) -> int:
    """
    Fill every region that has attempts with its colour tier and label it.

    Returns:
        Number of regions drawn.
    """
    by_code = {s.region_code: s for s in stats if s.attempts > 0}
    overlay = canvas.copy()
    drawn: list[tuple[CourtRegion, RegionStats]] = []

    for region in regions:
        region_stats = by_code.get(region.code)
        if region_stats is None:
            continue
        colour = tier_bgr(color_for_percentage(region_stats.percentage))
        if _fill_region(overlay, region, colour):
            drawn.append((region, region_stats))

    cv2.addWeighted(overlay, alpha, canvas, 1 - alpha, 0, canvas)

    for region, region_stats in drawn:
        _fill_region(canvas, region, LINE_COLOUR, thickness=1)
    for region, region_stats in drawn:
        cx, cy = region.centroid()
        _draw_label(canvas,
                    [f"{region_stats.makes}/{region_stats.attempts}",
                     f"{region_stats.percentage:.1f}%"],
                    cx, cy)
    return len(drawn)


# ── Shot markers ──────────────────────────────────────────────────────────────

def draw_shot_markers(canvas: np.ndarray, shots: Iterable[ShotRecord],
                      radius: int = SHOT_MARKER_RADIUS) -> int:
    """Draw one dot per shot. Returns the number of markers drawn."""
    count = 0
    for shot in shots:
        if not (math.isfinite(shot.court_x) and math.isfinite(shot.court_y)):
            continue
        centre = _pt(shot.court_x, shot.court_y)
        cv2.circle(canvas, centre, radius, MADE_COLOUR if shot.made else MISSED_COLOUR, -1, cv2.LINE_AA)
        cv2.circle(canvas, centre, radius, LINE_COLOUR, 1, cv2.LINE_AA)
        count += 1
    return count


# ── Main renderer ─────────────────────────────────────────────────────────────

def render_heatmap(
    shots: Sequence[ShotRecord],
    regions: Optional[Sequence[CourtRegion]] = None,
    width: int = 800,
    height: int = 600,
    view_mode: str = "heatmap",
    show_stats: bool = True,
) -> np.ndarray:
    """
    Render the court with either the region heatmap or individual shots.

    Args:
        shots:       Shot records to plot
        regions:     Region table (default: build_court_regions(width, height))
        width:       Canvas width in px
        height:      Canvas height in px
        view_mode:   "heatmap" or "shots"
        show_stats:  Draw region fills and labels (heatmap view only)

    Returns:
        BGR image of shape (height, width, 3)
    """
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode {view_mode!r}, expected one of {VIEW_MODES}")
    if regions is None:
        regions = build_court_regions(width, height)

    canvas = new_canvas(width, height)
    draw_court(canvas)

    if view_mode == "heatmap":
        if show_stats:
            n = draw_region_overlay(canvas, regions, aggregate(shots, regions))
            logger.info(f"Heatmap: {len(shots)} shots across {n} regions")
    else:
        n = draw_shot_markers(canvas, shots)
        logger.info(f"Shot chart: {n} markers")
    return canvas


def save_heatmap(image: np.ndarray, path: str | Path) -> Path:
    """Write the rendered image to disk (format from the file extension, PNG usually)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), image):
        raise RuntimeError(f"Could not write image to {path}")
    logger.info(f"Heatmap saved to {path}")
    return path

"""
Heatmap / shot chart rendering.

Usage:
    pytest tests/test_heatmap_renderer.py
"""
import sys
from pathlib import Path

import cv2
import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from shotchart.analysis.color_bands import ColorTier, tier_bgr
from shotchart.analysis.court_regions import CourtRegion, ShotValue, build_court_regions
from shotchart.analysis.geometry import PolygonBounds
from shotchart.analysis.shot_stats import RegionStats, ShotRecord, aggregate
from shotchart.visualization.heatmap_renderer import (
    BACKGROUND_COLOUR,
    MADE_COLOUR,
    MISSED_COLOUR,
    draw_region_overlay,
    draw_shot_markers,
    new_canvas,
    render_heatmap,
    save_heatmap,
)

REGIONS = build_court_regions(800, 600)

SHOTS = [
    ShotRecord("a", 90, 480, True),
    ShotRecord("b", 100, 500, True),
    ShotRecord("c", 120, 470, False),
    ShotRecord("d", 300, 470, True),
    ShotRecord("e", 500, 490, False),
]


def test_canvas_shape_and_background():
    canvas = new_canvas(320, 240)
    assert canvas.shape == (240, 320, 3)
    assert canvas.dtype == np.uint8
    assert tuple(canvas[0, 0]) == BACKGROUND_COLOUR


@pytest.mark.parametrize("view", ["heatmap", "shots"])
def test_render_shape(view):
    img = render_heatmap(SHOTS, REGIONS, width=800, height=600, view_mode=view)
    assert img.shape == (600, 800, 3)


def test_default_regions_follow_canvas_size():
    img = render_heatmap(SHOTS, width=400, height=300)
    assert img.shape == (300, 400, 3)


def test_unknown_view_mode():
    with pytest.raises(ValueError):
        render_heatmap(SHOTS, REGIONS, view_mode="3d")


def test_empty_shots_render_plain_court():
    heat = render_heatmap([], REGIONS)
    no_stats = render_heatmap(SHOTS, REGIONS, show_stats=False)
    assert np.array_equal(heat, no_stats)


def test_overlay_changes_only_played_regions():
    plain = render_heatmap([], REGIONS)
    heat = render_heatmap(SHOTS, REGIONS)
    assert not np.array_equal(plain, heat)
    # Deep 3 had no attempts, so its interior is untouched
    assert np.array_equal(plain[120, 400], heat[120, 400])


def test_overlay_tint_matches_tier():
    canvas = new_canvas(100, 100)
    square = CourtRegion("SQ", "Square", ShotValue.TWO_POINT,
                         PolygonBounds(((10, 10), (90, 10), (90, 90), (10, 90))))
    stats = [RegionStats("SQ", "Square", ShotValue.TWO_POINT, attempts=10, makes=1)]
    drawn = draw_region_overlay(canvas, [square], stats, alpha=1.0)
    assert drawn == 1
    # Away from the centred label, the fill is pure "poor" red
    assert tuple(int(v) for v in canvas[20, 20]) == tier_bgr(ColorTier.POOR)


def test_overlay_skips_regions_without_attempts():
    canvas = new_canvas(100, 100)
    before = canvas.copy()
    stats = [RegionStats("C3L", "Corner 3 Left", ShotValue.THREE_POINT, attempts=0, makes=0)]
    assert draw_region_overlay(canvas, REGIONS, stats) == 0
    assert np.array_equal(canvas, before)


def test_overlay_skips_malformed_bounds():
    canvas = new_canvas(100, 100)
    broken = CourtRegion("BAD", "Broken", ShotValue.TWO_POINT, PolygonBounds(((1, 1),)))
    stats = [RegionStats("BAD", "Broken", ShotValue.TWO_POINT, attempts=2, makes=1)]
    assert draw_region_overlay(canvas, [broken], stats) == 0


def test_shot_markers_colours():
    canvas = new_canvas(100, 100)
    n = draw_shot_markers(canvas, [ShotRecord("m", 20, 20, True), ShotRecord("x", 70, 70, False)])
    assert n == 2
    assert tuple(int(v) for v in canvas[20, 20]) == MADE_COLOUR
    assert tuple(int(v) for v in canvas[70, 70]) == MISSED_COLOUR


def test_shot_markers_skip_non_finite():
    canvas = new_canvas(50, 50)
    assert draw_shot_markers(canvas, [ShotRecord("n", float("nan"), 10, True)]) == 0


def test_save_heatmap(tmp_path):
    img = render_heatmap(SHOTS, REGIONS)
    out = save_heatmap(img, tmp_path / "nested" / "heatmap.png")
    assert out.exists()
    loaded = cv2.imread(str(out))
    assert loaded.shape == img.shape


def test_aggregate_matches_rendered_labels():
    # The heatmap uses the same aggregation the stats panel does
    stats = aggregate(SHOTS, REGIONS)
    assert [s.region_code for s in stats] == ["PC", "C3L"]


@pytest.mark.parametrize("width, height", [(60, 60), (1, 1), (79, 400), (400, 30)])
@pytest.mark.parametrize("view", ["heatmap", "shots"])
def test_small_canvases_render(width, height, view):
    shots = [ShotRecord("a", width / 2, height / 2, True), ShotRecord("b", 1, 1, False)]
    img = render_heatmap(shots, width=width, height=height, view_mode=view)
    assert img.shape == (height, width, 3)

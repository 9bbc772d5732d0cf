"""
Containment tests for polygon and circle bounds.

Usage:
    pytest tests/test_geometry.py
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from shotchart.analysis.geometry import (
    CircleBounds,
    PolygonBounds,
    bounds_contains,
    point_in_circle,
    point_in_polygon,
)

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]

# L-shape: 10x10 square with the top-right 5x5 quarter cut out
L_SHAPE = [(0, 0), (5, 0), (5, 5), (10, 5), (10, 10), (0, 10)]


def test_square_inside_and_outside():
    assert point_in_polygon((5, 5), SQUARE)
    assert not point_in_polygon((15, 15), SQUARE)
    assert not point_in_polygon((-1, 5), SQUARE)
    assert not point_in_polygon((5, 11), SQUARE)


def test_closing_edge_is_counted():
    # A triangle whose last edge (back to the first vertex) bounds the point
    triangle = [(0, 0), (10, 0), (0, 10)]
    assert point_in_polygon((2, 2), triangle)
    assert not point_in_polygon((8, 8), triangle)


def test_non_convex_polygon():
    assert point_in_polygon((2, 2), L_SHAPE)
    assert point_in_polygon((8, 8), L_SHAPE)
    assert not point_in_polygon((8, 2), L_SHAPE)


def test_boundary_point_is_deterministic():
    first = point_in_polygon((10, 5), SQUARE)
    for _ in range(5):
        assert point_in_polygon((10, 5), SQUARE) == first


def test_degenerate_polygon_contains_nothing():
    assert not point_in_polygon((0, 0), [])
    assert not point_in_polygon((1, 1), [(0, 0), (2, 2)])


def test_circle_containment():
    assert point_in_circle((5, 5), (0, 0), 10)
    assert not point_in_circle((20, 20), (0, 0), 10)


def test_circle_boundary_is_inclusive():
    assert point_in_circle((10, 0), (0, 0), 10)
    assert point_in_circle((0, 0), (0, 0), 0)


def test_negative_radius_contains_nothing():
    assert not point_in_circle((0, 0), (0, 0), -1)


def test_bounds_dispatch():
    assert bounds_contains(PolygonBounds(tuple(SQUARE)), 5, 5)
    assert not bounds_contains(PolygonBounds(tuple(SQUARE)), 15, 5)
    assert bounds_contains(CircleBounds(0, 0, 10), 5, 5)
    assert not bounds_contains(CircleBounds(0, 0, 10), 20, 20)


def test_bounds_dispatch_skips_malformed():
    assert not bounds_contains(PolygonBounds(()), 0, 0)
    assert not bounds_contains("not a shape", 0, 0)


def test_polygon_scale_and_centroid():
    scaled = PolygonBounds(tuple(SQUARE)).scaled(2, 3)
    assert scaled.vertices == ((0, 0), (20, 0), (20, 30), (0, 30))
    assert scaled.centroid() == (10, 15)
    assert CircleBounds(4, 6, 1).centroid() == (4, 6)

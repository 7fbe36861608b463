"""Tests for polygon, fan and lit-area helpers."""

import pytest
from shapely.geometry import Polygon

from lightcast.polygon import (
    fan_triangles,
    hit_points,
    lit_fraction,
    outline_segments,
    visibility_polygon,
)
from lightcast.types import Hit


def _hits(points):
    return [
        Hit(point=p, distance=1.0, strip_id=1, segment_index=0, target=p)
        for p in points
    ]


SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


class TestFanTriangles:
    def test_closes_back_to_first(self):
        source = (5.0, 5.0)
        triangles = fan_triangles(source, _hits(SQUARE))
        assert len(triangles) == 4
        assert triangles[0] == (source, (0.0, 0.0), (10.0, 0.0))
        assert triangles[-1] == (source, (0.0, 10.0), (0.0, 0.0))

    def test_fan_area_matches_polygon(self):
        triangles = fan_triangles((5.0, 5.0), _hits(SQUARE))
        total = sum(Polygon(t).area for t in triangles)
        assert total == pytest.approx(100.0)

    def test_too_few_points(self):
        assert fan_triangles((0.0, 0.0), _hits([(1.0, 1.0)])) == []
        assert fan_triangles((0.0, 0.0), []) == []


class TestOutlineSegments:
    def test_closed_outline(self):
        segs = outline_segments(SQUARE)
        assert segs == [
            (0.0, 0.0, 10.0, 0.0),
            (10.0, 0.0, 10.0, 10.0),
            (10.0, 10.0, 0.0, 10.0),
            (0.0, 10.0, 0.0, 0.0),
        ]

    def test_single_point(self):
        assert outline_segments([(1.0, 1.0)]) == []


class TestVisibilityPolygon:
    def test_points_in_order(self):
        hits = _hits(SQUARE)
        assert hit_points(hits) == SQUARE
        poly = visibility_polygon(hits)
        assert poly is not None
        assert poly.area == pytest.approx(100.0)

    def test_too_few_hits(self):
        assert visibility_polygon(_hits(SQUARE[:2])) is None


class TestLitFraction:
    def test_full_scene(self):
        assert lit_fraction(_hits(SQUARE), 10.0, 10.0) == pytest.approx(1.0)

    def test_partial(self):
        half = [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0), (0.0, 5.0)]
        assert lit_fraction(_hits(half), 10.0, 10.0) == pytest.approx(0.5)

    def test_clipped_to_bounds(self):
        big = [(-10.0, -10.0), (20.0, -10.0), (20.0, 20.0), (-10.0, 20.0)]
        assert lit_fraction(_hits(big), 10.0, 10.0) == pytest.approx(1.0)

    def test_origin_offset(self):
        assert lit_fraction(
            _hits(SQUARE), 10.0, 10.0, origin=(5.0, 5.0)
        ) == pytest.approx(0.25)

    def test_self_intersecting_is_repaired(self):
        bowtie = [(0.0, 0.0), (10.0, 10.0), (10.0, 0.0), (0.0, 10.0)]
        frac = lit_fraction(_hits(bowtie), 10.0, 10.0)
        assert 0.0 < frac <= 1.0

    def test_empty(self):
        assert lit_fraction([], 10.0, 10.0) == 0.0
        assert lit_fraction(_hits(SQUARE), 0.0, 10.0) == 0.0

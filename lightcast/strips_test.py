"""Tests for segment list -> line strip conversion."""

import math

import pytest

from lightcast.errors import InvalidStrip, VisibilityError
from lightcast.strips import build_strip, line_segments_to_line_strips

TRIANGLE = [
    (100.0, 100.0, 100.0, 200.0),
    (100.0, 200.0, 200.0, 100.0),
    (200.0, 100.0, 100.0, 100.0),
]


class TestBuildStrip:
    def test_triangle_is_closed(self):
        strip = build_strip(TRIANGLE, 1)
        assert strip.is_closed is True
        assert strip.points == (
            (100.0, 100.0),
            (100.0, 200.0),
            (200.0, 100.0),
            (100.0, 100.0),
        )

    def test_single_segment_is_open(self):
        strip = build_strip([(700.0, 300.0, 700.0, 400.0)], 1)
        assert strip.is_closed is False
        assert strip.points == ((700.0, 300.0), (700.0, 400.0))

    def test_point_count_is_segments_plus_one(self):
        segs = [(0, 0, 1, 0), (1, 0, 2, 0), (2, 0, 3, 1)]
        assert len(build_strip(segs, 1).points) == 4

    def test_closure_within_tolerance(self):
        # squared gap 1e-10 < 1e-8
        segs = [(0, 0, 10, 0), (10, 0, 10, 10), (10, 10, 1e-5, 0)]
        assert build_strip(segs, 1).is_closed is True

    def test_gap_beyond_tolerance_is_open(self):
        segs = [(0, 0, 10, 0), (10, 0, 10, 10), (10, 10, 1e-3, 0)]
        assert build_strip(segs, 1).is_closed is False

    def test_custom_tolerance(self):
        segs = [(0, 0, 10, 0), (10, 0, 10, 10), (10, 10, 1e-3, 0)]
        assert build_strip(segs, 1, eps=1e-4).is_closed is True

    def test_empty_raises(self):
        with pytest.raises(InvalidStrip):
            build_strip([], 1)

    def test_invalid_strip_is_value_error(self):
        with pytest.raises(ValueError):
            build_strip([], 1)
        assert issubclass(InvalidStrip, VisibilityError)

    def test_short_segment_raises(self):
        with pytest.raises(InvalidStrip):
            build_strip([(0.0, 0.0, 1.0)], 1)

    def test_nan_raises(self):
        with pytest.raises(InvalidStrip):
            build_strip([(0.0, 0.0, math.nan, 1.0)], 1)

    def test_discontiguous_keeps_start_points(self):
        strip = build_strip([(0, 0, 1, 0), (2, 0, 3, 0)], 1)
        assert strip.points == ((0.0, 0.0), (2.0, 0.0), (3.0, 0.0))


class TestLineStrip:
    def test_vertex_count_closed_skips_duplicate(self):
        assert build_strip(TRIANGLE, 1).vertex_count == 3

    def test_vertex_count_open(self):
        assert build_strip([(0, 0, 1, 0), (1, 0, 1, 1)], 1).vertex_count == 3

    def test_segments(self):
        strip = build_strip([(0, 0, 1, 0), (1, 0, 1, 1)], 1)
        assert list(strip.segments()) == [
            (0, (0.0, 0.0), (1.0, 0.0)),
            (1, (1.0, 0.0), (1.0, 1.0)),
        ]


class TestLineSegmentsToLineStrips:
    def test_ids_start_at_one(self):
        strips = line_segments_to_line_strips(
            [TRIANGLE, [(700, 300, 700, 400)], [(300, 100, 500, 100)]]
        )
        assert [s.id for s in strips] == [1, 2, 3]
        assert [s.is_closed for s in strips] == [True, False, False]

    def test_empty_collection(self):
        assert line_segments_to_line_strips([]) == []

    def test_empty_list_in_collection_raises(self):
        with pytest.raises(InvalidStrip):
            line_segments_to_line_strips([TRIANGLE, []])

"""Helpers for building obstacle segment lists programmatically."""

from __future__ import annotations

from typing import Sequence

from .errors import InvalidStrip
from .polygon import outline_segments
from .types import LineSegment, Point

Rect = tuple[float, float, float, float]  # (x, y, width, height)


def rect_to_segments(rect: Rect) -> list[LineSegment]:
    """Closed outline of an axis-aligned rectangle, starting at (x, y)."""
    x, y, w, h = rect
    return [
        (x, y, x + w, y),
        (x + w, y, x + w, y + h),
        (x + w, y + h, x, y + h),
        (x, y + h, x, y),
    ]


def polygon_to_segments(points: Sequence[Point]) -> list[LineSegment]:
    """Edges between consecutive points plus the edge closing the loop.

    Raises InvalidStrip for fewer than two points.
    """
    if len(points) < 2:
        raise InvalidStrip(
            f"polygon needs at least 2 points, got {len(points)}"
        )
    return outline_segments(points)


def square(x: float, y: float, size: float) -> Rect:
    return (x, y, size, size)


def demo_scene() -> list[list[LineSegment]]:
    """Obstacles of the 800x800 demo inside a 700-unit bounding square."""
    return [
        polygon_to_segments([(100.0, 100.0), (100.0, 200.0), (200.0, 100.0)]),
        [(700.0, 300.0, 700.0, 400.0)],
        [(300.0, 100.0, 500.0, 100.0)],
        [(300.0, 700.0, 500.0, 700.0)],
        [(350.0, 600.0, 500.0, 600.0)],
        [(500.0, 300.0, 500.0, 400.0), (500.0, 400.0, 600.0, 300.0)],
        [(100.0, 400.0, 200.0, 400.0), (200.0, 400.0, 200.0, 500.0)],
        [(100.0, 700.0, 200.0, 600.0), (200.0, 600.0, 100.0, 600.0)],
        rect_to_segments(square(50.0, 50.0, 700.0)),
    ]

"""Turn an ordered hit list into drawable and measurable geometry.

The ordered hits from ``sort_hits`` are the vertices of the visibility
polygon. A renderer fills it as a triangle fan anchored at the light
(``fan_triangles``) and outlines it with ``outline_segments``. The lit share
of a bounded scene comes from the polygon area (clipped to the scene with
shapely) divided by the scene area.
"""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import box

from .types import Hit, LineSegment, Point

Triangle = tuple[Point, Point, Point]


def hit_points(ordered: Sequence[Hit]) -> list[Point]:
    return [hit.point for hit in ordered]


def fan_triangles(source: Point, ordered: Sequence[Hit]) -> list[Triangle]:
    """Triangles (source, p_i, p_i+1) around the polygon, closing at p_0."""
    points = hit_points(ordered)
    if len(points) < 2:
        return []
    triangles: list[Triangle] = []
    for i in range(len(points)):
        triangles.append((source, points[i], points[(i + 1) % len(points)]))
    return triangles


def outline_segments(points: Sequence[Point]) -> list[LineSegment]:
    """Closed outline: consecutive edges plus last -> first."""
    n = len(points)
    if n < 2:
        return []
    segments: list[LineSegment] = []
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        segments.append((x0, y0, x1, y1))
    return segments


def visibility_polygon(ordered: Sequence[Hit]) -> ShapelyPolygon | None:
    """Shapely polygon of the lit region, or None below three hits."""
    points = hit_points(ordered)
    if len(points) < 3:
        return None
    return ShapelyPolygon(points)


def lit_fraction(
    ordered: Sequence[Hit],
    width: float,
    height: float,
    origin: Point = (0.0, 0.0),
) -> float:
    """Visible area as a fraction of the width x height scene at ``origin``.

    The polygon is clipped to the scene rectangle, so a light outside the
    bounding obstacle does not count area beyond it. Self-intersecting
    polygons (a mis-ordered corner) are repaired with ``buffer(0)`` first.
    """
    if width <= 0 or height <= 0:
        return 0.0
    poly = visibility_polygon(ordered)
    if poly is None:
        return 0.0
    if not poly.is_valid:
        poly = poly.buffer(0)
    ox, oy = origin
    clipped = poly.intersection(box(ox, oy, ox + width, oy + height))
    return clipped.area / (width * height)

"""Ray casting against line strips.

A ray runs from a source point through a target point. Its parameter t is
the relative distance along the ray: 0 at the source, 1 at the target,
greater than 1 beyond it. Every segment of every strip is tested, and all
intersections come back sorted nearest first.

Intersection rule for ray O + t*d against segment S + u*s:

    denom = d x s
    t = (S - O) x s / denom
    u = (S - O) x d / denom

An intersection counts when t >= 0 (finite) and u lies in [-eps, 1 + eps],
so a ray through a shared vertex hits both segments meeting there.

Degenerate cases never divide by zero:

  * zero-length ray (source == target): no intersections at all.
  * denom == 0 or |denom| < eps (ray parallel to segment): no
    intersection unless the segment is collinear with the ray, in which
    case the hit snaps to the segment endpoint nearest the source that
    lies ahead of it (t >= 0). The exact-zero check holds even when eps
    is 0.

Both parameters come from Cramer's rule, so axis-aligned rays go through the
same path as any other ray.

``trace_ray`` is vectorized with NumPy: a ``SegmentTable`` holds every
segment of the scene as flat arrays, and one ray is tested against all of
them in a single batch. Parallel rows fall back to the scalar collinear
check. The solver builds the table once and reuses it for every vertex.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import EPSILON, Hit, LineStrip, Point


def _collinear_hit(
    ox: float,
    oy: float,
    dx: float,
    dy: float,
    x1: float,
    y1: float,
    sx: float,
    sy: float,
    eps: float,
) -> tuple[Point, float] | None:
    """Snap a ray to the nearest forward endpoint of a parallel segment.

    Returns None if the segment is off the ray's line or fully behind the
    source.
    """
    len_sq = dx * dx + dy * dy
    wx = x1 - ox
    wy = y1 - oy
    cross = wx * dy - wy * dx
    # squared perpendicular distance of the segment start from the ray line
    if cross != 0.0 and cross * cross / len_sq >= eps:
        return None

    t_start = (wx * dx + wy * dy) / len_sq
    t_end = ((wx + sx) * dx + (wy + sy) * dy) / len_sq
    best: tuple[Point, float] | None = None
    for t, point in ((t_start, (x1, y1)), (t_end, (x1 + sx, y1 + sy))):
        if t >= 0.0 and (best is None or t < best[1]):
            best = (point, t)
    return best


def intersect_ray_segment(
    source: Point,
    target: Point,
    start: Point,
    end: Point,
    eps: float = EPSILON,
) -> tuple[Point, float] | None:
    """Intersect the ray source->target with segment start-end.

    Returns (intersection point, relative ray distance) or None.
    """
    ox, oy = source
    dx = target[0] - ox
    dy = target[1] - oy
    if dx == 0.0 and dy == 0.0:
        return None

    x1, y1 = start
    sx = end[0] - x1
    sy = end[1] - y1
    denom = dx * sy - dy * sx
    if denom == 0.0 or abs(denom) < eps:
        return _collinear_hit(ox, oy, dx, dy, x1, y1, sx, sy, eps)

    wx = x1 - ox
    wy = y1 - oy
    t = (wx * sy - wy * sx) / denom
    u = (wx * dy - wy * dx) / denom
    # `not t >= 0` also rejects NaN
    if not t >= 0.0 or u < -eps or u > 1.0 + eps:
        return None
    return (x1 + sx * u, y1 + sy * u), t


class SegmentTable:
    """All segments of a strip collection as flat NumPy arrays.

    Row order is strip order, then segment order within the strip, which
    is also the tie order of hits at equal distance.
    """

    def __init__(self, strips: Sequence[LineStrip]) -> None:
        coords: list[tuple[float, float, float, float]] = []
        strip_ids: list[int] = []
        segment_indices: list[int] = []
        for strip in strips:
            for i, (x0, y0), (x1, y1) in strip.segments():
                coords.append((x0, y0, x1, y1))
                strip_ids.append(strip.id)
                segment_indices.append(i)

        arr = np.array(coords, dtype=np.float64).reshape(-1, 4)
        self.x1 = arr[:, 0]
        self.y1 = arr[:, 1]
        self.sx = arr[:, 2] - arr[:, 0]
        self.sy = arr[:, 3] - arr[:, 1]
        self.strip_ids = strip_ids
        self.segment_indices = segment_indices

    def __len__(self) -> int:
        return len(self.strip_ids)


def trace_ray(
    source: Point,
    target: Point,
    strips: Sequence[LineStrip] | SegmentTable,
    eps: float = EPSILON,
) -> list[Hit]:
    """Cast source->target against every segment, nearest hit first.

    Hits at equal distance keep strip/segment order (the sort is stable).
    Every returned hit records ``target`` and is flagged as a first hit; the
    solver decides which of them it keeps.
    """
    table = (
        strips if isinstance(strips, SegmentTable) else SegmentTable(strips)
    )
    ox, oy = source
    dx = target[0] - ox
    dy = target[1] - oy
    if (dx == 0.0 and dy == 0.0) or len(table) == 0:
        return []

    wx = table.x1 - ox
    wy = table.y1 - oy
    denom = dx * table.sy - dy * table.sx
    parallel = (denom == 0.0) | (np.abs(denom) < eps)
    safe_denom = np.where(parallel, 1.0, denom)
    t = (wx * table.sy - wy * table.sx) / safe_denom
    u = (wx * dy - wy * dx) / safe_denom

    valid = (
        ~parallel
        & np.isfinite(t)
        & (t >= 0.0)
        & (u >= -eps)
        & (u <= 1.0 + eps)
    )
    px = table.x1 + table.sx * u
    py = table.y1 + table.sy * u

    target_copy = (float(target[0]), float(target[1]))
    hits: list[Hit] = []
    for row in np.flatnonzero(valid | parallel):
        if parallel[row]:
            found = _collinear_hit(
                ox,
                oy,
                dx,
                dy,
                float(table.x1[row]),
                float(table.y1[row]),
                float(table.sx[row]),
                float(table.sy[row]),
                eps,
            )
            if found is None:
                continue
            point, distance = found
        else:
            point = (float(px[row]), float(py[row]))
            distance = float(t[row])
        hits.append(
            Hit(
                point=point,
                distance=distance,
                strip_id=table.strip_ids[row],
                segment_index=table.segment_indices[row],
                target=target_copy,
            )
        )

    hits.sort(key=lambda h: h.distance)
    return hits

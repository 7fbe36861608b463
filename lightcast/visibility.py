"""Visibility solver: which boundary points does a point light reach?

For every vertex of every strip, a ray is cast from the light to the vertex
and the nearest intersection is recorded. The resulting hits, once sorted by
angle (ordering.py), trace the boundary of the lit region.

Casting only at vertices misses whatever is hidden directly behind a corner
the ray grazes. The "corner peek" covers that case: when the nearest hit is
the vertex itself and the ray has more intersections further on, a second
hit past the vertex is recorded too, if the local edge geometry says
something could be visible there.

The peek test at vertex V with neighbours P (previous) and N (next) uses
unit vectors p = V - P, n = V - N and s = V - source:

    dot   = p . n     cosine of the angle at V
    dot_p = p . s
    dot_n = n . s

and peeks when ``dot_n * dot_p < |dot|``, i.e. the light is not inside the
cone of the two adjacent edges, so the ray leaves the strip at V instead of
entering it. Strip ends (both ends of an open strip, and the seam vertex of a
closed strip) always peek.

The seam rule ignores the local geometry. When a closed strip's seam is a
corner pointing at the light, the peek hit lands on the far side of the
same obstacle, and the sorted polygon gets a zero-width spike through it.

These rules are tuned empirically rather than derived from a sweep-line
visibility algorithm. Duplicate-looking hits from adjacent corners are kept;
the sorter relies on them to trace the polygon.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from .errors import EmptyScene
from .ordering import sort_hits
from .raycast import SegmentTable, trace_ray
from .strips import line_segments_to_line_strips
from .types import EPSILON, Hit, LineStrip, Point, TracerParams

logger = logging.getLogger(__name__)


def _unit(x: float, y: float) -> tuple[float, float]:
    """Normalize (x, y); a zero vector stays zero."""
    length = math.hypot(x, y)
    if length == 0.0:
        return 0.0, 0.0
    return x / length, y / length


def vertex_is_convex_toward(
    source: Point, prev: Point, vertex: Point, next_: Point
) -> bool:
    """True when casting past ``vertex`` can reveal geometry behind it."""
    vx, vy = vertex
    px, py = _unit(vx - prev[0], vy - prev[1])
    nx, ny = _unit(vx - next_[0], vy - next_[1])
    sx, sy = _unit(vx - source[0], vy - source[1])

    dot = px * nx + py * ny
    dot_p = px * sx + py * sy
    dot_n = nx * sx + ny * sy
    return dot_n * dot_p < abs(dot)


def should_peek(source: Point, strip: LineStrip, index: int) -> bool:
    """Decide whether vertex ``index`` of ``strip`` warrants a second ray."""
    last = len(strip.points) - 1
    if index == 0 or index == last:
        return True
    return vertex_is_convex_toward(
        source,
        strip.points[index - 1],
        strip.points[index],
        strip.points[index + 1],
    )


def find_peek_hit(hits: Sequence[Hit], eps: float = EPSILON) -> Hit | None:
    """Find the first hit past the nearest one that is a different point.

    A hit at the same point on another strip means two obstacles share the
    corner, so nothing is visible behind it and the scan stops. Hits at the
    same point on the same strip (the other edge meeting at the vertex) are
    skipped.
    """
    if not hits:
        return None
    nearest = hits[0]
    hx, hy = nearest.point
    for hit in hits[1:]:
        d = (hx - hit.point[0]) ** 2 + (hy - hit.point[1]) ** 2
        if d < eps and hit.strip_id != nearest.strip_id:
            return None
        if d > eps:
            return hit.as_secondary()
    return None


def _vertex_indices(strip: LineStrip) -> range:
    # A closed strip repeats its first point at the end; skip the duplicate.
    return range(strip.vertex_count)


def trace(
    source: Point, strips: Sequence[LineStrip], eps: float = EPSILON
) -> list[Hit]:
    """Cast at every strip vertex and collect the unordered hit set.

    Per vertex this yields the peek hit (if any) followed by the nearest
    hit, in strip and vertex order. Raises EmptyScene if there are no
    strips.
    """
    if not strips:
        raise EmptyScene("no strips to trace against")

    table = SegmentTable(strips)
    result: list[Hit] = []
    for strip in strips:
        for i in _vertex_indices(strip):
            vertex = strip.points[i]
            hits = trace_ray(source, vertex, table, eps)
            if not hits:
                logger.debug(
                    "strip %d vertex %d at %r: no hits (light on vertex)",
                    strip.id,
                    i,
                    vertex,
                )
                continue

            nearest = hits[0]
            if (
                nearest.distance > 1.0 - eps
                and len(hits) > 1
                and should_peek(source, strip, i)
            ):
                peek = find_peek_hit(hits, eps)
                if peek is not None:
                    result.append(peek)
            result.append(nearest)

    logger.debug(
        "traced %d strips from %r: %d hits", len(strips), source, len(result)
    )
    return result


def compute_visibility(
    source: Point,
    segment_lists: Iterable[Sequence[Sequence[float]]],
    params: TracerParams | None = None,
) -> list[Hit]:
    """Build strips, trace them and return the angularly ordered hit list."""
    params = params or TracerParams()
    eps = params.epsilon
    strips = line_segments_to_line_strips(segment_lists, eps)
    hits = trace(source, strips, eps)
    return sort_hits(source, hits, eps)

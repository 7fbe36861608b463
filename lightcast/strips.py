"""Convert batches of line segments into connected line strips.

Each input list is assumed to be contiguous: segment i ends where segment
i+1 starts. A strip keeps the start point of every segment plus the end
point of the last one, so N segments give N+1 points. The strip is closed
when its first and last points coincide within the tolerance.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from .errors import InvalidStrip
from .types import EPSILON, LineSegment, LineStrip, Point

logger = logging.getLogger(__name__)


def _dist_sq(a: Point, b: Point) -> float:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2


def _check_segment(segment: Sequence[float], strip_id: int) -> LineSegment:
    if len(segment) != 4:
        raise InvalidStrip(
            f"strip {strip_id}: expected 4 coordinates, got {len(segment)}"
        )
    x0, y0, x1, y1 = (float(v) for v in segment)
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        raise InvalidStrip(
            f"strip {strip_id}: non-finite coordinate in segment {segment!r}"
        )
    return x0, y0, x1, y1


def build_strip(
    segments: Sequence[Sequence[float]],
    strip_id: int,
    eps: float = EPSILON,
) -> LineStrip:
    """Build one strip from a contiguous segment list.

    Raises InvalidStrip if the list is empty or a segment is malformed.
    """
    if not segments:
        raise InvalidStrip(f"strip {strip_id}: no segments")

    checked = [_check_segment(s, strip_id) for s in segments]
    points: list[Point] = [(x0, y0) for x0, y0, _, _ in checked]
    last = checked[-1]
    points.append((last[2], last[3]))

    for i in range(len(checked) - 1):
        end = (checked[i][2], checked[i][3])
        if _dist_sq(end, points[i + 1]) >= eps:
            logger.debug(
                "strip %d: segment %d ends at %r but segment %d starts at %r",
                strip_id,
                i,
                end,
                i + 1,
                points[i + 1],
            )

    is_closed = _dist_sq(points[0], points[-1]) < eps
    return LineStrip(points=tuple(points), is_closed=is_closed, id=strip_id)


def line_segments_to_line_strips(
    segment_lists: Iterable[Sequence[Sequence[float]]],
    eps: float = EPSILON,
) -> list[LineStrip]:
    """Build one strip per segment list, with ids from 1 in input order."""
    return [
        build_strip(segments, strip_id, eps)
        for strip_id, segments in enumerate(segment_lists, start=1)
    ]

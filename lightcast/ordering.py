"""Angular ordering of visibility hits around the light source.

Two steps:

1. Primary sort by angle ``atan2(dy, dx) + pi`` (in [0, 2*pi]), descending.
   Angles equal within eps are ordered by descending segment index.

2. One forward pass over the circular list looking at triples
   (i, i+1, i+2). When hits i+1 and i+2 sit at the same angle, they are
   swapped if

   * they share a strip, and hit i is on the same segment as hit i+2 but
     not as hit i+1; or
   * they are on different strips, and hit i is on the same strip as
     hit i+2.

   This puts a corner hit next to the hit it connects to when the primary
   sort left an unrelated, angularly coincident hit from another obstacle
   in between. It is a local repair for that pattern, not a verified total
   order, and other topologies may still come out wrong.
"""

from __future__ import annotations

import functools
import math
from typing import Sequence

from .types import EPSILON, Hit, Point


def hit_angle(source: Point, point: Point) -> float:
    return math.atan2(point[1] - source[1], point[0] - source[0]) + math.pi


def angle_between(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in [0, pi]."""
    angle = abs(a - b)
    if angle > math.pi:
        angle = 2.0 * math.pi - angle
    return angle


def _should_swap(
    first: tuple[Hit, float],
    second: tuple[Hit, float],
    third: tuple[Hit, float],
    eps: float,
) -> bool:
    if angle_between(second[1], third[1]) >= eps:
        return False
    hit_0, hit_1, hit_2 = first[0], second[0], third[0]
    if hit_1.strip_id == hit_2.strip_id:
        return (
            hit_0.segment_index == hit_2.segment_index
            and hit_1.segment_index != hit_2.segment_index
        )
    return hit_0.strip_id == hit_2.strip_id


def sort_hits(
    source: Point, hits: Sequence[Hit], eps: float = EPSILON
) -> list[Hit]:
    """Return ``hits`` reordered for tracing the visibility polygon.

    The input is left untouched; the result holds the same hits.
    """
    with_angle = [(hit, hit_angle(source, hit.point)) for hit in hits]

    def compare(a: tuple[Hit, float], b: tuple[Hit, float]) -> int:
        if abs(a[1] - b[1]) < eps:
            return b[0].segment_index - a[0].segment_index
        return -1 if a[1] > b[1] else 1

    with_angle.sort(key=functools.cmp_to_key(compare))

    n = len(with_angle)
    for i in range(n):
        i1 = (i + 1) % n
        i2 = (i + 2) % n
        if _should_swap(with_angle[i], with_angle[i1], with_angle[i2], eps):
            with_angle[i1], with_angle[i2] = with_angle[i2], with_angle[i1]

    return [hit for hit, _ in with_angle]

"""Data types shared by the strip builder, ray caster, solver and sorter."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterator

from .errors import VisibilityError

Point = tuple[float, float]
LineSegment = tuple[float, float, float, float]  # (x0, y0, x1, y1)

# Single tolerance for closure, coincidence and angle-equality tests.
EPSILON = 1e-8


@dataclass(frozen=True)
class LineStrip:
    points: tuple[Point, ...]
    is_closed: bool
    id: int

    @property
    def vertex_count(self) -> int:
        """Number of distinct vertices (closing duplicate excluded)."""
        n = len(self.points)
        return n - 1 if self.is_closed else n

    def segments(self) -> Iterator[tuple[int, Point, Point]]:
        """Yield (segment_index, start, end) for consecutive point pairs."""
        for i in range(len(self.points) - 1):
            yield i, self.points[i], self.points[i + 1]


@dataclass(frozen=True)
class Hit:
    point: Point
    distance: float  # fraction of the casting ray: 0 = source, 1 = target
    strip_id: int
    segment_index: int
    target: Point
    is_first_hit: bool = True

    def as_secondary(self) -> Hit:
        return replace(self, is_first_hit=False)

    def to_dict(self) -> dict:
        return {
            "point": list(self.point),
            "distance": self.distance,
            "strip_id": self.strip_id,
            "segment_index": self.segment_index,
            "target": list(self.target),
            "is_first_hit": self.is_first_hit,
        }


@dataclass(frozen=True)
class TracerParams:
    epsilon: float = EPSILON

    def __post_init__(self):
        # Every tolerance test is a strict `< epsilon`.
        if not (math.isfinite(self.epsilon) and self.epsilon > 0.0):
            raise VisibilityError(
                f"epsilon must be positive and finite, got {self.epsilon}"
            )

    @staticmethod
    def from_dict(d: dict | None) -> TracerParams:
        if not d:
            return TracerParams()
        return TracerParams(epsilon=d.get("epsilon", EPSILON))

    def to_dict(self) -> dict:
        return {"epsilon": self.epsilon}

"""Offscreen rendering of one lit frame with Pillow.

Draws, back to front:

  1. white background
  2. the lit region as a triangle fan from the light through consecutive
     ordered hits
  3. the polygon outline
  4. debug rays (optional): light -> target vertex, light -> nearest hit,
     and target vertex -> peek hit
  5. the obstacle segments
  6. the light itself

Scene coordinates map to pixels by a uniform ``scale`` with the origin at
the top-left, matching the 800x800 demo scene.
"""

from __future__ import annotations

from typing import Sequence

from PIL import Image, ImageDraw

from lightcast.polygon import fan_triangles, hit_points, outline_segments
from lightcast.types import Hit, LineSegment, Point

WHITE = "#ffffff"
BLACK = "#000000"
GRAY = "#333333"  # lit region
RED = "#ff0000"  # target -> peek hit
GREEN = "#7fd67f"  # light -> nearest hit
BLUE = "#b0b0ff"  # light -> target vertex
PURPLE = "#ff33ff"  # polygon outline
LIGHT = "#ffd700"

LIGHT_RADIUS = 4


class FrameRenderer:
    def __init__(
        self, width: int = 800, height: int = 800, scale: float = 1.0
    ) -> None:
        self.width = width
        self.height = height
        self.scale = scale

    def _to_px(self, point: Point) -> tuple[float, float]:
        return point[0] * self.scale, point[1] * self.scale

    def _lw(self, base_width: float) -> int:
        return max(1, round(base_width * self.scale))

    def _line(self, draw, a: Point, b: Point, color: str, width: float = 1):
        draw.line(
            [self._to_px(a), self._to_px(b)],
            fill=color,
            width=self._lw(width),
        )

    def render(
        self,
        source: Point,
        segment_lists: Sequence[Sequence[LineSegment]],
        ordered: Sequence[Hit],
        show_rays: bool = True,
    ) -> Image.Image:
        img = Image.new("RGB", (self.width, self.height), WHITE)
        draw = ImageDraw.Draw(img)

        for triangle in fan_triangles(source, ordered):
            draw.polygon([self._to_px(p) for p in triangle], fill=GRAY)

        for x0, y0, x1, y1 in outline_segments(hit_points(ordered)):
            self._line(draw, (x0, y0), (x1, y1), PURPLE)

        if show_rays:
            for hit in ordered:
                self._line(draw, source, hit.target, BLUE)
                if hit.is_first_hit:
                    self._line(draw, source, hit.point, GREEN)
                else:
                    self._line(draw, hit.target, hit.point, RED)

        for segments in segment_lists:
            for x0, y0, x1, y1 in segments:
                self._line(draw, (x0, y0), (x1, y1), BLACK, 2)

        cx, cy = self._to_px(source)
        r = self._lw(LIGHT_RADIUS)
        draw.ellipse(
            [cx - r, cy - r, cx + r, cy + r], fill=LIGHT, outline=BLACK
        )
        return img

"""Render frames of the moving-light demo scene to PNG files.

The light follows x = 400 + sin^2(t/100) * 349, y = 400 - sin(t/100) * 349
inside the 700-unit bounding square of ``lightcast.scene.demo_scene``; one
time step is one animation frame.

Each PNG carries its trace as metadata (see ``frame_io``).

Usage:
    lightcast-demo                        # t=0 -> frames/frame_0000.png
    lightcast-demo -t 120 -n 10 -s 5      # 10 frames from t=120, every 5 steps
    lightcast-demo --size 400 --no-rays   # half-size, fan and outline only
    lightcast-demo --params-from frames/frame_0000.png -t 50

or ``python -m frontend.demo`` with the same arguments.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

from PIL import Image

from lightcast.errors import VisibilityError
from lightcast.polygon import lit_fraction
from lightcast.scene import demo_scene
from lightcast.types import EPSILON, Hit, Point, TracerParams
from lightcast.visibility import compute_visibility

from .frame_io import frame_record, load_frame_params, save_frame_png
from .render import FrameRenderer

logger = logging.getLogger(__name__)

SCENE_SIZE = 800
# The demo's bounding square.
BOUNDS_ORIGIN = (50.0, 50.0)
BOUNDS_SIZE = 700.0


def light_position(time: float) -> Point:
    s = math.sin(time / 100.0)
    return 400.0 + s * s * 349.0, 400.0 - s * 349.0


def render_demo_frame(
    time: float,
    size: int = SCENE_SIZE,
    show_rays: bool = True,
    params: TracerParams | None = None,
) -> tuple[Image.Image, list[Hit]]:
    """Trace and draw the demo scene with the light placed for ``time``."""
    source = light_position(time)
    segment_lists = demo_scene()
    ordered = compute_visibility(source, segment_lists, params)
    renderer = FrameRenderer(size, size, scale=size / SCENE_SIZE)
    img = renderer.render(source, segment_lists, ordered, show_rays=show_rays)
    return img, ordered


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Render the moving-light visibility demo to PNG"
    )
    parser.add_argument(
        "-t",
        "--time",
        type=float,
        default=0.0,
        help="Time of the first frame (default: 0)",
    )
    parser.add_argument(
        "-n",
        "--frames",
        type=int,
        default=1,
        help="Number of frames to render (default: 1)",
    )
    parser.add_argument(
        "-s",
        "--step",
        type=float,
        default=1.0,
        help="Time advanced between frames (default: 1)",
    )
    parser.add_argument(
        "-o",
        "--out-dir",
        type=Path,
        default=Path("frames"),
        help="Output directory (default: ./frames)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=SCENE_SIZE,
        help=f"Image width and height in pixels (default: {SCENE_SIZE})",
    )
    parser.add_argument(
        "--no-rays", action="store_true", help="Skip the debug rays"
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        default=None,
        help=f"Geometric tolerance (default: {EPSILON})",
    )
    parser.add_argument(
        "--params-from",
        type=Path,
        default=None,
        help="Reuse the tracer params saved in an earlier frame PNG",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = TracerParams()
        if args.params_from is not None:
            params = load_frame_params(args.params_from)
        if args.epsilon is not None:
            params = TracerParams(epsilon=args.epsilon)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    args.out_dir.mkdir(parents=True, exist_ok=True)
    for frame in range(args.frames):
        time = args.time + frame * args.step
        try:
            img, ordered = render_demo_frame(
                time, args.size, not args.no_rays, params
            )
        except VisibilityError as e:
            print(f"Error at t={time}: {e}", file=sys.stderr)
            return 1
        path = args.out_dir / f"frame_{frame:04d}.png"
        source = light_position(time)
        save_frame_png(img, frame_record(time, source, params, ordered), path)
        lit = lit_fraction(ordered, BOUNDS_SIZE, BOUNDS_SIZE, BOUNDS_ORIGIN)
        logger.debug("frame %d: light at %r", frame, source)
        print(f"{path}: t={time:g}, {len(ordered)} hits, {lit:.1%} lit")
    return 0


if __name__ == "__main__":
    sys.exit(main())

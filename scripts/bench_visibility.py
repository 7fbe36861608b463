#!/usr/bin/env python3
"""Benchmark the visibility engine on the demo scene.

Usage (from the repository root):
    python scripts/bench_visibility.py          # 5 iterations, 200 frames
    python scripts/bench_visibility.py -n 10    # 10 iterations
    python scripts/bench_visibility.py -f 50    # 50 frames per iteration
"""

import argparse
import statistics
import sys
import time
from pathlib import Path

# Add the repository root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from frontend.demo import light_position  # noqa: E402
from lightcast.scene import demo_scene  # noqa: E402
from lightcast.visibility import compute_visibility  # noqa: E402


def run_frames(frames: int) -> int:
    """Trace ``frames`` consecutive demo frames, returning the hit total."""
    segment_lists = demo_scene()
    total = 0
    for t in range(frames):
        source = light_position(float(t))
        total += len(compute_visibility(source, segment_lists))
    return total


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark the visibility engine"
    )
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=5,
        help="Number of iterations (default: 5)",
    )
    parser.add_argument(
        "-f",
        "--frames",
        type=int,
        default=200,
        help="Number of frames per iteration (default: 200)",
    )
    args = parser.parse_args()

    print(f"Benchmark: demo scene, {args.frames} frames")
    print(f"Iterations: {args.iterations}")
    print()

    # Warmup
    print("Warmup...", end=" ", flush=True)
    run_frames(min(args.frames, 10))
    print("done")

    # Timed runs
    times_ms = []
    hits = 0
    for i in range(args.iterations):
        start = time.perf_counter()
        hits = run_frames(args.frames)
        elapsed_ms = (time.perf_counter() - start) * 1000
        times_ms.append(elapsed_ms)
        print(f"  Run {i + 1}: {elapsed_ms:.1f} ms")

    median = statistics.median(times_ms)
    mean = statistics.mean(times_ms)
    print()
    print(f"Hits per run: {hits}")
    print(f"Median: {median:.1f} ms ({median / args.frames:.2f} ms/frame)")
    print(f"Mean:   {mean:.1f} ms")
    if len(times_ms) > 1:
        stdev = statistics.stdev(times_ms)
        print(f"Stdev:  {stdev:.1f} ms")


if __name__ == "__main__":
    main()

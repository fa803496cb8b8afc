#!/usr/bin/env python3
"""
Profiling harness for the Life raster host.

Runs the update + draw cycle headlessly (no window) under cProfile,
then prints a ranked breakdown of where time is spent.

Usage:
  python3 conway_bench.py                  # 500 frames, summary
  python3 conway_bench.py -n 1000          # 1000 frames
  python3 conway_bench.py --line-timing    # mean per-phase timing
  python3 conway_bench.py --dump prof.out  # dump cProfile binary for snakeviz etc.
"""

from __future__ import annotations

import argparse
import cProfile
import pstats
import time
from io import StringIO

import numpy as np

from conway import INITIAL_LIVE_CELLS, SCREEN_HEIGHT, SCREEN_WIDTH
from conway_render import draw, new_pixel_buffer
from conway_world import World


def run_frames(world: World, pix, n_frames: int) -> dict[str, float]:
    """Run n_frames update+draw cycles; return total seconds per phase."""
    timings = {"update": 0.0, "draw": 0.0}
    for _ in range(n_frames):
        t0 = time.perf_counter()
        world.update()
        t1 = time.perf_counter()
        draw(world, pix)
        t2 = time.perf_counter()
        timings["update"] += t1 - t0
        timings["draw"] += t2 - t1
    return timings


def run_benchmark(
    n_frames: int = 500,
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
    live: int = INITIAL_LIVE_CELLS,
    seed: int | None = None,
    line_timing: bool = False,
    dump_path: str | None = None,
) -> None:
    world = World(width, height, live, rng=np.random.default_rng(seed))
    pix = new_pixel_buffer(width, height)

    print(f"Grid: {width}x{height}  initial population: {world.population}")
    print(f"Frames: {n_frames}")

    if line_timing:
        timings = run_frames(world, pix, n_frames)
        print(f"\n=== Mean per-frame time ({n_frames} frames) ===")
        for phase, total in timings.items():
            print(f"  {phase:<8} {1000.0 * total / max(1, n_frames):8.3f} ms")
        total = sum(timings.values())
        print(f"  {'total':<8} {1000.0 * total / max(1, n_frames):8.3f} ms"
              f"  (~{n_frames / total if total > 0 else 0.0:.0f} frames/s)")
        print(f"\nFinal generation {world.generation}, population {world.population}")
        return

    prof = cProfile.Profile()
    prof.enable()
    run_frames(world, pix, n_frames)
    prof.disable()

    if dump_path:
        prof.dump_stats(dump_path)
        print(f"Profile written to {dump_path}")

    buf = StringIO()
    ps = pstats.Stats(prof, stream=buf).sort_stats("cumulative")
    ps.print_stats(20)
    print("\n=== By Cumulative Time ===")
    print(buf.getvalue())


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the Life update/draw cycle")
    parser.add_argument("-n", "--frames", type=int, default=500,
                        help="Number of frames to simulate (default: 500)")
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH,
                        help=f"Grid columns (default: {SCREEN_WIDTH})")
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT,
                        help=f"Grid rows (default: {SCREEN_HEIGHT})")
    parser.add_argument("--live", type=int, default=None,
                        help="Random activation draws (default: width*height/10)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the initial state")
    parser.add_argument("--line-timing", action="store_true",
                        help="Per-phase timing instead of cProfile")
    parser.add_argument("--dump", type=str, default=None,
                        help="Dump cProfile binary to this path")
    args = parser.parse_args()

    run_benchmark(
        n_frames=args.frames,
        width=args.width,
        height=args.height,
        live=args.width * args.height // 10 if args.live is None else args.live,
        seed=args.seed,
        line_timing=args.line_timing,
        dump_path=args.dump,
    )


if __name__ == "__main__":
    main()

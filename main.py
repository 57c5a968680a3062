#!/usr/bin/env python3
# --------------------------------------------------------
# File: main.py
# Command line entry point: build a point set, run 2-opt
# and stream one frame per accepted swap to stdout.
# --------------------------------------------------------

import sys
import logging
import argparse
from typing import List, Optional
from algorithms.two_opt import TwoOptOptimizer
from core.config import (
    DEFAULT_MAX_COORD, DEFAULT_MAX_SWEEPS, DEFAULT_NUM_POINTS, DEFAULT_SEED,
)
from core.errors import TourError
from core.point_set import PointSet, UniformSource
from visualization.renderer import RecordingRenderer, Renderer, TextRenderer

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """
    Sends log records to stderr; stdout is reserved for the frame stream.

    Args:
        verbosity: 0 for warnings only, 1 for info, 2 or more for debug.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def setup_points(args) -> PointSet:
    """
    Creates the point set described by the command line.

    Loads it from ``args.file`` when ``args.load`` is set, otherwise draws
    ``args.points`` points from a source seeded with ``args.seed``. When
    ``args.save`` is set the result is also written to ``args.file``.
    """
    if args.load:
        points = PointSet.load(args.file)
    else:
        source = UniformSource(args.seed)
        points = PointSet.generate(args.points, args.max_coord, source)

    if args.save:
        points.save(args.file)
    return points


def build_renderer(args) -> Optional[Renderer]:
    """Picks the renderer stack for the requested outputs."""
    text = None if args.no_frames else TextRenderer(sys.stdout)
    if args.animate:
        return RecordingRenderer(forward_to=text)
    return text


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse and return command-line arguments.
    """
    parser = argparse.ArgumentParser(description="Optimize a random tour with 2-opt and stream its frames.")

    # --- Problem ---
    parser.add_argument("-n", "--points", type=int, default=DEFAULT_NUM_POINTS,
                        help="Number of points to generate.")
    parser.add_argument("-s", "--seed", type=int, default=DEFAULT_SEED,
                        help="Seed of the point generator.")
    parser.add_argument("--max-coord", type=float, default=DEFAULT_MAX_COORD,
                        help="Points are drawn from [0, MAX)^2.")

    # --- Search ---
    parser.add_argument("--max-sweeps", type=int, default=DEFAULT_MAX_SWEEPS,
                        help="Upper bound on full 2-opt sweeps.")

    # --- Point files ---
    parser.add_argument("--save", action="store_true", help="Save the points to --file.")
    parser.add_argument("--load", action="store_true", help="Load the points from --file.")
    parser.add_argument("--file", type=str, default="", help="Point file path.")

    # --- Output ---
    parser.add_argument("--no-frames", action="store_true",
                        help="Do not write the frame stream to stdout.")
    parser.add_argument("--animate", action="store_true",
                        help="Replay the recorded frames in a matplotlib window afterwards.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for every sweep).")

    args = parser.parse_args(argv)
    if (args.save or args.load) and not args.file:
        parser.error("--save and --load require --file")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    renderer = build_renderer(args)
    try:
        points = setup_points(args)
        optimizer = TwoOptOptimizer(points, max_sweeps=args.max_sweeps)
        result = optimizer.run(renderer)
    except (TourError, OSError) as e:
        logger.error("Aborting: %s", e)
        return 1

    logger.info("Tour length %.6f -> %.6f (%d swaps, %d sweeps, converged=%s)",
                result.initial_length, result.final_length,
                len(result.swaps), result.sweeps, result.converged)

    if args.animate:
        # Only --animate needs a GUI backend
        from visualization.animator import FramePlayer
        FramePlayer(renderer.frames).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

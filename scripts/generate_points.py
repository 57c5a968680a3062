#!/usr/bin/env python3

import sys
import os
import argparse

# Add project root to sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
sys.path.append(PROJECT_ROOT)

import main
from core.config import DEFAULT_MAX_COORD, DEFAULT_SEED

# Configuration
OUTPUT_DIR = os.path.join(PROJECT_ROOT, "data", "points")

def ensure_dirs():
    """Creates necessary output directories if they don't exist."""
    if not os.path.exists(OUTPUT_DIR):
        os.makedirs(OUTPUT_DIR)
        print(f"Created directory: {OUTPUT_DIR}")

def generate(args):
    """Generates point files for every requested size and seed."""
    ensure_dirs()

    total = len(args.sizes) * args.count
    print(f"Generating {total} point sets...")

    # Reuse main.py logic to setup and save
    args.save = True
    args.load = False

    for size in args.sizes:
        args.points = size
        for i in range(args.count):
            args.seed = args.base_seed + i
            args.file = os.path.join(OUTPUT_DIR, f"points_n{size}_s{args.seed}.txt")
            main.setup_points(args)

    print(f"Done. {total} point sets saved to {OUTPUT_DIR}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate random point set files.")
    parser.add_argument("-c", "--count", type=int, default=20, help="Point sets per size")
    parser.add_argument("--sizes", type=int, nargs="+", default=[20, 50, 100], help="Point counts")
    parser.add_argument("-s", "--base-seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--max-coord", type=float, default=DEFAULT_MAX_COORD)

    args = parser.parse_args()
    generate(args)

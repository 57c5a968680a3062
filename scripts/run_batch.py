#!/usr/bin/env python3

import sys
import os
import csv
import time
import argparse
from typing import Dict, Any

# Add project root to sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
sys.path.append(PROJECT_ROOT)

from algorithms.two_opt import TwoOptOptimizer
from core.config import DEFAULT_MAX_SWEEPS
from core.errors import TourError
from core.point_set import PointSet

# Configuration
POINTS_DIR = os.path.join(PROJECT_ROOT, "data", "points")
RESULTS_DIR = os.path.join(PROJECT_ROOT, "data", "results")

FIELDS = ["point_file", "points", "initial_length", "final_length", "improvement",
          "swaps", "sweeps", "converged", "local_optimum", "cpu_time"]

def run_single(point_path: str, max_sweeps: int) -> Dict[str, Any]:
    """Optimizes one point file without rendering and collects its metrics."""
    points = PointSet.load(point_path)
    optimizer = TwoOptOptimizer(points, max_sweeps=max_sweeps)

    start_time = time.process_time()
    result = optimizer.run()
    cpu_time = time.process_time() - start_time

    return {
        "point_file": os.path.basename(point_path),
        "points": len(points),
        "initial_length": result.initial_length,
        "final_length": result.final_length,
        "improvement": result.improvement,
        "swaps": len(result.swaps),
        "sweeps": result.sweeps,
        "converged": result.converged,
        # Confirms the final tour admits no acceptable 2-opt move
        "local_optimum": optimizer.is_local_optimum(),
        "cpu_time": cpu_time,
    }

def batch_run(args):
    """Iterates over all point files and writes one CSV row per run."""
    if not os.path.exists(RESULTS_DIR):
        os.makedirs(RESULTS_DIR)

    csv_file = os.path.join(RESULTS_DIR, "stats_two_opt.csv")
    point_files = sorted([f for f in os.listdir(POINTS_DIR) if f.endswith(".txt")])

    print(f"Running 2-opt on {len(point_files)} point sets...")

    with open(csv_file, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()

        for i, fname in enumerate(point_files):
            print(f"  [{i+1}/{len(point_files)}] Processing {fname}...", end="\r")
            try:
                row = run_single(os.path.join(POINTS_DIR, fname), args.max_sweeps)
            except TourError as e:
                print(f"\n  [Error] {fname}: {e}")
                continue
            writer.writerow(row)

    print(f"\nCompleted. Results saved to {csv_file}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run 2-opt over every generated point set.")
    parser.add_argument("--max-sweeps", type=int, default=DEFAULT_MAX_SWEEPS)

    args = parser.parse_args()
    batch_run(args)

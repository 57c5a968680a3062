#!/usr/bin/env python3

import os
import csv
import matplotlib.pyplot as plt
import numpy as np

# Path Config
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
RESULTS_DIR = os.path.join(PROJECT_ROOT, "data", "results")
STATS_FILE = os.path.join(RESULTS_DIR, "stats_two_opt.csv")

def load_data():
    """Loads the batch CSV grouped by point count."""
    data = {} # {n_points: {'improvement': [], 'swaps': [], 'cpu': [], 'converged': 0, 'total': 0}}

    if not os.path.exists(STATS_FILE):
        print(f"File not found: {STATS_FILE}")
        return data

    with open(STATS_FILE, 'r') as f:
        reader = csv.DictReader(f)
        for row in reader:
            n = int(row['points'])
            if n not in data:
                data[n] = {'improvement': [], 'swaps': [], 'cpu': [], 'converged': 0, 'total': 0}
            data[n]['total'] += 1
            if row['converged'] == 'True':
                data[n]['converged'] += 1
            data[n]['improvement'].append(float(row['improvement']) * 100)
            data[n]['swaps'].append(int(row['swaps']))
            data[n]['cpu'].append(float(row['cpu_time']))

    return data

def add_labels(ax, rects, format_str="{:.1f}"):
    """Attach a text label above each bar in *rects*, displaying its height."""
    for rect in rects:
        height = rect.get_height()
        ax.annotate(format_str.format(height),
                    xy=(rect.get_x() + rect.get_width() / 2, height),
                    xytext=(0, 3),  # 3 points vertical offset
                    textcoords="offset points",
                    ha='center', va='bottom', fontsize=10, fontweight='bold')

def plot_summary(data):
    """Draws bar charts with error bars, one group per point count."""
    sizes = sorted(data.keys())
    if not sizes:
        print("No data found to plot. Did you run the batch?")
        return

    labels = [f"N={n}" for n in sizes]
    avg_impr = [np.mean(data[n]['improvement']) for n in sizes]
    std_impr = [np.std(data[n]['improvement']) for n in sizes]
    avg_swaps = [np.mean(data[n]['swaps']) for n in sizes]
    std_swaps = [np.std(data[n]['swaps']) for n in sizes]
    avg_cpu = [np.mean(data[n]['cpu']) for n in sizes]
    std_cpu = [np.std(data[n]['cpu']) for n in sizes]

    # Setup Figure
    fig, axes = plt.subplots(1, 3, figsize=(18, 6))
    colors = ['#95a5a6', '#3498db', '#2ecc71'] # Gray, Blue, Green

    # --- Chart 1: Length reduction ---
    bars1 = axes[0].bar(labels, avg_impr, yerr=std_impr, capsize=5,
                        color=colors, alpha=0.8, edgecolor='black')
    axes[0].set_title("Avg. Length Reduction (Higher is Better)", fontsize=14)
    axes[0].set_ylabel("Percentage (%)", fontsize=12)
    axes[0].grid(True, axis='y', linestyle='--', alpha=0.5)
    add_labels(axes[0], bars1, "{:.1f}%")

    # --- Chart 2: Accepted swaps ---
    bars2 = axes[1].bar(labels, avg_swaps, yerr=std_swaps, capsize=5,
                        color=colors, alpha=0.8, edgecolor='black')
    axes[1].set_title("Avg. Accepted Swaps", fontsize=14)
    axes[1].set_ylabel("Swaps", fontsize=12)
    axes[1].grid(True, axis='y', linestyle='--', alpha=0.5)
    add_labels(axes[1], bars2, "{:.0f}")

    # --- Chart 3: CPU time ---
    bars3 = axes[2].bar(labels, avg_cpu, yerr=std_cpu, capsize=5,
                        color=colors, alpha=0.8, edgecolor='black')
    axes[2].set_title("Avg. CPU Time (Lower is Better)", fontsize=14)
    axes[2].set_ylabel("Time (s)", fontsize=12)
    axes[2].grid(True, axis='y', linestyle='--', alpha=0.5)
    add_labels(axes[2], bars3, "{:.2f}s")

    for n in sizes:
        print(f"N={n}: {data[n]['converged']}/{data[n]['total']} runs converged")

    # Final Layout
    plt.suptitle("2-Opt Performance by Problem Size", fontsize=16, y=1.02)
    plt.tight_layout()

    # Save
    output_path = os.path.join(RESULTS_DIR, "two_opt_summary.png")
    plt.savefig(output_path, bbox_inches='tight', dpi=150)
    print(f"Chart saved to: {output_path}")

    # Show
    plt.show()

if __name__ == "__main__":
    data = load_data()
    plot_summary(data)

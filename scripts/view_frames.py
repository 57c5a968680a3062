#!/usr/bin/env python3

import sys
import os
import argparse

# Add project root to sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
sys.path.append(PROJECT_ROOT)

from core.errors import ProtocolError
from visualization.animator import FramePlayer
from visualization.wire import parse_stream

def parse_args():
    """
    Parse and return command-line arguments.
    """
    parser = argparse.ArgumentParser(description="Replay a frame stream in a matplotlib window.")
    parser.add_argument("file", nargs="?", default="-",
                        help="Stream file to read; '-' (default) reads standard input.")
    parser.add_argument("--interval", type=int, default=50, help="Delay between frames in ms.")
    parser.add_argument("--no-labels", action="store_true", help="Hide marker labels.")
    parser.add_argument("--save", type=str, default="",
                        help="Write the animation to this file instead of showing it.")
    return parser.parse_args()

if __name__ == "__main__":
    args = parse_args()

    # read the whole stream before playing it
    if args.file == "-":
        input_data = sys.stdin.read()
    else:
        with open(args.file, 'r') as f:
            input_data = f.read()

    if not input_data:
        print('Error: No frame data received.', file=sys.stderr)
        sys.exit(1)

    try:
        frames = parse_stream(input_data)
    except ProtocolError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(frames)} frames.", file=sys.stderr)
    player = FramePlayer(frames, interval=args.interval, show_labels=not args.no_labels)
    player.run(save_path=args.save or None, save_count=len(frames))

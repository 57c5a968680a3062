# --------------------------------------------------------
# File: core/config.py
# Central registry of default run parameters and numeric
# constants shared by the optimizer and the renderer.
# --------------------------------------------------------

import numpy as np

# Point generation
DEFAULT_NUM_POINTS = 100
DEFAULT_SEED = 768
DEFAULT_MAX_COORD = 20.0

# Optimizer
DEFAULT_MAX_SWEEPS = 100
# Swaps with a gain below this are treated as floating-point noise
ACCEPT_EPSILON = 1e-9

# All coordinates, distances and deltas share this precision
COORD_DTYPE = np.float32

# Rendering
MARKER_MARGIN = 0.1
FRAME_PADDING = 1.0
COORD_DECIMALS = 6

# Nine significant digits round-trip any float32 exactly
POINT_FILE_FORMAT = "%.9g"

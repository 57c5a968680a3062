# --------------------------------------------------------
# File: core/point_set.py
# Implement the immutable point set and the seeded random
# source used to generate it.
# --------------------------------------------------------

import logging
import numpy as np
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
from core.config import COORD_DTYPE, POINT_FILE_FORMAT
from core.errors import InvalidInput

logger = logging.getLogger(__name__)

Bounds = Tuple[Tuple[float, float], Tuple[float, float]]

_TWO_POW_32 = np.float32(4294967296.0)
_BELOW_ONE = np.nextafter(np.float32(1.0), np.float32(0.0))


class UniformSource:
    """
    Seeded source of single-precision uniform reals.

    Implements the ``mt19937-canonical24`` algorithm: a 32-bit Mersenne
    Twister seeded with ``init_genrand(seed)`` (numpy's legacy seeding), where
    every draw consumes exactly one 32-bit word and maps it to ``[0, 1)`` with
    24 bits of float32 precision before scaling into the requested range.

    Each generator owns its own engine; there is no shared global state, so
    two sources built from the same seed produce identical streams.

    Attributes:
        seed (int): The seed the engine was initialized with.
    """

    ALGORITHM = "mt19937-canonical24"

    def __init__(self, seed: int) -> None:
        """
        Args:
            seed: Unsigned 32-bit seed.
        """
        if not 0 <= seed <= 0xFFFFFFFF:
            raise InvalidInput(f"Seed must fit in 32 unsigned bits, got {seed}")
        self.seed = seed
        self._engine = np.random.RandomState(seed)

    def next_word(self) -> int:
        """Returns the next raw 32-bit output of the engine."""
        return int(self._engine.randint(0, 2**32, dtype=np.uint32))

    def canonical(self) -> np.float32:
        """Returns a float32 in [0, 1) built from a single engine word."""
        r = np.float32(self.next_word()) / _TWO_POW_32
        if r >= 1.0:
            r = _BELOW_ONE
        return r

    def uniform(self, low: float, high: float) -> np.float32:
        """Returns a float32 drawn uniformly from [low, high)."""
        low = np.float32(low)
        span = np.float32(high) - low
        return self.canonical() * span + low


@dataclass(frozen=True)
class Point:
    """A single labelled coordinate pair."""
    index: int
    x: float
    y: float


class PointSet:
    """
    Ordered, read-only collection of 2D points.

    Coordinates are stored as a non-writeable ``(N, 2)`` float32 array. The
    pairwise distance matrix is computed lazily, once, in the same precision.

    Attributes:
        bounds (Bounds): ``((min_x, min_y), (max_x, max_y))`` of the region the
            points live in. Generated sets report the generation range,
            externally supplied sets report their extent.
    """

    def __init__(self, coordinates, bounds: Optional[Bounds] = None) -> None:
        """
        Args:
            coordinates: Anything convertible to an ``(N, 2)`` float array.
            bounds: Optional explicit bounding region.

        Raises:
            InvalidInput: If the array is malformed, has non-finite entries or
                holds fewer than three points.
        """
        try:
            coords = np.array(coordinates, dtype=COORD_DTYPE)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Coordinates are not numeric: {e}") from e

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise InvalidInput(f"Expected an (N, 2) coordinate array, got shape {coords.shape}")
        if len(coords) < 3:
            raise InvalidInput(f"At least 3 points are needed to form a cycle, got {len(coords)}")
        if not np.all(np.isfinite(coords)):
            raise InvalidInput("Coordinates must be finite")

        coords.setflags(write=False)
        self._coords = coords
        self._dist: Optional[np.ndarray] = None

        if bounds is None:
            lo = coords.min(axis=0)
            hi = coords.max(axis=0)
            bounds = ((lo[0], lo[1]), (hi[0], hi[1]))
        (x0, y0), (x1, y1) = bounds
        self.bounds: Bounds = ((float(x0), float(y0)), (float(x1), float(y1)))

    def __len__(self) -> int:
        return len(self._coords)

    def __getitem__(self, index: int) -> Point:
        x, y = self._coords[index]
        return Point(int(index), float(x), float(y))

    def __iter__(self) -> Iterator[Point]:
        for i in range(len(self)):
            yield self[i]

    def __repr__(self) -> str:
        return f"PointSet(n={len(self)}, bounds={self.bounds})"

    @property
    def coordinates(self) -> np.ndarray:
        """Read-only ``(N, 2)`` view of the coordinates."""
        return self._coords

    def distance_matrix(self) -> np.ndarray:
        """
        Returns the read-only ``(N, N)`` Euclidean distance matrix.

        Entries are computed as ``sqrt(dx * dx + dy * dy)`` in float32.
        """
        if self._dist is None:
            diff = self._coords[:, np.newaxis, :] - self._coords[np.newaxis, :, :]
            dx = diff[..., 0]
            dy = diff[..., 1]
            dist = np.sqrt(dx * dx + dy * dy)
            dist.setflags(write=False)
            self._dist = dist
        return self._dist

    def distance(self, i: int, j: int) -> float:
        """Euclidean distance between points ``i`` and ``j``."""
        return float(self.distance_matrix()[i, j])

    # *****************************************
    # Construction helpers
    # *****************************************
    @classmethod
    def generate(cls, count: int, max_coord: float, source: UniformSource) -> "PointSet":
        """
        Draws ``count`` points uniformly from ``[0, max_coord)^2``.

        For each point in index order, x is drawn first and then y, so the
        output is fully determined by the source's seed.

        Args:
            count: Number of points (at least 3).
            max_coord: Exclusive upper end of both coordinate ranges.
            source: The random source to consume.

        Returns:
            A new PointSet whose bounds are ``((0, 0), (max_coord, max_coord))``.
        """
        if count < 3:
            raise InvalidInput(f"At least 3 points are needed to form a cycle, got {count}")
        if not max_coord > 0:
            raise InvalidInput(f"Coordinate range must be positive, got {max_coord}")

        coords = np.empty((count, 2), dtype=COORD_DTYPE)
        for i in range(count):
            coords[i, 0] = source.uniform(0.0, max_coord)
            coords[i, 1] = source.uniform(0.0, max_coord)

        logger.debug("Generated %d points with %s (seed=%d)", count, source.ALGORITHM, source.seed)
        return cls(coords, bounds=((0.0, 0.0), (max_coord, max_coord)))

    def save(self, path: str) -> None:
        """
        Writes the points to a text file, one ``x y`` pair per line.

        The bounds are stored in a leading ``# bounds`` comment so that frames
        drawn from a reloaded set keep the same bounding box.
        """
        (x0, y0), (x1, y1) = self.bounds
        np.savetxt(path, self._coords, fmt=POINT_FILE_FORMAT,
                   header=f"bounds {x0!r} {y0!r} {x1!r} {y1!r}")
        logger.info("Saved %d points to %s", len(self), path)

    @classmethod
    def load(cls, path: str) -> "PointSet":
        """
        Reads a point file written by :meth:`save` (or any two-column file).

        Raises:
            InvalidInput: If the file does not hold a valid point set.
        """
        bounds = None
        try:
            with open(path, 'r') as f:
                first_line = f.readline()
        except UnicodeDecodeError as e:
            raise InvalidInput(f"Cannot read points from {path}: {e}") from e
        if first_line.startswith("# bounds"):
            try:
                x0, y0, x1, y1 = (float(v) for v in first_line.split()[2:])
                bounds = ((x0, y0), (x1, y1))
            except ValueError:
                logger.warning("Ignoring malformed bounds line in %s", path)

        try:
            coords = np.loadtxt(path, dtype=np.float64, ndmin=2)
        except ValueError as e:
            raise InvalidInput(f"Cannot read points from {path}: {e}") from e

        points = cls(coords, bounds=bounds)
        logger.info("Loaded %d points from %s", len(points), path)
        return points

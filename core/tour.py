# --------------------------------------------------------
# File: core/tour.py
# Implement the Tour entity: a cyclic permutation of point
# indices and the segment reversal used by 2-opt.
# --------------------------------------------------------

import numpy as np
from typing import Iterator, List, Sequence, Tuple
from core.errors import InvalidInput, NumericInstability
from core.point_set import PointSet


class Tour:
    """
    A closed tour over ``N`` points, stored as a permutation of ``0..N-1``.

    The successor of the last position is the first one. The backing array is
    private: :attr:`order` and :meth:`edges` always hand out copies, so the
    only way to change a tour is through :meth:`reverse_segment`.
    """

    def __init__(self, order: Sequence[int]) -> None:
        """
        Args:
            order: A permutation of ``0..len(order)-1``.

        Raises:
            InvalidInput: If ``order`` is not a permutation.
        """
        raw = np.asarray(order)
        if raw.size and raw.dtype.kind not in "iu":
            raise InvalidInput(f"Tour order must hold integer indices, got {list(order)}")
        perm = np.array(raw, dtype=np.int64)
        if perm.ndim != 1 or not _is_permutation(perm):
            raise InvalidInput(f"Tour order must be a permutation of 0..N-1, got {list(order)}")
        self._perm = perm

    @classmethod
    def identity(cls, size: int) -> "Tour":
        """Returns the tour ``[0, 1, ..., size-1]``."""
        return cls(np.arange(size))

    def __len__(self) -> int:
        return len(self._perm)

    def __getitem__(self, position: int) -> int:
        return int(self._perm[position])

    def __iter__(self) -> Iterator[int]:
        return iter(self.order)

    def __repr__(self) -> str:
        return f"Tour({self.order})"

    @property
    def order(self) -> List[int]:
        """A copy of the current visiting order."""
        return self._perm.tolist()

    def edges(self) -> List[Tuple[int, int]]:
        """
        Returns the tour edges in cyclic order.

        Edge ``k`` joins ``tour[k]`` and ``tour[(k + 1) mod N]``.
        """
        succ = np.roll(self._perm, -1)
        return list(zip(self._perm.tolist(), succ.tolist()))

    def length(self, points: PointSet) -> float:
        """Total length of the closed tour over ``points``."""
        return tour_length(self._perm, points)

    def reverse_segment(self, start: int, length: int) -> None:
        """
        Reverses the cyclic arc of ``length`` positions beginning at ``start``.

        The whole permutation is rotated left by ``start`` so the arc begins at
        index 0, the first ``length`` entries are reversed in place, and the
        permutation is rotated back. No rotation happens when ``start == 0``.

        Args:
            start: Position of the first element of the arc.
            length: Number of positions in the arc.

        Raises:
            InvalidInput: If ``start`` or ``length`` is out of range.
            NumericInstability: If the result is no longer a permutation.
        """
        n = len(self._perm)
        if not 0 <= start < n:
            raise InvalidInput(f"Segment start {start} outside 0..{n - 1}")
        if not 0 <= length <= n:
            raise InvalidInput(f"Segment length {length} outside 0..{n}")

        perm = self._perm
        if start > 0:
            perm = np.roll(perm, -start)
        perm[:length] = perm[:length][::-1].copy()
        if start > 0:
            perm = np.roll(perm, start)
        self._perm = perm

        self.validate()

    def validate(self) -> None:
        """
        Checks that the tour is still a permutation of ``0..N-1``.

        Raises:
            NumericInstability: If an index is duplicated or missing.
        """
        if not _is_permutation(self._perm):
            raise NumericInstability(f"Tour is no longer a permutation: {self._perm.tolist()}")


def _is_permutation(perm: np.ndarray) -> bool:
    return np.array_equal(np.sort(perm), np.arange(len(perm)))


def tour_length(order: Sequence[int], points: PointSet) -> float:
    """
    Sums the distances between consecutive cyclic pairs of ``order``.

    The per-edge distances come from the float32 distance matrix and are
    accumulated edge by edge in the same precision.
    """
    perm = np.asarray(order, dtype=np.int64)
    dist = points.distance_matrix()
    total = np.float32(0.0)
    for a, b in zip(perm, np.roll(perm, -1)):
        total += dist[a, b]
    return float(total)

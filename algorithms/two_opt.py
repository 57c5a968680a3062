# --------------------------------------------------------
# File: algorithms/two_opt.py
# Implement 2-opt local search with incremental delta
# evaluation and cyclic segment reversal.
# --------------------------------------------------------

import logging
import numpy as np
from typing import Iterator, Optional, Sequence
from algorithms.base import BaseOptimizer, SwapEvent
from core.config import ACCEPT_EPSILON, DEFAULT_MAX_SWEEPS
from core.errors import InvalidInput
from core.point_set import PointSet

logger = logging.getLogger(__name__)


class TwoOptOptimizer(BaseOptimizer):
    """
    First-improvement 2-opt over a closed tour.

    A sweep visits every start position ``i`` and every arc length ``l`` in
    ``2..N-2``. The candidate move removes edges ``(p, i)`` and ``(q, j)``
    and adds ``(i, j)`` and ``(p, q)``, where ``j = i + l`` and ``p``, ``q``
    are the cyclic predecessors of ``i`` and ``j``; it is realized by
    reversing the arc of length ``l`` starting at ``i``.

    Moves are applied as soon as they are found, so later candidates in the
    same sweep are evaluated against the updated tour. The search stops
    after a sweep without a strictly positive gain, or after ``max_sweeps``.

    Attributes:
        max_sweeps (int): Upper bound on the number of sweeps.
        epsilon (float): Minimum gain for a move to be accepted.
    """

    def __init__(self, points: PointSet, initial_order: Optional[Sequence[int]] = None,
                 max_sweeps: int = DEFAULT_MAX_SWEEPS, epsilon: float = ACCEPT_EPSILON) -> None:
        """
        Args:
            points: The point set to optimize over.
            initial_order: Starting permutation; the identity when omitted.
            max_sweeps: Sweep cap, at least 1.
            epsilon: Acceptance threshold for the gain of a move.
        """
        super().__init__(points, initial_order)
        if max_sweeps < 1:
            raise InvalidInput(f"max_sweeps must be at least 1, got {max_sweeps}")
        self.max_sweeps = max_sweeps
        self.epsilon = epsilon
        self._dist = points.distance_matrix()

    def swap_delta(self, i: int, length: int) -> np.float32:
        """
        Gain of reversing the arc of ``length`` positions starting at ``i``.

        Computed as ``d(t[i], t[p]) + d(t[j], t[q]) - d(t[i], t[j]) - d(t[p], t[q])``
        left to right in float32. Positive values shorten the tour.
        """
        n = len(self._tour)
        j = (i + length) % n
        p = (i - 1 + n) % n
        q = (j - 1 + n) % n

        ti = self._tour[i]
        tj = self._tour[j]
        tp = self._tour[p]
        tq = self._tour[q]
        dist = self._dist
        return dist[ti, tp] + dist[tj, tq] - dist[ti, tj] - dist[tp, tq]

    def iter_swaps(self) -> Iterator[SwapEvent]:
        n = len(self._tour)

        for sweep in range(self.max_sweeps):
            shrunk = False
            logger.debug("Sweep %d, length %.6f", sweep, self.tour_length())

            for i in range(n):
                for length in range(2, n - 1):
                    delta = self.swap_delta(i, length)
                    if float(delta) >= self.epsilon:
                        shrunk |= bool(delta > 0)
                        self._tour.reverse_segment(i, length)
                        yield SwapEvent(sweep, i, length, float(delta))

            self.sweeps_run = sweep + 1
            if not shrunk:
                self.converged = True
                logger.info("Converged after %d sweeps", self.sweeps_run)
                return

        logger.warning("Stopped at the sweep cap of %d without converging", self.max_sweeps)

    def is_local_optimum(self) -> bool:
        """
        Checks the current tour for any remaining acceptable move.

        Returns:
            True if no ``(i, l)`` pair yields a gain of at least ``epsilon``.
        """
        n = len(self._tour)
        for i in range(n):
            for length in range(2, n - 1):
                if float(self.swap_delta(i, length)) >= self.epsilon:
                    return False
        return True

# --------------------------------------------------------
# File: algorithms/base.py
# Base class for tour improvement heuristics, defining the
# run loop shared by every optimizer.
# --------------------------------------------------------

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence
from core.errors import InvalidInput
from core.point_set import PointSet
from core.tour import Tour
from visualization.renderer import Renderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapEvent:
    """
    An accepted improvement move.

    Attributes:
        sweep (int): Zero-based sweep in which the move was accepted.
        position (int): Tour position where the reversed arc starts.
        length (int): Number of positions in the reversed arc.
        delta (float): Length saved by the move, as evaluated.
    """
    sweep: int
    position: int
    length: int
    delta: float


@dataclass
class OptimizationResult:
    """Summary of a finished optimizer run."""
    order: List[int]
    initial_length: float
    final_length: float
    sweeps: int
    converged: bool
    swaps: List[SwapEvent] = field(default_factory=list)

    @property
    def improvement(self) -> float:
        """Fraction of the initial length removed by the run."""
        if self.initial_length == 0:
            return 0.0
        return (self.initial_length - self.final_length) / self.initial_length


class BaseOptimizer(ABC):
    """
    Abstract base class for local search over a single tour.

    The optimizer exclusively owns its :class:`Tour`; callers only see
    copies of the order, and renderers receive the tour for reading. Derived
    classes implement :meth:`iter_swaps`, which mutates the tour and yields
    one :class:`SwapEvent` per accepted move.

    Attributes:
        points (PointSet): The points being toured.
        sweeps_run (int): Number of completed sweeps.
        converged (bool): True once a sweep finds no improving move.
    """

    def __init__(self, points: PointSet, initial_order: Optional[Sequence[int]] = None) -> None:
        """
        Args:
            points: The point set to optimize over.
            initial_order: Starting permutation; the identity when omitted.

        Raises:
            InvalidInput: If the order does not match the point set.
        """
        self.points = points
        if initial_order is None:
            self._tour = Tour.identity(len(points))
        else:
            self._tour = Tour(initial_order)
        if len(self._tour) != len(points):
            raise InvalidInput(f"Tour has {len(self._tour)} entries but there are {len(points)} points")

        self.sweeps_run = 0
        self.converged = False
        self._started = False

    @property
    def order(self) -> List[int]:
        """A copy of the current visiting order."""
        return self._tour.order

    def tour_length(self) -> float:
        return self._tour.length(self.points)

    @abstractmethod
    def iter_swaps(self) -> Iterator[SwapEvent]:
        """
        Runs the search, yielding after each accepted move.

        The tour is already updated when an event is yielded, and the search
        resumes from the updated tour.
        """
        pass

    def run(self, renderer: Optional[Renderer] = None) -> OptimizationResult:
        """
        Runs the search to completion.

        The renderer, if any, draws the initial tour and then the tour after
        each accepted move, in acceptance order, before the search continues.

        Args:
            renderer: Receives one draw call per frame.

        Returns:
            OptimizationResult: Final order, lengths and accepted moves.

        Raises:
            RuntimeError: If this optimizer has already run.
        """
        if self._started:
            raise RuntimeError("An optimizer instance can only run once")
        self._started = True

        initial_length = self.tour_length()
        logger.info("Starting %s on %d points, initial length %.6f",
                    type(self).__name__, len(self.points), initial_length)

        if renderer is not None:
            renderer.draw(self.points, self._tour)

        swaps: List[SwapEvent] = []
        for event in self.iter_swaps():
            swaps.append(event)
            if renderer is not None:
                renderer.draw(self.points, self._tour)

        final_length = self.tour_length()
        logger.info("Finished after %d sweeps and %d swaps, final length %.6f",
                    self.sweeps_run, len(swaps), final_length)

        return OptimizationResult(
            order=self.order,
            initial_length=initial_length,
            final_length=final_length,
            sweeps=self.sweeps_run,
            converged=self.converged,
            swaps=swaps,
        )

import matplotlib

matplotlib.use("Agg")

import pytest

from core.point_set import PointSet, UniformSource


class LengthProbe:
    """Renderer that records the tour order and length at every draw."""

    def __init__(self):
        self.orders = []
        self.lengths = []

    def draw(self, points, tour):
        self.orders.append(tour.order)
        self.lengths.append(tour.length(points))


@pytest.fixture
def square():
    # 0:(0,0) 1:(10,0) 2:(10,10) 3:(0,10)
    return PointSet([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)])


@pytest.fixture
def random_points():
    return PointSet.generate(15, 20.0, UniformSource(7))


@pytest.fixture
def probe():
    return LengthProbe()


def reverse_arc_directly(order, start, length):
    """Reverses the cyclic arc without any rotation, position by position."""
    n = len(order)
    result = list(order)
    positions = [(start + k) % n for k in range(length)]
    values = [order[p] for p in positions]
    for p, v in zip(positions, reversed(values)):
        result[p] = v
    return result

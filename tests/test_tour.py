import numpy as np
import pytest

from conftest import reverse_arc_directly
from core.errors import InvalidInput, NumericInstability
from core.tour import Tour, tour_length


def test_identity_tour():
    tour = Tour.identity(5)
    assert tour.order == [0, 1, 2, 3, 4]
    assert len(tour) == 5
    assert tour[4] == 4


def test_rejects_non_permutation():
    with pytest.raises(InvalidInput):
        Tour([0, 1, 1, 3])
    with pytest.raises(InvalidInput):
        Tour([0, 1, 2, 4])


def test_edges_wrap_around():
    tour = Tour([2, 0, 1])
    assert tour.edges() == [(2, 0), (0, 1), (1, 2)]


def test_order_is_a_copy():
    tour = Tour.identity(4)
    order = tour.order
    order[0] = 3
    assert tour.order == [0, 1, 2, 3]


def test_reverse_segment_with_start_zero():
    order = [3, 0, 5, 1, 4, 2]
    tour = Tour(order)
    tour.reverse_segment(0, 3)
    assert tour.order == [5, 0, 3, 1, 4, 2]
    assert tour.order == reverse_arc_directly(order, 0, 3)


def test_reverse_segment_inside_array():
    order = [3, 0, 5, 1, 4, 2]
    tour = Tour(order)
    tour.reverse_segment(2, 3)
    assert tour.order == [3, 0, 4, 1, 5, 2]
    assert tour.order == reverse_arc_directly(order, 2, 3)


def test_reverse_segment_wrapping_past_the_end():
    order = [3, 0, 5, 1, 4, 2]
    tour = Tour(order)
    tour.reverse_segment(4, 4)
    assert tour.order == [2, 4, 5, 1, 0, 3]
    assert tour.order == reverse_arc_directly(order, 4, 4)


def test_reverse_segment_matches_direct_reversal_everywhere():
    order = [3, 0, 5, 1, 4, 2]
    for start in range(6):
        for length in range(2, 5):
            tour = Tour(order)
            tour.reverse_segment(start, length)
            assert tour.order == reverse_arc_directly(order, start, length)


def test_reverse_segment_rejects_bad_arguments():
    tour = Tour.identity(6)
    with pytest.raises(InvalidInput):
        tour.reverse_segment(6, 2)
    with pytest.raises(InvalidInput):
        tour.reverse_segment(0, 7)


def test_rejects_non_integer_order():
    with pytest.raises(InvalidInput):
        Tour([0.9, 1.5, 2.2])
    with pytest.raises(InvalidInput):
        Tour([0.0, 1.0, 2.0])


def test_validate_detects_corruption():
    tour = Tour.identity(4)
    tour._perm = np.array([0, 1, 1, 3])
    with pytest.raises(NumericInstability):
        tour.validate()


def test_tour_length_of_square(square):
    assert tour_length([0, 1, 2, 3], square) == pytest.approx(40.0)
    crossed = 20.0 + 2 * np.sqrt(200.0)
    assert tour_length([0, 2, 1, 3], square) == pytest.approx(crossed, rel=1e-6)
    assert Tour([0, 2, 1, 3]).length(square) == pytest.approx(crossed, rel=1e-6)

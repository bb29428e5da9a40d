import math

import pytest

from antsp import TSPInstance


@pytest.fixture
def two_towns():
    return [[0, 5], [5, 0]]


@pytest.fixture
def unit_square():
    d = math.sqrt(2.0)
    # corners of a unit square, cycle 0-1-2-3 has length 4
    return [
        [0, 1, d, 1],
        [1, 0, 1, d],
        [d, 1, 0, 1],
        [1, d, 1, 0],
    ]


@pytest.fixture
def ten_towns():
    return TSPInstance.random_euclidean(10, seed=3).distances()

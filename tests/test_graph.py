import math

import numpy as np
import pytest

from antsp import ConfigurationError, DistanceMatrix, TSPInstance, load_matrix


def test_offset_applied_and_removed(two_towns):
    g = DistanceMatrix(two_towns)
    assert g.n == 2
    assert g.weight(0, 1) == 6.0
    assert g.tour_length([0, 1]) == 12.0
    assert g.true_length(g.tour_length([1, 0])) == 10.0


def test_tour_length_includes_wrap_edge():
    g = DistanceMatrix([[0, 1, 10], [2, 0, 3], [4, 20, 0]])
    # 0->1 (1+1), 1->2 (3+1), 2->0 (4+1)
    assert g.tour_length([0, 1, 2]) == 11.0
    # directed: the reverse cycle differs
    assert g.tour_length([0, 2, 1]) == 35.0


@pytest.mark.parametrize("weights", [
    [],
    [[0, 1, 2], [1, 0, 2]],
    [[0, -1], [1, 0]],
    [[0, float("nan")], [1, 0]],
    [[0, float("inf")], [1, 0]],
    [[0, "x"], [1, 0]],
])
def test_invalid_matrices_rejected(weights):
    with pytest.raises(ConfigurationError):
        DistanceMatrix(weights)


def test_matrix_is_read_only(two_towns):
    g = DistanceMatrix(two_towns)
    with pytest.raises(ValueError):
        g.W[0, 1] = 0.0


def test_load_matrix(tmp_path):
    p = tmp_path / "m.txt"
    p.write_text("0  3 4\n\n3 0   5\n4 5 0 \n", encoding="utf-8")
    g = load_matrix(str(p))
    assert g.n == 3
    assert g.to_list() == [[0, 3, 4], [3, 0, 5], [4, 5, 0]]


@pytest.mark.parametrize("text", ["0 1\n1 x\n", "0 1 2\n1 0\n", "0 -1\n1 0\n", "\n\n"])
def test_load_matrix_errors(tmp_path, text):
    p = tmp_path / "bad.txt"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_matrix(str(p))


def test_load_matrix_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_matrix(str(tmp_path / "nope.txt"))


def test_euclidean_instance_feeds_distance_matrix():
    inst = TSPInstance.random_euclidean(6, seed=4)
    assert inst == TSPInstance.random_euclidean(6, seed=4)
    g = inst.distance_matrix()
    assert g.n == 6
    assert np.allclose(g.raw, g.raw.T)
    assert np.all(np.diag(g.raw) == 0)
    (x0, y0), (x1, y1) = inst.coords[0], inst.coords[1]
    assert g.weight(0, 1) == pytest.approx(math.hypot(x0 - x1, y0 - y1) + 1.0)

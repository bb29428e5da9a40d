import timeit

import numpy as np
import pytest

from antsp.fast_pow import approx_pow, exact_pow, power_function


def test_exponent_one_is_nearly_identity():
    for a in [0.001, 0.3, 1.0, 2.0, 7.5, 1234.5]:
        assert approx_pow(a, 1.0) == pytest.approx(a, rel=1e-5)
    assert approx_pow(2.0, 1.0) == 2.0


@pytest.mark.parametrize("exponent, tol", [(2.0, 0.15), (5.0, 0.3), (0.5, 0.15)])
def test_close_to_real_power(exponent, tol):
    bases = np.linspace(0.05, 20.0, 200)
    approx = approx_pow(bases, exponent)
    exact = bases ** exponent
    assert np.all(np.abs(approx - exact) <= tol * exact)


def test_monotone_in_base():
    bases = np.sort(np.concatenate([np.linspace(0.0, 3.0, 500), np.logspace(-6, 6, 500)]))
    for exponent in [0.5, 1.0, 5.0]:
        out = approx_pow(bases, exponent)
        assert np.all(np.diff(out) >= 0)


def test_monotone_in_exponent_above_one():
    exps = np.linspace(0.0, 8.0, 100)
    out = [approx_pow(3.7, e) for e in exps]
    assert all(b >= a for a, b in zip(out, out[1:]))


def test_zero_and_tiny_bases_stay_non_negative():
    assert approx_pow(0.0, 1.0) == 0.0
    assert approx_pow(0.0, 5.0) == 0.0
    assert approx_pow(1e-300, 5.0) >= 0.0
    assert np.isfinite(approx_pow(1e300, 5.0))


def test_shapes_and_scalars():
    m = np.full((3, 4), 0.5)
    assert approx_pow(m, 2.0).shape == (3, 4)
    assert isinstance(approx_pow(0.5, 2.0), float)
    assert isinstance(exact_pow(0.5, 2.0), float)
    assert exact_pow(3.0, 2.0) == 9.0


def test_power_function_selector():
    assert power_function(True) is approx_pow
    assert power_function(False) is exact_pow


def test_scalar_and_array_paths_agree():
    bases = [0.0, 1e-8, 0.05, 0.5, 1.0, 3.7, 250.0]
    for exponent in [0.5, 1.0, 5.0]:
        arr = approx_pow(np.array(bases), exponent)
        assert [approx_pow(b, exponent) for b in bases] == arr.tolist()


def test_non_contiguous_input():
    m = np.arange(1.0, 13.0).reshape(3, 4)
    col = m[:, 1]
    assert approx_pow(col, 2.0).tolist() == approx_pow(col.copy(), 2.0).tolist()


def test_default_power_is_not_slower_than_exact():
    from antsp import ACOConfig

    x = np.random.default_rng(0).random(20)
    default = power_function(ACOConfig().fast_pow)
    t_default = min(timeit.repeat(lambda: default(x, 5.0), number=2000, repeat=5))
    t_exact = min(timeit.repeat(lambda: exact_pow(x, 5.0), number=2000, repeat=5))
    assert t_default <= t_exact * 1.5

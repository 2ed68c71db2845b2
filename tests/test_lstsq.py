import numpy as np
import pytest

from pmvskit.lstsq import lls


def test_square_system_is_solved_exactly():
    a = [[2.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 4.0]]
    x_true = [1.0, -2.0, 0.5]
    b = list(np.asarray(a) @ np.asarray(x_true))
    x = lls(a, b)
    assert x == pytest.approx(x_true, abs=1e-5)


def test_overdetermined_satisfies_normal_equations():
    a = [[1.0, 0.0], [1.0, 1.0], [1.0, 2.0], [1.0, 3.0], [1.0, 5.0]]
    b = [1.0, 2.5, 2.9, 4.2, 6.1]
    x = np.asarray(lls(a, b))
    am = np.asarray(a)
    residual = am @ x - np.asarray(b)
    assert np.allclose(am.T @ residual, 0.0, atol=1e-4)


def test_consistent_overdetermined_recovers_solution():
    a = [[1.0, 2.0], [3.0, -1.0], [0.5, 0.5], [2.0, 2.0]]
    x_true = [0.25, -1.5]
    b = list(np.asarray(a) @ np.asarray(x_true))
    assert lls(a, b) == pytest.approx(x_true, abs=1e-5)


def test_underdetermined_gives_minimum_norm():
    a = [[1.0, 1.0]]
    b = [2.0]
    x = lls(a, b)
    assert x[0] + x[1] == pytest.approx(2.0, abs=1e-6)
    assert x[0] == pytest.approx(x[1], abs=1e-6)


def test_result_length_matches_columns():
    a = [[1.0, 0.0, 0.0, 0.0, 0.0]] * 7
    assert len(lls(a, [1.0] * 7)) == 5


def test_empty_matrix_raises():
    with pytest.raises(ValueError):
        lls([], [])


def test_ragged_rows_raise():
    with pytest.raises(ValueError):
        lls([[1.0, 2.0], [3.0]], [1.0, 2.0])


def test_rhs_length_mismatch_raises():
    with pytest.raises(ValueError):
        lls([[1.0, 2.0], [3.0, 4.0]], [1.0])
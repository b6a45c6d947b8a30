import numpy as np
import pytest

from equilibria import (
    DimensionMismatchError,
    LinearConstraints,
    RankDeficientConstraintsError,
)
from equilibria.constraints import row_rank_deficiency


def test_residual_and_feasibility():
    cons = LinearConstraints(np.array([[1.0, 2.0, 3.0]]), np.array([1.0]))
    x = np.full(3, 1.0 / 6.0)
    assert np.allclose(cons.residual(x), [0.0])
    assert cons.is_feasible(x)
    assert not cons.is_feasible(np.ones(3))
    assert cons.residual_norm(np.ones(3)) == pytest.approx(5.0)


def test_one_dimensional_matrix_is_single_law():
    cons = LinearConstraints(np.array([1.0, 1.0]), 2.0)
    assert cons.num_constraints == 1
    assert cons.dim == 2


def test_row_count_mismatch():
    with pytest.raises(DimensionMismatchError):
        LinearConstraints(np.eye(2), np.array([1.0, 2.0, 3.0]))


def test_column_mismatch_on_residual():
    cons = LinearConstraints(np.eye(2), np.array([1.0, 1.0]))
    with pytest.raises(DimensionMismatchError):
        cons.residual(np.ones(3))


def test_duplicate_rows_rejected():
    a_mat = np.array([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])
    with pytest.raises(RankDeficientConstraintsError):
        LinearConstraints(a_mat, np.array([1.0, 1.0]))


def test_redundant_combination_rejected():
    a_mat = np.array([[1.0, 0.0, 1.0], [0.0, 1.0, 1.0], [1.0, 1.0, 2.0]])
    with pytest.raises(ValueError):
        LinearConstraints(a_mat, np.array([1.0, 1.0, 2.0]))


def test_zero_row_and_overdetermined_rejected():
    with pytest.raises(RankDeficientConstraintsError):
        LinearConstraints(np.array([[1.0, 1.0], [0.0, 0.0]]), np.array([1.0, 0.0]))
    with pytest.raises(RankDeficientConstraintsError):
        LinearConstraints(np.ones((3, 2)) + np.eye(3, 2), np.ones(3))


def test_empty_constraint_set_allowed():
    cons = LinearConstraints(np.zeros((0, 4)), np.zeros(0))
    assert cons.num_constraints == 0
    assert cons.residual_norm(np.ones(4)) == 0.0


def test_inputs_are_copied_and_frozen():
    a_mat = np.array([[1.0, 1.0]])
    cons = LinearConstraints(a_mat, np.array([1.0]))
    a_mat[0, 0] = 5.0
    assert cons.a_mat[0, 0] == 1.0
    with pytest.raises(ValueError):
        cons.a_mat[0, 0] = 3.0


def test_rank_deficiency_helper():
    assert row_rank_deficiency(np.eye(3)) == 0
    assert row_rank_deficiency(np.array([[1.0, 1.0], [2.0, 2.0]])) == 1
    assert row_rank_deficiency(np.array([[1.0, 1e-20], [1.0, 0.0]])) == 1

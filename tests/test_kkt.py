import numpy as np
import pytest

from equilibria import EntropyObjective, LinearConstraints
from equilibria.kkt import is_kkt_optimal, kkt_residuals


def test_kkt_residuals_at_closed_form_optimum():
    objective = EntropyObjective(h=np.array([0.0, 1.0]), temperature=1.0)
    constraints = LinearConstraints(np.array([[1.0, 1.0]]), np.array([1.0]))
    # x_i = exp(h_i - 1 - nu) with x_0 + x_1 = 1
    nu = np.log(np.exp(-1.0) + 1.0)
    x = np.exp(objective.h - 1.0 - nu)
    residuals = kkt_residuals(objective, constraints, x, np.array([nu]))
    assert residuals["primal_eq"] <= 1e-12
    assert residuals["dual"] <= 1e-12
    assert residuals["scaled_dual"] <= 1e-12
    assert residuals["positivity"] == 0.0
    assert is_kkt_optimal(objective, constraints, x, np.array([nu]))


def test_kkt_detects_wrong_multiplier():
    objective = EntropyObjective(h=np.zeros(2), temperature=1.0)
    constraints = LinearConstraints(np.array([[1.0, 1.0]]), np.array([1.0]))
    x = np.array([0.5, 0.5])
    residuals = kkt_residuals(objective, constraints, x, np.array([0.0]))
    assert residuals["dual"] > 0.1
    assert not is_kkt_optimal(objective, constraints, x, np.array([0.0]))


def test_kkt_rejects_boundary_points():
    objective = EntropyObjective(h=np.zeros(2), temperature=1.0)
    constraints = LinearConstraints(np.array([[1.0, 1.0]]), np.array([1.0]))
    assert not is_kkt_optimal(objective, constraints, np.array([1.0, 0.0]), np.array([0.0]))


def test_kkt_dual_length_checked():
    objective = EntropyObjective(h=np.zeros(2), temperature=1.0)
    constraints = LinearConstraints(np.array([[1.0, 1.0]]), np.array([1.0]))
    with pytest.raises(ValueError):
        kkt_residuals(objective, constraints, np.array([0.5, 0.5]), np.zeros(2))

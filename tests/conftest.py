"""Pytest configuration and shared fixtures for equilibria tests.

This module provides:
- A deterministic numpy RNG fixture
- Small equilibrium problems reused across test modules
"""

import os

import numpy as np
import pytest

from equilibria import EntropyObjective, LinearConstraints


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed numpy's global RNG for code that draws from np.random directly."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def scenario_a():
    """Three species, one weighted conservation law, interior feasible start."""
    objective = EntropyObjective(h=np.array([0.0, 1.0, 2.0]), temperature=1.0)
    constraints = LinearConstraints(np.array([[1.0, 2.0, 3.0]]), np.array([1.0]))
    x0 = np.full(3, 1.0 / 6.0)
    return objective, constraints, x0


@pytest.fixture
def two_law_problem():
    """Five species with two independent conservation laws."""
    h = np.array([0.3, -0.2, 1.0, 0.5, 0.0])
    a_mat = np.array(
        [
            [1.0, 0.0, 1.0, 2.0, 1.0],
            [0.0, 1.0, 1.0, 0.0, 2.0],
        ]
    )
    x0 = np.array([0.4, 0.3, 0.2, 0.1, 0.25])
    b_vec = a_mat @ x0
    objective = EntropyObjective(h=h, temperature=0.7)
    constraints = LinearConstraints(a_mat, b_vec)
    return objective, constraints, x0

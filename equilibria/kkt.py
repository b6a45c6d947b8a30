"""
Karush-Kuhn-Tucker diagnostics for entropy-regularized equilibria.
"""

from __future__ import annotations

from typing import Dict

import numpy as np

from .constraints import LinearConstraints
from .core import Array
from .objective import EntropyObjective


def kkt_residuals(
    objective: EntropyObjective,
    constraints: LinearConstraints,
    x: Array,
    dual: Array,
) -> Dict[str, float]:
    """
    Compute norms of the KKT residuals at ``(x, nu)``.

    ``dual`` is the stationarity residual ``||g + A^T nu||_inf``;
    ``scaled_dual`` weights it by ``D^-1/2``, which at the Newton multipliers
    equals the Newton decrement.
    """

    x = np.asarray(x, dtype=float).reshape(-1)
    dual = np.asarray(dual, dtype=float).reshape(-1)
    if dual.shape[0] != constraints.num_constraints:
        raise ValueError("dual must have one entry per conservation law")

    stationarity = objective.gradient(x) + constraints.a_mat.T @ dual
    hess_diag = objective.hessian_diagonal(x)
    scaled = stationarity / np.sqrt(hess_diag)
    return {
        "primal_eq": constraints.residual_norm(x),
        "positivity": float(max(-np.min(x), 0.0)),
        "dual": float(np.linalg.norm(stationarity, ord=np.inf)),
        "scaled_dual": float(np.linalg.norm(scaled)),
    }


def is_kkt_optimal(
    objective: EntropyObjective,
    constraints: LinearConstraints,
    x: Array,
    dual: Array,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if ``x`` is strictly positive and all KKT residuals are below ``tol``.
    """

    if np.any(np.asarray(x) <= 0):
        return False
    residuals = kkt_residuals(objective, constraints, x, dual)
    return all(value <= tol for value in residuals.values())


__all__ = ["kkt_residuals", "is_kkt_optimal"]

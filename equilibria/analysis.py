"""
Starting points, parameter sweeps and summary statistics for equilibria.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np
from scipy import sparse
from scipy.optimize import linprog

from .core import Array, EquilibriumResult
from .logging import get_logger
from .solver import solve
from .species import SpeciesSystem

logger = get_logger(__name__)


def average_length(x: Array, lengths: Array) -> float:
    """Return the number-averaged chain length ``sum(l x) / sum(x)``."""
    x = np.asarray(x, dtype=float)
    lengths = np.asarray(lengths, dtype=float)
    if x.shape != lengths.shape:
        raise ValueError(f"x {x.shape} and lengths {lengths.shape} must match.")
    total = float(np.sum(x))
    if total <= 0:
        raise ValueError("x must have a positive total.")
    return float(lengths @ x) / total


def interior_start(a_mat: Array, b_vec: Array, cap: float = 1.0) -> Array:
    """
    Find a strictly positive ``x`` with ``A x = b``.

    A single conservation law with positive coefficients is satisfied by a
    uniform vector. Otherwise the linear program ``max s`` subject to
    ``A x = b``, ``x_i >= s``, ``s <= cap`` is solved with HiGHS.

    Raises:
        ValueError: If the feasible set has no strictly positive point.
    """
    a_mat = np.atleast_2d(np.asarray(a_mat, dtype=float))
    b_vec = np.atleast_1d(np.asarray(b_vec, dtype=float))
    k, n = a_mat.shape
    if k == 0:
        return np.ones(n)
    if k == 1 and np.all(a_mat > 0) and b_vec[0] > 0:
        return np.full(n, b_vec[0] / np.sum(a_mat))

    c = np.zeros(n + 1)
    c[-1] = -1.0
    a_eq = sparse.hstack([sparse.csr_matrix(a_mat), sparse.csr_matrix((k, 1))])
    a_ub = sparse.hstack([-sparse.identity(n, format="csr"), sparse.csr_matrix(np.ones((n, 1)))])
    bounds = [(0.0, None)] * n + [(None, cap)]
    res = linprog(
        c,
        A_ub=a_ub,
        b_ub=np.zeros(n),
        A_eq=a_eq,
        b_eq=b_vec,
        bounds=bounds,
        method="highs",
    )
    if res.status != 0 or res.x is None or res.x[-1] <= 0:
        raise ValueError("No strictly positive point satisfies A x = b.")
    # HiGHS meets equalities only to its feasibility tolerance; remove the
    # residual with a minimum-norm correction.
    x = np.asarray(res.x[:n])
    x = x - np.linalg.lstsq(a_mat, a_mat @ x - b_vec, rcond=None)[0]
    if np.any(x <= 0):
        raise ValueError("No strictly positive point satisfies A x = b.")
    return x


def temperature_sweep(
    system: SpeciesSystem,
    temperatures: Iterable[float],
    x0: Optional[Array] = None,
    **solve_kwargs,
) -> List[EquilibriumResult]:
    """
    Solve one equilibrium per temperature, warm-starting along the sweep.

    The converged point of each temperature seeds the next; a failed solve
    falls back to the previous good starting point. Extra keyword arguments
    go to :func:`equilibria.solver.solve`.
    """
    if x0 is None:
        x_start = interior_start(system.a_mat, system.b_vec)
    else:
        x_start = np.asarray(x0, dtype=float)
    results: List[EquilibriumResult] = []
    for temperature in temperatures:
        res = solve(
            x_start,
            system.h,
            temperature,
            system.a_mat,
            system.b_vec,
            **solve_kwargs,
        )
        logger.info(
            "T=%g: status=%s nit=%d G=%.12g", temperature, res.status.value, res.nit, res.fun
        )
        if res.success:
            x_start = res.x
        results.append(res)
    return results


def average_lengths(results: Sequence[EquilibriumResult], lengths: Array) -> Array:
    """Average chain length per result; ``nan`` where the solve failed."""
    return np.array(
        [average_length(res.x, lengths) if res.success else np.nan for res in results]
    )


__all__ = ["average_length", "average_lengths", "interior_start", "temperature_sweep"]

"""Backtracking line search that keeps iterates strictly positive."""

from __future__ import annotations

from typing import Callable

import numpy as np

from .core import Array
from .errors import LineSearchError

Objective = Callable[[Array], float]


def max_interior_step(x: Array, direction: Array) -> float:
    """
    Largest ``t`` with ``x + t * direction >= 0``.

    Only decreasing coordinates limit the step; returns ``inf`` when none
    decreases.
    """
    decreasing = direction < 0
    if not np.any(decreasing):
        return float("inf")
    return float(np.min(-x[decreasing] / direction[decreasing]))


def interior_backtracking(
    f: Objective,
    x: Array,
    direction: Array,
    slope: float,
    fx: float | None = None,
    alpha: float = 0.25,
    beta: float = 0.5,
    max_backtracks: int = 60,
    margin: float = 0.99,
) -> tuple[float, Array, float, int]:
    """
    Armijo backtracking restricted to the open positive orthant.

    The first trial is ``min(1, margin * t_max)`` where ``t_max`` is the
    distance to the boundary along ``direction``, so ``log`` and ``1 / x``
    are never evaluated at a zero coordinate.

    Args:
        f: Objective evaluated on strictly positive points.
        x: Current strictly positive iterate.
        direction: Descent direction.
        slope: Directional derivative ``g^T direction`` (negative).
        fx: ``f(x)`` if already known.
        alpha: Sufficient-decrease constant in (0, 0.5).
        beta: Contraction factor in (0, 1).
        max_backtracks: Maximum number of trial points.
        margin: Fraction of ``t_max`` allowed for the first trial.

    Returns:
        ``(step, x_new, f_new, nfev)``.

    Raises:
        LineSearchError: If no trial satisfies both conditions.
    """
    if not (0 < alpha < 0.5):
        raise ValueError("Armijo constant alpha must lie in (0, 0.5)")
    if not (0 < beta < 1):
        raise ValueError("beta must lie in (0, 1)")
    if not (0 < margin < 1):
        raise ValueError("margin must lie in (0, 1)")
    if slope >= 0:
        raise LineSearchError("Search direction is not a descent direction.", 0.0, 0)

    nfev = 0
    if fx is None:
        fx = f(x)
        nfev += 1
    step = min(1.0, margin * max_interior_step(x, direction))
    for _ in range(max_backtracks):
        candidate = x + step * direction
        if np.all(candidate > 0):
            f_new = f(candidate)
            nfev += 1
            if f_new <= fx + alpha * step * slope:
                return step, candidate, float(f_new), nfev
        step *= beta
    raise LineSearchError(
        f"No admissible step after {max_backtracks} backtracks (last step {step:.3e}).",
        step,
        nfev,
    )


__all__ = ["max_interior_step", "interior_backtracking"]

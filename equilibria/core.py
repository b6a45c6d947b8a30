"""
Core status, record and configuration types for the equilibrium solver.

The solver minimizes ``G(x) = -h^T x + T sum_i x_i log x_i`` subject to the
conservation laws ``A x = b``. Iterates are always strictly positive and
feasible; every terminal state is reported through :class:`Status` on an
:class:`EquilibriumResult` instead of being raised, so a failed solve never
leaves state behind that another solve could observe.

References:
    - Boyd & Vandenberghe, *Convex Optimization* (2004), Section 10.2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

Array = np.ndarray

RTOL = 1e-8


class Status(Enum):
    """Solver states; all but INITIALIZED and ITERATING are terminal."""

    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITER = "max_iter"
    LINE_SEARCH_FAILED = "line_search_failed"
    INFEASIBLE = "infeasible"
    ILL_POSED = "ill_posed"
    SINGULAR_SCHUR = "singular_schur"
    INTERRUPTED = "interrupted"

    @property
    def is_terminal(self) -> bool:
        return self not in (Status.INITIALIZED, Status.ITERATING)


@dataclass(frozen=True)
class IterationRecord:
    """
    Diagnostic snapshot of one Newton iteration.

    Attributes:
        nit: Iteration index, starting at 0 for the initial point.
        x: Iterate at which the Newton system was assembled.
        fun: Objective value at ``x``.
        projected_grad_norm: Infinity norm of ``g + A^T nu``.
        decrement_sq: Squared Newton decrement ``-g^T dx``.
        step: Step length accepted from ``x`` (0.0 if no step was taken).
    """

    nit: int
    x: Array
    fun: float
    projected_grad_norm: float
    decrement_sq: float
    step: float


@dataclass
class EquilibriumResult:
    """
    Outcome of a solve.

    Only ``Status.CONVERGED`` marks a trustworthy equilibrium; every other
    status is a solver failure and ``x`` is merely the last iterate.

    Attributes:
        x: Final iterate.
        fun: Objective value at ``x``.
        nit: Number of Newton iterations performed.
        status: Terminal state of the solver.
        message: Human-readable explanation of ``status``.
        dual: Lagrange multipliers of the last Newton system, if assembled.
        decrement_sq: Last squared Newton decrement (``inf`` if unavailable).
        residual_norm: ``||A x - b||_inf`` at ``x``.
        nfev: Number of objective evaluations.
        history: Iteration records, populated when requested.
    """

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    dual: Optional[Array] = None
    decrement_sq: float = float("inf")
    residual_norm: float = float("nan")
    nfev: int = 0
    history: List[IterationRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


@dataclass(frozen=True)
class SolverConfig:
    """
    Tunable constants of the Newton iteration.

    Attributes:
        tol: Convergence threshold on ``decrement_sq / 2``; also the
            feasibility tolerance for the starting point.
        max_iter: Maximum number of Newton iterations.
        line_search_alpha: Armijo sufficient-decrease constant in (0, 0.5).
        line_search_beta: Backtracking contraction factor in (0, 1).
        max_backtracks: Backtracking attempts before the line search fails.
        boundary_margin: Fraction of the distance to the positivity boundary
            the first trial step may cover.
        schur_rcond: Smallest admissible eigenvalue ratio of the Schur
            complement.
        time_limit: Wall-clock budget in seconds, checked between iterations.
        history: Whether to keep per-iteration records.
    """

    tol: float = RTOL
    max_iter: int = 200
    line_search_alpha: float = 0.25
    line_search_beta: float = 0.5
    max_backtracks: int = 60
    boundary_margin: float = 0.99
    schur_rcond: float = 1e-14
    time_limit: Optional[float] = None
    history: bool = False

    def __post_init__(self) -> None:
        if not self.tol > 0:
            raise ValueError(f"tol must be positive, got {self.tol}.")
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be >= 0, got {self.max_iter}.")
        if not 0 < self.line_search_alpha < 0.5:
            raise ValueError(
                f"line_search_alpha must lie in (0, 0.5), got {self.line_search_alpha}."
            )
        if not 0 < self.line_search_beta < 1:
            raise ValueError(
                f"line_search_beta must lie in (0, 1), got {self.line_search_beta}."
            )
        if self.max_backtracks < 1:
            raise ValueError(f"max_backtracks must be >= 1, got {self.max_backtracks}.")
        if not 0 < self.boundary_margin < 1:
            raise ValueError(
                f"boundary_margin must lie in (0, 1), got {self.boundary_margin}."
            )
        if not self.schur_rcond > 0:
            raise ValueError(f"schur_rcond must be positive, got {self.schur_rcond}.")
        if self.time_limit is not None and not self.time_limit > 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}.")


__all__ = [
    "Array",
    "RTOL",
    "Status",
    "IterationRecord",
    "EquilibriumResult",
    "SolverConfig",
]

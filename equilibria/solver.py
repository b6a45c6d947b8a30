"""
Damped Newton solver for entropy-regularized equilibria.

:class:`EquilibriumSolver` walks the state machine

    INITIALIZED -> ITERATING -> {CONVERGED, MAX_ITER, LINE_SEARCH_FAILED,
                                 INFEASIBLE, ILL_POSED, SINGULAR_SCHUR,
                                 INTERRUPTED}

Each iterating step assembles the diagonal Hessian, computes the constrained
Newton direction through the Schur complement (:mod:`equilibria.newton`),
stops once ``lambda^2 / 2 <= tol`` and otherwise takes an interior Armijo
step (:mod:`equilibria.line_search`). Only CONVERGED is a trustworthy answer.

Example
-------
>>> import numpy as np
>>> from equilibria import solve
>>> res = solve(
...     x0=np.full(3, 1.0 / 6.0),
...     h=np.array([0.0, 1.0, 2.0]),
...     temperature=1.0,
...     a_mat=np.array([[1.0, 2.0, 3.0]]),
...     b_vec=np.array([1.0]),
... )
>>> res.success
True
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import numpy as np

from .constraints import LinearConstraints
from .core import Array, EquilibriumResult, IterationRecord, RTOL, SolverConfig, Status
from .debug_mode import is_debug_enabled
from .errors import DimensionMismatchError, LineSearchError, SingularSchurComplementError
from .line_search import interior_backtracking
from .logging import get_logger
from .newton import newton_step
from .objective import EntropyObjective

logger = get_logger(__name__)

Callback = Callable[[IterationRecord], bool]


class EquilibriumSolver:
    """
    Newton solver for ``min G(x)`` subject to ``A x = b``, ``x > 0``.

    The solver keeps no state between :meth:`solve` calls; one instance can
    be reused for many starting points, and independent instances can run
    concurrently.

    Args:
        objective: Free-energy model supplying value and derivatives.
        constraints: Conservation laws with full row rank.
        config: Iteration constants; defaults to :class:`SolverConfig()`.
    """

    def __init__(
        self,
        objective: EntropyObjective,
        constraints: LinearConstraints,
        config: Optional[SolverConfig] = None,
    ) -> None:
        if objective.dim != constraints.dim:
            raise DimensionMismatchError(
                f"h has {objective.dim} entries but A has {constraints.dim} columns."
            )
        self.objective = objective
        self.constraints = constraints
        self.config = config or SolverConfig()

    def _result(
        self, x: Array, fx: float, nit: int, status: Status, message: str, **kwargs
    ) -> EquilibriumResult:
        if status is not Status.CONVERGED:
            logger.warning("Solve terminated with status %s: %s", status.value, message)
        return EquilibriumResult(
            x=x,
            fun=float(fx),
            nit=nit,
            status=status,
            message=message,
            residual_norm=self.constraints.residual_norm(x),
            **kwargs,
        )

    def _check_invariants(self, x_new: Array, f_new: float, fx: float) -> None:
        if np.any(x_new <= 0):
            raise RuntimeError("Iterate left the positive orthant.")
        scale = max(1.0, float(np.max(np.abs(self.constraints.b_vec), initial=0.0)))
        residual = self.constraints.residual_norm(x_new)
        if residual > self.config.tol * scale:
            raise RuntimeError(f"Conservation drifted to {residual:.3e}.")
        if f_new > fx:
            raise RuntimeError(f"Objective increased from {fx!r} to {f_new!r}.")

    def solve(self, x0: Array, callback: Optional[Callback] = None) -> EquilibriumResult:
        """
        Run Newton iterations from the interior feasible point ``x0``.

        Args:
            x0: Starting point with ``x0 > 0`` and ``A x0 = b`` to ``tol``.
            callback: Called with the :class:`IterationRecord` of every
                accepted step; returning True stops with ``INTERRUPTED``.

        Returns:
            EquilibriumResult describing the terminal state.

        Raises:
            DimensionMismatchError: If ``x0`` does not match ``h``.
        """

        cfg = self.config
        objective = self.objective
        a_mat = self.constraints.a_mat
        x = np.array(x0, dtype=float)
        if x.ndim != 1 or x.shape[0] != objective.dim:
            raise DimensionMismatchError(
                f"x0 has shape {x.shape}, expected ({objective.dim},)."
            )

        if not np.all(np.isfinite(x)) or np.any(x <= 0):
            return self._result(
                x, float("nan"), 0, Status.INFEASIBLE, "Starting point is not strictly positive."
            )
        fx = objective.value(x)
        nfev = 1
        residual = self.constraints.residual_norm(x)
        if residual > cfg.tol:
            return self._result(
                x,
                fx,
                0,
                Status.INFEASIBLE,
                f"Starting point violates conservation laws (residual {residual:.3e}).",
                nfev=nfev,
            )
        if objective.is_degenerate:
            return self._result(
                x,
                fx,
                0,
                Status.ILL_POSED,
                "Temperature is zero: the objective is linear and its Hessian singular.",
                nfev=nfev,
            )

        history: list[IterationRecord] = []
        dual: Optional[Array] = None
        decrement_sq = float("inf")
        nit = 0
        start = time.perf_counter()
        check = is_debug_enabled()
        status = Status.ITERATING
        logger.debug("Starting solve: n=%d, k=%d, G(x0)=%.12g", x.size, a_mat.shape[0], fx)

        while True:
            if cfg.time_limit is not None and time.perf_counter() - start > cfg.time_limit:
                status, message = Status.INTERRUPTED, "Wall-clock time limit reached."
                break

            try:
                newton = newton_step(
                    objective.gradient(x),
                    objective.hessian_diagonal(x),
                    a_mat,
                    cfg.schur_rcond,
                )
            except SingularSchurComplementError as exc:
                status, message = Status.SINGULAR_SCHUR, str(exc)
                break
            dual = newton.dual
            decrement_sq = newton.decrement_sq
            grad_norm = float(np.linalg.norm(newton.projected_gradient, ord=np.inf))

            if 0.5 * decrement_sq <= cfg.tol:
                if cfg.history:
                    history.append(IterationRecord(nit, x, fx, grad_norm, decrement_sq, 0.0))
                status, message = Status.CONVERGED, "Newton decrement below tolerance."
                break
            if nit >= cfg.max_iter:
                status, message = Status.MAX_ITER, "Maximum iterations reached."
                break

            try:
                step, x_new, f_new, evals = interior_backtracking(
                    objective.value,
                    x,
                    newton.direction,
                    -decrement_sq,
                    fx=fx,
                    alpha=cfg.line_search_alpha,
                    beta=cfg.line_search_beta,
                    max_backtracks=cfg.max_backtracks,
                    margin=cfg.boundary_margin,
                )
            except LineSearchError as exc:
                nfev += exc.nfev
                status, message = Status.LINE_SEARCH_FAILED, str(exc)
                break
            nfev += evals

            record = IterationRecord(nit, x, fx, grad_norm, decrement_sq, step)
            if check:
                self._check_invariants(x_new, f_new, fx)
            logger.debug(
                "iter %d: G=%.12g lambda^2=%.3e |g+A'nu|=%.3e t=%.3e",
                nit,
                fx,
                decrement_sq,
                grad_norm,
                step,
            )
            x, fx = x_new, f_new
            nit += 1
            if cfg.history:
                history.append(record)
            if callback is not None and callback(record):
                status, message = Status.INTERRUPTED, "Stopped by callback."
                break

        return self._result(
            x,
            fx,
            nit,
            status,
            message,
            dual=dual,
            decrement_sq=decrement_sq,
            nfev=nfev,
            history=history,
        )


def solve(
    x0: Array,
    h: Array,
    temperature: float,
    a_mat: Array,
    b_vec: Array,
    tol: float = RTOL,
    max_iter: int = 200,
    line_search_alpha: float = 0.25,
    line_search_beta: float = 0.5,
    callback: Optional[Callback] = None,
    **options,
) -> EquilibriumResult:
    """
    Minimize ``-h^T x + T sum x log x`` subject to ``A x = b`` from ``x0``.

    Extra keyword arguments are forwarded to :class:`SolverConfig`
    (``max_backtracks``, ``boundary_margin``, ``schur_rcond``,
    ``time_limit``, ``history``).

    Raises:
        DimensionMismatchError: On inconsistent shapes.
        RankDeficientConstraintsError: If ``A`` lacks full row rank.
    """

    config = SolverConfig(
        tol=tol,
        max_iter=max_iter,
        line_search_alpha=line_search_alpha,
        line_search_beta=line_search_beta,
        **options,
    )
    objective = EntropyObjective(h=h, temperature=temperature)
    constraints = LinearConstraints(a_mat, b_vec)
    return EquilibriumSolver(objective, constraints, config).solve(x0, callback=callback)


__all__ = ["EquilibriumSolver", "solve"]

"""
Linear conservation laws ``A x = b``.

The Newton dual solve eliminates the primal block through ``A D^-1 A^T``,
which is only invertible when ``A`` has full row rank. Redundant or
duplicated conservation rows are therefore rejected at construction instead
of being carried into the iteration.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import Array
from .errors import DimensionMismatchError, RankDeficientConstraintsError


def _as_matrix(a_mat: Array) -> Array:
    out = np.array(a_mat, dtype=float)
    if out.ndim == 1:
        return out.reshape(1, -1)
    if out.ndim == 2:
        return out
    raise DimensionMismatchError(f"A must be 1D or 2D, got {out.ndim} dimensions.")


def row_rank_deficiency(a_mat: Array, rcond: Optional[float] = None) -> int:
    """
    Return ``rows(A) - rank(A)`` using a singular-value threshold.

    Singular values below ``rcond * s_max`` count as zero. The default
    ``rcond`` is ``max(m, n) * eps``, the same cutoff as
    ``np.linalg.matrix_rank``.
    """

    a_mat = _as_matrix(a_mat)
    m, n = a_mat.shape
    if m == 0:
        return 0
    if rcond is None:
        rcond = max(m, n) * np.finfo(float).eps
    svals = np.linalg.svd(a_mat, compute_uv=False)
    if svals.size == 0 or svals[0] == 0.0:
        return m
    rank = int(np.sum(svals > rcond * svals[0]))
    return m - rank


class LinearConstraints:
    """
    Affine feasible set ``{x : A x = b}`` with ``A`` of full row rank.

    Args:
        a_mat: Conservation matrix of shape ``(k, n)``; a 1D array is a
            single conservation law.
        b_vec: Conserved totals of length ``k``.
        rcond: Relative singular-value cutoff for the rank test.

    Raises:
        DimensionMismatchError: If ``A`` and ``b`` disagree on ``k``.
        RankDeficientConstraintsError: If ``rank(A) < k``.
    """

    def __init__(self, a_mat: Array, b_vec: Array, rcond: Optional[float] = None) -> None:
        a_mat = _as_matrix(a_mat)
        b_vec = np.atleast_1d(np.array(b_vec, dtype=float))
        if b_vec.ndim != 1:
            raise DimensionMismatchError(f"b must be 1D, got shape {b_vec.shape}.")
        if a_mat.shape[0] != b_vec.shape[0]:
            raise DimensionMismatchError(
                f"A has {a_mat.shape[0]} rows but b has {b_vec.shape[0]} entries."
            )
        if not (np.all(np.isfinite(a_mat)) and np.all(np.isfinite(b_vec))):
            raise ValueError("A and b must contain only finite values.")
        deficiency = row_rank_deficiency(a_mat, rcond)
        if deficiency:
            raise RankDeficientConstraintsError(
                f"A has {a_mat.shape[0]} rows but rank {a_mat.shape[0] - deficiency}; "
                "remove redundant conservation laws."
            )
        self.a_mat = a_mat
        self.b_vec = b_vec
        self.a_mat.setflags(write=False)
        self.b_vec.setflags(write=False)

    @property
    def num_constraints(self) -> int:
        return self.a_mat.shape[0]

    @property
    def dim(self) -> int:
        return self.a_mat.shape[1]

    def _check(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        if x.ndim != 1 or x.shape[0] != self.dim:
            raise DimensionMismatchError(
                f"x has shape {x.shape}, but A has {self.dim} columns."
            )
        return x

    def residual(self, x: Array) -> Array:
        """Return ``A x - b``."""
        x = self._check(x)
        return self.a_mat @ x - self.b_vec

    def residual_norm(self, x: Array) -> float:
        residual = self.residual(x)
        if residual.size == 0:
            return 0.0
        return float(np.linalg.norm(residual, ord=np.inf))

    def is_feasible(self, x: Array, tol: float = 1e-8) -> bool:
        return self.residual_norm(x) <= tol

    def __repr__(self) -> str:
        return f"LinearConstraints(k={self.num_constraints}, n={self.dim})"


__all__ = ["LinearConstraints", "row_rank_deficiency"]

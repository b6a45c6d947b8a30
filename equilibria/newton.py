"""
Equality-constrained Newton direction for diagonal Hessians.

The KKT system

    [ D   A^T ] [dx]   [-g]
    [ A   0   ] [nu] = [ 0]

is solved by eliminating ``dx`` through the k x k Schur complement
``S = A D^-1 A^T``:

    S nu = -A D^-1 g,        dx = -D^-1 (g + A^T nu).

Cost is O(n k^2) to assemble ``S`` and O(k^3) to factor it; no n x n array
is formed. The resulting ``dx`` satisfies ``A dx = 0`` so any step length
preserves the conservation laws.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

import numpy as np

from .core import Array
from .errors import DimensionMismatchError, SingularSchurComplementError


class NewtonDirection(NamedTuple):
    direction: Array
    dual: Array
    decrement_sq: float
    projected_gradient: Array


def schur_complement(a_mat: Array, d_inv: Array) -> Array:
    """Return ``A diag(d_inv) A^T`` without forming the diagonal matrix."""
    scaled = a_mat * d_inv
    schur = scaled @ a_mat.T
    return 0.5 * (schur + schur.T)


def factor_schur(schur: Array, rcond: float = 1e-14) -> Array:
    """
    Cholesky-factor the Schur complement, rejecting near-singular matrices.

    ``S`` is symmetric positive definite whenever ``A`` has full row rank
    and ``D > 0``. In floating point it can still lose definiteness when
    some coordinates approach zero, so the eigenvalue ratio is checked
    against ``rcond`` before factoring.

    Raises:
        SingularSchurComplementError: If ``lambda_min <= rcond * lambda_max``
            or the factorization fails.
    """

    if not np.all(np.isfinite(schur)):
        raise SingularSchurComplementError("Schur complement contains non-finite entries")
    eigvals = np.linalg.eigvalsh(schur)
    if eigvals[-1] <= 0.0 or eigvals[0] <= rcond * eigvals[-1]:
        raise SingularSchurComplementError(
            f"Schur complement is numerically singular "
            f"(eigenvalues in [{eigvals[0]:.3e}, {eigvals[-1]:.3e}])"
        )
    try:
        return np.linalg.cholesky(schur)
    except np.linalg.LinAlgError as exc:
        raise SingularSchurComplementError(
            "Cholesky factorization of Schur complement failed"
        ) from exc


def _cholesky_solve(chol: Array, rhs: Array) -> Array:
    y = np.linalg.solve(chol, rhs)
    return np.linalg.solve(chol.T, y)


def newton_step(
    gradient: Array,
    hessian_diagonal: Array,
    a_mat: Optional[Array] = None,
    schur_rcond: float = 1e-14,
) -> NewtonDirection:
    """
    Compute the constrained Newton direction and dual estimate.

    Args:
        gradient: Objective gradient ``g`` at the current iterate.
        hessian_diagonal: Diagonal ``d`` of the Hessian; must be positive.
        a_mat: Conservation matrix of shape ``(k, n)``. ``None`` or ``k = 0``
            gives the unconstrained step ``-g / d``.
        schur_rcond: Eigenvalue-ratio threshold for singularity.

    Returns:
        NewtonDirection with the step ``dx``, multipliers ``nu``, the squared
        Newton decrement ``-g^T dx`` and the projected gradient
        ``g + A^T nu``.
    """

    g = np.asarray(gradient, dtype=float)
    d = np.asarray(hessian_diagonal, dtype=float)
    if g.ndim != 1 or g.shape != d.shape:
        raise DimensionMismatchError(
            f"gradient {g.shape} and Hessian diagonal {d.shape} must be matching 1D arrays"
        )
    if not (np.all(np.isfinite(d)) and np.all(d > 0.0)):
        raise SingularSchurComplementError(
            "Hessian diagonal must be finite and strictly positive"
        )
    d_inv = 1.0 / d
    if a_mat is not None:
        a_mat = np.asarray(a_mat, dtype=float)

    if a_mat is None or a_mat.shape[0] == 0:
        dual = np.zeros(0)
        projected = g.copy()
    else:
        if a_mat.ndim != 2 or a_mat.shape[1] != g.shape[0]:
            raise DimensionMismatchError(
                f"A has shape {a_mat.shape}, expected (k, {g.shape[0]})"
            )
        chol = factor_schur(schur_complement(a_mat, d_inv), schur_rcond)
        dual = _cholesky_solve(chol, -(a_mat @ (d_inv * g)))
        projected = g + a_mat.T @ dual

    direction = -d_inv * projected
    decrement_sq = max(float(-g @ direction), 0.0)
    return NewtonDirection(direction, dual, decrement_sq, projected)


__all__ = ["NewtonDirection", "newton_step", "schur_complement", "factor_schur"]

"""Exception hierarchy for equilibrium solves.

Each error also derives from the built-in the rest of the package would
otherwise raise, so ``except ValueError`` and ``except np.linalg.LinAlgError``
continue to work for callers that do not know about these classes.
"""

from __future__ import annotations

import numpy as np


class EquilibriaError(Exception):
    """Base class for all errors raised by equilibria."""


class DimensionMismatchError(EquilibriaError, ValueError):
    """Array shapes of ``x``, ``h``, ``A`` or ``b`` are inconsistent."""


class RankDeficientConstraintsError(EquilibriaError, ValueError):
    """The conservation matrix does not have full row rank."""


class SingularSchurComplementError(EquilibriaError, np.linalg.LinAlgError):
    """The reduced ``A D^-1 A^T`` system is numerically singular."""


class LineSearchError(EquilibriaError, RuntimeError):
    """No admissible step was found within the backtracking budget."""

    def __init__(self, message: str, step: float, nfev: int) -> None:
        super().__init__(message)
        self.step = step
        self.nfev = nfev


__all__ = [
    "EquilibriaError",
    "DimensionMismatchError",
    "RankDeficientConstraintsError",
    "SingularSchurComplementError",
    "LineSearchError",
]

"""Separable entropy-regularized free energy and its derivatives."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .core import Array
from .errors import DimensionMismatchError


@dataclass(frozen=True, eq=False)
class EntropyObjective:
    """
    Free energy ``G(x) = -h^T x + T sum_i x_i log x_i`` on ``x > 0``.

    The Hessian is ``diag(T / x)``, so every second-order quantity is a
    pointwise O(n) operation. Species-specific enumeration lives elsewhere;
    this class only sees the coefficient vector ``h`` and the weight ``T``.

    The evaluators do not apply the ``0 log 0 = 0`` convention. A zero
    coordinate yields ``nan``/``inf``; the solver never produces one.
    """

    h: Array
    temperature: float

    def __post_init__(self) -> None:
        h = np.array(self.h, dtype=float)
        if h.ndim != 1:
            raise ValueError(f"h must be a 1D array, got shape {h.shape}.")
        if not np.all(np.isfinite(h)):
            raise ValueError("h must contain only finite values.")
        temperature = float(self.temperature)
        if not np.isfinite(temperature) or temperature < 0:
            raise ValueError(f"temperature must be finite and >= 0, got {temperature}.")
        h.setflags(write=False)
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "temperature", temperature)

    @property
    def dim(self) -> int:
        return self.h.shape[0]

    @property
    def is_degenerate(self) -> bool:
        """True when the entropy term vanishes and the Hessian is zero."""
        return self.temperature == 0.0

    def _check(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        if x.shape != self.h.shape:
            raise DimensionMismatchError(
                f"x has shape {x.shape}, expected {self.h.shape} to match h."
            )
        return x

    def value(self, x: Array) -> float:
        x = self._check(x)
        return float(-self.h @ x + self.temperature * np.sum(x * np.log(x)))

    def gradient(self, x: Array) -> Array:
        x = self._check(x)
        return -self.h + self.temperature * (np.log(x) + 1.0)

    def hessian_diagonal(self, x: Array) -> Array:
        x = self._check(x)
        # subnormal coordinates give inf; newton_step reports it as singular
        with np.errstate(over="ignore"):
            return self.temperature / x

    def hessian_vector_product(self, x: Array, v: Array) -> Array:
        v = np.asarray(v, dtype=float)
        d = self.hessian_diagonal(x)
        if v.shape != d.shape:
            raise DimensionMismatchError(
                f"v has shape {v.shape}, expected {d.shape}."
            )
        return d * v

    def __call__(self, x: Array) -> float:
        return self.value(x)


__all__ = ["EntropyObjective"]

"""
Builders turning polymer descriptions into ``(h, A, b)`` problem data.

The solver core only sees a coefficient vector and a conservation matrix;
the functions here enumerate species and assign enthalpies so that the same
:class:`~equilibria.solver.EquilibriumSolver` handles homopolymer and
heteropolymer mixtures alike.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple

import numpy as np

from .constraints import LinearConstraints
from .core import Array
from .objective import EntropyObjective

BondTable = Mapping[Tuple[str, str], float]


@dataclass(frozen=True, eq=False)
class SpeciesSystem:
    """
    Enumerated species together with their enthalpies and conservation laws.

    Attributes:
        h: Enthalpy-like coefficient per species.
        a_mat: Monomer counts, one row per conserved monomer type.
        b_vec: Total amount of each monomer type.
        labels: Human-readable species names.
        lengths: Chain length of each species.
    """

    h: Array
    a_mat: Array
    b_vec: Array
    labels: Tuple[str, ...]
    lengths: Array

    @property
    def n_species(self) -> int:
        return self.h.shape[0]

    def objective(self, temperature: float) -> EntropyObjective:
        return EntropyObjective(h=self.h, temperature=temperature)

    def constraints(self) -> LinearConstraints:
        return LinearConstraints(self.a_mat, self.b_vec)


def homopolymer_system(
    max_length: int,
    bond_enthalpy: float,
    total_monomers: float,
) -> SpeciesSystem:
    """
    Chains of a single monomer with lengths ``1..max_length``.

    A chain of length ``l`` has ``l - 1`` bonds, so ``h_l = (l - 1) * bond``.
    The only conservation law is the total monomer count
    ``sum_l l * x_l = total_monomers``.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}.")
    if not total_monomers > 0:
        raise ValueError(f"total_monomers must be positive, got {total_monomers}.")
    lengths = np.arange(1, max_length + 1, dtype=float)
    return SpeciesSystem(
        h=(lengths - 1.0) * float(bond_enthalpy),
        a_mat=lengths.reshape(1, -1),
        b_vec=np.array([float(total_monomers)]),
        labels=tuple(f"L{int(l)}" for l in lengths),
        lengths=lengths,
    )


def _bond_energy(bonds: BondTable, left: str, right: str, default: float, symmetric: bool) -> float:
    if (left, right) in bonds:
        return float(bonds[(left, right)])
    if symmetric and (right, left) in bonds:
        return float(bonds[(right, left)])
    return default


def heteropolymer_system(
    alphabet: Sequence[str],
    max_length: int,
    bond_enthalpies: BondTable,
    totals: Mapping[str, float],
    default_bond: float = 0.0,
    symmetric: bool = True,
) -> SpeciesSystem:
    """
    All linear sequences over ``alphabet`` up to ``max_length`` monomers.

    Sequences are directed, so ``"AB"`` and ``"BA"`` are distinct species.
    The enthalpy of a sequence is the sum of its nearest-neighbour bond
    enthalpies; pairs missing from ``bond_enthalpies`` use ``default_bond``
    (looking up the reversed pair first when ``symmetric``). One
    conservation law is emitted per monomer type.

    Example:
        >>> system = heteropolymer_system(
        ...     ["A", "B"], 2, {("A", "B"): 1.0}, {"A": 1.0, "B": 1.0}
        ... )
        >>> system.labels
        ('A', 'B', 'AA', 'AB', 'BA', 'BB')
    """
    alphabet = list(alphabet)
    if not alphabet:
        raise ValueError("alphabet must not be empty.")
    if len(set(alphabet)) != len(alphabet):
        raise ValueError("alphabet entries must be unique.")
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}.")
    missing = [m for m in alphabet if m not in totals]
    if missing:
        raise ValueError(f"totals missing for monomers {missing}.")

    index = {m: i for i, m in enumerate(alphabet)}
    h_vals: list[float] = []
    columns: list[Array] = []
    labels: list[str] = []
    lengths: list[int] = []
    for length in range(1, max_length + 1):
        for seq in itertools.product(alphabet, repeat=length):
            energy = sum(
                _bond_energy(bond_enthalpies, left, right, default_bond, symmetric)
                for left, right in zip(seq[:-1], seq[1:])
            )
            counts = np.zeros(len(alphabet))
            for monomer in seq:
                counts[index[monomer]] += 1.0
            h_vals.append(float(energy))
            columns.append(counts)
            labels.append("".join(seq))
            lengths.append(length)

    return SpeciesSystem(
        h=np.array(h_vals),
        a_mat=np.stack(columns, axis=1),
        b_vec=np.array([float(totals[m]) for m in alphabet]),
        labels=tuple(labels),
        lengths=np.array(lengths, dtype=float),
    )


__all__ = ["SpeciesSystem", "homopolymer_system", "heteropolymer_system"]

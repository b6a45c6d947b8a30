import numpy as np
import pytest

from equilibria import (
    LinearConstraints,
    heteropolymer_system,
    homopolymer_system,
)


def test_homopolymer_layout():
    system = homopolymer_system(max_length=4, bond_enthalpy=1.5, total_monomers=10.0)
    assert system.n_species == 4
    assert np.allclose(system.h, [0.0, 1.5, 3.0, 4.5])
    assert np.allclose(system.a_mat, [[1.0, 2.0, 3.0, 4.0]])
    assert np.allclose(system.b_vec, [10.0])
    assert system.labels == ("L1", "L2", "L3", "L4")
    assert np.allclose(system.lengths, [1.0, 2.0, 3.0, 4.0])


def test_homopolymer_validation():
    with pytest.raises(ValueError):
        homopolymer_system(max_length=0, bond_enthalpy=1.0, total_monomers=1.0)
    with pytest.raises(ValueError):
        homopolymer_system(max_length=3, bond_enthalpy=1.0, total_monomers=0.0)


def test_heteropolymer_enumeration():
    system = heteropolymer_system(
        ["A", "B"],
        max_length=3,
        bond_enthalpies={("A", "B"): 1.0, ("A", "A"): 2.0},
        totals={"A": 3.0, "B": 1.0},
    )
    assert system.n_species == 2 + 4 + 8
    assert system.labels[:6] == ("A", "B", "AA", "AB", "BA", "BB")
    energies = dict(zip(system.labels, system.h))
    assert energies["A"] == 0.0
    assert energies["AA"] == 2.0
    assert energies["BA"] == 1.0
    assert energies["BB"] == 0.0
    assert energies["AAB"] == 3.0
    assert energies["ABA"] == 2.0
    column = system.a_mat[:, system.labels.index("ABA")]
    assert np.allclose(column, [2.0, 1.0])
    assert np.allclose(system.lengths[:6], [1, 1, 2, 2, 2, 2])
    assert np.allclose(system.b_vec, [3.0, 1.0])


def test_heteropolymer_directed_bonds():
    system = heteropolymer_system(
        ["A", "B"],
        max_length=2,
        bond_enthalpies={("A", "B"): 1.0},
        totals={"A": 1.0, "B": 1.0},
        default_bond=-0.5,
        symmetric=False,
    )
    energies = dict(zip(system.labels, system.h))
    assert energies["AB"] == 1.0
    assert energies["BA"] == -0.5


def test_heteropolymer_constraints_have_full_rank():
    system = heteropolymer_system(
        ["A", "B", "C"], 2, {}, {"A": 1.0, "B": 2.0, "C": 0.5}
    )
    constraints = system.constraints()
    assert isinstance(constraints, LinearConstraints)
    assert constraints.num_constraints == 3


def test_heteropolymer_validation():
    with pytest.raises(ValueError):
        heteropolymer_system([], 2, {}, {})
    with pytest.raises(ValueError):
        heteropolymer_system(["A", "A"], 2, {}, {"A": 1.0})
    with pytest.raises(ValueError):
        heteropolymer_system(["A", "B"], 2, {}, {"A": 1.0})
    with pytest.raises(ValueError):
        heteropolymer_system(["A"], 0, {}, {"A": 1.0})


def test_system_builds_objective():
    system = homopolymer_system(3, 0.5, 6.0)
    objective = system.objective(2.0)
    assert objective.temperature == 2.0
    assert np.allclose(objective.h, system.h)

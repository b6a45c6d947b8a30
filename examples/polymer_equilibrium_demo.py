"""
Example: Polymerization equilibria with equilibria

Shows how the same Newton solver handles a homopolymer mixture, a
heteropolymer mixture with two monomer types, and a temperature sweep of the
average chain length.
"""

import numpy as np

from equilibria import (
    Status,
    average_length,
    average_lengths,
    heteropolymer_system,
    homopolymer_system,
    interior_start,
    solve,
    temperature_sweep,
)


def example_homopolymer():
    """Example: Chains of one monomer, lengths 1..100."""
    print("=" * 60)
    print("Example 1: Homopolymer Equilibrium")
    print("=" * 60)

    system = homopolymer_system(max_length=100, bond_enthalpy=1.0, total_monomers=20.0)
    x0 = interior_start(system.a_mat, system.b_vec)
    result = solve(x0, system.h, 1.0, system.a_mat, system.b_vec)
    print(f"Status: {result.status}")
    if result.status == Status.CONVERGED:
        print(f"Iterations: {result.nit}")
        print(f"Free energy: {result.fun:.6f}")
        print(f"Average length: {average_length(result.x, system.lengths):.3f}")
        print(f"Monomer balance residual: {result.residual_norm:.2e}")
    print()


def example_heteropolymer():
    """Example: Two monomer types with an attractive A-B bond."""
    print("=" * 60)
    print("Example 2: Heteropolymer Equilibrium")
    print("=" * 60)

    system = heteropolymer_system(
        ["A", "B"],
        max_length=5,
        bond_enthalpies={("A", "B"): 1.5, ("A", "A"): 0.2, ("B", "B"): 0.2},
        totals={"A": 2.0, "B": 2.0},
    )
    x0 = interior_start(system.a_mat, system.b_vec)
    result = solve(x0, system.h, 0.7, system.a_mat, system.b_vec)
    print(f"Status: {result.status}")
    if result.status == Status.CONVERGED:
        order = np.argsort(result.x)[::-1][:5]
        print("Most abundant species:")
        for idx in order:
            print(f"  {system.labels[idx]:>6s}: {result.x[idx]:.4f}")
    print()


def example_temperature_sweep():
    """Example: Average chain length as temperature rises."""
    print("=" * 60)
    print("Example 3: Temperature Sweep")
    print("=" * 60)

    system = homopolymer_system(max_length=60, bond_enthalpy=1.0, total_monomers=10.0)
    temperatures = np.linspace(0.5, 3.0, 6)
    results = temperature_sweep(system, temperatures)
    lengths = average_lengths(results, system.lengths)
    for temperature, length, res in zip(temperatures, lengths, results):
        print(f"T = {temperature:.2f}: L = {length:.3f} ({res.nit} iterations)")
    print()


if __name__ == "__main__":
    example_homopolymer()
    example_heteropolymer()
    example_temperature_sweep()
    print("All examples completed.")

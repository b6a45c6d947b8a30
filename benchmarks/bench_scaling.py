"""Benchmark per-iteration cost of the equilibrium solver as n grows."""

import time
from typing import Dict

import numpy as np

from equilibria import solve


def benchmark_solve(n_species: int, n_laws: int = 1, seed: int = 0) -> Dict[str, float]:
    """Time one solve with ``n_species`` unknowns and ``n_laws`` conservation laws.

    Args:
        n_species: Number of species ``n``.
        n_laws: Number of conservation laws ``k``.
        seed: RNG seed for the coefficient vector and constraint matrix.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(seed)
    h = rng.uniform(0.0, 1.0, size=n_species)
    a_mat = rng.uniform(0.5, 2.0, size=(n_laws, n_species))
    x0 = np.ones(n_species)
    b_vec = a_mat @ x0

    # Warmup
    solve(x0, h, 1.0, a_mat, b_vec)

    start = time.perf_counter()
    res = solve(x0, h, 1.0, a_mat, b_vec)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n_species": n_species,
        "n_laws": n_laws,
        "iterations": res.nit,
        "status": res.status.value,
        "total_time_sec": total_time,
        "time_per_iter_sec": total_time / max(res.nit, 1),
    }


if __name__ == "__main__":
    print("Equilibrium Solver Scaling Benchmark")
    print("=" * 60)
    for n_laws in [1, 4]:
        for n_species in [1_000, 10_000, 100_000, 1_000_000]:
            result = benchmark_solve(n_species, n_laws)
            print(
                f"n={result['n_species']:>8d}, k={result['n_laws']}: "
                f"{result['iterations']:>3d} iters, {result['status']}, "
                f"{result['time_per_iter_sec'] * 1e3:.3f} ms/iter"
            )

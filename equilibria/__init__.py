"""equilibria - Newton solver for entropy-regularized chemical equilibria.

Minimizes ``G(x) = -h^T x + T sum_i x_i log x_i`` subject to linear
conservation laws ``A x = b`` using damped Newton steps whose KKT system is
reduced to a k x k Schur complement, so problems with thousands of species
and a handful of conservation laws cost O(n) per iteration.

Example
-------
>>> from equilibria import homopolymer_system, interior_start, solve
>>> system = homopolymer_system(max_length=50, bond_enthalpy=1.0, total_monomers=10.0)
>>> x0 = interior_start(system.a_mat, system.b_vec)
>>> res = solve(x0, system.h, 1.0, system.a_mat, system.b_vec)
>>> res.success
True
"""

__version__ = "0.1.0"

from . import analysis, constraints, core, kkt, line_search, newton, objective, solver, species
from .analysis import average_length, average_lengths, interior_start, temperature_sweep
from .constraints import LinearConstraints
from .core import EquilibriumResult, IterationRecord, SolverConfig, Status
from .debug_mode import debug_context, is_debug_enabled, set_debug_enabled
from .errors import (
    DimensionMismatchError,
    EquilibriaError,
    LineSearchError,
    RankDeficientConstraintsError,
    SingularSchurComplementError,
)
from .kkt import is_kkt_optimal, kkt_residuals
from .line_search import interior_backtracking, max_interior_step
from .logging import configure_logging, get_logger, set_log_level
from .newton import NewtonDirection, newton_step
from .objective import EntropyObjective
from .solver import EquilibriumSolver, solve
from .species import SpeciesSystem, heteropolymer_system, homopolymer_system

__all__ = [
    "analysis",
    "constraints",
    "core",
    "kkt",
    "line_search",
    "newton",
    "objective",
    "solver",
    "species",
    # Core types
    "Status",
    "SolverConfig",
    "IterationRecord",
    "EquilibriumResult",
    # Errors
    "EquilibriaError",
    "DimensionMismatchError",
    "RankDeficientConstraintsError",
    "SingularSchurComplementError",
    "LineSearchError",
    # Model
    "EntropyObjective",
    "LinearConstraints",
    # Algorithms
    "NewtonDirection",
    "newton_step",
    "max_interior_step",
    "interior_backtracking",
    "EquilibriumSolver",
    "solve",
    "kkt_residuals",
    "is_kkt_optimal",
    # Polymer systems
    "SpeciesSystem",
    "homopolymer_system",
    "heteropolymer_system",
    "average_length",
    "average_lengths",
    "interior_start",
    "temperature_sweep",
    # Logging and debugging
    "get_logger",
    "set_log_level",
    "configure_logging",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]

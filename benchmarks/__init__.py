"""Performance benchmarks for equilibria.

Measures how the Newton iteration scales with the number of species for a
fixed, small number of conservation laws.
"""

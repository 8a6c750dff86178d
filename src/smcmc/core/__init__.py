"""Core computations: domain objects, algorithms, diagnostics and results."""

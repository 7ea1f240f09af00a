"""Host-level helpers used by the convergence service."""

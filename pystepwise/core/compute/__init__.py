"""
Shared compute infrastructure for pystepwise.

This module provides timing utilities, numeric tolerances and the dense
linear algebra kernels used by the regression and stepwise domains.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numeric thresholds and comparison tiers
    linalg: Vector, Matrix, LU and QR decompositions
"""

from pystepwise.core.compute.timing import Timer, timed

__all__ = [
    # Timing
    "Timer",
    "timed",
]

"""
Shared compute infrastructure for PyOLS.

IMPORTANT: This is NOT where regression backends live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerances and diagnostic thresholds
    linalg: Linear algebra kernels (Gauss-Jordan, QR)
"""

from pyols.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]

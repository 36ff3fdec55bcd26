"""
Linear algebra kernels for PyOLS.

All functions follow these conventions:
    - Inputs are validated and converted to float64 arrays
    - Each function returns new arrays; inputs are never modified
    - Errors are raised immediately with clear messages

Submodules:
    gauss_jordan: transpose, multiply, Gauss-Jordan inversion
    qr: QR decomposition and least-squares solve
"""

from pyols.core.compute.linalg.gauss_jordan import (
    transpose,
    multiply,
    invert,
)
from pyols.core.compute.linalg.qr import (
    QRResult,
    qr_decompose,
    qr_solve,
    qr_xtx_inverse,
)

__all__ = [
    # Gauss-Jordan kernel
    "transpose",
    "multiply",
    "invert",
    # QR decomposition
    "QRResult",
    "qr_decompose",
    "qr_solve",
    "qr_xtx_inverse",
]

"""
Regression backends.

Available backends:
    CPUGaussJordanBackend: normal equations, Gauss-Jordan inversion (default)
    CPUQRBackend: QR least squares
"""

from pyols.regression.backends.cpu import CPUGaussJordanBackend, CPUQRBackend

__all__ = [
    "CPUGaussJordanBackend",
    "CPUQRBackend",
]

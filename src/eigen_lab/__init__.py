"""Eigen Lab: Closed-form eigendecomposition and diagonalization of 2×2 matrices."""

__version__ = "0.1.0"

from eigen_lab.algorithms.diagonalization import Diagonalization, decompose
from eigen_lab.algorithms.matrix2d import (
    Complex,
    EigenResult,
    Eigenvectors,
    Matrix2D,
    Vec2,
)

__all__ = [
    "__version__",
    "Complex",
    "Diagonalization",
    "EigenResult",
    "Eigenvectors",
    "Matrix2D",
    "Vec2",
    "decompose",
]

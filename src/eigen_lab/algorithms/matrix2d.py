"""Closed-form eigendecomposition of 2×2 real matrices.

This module provides an immutable 2×2 matrix value type with the arithmetic
needed by the visualizations: characteristic-equation solving, eigenvector
extraction, inversion, multiplication and linear interpolation.

Key Features:
- Closed-form eigenvalues via the discriminant of λ² − tr(A)·λ + det(A)
- Deterministic eigenvector policy, including the diagonal (degenerate) case
- Value-based failure signalling (``None``) instead of NaN propagation

References:
- Strang: "Introduction to Linear Algebra" (5th ed.), Section 6.1
- Golub & Van Loan: "Matrix Computations" (4th ed.), Section 7.1
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


SINGULAR_TOLERANCE: float = 1e-10
"""|det| below this value marks a matrix as singular."""

DEGENERATE_TOLERANCE: float = 1e-10
"""Off-diagonal entries below this magnitude are treated as zero."""


@dataclass(frozen=True, slots=True)
class Vec2:
    """Point or direction in the plane."""

    x: float
    y: float

    @property
    def norm(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def scaled(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class Complex:
    """Eigenvalue with real and imaginary parts."""

    real: float
    imag: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"real": self.real, "imag": self.imag}


@dataclass(frozen=True, slots=True)
class EigenResult:
    """Roots of the characteristic equation.

    When ``is_complex`` is False both imaginary parts are exactly 0 and
    ``lambda1.real >= lambda2.real``.
    """

    lambda1: Complex
    """Root taken with the + sign of the square root."""

    lambda2: Complex
    """Root taken with the − sign (conjugate of lambda1 if complex)."""

    is_complex: bool
    """True if the discriminant is negative."""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "lambda1": self.lambda1.to_dict(),
            "lambda2": self.lambda2.to_dict(),
            "is_complex": self.is_complex,
        }


@dataclass(frozen=True, slots=True)
class Eigenvectors:
    """Real eigenpairs, v1 ↔ lambda1 and v2 ↔ lambda2."""

    v1: Vec2
    """Unit eigenvector for lambda1."""

    v2: Vec2
    """Unit eigenvector for lambda2."""

    lambda1: float
    """Larger real eigenvalue."""

    lambda2: float
    """Smaller real eigenvalue."""

    def pairs(self) -> tuple[tuple[Vec2, float], tuple[Vec2, float]]:
        """Return ((v1, lambda1), (v2, lambda2))."""
        return ((self.v1, self.lambda1), (self.v2, self.lambda2))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "v1": self.v1.to_dict(),
            "v2": self.v2.to_dict(),
            "lambda1": self.lambda1,
            "lambda2": self.lambda2,
        }


def _normalize(x: float, y: float) -> Vec2:
    mag = math.sqrt(x * x + y * y)
    return Vec2(x / mag, y / mag)


@dataclass(frozen=True, slots=True)
class Matrix2D:
    """Immutable 2×2 real matrix.

    Layout::

        [a b]
        [c d]

    Example:
        >>> m = Matrix2D(2, 1, 1, 2)
        >>> m.eigenvalues().lambda1.real
        3.0
        >>> m.transform(1, 1)
        Vec2(x=3, y=3)
    """

    a: float
    b: float
    c: float
    d: float

    @classmethod
    def identity(cls) -> Matrix2D:
        return cls(1.0, 0.0, 0.0, 1.0)

    @staticmethod
    def lerp(m1: Matrix2D, m2: Matrix2D, t: float) -> Matrix2D:
        """Component-wise linear interpolation between two matrices.

        ``t`` is not clamped; values outside [0, 1] extrapolate.

        Args:
            m1: Matrix at t = 0.
            m2: Matrix at t = 1.
            t: Interpolation parameter.

        Returns:
            Interpolated matrix.
        """
        return Matrix2D(
            m1.a + (m2.a - m1.a) * t,
            m1.b + (m2.b - m1.b) * t,
            m1.c + (m2.c - m1.c) * t,
            m1.d + (m2.d - m1.d) * t,
        )

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix2D:
        """Build from a 2×2 array-like (row-major)."""
        values = np.asarray(array, dtype=np.float64)
        if values.shape != (2, 2):
            msg = f"Expected a 2x2 array, got shape {values.shape}"
            raise ValueError(msg)
        return cls(
            float(values[0, 0]),
            float(values[0, 1]),
            float(values[1, 0]),
            float(values[1, 1]),
        )

    def to_array(self) -> NDArray[np.float64]:
        """Return the matrix as a 2×2 float64 array."""
        return np.array([[self.a, self.b], [self.c, self.d]], dtype=np.float64)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"a": self.a, "b": self.b, "c": self.c, "d": self.d}

    def transform(self, x: float, y: float) -> Vec2:
        """Apply the matrix to the point (x, y)."""
        return Vec2(self.a * x + self.b * y, self.c * x + self.d * y)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def trace(self) -> float:
        return self.a + self.d

    def discriminant(self) -> float:
        """Discriminant Δ = tr² − 4·det of the characteristic equation."""
        trace = self.trace()
        return trace * trace - 4 * self.determinant()

    def eigenvalues(self) -> EigenResult:
        """Solve λ² − tr(A)·λ + det(A) = 0.

        Returns:
            EigenResult. A negative discriminant yields the complex conjugate
            pair (tr/2 ± i·√(−Δ)/2); otherwise lambda1 takes the + root so
            that lambda1 ≥ lambda2.
        """
        trace = self.trace()
        discriminant = self.discriminant()

        if discriminant < 0:
            real = trace / 2
            imag = math.sqrt(-discriminant) / 2
            return EigenResult(
                lambda1=Complex(real, imag),
                lambda2=Complex(real, -imag),
                is_complex=True,
            )

        sqrt_disc = math.sqrt(discriminant)
        return EigenResult(
            lambda1=Complex((trace + sqrt_disc) / 2, 0.0),
            lambda2=Complex((trace - sqrt_disc) / 2, 0.0),
            is_complex=False,
        )

    def eigenvector(self, eigenvalue: float) -> Vec2:
        """Unit solution of (A − λI)v = 0.

        Policy, in priority order:
            1. |b| > tol: v ∝ (−b, a − λ)
            2. |c| > tol: v ∝ (−(d − λ), c)
            3. diagonal matrix: the coordinate axis whose diagonal entry is
               closest to λ, (1, 0) on ties

        Args:
            eigenvalue: A real eigenvalue of this matrix.

        Returns:
            Unit-length eigenvector.
        """
        a_shift = self.a - eigenvalue
        d_shift = self.d - eigenvalue

        if abs(self.b) > DEGENERATE_TOLERANCE:
            return _normalize(-self.b, a_shift)
        if abs(self.c) > DEGENERATE_TOLERANCE:
            return _normalize(-d_shift, self.c)

        if abs(a_shift) <= abs(d_shift):
            return Vec2(1.0, 0.0)
        return Vec2(0.0, 1.0)

    def is_diagonal(self) -> bool:
        """True if both off-diagonal entries are within tolerance of zero."""
        return (
            abs(self.b) <= DEGENERATE_TOLERANCE
            and abs(self.c) <= DEGENERATE_TOLERANCE
        )

    def get_eigenvectors(self) -> Eigenvectors | None:
        """Real eigenpairs, or None if the eigenvalues are complex."""
        eigenvalues = self.eigenvalues()

        if eigenvalues.is_complex:
            return None

        lambda1 = eigenvalues.lambda1.real
        lambda2 = eigenvalues.lambda2.real
        v1 = self.eigenvector(lambda1)
        v2 = self.eigenvector(lambda2)

        # Scalar matrix: the whole plane is the eigenspace
        if v1 == v2 and self.is_diagonal():
            v2 = Vec2(0.0, 1.0)

        return Eigenvectors(v1=v1, v2=v2, lambda1=lambda1, lambda2=lambda2)

    def inverse(self) -> Matrix2D | None:
        """Inverse matrix, or None if |det| < 1e-10."""
        det = self.determinant()
        if abs(det) < SINGULAR_TOLERANCE:
            return None
        return Matrix2D(
            self.d / det,
            -self.b / det,
            -self.c / det,
            self.a / det,
        )

    def multiply(self, other: Matrix2D) -> Matrix2D:
        """Matrix product self · other."""
        return Matrix2D(
            self.a * other.a + self.b * other.c,
            self.a * other.b + self.b * other.d,
            self.c * other.a + self.d * other.c,
            self.c * other.b + self.d * other.d,
        )

    def __matmul__(self, other: Matrix2D) -> Matrix2D:
        return self.multiply(other)

    def is_close(self, other: Matrix2D, tol: float = 1e-9) -> bool:
        """Component-wise comparison within an absolute tolerance."""
        return all(
            abs(x - y) <= tol
            for x, y in zip(self.as_tuple(), other.as_tuple(), strict=True)
        )


__all__ = [
    "DEGENERATE_TOLERANCE",
    "SINGULAR_TOLERANCE",
    "Complex",
    "EigenResult",
    "Eigenvectors",
    "Matrix2D",
    "Vec2",
]

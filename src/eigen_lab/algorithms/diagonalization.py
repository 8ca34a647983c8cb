"""Diagonalization A = P·D·P⁻¹ with a staged basis-change animation.

The factorization is animated as three successive transformations applied to
column vectors, starting from the identity:

    I  →  P⁻¹  →  D·P⁻¹  →  P·D·P⁻¹ = A

Stage 1 moves into the eigenvector basis, stage 2 scales along the
eigenvectors, stage 3 moves back to the standard basis. Each stage occupies
one of three (almost) equal slices of the progress interval [0, 1].

References:
- Strang: "Introduction to Linear Algebra" (5th ed.), Section 6.2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from eigen_lab.algorithms.matrix2d import EigenResult, Eigenvectors, Matrix2D

logger = logging.getLogger(__name__)


PHASES: tuple[float, ...] = (0.0, 0.33, 0.67, 1.0)
"""Progress values of the four keyframes I, P⁻¹, D·P⁻¹, P·D·P⁻¹."""

PHASE_TOLERANCE: float = 0.01
"""Slack used when deciding whether a phase has been reached."""

STAGE_DESCRIPTIONS: tuple[str, ...] = (
    "Stage 0: Starting with identity I. The unit square is in standard position.",
    "Stage 1: Applying P⁻¹ moves to the eigenvector basis. "
    "The grid aligns with the eigenvector directions.",
    "Stage 2: Applying D scales along the eigenvectors. "
    "In this basis the transformation is a pure diagonal scaling.",
    "Stage 3: Applying P returns to the standard basis. Final result: A = PDP⁻¹.",
)


@dataclass(frozen=True, slots=True)
class Diagonalization:
    """Result of decomposing a matrix as P·D·P⁻¹.

    P, D and Pinv are None when the matrix is not diagonalizable over the
    reals (complex eigenvalues or parallel eigenvectors).
    """

    source: Matrix2D
    """Matrix that was decomposed."""

    eigenvalues: EigenResult
    """Roots of the characteristic equation of ``source``."""

    eigenvectors: Eigenvectors | None
    """Real eigenpairs, None if complex."""

    P: Matrix2D | None
    """Eigenvectors as columns."""

    D: Matrix2D | None
    """Eigenvalues on the diagonal."""

    Pinv: Matrix2D | None
    """Inverse of P."""

    is_diagonalizable: bool
    """True if P is invertible."""

    def reconstruct(self) -> Matrix2D | None:
        """Return P·D·P⁻¹, or None if not diagonalizable."""
        if not self.is_diagonalizable:
            return None
        return self.P @ self.D @ self.Pinv

    def stage_matrices(self) -> tuple[Matrix2D, Matrix2D, Matrix2D, Matrix2D]:
        """Keyframe matrices at each entry of PHASES.

        A non-diagonalizable result stays at the identity for every keyframe.
        """
        identity = Matrix2D.identity()
        if not self.is_diagonalizable:
            return (identity, identity, identity, identity)

        scaled = self.D @ self.Pinv
        return (identity, self.Pinv, scaled, self.P @ scaled)

    def current_matrix(self, progress: float) -> Matrix2D:
        """Interpolated transformation at ``progress`` (see get_current_matrix)."""
        return get_current_matrix(self, progress)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source.to_dict(),
            "eigenvalues": self.eigenvalues.to_dict(),
            "eigenvectors": (
                self.eigenvectors.to_dict() if self.eigenvectors else None
            ),
            "P": self.P.to_dict() if self.P else None,
            "D": self.D.to_dict() if self.D else None,
            "Pinv": self.Pinv.to_dict() if self.Pinv else None,
            "is_diagonalizable": self.is_diagonalizable,
        }


def _not_diagonalizable(
    matrix: Matrix2D,
    eigenvalues: EigenResult,
    eigenvectors: Eigenvectors | None,
) -> Diagonalization:
    return Diagonalization(
        source=matrix,
        eigenvalues=eigenvalues,
        eigenvectors=eigenvectors,
        P=None,
        D=None,
        Pinv=None,
        is_diagonalizable=False,
    )


def decompose(matrix: Matrix2D) -> Diagonalization:
    """Factor ``matrix`` as P·D·P⁻¹.

    Args:
        matrix: Matrix to decompose.

    Returns:
        Diagonalization. ``is_diagonalizable`` is False when the eigenvalues
        are complex or when the eigenvector matrix P is singular.

    Example:
        >>> diag = decompose(Matrix2D(2, 1, 1, 2))
        >>> diag.is_diagonalizable
        True
        >>> diag.D
        Matrix2D(a=3.0, b=0.0, c=0.0, d=1.0)
    """
    eigenvalues = matrix.eigenvalues()
    eigenvectors = matrix.get_eigenvectors()

    if eigenvectors is None or eigenvalues.is_complex:
        logger.debug("Matrix %s has complex eigenvalues", matrix.as_tuple())
        return _not_diagonalizable(matrix, eigenvalues, eigenvectors)

    v1 = eigenvectors.v1
    v2 = eigenvectors.v2
    P = Matrix2D(v1.x, v2.x, v1.y, v2.y)
    D = Matrix2D(eigenvalues.lambda1.real, 0.0, 0.0, eigenvalues.lambda2.real)
    Pinv = P.inverse()

    if Pinv is None:
        logger.debug(
            "Eigenvector matrix of %s is singular (defective matrix)",
            matrix.as_tuple(),
        )
        return _not_diagonalizable(matrix, eigenvalues, eigenvectors)

    return Diagonalization(
        source=matrix,
        eigenvalues=eigenvalues,
        eigenvectors=eigenvectors,
        P=P,
        D=D,
        Pinv=Pinv,
        is_diagonalizable=True,
    )


def get_current_matrix(diagonalization: Diagonalization, progress: float) -> Matrix2D:
    """Map animation progress to the staged transformation.

    Stages:
        progress < 0.33:          I      → P⁻¹
        0.33 ≤ progress < 0.67:   P⁻¹    → D·P⁻¹
        progress ≥ 0.67:          D·P⁻¹  → P·D·P⁻¹

    Args:
        diagonalization: Result of decompose().
        progress: Animation progress, nominally in [0, 1].

    Returns:
        Interpolated matrix; identity if not diagonalizable.
    """
    if not diagonalization.is_diagonalizable:
        return Matrix2D.identity()

    identity, inverse, scaled, full = diagonalization.stage_matrices()

    if progress < PHASES[1]:
        t = progress / PHASES[1]
        return Matrix2D.lerp(identity, inverse, t)
    if progress < PHASES[2]:
        t = (progress - PHASES[1]) / (PHASES[2] - PHASES[1])
        return Matrix2D.lerp(inverse, scaled, t)

    t = (progress - PHASES[2]) / (PHASES[3] - PHASES[2])
    return Matrix2D.lerp(scaled, full, t)


def step_to_next_phase(progress: float) -> float:
    """Return the next keyframe after ``progress``, wrapping to 0 at the end."""
    for phase in PHASES:
        if phase > progress + PHASE_TOLERANCE:
            return phase
    return PHASES[0]


def stage_index(progress: float) -> int:
    """Index of the last keyframe reached by ``progress`` (0-3)."""
    for index in range(len(PHASES) - 1, -1, -1):
        if progress >= PHASES[index] - PHASE_TOLERANCE:
            return index
    return 0


def stage_description(progress: float) -> str:
    return STAGE_DESCRIPTIONS[stage_index(progress)]


__all__ = [
    "PHASES",
    "PHASE_TOLERANCE",
    "STAGE_DESCRIPTIONS",
    "Diagonalization",
    "decompose",
    "get_current_matrix",
    "stage_description",
    "stage_index",
    "step_to_next_phase",
]

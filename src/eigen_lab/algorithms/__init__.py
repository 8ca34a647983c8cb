"""Numerical algorithms module.

This module contains implementations of:
- Closed-form eigenvalues and eigenvectors of 2×2 matrices
- Diagonalization A = P·D·P⁻¹ with staged keyframes
- Time-based progress scheduling for the animations
"""

from eigen_lab.algorithms.animation import (
    PhaseTransition,
    advance_progress,
    animation_duration,
    clamp_progress,
    ease_in_out_cubic,
    ease_in_out_quad,
    morph_matrix,
    progress_at_time,
    step_forward,
    transition_to_next_phase,
)
from eigen_lab.algorithms.diagonalization import (
    PHASES,
    STAGE_DESCRIPTIONS,
    Diagonalization,
    decompose,
    get_current_matrix,
    stage_description,
    stage_index,
    step_to_next_phase,
)
from eigen_lab.algorithms.matrix2d import (
    DEGENERATE_TOLERANCE,
    SINGULAR_TOLERANCE,
    Complex,
    EigenResult,
    Eigenvectors,
    Matrix2D,
    Vec2,
)

__all__ = [
    # Animation
    "PhaseTransition",
    "advance_progress",
    "animation_duration",
    "clamp_progress",
    "ease_in_out_cubic",
    "ease_in_out_quad",
    "morph_matrix",
    "progress_at_time",
    "step_forward",
    "transition_to_next_phase",
    # Diagonalization
    "PHASES",
    "STAGE_DESCRIPTIONS",
    "Diagonalization",
    "decompose",
    "get_current_matrix",
    "stage_description",
    "stage_index",
    "step_to_next_phase",
    # Matrix engine
    "DEGENERATE_TOLERANCE",
    "SINGULAR_TOLERANCE",
    "Complex",
    "EigenResult",
    "Eigenvectors",
    "Matrix2D",
    "Vec2",
]

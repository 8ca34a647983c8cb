"""Visualization utilities for the matrix animations.

This module contains:
- Frame geometry (basis vectors, unit square, probe vectors)
- Eigenvector tips and trails
- Determinant and rotation annotations
"""

from eigen_lab.visualizations.scene import (
    AreaChange,
    EigenTrail,
    Frame,
    build_frame,
    classify_area_change,
    diagonalization_frames,
    morph_frames,
    rotation_angle,
    scaling_label,
)

__all__ = [
    "AreaChange",
    "EigenTrail",
    "Frame",
    "build_frame",
    "classify_area_change",
    "diagonalization_frames",
    "morph_frames",
    "rotation_angle",
    "scaling_label",
]

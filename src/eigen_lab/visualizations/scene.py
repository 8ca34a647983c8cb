"""Render-ready geometry for the matrix visualizations.

A front end draws frames; this module computes what goes in them. Every
frame is plain data (math coordinates, no screen transform) and serializes
to JSON via ``to_dict()``.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum

import numpy as np

from eigen_lab.algorithms.animation import morph_matrix
from eigen_lab.algorithms.diagonalization import Diagonalization, stage_index
from eigen_lab.algorithms.matrix2d import Eigenvectors, Matrix2D, Vec2

UNIT_SQUARE: tuple[Vec2, ...] = (
    Vec2(0.0, 0.0),
    Vec2(1.0, 0.0),
    Vec2(1.0, 1.0),
    Vec2(0.0, 1.0),
)

TEST_VECTORS: tuple[Vec2, ...] = (
    Vec2(1.0, 0.0),
    Vec2(0.0, 1.0),
    Vec2(1.0, 1.0),
    Vec2(-1.0, 1.0),
    Vec2(2.0, 1.0),
    Vec2(1.0, -1.0),
)
"""Probe vectors drawn alongside the eigenvectors."""

EIGENVECTOR_SCALE: float = 3.0
"""Drawn eigenvectors are unit eigenvectors scaled by this factor."""

SINGULAR_AREA: float = 0.01
"""|det| below this is displayed as a collapsed (singular) area."""


class AreaChange(Enum):
    """How a transformation changes the oriented area of the unit square."""

    SINGULAR = "singular"
    FLIP = "flip"
    EXPANSION = "expansion"
    COMPRESSION = "compression"


def classify_area_change(det: float) -> AreaChange:
    if abs(det) < SINGULAR_AREA:
        return AreaChange.SINGULAR
    if det < 0:
        return AreaChange.FLIP
    if det > 1:
        return AreaChange.EXPANSION
    return AreaChange.COMPRESSION


def rotation_angle(matrix: Matrix2D, x: float, y: float) -> float:
    """Signed angle in degrees from (x, y) to its image, in (-180, 180]."""
    image = matrix.transform(x, y)
    angle = math.degrees(math.atan2(image.y, image.x) - math.atan2(y, x))
    while angle > 180:
        angle -= 360
    while angle <= -180:
        angle += 360
    return angle


def scaling_label(eigenvalue: float) -> str:
    """Human-readable scaling along an eigenvector, e.g. ``"2.0× (reversed)"``."""
    label = f"{abs(eigenvalue):.1f}×"
    if eigenvalue < 0:
        label += " (reversed)"
    return label


def eigenvector_tips(
    matrix: Matrix2D,
    eigenvectors: Eigenvectors | None,
    scale: float = EIGENVECTOR_SCALE,
) -> tuple[Vec2, Vec2] | None:
    """Images under ``matrix`` of the scaled eigenvectors."""
    if eigenvectors is None:
        return None
    v1 = eigenvectors.v1.scaled(scale)
    v2 = eigenvectors.v2.scaled(scale)
    return (matrix.transform(v1.x, v1.y), matrix.transform(v2.x, v2.y))


@dataclass(frozen=True, slots=True)
class Frame:
    """Geometry of one animation frame."""

    progress: float
    """Animation progress this frame was built for."""

    matrix: Matrix2D
    """Transformation currently applied."""

    i_hat: Vec2
    """Image of (1, 0)."""

    j_hat: Vec2
    """Image of (0, 1)."""

    unit_square: tuple[Vec2, ...]
    """Image of the unit square corners."""

    probe_vectors: tuple[Vec2, ...]
    """Images of TEST_VECTORS."""

    determinant: float
    """Signed area of the transformed unit square."""

    area_change: AreaChange
    """Classification of ``determinant``."""

    eigenvector_tips: tuple[Vec2, Vec2] | None
    """Transformed eigenvector tips, None without real eigenvectors."""

    stage: int | None = None
    """Diagonalization keyframe reached, None for the morph animation."""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "progress": self.progress,
            "matrix": self.matrix.to_dict(),
            "i_hat": self.i_hat.to_dict(),
            "j_hat": self.j_hat.to_dict(),
            "unit_square": [p.to_dict() for p in self.unit_square],
            "probe_vectors": [p.to_dict() for p in self.probe_vectors],
            "determinant": self.determinant,
            "area_change": self.area_change.value,
            "eigenvector_tips": (
                [tip.to_dict() for tip in self.eigenvector_tips]
                if self.eigenvector_tips
                else None
            ),
            "stage": self.stage,
        }


def build_frame(
    current: Matrix2D,
    eigenvectors: Eigenvectors | None,
    progress: float,
    *,
    stage: int | None = None,
) -> Frame:
    """Assemble the geometry for ``current`` at ``progress``."""
    det = current.determinant()
    return Frame(
        progress=progress,
        matrix=current,
        i_hat=current.transform(1.0, 0.0),
        j_hat=current.transform(0.0, 1.0),
        unit_square=tuple(current.transform(p.x, p.y) for p in UNIT_SQUARE),
        probe_vectors=tuple(current.transform(v.x, v.y) for v in TEST_VECTORS),
        determinant=det,
        area_change=classify_area_change(det),
        eigenvector_tips=eigenvector_tips(current, eigenvectors),
        stage=stage,
    )


def morph_frames(target: Matrix2D, num_frames: int = 60) -> list[Frame]:
    """Frames of the eased identity → target morph."""
    eigenvectors = target.get_eigenvectors()
    return [
        build_frame(morph_matrix(target, float(p)), eigenvectors, float(p))
        for p in np.linspace(0.0, 1.0, num_frames)
    ]


def diagonalization_frames(
    diagonalization: Diagonalization, num_frames: int = 60
) -> list[Frame]:
    """Frames of the staged I → P⁻¹ → D·P⁻¹ → A animation."""
    frames = []
    for p in np.linspace(0.0, 1.0, num_frames):
        progress = float(p)
        frames.append(
            build_frame(
                diagonalization.current_matrix(progress),
                diagonalization.eigenvectors,
                progress,
                stage=stage_index(progress),
            )
        )
    return frames


class EigenTrail:
    """Bounded history of the transformed eigenvector tips.

    Owned by the caller; one instance per running animation.
    """

    __slots__ = ("_trails",)

    def __init__(self, max_length: int = 30) -> None:
        self._trails: tuple[deque[Vec2], deque[Vec2]] = (
            deque(maxlen=max_length),
            deque(maxlen=max_length),
        )

    def record(self, current: Matrix2D, eigenvectors: Eigenvectors | None) -> None:
        """Append the current tips, or clear the history if there are none."""
        tips = eigenvector_tips(current, eigenvectors)
        if tips is None:
            self.clear()
            return
        for trail, tip in zip(self._trails, tips, strict=True):
            trail.append(tip)

    def clear(self) -> None:
        for trail in self._trails:
            trail.clear()

    @property
    def points(self) -> tuple[list[Vec2], list[Vec2]]:
        """Oldest-to-newest tips for v1 and v2."""
        return (list(self._trails[0]), list(self._trails[1]))

    def __len__(self) -> int:
        return len(self._trails[0])


__all__ = [
    "EIGENVECTOR_SCALE",
    "SINGULAR_AREA",
    "TEST_VECTORS",
    "UNIT_SQUARE",
    "AreaChange",
    "EigenTrail",
    "Frame",
    "build_frame",
    "classify_area_change",
    "diagonalization_frames",
    "eigenvector_tips",
    "morph_frames",
    "rotation_angle",
    "scaling_label",
]

"""
Preset Transformations - Single Source of Truth

This module defines the catalog of example transformations offered by the
visualizations, each chosen to show a distinct eigenstructure: complex
eigenvalues, a repeated eigenvalue, defective shears, reflections,
projections and a symmetric stretch.

References:
    - Strang: "Introduction to Linear Algebra" (5th ed.), Chapter 6
"""

from dataclasses import dataclass
from enum import Enum

from eigen_lab.algorithms.matrix2d import Matrix2D


class PresetName(Enum):
    """Available preset transformations."""

    ROTATION = "rotation"
    SCALING = "scaling"
    SHEAR_X = "shear_x"
    SHEAR_Y = "shear_y"
    REFLECTION = "reflection"
    PROJECTION = "projection"
    SQUEEZE = "squeeze"


@dataclass(frozen=True, slots=True)
class Preset:
    """A named example transformation."""

    name: PresetName
    title: str
    matrix: Matrix2D
    description: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name.value,
            "title": self.title,
            "matrix": self.matrix.to_dict(),
            "description": self.description,
        }


# =============================================================================
# PRESET CATALOG
# =============================================================================
# Ordered as presented to the user: complex case first, symmetric stretch last.

PRESETS: dict[PresetName, Preset] = {
    PresetName.ROTATION: Preset(
        name=PresetName.ROTATION,
        title="Rotation (90°)",
        matrix=Matrix2D(0, -1, 1, 0),
        description=(
            "Rotates vectors 90° counterclockwise. "
            "Has complex eigenvalues (no real eigenvectors)."
        ),
    ),
    PresetName.SCALING: Preset(
        name=PresetName.SCALING,
        title="Uniform Scaling (2x)",
        matrix=Matrix2D(2, 0, 0, 2),
        description="Scales all vectors by 2. Every vector is an eigenvector with eigenvalue 2.",
    ),
    PresetName.SHEAR_X: Preset(
        name=PresetName.SHEAR_X,
        title="Shear X",
        matrix=Matrix2D(1, 1, 0, 1),
        description="Shears horizontally. Eigenvector along x-axis stays on same line.",
    ),
    PresetName.SHEAR_Y: Preset(
        name=PresetName.SHEAR_Y,
        title="Shear Y",
        matrix=Matrix2D(1, 0, 1, 1),
        description="Shears vertically. Eigenvector along y-axis stays on same line.",
    ),
    PresetName.REFLECTION: Preset(
        name=PresetName.REFLECTION,
        title="Reflection (X-axis)",
        matrix=Matrix2D(1, 0, 0, -1),
        description="Reflects across x-axis. Eigenvectors along x and y axes.",
    ),
    PresetName.PROJECTION: Preset(
        name=PresetName.PROJECTION,
        title="Projection onto X-axis",
        matrix=Matrix2D(1, 0, 0, 0),
        description="Projects onto x-axis. Collapses y-dimension (eigenvalue = 0).",
    ),
    PresetName.SQUEEZE: Preset(
        name=PresetName.SQUEEZE,
        title="Squeeze Mapping",
        matrix=Matrix2D(2, 1, 1, 2),
        description="Stretches along diagonal directions. Clear eigenvector directions.",
    ),
}


def get_preset(name: PresetName | str) -> Preset:
    """Get a preset by enum or case-insensitive name.

    Args:
        name: Preset name (e.g. "rotation", "Shear_X" or PresetName.SQUEEZE).

    Returns:
        Preset for the name.

    Raises:
        ValueError: If the name is not in the catalog.
    """
    if isinstance(name, str):
        try:
            name = PresetName(name.strip().lower().replace("-", "_"))
        except ValueError:
            valid = ", ".join(p.value for p in PresetName)
            msg = f"Unknown preset: {name!r}. Valid presets: {valid}"
            raise ValueError(msg) from None
    return PRESETS[name]


def list_presets() -> list[Preset]:
    """All presets in catalog order."""
    return list(PRESETS.values())

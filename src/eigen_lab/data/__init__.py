"""Data module for preset transformations and matrix input."""

from eigen_lab.data.matrix_input import (
    DEFAULT_MATRIX,
    matrix_from_query,
    parse_matrix,
    resolve_matrix,
)
from eigen_lab.data.presets import (
    PRESETS,
    Preset,
    PresetName,
    get_preset,
    list_presets,
)

__all__ = [
    "DEFAULT_MATRIX",
    "PRESETS",
    "Preset",
    "PresetName",
    "get_preset",
    "list_presets",
    "matrix_from_query",
    "parse_matrix",
    "resolve_matrix",
]

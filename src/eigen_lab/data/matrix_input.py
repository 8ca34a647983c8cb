"""Parsing of externally supplied matrices.

Matrices arrive as four comma-separated numbers, e.g. from a URL query
parameter ``?matrix=2,1,1,2``. Malformed input never reaches the engine: it
is rejected here and replaced with a default.
"""

from __future__ import annotations

import logging
import math
from urllib.parse import parse_qs

from eigen_lab.algorithms.matrix2d import Matrix2D

logger = logging.getLogger(__name__)


DEFAULT_MATRIX: Matrix2D = Matrix2D(2, 1, 1, 2)
"""Fallback used when no valid matrix is supplied."""


def parse_matrix(text: str | None) -> Matrix2D | None:
    """Parse ``"a,b,c,d"`` into a matrix.

    Args:
        text: Four comma-separated numbers, surrounding whitespace allowed.

    Returns:
        Matrix2D, or None for wrong arity, non-numeric or non-finite values.
    """
    if not text:
        return None

    parts = text.split(",")
    if len(parts) != 4:
        return None

    try:
        values = [float(part) for part in parts]
    except ValueError:
        return None

    if not all(math.isfinite(v) for v in values):
        return None

    return Matrix2D(*values)


def matrix_from_query(query: str, key: str = "matrix") -> Matrix2D | None:
    """Parse the matrix parameter out of a URL query string."""
    values = parse_qs(query.lstrip("?")).get(key)
    if not values:
        return None
    return parse_matrix(values[0])


def resolve_matrix(text: str | None, default: Matrix2D = DEFAULT_MATRIX) -> Matrix2D:
    """Parse ``text``, falling back to ``default`` when it is rejected."""
    matrix = parse_matrix(text)
    if matrix is None:
        if text:
            logger.warning("Rejected matrix input %r, using default %s", text, default.as_tuple())
        return default
    return matrix


__all__ = [
    "DEFAULT_MATRIX",
    "matrix_from_query",
    "parse_matrix",
    "resolve_matrix",
]

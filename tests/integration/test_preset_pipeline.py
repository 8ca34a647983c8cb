"""Integration tests for the preset → decompose → frames pipeline.

These tests run every preset through the same path a front end uses and
compare against hand-derived eigenstructure. Any change to the eigenvector
policy or the stage ordering will cause these tests to fail.
"""

import json
import math

import numpy as np
import pytest

from eigen_lab.algorithms.diagonalization import PHASES, decompose
from eigen_lab.algorithms.matrix2d import Matrix2D
from eigen_lab.data.matrix_input import resolve_matrix
from eigen_lab.data.presets import PresetName, get_preset
from eigen_lab.visualizations.scene import diagonalization_frames, morph_frames

NUM_FRAMES = 31

# Expected (lambda1, lambda2) for real presets, None for complex ones
EXPECTED_EIGENVALUES = {
    PresetName.ROTATION: None,
    PresetName.SCALING: (2.0, 2.0),
    PresetName.SHEAR_X: (1.0, 1.0),
    PresetName.SHEAR_Y: (1.0, 1.0),
    PresetName.REFLECTION: (1.0, -1.0),
    PresetName.PROJECTION: (1.0, 0.0),
    PresetName.SQUEEZE: (3.0, 1.0),
}


class TestPresetPipeline:
    """Run each preset through the full pipeline."""

    @pytest.mark.parametrize("name", list(PresetName))
    def test_eigenvalues(self, name: PresetName) -> None:
        """Eigenvalues should match the hand-derived table."""
        result = get_preset(name).matrix.eigenvalues()
        expected = EXPECTED_EIGENVALUES[name]
        if expected is None:
            assert result.is_complex
        else:
            assert not result.is_complex
            assert (result.lambda1.real, result.lambda2.real) == expected

    @pytest.mark.parametrize("name", list(PresetName))
    def test_frames_serialize(self, name: PresetName) -> None:
        """Both animations should serialize every frame to JSON."""
        matrix = get_preset(name).matrix
        frames = morph_frames(matrix, NUM_FRAMES) + diagonalization_frames(
            decompose(matrix), NUM_FRAMES
        )
        payload = json.dumps([frame.to_dict() for frame in frames])
        assert len(json.loads(payload)) == 2 * NUM_FRAMES

    @pytest.mark.parametrize("name", list(PresetName))
    def test_animations_end_at_matrix(self, name: PresetName) -> None:
        """Diagonalizable presets should end both animations at the matrix."""
        matrix = get_preset(name).matrix
        result = decompose(matrix)

        assert morph_frames(matrix, NUM_FRAMES)[-1].matrix.is_close(matrix)

        final = diagonalization_frames(result, NUM_FRAMES)[-1].matrix
        if result.is_diagonalizable:
            assert final.is_close(matrix, tol=1e-9)
        else:
            assert final == Matrix2D.identity()

    def test_squeeze_eigenbasis(self) -> None:
        """Squeeze eigenvectors should lie on the diagonals."""
        eigenvectors = get_preset("squeeze").matrix.get_eigenvectors()
        s = 1 / math.sqrt(2)
        assert np.allclose([abs(eigenvectors.v1.x), abs(eigenvectors.v1.y)], [s, s])
        assert np.isclose(eigenvectors.v2.x, -eigenvectors.v2.y)


class TestQueryToAnimation:
    """External input flowing into the stager."""

    def test_query_matrix_reaches_stager(self) -> None:
        """A parsed query matrix should be reconstructed at every keyframe end."""
        matrix = resolve_matrix("4,1,2,3")
        result = decompose(matrix)
        keyframes = [result.current_matrix(p) for p in PHASES]
        assert keyframes[0].is_close(Matrix2D.identity())
        assert keyframes[-1].is_close(matrix, tol=1e-9)

    def test_bad_query_uses_default(self) -> None:
        """Rejected input should still animate the default matrix."""
        result = decompose(resolve_matrix("not,a,matrix"))
        assert result.is_diagonalizable
        assert result.source == Matrix2D(2, 1, 1, 2)

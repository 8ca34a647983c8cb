"""Tests for the diagonalization stager."""

import json
import logging
import math

import numpy as np
import pytest

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
from eigen_lab.algorithms.matrix2d import Matrix2D

SQUEEZE = Matrix2D(2, 1, 1, 2)
UPPER_TRIANGULAR = Matrix2D(1, 2, 0, 3)
ROTATION = Matrix2D(0, -1, 1, 0)
SHEAR_X = Matrix2D(1, 1, 0, 1)
PROJECTION = Matrix2D(1, 0, 0, 0)


class TestDecompose:
    """Tests for decompose function."""

    def test_returns_diagonalization(self) -> None:
        """Should return Diagonalization instance."""
        assert isinstance(decompose(SQUEEZE), Diagonalization)

    def test_immutable(self) -> None:
        """Diagonalization should be immutable."""
        result = decompose(SQUEEZE)
        with pytest.raises(AttributeError):
            result.is_diagonalizable = False  # type: ignore[misc]

    def test_symmetric_matrix(self) -> None:
        """Symmetric matrix should be diagonalizable with D = diag(3, 1)."""
        result = decompose(SQUEEZE)
        assert result.is_diagonalizable
        assert result.D == Matrix2D(3.0, 0.0, 0.0, 1.0)

    def test_p_columns_are_eigenvectors(self) -> None:
        """P should hold v1 and v2 as columns."""
        result = decompose(SQUEEZE)
        v1, v2 = result.eigenvectors.v1, result.eigenvectors.v2
        assert result.P == Matrix2D(v1.x, v2.x, v1.y, v2.y)

    def test_pinv_is_inverse_of_p(self) -> None:
        """P·P⁻¹ should be the identity."""
        result = decompose(UPPER_TRIANGULAR)
        assert (result.P @ result.Pinv).is_close(Matrix2D.identity(), tol=1e-9)

    @pytest.mark.parametrize(
        "matrix",
        [SQUEEZE, UPPER_TRIANGULAR, PROJECTION, Matrix2D(4, 1, 2, 3), Matrix2D(1, 0, 0, -1)],
    )
    def test_reconstructs_source(self, matrix: Matrix2D) -> None:
        """P·D·P⁻¹ should reconstruct the source matrix."""
        result = decompose(matrix)
        assert result.is_diagonalizable
        assert result.reconstruct().is_close(matrix, tol=1e-9)

    def test_reconstruction_matches_numpy(self) -> None:
        """Reconstruction should hold for random matrices with real eigenvalues."""
        rng = np.random.default_rng(42)
        checked = 0
        for _ in range(50):
            matrix = Matrix2D.from_array(rng.standard_normal((2, 2)))
            result = decompose(matrix)
            if not result.is_diagonalizable:
                continue
            assert np.allclose(result.reconstruct().to_array(), matrix.to_array())
            checked += 1
        assert checked > 0

    def test_complex_not_diagonalizable(self) -> None:
        """Rotation should not be diagonalizable and carry no P, D, P⁻¹."""
        result = decompose(ROTATION)
        assert not result.is_diagonalizable
        assert result.P is None
        assert result.D is None
        assert result.Pinv is None
        assert result.eigenvectors is None
        assert result.eigenvalues.is_complex

    def test_defective_not_diagonalizable(self) -> None:
        """Shear has parallel eigenvectors, so P is singular."""
        result = decompose(SHEAR_X)
        assert not result.is_diagonalizable
        assert result.eigenvectors is not None
        assert result.P is None
        assert result.reconstruct() is None

    def test_projection_is_diagonalizable(self) -> None:
        """Singular A with distinct eigenvalues 1, 0 is still diagonalizable."""
        assert PROJECTION.inverse() is None
        result = decompose(PROJECTION)
        assert result.is_diagonalizable
        assert result.D == Matrix2D(1.0, 0.0, 0.0, 0.0)

    def test_scalar_matrix_is_diagonalizable(self) -> None:
        """Uniform scaling should decompose with P = I."""
        result = decompose(Matrix2D(2, 0, 0, 2))
        assert result.is_diagonalizable
        assert result.P == Matrix2D.identity()

    def test_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Failures should be logged at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="eigen_lab"):
            decompose(ROTATION)
            decompose(SHEAR_X)
        messages = " ".join(record.getMessage() for record in caplog.records)
        assert "complex eigenvalues" in messages
        assert "singular" in messages

    def test_to_dict_json_serializable(self) -> None:
        """to_dict output should survive a JSON round trip."""
        for matrix in (SQUEEZE, ROTATION, SHEAR_X):
            data = decompose(matrix).to_dict()
            assert json.loads(json.dumps(data)) == data

    def test_to_dict_not_diagonalizable(self) -> None:
        """Missing factors should serialize as null."""
        data = decompose(ROTATION).to_dict()
        assert data["P"] is None
        assert data["eigenvectors"] is None
        assert data["is_diagonalizable"] is False


class TestGetCurrentMatrix:
    """Tests for the staged animation matrix."""

    def test_start_is_identity(self) -> None:
        """Progress 0 should be the identity."""
        result = decompose(SQUEEZE)
        assert get_current_matrix(result, 0.0).is_close(Matrix2D.identity(), tol=1e-12)

    @pytest.mark.parametrize("matrix", [SQUEEZE, UPPER_TRIANGULAR, PROJECTION])
    def test_end_is_source(self, matrix: Matrix2D) -> None:
        """Progress 1 should reconstruct the source matrix."""
        result = decompose(matrix)
        assert get_current_matrix(result, 1.0).is_close(matrix, tol=1e-9)

    def test_end_not_pinv_d_p(self) -> None:
        """P⁻¹·D·P differs from A for non-symmetric matrices; progress 1 must be A."""
        result = decompose(UPPER_TRIANGULAR)
        reversed_order = result.Pinv @ result.D @ result.P
        assert not reversed_order.is_close(UPPER_TRIANGULAR, tol=1e-6)
        assert result.current_matrix(1.0).is_close(UPPER_TRIANGULAR, tol=1e-9)

    def test_keyframes(self) -> None:
        """Phase points should land on I, P⁻¹, D·P⁻¹ and P·D·P⁻¹."""
        result = decompose(UPPER_TRIANGULAR)
        expected = result.stage_matrices()
        for phase, matrix in zip(PHASES, expected, strict=True):
            assert result.current_matrix(phase).is_close(matrix, tol=1e-9)

    def test_stage_matrices(self) -> None:
        """Keyframes should be I, P⁻¹, D·P⁻¹, P·D·P⁻¹."""
        result = decompose(SQUEEZE)
        identity, inverse, scaled, full = result.stage_matrices()
        assert identity == Matrix2D.identity()
        assert inverse == result.Pinv
        assert scaled == result.D @ result.Pinv
        assert full == result.P @ scaled

    def test_first_stage_interpolates(self) -> None:
        """Halfway through stage 1 should average I and P⁻¹."""
        result = decompose(SQUEEZE)
        expected = Matrix2D.lerp(Matrix2D.identity(), result.Pinv, 0.5)
        assert result.current_matrix(0.165).is_close(expected, tol=1e-9)

    def test_second_stage_interpolates(self) -> None:
        """Halfway through stage 2 should average P⁻¹ and D·P⁻¹."""
        result = decompose(SQUEEZE)
        expected = Matrix2D.lerp(result.Pinv, result.D @ result.Pinv, 0.5)
        assert result.current_matrix(0.5).is_close(expected, tol=1e-9)

    @pytest.mark.parametrize("progress", [0.0, 0.2, 0.5, 0.9, 1.0])
    def test_not_diagonalizable_stays_identity(self, progress: float) -> None:
        """Non-diagonalizable matrices should always give the identity."""
        for matrix in (ROTATION, SHEAR_X):
            result = decompose(matrix)
            assert get_current_matrix(result, progress) == Matrix2D.identity()

    def test_continuous_at_stage_boundaries(self) -> None:
        """Adjacent stages should meet at the phase points."""
        result = decompose(UPPER_TRIANGULAR)
        for phase in PHASES[1:-1]:
            before = result.current_matrix(phase - 1e-9)
            after = result.current_matrix(phase)
            assert before.is_close(after, tol=1e-6)


class TestStepToNextPhase:
    """Tests for step_to_next_phase."""

    @pytest.mark.parametrize(
        ("progress", "expected"),
        [
            (0.0, 0.33),
            (0.2, 0.33),
            (0.33, 0.67),
            (0.5, 0.67),
            (0.67, 1.0),
            (0.8, 1.0),
        ],
    )
    def test_advances(self, progress: float, expected: float) -> None:
        """Should return the next phase point."""
        assert step_to_next_phase(progress) == expected

    def test_skips_phase_within_tolerance(self) -> None:
        """A phase closer than 0.01 ahead counts as reached."""
        assert step_to_next_phase(0.325) == 0.67

    @pytest.mark.parametrize("progress", [0.995, 1.0])
    def test_wraps_to_start(self, progress: float) -> None:
        """At the last phase it should wrap to 0."""
        assert step_to_next_phase(progress) == 0.0


class TestStageIndex:
    """Tests for stage_index and stage descriptions."""

    @pytest.mark.parametrize(
        ("progress", "expected"),
        [(0.0, 0), (0.1, 0), (0.325, 1), (0.5, 1), (0.67, 2), (0.9, 2), (1.0, 3)],
    )
    def test_stage_index(self, progress: float, expected: int) -> None:
        """Should report the last keyframe reached."""
        assert stage_index(progress) == expected

    def test_description_per_stage(self) -> None:
        """Each phase point should have its own description."""
        descriptions = [stage_description(p) for p in PHASES]
        assert descriptions == list(STAGE_DESCRIPTIONS)

    def test_final_description_mentions_factorization(self) -> None:
        """Last stage should state A = PDP⁻¹."""
        assert "A = PDP⁻¹" in STAGE_DESCRIPTIONS[-1]


def test_reflection_eigenbasis_is_axes() -> None:
    """Diagonal matrices should keep P on the coordinate axes."""
    result = decompose(Matrix2D(1, 0, 0, -1))
    assert result.P == Matrix2D.identity()
    assert math.isclose(result.current_matrix(1.0).d, -1.0)

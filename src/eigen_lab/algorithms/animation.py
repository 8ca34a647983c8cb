"""Time-based progress scheduling for the matrix animations.

Frame pacing belongs to the host render loop. This module only answers
"where should progress be after ``elapsed`` seconds?", so any loop (browser
frames, a GUI timer, a test) can drive the animations deterministically.

Two animations are supported:
- Morph: identity → A with cubic easing, advanced continuously while playing
- Phase stepping: eased transitions between diagonalization keyframes
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from eigen_lab.algorithms.diagonalization import step_to_next_phase
from eigen_lab.algorithms.matrix2d import Matrix2D

BASE_DURATION: float = 0.8
"""Seconds for one phase transition at speed 1."""

PLAY_RATE: float = 0.008
"""Progress added per rendered frame while playing at speed 1."""

STEP_SIZE: float = 0.1
"""Progress added by a single manual step."""

Easing = Callable[[float], float]


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out on [0, 1]."""
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def clamp_progress(progress: float) -> float:
    return max(0.0, min(1.0, progress))


def animation_duration(speed: float, base_duration: float = BASE_DURATION) -> float:
    """Duration in seconds of one transition at the given speed multiplier."""
    if speed <= 0:
        msg = f"Animation speed must be positive, got {speed}"
        raise ValueError(msg)
    return base_duration / speed


def progress_at_time(
    elapsed: float,
    duration: float,
    start_progress: float,
    target_progress: float,
    *,
    easing: Easing = ease_in_out_quad,
) -> float:
    """Eased progress ``elapsed`` seconds into a transition.

    Args:
        elapsed: Seconds since the transition started.
        duration: Total transition time in seconds.
        start_progress: Progress when the transition started.
        target_progress: Progress to reach at ``duration``.
        easing: Easing curve applied to the normalized time.

    Returns:
        Progress between start and target; exactly target once finished.
    """
    if duration <= 0 or elapsed >= duration:
        return target_progress

    t = max(elapsed, 0.0) / duration
    return start_progress + (target_progress - start_progress) * easing(t)


@dataclass(frozen=True, slots=True)
class PhaseTransition:
    """A scheduled move from one progress value to another."""

    start: float
    """Progress at elapsed = 0."""

    target: float
    """Progress at elapsed = duration."""

    duration: float
    """Length in seconds."""

    def progress_at(self, elapsed: float) -> float:
        return progress_at_time(elapsed, self.duration, self.start, self.target)

    def is_finished(self, elapsed: float) -> bool:
        return elapsed >= self.duration


def transition_to_next_phase(progress: float, speed: float = 1.0) -> PhaseTransition:
    """Schedule the eased move to the next diagonalization keyframe.

    Example:
        >>> transition = transition_to_next_phase(0.0, speed=2.0)
        >>> transition.target, transition.duration
        (0.33, 0.4)
    """
    return PhaseTransition(
        start=progress,
        target=step_to_next_phase(progress),
        duration=animation_duration(speed),
    )


def advance_progress(progress: float, speed: float = 1.0, rate: float = PLAY_RATE) -> float:
    """Progress after one rendered frame of continuous play, clamped at 1."""
    return min(1.0, progress + rate * speed)


def step_forward(progress: float, step: float = STEP_SIZE) -> float:
    return min(1.0, progress + step)


def morph_matrix(target: Matrix2D, progress: float) -> Matrix2D:
    """Identity → target interpolation with cubic easing."""
    t = ease_in_out_cubic(clamp_progress(progress))
    return Matrix2D.lerp(Matrix2D.identity(), target, t)


__all__ = [
    "BASE_DURATION",
    "PLAY_RATE",
    "STEP_SIZE",
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
]

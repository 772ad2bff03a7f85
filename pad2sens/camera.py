"""Angular camera state driven by raw motion samples."""

from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from .capture import MotionSample
from .games import GameProfile

PITCH_LIMIT = 89.0


def normalize_angle(angle: float) -> float:
    """Wrap ``angle`` in degrees into the half-open range (-180, 180]."""

    wrapped = math.fmod(float(angle), 360.0)
    if wrapped > 180.0:
        wrapped -= 360.0
    elif wrapped <= -180.0:
        wrapped += 360.0
    return wrapped


def normalize_angles(angles: np.ndarray) -> np.ndarray:
    """Vectorised :func:`normalize_angle`."""

    wrapped = np.fmod(np.asarray(angles, dtype=np.float64), 360.0)
    wrapped = np.where(wrapped > 180.0, wrapped - 360.0, wrapped)
    return np.where(wrapped <= -180.0, wrapped + 360.0, wrapped)


def clamp_pitch(pitch: float) -> float:
    return max(-PITCH_LIMIT, min(PITCH_LIMIT, float(pitch)))


@dataclass
class CameraState:
    """Yaw accumulates without bound; pitch stays within +/- 89 degrees."""

    yaw: float = 0.0
    pitch: float = 0.0


class CameraView:
    """Read-only handle onto the simulator's camera state."""

    __slots__ = ("_state",)

    def __init__(self, state: CameraState) -> None:
        self._state = state

    @property
    def yaw(self) -> float:
        return self._state.yaw

    @property
    def pitch(self) -> float:
        return self._state.pitch

    @property
    def heading(self) -> float:
        return normalize_angle(self._state.yaw)


class AngularCameraSimulator:
    """Own the only mutable camera state and apply motion to it."""

    def __init__(self) -> None:
        self._state = CameraState()
        self.view = CameraView(self._state)

    def apply_motion(
        self,
        sample: MotionSample,
        sensitivity: float,
        game: GameProfile,
        invert_y: bool = False,
    ) -> None:
        degrees_per_count = game.yaw_per_count * sensitivity
        self._state.yaw += sample.dx_counts * degrees_per_count

        # Moving toward the bottom of the pad looks down unless inverted.
        direction = 1.0 if invert_y else -1.0
        pitch_delta = sample.dy_counts * degrees_per_count * direction
        self._state.pitch = clamp_pitch(self._state.pitch + pitch_delta)

    def reset_view(self) -> None:
        self._state.yaw = 0.0
        self._state.pitch = 0.0


__all__ = [
    "PITCH_LIMIT",
    "CameraState",
    "CameraView",
    "AngularCameraSimulator",
    "normalize_angle",
    "normalize_angles",
    "clamp_pitch",
]

"""Rectilinear projection from world angles to surface coordinates."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Protocol, Sequence

import numpy as np

from .camera import normalize_angle, normalize_angles

BEHIND_VIEWER_DEG = 90.0


class Orientation(Protocol):
    @property
    def yaw(self) -> float: ...

    @property
    def pitch(self) -> float: ...


def focal_length(surface_width: float, fov_deg: float) -> float:
    """Distance in pixels from the eye to a surface ``surface_width`` wide."""

    if surface_width <= 0 or not 0.0 < fov_deg < 180.0:
        return 0.0
    return (surface_width / 2.0) / math.tan(math.radians(fov_deg) / 2.0)


def project(
    world_yaw: float,
    world_pitch: float,
    surface_width: float,
    surface_height: float,
    fov_deg: float,
    camera: Orientation,
) -> Optional[tuple[float, float]]:
    """Map a world direction to ``(x, y)`` or ``None`` when it is off-screen.

    Anything more than 90 degrees to either side is behind the viewer and is cut
    off outright. Points close to that limit diverge towards infinity the way a
    real first-person camera stretches the edge of its view.
    """

    f = focal_length(surface_width, fov_deg)
    if f <= 0:
        return None

    relative_yaw = normalize_angle(world_yaw - camera.yaw)
    if abs(relative_yaw) > BEHIND_VIEWER_DEG:
        return None

    relative_pitch = world_pitch - camera.pitch
    x = math.tan(math.radians(relative_yaw)) * f + surface_width / 2.0
    y = surface_height / 2.0 - math.tan(math.radians(relative_pitch)) * f
    return x, y


def project_yaws(
    world_yaws: Sequence[float],
    surface_width: float,
    fov_deg: float,
    camera: Orientation,
) -> tuple[np.ndarray, np.ndarray]:
    """Project many world yaws at once.

    Returns the x coordinates and a boolean mask of entries in front of the viewer.
    """

    yaws = np.asarray(world_yaws, dtype=np.float64)
    f = focal_length(surface_width, fov_deg)
    if f <= 0:
        return np.zeros_like(yaws), np.zeros(yaws.shape, dtype=bool)

    relative = normalize_angles(yaws - camera.yaw)
    visible = np.abs(relative) <= BEHIND_VIEWER_DEG
    xs = np.tan(np.radians(relative)) * f + surface_width / 2.0
    return xs, visible


def horizon_y(surface_width: float, surface_height: float, fov_deg: float, camera: Orientation) -> float:
    """Vertical position of the world horizon for the camera's pitch."""

    f = focal_length(surface_width, fov_deg)
    return surface_height / 2.0 + math.tan(math.radians(camera.pitch)) * f


@dataclass
class Projector:
    """Bind a field of view and camera handle for repeated projection."""

    fov_deg: float
    camera: Orientation

    def project(
        self, world_yaw: float, world_pitch: float, size: tuple[int, int]
    ) -> Optional[tuple[float, float]]:
        return project(world_yaw, world_pitch, size[0], size[1], self.fov_deg, self.camera)

    def horizon(self, size: tuple[int, int]) -> float:
        return horizon_y(size[0], size[1], self.fov_deg, self.camera)

    def project_yaws(self, world_yaws: Sequence[float], width: int) -> tuple[np.ndarray, np.ndarray]:
        return project_yaws(world_yaws, width, self.fov_deg, self.camera)


__all__ = [
    "BEHIND_VIEWER_DEG",
    "Orientation",
    "Projector",
    "focal_length",
    "project",
    "project_yaws",
    "horizon_y",
]

"""Target spawning, hit testing and scoring for the reflex aim mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import itertools
import logging
import random
import time
from typing import Final, Iterator, Optional

import numpy as np

from .camera import CameraView, normalize_angles


LOGGER = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of a reflex session."""

    IDLE: Final[str] = "IDLE"
    ARMED: Final[str] = "ARMED"


@dataclass(frozen=True)
class TargetConfig:
    """Tunable parameters for spawning and hit testing."""

    hit_radius: float = 4.0
    yaw_spread: float = 40.0
    pitch_spread: float = 20.0
    max_live: int = 3
    respawn_probability: float = 0.05
    lifetime: Optional[float] = None


@dataclass(frozen=True)
class Target:
    """A spherical target placed at a world angle."""

    yaw_deg: float
    pitch_deg: float
    id: int
    spawned_at_ms: float


def _now_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class TargetSession:
    """Manage live targets and the score of one play session.

    Spawns are drawn from a cone around the camera's current yaw, so every new
    target is in front of the viewer when it appears.
    """

    camera: CameraView
    config: TargetConfig = field(default_factory=TargetConfig)
    rng: random.Random = field(default_factory=random.Random)
    state: SessionState = SessionState.IDLE
    score: int = 0
    targets: list[Target] = field(default_factory=list)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    @property
    def active(self) -> bool:
        return self.state is SessionState.ARMED

    def start(self, now_ms: Optional[float] = None) -> None:
        """Begin a fresh session with a zero score and one target."""

        self.targets.clear()
        self.score = 0
        self.state = SessionState.ARMED
        self.spawn(now_ms)
        LOGGER.info("Reflex session started.")

    def end(self) -> None:
        if self.state is SessionState.IDLE:
            return
        self.state = SessionState.IDLE
        self.targets.clear()
        LOGGER.info("Reflex session ended with score %d.", self.score)

    def spawn(self, now_ms: Optional[float] = None) -> Target:
        spread_yaw = self.config.yaw_spread
        spread_pitch = self.config.pitch_spread
        target = Target(
            yaw_deg=self.camera.yaw + self.rng.uniform(-spread_yaw, spread_yaw),
            pitch_deg=self.rng.uniform(-spread_pitch, spread_pitch),
            id=next(self._ids),
            spawned_at_ms=_now_ms() if now_ms is None else float(now_ms),
        )
        self.targets.append(target)
        return target

    def angular_distances(self) -> np.ndarray:
        """Angular distance in degrees from the aim direction to each live target."""

        if not self.targets:
            return np.empty(0, dtype=np.float64)
        yaws = np.array([target.yaw_deg for target in self.targets], dtype=np.float64)
        pitches = np.array([target.pitch_deg for target in self.targets], dtype=np.float64)
        yaw_diff = normalize_angles(yaws - self.camera.yaw)
        pitch_diff = pitches - self.camera.pitch
        return np.hypot(yaw_diff, pitch_diff)

    def fire(self, now_ms: Optional[float] = None) -> Optional[Target]:
        """Resolve a confirm action. Returns the target hit, if any.

        When several targets lie within the hit radius, the oldest one wins.
        """

        if not self.active or not self.targets:
            return None

        hits = np.flatnonzero(self.angular_distances() < self.config.hit_radius)
        if hits.size == 0:
            return None

        target = self.targets.pop(int(hits[0]))
        self.score += 1
        LOGGER.debug("Hit target %d, score %d.", target.id, self.score)
        self.spawn(now_ms)
        return target

    def expire(self, now_ms: Optional[float] = None) -> list[Target]:
        """Drop targets older than the configured lifetime."""

        lifetime = self.config.lifetime
        if lifetime is None or not self.active:
            return []
        now = _now_ms() if now_ms is None else float(now_ms)
        cutoff = now - lifetime * 1000.0
        expired = [target for target in self.targets if target.spawned_at_ms < cutoff]
        if expired:
            self.targets = [target for target in self.targets if target.spawned_at_ms >= cutoff]
        return expired

    def maybe_respawn(self, now_ms: Optional[float] = None) -> Optional[Target]:
        """Per-tick chance to top up the field.

        The probability is per frame, so the effective spawn rate follows the
        display refresh rate.
        """

        if not self.active or len(self.targets) >= self.config.max_live:
            return None
        if self.rng.random() < self.config.respawn_probability:
            return self.spawn(now_ms)
        return None


__all__ = ["SessionState", "Target", "TargetConfig", "TargetSession"]

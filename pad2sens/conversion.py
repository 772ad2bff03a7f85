"""Sensitivity conversion between physical pad distance and in-game settings.

Every number here is derived from one relationship: the physical distance the
mouse travels for a full 360 degree turn (``cm/360``) is the same in every game.
A game's sensitivity is simply whatever value makes its yaw-per-count constant
produce that distance::

    sensitivity = (360 * 2.54) / (effective_dpi * cm_per_360 * yaw_per_count)

Degenerate inputs never raise. They produce ``0.0`` so the caller can show
"no sensitivity" as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Optional, Sequence

from .games import GAME_PROFILES, GameProfile

CM_PER_INCH = 2.54
FULL_TURN_DEG = 360.0
DISPLAY_DIGITS = 3


@dataclass(frozen=True)
class SensitivityInputs:
    """Everything needed to derive a sensitivity for one game."""

    dpi: float
    pad_distance_cm: float
    target_rotation_deg: float
    game: GameProfile
    os_pointer_multiplier: float = 1.0

    @property
    def effective_dpi(self) -> float:
        return effective_dpi(self.dpi, self.os_pointer_multiplier)

    @property
    def cm_per_360(self) -> float:
        return cm_per_360(self.pad_distance_cm, self.target_rotation_deg)

    def for_game(self, game: GameProfile) -> "SensitivityInputs":
        return SensitivityInputs(
            dpi=self.dpi,
            pad_distance_cm=self.pad_distance_cm,
            target_rotation_deg=self.target_rotation_deg,
            game=game,
            os_pointer_multiplier=self.os_pointer_multiplier,
        )


@dataclass(frozen=True)
class SensitivityResult:
    """A computed sensitivity along with the values it was derived from."""

    game: GameProfile
    sensitivity: float
    cm_per_360: float
    effective_dpi: float
    pointer_multiplier: float

    @property
    def display(self) -> str:
        return format_sensitivity(self.sensitivity)

    @property
    def edpi(self) -> int:
        return int(round(round(self.sensitivity, DISPLAY_DIGITS) * self.effective_dpi))

    @property
    def pointer_scaled(self) -> bool:
        return self.pointer_multiplier != 1.0

    @property
    def attribution(self) -> Optional[str]:
        """Explain a non-unit pointer multiplier, ``None`` when input is unscaled."""

        if not self.pointer_scaled:
            return None
        return (
            f"OS pointer speed scales input by x{self.pointer_multiplier:g}; "
            "effective DPI includes pointer acceleration settings."
        )


def _usable(value: float) -> bool:
    return math.isfinite(value) and value > 0


def effective_dpi(dpi: float, os_pointer_multiplier: float = 1.0) -> float:
    value = float(dpi) * float(os_pointer_multiplier)
    return value if _usable(value) else 0.0


def cm_per_360(pad_distance_cm: float, target_rotation_deg: float) -> float:
    """Return the pad distance for a full turn, ``0.0`` for degenerate input."""

    distance = float(pad_distance_cm)
    rotation = float(target_rotation_deg)
    if not (_usable(distance) and _usable(rotation)):
        return 0.0
    return distance * (FULL_TURN_DEG / rotation)


def sensitivity_for(game: GameProfile, cm_per_360_value: float, effective_dpi_value: float) -> float:
    """Full-precision sensitivity for ``game``; ``0.0`` when inputs are degenerate."""

    if not (_usable(cm_per_360_value) and _usable(effective_dpi_value)):
        return 0.0
    denominator = effective_dpi_value * cm_per_360_value * game.yaw_per_count
    result = (FULL_TURN_DEG * CM_PER_INCH) / denominator
    return result if math.isfinite(result) else 0.0


def compute_sensitivity(inputs: SensitivityInputs) -> float:
    return sensitivity_for(inputs.game, inputs.cm_per_360, inputs.effective_dpi)


def compute_result(inputs: SensitivityInputs) -> SensitivityResult:
    return SensitivityResult(
        game=inputs.game,
        sensitivity=compute_sensitivity(inputs),
        cm_per_360=inputs.cm_per_360,
        effective_dpi=inputs.effective_dpi,
        pointer_multiplier=float(inputs.os_pointer_multiplier),
    )


def convert_all(
    inputs: SensitivityInputs, catalog: Optional[Iterable[GameProfile]] = None
) -> list[SensitivityResult]:
    """Return the equivalent sensitivity for every game in ``catalog``.

    All results share the same ``cm/360`` and effective DPI; only the game's yaw
    constant differs.
    """

    games: Sequence[GameProfile] = list(catalog) if catalog is not None else GAME_PROFILES
    return [compute_result(inputs.for_game(game)) for game in games]


def cm_per_360_for(sensitivity: float, game: GameProfile, effective_dpi_value: float) -> float:
    """Inverse of :func:`sensitivity_for`: the pad distance of one full turn."""

    if not (_usable(float(sensitivity)) and _usable(float(effective_dpi_value))):
        return 0.0
    return (FULL_TURN_DEG * CM_PER_INCH) / (effective_dpi_value * sensitivity * game.yaw_per_count)


def convert_sensitivity(value: float, source: GameProfile, target: GameProfile) -> float:
    """Translate a sensitivity from ``source`` to ``target`` at equal cm/360."""

    if not _usable(float(value)):
        return 0.0
    return float(value) * source.yaw_per_count / target.yaw_per_count


def format_sensitivity(value: float) -> str:
    return f"{value:.{DISPLAY_DIGITS}f}"


def counts_to_cm(counts: float, dpi: float) -> float:
    """Convert raw counts to centimetres of pad travel."""

    if not _usable(float(dpi)):
        return 0.0
    return (abs(float(counts)) / float(dpi)) * CM_PER_INCH


def measured_dpi(counts: float, distance_cm: float) -> int:
    """Return the DPI implied by ``counts`` over a known ``distance_cm``."""

    if counts <= 0 or not _usable(float(distance_cm)):
        return 0
    return int(math.floor(counts / (distance_cm / CM_PER_INCH) + 0.5))


__all__ = [
    "CM_PER_INCH",
    "SensitivityInputs",
    "SensitivityResult",
    "effective_dpi",
    "cm_per_360",
    "sensitivity_for",
    "compute_sensitivity",
    "compute_result",
    "convert_all",
    "cm_per_360_for",
    "convert_sensitivity",
    "format_sensitivity",
    "counts_to_cm",
    "measured_dpi",
]

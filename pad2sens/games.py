"""Game profile catalog and pointer-speed constants for pad2sens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class GameProfile:
    """Represent a single game with its yaw-per-count constant."""

    id: str
    display_name: str
    yaw_per_count: float
    default_fov: float
    accent_color: tuple[int, int, int] = (200, 200, 200)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Game profile id cannot be empty.")
        if self.yaw_per_count <= 0:
            raise ValueError(f"Game '{self.id}' must have a positive yaw per count.")
        if not 0 < self.default_fov < 180:
            raise ValueError(f"Game '{self.id}' default FOV must be within (0, 180).")


# Degrees of rotation per raw count at sensitivity 1. Edit this list to add games.
GAME_PROFILES: List[GameProfile] = [
    GameProfile("valorant", "VALORANT", 0.07, 103.0, (244, 63, 94)),
    GameProfile("overwatch", "Overwatch 2", 0.0066, 103.0, (249, 115, 22)),
    # CS 90 (4:3) is roughly 106 horizontal on 16:9.
    GameProfile("cs2", "Counter-Strike 2 / Apex", 0.022, 106.0, (234, 179, 8)),
    GameProfile("rainbow6", "Rainbow Six Siege", 0.005724, 90.0, (59, 130, 246)),
    # Camera scripts vary a lot between experiences.
    GameProfile("roblox", "Roblox (Fperson)", 0.0035, 80.0, (156, 163, 175)),
    GameProfile("pubg", "PUBG", 0.007, 90.0, (217, 119, 6)),
]

DEFAULT_DPI = 800
DEFAULT_DISTANCE_CM = 35.0
DEFAULT_GAME_ID = "valorant"

# Windows pointer speed notches 1/11 .. 11/11; index 5 (6/11) is unscaled.
WINDOWS_POINTER_MULTIPLIERS: Sequence[float] = (
    0.03125,
    0.0625,
    0.25,
    0.5,
    0.75,
    1.0,
    1.5,
    2.0,
    2.5,
    3.0,
    3.5,
)
DEFAULT_POINTER_INDEX = 5

ROTATION_PRESETS: Sequence[tuple[float, str]] = (
    (360.0, "360° (full turn)"),
    (180.0, "180° (turn around)"),
    (103.0, "103° (screen width)"),
)


def pointer_multiplier(raw_input: bool, pointer_index: int = DEFAULT_POINTER_INDEX) -> float:
    """Return the OS pointer multiplier in effect.

    Raw input bypasses the OS pointer-speed curve, so the multiplier is exactly
    ``1.0`` whenever ``raw_input`` is set.
    """

    if raw_input:
        return 1.0
    if not 0 <= pointer_index < len(WINDOWS_POINTER_MULTIPLIERS):
        raise ValueError(
            f"Pointer speed index must be within 0-{len(WINDOWS_POINTER_MULTIPLIERS) - 1}."
        )
    return WINDOWS_POINTER_MULTIPLIERS[pointer_index]


def build_catalog(extra: Optional[Iterable[GameProfile]] = None) -> list[GameProfile]:
    """Return the built-in catalog followed by ``extra`` profiles."""

    catalog = list(GAME_PROFILES)
    seen = {game.id for game in catalog}
    for game in extra or ():
        if game.id in seen:
            raise ValueError(f"Duplicate game id: {game.id}")
        seen.add(game.id)
        catalog.append(game)
    return catalog


def get_game(game_id: str, catalog: Optional[Sequence[GameProfile]] = None) -> GameProfile:
    """Look up ``game_id``, falling back to the first catalog entry."""

    choices = list(catalog) if catalog is not None else GAME_PROFILES
    if not choices:
        raise ValueError("Game catalog cannot be empty.")
    for game in choices:
        if game.id == game_id:
            return game
    return choices[0]


def cycle_game(current: GameProfile, delta: int, catalog: Optional[Sequence[GameProfile]] = None) -> GameProfile:
    choices = list(catalog) if catalog is not None else GAME_PROFILES
    ids = [game.id for game in choices]
    index = ids.index(current.id) if current.id in ids else 0
    return choices[(index + delta) % len(choices)]


__all__ = [
    "GameProfile",
    "GAME_PROFILES",
    "DEFAULT_DPI",
    "DEFAULT_DISTANCE_CM",
    "DEFAULT_GAME_ID",
    "DEFAULT_POINTER_INDEX",
    "WINDOWS_POINTER_MULTIPLIERS",
    "ROTATION_PRESETS",
    "pointer_multiplier",
    "build_catalog",
    "get_game",
    "cycle_game",
]

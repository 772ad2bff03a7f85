"""Per-frame drawing of the aim simulator scene."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import pygame

from .camera import CameraView, normalize_angle
from .projection import Projector
from .targets import Target


LOGGER = logging.getLogger(__name__)

BACKGROUND = (17, 24, 39)
GRID_COLOR = (55, 65, 81)
ZERO_COLOR = (239, 68, 68)
LABEL_COLOR = (107, 114, 128)
TARGET_FILL = (6, 182, 212)
TARGET_STROKE = (255, 255, 255)
CROSSHAIR_COLOR = (0, 255, 0)
READOUT_COLOR = (16, 185, 129)
HINT_COLOR = (156, 163, 175)

GRID_STEP_DEG = 45
GRID_RANGE_DEG = 360
TARGET_RADIUS_PX = 20
CROSSHAIR_ARM_PX = 10

MODE_RULER = "ruler"
MODE_REFLEX = "reflex"


class FrameLoop:
    """A recurring per-frame task tied to the lifetime of one view.

    The host drives it by calling :meth:`tick` once per display frame. Once
    cancelled it never runs again; a configuration change builds a new loop.
    """

    def __init__(self, frame: Callable[[], None], *, name: str = "frame") -> None:
        self._frame = frame
        self.name = name
        self._active = False
        self.frames = 0

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> "FrameLoop":
        self._active = True
        LOGGER.debug("Frame loop %s started.", self.name)
        return self

    def cancel(self) -> None:
        if self._active:
            self._active = False
            LOGGER.debug("Frame loop %s cancelled after %d frames.", self.name, self.frames)

    def tick(self) -> bool:
        if not self._active:
            return False
        self._frame()
        self.frames += 1
        return True


def _near_canvas(point: tuple[float, float], size: tuple[int, int]) -> bool:
    # Points near the 90 degree cutoff project to huge coordinates.
    width, height = size
    return -width <= point[0] <= 2 * width and -height <= point[1] <= 2 * height


def ensure_surface(surface: Optional[pygame.Surface], size: tuple[int, int]) -> pygame.Surface:
    """Return ``surface`` or a replacement matching the current display ``size``."""

    if surface is None or surface.get_size() != tuple(size):
        return pygame.Surface(size)
    return surface


class CrosshairOverlay:
    """Fixed crosshair drawn at the centre of the surface."""

    def __init__(self, arm: int = CROSSHAIR_ARM_PX, stroke: int = 2) -> None:
        self.arm = arm
        self.stroke = stroke

    def draw(self, target: pygame.Surface) -> None:
        cx, cy = target.get_rect().center
        pygame.draw.line(target, CROSSHAIR_COLOR, (cx - self.arm, cy), (cx + self.arm, cy), self.stroke)
        pygame.draw.line(target, CROSSHAIR_COLOR, (cx, cy - self.arm), (cx, cy + self.arm), self.stroke)


class YawReadoutOverlay:
    """Show the accumulated yaw so a pad sweep can be checked against a target angle."""

    def __init__(self) -> None:
        self.value_font = pygame.font.Font(None, 26)
        self.hint_font = pygame.font.Font(None, 20)

    def draw(self, target: pygame.Surface, yaw: float) -> None:
        cx, cy = target.get_rect().center
        box = pygame.Surface((120, 30), pygame.SRCALPHA)
        box.fill((0, 0, 0, 128))
        target.blit(box, (cx - 60, cy + 40))

        value = self.value_font.render(f"YAW: {yaw:.1f}°", True, READOUT_COLOR)
        target.blit(value, value.get_rect(center=(cx, cy + 55)))

        hint = self.hint_font.render("Move mouse to verify rotation", True, HINT_COLOR)
        target.blit(hint, hint.get_rect(center=(cx, cy + 80)))


class ScoreOverlay:
    """Score box in the top-left corner during reflex sessions."""

    def __init__(self) -> None:
        self.label_font = pygame.font.Font(None, 20)
        self.value_font = pygame.font.Font(None, 34)

    def draw(self, target: pygame.Surface, score: int) -> None:
        label = self.label_font.render("SCORE", True, HINT_COLOR)
        value = self.value_font.render(str(score), True, (255, 255, 255))
        width = label.get_width() + value.get_width() + 40
        height = max(label.get_height(), value.get_height()) + 16
        box = pygame.Surface((width, height), pygame.SRCALPHA)
        box.fill((0, 0, 0, 128))
        pygame.draw.rect(box, (255, 255, 255, 26), box.get_rect(), width=1, border_radius=8)
        box.blit(label, label.get_rect(midleft=(14, height // 2)))
        box.blit(value, value.get_rect(midleft=(label.get_width() + 24, height // 2)))
        target.blit(box, (16, 16))


class PromptOverlay:
    """Centered call to action shown while capture is not held."""

    def __init__(self) -> None:
        self.title_font = pygame.font.Font(None, 56)
        self.body_font = pygame.font.Font(None, 26)

    def draw(self, target: pygame.Surface, message: str, subtext: Optional[str] = None) -> None:
        shade = pygame.Surface(target.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 150))
        target.blit(shade, (0, 0))

        center = target.get_rect().center
        title = self.title_font.render(message, True, (255, 255, 255))
        title_rect = title.get_rect(center=center)
        target.blit(title, title_rect)
        if subtext:
            body = self.body_font.render(subtext, True, (209, 213, 219))
            target.blit(body, body.get_rect(midtop=(center[0], title_rect.bottom + 12)))


class AimScene:
    """Draw one frame of the simulator from read-only camera and target state."""

    def __init__(self) -> None:
        self.label_font = pygame.font.Font(None, 18)
        self.crosshair = CrosshairOverlay()
        self.readout = YawReadoutOverlay()
        self.score = ScoreOverlay()
        self.prompt = PromptOverlay()

    def draw(
        self,
        target: pygame.Surface,
        projector: Projector,
        camera: CameraView,
        *,
        mode: str,
        targets: Sequence[Target] = (),
        score: int = 0,
        playing: bool = True,
        banner: Optional[str] = None,
        banner_color: tuple[int, int, int] = (255, 255, 255),
    ) -> None:
        size = target.get_size()
        width, height = size
        target.fill(BACKGROUND)

        horizon = projector.horizon(size)
        pygame.draw.line(target, GRID_COLOR, (0, horizon), (width, horizon), 1)
        self._draw_grid(target, projector)

        if mode == MODE_REFLEX:
            for entry in targets:
                point = projector.project(entry.yaw_deg, entry.pitch_deg, size)
                if point is None or not _near_canvas(point, size):
                    continue
                center = (int(round(point[0])), int(round(point[1])))
                pygame.draw.circle(target, TARGET_FILL, center, TARGET_RADIUS_PX)
                pygame.draw.circle(target, TARGET_STROKE, center, TARGET_RADIUS_PX, 2)

        if mode == MODE_RULER:
            self.readout.draw(target, camera.yaw)
        elif playing:
            self.score.draw(target, score)

        if banner:
            text = self.label_font.render(banner, True, banner_color)
            target.blit(text, text.get_rect(topright=(width - 16, 16)))

        if not playing:
            subtext = (
                "Sweep the pad and compare the yaw readout with the target angle."
                if mode == MODE_RULER
                else "Click the targets as fast as you can."
            )
            self.prompt.draw(target, "Click to start", subtext)

        self.crosshair.draw(target)

    def _draw_grid(self, target: pygame.Surface, projector: Projector) -> None:
        width, height = target.get_size()
        # -360, 0 and 360 share a column; keep the label closest to zero.
        yaws: list[int] = []
        seen: set[float] = set()
        for yaw in sorted(range(-GRID_RANGE_DEG, GRID_RANGE_DEG + 1, GRID_STEP_DEG), key=abs):
            heading = normalize_angle(yaw)
            if heading not in seen:
                seen.add(heading)
                yaws.append(yaw)
        xs, visible = projector.project_yaws(yaws, width)
        for yaw, x, shown in zip(yaws, xs, visible):
            if not shown or not _near_canvas((float(x), 0.0), (width, height)):
                continue
            column = int(round(float(x)))
            line_color = ZERO_COLOR if yaw == 0 else GRID_COLOR
            pygame.draw.line(target, line_color, (column, 0), (column, height), 1)
            label = self.label_font.render(
                f"{yaw}°", True, ZERO_COLOR if yaw == 0 else LABEL_COLOR
            )
            target.blit(label, label.get_rect(center=(column, height // 2 + 20)))


__all__ = [
    "FrameLoop",
    "AimScene",
    "CrosshairOverlay",
    "YawReadoutOverlay",
    "ScoreOverlay",
    "PromptOverlay",
    "ensure_surface",
    "MODE_RULER",
    "MODE_REFLEX",
]

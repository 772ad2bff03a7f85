from __future__ import annotations

import pygame
import pytest

from pad2sens.camera import AngularCameraSimulator
from pad2sens.projection import Projector
from pad2sens.render import (
    CROSSHAIR_COLOR,
    MODE_REFLEX,
    MODE_RULER,
    TARGET_FILL,
    ZERO_COLOR,
    AimScene,
    FrameLoop,
    ensure_surface,
)
from pad2sens.targets import Target


pytestmark = pytest.mark.usefixtures("pygame_headless")


def _rgb(surface: pygame.Surface, point: tuple[int, int]) -> tuple[int, int, int]:
    return tuple(surface.get_at(point))[:3]


def test_crosshair_is_drawn_at_centre():
    surface = pygame.Surface((800, 600))
    sim = AngularCameraSimulator()

    AimScene().draw(surface, Projector(103.0, sim.view), sim.view, mode=MODE_RULER)

    assert _rgb(surface, (400, 300)) == CROSSHAIR_COLOR


def test_zero_degree_line_is_highlighted():
    surface = pygame.Surface((800, 600))
    sim = AngularCameraSimulator()

    AimScene().draw(surface, Projector(103.0, sim.view), sim.view, mode=MODE_RULER)

    assert _rgb(surface, (400, 10)) == ZERO_COLOR


def test_reflex_targets_are_drawn_where_projected():
    surface = pygame.Surface((800, 600))
    sim = AngularCameraSimulator()
    projector = Projector(103.0, sim.view)
    target = Target(10.0, 0.0, id=1, spawned_at_ms=0.0)

    AimScene().draw(
        surface,
        projector,
        sim.view,
        mode=MODE_REFLEX,
        targets=[target, Target(180.0, 0.0, id=2, spawned_at_ms=0.0)],
        score=3,
    )

    x, y = projector.project(target.yaw_deg, target.pitch_deg, (800, 600))
    assert _rgb(surface, (int(round(x)), int(round(y)))) == TARGET_FILL


def test_targets_near_cutoff_do_not_break_drawing():
    surface = pygame.Surface((640, 480))
    sim = AngularCameraSimulator()

    AimScene().draw(
        surface,
        Projector(103.0, sim.view),
        sim.view,
        mode=MODE_REFLEX,
        targets=[Target(89.999, 0.0, id=1, spawned_at_ms=0.0)],
        playing=False,
        banner="VALORANT",
    )

    assert _rgb(surface, (320, 240)) == CROSSHAIR_COLOR


def test_ensure_surface_tracks_size():
    first = ensure_surface(None, (320, 200))
    assert ensure_surface(first, (320, 200)) is first

    resized = ensure_surface(first, (640, 400))
    assert resized.get_size() == (640, 400)


def test_frame_loop_stops_after_cancel():
    calls = []
    loop = FrameLoop(lambda: calls.append(1), name="test")

    assert not loop.tick()
    loop.start()
    assert loop.tick()
    loop.cancel()
    assert not loop.tick()

    assert calls == [1]
    assert loop.frames == 1
    assert not loop.active

from __future__ import annotations

import os
import sys
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pygame  # noqa: E402
import pytest  # noqa: E402

from pad2sens.capture import MotionCapture, MotionSample  # noqa: E402


@pytest.fixture
def pygame_headless():
    pygame.display.init()
    pygame.font.init()
    yield
    pygame.font.quit()
    pygame.display.quit()


class FakeBackend:
    """Capture backend that records grab requests without touching SDL."""

    def __init__(self, raw: bool = True, standard: bool = True) -> None:
        self.allow_raw = raw
        self.allow_standard = standard
        self.grabs: list[bool] = []
        self.ungrabs = 0

    def grab(self, raw: bool) -> bool:
        self.grabs.append(raw)
        return self.allow_raw if raw else self.allow_standard

    def ungrab(self) -> None:
        self.ungrabs += 1


class RecordingConsumer:
    def __init__(self) -> None:
        self.samples: list[MotionSample] = []
        self.lost = 0

    def on_motion(self, sample: MotionSample) -> None:
        self.samples.append(sample)

    def on_capture_lost(self) -> None:
        self.lost += 1


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def capture(backend: FakeBackend) -> MotionCapture:
    return MotionCapture(backend)


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def make_consumer():
    return RecordingConsumer

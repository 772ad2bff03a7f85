"""Exclusive relative-motion capture shared by the simulator and calibration tools."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import os
from typing import Final, Iterable, Optional, Protocol

import pygame


LOGGER = logging.getLogger(__name__)

# SDL reads this hint when the video subsystem starts; "0" keeps relative-mode
# deltas free of the OS pointer-speed curve.
RAW_MOTION_HINT: Final[str] = "SDL_MOUSE_RELATIVE_SYSTEM_SCALE"


@dataclass(frozen=True)
class MotionSample:
    """One relative-motion event in raw counts."""

    dx_counts: int
    dy_counts: int


class CaptureMode(str, Enum):
    """How the host granted capture."""

    RAW: Final[str] = "raw"
    STANDARD: Final[str] = "standard"


class MotionConsumer(Protocol):
    def on_motion(self, sample: MotionSample) -> None: ...

    def on_capture_lost(self) -> None: ...


class CaptureBackend(Protocol):
    def grab(self, raw: bool) -> bool: ...

    def ungrab(self) -> None: ...


def prefer_raw_motion() -> None:
    """Ask SDL for unscaled relative deltas. Call before ``pygame.init``."""

    os.environ.setdefault(RAW_MOTION_HINT, "0")


class PygameCaptureBackend:
    """Grab the pointer through pygame.

    Raw capture puts SDL into relative mouse mode, where the
    :data:`RAW_MOTION_HINT` applies. pygame enters that mode when input is
    grabbed with the cursor hidden; builds that expose ``set_relative_mode``
    are asked directly. Standard capture is a plain grab with the cursor
    left visible, so deltas follow the OS pointer.
    """

    def grab(self, raw: bool) -> bool:
        try:
            granted = self._enter_relative_mode() if raw else self._enter_grab()
        except pygame.error as exc:
            LOGGER.info("Pointer grab refused by host: %s", exc)
            granted = False
        if not granted:
            self.ungrab()
            return False
        pygame.mouse.get_rel()
        return True

    @staticmethod
    def _enter_relative_mode() -> bool:
        setter = getattr(pygame.mouse, "set_relative_mode", None)
        if setter is not None:
            setter(True)
            return bool(pygame.mouse.get_relative_mode())
        pygame.event.set_grab(True)
        pygame.mouse.set_visible(False)
        return bool(pygame.event.get_grab()) and not pygame.mouse.get_visible()

    @staticmethod
    def _enter_grab() -> bool:
        pygame.event.set_grab(True)
        return bool(pygame.event.get_grab())

    def ungrab(self) -> None:
        setter = getattr(pygame.mouse, "set_relative_mode", None)
        try:
            if setter is not None:
                setter(False)
            pygame.event.set_grab(False)
            pygame.mouse.set_visible(True)
        except pygame.error as exc:  # pragma: no cover - display already gone
            LOGGER.debug("Ignoring pointer release error: %s", exc)


class MotionCapture:
    """Route relative motion to exactly one consumer while capture is held.

    A new ``acquire`` from a different consumer replaces the previous one, and
    the previous consumer is told its capture was lost so it can finalize.
    Both an intentional :meth:`release` and a host-driven :meth:`lose` end in
    the same ``on_capture_lost`` callback.
    """

    def __init__(self, backend: Optional[CaptureBackend] = None) -> None:
        self._backend: CaptureBackend = backend or PygameCaptureBackend()
        self._consumer: Optional[MotionConsumer] = None
        self._mode: Optional[CaptureMode] = None

    @property
    def active(self) -> bool:
        return self._consumer is not None

    @property
    def mode(self) -> Optional[CaptureMode]:
        return self._mode

    @property
    def raw(self) -> bool:
        return self._mode is CaptureMode.RAW

    def holds(self, consumer: MotionConsumer) -> bool:
        return self._consumer is consumer

    def acquire(self, consumer: MotionConsumer) -> bool:
        """Request exclusive capture for ``consumer``. Returns ``True`` if granted."""

        if self._consumer is consumer:
            return True

        previous = self._consumer
        if previous is not None:
            self._drop(notify_backend=False)

        mode: Optional[CaptureMode] = None
        if self._backend.grab(raw=True):
            mode = CaptureMode.RAW
        elif self._backend.grab(raw=False):
            mode = CaptureMode.STANDARD
            LOGGER.info("Raw motion unavailable; using standard relative motion.")

        if mode is None:
            if previous is not None:
                self._backend.ungrab()
            LOGGER.warning("Motion capture denied by host.")
            return False

        self._consumer = consumer
        self._mode = mode
        print(f"[capture] Motion capture granted ({mode.value}).")
        return True

    def release(self) -> None:
        """Intentionally end capture; the consumer is notified synchronously."""

        if self._consumer is None:
            return
        self._drop(notify_backend=True)

    def lose(self) -> None:
        """Host-driven loss of capture (focus change, escape key)."""

        if self._consumer is None:
            return
        LOGGER.info("Motion capture lost to host.")
        self._drop(notify_backend=True)

    def _drop(self, *, notify_backend: bool) -> None:
        consumer = self._consumer
        self._consumer = None
        self._mode = None
        if notify_backend:
            self._backend.ungrab()
        if consumer is not None:
            consumer.on_capture_lost()

    def deliver(self, sample: MotionSample) -> None:
        if self._consumer is not None:
            self._consumer.on_motion(sample)

    def deliver_many(self, samples: Iterable[MotionSample]) -> None:
        """Forward coalesced samples one at a time, never as a summed delta."""

        for sample in samples:
            if self._consumer is None:
                return
            self._consumer.on_motion(sample)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Translate a pygame event. Returns ``True`` when the event was consumed."""

        if self._consumer is None:
            return False
        if event.type == pygame.MOUSEMOTION:
            dx, dy = event.rel
            self.deliver(MotionSample(int(dx), int(dy)))
            return True
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.lose()
            return True
        if event.type == pygame.WINDOWFOCUSLOST:
            self.lose()
            return True
        return False


__all__ = [
    "MotionSample",
    "MotionConsumer",
    "CaptureBackend",
    "CaptureMode",
    "MotionCapture",
    "PygameCaptureBackend",
    "prefer_raw_motion",
    "RAW_MOTION_HINT",
]

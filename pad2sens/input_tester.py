"""Mouse button and wheel tester."""

from __future__ import annotations

from collections import deque
import time
from typing import Deque, Optional

import pygame

BUTTONS: tuple[str, ...] = ("left", "right", "middle", "back", "forward")
SCROLL_DIRECTIONS: tuple[str, ...] = ("up", "down")
HISTORY_LIMIT = 8
SCROLL_FLASH_MS = 150.0

# pygame 2 numbering; 4 and 5 are legacy wheel clicks reported via MOUSEWHEEL instead.
PYGAME_BUTTONS: dict[int, str] = {1: "left", 2: "middle", 3: "right", 6: "back", 7: "forward"}

ACTION_NAMES: dict[str, str] = {
    "left": "Left Click",
    "right": "Right Click",
    "middle": "Middle Click",
    "back": "Back (Side)",
    "forward": "Forward (Side)",
    "up": "Scroll Up",
    "down": "Scroll Down",
}


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class ButtonTester:
    """Track held buttons, recent scroll flashes and a short action log."""

    def __init__(self) -> None:
        self.held: dict[str, bool] = {name: False for name in BUTTONS}
        self.history: Deque[str] = deque(maxlen=HISTORY_LIMIT)
        self._scroll_until: dict[str, float] = {name: float("-inf") for name in SCROLL_DIRECTIONS}

    def press(self, button: str) -> None:
        if button not in self.held:
            return
        self.held[button] = True
        self.history.appendleft(ACTION_NAMES[button])

    def release(self, button: str) -> None:
        if button in self.held:
            self.held[button] = False

    def scroll(self, direction: str, now_ms: Optional[float] = None) -> None:
        if direction not in self._scroll_until:
            return
        now = _now_ms() if now_ms is None else float(now_ms)
        self._scroll_until[direction] = now + SCROLL_FLASH_MS
        self.history.appendleft(ACTION_NAMES[direction])

    def scroll_active(self, direction: str, now_ms: Optional[float] = None) -> bool:
        now = _now_ms() if now_ms is None else float(now_ms)
        return now < self._scroll_until.get(direction, float("-inf"))

    def handle_event(self, event: pygame.event.Event, now_ms: Optional[float] = None) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN:
            name = PYGAME_BUTTONS.get(event.button)
            if name is not None:
                self.press(name)
                return True
        elif event.type == pygame.MOUSEBUTTONUP:
            name = PYGAME_BUTTONS.get(event.button)
            if name is not None:
                self.release(name)
                return True
        elif event.type == pygame.MOUSEWHEEL:
            if event.y == 0:
                return False
            self.scroll("up" if event.y > 0 else "down", now_ms)
            return True
        return False


__all__ = ["ButtonTester", "BUTTONS", "SCROLL_DIRECTIONS", "HISTORY_LIMIT", "ACTION_NAMES"]

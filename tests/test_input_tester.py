from __future__ import annotations

import pygame

from pad2sens.input_tester import HISTORY_LIMIT, ButtonTester


def test_press_and_release_track_held_state():
    tester = ButtonTester()
    tester.press("left")
    assert tester.held["left"]
    assert tester.history[0] == "Left Click"

    tester.release("left")
    assert not tester.held["left"]


def test_history_is_newest_first_and_bounded():
    tester = ButtonTester()
    tester.press("right")
    tester.press("middle")
    assert list(tester.history)[:2] == ["Middle Click", "Right Click"]

    for _ in range(HISTORY_LIMIT + 4):
        tester.press("back")
    assert len(tester.history) == HISTORY_LIMIT


def test_scroll_flash_expires():
    tester = ButtonTester()
    tester.scroll("up", now_ms=1000.0)

    assert tester.scroll_active("up", now_ms=1100.0)
    assert not tester.scroll_active("up", now_ms=1150.0)
    assert not tester.scroll_active("down", now_ms=1100.0)


def test_pygame_events_are_mapped():
    tester = ButtonTester()

    assert tester.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=6, pos=(0, 0)))
    assert tester.held["back"]
    assert tester.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=6, pos=(0, 0)))
    assert not tester.held["back"]

    assert tester.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=-1), now_ms=0.0)
    assert tester.history[0] == "Scroll Down"
    assert tester.scroll_active("down", now_ms=10.0)


def test_unmapped_events_are_ignored():
    tester = ButtonTester()

    assert not tester.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=4, pos=(0, 0)))
    assert not tester.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=1, y=0))
    assert not tester.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a, mod=0))
    assert len(tester.history) == 0

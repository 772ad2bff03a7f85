#!/usr/bin/env python3
"""Interactive mouse calibration tools: DPI, polling rate, pad distance and buttons."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Optional

import pygame

from pad2sens.aim_app import AppConfig, AppConfigError, load_config
from pad2sens.capture import MotionCapture, prefer_raw_motion
from pad2sens.conversion import compute_result, counts_to_cm
from pad2sens.input_tester import ACTION_NAMES, BUTTONS, SCROLL_DIRECTIONS, ButtonTester
from pad2sens.measurement import (
    DistanceMeasurement,
    DpiAnalyzer,
    MeasureStatus,
    PollingRateMeter,
    PollingRateSession,
)


TOOLS = ("dpi", "polling", "distance", "buttons")
WINDOW_SIZE = (960, 600)
ACCENT = (16, 185, 129)
MUTED = (156, 163, 175)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calibrate your mouse for pad2sens.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--tool", choices=TOOLS, default="dpi", help="Calibration tool to run.")
    parser.add_argument("--dpi", type=int, default=None, help="Stated mouse DPI (defaults to config).")
    parser.add_argument(
        "--distance",
        type=float,
        default=None,
        help="Ruler distance for the DPI test in cm (defaults to config).",
    )
    return parser.parse_args(argv)


def _draw_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    position: tuple[int, int],
    color: tuple[int, int, int] = (255, 255, 255),
) -> pygame.Rect:
    rendered = font.render(text, True, color)
    rect = rendered.get_rect()
    rect.topleft = position
    surface.blit(rendered, rect)
    return rect


def _dpi_lines(analyzer: DpiAnalyzer) -> list[tuple[str, tuple[int, int, int]]]:
    if analyzer.status is MeasureStatus.IDLE:
        return [
            ("Place the mouse at a ruler mark and press SPACE.", (255, 255, 255)),
            (f"Move exactly {analyzer.distance_cm:g} cm to the right, then click.", MUTED),
        ]
    if analyzer.status is MeasureStatus.MEASURING:
        return [
            (f"Counts: {analyzer.counts}", ACCENT),
            ("Click when you reach the mark.", MUTED),
        ]
    return [
        (f"Measured DPI: {analyzer.measured_dpi}", ACCENT),
        (f"Stated DPI: {analyzer.stated_dpi:g} ({analyzer.deviation_percent:+.1f}%)", (255, 255, 255)),
        ("Press R to measure again.", MUTED),
    ]


def _distance_lines(measure: DistanceMeasurement) -> list[tuple[str, tuple[int, int, int]]]:
    if measure.status is MeasureStatus.IDLE:
        return [
            ("Press SPACE, then sweep from one pad edge to the other.", (255, 255, 255)),
            ("Click when done.", MUTED),
        ]
    if measure.status is MeasureStatus.MEASURING:
        return [
            (f"{measure.live_cm:.1f} cm", ACCENT),
            (f"{measure.counts} counts at {measure.dpi:g} DPI", MUTED),
        ]
    return [
        (f"Pad distance: {measure.live_cm:.1f} cm", ACCENT),
        ("Press ENTER to use it, R to measure again.", MUTED),
    ]


def _polling_lines(session: PollingRateSession) -> list[tuple[str, tuple[int, int, int]]]:
    snapshot = session.meter.update()
    if session.status is MeasureStatus.IDLE:
        return [("Press SPACE, then move the mouse in fast circles.", (255, 255, 255))]
    lines = [
        (f"Current: {snapshot.current_hz} Hz", ACCENT if snapshot.moving else MUTED),
        (f"Max: {snapshot.max_hz} Hz", (255, 255, 255)),
        (f"Average: {snapshot.average_hz:.0f} Hz", (255, 255, 255)),
    ]
    if session.status is MeasureStatus.MEASURING:
        lines.append(("Click to stop, R to reset readings.", MUTED))
    else:
        lines.append(("Press SPACE to test again, R to reset readings.", MUTED))
    return lines


def _draw_buttons(screen: pygame.Surface, font: pygame.font.Font, tester: ButtonTester, y: int) -> None:
    x = 40
    for name in BUTTONS + SCROLL_DIRECTIONS:
        lit = tester.held[name] if name in tester.held else tester.scroll_active(name)
        rect = pygame.Rect(x, y, 150, 44)
        pygame.draw.rect(screen, ACCENT if lit else (55, 65, 81), rect, border_radius=8)
        label = font.render(ACTION_NAMES[name], True, (255, 255, 255))
        screen.blit(label, label.get_rect(center=rect.center))
        x += 160
        if x + 150 > screen.get_width():
            x = 40
            y += 54

    y += 80
    _draw_text(screen, font, "History:", (40, y), MUTED)
    for entry in tester.history:
        y += 26
        _draw_text(screen, font, entry, (60, y))


def _calibration_loop(config: AppConfig, tool: str, screen: pygame.Surface) -> Optional[int]:
    """Run one tool until the window is closed. Returns confirmed pad counts."""

    clock = pygame.time.Clock()
    title_font = pygame.font.Font(None, 56)
    status_font = pygame.font.Font(None, 36)
    small_font = pygame.font.Font(None, 24)

    capture = MotionCapture()
    analyzer = DpiAnalyzer(
        capture,
        stated_dpi=config.mouse.dpi,
        distance_cm=config.measurement.dpi_test_distance_cm,
    )
    distance = DistanceMeasurement(capture, dpi=config.mouse.dpi)
    polling = PollingRateSession(capture, PollingRateMeter(config.measurement))
    tester = ButtonTester()
    measurement = {"dpi": analyzer, "distance": distance, "polling": polling}.get(tool)

    confirmed: Optional[int] = None
    running = True
    while running:
        for event in pygame.event.get():
            if capture.handle_event(event):
                continue
            if event.type == pygame.QUIT:
                running = False
                continue
            if tool == "buttons":
                if tester.handle_event(event):
                    continue
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if measurement is not None and measurement.status is MeasureStatus.MEASURING:
                    measurement.stop()
                continue

            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                running = False
            elif event.key == pygame.K_SPACE and measurement is not None:
                if measurement is polling:
                    polling.start()
                elif measurement.status is MeasureStatus.IDLE:
                    measurement.start()
            elif event.key == pygame.K_r:
                if measurement is polling:
                    polling.meter.reset()
                elif measurement is not None:
                    measurement.reset()
            elif event.key == pygame.K_RETURN and tool == "distance":
                if distance.status is MeasureStatus.RESULT:
                    confirmed = distance.confirm()
                    running = False

        screen.fill((17, 24, 39))
        _draw_text(screen, title_font, f"pad2sens | {tool} test", (40, 30))
        if tool == "dpi":
            lines = _dpi_lines(analyzer)
        elif tool == "distance":
            lines = _distance_lines(distance)
        elif tool == "polling":
            lines = _polling_lines(polling)
        else:
            lines = [("Press any button or scroll the wheel.", (255, 255, 255))]

        y = 120
        for text, color in lines:
            y = _draw_text(screen, status_font, text, (40, y), color).bottom + 12
        if tool == "buttons":
            _draw_buttons(screen, small_font, tester, y + 20)

        mode = capture.mode.value if capture.mode is not None else "released"
        _draw_text(screen, small_font, f"Capture: {mode} | ESC to exit", (40, screen.get_height() - 40), MUTED)

        pygame.display.flip()
        clock.tick(240)

    if capture.active:
        capture.release()
    return confirmed


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)

    try:
        config = load_config(args.config) if args.config is not None else AppConfig()
    except AppConfigError as exc:
        raise SystemExit(str(exc)) from exc

    if args.dpi is not None:
        if args.dpi <= 0:
            raise SystemExit("--dpi must be greater than zero.")
        config = replace(config, mouse=replace(config.mouse, dpi=args.dpi))
    if args.distance is not None:
        if args.distance <= 0:
            raise SystemExit("--distance must be greater than zero.")
        config = replace(
            config,
            measurement=replace(config.measurement, dpi_test_distance_cm=args.distance),
        )

    prefer_raw_motion()
    pygame.init()
    pygame.display.set_caption("pad2sens calibration")
    screen = pygame.display.set_mode(WINDOW_SIZE)

    try:
        counts = _calibration_loop(config, args.tool, screen)
    finally:
        pygame.quit()

    if counts is None:
        return

    distance_cm = round(counts_to_cm(counts, config.mouse.dpi), 1)
    print(f"[calibrate] Pad distance: {distance_cm:.1f} cm ({counts} counts).")
    inputs = replace(config.sensitivity_inputs(), pad_distance_cm=distance_cm)
    result = compute_result(inputs)
    print(
        f"[calibrate] {result.game.display_name} sensitivity for "
        f"{inputs.target_rotation_deg:g}°: {result.display}"
    )


if __name__ == "__main__":
    main()

"""Aim simulator application for checking a converted sensitivity in practice."""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
import random
from typing import Callable, Optional, Sequence

import pygame
import yaml

from .camera import AngularCameraSimulator
from .capture import MotionCapture, MotionSample, prefer_raw_motion
from .conversion import SensitivityInputs, compute_result
from .games import (
    DEFAULT_DISTANCE_CM,
    DEFAULT_DPI,
    DEFAULT_GAME_ID,
    DEFAULT_POINTER_INDEX,
    WINDOWS_POINTER_MULTIPLIERS,
    GameProfile,
    build_catalog,
    cycle_game,
    get_game,
    pointer_multiplier,
)
from .measurement import MeasurementConfig
from .projection import Projector
from .render import MODE_REFLEX, MODE_RULER, AimScene, FrameLoop, ensure_surface
from .targets import TargetConfig, TargetSession


CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

MODES: Sequence[str] = (MODE_RULER, MODE_REFLEX)
FOV_LIMITS = (10.0, 170.0)

LOGGER = logging.getLogger(__name__)


class AppConfigError(RuntimeError):
    """Raised when the configuration file is invalid."""


@dataclass(frozen=True)
class MouseConfig:
    """Mouse hardware and OS pointer settings."""

    dpi: int = DEFAULT_DPI
    raw_input: bool = True
    pointer_speed_index: int = DEFAULT_POINTER_INDEX

    @property
    def pointer_multiplier(self) -> float:
        return pointer_multiplier(self.raw_input, self.pointer_speed_index)


@dataclass(frozen=True)
class CalculatorConfig:
    """Pad distance and rotation goal used to derive a sensitivity."""

    distance_cm: float = DEFAULT_DISTANCE_CM
    target_rotation: float = 180.0
    game_id: str = DEFAULT_GAME_ID


@dataclass(frozen=True)
class AimConfig:
    """Simulator window and control settings."""

    sensitivity: Optional[float] = None
    fov: Optional[float] = None
    invert_y: bool = False
    mode: str = MODE_RULER
    target_fps: int = 144
    monitor_index: int = 0
    windowed: bool = True
    window_size: tuple[int, int] = (1280, 720)


@dataclass(frozen=True)
class AppConfig:
    """Normalized application configuration values."""

    mouse: MouseConfig = field(default_factory=MouseConfig)
    calculator: CalculatorConfig = field(default_factory=CalculatorConfig)
    aim: AimConfig = field(default_factory=AimConfig)
    targets: TargetConfig = field(default_factory=TargetConfig)
    measurement: MeasurementConfig = field(default_factory=MeasurementConfig)
    games: tuple[GameProfile, ...] = field(default_factory=lambda: tuple(build_catalog()))

    def game(self, game_id: Optional[str] = None) -> GameProfile:
        return get_game(game_id or self.calculator.game_id, self.games)

    def sensitivity_inputs(self, game: Optional[GameProfile] = None) -> SensitivityInputs:
        return SensitivityInputs(
            dpi=self.mouse.dpi,
            pad_distance_cm=self.calculator.distance_cm,
            target_rotation_deg=self.calculator.target_rotation,
            game=game or self.game(),
            os_pointer_multiplier=self.mouse.pointer_multiplier,
        )


def _section(data: dict, name: str) -> dict:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise AppConfigError(f"{name} configuration must be a mapping.")
    return value


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load the application configuration from YAML and validate it."""

    raw_path = config_path or CONFIG_PATH
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = path.resolve()
    if not path.exists():
        raise AppConfigError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise AppConfigError("Configuration root must be a mapping.")

    games = tuple(build_catalog(_parse_custom_games(data.get("custom_games"))))
    calculator = _parse_calculator_config(_section(data, "calculator"))
    if calculator.game_id not in {game.id for game in games}:
        raise AppConfigError(f"Unknown game id: {calculator.game_id}")

    return AppConfig(
        mouse=_parse_mouse_config(_section(data, "mouse")),
        calculator=calculator,
        aim=_parse_aim_config(_section(data, "aim")),
        targets=_parse_target_config(_section(data, "targets")),
        measurement=_parse_measurement_config(_section(data, "measurement")),
        games=games,
    )


def _parse_mouse_config(data: dict) -> MouseConfig:
    try:
        dpi = int(data.get("dpi", DEFAULT_DPI))
        pointer_index = int(data.get("pointer_speed_index", DEFAULT_POINTER_INDEX))
    except (TypeError, ValueError) as exc:
        raise AppConfigError("mouse.dpi and mouse.pointer_speed_index must be integers.") from exc

    if dpi <= 0:
        raise AppConfigError("mouse.dpi must be greater than zero.")
    if not 0 <= pointer_index < len(WINDOWS_POINTER_MULTIPLIERS):
        raise AppConfigError(
            f"mouse.pointer_speed_index must be within 0-{len(WINDOWS_POINTER_MULTIPLIERS) - 1}."
        )

    return MouseConfig(
        dpi=dpi,
        raw_input=bool(data.get("raw_input", True)),
        pointer_speed_index=pointer_index,
    )


def _parse_calculator_config(data: dict) -> CalculatorConfig:
    try:
        distance_cm = float(data.get("distance_cm", DEFAULT_DISTANCE_CM))
        target_rotation = float(data.get("target_rotation", 180.0))
    except (TypeError, ValueError) as exc:
        raise AppConfigError("calculator.distance_cm and target_rotation must be numeric.") from exc

    if distance_cm <= 0:
        raise AppConfigError("calculator.distance_cm must be greater than zero.")
    if not 0 < target_rotation <= 3600:
        raise AppConfigError("calculator.target_rotation must be within (0, 3600].")

    return CalculatorConfig(
        distance_cm=distance_cm,
        target_rotation=target_rotation,
        game_id=str(data.get("game", DEFAULT_GAME_ID)),
    )


def _parse_aim_config(data: dict) -> AimConfig:
    sensitivity_raw = data.get("sensitivity")
    fov_raw = data.get("fov")
    try:
        sensitivity = None if sensitivity_raw is None else float(sensitivity_raw)
        fov = None if fov_raw is None else float(fov_raw)
        target_fps = int(data.get("target_fps", 144))
        monitor_index = int(data.get("monitor_index", 0))
    except (TypeError, ValueError) as exc:
        raise AppConfigError("aim numeric parameters must be valid numbers.") from exc

    if sensitivity is not None and sensitivity <= 0:
        raise AppConfigError("aim.sensitivity must be greater than zero.")
    if fov is not None and not FOV_LIMITS[0] <= fov <= FOV_LIMITS[1]:
        raise AppConfigError(f"aim.fov must be within [{FOV_LIMITS[0]:g}, {FOV_LIMITS[1]:g}].")

    mode = str(data.get("mode", MODE_RULER)).lower()
    if mode not in MODES:
        raise AppConfigError(f"aim.mode must be one of {', '.join(MODES)}.")

    size_raw = data.get("window_size", [1280, 720])
    if not isinstance(size_raw, (list, tuple)) or len(size_raw) != 2:
        raise AppConfigError("aim.window_size must be a sequence of two integers.")
    try:
        window_size = (int(size_raw[0]), int(size_raw[1]))
    except (TypeError, ValueError) as exc:
        raise AppConfigError("aim.window_size must be numeric.") from exc
    if min(window_size) <= 0:
        raise AppConfigError("aim.window_size values must be positive.")

    return AimConfig(
        sensitivity=sensitivity,
        fov=fov,
        invert_y=bool(data.get("invert_y", False)),
        mode=mode,
        target_fps=max(1, target_fps),
        monitor_index=monitor_index,
        windowed=bool(data.get("windowed", True)),
        window_size=window_size,
    )


def _parse_target_config(data: dict) -> TargetConfig:
    lifetime_raw = data.get("lifetime")
    try:
        hit_radius = float(data.get("hit_radius", 4.0))
        yaw_spread = float(data.get("yaw_spread", 40.0))
        pitch_spread = float(data.get("pitch_spread", 20.0))
        max_live = int(data.get("max_live", 3))
        respawn_probability = float(data.get("respawn_probability", 0.05))
        lifetime = None if lifetime_raw is None else float(lifetime_raw)
    except (TypeError, ValueError) as exc:
        raise AppConfigError("targets numeric parameters must be valid numbers.") from exc

    if hit_radius <= 0:
        raise AppConfigError("targets.hit_radius must be positive.")
    # Spawns outside +/-90 degrees would start behind the viewer.
    if not 0 <= yaw_spread < 90:
        raise AppConfigError("targets.yaw_spread must be within [0, 90).")
    if not 0 <= pitch_spread < 89:
        raise AppConfigError("targets.pitch_spread must be within [0, 89).")
    if max_live < 1:
        raise AppConfigError("targets.max_live must be at least 1.")
    if not 0.0 <= respawn_probability <= 1.0:
        raise AppConfigError("targets.respawn_probability must be within [0, 1].")
    if lifetime is not None and lifetime <= 0:
        raise AppConfigError("targets.lifetime must be positive or null.")

    return TargetConfig(
        hit_radius=hit_radius,
        yaw_spread=yaw_spread,
        pitch_spread=pitch_spread,
        max_live=max_live,
        respawn_probability=respawn_probability,
        lifetime=lifetime,
    )


def _parse_measurement_config(data: dict) -> MeasurementConfig:
    try:
        config = MeasurementConfig(
            dpi_test_distance_cm=float(data.get("dpi_test_distance_cm", 5.0)),
            polling_window_ms=float(data.get("polling_window_ms", 1000.0)),
            polling_idle_reset_ms=float(data.get("polling_idle_reset_ms", 200.0)),
            polling_refresh_ms=float(data.get("polling_refresh_ms", 100.0)),
        )
    except (TypeError, ValueError) as exc:
        raise AppConfigError("measurement parameters must be numeric.") from exc

    for name in ("dpi_test_distance_cm", "polling_window_ms", "polling_idle_reset_ms", "polling_refresh_ms"):
        if getattr(config, name) <= 0:
            raise AppConfigError(f"measurement.{name} must be greater than zero.")
    return config


def _parse_custom_games(data) -> list[GameProfile]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise AppConfigError("custom_games must be a list of game entries.")

    games: list[GameProfile] = []
    seen: set[str] = set()
    for entry in data:
        if not isinstance(entry, dict):
            raise AppConfigError("Each custom_games entry must be a mapping.")
        try:
            game = GameProfile(
                id=str(entry["id"]),
                display_name=str(entry.get("name", entry["id"])),
                yaw_per_count=float(entry["yaw"]),
                default_fov=float(entry.get("fov", 90.0)),
            )
        except KeyError as exc:
            raise AppConfigError(f"custom_games entry is missing {exc.args[0]!r}.") from exc
        except (TypeError, ValueError) as exc:
            raise AppConfigError(f"Invalid custom_games entry: {exc}") from exc
        if game.id in seen:
            raise AppConfigError(f"Duplicate game id: {game.id}")
        seen.add(game.id)
        games.append(game)

    try:
        build_catalog(games)
    except ValueError as exc:
        raise AppConfigError(str(exc)) from exc
    return games


def fullscreen_size(monitor_index: int) -> tuple[int, int]:
    """Desktop resolution of ``monitor_index``, used for fullscreen sessions."""

    pygame.display.init()
    sizes = pygame.display.get_desktop_sizes()
    if not sizes:
        raise AppConfigError("No video displays detected for fullscreen output.")
    if not 0 <= monitor_index < len(sizes):
        raise AppConfigError(f"Monitor index {monitor_index} is out of range (0-{len(sizes) - 1}).")
    width, height = sizes[monitor_index]
    return int(width), int(height)


@dataclass
class RuntimeSettings:
    """Mutable simulator settings adjusted from the settings panel."""

    game: GameProfile
    sensitivity: float
    fov: float
    invert_y: bool
    mode: str
    target_fps: int

    @classmethod
    def from_config(cls, config: AppConfig) -> "RuntimeSettings":
        game = config.game()
        sensitivity = config.aim.sensitivity
        if sensitivity is None:
            derived = compute_result(config.sensitivity_inputs(game))
            sensitivity = round(derived.sensitivity, 3)
            print(f"[aim] Using calculated sensitivity {derived.display} for {game.display_name}.")
            if derived.attribution:
                print(f"[aim] {derived.attribution}")
        return cls(
            game=game,
            sensitivity=sensitivity,
            fov=config.aim.fov if config.aim.fov is not None else game.default_fov,
            invert_y=config.aim.invert_y,
            mode=config.aim.mode,
            target_fps=config.aim.target_fps,
        )


class AimSimulator:
    """Aim simulator view: consumes captured motion and renders the scene."""

    def __init__(
        self,
        config: AppConfig,
        capture: MotionCapture,
        settings: Optional[RuntimeSettings] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.capture = capture
        self.settings = settings or RuntimeSettings.from_config(config)
        self.simulator = AngularCameraSimulator()
        self.session = TargetSession(
            self.simulator.view, config.targets, rng or random.Random()
        )
        self.playing = False
        self.loop: Optional[FrameLoop] = None
        self._scene: Optional[AimScene] = None
        self._projector = Projector(self.settings.fov, self.simulator.view)
        self._surface: Optional[pygame.Surface] = None
        self._display: Optional[pygame.Surface] = None

    # ------------------------------------------------------------------
    # Capture consumer
    # ------------------------------------------------------------------
    def on_motion(self, sample: MotionSample) -> None:
        if not self.playing:
            return
        self.simulator.apply_motion(
            sample, self.settings.sensitivity, self.settings.game, self.settings.invert_y
        )

    def on_capture_lost(self) -> None:
        if not self.playing:
            return
        self.playing = False
        if self.settings.mode == MODE_REFLEX:
            print(f"[aim] Session ended. Score: {self.session.score}")
        self.session.end()

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------
    def start_session(self) -> bool:
        if self.playing:
            return True
        if not self.capture.acquire(self):
            print("[aim] Pointer capture unavailable; session not started.")
            return False
        self.playing = True
        self.simulator.reset_view()
        if self.settings.mode == MODE_REFLEX:
            self.session.start()
        return True

    def stop_session(self) -> None:
        if self.capture.holds(self):
            self.capture.release()

    def confirm(self) -> None:
        """Primary click: start a session, or shoot while one is running."""

        if not self.playing:
            self.start_session()
        elif self.settings.mode == MODE_REFLEX:
            self.session.fire()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def set_mode(self, mode: str) -> None:
        if mode not in MODES or mode == self.settings.mode:
            return
        self.stop_session()
        self.settings.mode = mode
        self.restart_loop()

    def set_fov(self, fov: float) -> None:
        fov = max(FOV_LIMITS[0], min(FOV_LIMITS[1], float(fov)))
        if math.isclose(fov, self.settings.fov):
            return
        self.settings.fov = fov
        self.restart_loop()

    def set_game(self, game: GameProfile) -> None:
        self.settings.game = game
        self.set_fov(game.default_fov)

    def set_sensitivity(self, value: float) -> None:
        self.settings.sensitivity = max(0.001, round(float(value), 3))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def restart_loop(self) -> FrameLoop:
        if self.loop is not None:
            self.loop.cancel()
        self._projector = Projector(self.settings.fov, self.simulator.view)
        self.loop = FrameLoop(
            self._draw_frame, name=f"{self.settings.mode}@{self.settings.fov:g}"
        ).start()
        return self.loop

    def close(self) -> None:
        if self.loop is not None:
            self.loop.cancel()
        self.stop_session()

    def render(self, display: pygame.Surface) -> bool:
        if self.loop is None:
            return False
        self._display = display
        return self.loop.tick()

    def _draw_frame(self) -> None:
        display = self._display
        if display is None:
            return
        if self._scene is None:
            self._scene = AimScene()
        self._surface = ensure_surface(self._surface, display.get_size())

        self.session.expire()
        settings = self.settings
        banner = (
            f"{settings.game.display_name} | sens {settings.sensitivity:.3f} | "
            f"FOV {settings.fov:g}{' | invert Y' if settings.invert_y else ''}"
        )
        self._scene.draw(
            self._surface,
            self._projector,
            self.simulator.view,
            mode=settings.mode,
            targets=self.session.targets,
            score=self.session.score,
            playing=self.playing,
            banner=banner,
            banner_color=settings.game.accent_color,
        )
        if settings.mode == MODE_REFLEX:
            self.session.maybe_respawn()
        display.blit(self._surface, (0, 0))


@dataclass
class NumericSetting:
    """A simulator number nudged by ``step`` and kept inside ``bounds``."""

    label: str
    read: Callable[[], float]
    write: Callable[[float], None]
    step: float
    fmt: str = "{:.2f}"
    bounds: tuple[Optional[float], Optional[float]] = (None, None)

    def formatted(self) -> str:
        return self.fmt.format(self.read())

    def adjust(self, delta: int, multiplier: int = 1) -> None:
        if delta == 0:
            return
        low, high = self.bounds
        value = self.read() + delta * self.step * multiplier
        if low is not None and value < low:
            value = low
        if high is not None and value > high:
            value = high
        self.write(value)


@dataclass
class ToggleSetting:
    """An on/off flag; any left/right press flips it."""

    label: str
    read: Callable[[], bool]
    write: Callable[[bool], None]

    def formatted(self) -> str:
        return "On" if self.read() else "Off"

    def adjust(self, delta: int, multiplier: int = 1) -> None:
        if delta:
            self.write(not self.read())


@dataclass
class ChoiceSetting:
    """Step through a fixed list of options such as games or modes."""

    label: str
    describe: Callable[[], str]
    step_to: Callable[[int], None]

    def formatted(self) -> str:
        return self.describe()

    def adjust(self, delta: int, multiplier: int = 1) -> None:
        if delta:
            self.step_to(1 if delta > 0 else -1)


class SettingsPanel:
    """Keyboard-driven panel for live simulator tweaks."""

    def __init__(self, app: AimSimulator) -> None:
        self.app = app
        self.font = pygame.font.Font(None, 22)
        self.header_font = pygame.font.Font(None, 28)
        self.selected_index = 0
        self.items: list[NumericSetting | ToggleSetting | ChoiceSetting] = []
        self._build_items()

    def _build_items(self) -> None:
        app = self.app
        settings = app.settings
        self.items = [
            ChoiceSetting(
                "Game",
                describe=lambda: settings.game.display_name,
                step_to=lambda delta: app.set_game(cycle_game(settings.game, delta, app.config.games)),
            ),
            NumericSetting(
                "Sensitivity",
                read=lambda: settings.sensitivity,
                write=app.set_sensitivity,
                step=0.01,
                fmt="{:.3f}",
                bounds=(0.001, None),
            ),
            NumericSetting(
                "FOV",
                read=lambda: settings.fov,
                write=app.set_fov,
                step=1.0,
                fmt="{:g}°",
                bounds=FOV_LIMITS,
            ),
            ToggleSetting(
                "Invert Y",
                read=lambda: settings.invert_y,
                write=lambda value: setattr(settings, "invert_y", value),
            ),
            ChoiceSetting(
                "Mode",
                describe=lambda: settings.mode,
                step_to=lambda delta: app.set_mode(
                    MODES[(MODES.index(settings.mode) + delta) % len(MODES)]
                ),
            ),
        ]

    def move_selection(self, delta: int) -> None:
        if not self.items:
            return
        self.selected_index = (self.selected_index + delta) % len(self.items)

    def adjust_selection(self, delta: int, multiplier: int = 1) -> None:
        if not self.items or delta == 0:
            return
        self.items[self.selected_index].adjust(delta, multiplier)

    def draw(self, target: pygame.Surface) -> None:
        width = 300
        height = 64 + len(self.items) * 24
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        pygame.draw.rect(overlay, (55, 65, 81, 220), overlay.get_rect(), width=1, border_radius=12)

        y = 12
        header = self.header_font.render("Settings", True, (255, 255, 255))
        overlay.blit(header, (16, y))
        y += header.get_height() + 4
        instruction = self.font.render("Up/Down select | Left/Right adjust", True, (200, 200, 200))
        overlay.blit(instruction, (16, y))
        y += instruction.get_height() + 8

        for idx, item in enumerate(self.items):
            text = f"{item.label}: {item.formatted()}"
            color = (255, 230, 180) if idx == self.selected_index else (255, 255, 255)
            surface = self.font.render(text, True, color)
            overlay.blit(surface, (20, y))
            y += surface.get_height() + 4

        target.blit(overlay, (16, target.get_height() - height - 16))


@dataclass
class RuntimeToggles:
    """Flags mutated in response to hotkeys."""

    panel_visible: bool = True


def _update_phase(
    events: list[pygame.event.Event],
    app: AimSimulator,
    panel: SettingsPanel,
    toggles: RuntimeToggles,
) -> bool:
    running = True

    for event in events:
        if app.capture.handle_event(event):
            continue

        if event.type == pygame.QUIT:
            running = False
            continue

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            app.confirm()
            continue

        if event.type != pygame.KEYDOWN:
            continue

        if event.key in (pygame.K_ESCAPE, pygame.K_q):
            running = False
        elif event.key == pygame.K_TAB:
            toggles.panel_visible = not toggles.panel_visible
        elif event.key == pygame.K_m:
            app.set_mode(MODES[(MODES.index(app.settings.mode) + 1) % len(MODES)])
        elif event.key == pygame.K_i:
            app.settings.invert_y = not app.settings.invert_y
        elif event.key == pygame.K_UP:
            panel.move_selection(-1)
        elif event.key == pygame.K_DOWN:
            panel.move_selection(1)
        elif event.key == pygame.K_LEFT:
            multiplier = 5 if event.mod & pygame.KMOD_SHIFT else 1
            panel.adjust_selection(-1, multiplier)
        elif event.key == pygame.K_RIGHT:
            multiplier = 5 if event.mod & pygame.KMOD_SHIFT else 1
            panel.adjust_selection(1, multiplier)

    return running


def run_simulator(config: AppConfig, monitor_override: Optional[int] = None) -> None:
    """Run the simulator loop using the supplied configuration."""

    prefer_raw_motion()
    pygame.init()
    pygame.display.set_caption("pad2sens aim simulator")

    if config.aim.windowed:
        screen = pygame.display.set_mode(config.aim.window_size, pygame.RESIZABLE)
    else:
        monitor_index = monitor_override if monitor_override is not None else config.aim.monitor_index
        screen_size = fullscreen_size(monitor_index)
        screen = pygame.display.set_mode(screen_size, pygame.FULLSCREEN, display=monitor_index)
    clock = pygame.time.Clock()

    capture = MotionCapture()
    app = AimSimulator(config, capture)
    panel = SettingsPanel(app)
    toggles = RuntimeToggles()
    app.restart_loop()

    try:
        running = True
        while running:
            running = _update_phase(pygame.event.get(), app, panel, toggles)
            screen = pygame.display.get_surface()
            app.render(screen)
            if toggles.panel_visible and not app.playing:
                panel.draw(screen)
            pygame.display.flip()
            clock.tick(app.settings.target_fps)
    finally:
        app.close()
        pygame.quit()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the pad2sens aim simulator.")
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help=f"Path to configuration file (default: {CONFIG_PATH}).",
    )
    parser.add_argument("--monitor", type=int, help="Monitor index for fullscreen mode.")
    parser.add_argument("--game", help="Game id to simulate.")
    parser.add_argument("--sensitivity", type=float, help="In-game sensitivity to test.")
    parser.add_argument("--fov", type=float, help="Horizontal field of view in degrees.")
    parser.add_argument("--mode", choices=MODES, help="Start in ruler or reflex mode.")
    parser.add_argument("--fullscreen", action="store_true", help="Run fullscreen.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except AppConfigError as exc:
        raise SystemExit(str(exc)) from exc

    aim = config.aim
    if args.sensitivity is not None:
        aim = replace(aim, sensitivity=args.sensitivity)
    if args.fov is not None:
        aim = replace(aim, fov=args.fov)
    if args.mode is not None:
        aim = replace(aim, mode=args.mode)
    if args.fullscreen:
        aim = replace(aim, windowed=False)
    config = replace(config, aim=aim)
    if args.game is not None:
        if args.game not in {game.id for game in config.games}:
            raise SystemExit(f"Unknown game id: {args.game}")
        config = replace(config, calculator=replace(config.calculator, game_id=args.game))

    run_simulator(config, monitor_override=args.monitor)


if __name__ == "__main__":
    main()

"""Print the equivalent sensitivity for every game at a given pad distance."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from pad2sens.aim_app import AppConfig, AppConfigError, load_config
from pad2sens.conversion import SensitivityInputs, SensitivityResult, compute_result, convert_all
from pad2sens.games import ROTATION_PRESETS, WINDOWS_POINTER_MULTIPLIERS, pointer_multiplier


def print_table(
    inputs: SensitivityInputs,
    selected: SensitivityResult,
    others: Sequence[SensitivityResult],
) -> None:
    rotation = inputs.target_rotation_deg
    preset = next((label for degrees, label in ROTATION_PRESETS if degrees == rotation), f"{rotation:g}°")
    print(
        f"{inputs.dpi:g} DPI, {inputs.pad_distance_cm:g} cm for {preset} "
        f"-> {inputs.cm_per_360:.2f} cm/360"
    )
    if selected.sensitivity == 0.0:
        print("Inputs are degenerate; no sensitivity can be derived.")
        return

    print(f"{selected.game.display_name}: {selected.display} (eDPI {selected.edpi})")
    if selected.attribution:
        print(selected.attribution)
    if not others:
        return

    print()
    header = f"{'Game':<28} {'Sensitivity':>12} {'eDPI':>8} {'FOV':>6}"
    print(header)
    print("-" * len(header))
    for result in others:
        print(
            f"{result.game.display_name:<28} {result.display:>12} {result.edpi:>8} "
            f"{result.game.default_fov:>6g}"
        )


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--dpi", type=float, default=None, help="Mouse DPI.")
    parser.add_argument("--distance", type=float, default=None, help="Pad distance in cm.")
    parser.add_argument(
        "--rotation",
        type=float,
        default=None,
        help="Degrees turned over the pad distance (360, 180 or 103 are common).",
    )
    parser.add_argument("--game", default=None, help="Game id to convert for (defaults to config).")
    parser.add_argument("--only", action="store_true", help="Skip the table of other games.")
    parser.add_argument(
        "--pointer-index",
        type=int,
        default=None,
        choices=range(len(WINDOWS_POINTER_MULTIPLIERS)),
        help="Windows pointer speed notch, used with --no-raw.",
    )
    parser.add_argument(
        "--no-raw",
        action="store_true",
        help="Apply the OS pointer multiplier (raw input disabled in game).",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config is not None else AppConfig()
    except AppConfigError as exc:
        raise SystemExit(str(exc)) from exc

    if args.game is not None and args.game not in {game.id for game in config.games}:
        raise SystemExit(f"Unknown game id: {args.game}")

    raw_input = config.mouse.raw_input and not args.no_raw
    pointer_index = args.pointer_index if args.pointer_index is not None else config.mouse.pointer_speed_index
    inputs = SensitivityInputs(
        dpi=args.dpi if args.dpi is not None else config.mouse.dpi,
        pad_distance_cm=args.distance if args.distance is not None else config.calculator.distance_cm,
        target_rotation_deg=args.rotation if args.rotation is not None else config.calculator.target_rotation,
        game=config.game(args.game),
        os_pointer_multiplier=pointer_multiplier(raw_input, pointer_index),
    )

    others = [] if args.only else [game for game in config.games if game.id != inputs.game.id]
    print_table(inputs, compute_result(inputs), convert_all(inputs, others))


if __name__ == "__main__":
    main()

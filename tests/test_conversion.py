from __future__ import annotations

import math

import pytest

from pad2sens.conversion import (
    SensitivityInputs,
    cm_per_360,
    cm_per_360_for,
    compute_result,
    compute_sensitivity,
    convert_all,
    convert_sensitivity,
    counts_to_cm,
    format_sensitivity,
    measured_dpi,
)
from pad2sens.games import GAME_PROFILES, get_game, pointer_multiplier


def _inputs(**overrides) -> SensitivityInputs:
    values = dict(
        dpi=800,
        pad_distance_cm=35.0,
        target_rotation_deg=180.0,
        game=get_game("valorant"),
        os_pointer_multiplier=1.0,
    )
    values.update(overrides)
    return SensitivityInputs(**values)


def test_half_turn_on_35cm_gives_valorant_sensitivity():
    inputs = _inputs()

    assert inputs.cm_per_360 == pytest.approx(70.0)
    assert compute_sensitivity(inputs) == pytest.approx(914.4 / 3920.0)
    assert compute_result(inputs).display == "0.233"


def test_every_game_shares_the_same_cm_per_360():
    inputs = _inputs()
    results = convert_all(inputs)

    assert [result.game.id for result in results] == [game.id for game in GAME_PROFILES]
    for result in results:
        assert result.cm_per_360 == pytest.approx(70.0)
        assert cm_per_360_for(result.sensitivity, result.game, result.effective_dpi) == pytest.approx(70.0)


def test_convert_sensitivity_matches_table():
    valorant = get_game("valorant")
    cs2 = get_game("cs2")
    source = compute_sensitivity(_inputs())

    converted = convert_sensitivity(source, valorant, cs2)

    assert converted == pytest.approx(compute_sensitivity(_inputs(game=cs2)))
    assert format_sensitivity(converted) == "0.742"


@pytest.mark.parametrize(
    "overrides",
    [
        {"dpi": 0},
        {"pad_distance_cm": 0.0},
        {"target_rotation_deg": 0.0},
        {"pad_distance_cm": -5.0},
        {"dpi": float("nan")},
        {"os_pointer_multiplier": 0.0},
    ],
)
def test_degenerate_inputs_yield_zero(overrides):
    result = compute_result(_inputs(**overrides))

    assert result.sensitivity == 0.0
    assert result.display == "0.000"
    assert math.isfinite(result.sensitivity)


def test_cm_per_360_scales_with_rotation():
    assert cm_per_360(35.0, 360.0) == pytest.approx(35.0)
    assert cm_per_360(35.0, 103.0) == pytest.approx(35.0 * 360.0 / 103.0)


def test_edpi_uses_displayed_sensitivity():
    assert compute_result(_inputs()).edpi == 186


def test_pointer_multiplier_adds_attribution():
    unscaled = compute_result(_inputs())
    scaled = compute_result(_inputs(os_pointer_multiplier=pointer_multiplier(False, 7)))

    assert unscaled.attribution is None
    assert scaled.effective_dpi == pytest.approx(1600.0)
    assert scaled.sensitivity == pytest.approx(unscaled.sensitivity / 2)
    assert "x2" in scaled.attribution


def test_measured_dpi_rounds_to_nearest_count():
    assert measured_dpi(6300, 20.0) == 800
    assert measured_dpi(0, 20.0) == 0
    assert measured_dpi(100, 0.0) == 0


def test_counts_to_cm():
    assert counts_to_cm(800, 800) == pytest.approx(2.54)
    assert counts_to_cm(-800, 800) == pytest.approx(2.54)
    assert counts_to_cm(800, 0) == 0.0


@pytest.mark.parametrize("game", GAME_PROFILES, ids=lambda game: game.id)
@pytest.mark.parametrize("dpi, distance, rotation", [(400, 20.0, 360.0), (800, 35.0, 180.0), (3200, 5.5, 103.0)])
def test_sensitivity_is_positive_and_finite(game, dpi, distance, rotation):
    value = compute_sensitivity(
        _inputs(dpi=dpi, pad_distance_cm=distance, target_rotation_deg=rotation, game=game)
    )

    assert 0.0 < value < math.inf


@pytest.mark.parametrize("first", GAME_PROFILES, ids=lambda game: game.id)
@pytest.mark.parametrize("second", GAME_PROFILES, ids=lambda game: game.id)
def test_sensitivity_times_yaw_is_game_independent(first, second):
    s1 = compute_sensitivity(_inputs(game=first))
    s2 = compute_sensitivity(_inputs(game=second))

    assert s1 * first.yaw_per_count == pytest.approx(s2 * second.yaw_per_count)
    assert s1 * first.yaw_per_count == pytest.approx(360 * 2.54 / (800 * 70.0))

from __future__ import annotations

import random

import pytest

from pad2sens.camera import AngularCameraSimulator, normalize_angle
from pad2sens.capture import MotionSample
from pad2sens.games import get_game
from pad2sens.projection import Projector
from pad2sens.targets import SessionState, Target, TargetConfig, TargetSession


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _armed_session(targets, config=None) -> TargetSession:
    sim = AngularCameraSimulator()
    session = TargetSession(sim.view, config or TargetConfig(), random.Random(7))
    session.start(now_ms=0.0)
    session.targets[:] = targets
    return session


def test_target_within_radius_is_hit():
    session = _armed_session([Target(2.0, 1.0, id=100, spawned_at_ms=0.0)])

    hit = session.fire(now_ms=10.0)

    assert hit is not None and hit.id == 100
    assert session.score == 1
    assert len(session.targets) == 1
    assert session.targets[0].id != 100


def test_target_outside_radius_is_missed():
    far = Target(10.0, 0.0, id=100, spawned_at_ms=0.0)
    session = _armed_session([far])

    assert session.fire() is None
    assert session.score == 0
    assert session.targets == [far]


def test_oldest_target_wins_when_several_are_hit():
    older = Target(3.0, 0.0, id=1, spawned_at_ms=0.0)
    closer = Target(1.0, 0.0, id=2, spawned_at_ms=5.0)
    session = _armed_session([older, closer])

    assert session.fire() is older
    assert closer in session.targets


def test_hit_distance_wraps_across_180():
    sim = AngularCameraSimulator()
    sim.apply_motion(MotionSample(2570, 0), 1.0, get_game("valorant"))
    session = TargetSession(sim.view, TargetConfig(), random.Random(1))
    session.start(now_ms=0.0)
    session.targets[:] = [Target(sim.view.yaw - 360.0 + 1.0, 0.0, id=50, spawned_at_ms=0.0)]

    assert session.angular_distances()[0] == pytest.approx(1.0)
    assert session.fire() is not None


def test_fire_while_idle_does_nothing():
    sim = AngularCameraSimulator()
    session = TargetSession(sim.view)

    assert session.fire() is None
    assert session.state is SessionState.IDLE


def test_start_resets_score_and_spawns_one_target():
    session = _armed_session([Target(0.0, 0.0, id=1, spawned_at_ms=0.0)])
    session.fire()
    assert session.score == 1

    session.start(now_ms=100.0)

    assert session.score == 0
    assert len(session.targets) == 1
    assert session.active


def test_end_clears_targets():
    session = _armed_session([Target(0.0, 0.0, id=1, spawned_at_ms=0.0)])
    session.end()

    assert session.state is SessionState.IDLE
    assert session.targets == []


def test_spawns_stay_in_front_of_camera():
    sim = AngularCameraSimulator()
    sim.apply_motion(MotionSample(2000, 300), 1.0, get_game("valorant"))
    config = TargetConfig()
    session = TargetSession(sim.view, config, random.Random(1234))
    session.start(now_ms=0.0)
    projector = Projector(103.0, sim.view)

    for _ in range(200):
        target = session.spawn(now_ms=0.0)
        assert abs(normalize_angle(target.yaw_deg - sim.view.yaw)) <= config.yaw_spread
        assert abs(target.pitch_deg) <= config.pitch_spread
        assert projector.project(target.yaw_deg, target.pitch_deg, (1920, 1080)) is not None


def test_respawn_tops_up_to_max_live():
    sim = AngularCameraSimulator()
    session = TargetSession(sim.view, TargetConfig(max_live=3), FixedRandom(0.0))
    session.start(now_ms=0.0)

    for _ in range(10):
        session.maybe_respawn(now_ms=0.0)

    assert len(session.targets) == 3


def test_respawn_respects_probability():
    sim = AngularCameraSimulator()
    session = TargetSession(sim.view, TargetConfig(respawn_probability=0.05), FixedRandom(0.5))
    session.start(now_ms=0.0)

    assert session.maybe_respawn(now_ms=0.0) is None
    assert len(session.targets) == 1


def test_respawn_is_inactive_while_idle():
    sim = AngularCameraSimulator()
    session = TargetSession(sim.view, TargetConfig(), FixedRandom(0.0))

    assert session.maybe_respawn() is None
    assert session.targets == []


def test_targets_expire_after_lifetime():
    sim = AngularCameraSimulator()
    session = TargetSession(sim.view, TargetConfig(lifetime=1.0), random.Random(3))
    session.start(now_ms=0.0)

    assert session.expire(now_ms=500.0) == []
    expired = session.expire(now_ms=1500.0)

    assert len(expired) == 1
    assert session.targets == []


def test_no_lifetime_means_targets_persist():
    session = _armed_session([Target(0.0, 0.0, id=1, spawned_at_ms=0.0)])
    assert session.expire(now_ms=1e9) == []
    assert len(session.targets) == 1

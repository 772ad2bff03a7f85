from __future__ import annotations

import logging

import pytest

from pad2sens.capture import MotionCapture, MotionSample
from pad2sens.measurement import (
    DistanceMeasurement,
    DpiAnalyzer,
    MeasureStatus,
    MeasurementConfig,
    MeasurementWindow,
    PollingRateMeter,
    PollingRateSession,
)


def test_window_prunes_old_stamps_on_insert():
    window = MeasurementWindow(1000.0)
    for stamp in (0.0, 500.0, 1001.0):
        window.add(stamp)

    assert len(window) == 2
    assert window.latest == 1001.0


def test_polling_rate_reports_samples_in_window():
    meter = PollingRateMeter()
    for i in range(1000):
        meter.record(float(i))

    snapshot = meter.update(999.5)

    assert snapshot.current_hz == 1000
    assert snapshot.max_hz == 1000
    assert snapshot.moving


def test_polling_rate_resets_when_idle():
    meter = PollingRateMeter()
    for i in range(1000):
        meter.record(float(i))
    meter.update(999.5)

    snapshot = meter.update(1199.0)

    assert snapshot.current_hz == 0
    assert not snapshot.moving
    assert snapshot.max_hz == 1000
    assert snapshot.average_hz == pytest.approx(1000.0)


def test_polling_readings_refresh_on_interval():
    meter = PollingRateMeter(MeasurementConfig(polling_refresh_ms=100.0))
    for i in range(0, 500, 2):
        meter.record(float(i))
    assert meter.update(500.0).current_hz == 250

    for i in range(500, 550):
        meter.record(float(i))
    assert meter.update(550.0).current_hz == 250
    assert meter.update(600.0).current_hz == 300


def test_polling_reset_clears_history():
    meter = PollingRateMeter()
    meter.record(0.0, count=8)
    meter.update(1.0)
    meter.reset()

    assert meter.snapshot().max_hz == 0
    assert meter.average_hz == 0.0
    assert len(meter.window) == 0


def test_dpi_analyzer_measures_against_ruler(capture, caplog):
    analyzer = DpiAnalyzer(capture, stated_dpi=800, distance_cm=20.0)
    assert analyzer.start()

    capture.deliver(MotionSample(-3000, 4))
    capture.deliver(MotionSample(3300, -2))
    with caplog.at_level(logging.INFO, logger="pad2sens.measurement"):
        analyzer.stop()

    assert analyzer.status is MeasureStatus.RESULT
    assert analyzer.counts == 6300
    assert analyzer.measured_dpi == 800
    assert analyzer.deviation_percent == pytest.approx(0.0)
    assert "800 DPI" in caplog.text


def test_dpi_deviation_sign():
    analyzer = DpiAnalyzer(MotionCapture(_Unused()), stated_dpi=1000, distance_cm=2.54)
    analyzer.counts = 900

    assert analyzer.measured_dpi == 900
    assert analyzer.deviation_percent == pytest.approx(-10.0)


def test_measurement_not_started_when_capture_denied(make_backend):
    analyzer = DpiAnalyzer(MotionCapture(make_backend(raw=False, standard=False)))

    assert not analyzer.start()
    assert analyzer.status is MeasureStatus.IDLE


def test_host_loss_keeps_partial_counts(capture):
    analyzer = DpiAnalyzer(capture)
    analyzer.start()
    capture.deliver(MotionSample(120, 0))

    capture.lose()

    assert analyzer.status is MeasureStatus.RESULT
    assert analyzer.counts == 120


def test_starting_another_tool_finalizes_the_first(capture):
    analyzer = DpiAnalyzer(capture)
    distance = DistanceMeasurement(capture)
    analyzer.start()
    capture.deliver(MotionSample(50, 0))

    distance.start()
    capture.deliver(MotionSample(70, 0))

    assert analyzer.status is MeasureStatus.RESULT
    assert analyzer.counts == 50
    assert distance.counts == 70


def test_distance_measurement_confirm(capture):
    distance = DistanceMeasurement(capture, dpi=800)
    distance.start()
    capture.deliver(MotionSample(11024, 0))
    assert distance.live_cm == pytest.approx(35.0)

    distance.stop()
    counts = distance.confirm()

    assert counts == 11024
    assert distance.status is MeasureStatus.IDLE
    assert distance.counts == 0


def test_reset_mid_measurement_releases_capture(capture):
    distance = DistanceMeasurement(capture)
    distance.start()
    distance.reset()

    assert not capture.active
    assert distance.status is MeasureStatus.IDLE


def test_polling_session_records_motion(capture):
    session = PollingRateSession(capture)
    assert session.start()

    for _ in range(3):
        capture.deliver(MotionSample(1, 1))

    assert len(session.meter.window) == 3
    session.stop()
    assert session.status is MeasureStatus.RESULT
    assert not capture.active


class _Unused:
    def grab(self, raw: bool) -> bool:
        raise AssertionError("capture should not be requested")

    def ungrab(self) -> None:
        raise AssertionError("capture should not be released")

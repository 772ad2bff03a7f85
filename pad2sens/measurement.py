"""Calibration measurements built on the shared motion capture."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
import time
from typing import Deque, Final, Optional

from .capture import MotionCapture, MotionSample
from .conversion import counts_to_cm, measured_dpi


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementConfig:
    """Parameters for the calibration tools."""

    dpi_test_distance_cm: float = 5.0
    polling_window_ms: float = 1000.0
    polling_idle_reset_ms: float = 200.0
    polling_refresh_ms: float = 100.0


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


class MeasurementWindow:
    """Timestamps kept for a trailing interval, pruned on every insert."""

    def __init__(self, span_ms: float = 1000.0) -> None:
        self.span_ms = float(span_ms)
        self._stamps: Deque[float] = deque()

    def add(self, timestamp_ms: float) -> None:
        self._stamps.append(float(timestamp_ms))
        cutoff = timestamp_ms - self.span_ms
        while self._stamps and self._stamps[0] < cutoff:
            self._stamps.popleft()

    def clear(self) -> None:
        self._stamps.clear()

    @property
    def latest(self) -> Optional[float]:
        return self._stamps[-1] if self._stamps else None

    def __len__(self) -> int:
        return len(self._stamps)


@dataclass(frozen=True)
class PollingSnapshot:
    current_hz: int
    max_hz: int
    average_hz: float
    moving: bool


class PollingRateMeter:
    """Estimate the mouse report rate from motion-sample timestamps."""

    def __init__(self, config: Optional[MeasurementConfig] = None) -> None:
        self.config = config or MeasurementConfig()
        self.window = MeasurementWindow(self.config.polling_window_ms)
        self.reset()

    def reset(self) -> None:
        self.window.clear()
        self.current_hz = 0
        self.max_hz = 0
        self.moving = False
        self._readings_total = 0
        self._readings_count = 0
        self._last_refresh: float = float("-inf")

    @property
    def average_hz(self) -> float:
        if self._readings_count == 0:
            return 0.0
        return self._readings_total / self._readings_count

    def record(self, timestamp_ms: Optional[float] = None, count: int = 1) -> None:
        """Add ``count`` samples observed at ``timestamp_ms``."""

        stamp = _now_ms() if timestamp_ms is None else float(timestamp_ms)
        for _ in range(max(0, count)):
            self.window.add(stamp)
        self.moving = True

    def update(self, now_ms: Optional[float] = None) -> PollingSnapshot:
        """Refresh the readings; call once per frame."""

        now = _now_ms() if now_ms is None else float(now_ms)
        latest = self.window.latest
        if latest is None or now - latest >= self.config.polling_idle_reset_ms:
            self.moving = False
            self.current_hz = 0
        elif now - self._last_refresh >= self.config.polling_refresh_ms:
            reading = len(self.window)
            self.current_hz = reading
            self.max_hz = max(self.max_hz, reading)
            self._readings_total += reading
            self._readings_count += 1
            self._last_refresh = now
        return self.snapshot()

    def snapshot(self) -> PollingSnapshot:
        return PollingSnapshot(
            current_hz=self.current_hz,
            max_hz=self.max_hz,
            average_hz=self.average_hz,
            moving=self.moving,
        )


class MeasureStatus(str, Enum):
    """States shared by the count-based tools."""

    IDLE: Final[str] = "idle"
    MEASURING: Final[str] = "measuring"
    RESULT: Final[str] = "result"


class CountMeasurement:
    """Accumulate unsigned horizontal counts during one capture session.

    The session ends either when the user confirms (:meth:`stop`) or when the
    host takes the pointer back; both paths keep whatever was collected.
    """

    def __init__(self, capture: MotionCapture) -> None:
        self.capture = capture
        self.status = MeasureStatus.IDLE
        self.counts = 0

    def start(self) -> bool:
        if self.status is not MeasureStatus.IDLE:
            return False
        if not self.capture.acquire(self):
            LOGGER.warning("Measurement not started: pointer capture unavailable.")
            return False
        self.counts = 0
        self.status = MeasureStatus.MEASURING
        return True

    def stop(self) -> None:
        if self.status is MeasureStatus.MEASURING:
            self.capture.release()

    def reset(self) -> None:
        if self.capture.holds(self):
            self.capture.release()
        self.status = MeasureStatus.IDLE
        self.counts = 0

    def on_motion(self, sample: MotionSample) -> None:
        if self.status is MeasureStatus.MEASURING:
            self.counts += abs(sample.dx_counts)

    def on_capture_lost(self) -> None:
        if self.status is MeasureStatus.MEASURING:
            self.status = MeasureStatus.RESULT
            self._finalize()

    def _finalize(self) -> None:
        LOGGER.info("Measured %d counts.", self.counts)


class DpiAnalyzer(CountMeasurement):
    """Compare a mouse's real DPI with its stated value over a known distance."""

    def __init__(
        self,
        capture: MotionCapture,
        *,
        stated_dpi: float = 800,
        distance_cm: float = 5.0,
    ) -> None:
        super().__init__(capture)
        self.stated_dpi = stated_dpi
        self.distance_cm = distance_cm

    @property
    def measured_dpi(self) -> int:
        return measured_dpi(self.counts, self.distance_cm)

    @property
    def deviation_percent(self) -> float:
        if self.stated_dpi <= 0:
            return 0.0
        return (self.measured_dpi - self.stated_dpi) / self.stated_dpi * 100.0

    def _finalize(self) -> None:
        LOGGER.info(
            "DPI analysis: %d counts over %.2f cm -> %d DPI (%+.1f%%).",
            self.counts,
            self.distance_cm,
            self.measured_dpi,
            self.deviation_percent,
        )


class DistanceMeasurement(CountMeasurement):
    """Measure usable pad width in counts for the sensitivity calculator."""

    def __init__(self, capture: MotionCapture, *, dpi: float = 800) -> None:
        super().__init__(capture)
        self.dpi = dpi

    @property
    def live_cm(self) -> float:
        return round(counts_to_cm(self.counts, self.dpi), 1)

    def confirm(self) -> int:
        """Return the measured raw count and go back to idle."""

        counts = self.counts
        self.reset()
        return counts


class PollingRateSession:
    """Feed captured motion into a :class:`PollingRateMeter`."""

    def __init__(self, capture: MotionCapture, meter: Optional[PollingRateMeter] = None) -> None:
        self.capture = capture
        self.meter = meter or PollingRateMeter()
        self.status = MeasureStatus.IDLE

    def start(self) -> bool:
        if not self.capture.acquire(self):
            LOGGER.warning("Polling test not started: pointer capture unavailable.")
            return False
        self.status = MeasureStatus.MEASURING
        return True

    def stop(self) -> None:
        if self.capture.holds(self):
            self.capture.release()

    def on_motion(self, sample: MotionSample) -> None:
        self.meter.record()

    def on_capture_lost(self) -> None:
        if self.status is MeasureStatus.MEASURING:
            self.status = MeasureStatus.RESULT
            LOGGER.info(
                "Polling rate: max %d Hz, average %.0f Hz.",
                self.meter.max_hz,
                self.meter.average_hz,
            )


__all__ = [
    "MeasurementConfig",
    "MeasurementWindow",
    "PollingRateMeter",
    "PollingSnapshot",
    "PollingRateSession",
    "MeasureStatus",
    "CountMeasurement",
    "DpiAnalyzer",
    "DistanceMeasurement",
]

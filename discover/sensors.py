"""Push-based tilt sources: a base feed, a manual feed and a simulated sway."""

from __future__ import annotations

import logging
import time
from typing import Generator, Optional

import numpy as np

from discover.observable import Observable
from discover.parallax import TiltSample

logger = logging.getLogger(__name__)


class TiltFeed(Observable[TiltSample]):
    """Delivers each sample to every subscriber, in registration order."""

    def publish(self, sample: TiltSample) -> int:
        return self._notify(sample)

    def close(self):
        self._clear_listeners()


class ManualTiltFeed(TiltFeed):
    def push(self, x: float, y: float, timestamp: Optional[float] = None) -> int:
        ts = time.perf_counter() if timestamp is None else timestamp
        return self.publish(TiltSample(float(x), float(y), ts))


def simulated_tilt(rate_hz: float = 60.0, amplitude: float = 2.5,
                   period_s: float = 6.0) -> Generator[TiltSample, None, None]:
    """
    Endless Lissajous sway in m/s^2, one sample per 1/rate_hz of simulated time

    The y axis runs at 2/3 of the x frequency so the motion never settles
    into a straight line.
    """
    if rate_hz <= 0 or period_s <= 0:
        raise ValueError("rate_hz and period_s must be positive")
    return _sway(1.0 / rate_hz, amplitude, 2.0 * np.pi / period_s)


def _sway(dt: float, amplitude: float, omega: float) -> Generator[TiltSample, None, None]:
    t = 0.0
    while True:
        yield TiltSample(
            float(amplitude * np.sin(omega * t)),
            float(amplitude * 0.6 * np.cos(omega * t * 2.0 / 3.0)),
            t,
        )
        t += dt


class SimulatedTiltFeed(TiltFeed):
    """Desktop stand-in for the accelerometer. Call pump() once per frame."""

    def __init__(self, rate_hz: float = 60.0, amplitude: float = 2.5, period_s: float = 6.0):
        super().__init__()
        self._samples = simulated_tilt(rate_hz, amplitude, period_s)

    def pump(self) -> TiltSample:
        sample = next(self._samples)
        self.publish(sample)
        return sample

    def close(self):
        self._samples.close()
        super().close()

#!/usr/bin/env python3
"""
Accelerometer -> UI bridge
==========================

Reads the ADXL345 at a fixed rate and PUSHes each reading to the UI
process. With --simulate the Lissajous sway from the desktop simulator is
sent instead, which is handy for exercising the device build on a PC.

Author: Discover DXB Team
License: MIT
"""

from __future__ import annotations

import argparse
import logging
import time
from functools import partial
from typing import Callable, Optional

from accelerometer import ADXL345
from adapters.zmq_tilt import ZmqTiltPublisher
from discover.config import load_config, setup_logging
from discover.parallax import TiltSample
from discover.sensors import simulated_tilt

logger = logging.getLogger(__name__)


def bridge(read: Callable[[], Optional[TiltSample]], publisher: ZmqTiltPublisher,
           rate_hz: float, max_samples: Optional[int] = None) -> int:
    """Pump readings into the publisher; returns the number of readings taken."""
    period = 1.0 / rate_hz
    taken = 0
    while max_samples is None or taken < max_samples:
        t0 = time.perf_counter()
        sample = read()
        taken += 1
        if sample is not None:
            publisher.send(sample)
        sleep = period - (time.perf_counter() - t0)
        if sleep > 0:
            time.sleep(sleep)
    return taken


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Push accelerometer readings to the Discover DXB UI")
    parser.add_argument("--config", default=None)
    parser.add_argument("--endpoint", default=None)
    parser.add_argument("--rate", type=float, default=60.0, help="readings per second")
    parser.add_argument("--simulate", action="store_true", help="send a synthetic sway instead of I2C readings")
    parser.add_argument("--i2c-bus", dest="i2c_bus", type=int, default=1)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    config = load_config(args.config).with_overrides(sensor_endpoint=args.endpoint, log_level=args.log_level)
    setup_logging(config.log_level, config.log_file)

    if args.simulate:
        samples = simulated_tilt(rate_hz=args.rate)
        read = partial(next, samples)
        close_sensor = samples.close
    else:
        try:
            sensor = ADXL345(i2c_bus=args.i2c_bus)
        except OSError as exc:
            logger.error("cannot open I2C bus %d: %s", args.i2c_bus, exc)
            return 1
        read = sensor.read
        close_sensor = sensor.close

    publisher = ZmqTiltPublisher(config.sensor_endpoint)
    logger.info("bridging %s readings at %.0f Hz to %s",
                "simulated" if args.simulate else "ADXL345", args.rate, config.sensor_endpoint)
    try:
        bridge(read, publisher, args.rate)
    except KeyboardInterrupt:
        pass
    finally:
        logger.info("sent %d, dropped %d", publisher.sent, publisher.dropped)
        publisher.close()
        close_sensor()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

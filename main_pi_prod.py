#!/usr/bin/env python3
"""
Discover DXB - Device Build
===========================

Touchscreen UI for the Pi kiosk. Tilt samples arrive from tilt_bridge.py
(running as its own process next to the ADXL345) over a local ZeroMQ
socket; the UI never touches I2C itself.

Start order does not matter: the PULL side connects and waits.

Author: Discover DXB Team
License: MIT
"""

from __future__ import annotations

import argparse
import logging

from adapters.pi_io import PIIOAdapter
from discover.app import run
from discover.config import load_config, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Discover DXB device build")
    parser.add_argument("--config", default=None, help="JSON file layered over the defaults")
    parser.add_argument("--endpoint", dest="sensor_endpoint", default=None,
                        help="ZeroMQ endpoint the tilt bridge pushes to")
    parser.add_argument("--locale", dest="default_locale", choices=["en", "ar"], default=None)
    parser.add_argument("--log-file", dest="log_file", default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser


def main(argv=None) -> int:
    args = vars(build_parser().parse_args(argv))
    config = load_config(args.pop("config")).with_overrides(sensor="zmq", **args)
    setup_logging(config.log_level, config.log_file)
    logger.info("tilt endpoint %s", config.sensor_endpoint)
    return run(config, PIIOAdapter, caption="Discover DXB")


if __name__ == "__main__":
    raise SystemExit(main())

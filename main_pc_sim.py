#!/usr/bin/env python3
"""
Discover DXB - PC Simulator
===========================

Desktop run of the device UI with a simulated accelerometer sway.

Controls:
- Mouse      Tap buttons, tabs and cards
- T          Toggle language (EN/AR)
- E / A      Switch to English / Arabic
- LEFT/RIGHT Directory tabs
- ESC        Back
- Q          Quit

Author: Discover DXB Team · License: MIT
"""

from __future__ import annotations

import argparse
import logging

from adapters.pc_io import PCIOAdapter
from discover.app import run
from discover.config import load_config, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Discover DXB desktop simulator")
    parser.add_argument("--config", default=None, help="JSON file layered over the defaults")
    parser.add_argument("--locale", dest="default_locale", choices=["en", "ar"], default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--sensor", choices=["simulated", "zmq", "none"], default=None)
    parser.add_argument("--assets", dest="assets_dir", default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser


def main(argv=None) -> int:
    args = vars(build_parser().parse_args(argv))
    config = load_config(args.pop("config")).with_overrides(**args)
    setup_logging(config.log_level, config.log_file)

    print("═" * 48)
    print("  Discover DXB - PC Simulator")
    print("═" * 48)
    print("  Mouse        Tap buttons, tabs, cards")
    print("  T / E / A    Toggle / English / Arabic")
    print("  ←→           Directory tabs")
    print("  ESC  Back    |  Q  Quit")
    print("═" * 48)

    return run(config, lambda map_pos, _size: PCIOAdapter(map_pos), caption="Discover DXB - PC Simulator")


if __name__ == "__main__":
    raise SystemExit(main())

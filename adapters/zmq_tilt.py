"""
ZeroMQ transport for accelerometer samples
==========================================

The hardware bridge process PUSHes one JSON object per reading:

    {"x": <m/s^2>, "y": <m/s^2>, "t": <seconds>}

and the UI process PULLs them once per frame without blocking. PUSH/PULL
keeps every sample in order; nothing is broadcast.

Author: Discover DXB Team
License: MIT
"""

from __future__ import annotations

import json
import logging
import math
from typing import Optional

import zmq

from discover.parallax import TiltSample
from discover.sensors import TiltFeed

logger = logging.getLogger(__name__)

# ADXL345 full-scale range is +/-16 g
MAX_ABS_MS2 = 16 * 9.80665


def encode_sample(sample: TiltSample) -> bytes:
    return json.dumps({"x": sample.x, "y": sample.y, "t": sample.timestamp}).encode("utf-8")


def decode_sample(data: bytes) -> TiltSample:
    """
    Raises ValueError for anything that is not a {"x", "y"[, "t"]} object of
    numbers, and for NaN, infinite or beyond-full-scale axis readings.
    """
    msg = json.loads(data.decode("utf-8"))
    if not isinstance(msg, dict):
        raise ValueError(f"expected object, got {type(msg).__name__}")
    try:
        sample = TiltSample(float(msg["x"]), float(msg["y"]), float(msg.get("t", 0.0)))
    except (KeyError, TypeError) as exc:
        raise ValueError(f"bad sample {msg!r}") from exc
    for axis in (sample.x, sample.y):
        if not math.isfinite(axis) or abs(axis) > MAX_ABS_MS2:
            raise ValueError(f"tilt reading out of range: {axis!r}")
    return sample


class _Endpoint:
    def __init__(self, socket_type: int, endpoint: str, bind: bool, context: Optional[zmq.Context],
                 options: Optional[dict] = None):
        self.endpoint = endpoint
        self._owns_context = context is None
        self.context = context or zmq.Context()
        self.socket = self.context.socket(socket_type)
        self.socket.setsockopt(zmq.LINGER, 0)
        for opt, value in (options or {}).items():
            self.socket.setsockopt(opt, value)
        if bind:
            self.socket.bind(endpoint)
        else:
            self.socket.connect(endpoint)

    def close(self):
        if not self.socket.closed:
            self.socket.close()
            if self._owns_context:
                self.context.term()


class ZmqTiltFeed(TiltFeed):
    """UI-side PULL socket; poll() once per frame."""

    def __init__(self, endpoint: str, bind: bool = False, context: Optional[zmq.Context] = None):
        super().__init__()
        self._ep = _Endpoint(zmq.PULL, endpoint, bind, context)
        self.dropped = 0
        logger.info("tilt feed %s %s", "bound to" if bind else "connected to", endpoint)

    def poll(self, max_messages: int = 64) -> int:
        """Drain up to max_messages pending samples; returns how many were published."""
        published = 0
        for _ in range(max_messages):
            try:
                data = self._ep.socket.recv(zmq.NOBLOCK)
            except zmq.Again:
                break
            try:
                sample = decode_sample(data)
            except ValueError as exc:
                self.dropped += 1
                logger.warning("dropping malformed tilt sample: %s", exc)
                continue
            self.publish(sample)
            published += 1
        return published

    def close(self):
        self._ep.close()
        super().close()


class ZmqTiltPublisher:
    """Bridge-side PUSH socket."""

    def __init__(self, endpoint: str, bind: bool = True, context: Optional[zmq.Context] = None,
                 high_water_mark: int = 256):
        self._ep = _Endpoint(zmq.PUSH, endpoint, bind, context, {zmq.SNDHWM: high_water_mark})
        self.sent = 0
        self.dropped = 0

    def send(self, sample: TiltSample) -> bool:
        try:
            self._ep.socket.send(encode_sample(sample), zmq.NOBLOCK)
        except zmq.Again:
            # UI not connected yet or queue full: drop this reading
            self.dropped += 1
            return False
        self.sent += 1
        return True

    def close(self):
        self._ep.close()

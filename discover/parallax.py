"""
Tilt-to-offset transform for the detail view header image

The header image is larger than its viewport by a fixed bleed on every
side and is shifted against the device tilt:

    dx = -ax * SCALE    (image moves opposite to a sideways tilt)
    dy = +ay * SCALE

Before the first accelerometer reading the layer sits at (0, 0).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# px per m/s^2. Small on purpose: a full 1 g tilt moves the image ~78 px.
SCALE = 8.0
BLEED_PX = 20


@dataclass(frozen=True)
class TiltSample:
    x: float
    y: float
    timestamp: float = 0.0


@dataclass(frozen=True)
class ParallaxOffset:
    dx: float = 0.0
    dy: float = 0.0

    def as_tuple(self) -> Tuple[float, float]:
        return self.dx, self.dy


ZERO_OFFSET = ParallaxOffset()


def tilt_to_offset(sample: Optional[TiltSample], scale: float = SCALE) -> ParallaxOffset:
    """Raw scaled offset, same sign as the sample."""
    if sample is None:
        return ZERO_OFFSET
    return ParallaxOffset(sample.x * scale, sample.y * scale)


def layer_offset(sample: Optional[TiltSample], scale: float = SCALE) -> ParallaxOffset:
    """Offset actually applied to the image layer (horizontal axis inverted)."""
    raw = tilt_to_offset(sample, scale)
    if raw is ZERO_OFFSET:
        return ZERO_OFFSET
    return ParallaxOffset(-raw.dx, raw.dy)


def offsets_for(samples, scale: float = SCALE) -> np.ndarray:
    """Vectorized layer_offset over an (N, 2) array of (x, y) readings."""
    arr = np.asarray(samples, dtype=float).reshape(-1, 2)
    return arr * np.array([-scale, scale])


def layer_rect(width: int, height: int, offset: ParallaxOffset = ZERO_OFFSET,
               bleed: int = BLEED_PX) -> Tuple[int, int, int, int]:
    """(x, y, w, h) of the overscanned image layer inside a width x height viewport."""
    return (
        int(round(-bleed + offset.dx)),
        int(round(-bleed + offset.dy)),
        width + 2 * bleed,
        height + 2 * bleed,
    )


class ParallaxLayer:
    """
    Latest-sample holder bound to a tilt feed for the lifetime of a view

    Subscribes on construction and must be closed when the owning view
    is torn down; samples that still arrive after close() are dropped.
    """

    def __init__(self, feed, scale: float = SCALE):
        self.scale = scale
        self.sample: Optional[TiltSample] = None
        self.samples_seen = 0
        self._subscription = feed.subscribe(self.on_sample)

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    @property
    def offset(self) -> ParallaxOffset:
        return layer_offset(self.sample, self.scale)

    def on_sample(self, sample: TiltSample):
        if self.closed:
            return
        self.sample = sample
        self.samples_seen += 1

    def close(self):
        if not self.closed:
            logger.debug("parallax layer closed after %d samples", self.samples_seen)
        self._subscription.unsubscribe()

    def __enter__(self) -> "ParallaxLayer":
        return self

    def __exit__(self, *exc):
        self.close()

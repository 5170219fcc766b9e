"""
Parallax transform tests
========================

Offset sign and scale over a grid of readings, the neutral default and the
layer lifecycle on a feed.
"""

import numpy as np
import pytest

from discover.parallax import (
    BLEED_PX,
    SCALE,
    ZERO_OFFSET,
    ParallaxLayer,
    ParallaxOffset,
    TiltSample,
    layer_offset,
    layer_rect,
    offsets_for,
    tilt_to_offset,
)
from discover.sensors import ManualTiltFeed

GRID = [float(v) for v in np.linspace(-19.6, 19.6, 9)] + [0.0, 0.001, -1e-6, 123.4]


class TestTransform:
    def test_scale_constant(self):
        assert SCALE == 8.0

    @pytest.mark.parametrize("ax", GRID)
    @pytest.mark.parametrize("ay", GRID[::3])
    def test_layer_offset_sign_and_scale(self, ax, ay):
        off = layer_offset(TiltSample(ax, ay))
        assert off.dx == -ax * SCALE
        assert off.dy == ay * SCALE

    @pytest.mark.parametrize("ax", GRID[::2])
    def test_raw_offset_keeps_sign(self, ax):
        off = tilt_to_offset(TiltSample(ax, -ax))
        assert off == ParallaxOffset(ax * SCALE, -ax * SCALE)

    def test_missing_sample_is_neutral(self):
        assert tilt_to_offset(None) == ZERO_OFFSET
        assert layer_offset(None) == ParallaxOffset(0.0, 0.0)

    def test_custom_scale(self):
        assert layer_offset(TiltSample(1.0, 1.0), scale=2.0) == ParallaxOffset(-2.0, 2.0)

    def test_vectorized_matches_scalar(self):
        xs, ys = np.meshgrid(np.linspace(-10, 10, 7), np.linspace(-5, 5, 5))
        samples = np.column_stack([xs.ravel(), ys.ravel()])

        out = offsets_for(samples)

        expected = [layer_offset(TiltSample(x, y)).as_tuple() for x, y in samples]
        np.testing.assert_allclose(out, np.array(expected))

    def test_vectorized_single_pair(self):
        np.testing.assert_allclose(offsets_for((1.5, -2.0)), [[-12.0, -16.0]])


class TestLayerRect:
    def test_neutral_rect_overscans_viewport(self):
        assert layer_rect(480, 360) == (-BLEED_PX, -BLEED_PX, 480 + 2 * BLEED_PX, 360 + 2 * BLEED_PX)

    def test_rect_moves_against_horizontal_tilt(self):
        off = layer_offset(TiltSample(1.0, 2.0))
        # left = -20 - x*8, top = -20 + y*8
        assert layer_rect(480, 360, off) == (-28, -4, 520, 400)


class TestParallaxLayer:
    def test_zero_before_first_sample(self):
        feed = ManualTiltFeed()
        layer = ParallaxLayer(feed)
        assert layer.sample is None
        assert layer.offset == ZERO_OFFSET

    def test_tracks_latest_sample_only(self):
        feed = ManualTiltFeed()
        layer = ParallaxLayer(feed)

        feed.push(3.0, 3.0)
        feed.push(1.0, -0.5)

        assert layer.offset == ParallaxOffset(-8.0, -4.0)
        assert layer.samples_seen == 2

    def test_close_unsubscribes(self):
        feed = ManualTiltFeed()
        layer = ParallaxLayer(feed)
        feed.push(1.0, 1.0)

        layer.close()
        layer.close()
        feed.push(5.0, 5.0)

        assert layer.closed
        assert feed.listener_count == 0
        assert layer.offset == ParallaxOffset(-8.0, 8.0)

    def test_stale_sample_after_close_ignored(self):
        feed = ManualTiltFeed()
        layer = ParallaxLayer(feed)
        layer.close()

        layer.on_sample(TiltSample(4.0, 4.0))

        assert layer.sample is None

    def test_context_manager(self):
        feed = ManualTiltFeed()
        with ParallaxLayer(feed) as layer:
            assert feed.listener_count == 1
        assert layer.closed
        assert feed.listener_count == 0

"""Frame loop shared by the desktop simulator and the device entry point."""

from __future__ import annotations

import logging
import time
from typing import Optional

import pygame

from adapters.zmq_tilt import ZmqTiltFeed
from discover.app_controller import AppController
from discover.config import AppConfig
from discover.locale_store import LocaleStore
from discover.sensors import SimulatedTiltFeed, TiltFeed
from discover.ui_renderer import UIRenderer, ViewportMapper

logger = logging.getLogger(__name__)


def make_feed(config: AppConfig) -> Optional[TiltFeed]:
    if config.sensor == "simulated":
        return SimulatedTiltFeed(rate_hz=config.fps)
    if config.sensor == "zmq":
        return ZmqTiltFeed(config.sensor_endpoint)
    return None


def pump_feed(feed: Optional[TiltFeed]):
    if isinstance(feed, SimulatedTiltFeed):
        feed.pump()
    elif isinstance(feed, ZmqTiltFeed):
        feed.poll()


def run(config: AppConfig, adapter_factory, caption: str = "Discover DXB",
        store: Optional[LocaleStore] = None) -> int:
    """
    Run until the controller requests shutdown

    adapter_factory(mapper, window_size) builds the input adapter once the
    window exists. Returns a process exit code.
    """
    pygame.init()
    screen = pygame.display.set_mode((config.width, config.height), pygame.RESIZABLE)
    pygame.display.set_caption(caption)
    clock = pygame.time.Clock()

    store = store or LocaleStore(config.locale)
    feed = make_feed(config)
    mapper = ViewportMapper((config.width, config.height))
    mapper.update(*screen.get_size())
    adapter = adapter_factory(mapper.to_internal, lambda: pygame.display.get_surface().get_size())
    controller = AppController(config.width, config.height, store, feed)
    renderer = UIRenderer(screen, config.width, config.height, config.assets_dir, config.font_path)
    logger.info("started: %dx%d @ %d fps, locale=%s, sensor=%s",
                config.width, config.height, config.fps, store.get_locale().value, config.sensor)

    controller.mark_all_dirty()
    last = time.perf_counter()
    try:
        while not controller.state.shutdown_requested:
            for event in pygame.event.get(pygame.VIDEORESIZE):
                mapper.update(event.w, event.h)
                controller.mark_all_dirty()
            for ev in adapter.poll():
                controller.handle(ev)

            pump_feed(feed)
            now = time.perf_counter()
            controller.tick(now - last)
            last = now

            if controller.pop_dirty():
                frame, boxes = renderer.compose(controller.state, controller.parallax_offset)
                controller.set_hitboxes(boxes)
                mapper.blit_scaled(screen, frame)
                pygame.display.flip()
            clock.tick(config.fps)
    finally:
        controller.close()
        if feed is not None:
            feed.close()
        pygame.quit()
        logger.info("stopped")
    return 0

"""Shared finite-state app controller for the PC and device entry points."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Set, Tuple

from discover.catalog import CITY_TABS, DetailArgs, places_for
from discover.i18n import Locale, StringTable, resolve
from discover.input_events import EventType, InputEvent
from discover.locale_store import LocaleStore
from discover.parallax import ZERO_OFFSET, ParallaxLayer, ParallaxOffset

logger = logging.getLogger(__name__)

TOAST_S = 1.2
PRESS_S = 0.11


class Scene(Enum):
    HOME = auto()
    DIRECTORY = auto()
    DETAIL = auto()


@dataclass
class AppState:
    lang: Locale = Locale.EN
    strings: StringTable = field(default_factory=lambda: resolve(Locale.EN))
    scene: Scene = Scene.HOME
    nav_stack: List[Scene] = field(default_factory=lambda: [Scene.HOME])
    tab_index: int = 0
    detail: Optional[DetailArgs] = None
    favorites: Set[str] = field(default_factory=set)
    touch_target: Optional[str] = None
    pressed_until: float = 0.0
    toast: str = ""
    toast_until: float = 0.0
    shutdown_requested: bool = False
    last_input_latency_ms: float = 0.0
    dirty_rects: List[Tuple[int, int, int, int]] = field(default_factory=list)

    def t(self, key: str) -> str:
        return self.strings.get(key)

    @property
    def city(self):
        return CITY_TABS[self.tab_index]


class AppController:
    """
    Scene state machine driven by InputEvents

    Holds a subscription to the locale store for its whole life; every
    committed locale change swaps state.strings in one assignment. The
    detail scene owns a ParallaxLayer on the tilt feed that is closed as
    soon as the scene is left.
    """

    def __init__(self, width: int, height: int, store: LocaleStore, feed=None):
        self.width = width
        self.height = height
        self.store = store
        self.feed = feed
        locale = store.get_locale()
        self.state = AppState(lang=locale, strings=resolve(locale))
        self.hitboxes: Dict[str, Tuple[int, int, int, int]] = {}
        self.parallax: Optional[ParallaxLayer] = None
        self._last_offset = ZERO_OFFSET
        self._store_sub = store.subscribe(self._on_locale_changed)

    # ----- rendering bookkeeping -----

    def set_hitboxes(self, boxes: Dict[str, Tuple[int, int, int, int]]):
        self.hitboxes = boxes

    def mark_dirty(self, rect: Tuple[int, int, int, int]):
        self.state.dirty_rects.append(rect)

    def mark_all_dirty(self):
        self.mark_dirty((0, 0, self.width, self.height))

    def pop_dirty(self) -> List[Tuple[int, int, int, int]]:
        rects = self.state.dirty_rects[:]
        self.state.dirty_rects.clear()
        return rects

    # ----- locale -----

    def _on_locale_changed(self, locale: Locale):
        s = self.state
        s.lang = locale
        s.strings = resolve(locale)
        s.toast = s.strings.english if locale is Locale.EN else s.strings.arabic
        s.toast_until = time.perf_counter() + TOAST_S
        self.mark_all_dirty()

    # ----- navigation -----

    @property
    def parallax_offset(self) -> ParallaxOffset:
        if self.parallax is None:
            return ZERO_OFFSET
        return self.parallax.offset

    def _close_parallax(self):
        if self.parallax is not None:
            self.parallax.close()
            self.parallax = None
            self._last_offset = ZERO_OFFSET

    def push_scene(self, scene: Scene, detail: Optional[DetailArgs] = None):
        s = self.state
        if scene == Scene.DETAIL:
            s.detail = detail or DetailArgs()
            self._close_parallax()
            if self.feed is not None:
                self.parallax = ParallaxLayer(self.feed)
        if s.scene != scene:
            s.scene = scene
            s.nav_stack.append(scene)
        logger.debug("scene -> %s", scene.name)
        self.mark_all_dirty()

    def open_place(self, index: int):
        places = places_for(self.state.city)
        if 0 <= index < len(places):
            self.push_scene(Scene.DETAIL, DetailArgs.from_place(places[index]))

    def back(self):
        s = self.state
        if len(s.nav_stack) <= 1:
            s.shutdown_requested = True
            return
        if s.scene == Scene.DETAIL:
            self._close_parallax()
            s.detail = None
        s.nav_stack.pop()
        s.scene = s.nav_stack[-1]
        self.mark_all_dirty()

    def set_tab(self, index: int):
        s = self.state
        s.tab_index = index % len(CITY_TABS)
        self.mark_all_dirty()

    def toggle_favorite(self):
        s = self.state
        if s.detail is None or s.detail.title_key is None:
            return
        s.favorites ^= {s.detail.title_key}
        self.mark_all_dirty()

    # ----- input -----

    def _hit(self, p: Tuple[int, int]) -> Optional[str]:
        x, y = p
        for key, (rx, ry, rw, rh) in self.hitboxes.items():
            if rx <= x <= rx + rw and ry <= y <= ry + rh:
                return key
        return None

    def _on_press(self, key: Optional[str]):
        s = self.state
        if key is None:
            return
        s.pressed_until = time.perf_counter() + PRESS_S

        if key == "back":
            self.back()
        elif key == "lang":
            self.store.toggle_locale()
        elif key == "discover":
            self.push_scene(Scene.DIRECTORY)
        elif key == "favorite":
            self.toggle_favorite()
        elif key.startswith("tab_"):
            self.set_tab(int(key[4:]))
        elif key.startswith("place_"):
            self.open_place(int(key[6:]))
        self.mark_all_dirty()

    def tick(self, dt: float):
        s = self.state
        if s.toast and time.perf_counter() > s.toast_until:
            s.toast = ""
            self.mark_all_dirty()
        if self.parallax is not None:
            offset = self.parallax.offset
            if offset != self._last_offset:
                self._last_offset = offset
                self.mark_all_dirty()

    def handle(self, event: InputEvent):
        t0 = time.perf_counter()
        s = self.state

        if event.type == EventType.TOGGLE_LANG:
            self.store.toggle_locale()
        elif event.type == EventType.SET_LANG:
            self.store.set_locale(event.lang)
        elif event.type == EventType.TAB_NEXT:
            if s.scene == Scene.DIRECTORY:
                self.set_tab(s.tab_index + 1)
        elif event.type == EventType.TAB_PREV:
            if s.scene == Scene.DIRECTORY:
                self.set_tab(s.tab_index - 1)
        elif event.type == EventType.BACK:
            self.back()
        elif event.type == EventType.SHUTDOWN:
            s.shutdown_requested = True
        elif event.type == EventType.TOUCH_DOWN:
            s.touch_target = self._hit(event.pos)
            self._on_press(s.touch_target)
        elif event.type == EventType.TOUCH_UP:
            s.touch_target = None

        s.last_input_latency_ms = (time.perf_counter() - t0) * 1000.0

    def close(self):
        self._close_parallax()
        self._store_sub.unsubscribe()

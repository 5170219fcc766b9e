"""PC input adapter: mouse + keyboard to the shared InputEvent stream."""

from __future__ import annotations

import time
from typing import Callable, List, Tuple

import pygame

from discover.input_events import EventType, InputEvent

KEYMAP = {
    pygame.K_t: EventType.TOGGLE_LANG,
    pygame.K_LEFT: EventType.TAB_PREV,
    pygame.K_RIGHT: EventType.TAB_NEXT,
    pygame.K_ESCAPE: EventType.BACK,
    pygame.K_BACKSPACE: EventType.BACK,
    pygame.K_q: EventType.SHUTDOWN,
}

LANG_KEYS = {
    pygame.K_e: "en",
    pygame.K_a: "ar",
}


class PCIOAdapter:
    def __init__(self, map_pos: Callable[[Tuple[int, int]], Tuple[int, int]]):
        self.map_pos = map_pos

    def translate(self, event, now: float) -> List[InputEvent]:
        if event.type == pygame.QUIT:
            return [InputEvent(EventType.SHUTDOWN, timestamp=now)]
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return [InputEvent(EventType.TOUCH_DOWN, pos=self.map_pos(event.pos), timestamp=now)]
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return [InputEvent(EventType.TOUCH_UP, pos=self.map_pos(event.pos), timestamp=now)]
        if event.type == pygame.KEYDOWN:
            if event.key in LANG_KEYS:
                return [InputEvent(EventType.SET_LANG, lang=LANG_KEYS[event.key], timestamp=now)]
            if event.key in KEYMAP:
                return [InputEvent(KEYMAP[event.key], timestamp=now)]
        return []

    def poll(self) -> List[InputEvent]:
        out: List[InputEvent] = []
        now = time.perf_counter()
        for event in pygame.event.get():
            out.extend(self.translate(event, now))
        return out

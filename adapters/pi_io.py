"""Device adapter: touchscreen finger events on top of the PC mouse/keyboard mapping."""

from __future__ import annotations

from typing import Callable, List, Tuple

import pygame

from adapters.pc_io import PCIOAdapter
from discover.input_events import EventType, InputEvent


class PIIOAdapter(PCIOAdapter):
    """
    SDL reports finger positions normalized to 0..1 of the display, so they
    are scaled to the window before going through the viewport mapper.
    """

    def __init__(self, map_pos: Callable[[Tuple[int, int]], Tuple[int, int]],
                 window_size: Callable[[], Tuple[int, int]]):
        super().__init__(map_pos)
        self.window_size = window_size

    def _finger_pos(self, event) -> Tuple[int, int]:
        w, h = self.window_size()
        return self.map_pos((int(event.x * w), int(event.y * h)))

    def translate(self, event, now: float) -> List[InputEvent]:
        if event.type == pygame.FINGERDOWN:
            return [InputEvent(EventType.TOUCH_DOWN, pos=self._finger_pos(event), timestamp=now)]
        if event.type == pygame.FINGERUP:
            return [InputEvent(EventType.TOUCH_UP, pos=self._finger_pos(event), timestamp=now)]
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
            # SDL mirrors every finger as a synthetic mouse click
            return []
        return super().translate(event, now)

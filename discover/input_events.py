"""Input event model shared by the PC and device adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


class EventType(Enum):
    TOUCH_DOWN = auto()
    TOUCH_UP = auto()
    TOGGLE_LANG = auto()
    SET_LANG = auto()
    TAB_NEXT = auto()
    TAB_PREV = auto()
    BACK = auto()
    SHUTDOWN = auto()


@dataclass(frozen=True)
class InputEvent:
    type: EventType
    pos: Tuple[int, int] = (0, 0)
    lang: str = ""  # SET_LANG only
    timestamp: float = 0.0

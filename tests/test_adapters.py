"""pygame event translation for the desktop and touchscreen adapters."""

import pygame
import pytest

from adapters.pc_io import PCIOAdapter
from adapters.pi_io import PIIOAdapter
from discover.input_events import EventType, InputEvent


def identity(pos):
    return pos


@pytest.fixture
def pc():
    return PCIOAdapter(identity)


@pytest.fixture
def pi():
    return PIIOAdapter(identity, lambda: (480, 800))


class TestPC:
    @pytest.mark.parametrize("key,expected", [
        (pygame.K_t, EventType.TOGGLE_LANG),
        (pygame.K_LEFT, EventType.TAB_PREV),
        (pygame.K_RIGHT, EventType.TAB_NEXT),
        (pygame.K_ESCAPE, EventType.BACK),
        (pygame.K_q, EventType.SHUTDOWN),
    ])
    def test_keymap(self, pc, key, expected):
        out = pc.translate(pygame.event.Event(pygame.KEYDOWN, key=key), 1.0)
        assert [e.type for e in out] == [expected]

    @pytest.mark.parametrize("key,lang", [(pygame.K_e, "en"), (pygame.K_a, "ar")])
    def test_language_keys(self, pc, key, lang):
        out = pc.translate(pygame.event.Event(pygame.KEYDOWN, key=key), 1.0)
        assert out == [InputEvent(EventType.SET_LANG, lang=lang, timestamp=1.0)]

    def test_quit(self, pc):
        out = pc.translate(pygame.event.Event(pygame.QUIT), 2.0)
        assert out == [InputEvent(EventType.SHUTDOWN, timestamp=2.0)]

    def test_left_click_goes_through_mapper(self):
        adapter = PCIOAdapter(lambda p: (p[0] // 2, p[1] // 2))
        ev = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 60))
        assert adapter.translate(ev, 0.0) == [InputEvent(EventType.TOUCH_DOWN, pos=(50, 30))]

    def test_right_click_ignored(self, pc):
        ev = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(10, 10))
        assert pc.translate(ev, 0.0) == []

    def test_unmapped_key_ignored(self, pc):
        assert pc.translate(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_z), 0.0) == []


class TestPi:
    def test_finger_scaled_to_window(self, pi):
        ev = pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.25, finger_id=0, touch_id=0)
        assert pi.translate(ev, 0.0) == [InputEvent(EventType.TOUCH_DOWN, pos=(240, 200))]

    def test_finger_up(self, pi):
        ev = pygame.event.Event(pygame.FINGERUP, x=0.0, y=1.0, finger_id=0, touch_id=0)
        assert [e.type for e in pi.translate(ev, 0.0)] == [EventType.TOUCH_UP]

    def test_synthetic_mouse_from_touch_ignored(self, pi):
        ev = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(240, 200), touch=True)
        assert pi.translate(ev, 0.0) == []

    def test_keyboard_still_works(self, pi):
        out = pi.translate(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_t), 0.0)
        assert [e.type for e in out] == [EventType.TOGGLE_LANG]

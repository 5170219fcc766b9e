"""Shared UI renderer for the PC simulator and the device build (fixed internal canvas)."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from discover.app_controller import AppState, Scene
from discover.catalog import CITY_TABS, grid_columns, places_for
from discover.i18n import language_toggle_label
from discover.parallax import ZERO_OFFSET, ParallaxOffset, layer_rect

logger = logging.getLogger(__name__)

Rect = Tuple[int, int, int, int]

# palette
C_BG = (18, 16, 24)
C_PANEL = (28, 26, 36, 230)
C_TEXT = (240, 240, 244)
C_TEXT_SUB = (150, 148, 160)
C_ACCENT = (102, 80, 164)
C_PRESS = (70, 56, 120)
C_DISC = (217, 217, 217, 203)

# spacing scale
SP8, SP12, SP16, SP24 = 8, 12, 16, 24
TOP_H = 72
TAB_H = 48
RADIUS = 12
HIT_MIN = 48

BAR_H = 56
BAR_ICON = 28
BAR_ICONS = ("Home.png", "Grid.png", "avatar.png", "Heart.png")

HEADER_FRACTION = 0.45
HEADER_CURVE_PX = 100

TYPE_H1 = 24
TYPE_BODY = 14
TYPE_CAPTION = 12

# Arabic glyphs come from DejaVu/Noto when the system has them.
SYSTEM_FONTS = "dejavusans,notosansarabic,notosans,arial"


def curve_mask_polygon(width: int, height: int, depth: int = HEADER_CURVE_PX,
                       steps: int = 32) -> List[Tuple[int, int]]:
    """Polygon covering everything below the header's quadratic bottom curve."""
    t = np.linspace(0.0, 1.0, steps)[:, None]
    p0 = np.array([0.0, height - depth])
    ctrl = np.array([width / 2.0, float(height)])
    p2 = np.array([float(width), height - depth])
    pts = (1 - t) ** 2 * p0 + 2 * (1 - t) * t * ctrl + t ** 2 * p2
    poly = [(int(round(x)), int(round(y))) for x, y in pts]
    return poly + [(width, height), (0, height)]


def bottom_bar_slots(width: int, height: int, count: int = len(BAR_ICONS)) -> List[Tuple[int, int]]:
    """Icon centres spaced evenly around, along the bottom edge."""
    slot = width / count
    y = height - BAR_H // 2
    return [(int(slot * (i + 0.5)), y) for i in range(count)]


def card_rects(count: int, width: int, top: int) -> List[Rect]:
    """Directory card boxes: 16:9 image plus a title/description band."""
    cols = grid_columns(width)
    card_w = (width - SP24 * (cols + 1)) // cols
    card_h = card_w * 9 // 16 + 84
    rects = []
    for i in range(count):
        row, col = divmod(i, cols)
        rects.append((SP24 + col * (card_w + SP24), top + SP16 + row * (card_h + SP16), card_w, card_h))
    return rects


class UIRenderer:
    def __init__(self, screen: pygame.Surface, width: int, height: int,
                 assets_dir: str = "assets", font_path: Optional[str] = None):
        self.screen = screen
        self.w = width
        self.h = height
        self.assets_dir = Path(assets_dir)
        self.header_h = int(self.h * HEADER_FRACTION)
        self.ui_surface = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        self.hitboxes: Dict[str, Rect] = {}
        self.last_frame_stats = {"frame_ms": 0.0, "dirty": 0}
        self.font_regular, self.font_heading = self._load_fonts(font_path)
        self.image_cache: OrderedDict[str, Optional[pygame.Surface]] = OrderedDict()
        self.image_cache_max = 12
        self.background = self._load_image("background-image.jpg", (self.w, self.h))

    def _load_fonts(self, font_path: Optional[str]):
        if font_path:
            p = Path(font_path)
            if p.exists():
                try:
                    return pygame.font.Font(str(p), TYPE_BODY), pygame.font.Font(str(p), TYPE_H1)
                except (pygame.error, OSError) as exc:
                    logger.warning("font %s unusable (%s); using system fonts", p, exc)
            else:
                logger.warning("font %s missing; using system fonts", p)
        return (pygame.font.SysFont(SYSTEM_FONTS, TYPE_BODY),
                pygame.font.SysFont(SYSTEM_FONTS, TYPE_H1, bold=True))

    def _load_image(self, name: Optional[str], size: Tuple[int, int]) -> Optional[pygame.Surface]:
        if not name:
            return None
        key = f"{name}@{size[0]}x{size[1]}"
        if key in self.image_cache:
            img = self.image_cache.pop(key)
            self.image_cache[key] = img
            return img
        path = self.assets_dir / name
        img = None
        if path.exists():
            try:
                img = self._crop_to_fill(pygame.image.load(str(path)), size)
            except pygame.error as exc:
                logger.warning("cannot load %s: %s", path, exc)
        else:
            logger.info("asset %s not found; drawing placeholder", path)
        self.image_cache[key] = img
        while len(self.image_cache) > self.image_cache_max:
            self.image_cache.popitem(last=False)
        return img

    @staticmethod
    def _crop_to_fill(src: pygame.Surface, size: Tuple[int, int]) -> pygame.Surface:
        w, h = size
        sw, sh = src.get_size()
        if sw <= 0 or sh <= 0:
            return pygame.Surface(size)
        if sw / sh > w / h:
            crop_w = int(sh * w / h)
            rect = pygame.Rect((sw - crop_w) // 2, 0, crop_w, sh)
        else:
            crop_h = int(sw * h / w)
            rect = pygame.Rect(0, (sh - crop_h) // 2, sw, crop_h)
        return pygame.transform.smoothscale(src.subsurface(rect), size)

    @staticmethod
    def _placeholder(size: Tuple[int, int]) -> pygame.Surface:
        w, h = size
        surf = pygame.Surface(size)
        for y in range(h):
            k = y / max(1, h)
            surf.fill((int(40 + 60 * k), int(34 + 40 * k), int(70 + 70 * k)), rect=(0, y, w, 1))
        return surf

    def _txt(self, font, text: str, color, xy: Tuple[int, int]):
        self.ui_surface.blit(font.render(text, True, color), xy)

    def _txt_wrapped(self, font, text: str, color, xy: Tuple[int, int], max_w: int) -> int:
        x, y = xy
        line = ""
        for word in text.split(" "):
            trial = f"{line} {word}".strip()
            if line and font.size(trial)[0] > max_w:
                self._txt(font, line, color, (x, y))
                y += font.get_linesize()
                line = word
            else:
                line = trial
        if line:
            self._txt(font, line, color, (x, y))
            y += font.get_linesize()
        return y

    def _draw_btn(self, rect: Rect, pressed: bool = False, color=C_PANEL):
        pygame.draw.rect(self.ui_surface, C_PRESS if pressed else color, rect, border_radius=RADIUS)

    def _heart(self, pos: Tuple[int, int], filled: bool):
        x, y = pos
        width = 0 if filled else 2
        pygame.draw.circle(self.ui_surface, C_TEXT, (x + 5, y + 5), 5, width)
        pygame.draw.circle(self.ui_surface, C_TEXT, (x + 13, y + 5), 5, width)
        pygame.draw.polygon(self.ui_surface, C_TEXT, [(x, y + 7), (x + 18, y + 7), (x + 9, y + 18)], width)

    def build_hitboxes(self, state: AppState) -> Dict[str, Rect]:
        boxes: Dict[str, Rect] = {"lang": (self.w - 128, SP16, 112, 40)}
        if state.scene == Scene.HOME:
            boxes["discover"] = (self.w // 2 - 80, self.h - 220, 160, HIT_MIN)
            return boxes
        boxes["back"] = (SP12, SP16, 64, 40)
        if state.scene == Scene.DIRECTORY:
            tab_w = self.w // len(CITY_TABS)
            for i in range(len(CITY_TABS)):
                boxes[f"tab_{i}"] = (i * tab_w, TOP_H, tab_w, TAB_H)
            cards = card_rects(len(places_for(state.city)), self.w, TOP_H + TAB_H)
            for i, rect in enumerate(cards):
                boxes[f"place_{i}"] = rect
        elif state.scene == Scene.DETAIL:
            boxes["favorite"] = (SP8, self.header_h + 4, HIT_MIN, HIT_MIN)
        return boxes

    def _pressed(self, state: AppState, key: str) -> bool:
        return state.touch_target == key and time.perf_counter() < state.pressed_until

    def _render_chrome(self, state: AppState, title: str):
        if "back" in self.hitboxes:
            self._draw_btn(self.hitboxes["back"], self._pressed(state, "back"))
            self._txt(self.font_heading, "‹", C_TEXT, (SP12 + 24, SP16 + 4))
        if title:
            self._txt(self.font_regular, title, C_TEXT, (92, SP16 + 12))
        self._draw_btn(self.hitboxes["lang"], self._pressed(state, "lang"))
        pygame.draw.rect(self.ui_surface, (255, 255, 255, 180), self.hitboxes["lang"], 1, border_radius=20)
        lx, ly, _, _ = self.hitboxes["lang"]
        self._txt(self.font_regular, language_toggle_label(state.lang), C_TEXT, (lx + 14, ly + 11))

    def _render_bottom_bar(self, backdrop: bool = False):
        if backdrop:
            pygame.draw.rect(self.ui_surface, C_PANEL, (0, self.h - BAR_H, self.w, BAR_H))
        for name, centre in zip(BAR_ICONS, bottom_bar_slots(self.w, self.h)):
            icon = self._load_image(name, (BAR_ICON, BAR_ICON))
            if icon is None:
                pygame.draw.circle(self.ui_surface, C_TEXT_SUB, centre, BAR_ICON // 2, 2)
            else:
                self.ui_surface.blit(icon, icon.get_rect(center=centre))

    def render_home(self, state: AppState) -> pygame.Surface:
        frame = (self.background or self._placeholder((self.w, self.h))).copy()
        disc = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        centre = (self.w // 2, 230)
        radius = min(self.w // 2 - SP24, 180)
        pygame.draw.circle(disc, C_DISC, centre, radius)
        self.ui_surface.blit(disc, (0, 0))
        side = int(radius * 1.4)
        logo = self._load_image("logo.png", (side, side))
        if logo is not None:
            self.ui_surface.blit(logo, logo.get_rect(center=centre))
        else:
            title = self.font_heading.render(state.strings.app_title, True, C_BG)
            self.ui_surface.blit(title, title.get_rect(center=centre))

        rect = self.hitboxes["discover"]
        self._draw_btn(rect, self._pressed(state, "discover"), color=C_ACCENT)
        label = self.font_regular.render(state.strings.discover_button, True, C_TEXT)
        self.ui_surface.blit(label, label.get_rect(center=pygame.Rect(rect).center))
        self._render_chrome(state, "")
        self._render_bottom_bar()
        return frame

    def render_directory(self, state: AppState) -> pygame.Surface:
        frame = pygame.Surface((self.w, self.h))
        frame.fill(C_BG)
        s = state.strings
        pygame.draw.rect(self.ui_surface, C_PANEL, (0, 0, self.w, TOP_H + TAB_H))
        self._render_chrome(state, s.discover_dxb_directory)

        for i, city in enumerate(CITY_TABS):
            x, y, w, h = self.hitboxes[f"tab_{i}"]
            col = C_TEXT if i == state.tab_index else C_TEXT_SUB
            self._txt(self.font_regular, s.get(city.label_key), col, (x + SP16, y + 14))
            if i == state.tab_index:
                pygame.draw.line(self.ui_surface, C_ACCENT, (x, y + h - 2), (x + w, y + h - 2), 3)

        places = places_for(state.city)
        if not places:
            self._txt(self.font_heading, s.get(state.city.label_key), C_TEXT, (SP24, TOP_H + TAB_H + SP24))
        for i, place in enumerate(places):
            x, y, w, h = self.hitboxes[f"place_{i}"]
            img_h = w * 9 // 16
            img = self._load_image(place.image, (w, img_h)) or self._placeholder((w, img_h))
            frame.blit(img, (x, y))
            self._heart((x, y + img_h + 10), place.title_key in state.favorites)
            self._txt(self.font_regular, s.get(place.title_key), C_TEXT, (x + 26, y + img_h + 8))
            self._txt_wrapped(self.font_regular, s.get(place.description_key), C_TEXT_SUB,
                              (x, y + img_h + 34), w)
        self._render_bottom_bar(backdrop=True)
        return frame

    def render_detail(self, state: AppState, offset: ParallaxOffset) -> pygame.Surface:
        frame = pygame.Surface((self.w, self.h))
        frame.fill(C_BG)
        detail = state.detail
        s = state.strings

        lx, ly, lw, lh = layer_rect(self.w, self.header_h, offset)
        header = pygame.Surface((self.w, self.header_h))
        image = self._load_image(detail.image if detail else None, (lw, lh))
        header.blit(image or self._placeholder((lw, lh)), (lx, ly))
        missing = detail.image_label(s) if detail else s.no_image_found
        if missing:
            self._txt(self.font_regular, missing, C_TEXT_SUB, (SP24, self.header_h // 2))
        pygame.draw.polygon(header, C_BG, curve_mask_polygon(self.w, self.header_h))
        frame.blit(header, (0, 0))

        title = detail.title(s) if detail else s.no_title
        self._render_chrome(state, "")
        fx, fy, _, _ = self.hitboxes["favorite"]
        is_fav = bool(detail and detail.title_key in state.favorites)
        self._heart((fx + 8, fy + 14), is_fav)
        self._txt(self.font_heading, title, C_TEXT, (fx + 40, fy + 8))
        desc = detail.description(s) if detail else s.empty_description
        self._txt_wrapped(self.font_regular, desc, C_TEXT_SUB, (SP16, fy + HIT_MIN + SP12), self.w - 2 * SP16)
        return frame

    def render_toast(self, state: AppState):
        if state.toast:
            label = self.font_regular.render(state.toast, True, C_TEXT)
            box = label.get_rect(center=(self.w // 2, self.h - 64)).inflate(SP24, SP12)
            pygame.draw.rect(self.ui_surface, C_PANEL, box, border_radius=RADIUS)
            self.ui_surface.blit(label, label.get_rect(center=box.center))

    def compose(self, state: AppState, offset: ParallaxOffset = ZERO_OFFSET) -> Tuple[pygame.Surface, Dict[str, Rect]]:
        start = time.perf_counter()
        self.ui_surface.fill((0, 0, 0, 0))
        self.hitboxes = self.build_hitboxes(state)
        if state.scene == Scene.DETAIL:
            frame = self.render_detail(state, offset)
        elif state.scene == Scene.DIRECTORY:
            frame = self.render_directory(state)
        else:
            frame = self.render_home(state)
        self.render_toast(state)
        frame.blit(self.ui_surface, (0, 0))
        self.last_frame_stats = {
            "frame_ms": (time.perf_counter() - start) * 1000.0,
            "dirty": len(state.dirty_rects),
        }
        return frame, self.hitboxes


class ViewportMapper:
    """Map window coordinates to the fixed internal canvas with letterboxing."""

    def __init__(self, internal_size=(480, 800)):
        self.iw, self.ih = internal_size
        self.view = pygame.Rect(0, 0, self.iw, self.ih)

    def update(self, out_w: int, out_h: int):
        scale = min(out_w / self.iw, out_h / self.ih)
        w, h = int(self.iw * scale), int(self.ih * scale)
        self.view = pygame.Rect((out_w - w) // 2, (out_h - h) // 2, w, h)

    def to_internal(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        if self.view.w <= 0 or self.view.h <= 0:
            return 0, 0
        x, y = pos
        nx = int((x - self.view.x) * self.iw / self.view.w)
        ny = int((y - self.view.y) * self.ih / self.view.h)
        return max(0, min(self.iw - 1, nx)), max(0, min(self.ih - 1, ny))

    def blit_scaled(self, screen: pygame.Surface, surface: pygame.Surface):
        if self.view.size == surface.get_size():
            screen.blit(surface, self.view.topleft)
            return
        screen.fill(C_BG)
        screen.blit(pygame.transform.smoothscale(surface, self.view.size), self.view.topleft)

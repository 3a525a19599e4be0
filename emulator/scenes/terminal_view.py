from __future__ import annotations

import logging
import re
from typing import List, Optional

import pygame

from emulator.terminal import DemoTerminal
from termui.clipboard import PygameClipboard
from termui.cursors import CursorManager
from termui.input_router import PointerDispatcher
from termui.pointer.encoder import UnsupportedProtocolMode
from termui.pointer.types import Action, Modifier, MouseButton
from termui.settings import AppCfg, TerminalCfg
from termui.ui.geometry import Rectangle
from termui.ui.scrollbar import ScrollbarController, ScrollbarPainter
from termui.ui.widgets.viewport import TerminalViewport

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"https?://[^\s<>\"']+")

# pygame button number -> terminal button; 4/5 are the legacy wheel buttons
_BUTTONS = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
}


def pygame_modifiers(mods: int) -> Modifier:
    out = Modifier.NONE
    if mods & pygame.KMOD_SHIFT:
        out |= Modifier.SHIFT
    if mods & pygame.KMOD_CTRL:
        out |= Modifier.CONTROL
    if mods & pygame.KMOD_ALT:
        out |= Modifier.ALT
    if mods & pygame.KMOD_META:
        out |= Modifier.SUPER
    return out


def demo_lines(cfg: TerminalCfg) -> List[str]:
    lines = list(cfg.banner)
    for i in range(1, max(0, cfg.scrollback_lines - len(lines)) + 1):
        lines.append(f"{i:4d}  the quick brown fox jumps over the lazy dog")
    return lines


class TerminalView:
    """
    Lays out the text viewport and the scrollbar, feeds pygame mouse events
    to the PointerDispatcher and draws the demo terminal.
    """
    def __init__(self, cfg: AppCfg, size: tuple[int, int], terminal: Optional[DemoTerminal] = None):
        self.cfg = cfg
        self.theme = cfg.theme
        th = self.theme

        if th.font_path:
            self.font = pygame.font.Font(th.font_path, th.font_size)
        else:
            self.font = pygame.font.SysFont("monospace", th.font_size)

        self.terminal = terminal or DemoTerminal(
            demo_lines(cfg.terminal),
            mouse_mode=cfg.terminal.mouse_mode,
            max_lines=cfg.terminal.scrollback_lines,
        )
        self.cursors = CursorManager()
        self.viewport = TerminalViewport(
            self.terminal,
            clipboard=PygameClipboard(),
            set_cursor=self.cursors.set,
            copy_and_paste_with_mouse=cfg.input.copy_and_paste_with_mouse,
            scroll_wheel_lines=cfg.input.scroll_wheel_lines,
            multi_click_window=cfg.input.multi_click_ms / 1000.0,
        )
        self.scrollbar = ScrollbarController(self.terminal, width=th.scrollbar.width)
        # hit-test order: text area first, then the scrollbar
        self.dispatcher = PointerDispatcher(self.viewport, self.scrollbar, dpi_scale=cfg.window.dpi_scale)

        self.on_resize(*size)

    # ----- layout -----
    def on_resize(self, w: int, h: int) -> None:
        # layout and drawing happen in logical units, the same space the
        # dispatcher maps the pointer into; draw() scales the frame up
        lw, lh = self.logical_size(w, h)
        self.scrollbar.resize(lw, lh)

        t, r, b, l = self.theme.padding
        area = Rectangle(l, t, max(l, self.scrollbar.rect.left - r), max(t, lh - b))
        cell_w = self.font.size("M")[0]
        cell_h = self.font.get_linesize()
        self.viewport.set_area(area, cell_w, cell_h)
        self.terminal.set_rows(int(area.height() // self.viewport.cell_height))
        self.sync_scrollbar()

    def logical_size(self, w: int, h: int) -> tuple[int, int]:
        scale = self.dispatcher.dpi_scale
        return max(1, int(w / scale)), max(1, int(h / scale))

    def sync_scrollbar(self) -> None:
        self.scrollbar.set_position(*self.terminal.scroll_extent())

    # ----- input -----
    def handle_event(self, e: pygame.event.Event) -> bool:
        try:
            return self._route(e)
        except UnsupportedProtocolMode as err:
            # dispatcher already dropped the capture; make the failure visible
            logger.error("%s; mouse event not delivered to the program", err)
            return True
        finally:
            self.sync_scrollbar()

    def _route(self, e: pygame.event.Event) -> bool:
        if e.type == pygame.VIDEORESIZE:
            self.on_resize(e.w, e.h)
            return True

        if e.type == pygame.MOUSEMOTION:
            self.dispatcher.on_move(*e.pos)
            return True

        if e.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            button = _BUTTONS.get(e.button)
            if button is None:
                return False
            action = Action.PRESS if e.type == pygame.MOUSEBUTTONDOWN else Action.RELEASE
            mods = pygame_modifiers(pygame.key.get_mods())
            self.dispatcher.on_button(button, action, mods, pos=e.pos)
            return True

        if e.type == pygame.MOUSEWHEEL:
            self.viewport.on_wheel(e.y)
            return True

        return False

    def update(self, dt: float) -> None:
        self.sync_scrollbar()

    # ----- draw -----
    def draw(self, surface: pygame.Surface) -> None:
        if self.dispatcher.dpi_scale == 1.0:
            self._draw_frame(surface)
            return
        frame = pygame.Surface(self.logical_size(*surface.get_size()), 0, surface)
        self._draw_frame(frame)
        pygame.transform.scale(frame, surface.get_size(), surface)

    def _draw_frame(self, surface: pygame.Surface) -> None:
        th = self.theme
        surface.fill(th.bg_rgb)

        vp = self.viewport
        buf = self.terminal.active_buffer()
        cw, ch = vp.cell_width, vp.cell_height
        x0, y0 = vp.area.left, vp.area.top

        self._draw_selection(surface)
        for row, text in enumerate(buf.visible_lines()):
            y = y0 + row * ch
            surface.blit(self.font.render(text, True, th.text_rgb), (x0, y))
            for m in _URL_RE.finditer(text):
                ux = x0 + m.start() * cw
                uy = y + ch - 2
                pygame.draw.line(surface, th.url_rgb, (ux, uy), (x0 + m.end() * cw, uy), 1)

        ScrollbarPainter.draw(surface, self.scrollbar, th.scrollbar)
        if vp.overlay:
            self._draw_overlay(surface, vp.overlay)

    def _draw_selection(self, surface: pygame.Surface) -> None:
        buf = self.terminal.active_buffer()
        rng = buf.selected_range()
        if rng is None:
            return
        vp = self.viewport
        cw, ch = vp.cell_width, vp.cell_height
        (l0, c0), (l1, c1) = rng
        layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for line in range(max(l0, buf.top), min(l1, buf.top + buf.rows - 1) + 1):
            start = c0 if line == l0 else 0
            end = c1 if line == l1 else len(buf.line_at(line - buf.top))
            if end <= start:
                continue
            rect = pygame.Rect(
                int(vp.area.left + start * cw), int(vp.area.top + (line - buf.top) * ch),
                int((end - start) * cw), int(ch),
            )
            layer.fill(self.theme.selection_rgba, rect)
        surface.blit(layer, (0, 0))

    def _draw_overlay(self, surface: pygame.Surface, text: str) -> None:
        st = self.theme.overlay
        label = self.font.render(text, True, st.text_rgb)
        mx, my = self.dispatcher.pointer
        box = label.get_rect()
        box.inflate_ip(st.pad_px * 2, st.pad_px * 2)
        box.topleft = (int(mx) + 12, int(my) + 12)
        box.clamp_ip(surface.get_rect())

        panel = pygame.Surface(box.size, pygame.SRCALPHA)
        pygame.draw.rect(panel, st.bg_rgba, panel.get_rect(), border_radius=st.radius)
        surface.blit(panel, box.topleft)
        pygame.draw.rect(surface, st.border_rgb, box, width=1, border_radius=st.radius)
        surface.blit(label, (box.x + st.pad_px, box.y + st.pad_px))

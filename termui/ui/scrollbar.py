from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import pygame

from termui.pointer.types import Action, Modifier, MouseButton
from termui.terminal import Terminal
from termui.ui.geometry import Rectangle
from termui.ui.scroll_model import ScrollbarState
from termui.ui.style import ScrollbarStyle

logger = logging.getLogger(__name__)

DEFAULT_SCROLLBAR_WIDTH = 20


class ScrollbarPart(Enum):
    UPPER_ARROW = "upper_arrow"
    UPPER_SPACE = "upper_space"     # between the upper arrow and the thumb
    THUMB = "thumb"
    BOTTOM_SPACE = "bottom_space"   # between the thumb and the bottom arrow
    BOTTOM_ARROW = "bottom_arrow"


@dataclass
class DragSession:
    start_position: int         # scroll position when the drag started
    start_thumb_top: float      # thumb top (control-local) when the drag started
    pointer_offset: float       # y offset of the grab point inside the thumb
    cumulative_delta: int = 0   # lines already emitted during this drag


class ScrollbarController:
    """
    Vertical scrollbar at the right edge of the window.

    Geometry:
      - `rect` is window-relative; arrows/thumb are relative to `rect`.
      - Arrows are squares with side = control width, thumb is the same square.
      - Thumb top interpolates linearly from just under the upper arrow
        (position 0) to just above the bottom arrow (position max).

    Pressing an arrow scrolls one line, pressing the space around the thumb
    scrolls a page, and dragging the thumb scrolls by however many lines the
    thumb has travelled since the drag began.
    """
    def __init__(self, terminal: Terminal, width: int = DEFAULT_SCROLLBAR_WIDTH):
        self.terminal = terminal
        self.width = max(1, int(width))
        self.state = ScrollbarState()

        self.rect = Rectangle()
        self.upper_arrow = Rectangle()
        self.bottom_arrow = Rectangle()
        self.thumb = Rectangle()

        self.drag: Optional[DragSession] = None
        self.recalc_zones()

    # ----- layout -----
    def resize(self, container_width: float, container_height: float, dpi_scale: float = 1.0) -> None:
        scale = dpi_scale if dpi_scale > 0 else 1.0
        self.rect = Rectangle(
            left=float(container_width) - self.width * scale,
            top=1.0,
            right=float(container_width),
            bottom=float(container_height) - 1.0,
        )
        self.recalc_zones()

    def set_position(self, max_position: int, position: int) -> None:
        self.state.set(max_position, position)
        self.recalc_zones()

    def recalc_zones(self) -> None:
        w = self.rect.width()
        h = self.rect.height()
        arrow_h = w

        self.upper_arrow = Rectangle(0.0, 0.0, w, arrow_h)
        self.bottom_arrow = Rectangle(0.0, h - arrow_h, w, h)

        thumb_h = w
        thumb_top = arrow_h
        if self.state.max_position > 0:
            thumb_top += self.state.position * (h - thumb_h - arrow_h * 2) / self.state.max_position
        self.thumb = Rectangle(0.0, thumb_top, w, thumb_top + thumb_h)

    @property
    def position(self) -> int:
        return self.state.position

    @property
    def max_position(self) -> int:
        return self.state.max_position

    @property
    def dragging(self) -> bool:
        return self.drag is not None

    def zones(self) -> Dict[ScrollbarPart, Rectangle]:
        """The five parts in window coordinates, for drawing."""
        ox, oy = self.rect.left, self.rect.top
        return {
            ScrollbarPart.UPPER_ARROW: self.upper_arrow.translated(ox, oy),
            ScrollbarPart.UPPER_SPACE: self._upper_space().translated(ox, oy),
            ScrollbarPart.THUMB: self.thumb.translated(ox, oy),
            ScrollbarPart.BOTTOM_SPACE: self._bottom_space().translated(ox, oy),
            ScrollbarPart.BOTTOM_ARROW: self.bottom_arrow.translated(ox, oy),
        }

    # ----- hit testing -----
    def contains(self, px: float, py: float) -> bool:
        return self.rect.contains(px, py)

    def hit_test(self, px: float, py: float) -> ScrollbarPart:
        x = px - self.rect.left
        y = py - self.rect.top

        if self.upper_arrow.contains(x, y):
            return ScrollbarPart.UPPER_ARROW
        if self.bottom_arrow.contains(x, y):
            return ScrollbarPart.BOTTOM_ARROW

        result = ScrollbarPart.THUMB  # anything unmatched in the track counts as thumb
        if self._upper_space().contains(x, y):
            result = ScrollbarPart.UPPER_SPACE
        if self._bottom_space().contains(x, y):
            result = ScrollbarPart.BOTTOM_SPACE
        return result

    # ----- interaction -----
    def on_press(self, part: ScrollbarPart, py: float) -> None:
        if part is ScrollbarPart.UPPER_ARROW:
            self.terminal.screen_scroll_up(1)
        elif part is ScrollbarPart.UPPER_SPACE:
            self.terminal.scroll_page_up()
        elif part is ScrollbarPart.THUMB:
            self.drag = DragSession(
                start_position=self.state.position,
                start_thumb_top=self.thumb.top,
                pointer_offset=(py - self.rect.top) - self.thumb.top,
            )
        elif part is ScrollbarPart.BOTTOM_SPACE:
            self.terminal.scroll_page_down()
        elif part is ScrollbarPart.BOTTOM_ARROW:
            self.terminal.screen_scroll_down(1)

    def on_release(self) -> None:
        self.drag = None

    def on_drag(self, py: float) -> None:
        d = self.drag
        if d is None:
            return

        min_top = self.upper_arrow.bottom
        max_top = self.bottom_arrow.top - self.thumb.height()
        travel = max_top - min_top
        if travel <= 0:
            return

        new_top = (py - self.rect.top) - d.pointer_offset
        # inverse of recalc_zones(), relative to where the drag started
        delta = int(self.state.max_position * ((new_top - min_top) - (d.start_thumb_top - min_top)) / travel)

        if delta > d.cumulative_delta:
            lines = delta - d.cumulative_delta
            logger.debug("old position: %d, new position delta: %d, scroll down %d lines",
                         self.state.position, delta, lines)
            self.terminal.screen_scroll_down(lines)
            d.cumulative_delta = delta
        elif delta < d.cumulative_delta:
            lines = d.cumulative_delta - delta
            logger.debug("old position: %d, new position delta: %d, scroll up %d lines",
                         self.state.position, delta, lines)
            self.terminal.screen_scroll_up(lines)
            d.cumulative_delta = delta

        self.recalc_zones()
        logger.debug("new thumb top: %.1f, actual thumb top: %.1f, position: %d",
                     new_top, self.thumb.top, self.state.position)

    # ----- pointer handler -----
    def on_button(self, button: MouseButton, action: Action, modifiers: Modifier, px: float, py: float) -> None:
        if button != MouseButton.LEFT:
            return
        if action is Action.PRESS:
            self.on_press(self.hit_test(px, py), py)
        elif action is Action.RELEASE and self.drag is not None:
            self.on_release()

    def on_move(self, px: float, py: float) -> None:
        if self.drag is not None:
            self.on_drag(py)

    # ----- helpers -----
    def _upper_space(self) -> Rectangle:
        top = self.upper_arrow.bottom
        return Rectangle(self.thumb.left, top, self.thumb.right, max(top, self.thumb.top))

    def _bottom_space(self) -> Rectangle:
        top = self.thumb.bottom
        return Rectangle(self.thumb.left, top, self.thumb.right, max(top, self.bottom_arrow.top))


class ScrollbarPainter:
    """
    Stateless drawer for the scrollbar: border, two arrow triangles, thumb.
    """
    @staticmethod
    def draw(layer: pygame.Surface, sb: ScrollbarController, style: ScrollbarStyle) -> None:
        r = sb.rect
        if r.width() <= 0 or r.height() <= 0:
            return

        zones = sb.zones()
        pygame.draw.rect(layer, style.border_color, _to_pygame(r), width=style.border_px)

        pad = style.arrow_inset_px
        up = zones[ScrollbarPart.UPPER_ARROW]
        pygame.draw.polygon(layer, style.arrow_color, [
            (up.left + pad, up.bottom - pad),
            (up.left + up.width() / 2.0, up.top + pad),
            (up.right - pad, up.bottom - pad),
        ])
        down = zones[ScrollbarPart.BOTTOM_ARROW]
        pygame.draw.polygon(layer, style.arrow_color, [
            (down.left + pad, down.top + pad),
            (down.left + down.width() / 2.0, down.bottom - pad),
            (down.right - pad, down.top + pad),
        ])

        color = style.drag_thumb_color if sb.dragging else style.thumb_color
        pygame.draw.rect(layer, color, _to_pygame(zones[ScrollbarPart.THUMB]))


def _to_pygame(r: Rectangle) -> pygame.Rect:
    return pygame.Rect(int(r.left), int(r.top), max(0, int(round(r.width()))), max(0, int(round(r.height()))))

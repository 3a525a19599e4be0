"""
The terminal's main text area as a pointer target.

Every button event is first handled locally (selection, clipboard, URL
opening) and then, if the program running in the terminal enabled mouse
reporting, encoded and written to it.

Public API:
  set_area(rect, cell_width, cell_height)
  cell_at(px, py) -> (col, row)
  contains(px, py) / on_move(px, py) / on_button(...)   pointer handler
  on_wheel(dy)
"""
from __future__ import annotations

import logging
import math
import time
import webbrowser
from typing import Callable, Optional

from termui.pointer.encoder import encode
from termui.pointer.types import Action, Modifier, MouseButton, PointerEvent
from termui.terminal import Clipboard, Terminal
from termui.ui.clicks import DEFAULT_MULTI_CLICK_WINDOW, ClickClassifier, selection_mode_for
from termui.ui.geometry import Rectangle

logger = logging.getLogger(__name__)


class TerminalViewport:
    def __init__(
        self,
        terminal: Terminal,
        *,
        clipboard: Optional[Clipboard] = None,
        open_url: Callable[[str], object] = webbrowser.open,
        set_cursor: Optional[Callable[[str], None]] = None,
        copy_and_paste_with_mouse: bool = True,
        scroll_wheel_lines: int = 1,
        multi_click_window: float = DEFAULT_MULTI_CLICK_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.terminal = terminal
        self.clipboard = clipboard
        self.open_url = open_url
        self.set_cursor = set_cursor
        self.copy_and_paste_with_mouse = copy_and_paste_with_mouse
        self.scroll_wheel_lines = max(1, int(scroll_wheel_lines))
        self.clicks = ClickClassifier(multi_click_window)
        self._clock = clock

        self.area = Rectangle()
        self.cell_width = 1.0
        self.cell_height = 1.0

        self.overlay: Optional[str] = None  # hint text shown over the viewport
        self.mouse_down = False
        self._moved_since_press = False

    # ---------- layout ----------
    def set_area(self, rect: Rectangle, cell_width: float, cell_height: float) -> None:
        self.area = rect
        self.cell_width = max(1.0, float(cell_width))
        self.cell_height = max(1.0, float(cell_height))

    def contains(self, px: float, py: float) -> bool:
        return self.area.contains(px, py)

    def cell_at(self, px: float, py: float) -> tuple[int, int]:
        x = math.floor((px - self.area.left) / self.cell_width)
        y = math.floor((py - self.area.top) / self.cell_height)
        return max(0, x), max(0, y)

    def set_overlay(self, text: Optional[str]) -> None:
        self.overlay = text

    # ---------- pointer handler ----------
    def on_move(self, px: float, py: float) -> None:
        x, y = self.cell_at(px, py)
        buf = self.terminal.active_buffer()

        if self.mouse_down:
            buf.extend_selection(x, y, False)
        else:
            self.set_overlay(buf.get_hint_at_position(x, y))

        if self.set_cursor is not None:
            self.set_cursor("hand" if buf.get_url_at_position(x, y) else "arrow")

    def on_button(self, button: MouseButton, action: Action, modifiers: Modifier, px: float, py: float) -> None:
        if self.overlay is not None:
            # a visible hint swallows clicks; right release dismisses it
            if button == MouseButton.RIGHT and action is Action.RELEASE:
                self.set_overlay(None)
            return

        # handle locally first: url clicking, text selection etc.
        x, y = self.cell_at(px, py)
        if button == MouseButton.LEFT:
            if action is Action.PRESS:
                self._left_press(x, y)
            elif action is Action.RELEASE:
                self._left_release(x, y)
        elif button == MouseButton.RIGHT and action is Action.PRESS:
            self._right_press()

        self._report(PointerEvent(px, py, button, action, modifiers), x, y)

    def on_wheel(self, dy: float) -> None:
        if dy > 0:
            self.terminal.screen_scroll_up(self.scroll_wheel_lines)
        elif dy < 0:
            self.terminal.screen_scroll_down(self.scroll_wheel_lines)

    # ---------- helpers ----------
    def _left_press(self, x: int, y: int) -> None:
        self.mouse_down = True
        count = self.clicks.classify(x, y, self._clock())
        self.terminal.active_buffer().start_selection(x, y, selection_mode_for(count))
        self._moved_since_press = False

    def _left_release(self, x: int, y: int) -> None:
        buf = self.terminal.active_buffer()
        self.mouse_down = False

        if (x, y) != self.clicks.last_cell:
            self._moved_since_press = True
        if self.clicks.count != 1 or self._moved_since_press:
            buf.extend_selection(x, y, True)

        # copy to clipboard *or* open the URL, never both
        if self.copy_and_paste_with_mouse and self.clipboard is not None:
            text = buf.get_selected_text()
            if text:
                self.clipboard.put_text(text)
                return

        url = buf.get_url_at_position(x, y)
        if url:
            logger.info("Opening %s", url)
            self.open_url(url)

    def _right_press(self) -> None:
        if not self.copy_and_paste_with_mouse or self.clipboard is None:
            return
        text = self.clipboard.get_text()
        if text is None:
            return
        self.terminal.active_buffer().clear_selection()
        self.terminal.paste(text.encode("utf-8"))

    def _report(self, event: PointerEvent, x: int, y: int) -> None:
        packet = encode(self.terminal.get_mouse_mode(), event, x, y)
        if packet is None:
            return
        logger.info("Sending mouse packet: %r", packet)
        self.terminal.write(packet)

"""
A stand-in terminal for the demo window and the tests.

No pty, no escape-sequence parsing: the screen buffer is a list of text
lines with a scroll position, and bytes "written to the program" are just
recorded. Enough to drive selection, URL clicks, hints and scrolling.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from termui.pointer.types import MouseTrackingMode
from termui.terminal import SelectionMode

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"https?://[^\s<>\"']+")
_HEX_COLOUR_RE = re.compile(r"#([0-9a-fA-F]{6})\b")
_WORD_RE = re.compile(r"\w")

Cell = Tuple[int, int]  # (line, col) in buffer coordinates


@dataclass
class _Selection:
    anchor: Cell
    end: Optional[Cell]         # None until extended (a bare click selects nothing)
    mode: SelectionMode
    complete: bool = False


@dataclass
class ScreenBuffer:
    lines: List[str] = field(default_factory=list)
    rows: int = 24              # visible lines (page size)
    top: int = 0                # first visible line
    max_lines: Optional[int] = None
    selection: Optional[_Selection] = None

    # --- scrolling ------------------------------------------------------------
    def max_top(self) -> int:
        return max(0, len(self.lines) - self.rows)

    def scroll_by(self, lines: int) -> None:
        self.top = max(0, min(self.max_top(), self.top + lines))

    def append(self, text: str) -> None:
        at_bottom = self.top >= self.max_top()
        self.lines.extend(text.split("\n"))
        if self.max_lines is not None and len(self.lines) > self.max_lines:
            drop = len(self.lines) - self.max_lines
            del self.lines[:drop]
            self.top = max(0, self.top - drop)
        if at_bottom:
            self.top = self.max_top()

    def visible_lines(self) -> List[str]:
        return self.lines[self.top:self.top + self.rows]

    def line_at(self, y: int) -> str:
        idx = self.top + y
        if 0 <= idx < len(self.lines):
            return self.lines[idx]
        return ""

    # --- selection ------------------------------------------------------------
    def start_selection(self, x: int, y: int, mode: SelectionMode) -> None:
        cell = (self.top + y, x)
        end = None if mode is SelectionMode.CHAR else cell
        self.selection = _Selection(anchor=cell, end=end, mode=mode)

    def extend_selection(self, x: int, y: int, complete: bool) -> None:
        if self.selection is None:
            return
        self.selection.end = (self.top + y, x)
        self.selection.complete = complete

    def clear_selection(self) -> None:
        self.selection = None

    def selected_range(self) -> Optional[Tuple[Cell, Cell]]:
        """ Normalised [start, end) range after word/line expansion. """
        sel = self.selection
        if sel is None or sel.end is None:
            return None
        start, end = sorted((sel.anchor, sel.end))
        if sel.mode is SelectionMode.LINE:
            return (start[0], 0), (end[0], len(self._line(end[0])))
        if sel.mode is SelectionMode.WORD:
            return (start[0], self._word_start(*start)), (end[0], self._word_end(*end))
        return start, (end[0], end[1] + 1)

    def get_selected_text(self) -> str:
        rng = self.selected_range()
        if rng is None:
            return ""
        (l0, c0), (l1, c1) = rng
        if l0 == l1:
            return self._line(l0)[c0:c1]
        parts = [self._line(l0)[c0:]]
        parts.extend(self._line(i) for i in range(l0 + 1, l1))
        parts.append(self._line(l1)[:c1])
        return "\n".join(parts)

    # --- detection --------------------------------------------------------------
    def get_url_at_position(self, x: int, y: int) -> str:
        for m in _URL_RE.finditer(self.line_at(y)):
            if m.start() <= x < m.end():
                return m.group(0).rstrip(".,;:)")
        return ""

    def get_hint_at_position(self, x: int, y: int) -> Optional[str]:
        for m in _HEX_COLOUR_RE.finditer(self.line_at(y)):
            if m.start() <= x < m.end():
                v = int(m.group(1), 16)
                return f"rgb({(v >> 16) & 0xFF}, {(v >> 8) & 0xFF}, {v & 0xFF})"
        return None

    # --- helpers ------------------------------------------------------------------
    def _line(self, idx: int) -> str:
        return self.lines[idx] if 0 <= idx < len(self.lines) else ""

    def _word_start(self, line: int, col: int) -> int:
        text = self._line(line)
        col = min(col, len(text))
        while col > 0 and _WORD_RE.match(text[col - 1]):
            col -= 1
        return col

    def _word_end(self, line: int, col: int) -> int:
        text = self._line(line)
        if col >= len(text):
            return len(text)
        if not _WORD_RE.match(text[col]):
            return col + 1
        while col < len(text) and _WORD_RE.match(text[col]):
            col += 1
        return col


class DemoTerminal:
    """
    Terminal collaborator backed by a ScreenBuffer.
    `sent` keeps every byte string written towards the hosted program.
    """
    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        rows: int = 24,
        mouse_mode: MouseTrackingMode = MouseTrackingMode.NONE,
        max_lines: Optional[int] = None,
    ) -> None:
        self.buffer = ScreenBuffer(rows=max(1, rows), max_lines=max_lines)
        for line in lines:
            self.buffer.append(line)
        self.buffer.top = 0
        self.mouse_mode = mouse_mode
        self.sent: List[bytes] = []

    # --- Terminal protocol ------------------------------------------------------
    def screen_scroll_up(self, lines: int) -> None:
        self.buffer.scroll_by(-max(0, lines))

    def screen_scroll_down(self, lines: int) -> None:
        self.buffer.scroll_by(max(0, lines))

    def scroll_page_up(self) -> None:
        self.buffer.scroll_by(-self.buffer.rows)

    def scroll_page_down(self) -> None:
        self.buffer.scroll_by(self.buffer.rows)

    def get_mouse_mode(self) -> MouseTrackingMode:
        return self.mouse_mode

    def write(self, data: bytes) -> None:
        logger.debug("-> program: %r", data)
        self.sent.append(bytes(data))

    def paste(self, data: bytes) -> None:
        self.write(data)
        self.buffer.append(data.decode("utf-8", errors="replace"))

    def active_buffer(self) -> ScreenBuffer:
        return self.buffer

    # --- host helpers -------------------------------------------------------------
    def set_mouse_mode(self, mode: MouseTrackingMode) -> None:
        logger.info("Mouse tracking mode: %s", mode.name)
        self.mouse_mode = mode

    def set_rows(self, rows: int) -> None:
        self.buffer.rows = max(1, int(rows))
        self.buffer.scroll_by(0)

    def scroll_extent(self) -> Tuple[int, int]:
        """ (max position, position) for the scrollbar. """
        return self.buffer.max_top(), self.buffer.top

from __future__ import annotations
from enum import Enum
from typing import Optional, Protocol

from termui.pointer.types import MouseTrackingMode


class SelectionMode(Enum):
    CHAR = "char"
    WORD = "word"
    LINE = "line"


# Minimal protocols: whatever owns the screen buffer and the pty implements these
class Buffer(Protocol):
    def start_selection(self, x: int, y: int, mode: SelectionMode) -> None: ...
    def extend_selection(self, x: int, y: int, complete: bool) -> None: ...
    def clear_selection(self) -> None: ...
    def get_selected_text(self) -> str: ...
    def get_url_at_position(self, x: int, y: int) -> str: ...
    def get_hint_at_position(self, x: int, y: int) -> Optional[str]: ...


class Terminal(Protocol):
    def screen_scroll_up(self, lines: int) -> None: ...
    def screen_scroll_down(self, lines: int) -> None: ...
    def scroll_page_up(self) -> None: ...
    def scroll_page_down(self) -> None: ...
    def get_mouse_mode(self) -> MouseTrackingMode: ...
    def write(self, data: bytes) -> None: ...
    def paste(self, data: bytes) -> None: ...
    def active_buffer(self) -> Buffer: ...


class Clipboard(Protocol):
    def get_text(self) -> Optional[str]: ...
    def put_text(self, text: str) -> None: ...

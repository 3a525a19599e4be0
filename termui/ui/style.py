from dataclasses import dataclass, field
from typing import Optional

@dataclass
class ScrollbarStyle:
    width: int = 20                 # logical pixels
    border_px: int = 1
    border_color: tuple[int, int, int] = (128, 128, 128)
    arrow_color: tuple[int, int, int] = (128, 128, 128)
    thumb_color: tuple[int, int, int] = (128, 128, 128)
    drag_thumb_color: tuple[int, int, int] = (170, 170, 170)
    arrow_inset_px: int = 4         # triangle padding inside the square arrow zone

@dataclass
class OverlayStyle:
    bg_rgba: tuple[int, int, int, int] = (30, 34, 40, 235)
    border_rgb: tuple[int, int, int] = (255, 255, 255)
    text_rgb: tuple[int, int, int] = (235, 235, 235)
    pad_px: int = 6
    radius: int = 6

@dataclass
class Theme:
    font_path: Optional[str] = None  # None -> system monospace
    font_size: int = 16
    text_rgb: tuple[int, int, int] = (220, 220, 220)
    bg_rgb: tuple[int, int, int] = (14, 15, 18)
    selection_rgba: tuple[int, int, int, int] = (90, 120, 200, 110)
    url_rgb: tuple[int, int, int] = (120, 170, 255)
    padding: tuple[int, int, int, int] = (4, 4, 4, 4)  # t, r, b, l
    scrollbar: ScrollbarStyle = field(default_factory=ScrollbarStyle)
    overlay: OverlayStyle = field(default_factory=OverlayStyle)

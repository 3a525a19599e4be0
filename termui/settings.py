from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from termui.pointer.types import MouseTrackingMode
from termui.ui.style import Theme

_PROJECT_ROOT = Path(__file__).resolve().parents[1]  # termui/ -> [project root]
DEFAULTS_PATH = _PROJECT_ROOT / "emulator" / "config" / "defaults.yaml"

@dataclass
class WindowCfg:
    width: int = 960
    height: int = 600
    title: str = "termui"
    dpi_scale: float = 1.0

@dataclass
class InputCfg:
    scroll_wheel_lines: int = 1
    multi_click_ms: int = 500               # double/triple click window
    copy_and_paste_with_mouse: bool = True  # left release copies, right press pastes

@dataclass
class TerminalCfg:
    mouse_mode: MouseTrackingMode = MouseTrackingMode.NONE
    scrollback_lines: int = 500
    banner: List[str] = field(default_factory=list)

@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    input: InputCfg = field(default_factory=InputCfg)
    terminal: TerminalCfg = field(default_factory=TerminalCfg)
    theme: Theme = field(default_factory=Theme)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def _mouse_mode(raw: Any, source: str) -> MouseTrackingMode:
    """ Accepts a mode name ("normal", "x10", ...) or its DECSET number. """
    if isinstance(raw, MouseTrackingMode):
        return raw
    if isinstance(raw, bool):
        # yaml reads on/off/yes/no as booleans
        raise ValueError(f"{source}: mouse mode must be a name or a DECSET number, got {raw}")
    if isinstance(raw, int):
        try:
            return MouseTrackingMode(raw)
        except ValueError:
            raise ValueError(f"{source}: unknown mouse mode {raw}") from None
    name = str(raw or "none").strip().upper().replace("-", "_")
    if name == "VT200":
        name = "NORMAL"
    try:
        return MouseTrackingMode[name]
    except KeyError:
        raise ValueError(f"{source}: unknown mouse mode '{raw}'") from None

def load_defaults(path: Optional[str] = None) -> Dict[str, Any]:
    """ Raw YAML mapping; empty when the file does not exist. """
    p = Path(path) if path else DEFAULTS_PATH
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{p}: top level must be a mapping")
    return data

def load_settings(path: Optional[str] = None) -> AppCfg:
    data = load_defaults(path)
    source = str(path or DEFAULTS_PATH)

    banner = _get(data, "terminal.banner", [])
    if isinstance(banner, str):
        banner = banner.splitlines()

    return AppCfg(
        fps=int(_get(data, "fps", 60)),
        log_level=str(_get(data, "log_level", "INFO")).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", 960)),
            height=int(_get(data, "window.height", 600)),
            title=str(_get(data, "window.title", "termui")),
            dpi_scale=float(_get(data, "window.dpi_scale", 1.0)),
        ),
        input=InputCfg(
            scroll_wheel_lines=int(_get(data, "input.scroll_wheel_lines", 1)),
            multi_click_ms=int(_get(data, "input.multi_click_ms", 500)),
            copy_and_paste_with_mouse=bool(_get(data, "input.copy_and_paste_with_mouse", True)),
        ),
        terminal=TerminalCfg(
            mouse_mode=_mouse_mode(_get(data, "terminal.mouse_mode", "none"), source),
            scrollback_lines=int(_get(data, "terminal.scrollback_lines", 500)),
            banner=[str(s) for s in (banner or [])],
        ),
        theme=build_theme_from_defaults(data),
    )

def build_theme_from_defaults(defaults: Dict[str, Any]) -> Theme:
    tdata = defaults.get("theme", {}) or {}
    th = Theme()

    # core
    th.font_path        = tdata.get("font_path", th.font_path)
    th.font_size        = int(tdata.get("font_size", th.font_size))
    th.text_rgb         = tuple(tdata.get("text_rgb", th.text_rgb))
    th.bg_rgb           = tuple(tdata.get("bg_rgb", th.bg_rgb))
    th.selection_rgba   = tuple(tdata.get("selection_rgba", th.selection_rgba))
    th.url_rgb          = tuple(tdata.get("url_rgb", th.url_rgb))
    th.padding          = tuple(tdata.get("padding", th.padding))

    # scrollbar
    sc = tdata.get("scrollbar", {}) or {}
    th.scrollbar.width            = int(sc.get("width", th.scrollbar.width))
    th.scrollbar.border_px        = int(sc.get("border_px", th.scrollbar.border_px))
    th.scrollbar.border_color     = tuple(sc.get("border_color", th.scrollbar.border_color))
    th.scrollbar.arrow_color      = tuple(sc.get("arrow_color", th.scrollbar.arrow_color))
    th.scrollbar.thumb_color      = tuple(sc.get("thumb_color", th.scrollbar.thumb_color))
    th.scrollbar.drag_thumb_color = tuple(sc.get("drag_thumb_color", th.scrollbar.drag_thumb_color))
    th.scrollbar.arrow_inset_px   = int(sc.get("arrow_inset_px", th.scrollbar.arrow_inset_px))

    # hint overlay
    ov = tdata.get("overlay", {}) or {}
    th.overlay.bg_rgba    = tuple(ov.get("bg_rgba", th.overlay.bg_rgba))
    th.overlay.border_rgb = tuple(ov.get("border_rgb", th.overlay.border_rgb))
    th.overlay.text_rgb   = tuple(ov.get("text_rgb", th.overlay.text_rgb))
    th.overlay.pad_px     = int(ov.get("pad_px", th.overlay.pad_px))
    th.overlay.radius     = int(ov.get("radius", th.overlay.radius))

    if th.scrollbar.width <= 0:
        raise ValueError("theme.scrollbar.width must be positive")
    return th

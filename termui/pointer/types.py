from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag


class MouseButton(IntEnum):
    # xterm numbering; this is also the value carried on the wire
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class Action(Enum):
    PRESS = "press"
    RELEASE = "release"
    MOVE = "move"


class Modifier(IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8


class MouseTrackingMode(IntEnum):
    """Mouse reporting modes; values are the DECSET parameters enabling them."""
    NONE = 0
    X10 = 9
    NORMAL = 1000       # a.k.a. VT200
    HIGHLIGHT = 1001
    BUTTON_EVENT = 1002
    ANY_EVENT = 1003


@dataclass(frozen=True)
class PointerEvent:
    px: float                   # window pixels, already DPI-scaled
    py: float
    button: MouseButton | None  # None for plain motion
    action: Action
    modifiers: Modifier = Modifier.NONE

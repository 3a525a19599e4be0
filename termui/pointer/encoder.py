"""
Mouse-reporting escape sequences (xterm legacy encoding).

Every parameter travels as a single character equal to value + 32, and the
upper left cell of the screen is 1,1:

    ESC [ M Cb Cx Cy

X10 (DECSET 9) reports presses only, Cb = button.
Normal tracking (DECSET 1000) reports press and release; the low two bits of
Cb hold the button (3 = release) and the next three bits the modifiers:
4 = Shift, 8 = Meta, 16 = Control.

Highlight (1001), button-event (1002) and any-event (1003) tracking need the
hosted program to talk back to us and are not implemented: asking to encode
for them raises UnsupportedProtocolMode.
"""
from __future__ import annotations

import logging
from typing import Optional

from termui.pointer.types import Action, Modifier, MouseButton, MouseTrackingMode, PointerEvent

logger = logging.getLogger(__name__)

CSI_MOUSE = b"\x1b[M"
PARAM_OFFSET = 32
RELEASE_CODE = 3
MAX_PARAM = 0xFF - PARAM_OFFSET

_MODIFIER_BITS = (
    (Modifier.SHIFT, 4),
    (Modifier.SUPER, 8),
    (Modifier.CONTROL, 16),
)


class UnsupportedProtocolMode(RuntimeError):
    """The running program enabled a mouse mode this terminal cannot honour."""
    def __init__(self, mode) -> None:
        self.mode = mode
        name = getattr(mode, "name", None) or repr(mode)
        super().__init__(f"Mouse tracking mode {name} is not supported")


def encode(mode, event: PointerEvent, cell_x: int, cell_y: int) -> Optional[bytes]:
    """
    Encode `event` at zero-indexed cell (cell_x, cell_y) for `mode`.

    Returns the bytes to send, or None when the mode does not report this
    event (or the legacy encoding cannot represent it). Raises
    UnsupportedProtocolMode for modes that are not implemented.
    """
    try:
        mode = MouseTrackingMode(mode)
    except ValueError:
        raise UnsupportedProtocolMode(mode) from None

    if mode is MouseTrackingMode.NONE:
        return None
    if mode is MouseTrackingMode.X10:
        return _encode_x10(event, cell_x, cell_y)
    if mode is MouseTrackingMode.NORMAL:
        return _encode_normal(event, cell_x, cell_y)
    raise UnsupportedProtocolMode(mode)


def modifier_bits(modifiers: Modifier) -> int:
    bits = 0
    for flag, value in _MODIFIER_BITS:
        if modifiers & flag:
            bits |= value
    return bits


def _encode_x10(event: PointerEvent, cell_x: int, cell_y: int) -> Optional[bytes]:
    if event.action is not Action.PRESS or event.button is None:
        return None
    return _packet(int(event.button), cell_x, cell_y)


def _encode_normal(event: PointerEvent, cell_x: int, cell_y: int) -> Optional[bytes]:
    if event.action is Action.PRESS:
        if event.button not in (MouseButton.LEFT, MouseButton.MIDDLE, MouseButton.RIGHT):
            return None
        cb = int(event.button)
    elif event.action is Action.RELEASE:
        # release does not say which button went up
        cb = RELEASE_CODE
    else:
        return None
    return _packet(cb | modifier_bits(event.modifiers), cell_x, cell_y)


def _packet(cb: int, cell_x: int, cell_y: int) -> Optional[bytes]:
    cx, cy = cell_x + 1, cell_y + 1
    if not all(0 <= v <= MAX_PARAM for v in (cb, cx, cy)):
        logger.debug("Mouse event not representable: cb=%d x=%d y=%d", cb, cx, cy)
        return None
    return CSI_MOUSE + bytes((cb + PARAM_OFFSET, cx + PARAM_OFFSET, cy + PARAM_OFFSET))

from __future__ import annotations
from typing import Optional, Protocol, Tuple

from termui.pointer.types import Action, Modifier, MouseButton

# Minimal protocol, no pygame import here
class PointerHandler(Protocol):
    def contains(self, x: float, y: float) -> bool: ...
    def on_move(self, x: float, y: float) -> None: ...
    def on_button(self, button: MouseButton, action: Action, modifiers: Modifier, x: float, y: float) -> None: ...


class PointerDispatcher:
    """
    Routes pointer events to the widget under the pointer, with capture.

    Rules:
      - Coordinates arrive in device pixels and are divided by the DPI scale.
      - While a widget holds the capture it gets every event, wherever the
        pointer is. Nobody else sees anything.
      - Otherwise the first handler (in constructor order) containing the
        pointer gets the event; a press there captures the pointer for that
        button. No handler under the pointer -> nothing happens.
      - A release is forwarded before the capture is cleared, so the
        capturing widget sees its own release.
    """
    def __init__(self, *handlers: PointerHandler, dpi_scale: float = 1.0) -> None:
        self.handlers = list(handlers)
        self.dpi_scale = 1.0
        self.set_dpi_scale(dpi_scale)
        self.pointer: Tuple[float, float] = (0.0, 0.0)
        self._captured: Optional[PointerHandler] = None
        self._capture_button: Optional[MouseButton] = None

    # --- public API ---------------------------------------------------------
    @property
    def captured(self) -> Optional[PointerHandler]:
        return self._captured

    @property
    def capture_button(self) -> Optional[MouseButton]:
        return self._capture_button

    def set_dpi_scale(self, scale: float) -> None:
        self.dpi_scale = float(scale) if scale and scale > 0 else 1.0

    def scale(self, px: float, py: float) -> Tuple[float, float]:
        return px / self.dpi_scale, py / self.dpi_scale

    def on_move(self, px: float, py: float) -> None:
        x, y = self.pointer = self.scale(px, py)
        target = self._captured or self.handler_at(x, y)
        if target is not None:
            target.on_move(x, y)

    def on_button(
        self,
        button: MouseButton,
        action: Action,
        modifiers: Modifier = Modifier.NONE,
        pos: Optional[Tuple[float, float]] = None,
    ) -> None:
        if pos is not None:
            self.pointer = self.scale(*pos)
        x, y = self.pointer

        if self._captured is not None:
            self._forward(self._captured, button, action, modifiers, x, y)
            if action is Action.RELEASE and button == self._capture_button:
                self.release_capture()
            return

        target = self.handler_at(x, y)
        if target is None:
            return
        if action is Action.PRESS:
            self._capture(target, button)
        self._forward(target, button, action, modifiers, x, y)

    def release_capture(self) -> None:
        self._captured = None
        self._capture_button = None

    def handler_at(self, x: float, y: float) -> Optional[PointerHandler]:
        for h in self.handlers:
            if h.contains(x, y):
                return h
        return None

    # --- helpers ------------------------------------------------------------
    def _capture(self, handler: PointerHandler, button: MouseButton) -> None:
        self._captured = handler
        self._capture_button = button

    def _forward(self, handler: PointerHandler, button, action, modifiers, x, y) -> None:
        try:
            handler.on_button(button, action, modifiers, x, y)
        except Exception:
            # the interaction is over; let the host see why
            self.release_capture()
            raise

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Rectangle:
    """
    Axis-aligned rectangle in pixels.
    Whoever owns it decides the coordinate system (window- or control-relative).
    """
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def __post_init__(self) -> None:
        if self.right < self.left:
            self.left, self.right = self.right, self.left
        if self.bottom < self.top:
            self.top, self.bottom = self.bottom, self.top

    def width(self) -> float:
        return self.right - self.left

    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        # left/top inclusive, right/bottom exclusive
        return self.left <= x < self.right and self.top <= y < self.bottom

    def translated(self, dx: float, dy: float) -> "Rectangle":
        return Rectangle(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)

# --- System cursor cache ------------------------------------------------------

# shape name -> pygame SYSTEM_CURSOR_* attribute
_SHAPES: Dict[str, str] = {
    "arrow": "SYSTEM_CURSOR_ARROW",
    "hand": "SYSTEM_CURSOR_HAND",
}
_cursor_cache: Dict[str, pygame.cursors.Cursor] = {}


def _get_cursor(shape: str) -> Optional[pygame.cursors.Cursor]:
    cached = _cursor_cache.get(shape)
    if cached is not None:
        return cached

    const = getattr(pygame, _SHAPES.get(shape, ""), None)
    if const is None:
        logger.debug("No system cursor for shape '%s'", shape)
        return None
    try:
        cur = pygame.cursors.Cursor(const)
    except pygame.error as e:
        logger.debug("Could not create system cursor '%s': %s", shape, e)
        return None

    _cursor_cache[shape] = cur
    return cur


class CursorManager:
    """
    Switches the window's system cursor, only touching pygame when the
    requested shape actually changes.
    """
    def __init__(self) -> None:
        self.shape: Optional[str] = None

    def set(self, shape: str) -> None:
        if shape == self.shape:
            return
        cur = _get_cursor(shape)
        if cur is None:
            return
        try:
            pygame.mouse.set_cursor(cur)
        except pygame.error as e:
            # headless / no video backend
            logger.debug("Cursor switch to '%s' failed: %s", shape, e)
            return
        self.shape = shape

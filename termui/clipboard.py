from __future__ import annotations

import logging
from typing import Optional

import pygame

logger = logging.getLogger(__name__)


class PygameClipboard:
    """System clipboard through pygame.scrap (needs a display to be open)."""

    def get_text(self) -> Optional[str]:
        try:
            return pygame.scrap.get_text()
        except pygame.error as e:
            logger.warning("Clipboard read failed: %s", e)
            return None

    def put_text(self, text: str) -> None:
        try:
            pygame.scrap.put_text(text)
        except pygame.error as e:
            logger.warning("Clipboard write failed: %s", e)

from __future__ import annotations

import logging

import pygame

from termui.settings import AppCfg
from emulator.scenes.terminal_view import TerminalView

logger = logging.getLogger(__name__)


class TerminalApp:
    """
    Minimal app shell: owns the window and the event pump, and delegates
    input/update/draw to the TerminalView.
    """

    def __init__(self, cfg: AppCfg):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        # Window/display
        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )

        # Core loop
        self.clock = pygame.time.Clock()
        self.running = True

        self.view = TerminalView(cfg, self.screen.get_size())
        logger.info("Window %dx%d, mouse mode %s",
                    cfg.window.width, cfg.window.height, cfg.terminal.mouse_mode.name)

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(self.cfg.fps) / 1000.0

            # ---- event pump -------------------------------------------------
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    self.running = False
                    break

                # App-level resize: update display first, then forward event
                if e.type == pygame.VIDEORESIZE:
                    self._resize_to(e.w, e.h)

                self.view.handle_event(e)

            # ---- update/draw -----------------------------------------------
            self.view.update(dt)
            self.view.draw(self.screen)
            pygame.display.flip()

        pygame.quit()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface at the new size."""
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)

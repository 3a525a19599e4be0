import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from emulator.scenes.terminal_view import TerminalView, demo_lines, pygame_modifiers
from termui.pointer.types import Modifier, MouseTrackingMode
from termui.settings import AppCfg, TerminalCfg, WindowCfg
from termui.ui.scrollbar import ScrollbarPart

SIZE = (400, 300)


class TestHelpers(unittest.TestCase):
    def test_modifiers(self):
        self.assertEqual(pygame_modifiers(0), Modifier.NONE)
        self.assertEqual(pygame_modifiers(pygame.KMOD_LSHIFT), Modifier.SHIFT)
        self.assertEqual(pygame_modifiers(pygame.KMOD_RCTRL | pygame.KMOD_LALT), Modifier.CONTROL | Modifier.ALT)
        self.assertEqual(pygame_modifiers(pygame.KMOD_LMETA), Modifier.SUPER)

    def test_demo_lines(self):
        lines = demo_lines(TerminalCfg(banner=["hi"], scrollback_lines=5))
        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[0], "hi")


class TestTerminalView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        try:
            pygame.display.init()
            pygame.font.init()
            pygame.display.set_mode(SIZE)
        except pygame.error as e:
            raise unittest.SkipTest(f"no pygame display: {e}")

    @classmethod
    def tearDownClass(cls):
        pygame.quit()

    def setUp(self):
        self.view = TerminalView(AppCfg(), SIZE)
        self.term = self.view.terminal

    def press_release(self, pos, button=1):
        self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos))
        self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=button, pos=pos))

    def test_layout(self):
        sb = self.view.scrollbar
        self.assertEqual((sb.rect.left, sb.rect.right), (380, 400))
        self.assertLessEqual(self.view.viewport.area.right, sb.rect.left)
        self.assertGreater(self.term.buffer.rows, 1)
        self.assertEqual(sb.max_position, self.term.buffer.max_top())

    def test_bottom_arrow_scrolls_and_syncs_thumb(self):
        before = self.view.scrollbar.thumb.top
        self.press_release((390, 290))
        self.assertEqual(self.term.buffer.top, 1)
        self.assertEqual(self.view.scrollbar.position, 1)
        self.assertGreater(self.view.scrollbar.thumb.top, before)
        self.assertIsNone(self.view.dispatcher.captured)

    def test_thumb_drag(self):
        sb = self.view.scrollbar
        grab = (390, int(sb.rect.top + sb.thumb.top + 5))
        self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=grab))
        self.view.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(100, grab[1] + 100), rel=(0, 0), buttons=(1, 0, 0)))
        self.assertGreater(self.term.buffer.top, 0)
        self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(100, grab[1] + 100)))
        self.assertFalse(sb.dragging)

    def test_wheel(self):
        self.view.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=-1))
        self.assertEqual(self.term.buffer.top, 1)

    def test_wheel_buttons_are_ignored(self):
        consumed = self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=4, pos=(10, 10)))
        self.assertFalse(consumed)

    def test_unsupported_mode_is_logged_not_raised(self):
        self.term.set_mouse_mode(MouseTrackingMode.HIGHLIGHT)
        with self.assertLogs("emulator.scenes.terminal_view", level="ERROR") as logs:
            self.press_release((20, 20))
        self.assertIn("HIGHLIGHT", logs.output[0])
        self.assertIsNone(self.view.dispatcher.captured)

    def test_normal_mode_reports_clicks(self):
        self.term.set_mouse_mode(MouseTrackingMode.NORMAL)
        self.press_release((self.view.viewport.area.left + 1, self.view.viewport.area.top + 1))
        self.assertEqual(self.term.sent, [b"\x1b[M !!", b"\x1b[M#!!"])

    def test_hover_over_text_is_not_captured(self):
        self.view.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(30, 30), rel=(0, 0), buttons=(0, 0, 0)))
        self.assertEqual(self.view.dispatcher.pointer, (30, 30))
        self.assertIsNone(self.view.dispatcher.captured)
        self.assertIn(self.view.cursors.shape, (None, "arrow"))

    def test_draw_smoke(self):
        surface = pygame.Surface(SIZE)
        self.view.viewport.set_overlay("rgb(1, 2, 3)")
        self.view.draw(surface)


class TestScaledTerminalView(TestTerminalView):
    """Window at twice the logical resolution."""

    def setUp(self):
        self.view = TerminalView(AppCfg(window=WindowCfg(dpi_scale=2.0)), SIZE)
        self.term = self.view.terminal

    def device_centre(self, part):
        r = self.view.scrollbar.zones()[part]
        return int((r.left + r.right)), int((r.top + r.bottom))

    def test_layout(self):
        sb = self.view.scrollbar
        self.assertEqual((sb.rect.left, sb.rect.right, sb.rect.bottom), (180, 200, 149))
        self.assertLessEqual(self.view.viewport.area.right, sb.rect.left)

    def test_bottom_arrow_scrolls_and_syncs_thumb(self):
        self.press_release(self.device_centre(ScrollbarPart.BOTTOM_ARROW))
        self.assertEqual(self.term.buffer.top, 1)
        self.assertIsNone(self.view.dispatcher.captured)

    def test_thumb_drag(self):
        x, y = self.device_centre(ScrollbarPart.THUMB)
        self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(x, y)))
        self.assertTrue(self.view.scrollbar.dragging)
        self.view.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(x, y + 100), rel=(0, 0), buttons=(1, 0, 0)))
        self.assertGreater(self.term.buffer.top, 0)
        self.view.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(x, y + 100)))
        self.assertFalse(self.view.scrollbar.dragging)

    def test_normal_mode_reports_clicks(self):
        self.term.set_mouse_mode(MouseTrackingMode.NORMAL)
        area = self.view.viewport.area
        self.press_release((int(area.left * 2) + 2, int(area.top * 2) + 2))
        self.assertEqual(self.term.sent, [b"\x1b[M !!", b"\x1b[M#!!"])

    def test_hover_over_text_is_not_captured(self):
        self.view.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(60, 60), rel=(0, 0), buttons=(0, 0, 0)))
        self.assertEqual(self.view.dispatcher.pointer, (30, 30))
        self.assertIsNone(self.view.dispatcher.captured)

    def test_arrow_is_drawn_where_clicks_land(self):
        surface = pygame.Surface(SIZE)
        self.view.draw(surface)
        x, y = self.device_centre(ScrollbarPart.BOTTOM_ARROW)
        self.assertEqual(tuple(surface.get_at((x, y)))[:3], self.view.theme.scrollbar.arrow_color)

        self.press_release((x, y))
        self.assertEqual(self.term.buffer.top, 1)


if __name__ == "__main__":
    unittest.main()

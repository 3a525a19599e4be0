import os
import tempfile
import unittest

from termui.pointer.types import MouseTrackingMode
from termui.settings import DEFAULTS_PATH, build_theme_from_defaults, load_settings


class TestSettings(unittest.TestCase):
    def _write(self, text):
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_missing_file_gives_defaults(self):
        cfg = load_settings(os.path.join(tempfile.gettempdir(), "does-not-exist-termui.yaml"))
        self.assertEqual(cfg.fps, 60)
        self.assertEqual(cfg.input.multi_click_ms, 500)
        self.assertEqual(cfg.input.scroll_wheel_lines, 1)
        self.assertTrue(cfg.input.copy_and_paste_with_mouse)
        self.assertIs(cfg.terminal.mouse_mode, MouseTrackingMode.NONE)
        self.assertEqual(cfg.theme.scrollbar.width, 20)

    def test_values_are_read(self):
        path = self._write(
            "fps: 30\n"
            "log_level: debug\n"
            "window: {width: 800, height: 500, dpi_scale: 2}\n"
            "input: {scroll_wheel_lines: 3, multi_click_ms: 350, copy_and_paste_with_mouse: false}\n"
            "terminal: {mouse_mode: vt200, scrollback_lines: 10, banner: \"a\\nb\"}\n"
            "theme: {font_size: 12, scrollbar: {width: 14}}\n"
        )
        cfg = load_settings(path)
        self.assertEqual(cfg.fps, 30)
        self.assertEqual(cfg.log_level, "DEBUG")
        self.assertEqual((cfg.window.width, cfg.window.height, cfg.window.dpi_scale), (800, 500, 2.0))
        self.assertEqual(cfg.input.scroll_wheel_lines, 3)
        self.assertEqual(cfg.input.multi_click_ms, 350)
        self.assertFalse(cfg.input.copy_and_paste_with_mouse)
        self.assertIs(cfg.terminal.mouse_mode, MouseTrackingMode.NORMAL)
        self.assertEqual(cfg.terminal.banner, ["a", "b"])
        self.assertEqual(cfg.theme.font_size, 12)
        self.assertEqual(cfg.theme.scrollbar.width, 14)

    def test_mouse_mode_by_decset_number(self):
        cfg = load_settings(self._write("terminal: {mouse_mode: 9}\n"))
        self.assertIs(cfg.terminal.mouse_mode, MouseTrackingMode.X10)
        cfg = load_settings(self._write("terminal: {mouse_mode: any-event}\n"))
        self.assertIs(cfg.terminal.mouse_mode, MouseTrackingMode.ANY_EVENT)

    def test_unknown_mouse_mode_is_an_error(self):
        path = self._write("terminal: {mouse_mode: sgr}\n")
        with self.assertRaises(ValueError) as ctx:
            load_settings(path)
        self.assertIn(path, str(ctx.exception))

    def test_boolean_mouse_mode_is_an_error(self):
        for text in ("terminal: {mouse_mode: true}\n", "terminal: {mouse_mode: off}\n"):
            path = self._write(text)
            with self.assertRaises(ValueError) as ctx:
                load_settings(path)
            self.assertIn("DECSET", str(ctx.exception))
            self.assertIn(path, str(ctx.exception))

    def test_top_level_must_be_mapping(self):
        with self.assertRaises(ValueError):
            load_settings(self._write("- 1\n- 2\n"))

    def test_bad_scrollbar_width(self):
        with self.assertRaises(ValueError):
            build_theme_from_defaults({"theme": {"scrollbar": {"width": 0}}})

    def test_shipped_defaults_load(self):
        self.assertTrue(DEFAULTS_PATH.exists())
        cfg = load_settings()
        self.assertIs(cfg.terminal.mouse_mode, MouseTrackingMode.NONE)
        self.assertTrue(cfg.terminal.banner)


if __name__ == "__main__":
    unittest.main()

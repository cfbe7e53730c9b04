"""Tests for runtime wiring of real collaborators into the loop."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from lazybrowse import app
from lazybrowse.config import BrowserConfig


class BuildCallbacksTests(unittest.TestCase):
    def test_callbacks_bind_terminal_and_config(self) -> None:
        terminal = mock.Mock()
        callbacks = app.build_callbacks(terminal, stdin_fd=5, config=BrowserConfig(style="friendly"), colorize=False)

        self.assertIs(callbacks.is_text_readable, app.is_text_readable)
        self.assertEqual(callbacks.read_key.args, (5,))
        self.assertEqual(callbacks.load_pager.keywords, {"style": "friendly", "colorize": False})
        self.assertIs(callbacks.open_externally.keywords["disable_tui_mode"], terminal.disable_tui_mode)
        self.assertIs(callbacks.open_externally.keywords["enable_tui_mode"], terminal.enable_tui_mode)

    def test_run_browser_starts_loop_at_given_path(self) -> None:
        with mock.patch("lazybrowse.app.sys.stdin") as stdin, mock.patch("lazybrowse.app.sys.stdout") as stdout, mock.patch(
            "lazybrowse.app.TerminalController"
        ), mock.patch("lazybrowse.app.Screen"), mock.patch("lazybrowse.app.os.isatty", return_value=True), mock.patch(
            "lazybrowse.app.NavigationEngine"
        ) as engine_cls, mock.patch("lazybrowse.app.run_main_loop") as run_main_loop:
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            app.run_browser(Path("/srv"), BrowserConfig())

        engine_cls.assert_called_once_with(Path("/srv"))
        run_main_loop.assert_called_once()
        callbacks = run_main_loop.call_args.args[3]
        self.assertEqual(callbacks.load_pager.keywords["colorize"], True)


if __name__ == "__main__":
    unittest.main()

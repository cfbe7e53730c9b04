"""Tests for terminal mode switching and the buffered screen surface."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazybrowse.terminal import Screen, TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazybrowse.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazybrowse.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazybrowse.terminal.os.write") as write_mock, mock.patch(
            "lazybrowse.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazybrowse.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


class ScreenTests(unittest.TestCase):
    def _screen(self, rows: int = 5, cols: int = 10) -> Screen:
        return Screen(stdout_fd=7, size_fn=lambda: (rows, cols))

    def test_refresh_writes_one_positioned_frame(self) -> None:
        screen = self._screen()
        screen.clear()
        screen.write_at(0, 0, "hi")
        screen.set_highlight(True)
        screen.write_at(2, 1, "sel")
        screen.set_highlight(False)

        with mock.patch("lazybrowse.terminal.os.write") as write_mock:
            screen.refresh()
            screen.refresh()

        write_mock.assert_called_once_with(7, b"\x1b[H\x1b[2J\x1b[1;1Hhi\x1b[3;2H\x1b[7msel\x1b[0m")

    def test_writes_outside_grid_are_dropped_and_rows_clipped(self) -> None:
        screen = self._screen(rows=2, cols=4)
        screen.clear()
        screen.write_at(5, 0, "gone")
        screen.write_at(1, 2, "abcdef")

        with mock.patch("lazybrowse.terminal.os.write") as write_mock:
            screen.refresh()

        write_mock.assert_called_once_with(7, b"\x1b[H\x1b[2J\x1b[2;3Hab")

    def test_size_is_reread_each_call(self) -> None:
        sizes = iter([(24, 80), (30, 100), (10, 40)])
        screen = Screen(stdout_fd=1, size_fn=lambda: next(sizes))
        self.assertEqual(screen.size(), (30, 100))
        self.assertEqual(screen.size(), (10, 40))


if __name__ == "__main__":
    unittest.main()

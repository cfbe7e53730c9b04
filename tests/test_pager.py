"""Tests for pager scroll arithmetic and file loading."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazybrowse.pager import PagerState, load_pager, visible_rows_for


def _pager(line_count: int, display_rows: int = 7) -> PagerState:
    return PagerState(
        file_path=Path("/tmp/sample.txt"),
        lines=[f"line {idx}" for idx in range(line_count)],
        visible_rows=visible_rows_for(display_rows),
    )


def _assert_window(test: unittest.TestCase, pager: PagerState) -> None:
    test.assertLessEqual(pager.top_line, pager.current_line)
    test.assertLess(pager.current_line, pager.top_line + pager.visible_rows)
    test.assertGreaterEqual(pager.top_line, 0)
    test.assertLessEqual(pager.top_line, pager.max_top_line)


class PagerScrollTests(unittest.TestCase):
    def test_visible_rows_reserve_header_and_help(self) -> None:
        self.assertEqual(visible_rows_for(24), 22)
        self.assertEqual(visible_rows_for(2), 1)
        self.assertEqual(visible_rows_for(1), 1)

    def test_window_invariant_holds_for_mixed_sequence(self) -> None:
        pager = _pager(12)
        for delta in [1] * 9 + [-1] * 3 + [1] * 20 + [-1] * 30:
            pager.scroll(delta)
            _assert_window(self, pager)

    def test_down_past_window_moves_top_by_one(self) -> None:
        pager = _pager(12)  # five visible rows
        for _ in range(4):
            pager.scroll(1)
        self.assertEqual((pager.current_line, pager.top_line), (4, 0))
        pager.scroll(1)
        self.assertEqual((pager.current_line, pager.top_line), (5, 1))

    def test_cursor_clamps_at_both_ends(self) -> None:
        pager = _pager(3)
        self.assertFalse(pager.scroll(-1))
        pager.scroll(1)
        pager.scroll(1)
        self.assertFalse(pager.scroll(1))
        self.assertEqual(pager.current_line, 2)

    def test_round_trip_returns_to_first_line(self) -> None:
        count = 17
        pager = _pager(count)
        for _ in range(count - 1):
            pager.scroll(1)
        self.assertEqual(pager.current_line, count - 1)
        for _ in range(count - 1):
            pager.scroll(-1)
        self.assertEqual(pager.current_line, 0)
        self.assertEqual(pager.top_line, 0)

    def test_empty_file_scroll_is_noop(self) -> None:
        pager = _pager(0)
        self.assertFalse(pager.scroll(1))
        self.assertEqual((pager.current_line, pager.top_line), (0, 0))
        self.assertEqual(pager.visible_lines(), [])

    def test_fit_restores_window_after_shrink_and_grow(self) -> None:
        pager = _pager(30, display_rows=12)
        for _ in range(25):
            pager.scroll(1)
        pager.fit(5)
        self.assertEqual(pager.visible_rows, 3)
        _assert_window(self, pager)
        pager.fit(40)
        self.assertEqual(pager.top_line, 0)
        _assert_window(self, pager)

    def test_visible_lines_prefer_styled_rows(self) -> None:
        pager = _pager(4, display_rows=4)
        pager.styled_lines = [f"\033[1mline {idx}\033[0m" for idx in range(4)]
        pager.scroll(1)
        pager.scroll(1)
        self.assertEqual(pager.visible_lines(), [(1, "\033[1mline 1\033[0m"), (2, "\033[1mline 2\033[0m")])


class LoadPagerTests(unittest.TestCase):
    def test_load_pager_splits_lines_without_trailing_empty_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            target.write_bytes(b"alpha\r\nbeta\n\ngamma\n")

            pager, error = load_pager(target, display_rows=10, colorize=False)

        self.assertIsNone(error)
        assert pager is not None
        self.assertEqual(pager.lines, ["alpha", "beta", "", "gamma"])
        self.assertEqual((pager.top_line, pager.current_line, pager.visible_rows), (0, 0, 8))
        self.assertIsNone(pager.styled_lines)

    def test_load_pager_escapes_control_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "bell.txt"
            target.write_bytes(b"ding\x07\n")

            pager, _error = load_pager(target, display_rows=10, colorize=False)

        assert pager is not None
        self.assertEqual(pager.lines, ["ding\\x07"])

    def test_load_pager_colorizes_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "mod.py"
            target.write_text("import os\n\nvalue = 1\n", encoding="utf-8")

            pager, _error = load_pager(target, display_rows=10, colorize=True)

        assert pager is not None
        assert pager.styled_lines is not None
        self.assertEqual(len(pager.styled_lines), 3)
        self.assertIn("\x1b[", pager.styled_lines[0])

    def test_colorize_limit_counts_bytes_not_characters(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "wide.py"
            # 7 characters, 13 bytes in UTF-8.
            target.write_text("éééééé\n", encoding="utf-8")

            with mock.patch("lazybrowse.pager.COLORIZE_MAX_FILE_BYTES", 10):
                over, _error = load_pager(target, display_rows=10, colorize=True)
            with mock.patch("lazybrowse.pager.COLORIZE_MAX_FILE_BYTES", 13):
                at_limit, _error = load_pager(target, display_rows=10, colorize=True)

        assert over is not None and at_limit is not None
        self.assertIsNone(over.styled_lines)
        self.assertIsNotNone(at_limit.styled_lines)

    def test_load_pager_reports_open_failure(self) -> None:
        with mock.patch("lazybrowse.pager.read_text", side_effect=PermissionError(13, "Permission denied")):
            pager, error = load_pager(Path("/tmp/locked.txt"), display_rows=10)

        self.assertIsNone(pager)
        self.assertEqual(error, "Error: Unable to open file: Permission denied")


if __name__ == "__main__":
    unittest.main()

"""Tests for candidate loading in scan and history modes."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from trypick.entries import HistoryMode, ScanMode, history_entries, load_entries, scan_entries


class ScanEntriesTests(unittest.TestCase):
    def test_lists_visible_subdirectories_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "alpha").mkdir()
            (base / "Beta-2024-01-01").mkdir()
            (base / ".hidden").mkdir()
            (base / "notes.txt").write_text("x", encoding="utf-8")

            entries = scan_entries(base)

        names = sorted(entry.display_name for entry in entries)
        self.assertEqual(names, ["Beta-2024-01-01", "alpha"])
        by_name = {entry.display_name: entry for entry in entries}
        self.assertEqual(by_name["Beta-2024-01-01"].sort_key, "beta-2024-01-01")
        self.assertEqual(by_name["alpha"].location, base / "alpha")
        self.assertTrue(all(entry.score == 0.0 for entry in entries))

    def test_records_directory_modification_time(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "old").mkdir()
            os.utime(base / "old", (1_600_000_000, 1_600_000_000))

            (entry,) = scan_entries(base)

        self.assertEqual(entry.modified_at, 1_600_000_000)

    def test_missing_base_directory_yields_no_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(scan_entries(Path(tmp) / "does-not-exist"), [])

    def test_base_path_that_is_a_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "file"
            path.write_text("x", encoding="utf-8")
            with self.assertRaises(NotADirectoryError):
                scan_entries(path)


class HistoryEntriesTests(unittest.TestCase):
    def test_existing_paths_are_listed_newest_addition_first(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "first"
            second = Path(tmp) / "second"
            first.mkdir()
            second.mkdir()

            entries = history_entries([first, Path(tmp) / "gone", second], now=0.0)

        self.assertEqual([entry.location for entry in entries], [second, first])
        self.assertEqual(entries[0].display_name, str(second))

    def test_load_entries_dispatches_on_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "proj").mkdir()

            scanned = load_entries(ScanMode(base))
            recorded = load_entries(HistoryMode((base / "proj",)))

        self.assertEqual([entry.display_name for entry in scanned], ["proj"])
        self.assertEqual([entry.display_name for entry in recorded], [str(base / "proj")])


if __name__ == "__main__":
    unittest.main()

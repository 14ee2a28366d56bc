"""Candidate loading for the selector.

Scan mode lists a base directory's immediate subdirectories; history mode
presents previously visited workspaces, most recently added first.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Entry:
    display_name: str
    sort_key: str
    location: Path
    modified_at: float
    score: float = 0.0

    @classmethod
    def create(cls, display_name: str, location: Path, modified_at: float) -> Entry:
        return cls(
            display_name=display_name,
            sort_key=display_name.lower(),
            location=location,
            modified_at=modified_at,
        )


@dataclass(frozen=True)
class ScanMode:
    """Pick among the subdirectories of ``base_directory``."""

    base_directory: Path


@dataclass(frozen=True)
class HistoryMode:
    """Pick among recorded workspace paths, oldest-added first."""

    paths: tuple[Path, ...]


SelectorMode = ScanMode | HistoryMode


def scan_entries(base_directory: Path) -> list[Entry]:
    """List non-hidden subdirectories of ``base_directory``.

    A missing base directory yields no entries. Any other filesystem error
    propagates so the picker never shows a half-populated list.
    """
    try:
        children = os.scandir(base_directory)
    except FileNotFoundError:
        return []

    entries: list[Entry] = []
    with children:
        for child in children:
            if child.name.startswith("."):
                continue
            if not child.is_dir():
                continue
            path = Path(child.path)
            entries.append(Entry.create(child.name, path, path.stat().st_mtime))
    return entries


def history_entries(paths: Iterable[Path], now: float | None = None) -> list[Entry]:
    """Build entries for recorded paths that still exist.

    The full path is the display name. Unreadable modification times fall back
    to ``now``. The result is reversed so the latest addition comes first.
    """
    if now is None:
        now = time.time()
    entries: list[Entry] = []
    for path in paths:
        if not path.exists():
            continue
        try:
            modified_at = path.stat().st_mtime
        except OSError:
            modified_at = now
        entries.append(Entry.create(str(path), path, modified_at))
    entries.reverse()
    return entries


def load_entries(mode: SelectorMode, now: float | None = None) -> list[Entry]:
    """Load candidates for ``mode``."""
    if isinstance(mode, ScanMode):
        return scan_entries(mode.base_directory)
    return history_entries(mode.paths, now)

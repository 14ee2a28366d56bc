"""Workspace history repository.

The history file holds one absolute path per line, oldest first. Adding a
path that is already recorded moves it to the end.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class WorkspaceHistory:
    """Line-delimited history file at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[Path]:
        """Return recorded paths, oldest first; a missing file is empty."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        return [Path(line.strip()) for line in text.splitlines() if line.strip()]

    def add(self, workspace: Path) -> None:
        """Record ``workspace`` as the most recent entry."""
        try:
            resolved = workspace.resolve(strict=True)
        except OSError:
            resolved = workspace
        recorded = [path for path in self.load() if str(path) != str(resolved)]
        recorded.append(resolved)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{path}\n" for path in recorded), encoding="utf-8")
        logger.debug("recorded workspace %s in %s", resolved, self.path)


class NullHistory:
    """Stand-in used when no history location could be determined."""

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def load(self) -> list[Path]:
        return []

    def add(self, workspace: Path) -> None:
        logger.warning("workspace history unavailable (%s); not recording %s", self.reason, workspace)

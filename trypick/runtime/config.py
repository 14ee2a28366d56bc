"""Configuration lookup for paths and persisted settings.

Resolves the workspace base path, the history file location, and a small
JSON settings file. Malformed config reads as empty.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "try"
CONFIG_FILENAME = "config.json"
HISTORY_FILENAME = "workspaces"
DEFAULT_BASE_PATH = "~/project/test"

BASE_PATH_ENV = "TRY_PATH"
HISTORY_FILE_ENV = "TRY_HISTORY_FILE"
NO_COLOR_ENV = "NO_COLOR"


class ConfigError(Exception):
    """Raised when a configuration or storage location cannot be determined."""


def config_dir() -> Path:
    """Return the per-user config directory for ``try``.

    Raises ``ConfigError`` when the platform lookup does not produce an
    absolute path, which happens when no home directory is known.
    """
    path = Path(user_config_dir(APP_NAME, appauthor=False))
    if not path.is_absolute():
        raise ConfigError(f"could not determine config directory (got {path})")
    return path


def config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def history_path() -> Path:
    """Return the workspace history file, honoring ``TRY_HISTORY_FILE``."""
    override = os.environ.get(HISTORY_FILE_ENV, "").strip()
    if override:
        return expand_path(override)
    return config_dir() / HISTORY_FILENAME


def expand_path(raw: str) -> Path:
    """Expand a leading ``~/`` to the home directory.

    Raises ``ConfigError`` when the home directory is unknown.
    """
    if raw == "~" or raw.startswith("~/"):
        expanded = os.path.expanduser(raw)
        if expanded.startswith("~"):
            raise ConfigError(f"could not find home directory to expand {raw!r}")
        return Path(expanded)
    return Path(raw)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the location is unknown or the file is
    missing, unreadable, malformed, or not a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except ConfigError as exc:
        logger.debug("config unavailable: %s", exc)
        return {}
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored; settings are a
    convenience and never block the picker.
    """
    try:
        path = config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (ConfigError, OSError) as exc:
        logger.warning("could not save config: %s", exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_base_path_setting() -> str | None:
    """Load the configured default workspace base path, if any."""
    return _load_string("base_path")


def resolve_base_path() -> Path:
    """Resolve the workspace base directory.

    ``TRY_PATH`` wins, then the ``base_path`` setting, then the built-in
    default.
    """
    raw = os.environ.get(BASE_PATH_ENV, "").strip()
    if not raw:
        raw = load_base_path_setting() or DEFAULT_BASE_PATH
    return expand_path(raw)


def color_disabled_by_env() -> bool:
    """Honor the ``NO_COLOR`` convention: any non-empty value disables color."""
    return bool(os.environ.get(NO_COLOR_ENV, ""))

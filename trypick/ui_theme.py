"""UI theme definitions and selection helpers.

Themes map the semantic roles used by the frame model to ANSI SGR strings.
Disabling color resolves to the plain theme regardless of the requested name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectorTheme:
    """Semantic ANSI palette used by the frame writer."""

    name: str
    reset: str
    title: str
    dim: str
    path: str
    query: str
    block_cursor: str
    pointer: str
    selected: str
    match: str
    marked: str
    create_new: str
    delete_banner: str
    status: str

    def sgr(self, role: str) -> str:
        """Return the escape sequence for ``role``; unknown roles are unstyled."""
        value = getattr(self, role, "")
        return value if isinstance(value, str) and role != "name" else ""


DEFAULT_THEME = SelectorTheme(
    name="default",
    reset="\033[0m",
    title="\033[1;31m",
    dim="\033[90m",
    path="\033[36m",
    query="\033[1;33m",
    block_cursor="\033[7m",
    pointer="\033[1;33m",
    selected="\033[1m",
    match="\033[1;33m",
    marked="\033[9m",
    create_new="",
    delete_banner="\033[1;31m",
    status="\033[1m",
)

OCEAN_THEME = SelectorTheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    dim="\033[2;38;5;110m",
    path="\033[38;5;117m",
    query="\033[1;38;5;153m",
    block_cursor="\033[7m",
    pointer="\033[1;38;5;39m",
    selected="\033[1m",
    match="\033[1;38;5;215m",
    marked="\033[9;38;5;174m",
    create_new="\033[38;5;84m",
    delete_banner="\033[1;38;5;203m",
    status="\033[1;38;5;45m",
)

PLAIN_THEME = SelectorTheme(
    name="plain",
    reset="",
    title="",
    dim="",
    path="",
    query="",
    block_cursor="",
    pointer="",
    selected="",
    match="",
    marked="",
    create_new="",
    delete_banner="",
    status="",
)

_THEMES: dict[str, SelectorTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> SelectorTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "SelectorTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]

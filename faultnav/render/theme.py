"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the tree, page panel and status lines. Syntax
highlighting of raw descriptor JSON uses a separate Pygments style name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    dim: str
    tree_marker: str
    tree_folder: str
    tree_page: str
    tree_active: str
    tree_loading: str
    tree_error: str
    tree_match: str
    breadcrumb: str
    notes: str
    heading: str
    no_results: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    dim="\033[2;38;5;250m",
    tree_marker="\033[38;5;44m",
    tree_folder="\033[1;34m",
    tree_page="\033[38;5;252m",
    tree_active="\033[7m",
    tree_loading="\033[38;5;229m",
    tree_error="\033[38;5;203m",
    tree_match="\033[7;1m",
    breadcrumb="\033[38;5;250m",
    notes="\033[38;5;214m",
    heading="\033[1;38;5;81m",
    no_results="\033[2;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    dim="\033[2;38;5;110m",
    tree_marker="\033[38;5;39m",
    tree_folder="\033[1;38;5;45m",
    tree_page="\033[38;5;153m",
    tree_active="\033[7m",
    tree_loading="\033[38;5;153m",
    tree_error="\033[38;5;209m",
    tree_match="\033[7;1m",
    breadcrumb="\033[38;5;110m",
    notes="\033[38;5;215m",
    heading="\033[1;38;5;45m",
    no_results="\033[2;38;5;209m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    dim="",
    tree_marker="",
    tree_folder="",
    tree_page="",
    tree_active="",
    tree_loading="",
    tree_error="",
    tree_match="",
    breadcrumb="",
    notes="",
    heading="",
    no_results="",
)

_THEMES: dict[str, UITheme] = {
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


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]

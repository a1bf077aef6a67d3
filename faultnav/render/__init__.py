"""Terminal presentation of navigator state.

Rendering helpers here are presentation-only; the navigation core never
imports this package.
"""

from __future__ import annotations

from .ansi import ANSI_ESCAPE_RE, clip_ansi_line, display_width, strip_ansi
from .page import highlight_descriptor_json, render_breadcrumb, render_notes, render_page
from .theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, UITheme, available_theme_names, resolve_theme
from .tree import TerminalRenderer, build_tree_lines, format_tree_node

__all__ = [
    "ANSI_ESCAPE_RE",
    "clip_ansi_line",
    "display_width",
    "strip_ansi",
    "highlight_descriptor_json",
    "render_breadcrumb",
    "render_notes",
    "render_page",
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
    "TerminalRenderer",
    "build_tree_lines",
    "format_tree_node",
]

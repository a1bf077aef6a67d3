"""Page panel, breadcrumb and notes formatting."""

from __future__ import annotations

import json
from collections.abc import Sequence

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..navigator.path_resolver import BREADCRUMB_SEPARATOR, breadcrumb
from ..node_model import NodeDescriptor, TreeNode, descriptor_to_dict
from .theme import DEFAULT_THEME, UITheme

BREADCRUMB_PREFIX = "路径: "
NOTE_PREFIX = "⚠️ "
ROOT_CAUSE_HEADING = "根本原因"
MEASURES_HEADING = "维修措施"
IMAGES_HEADING = "图片"
EMPTY_PAGE_TEXT = "暂无内容。"
DEFAULT_JSON_STYLE = "monokai"


def render_breadcrumb(
    chain: Sequence[TreeNode],
    separator: str = BREADCRUMB_SEPARATOR,
    theme: UITheme | None = None,
) -> str:
    """Return the breadcrumb line, or an empty string with no active node."""
    if not chain:
        return ""
    active_theme = theme or DEFAULT_THEME
    return f"{active_theme.breadcrumb}{BREADCRUMB_PREFIX}{breadcrumb(chain, separator)}{active_theme.reset}"


def render_notes(notes: Sequence[str], theme: UITheme | None = None) -> list[str]:
    """One warning line per inherited note; empty list hides the panel."""
    active_theme = theme or DEFAULT_THEME
    return [f"{active_theme.notes}{NOTE_PREFIX}{note}{active_theme.reset}" for note in notes]


def render_page(descriptor: NodeDescriptor, theme: UITheme | None = None) -> list[str]:
    """Render the diagnostic sections of a page descriptor."""
    active_theme = theme or DEFAULT_THEME
    heading = active_theme.heading
    reset = active_theme.reset
    lines: list[str] = []

    if descriptor.root_cause:
        lines.append(f"{heading}{ROOT_CAUSE_HEADING}{reset}")
        lines.extend(f"  {line}" for line in descriptor.root_cause.splitlines())

    if descriptor.measures:
        lines.append(f"{heading}{MEASURES_HEADING}{reset}")
        lines.extend(f"  • {measure}" for measure in descriptor.measures)

    if descriptor.content:
        lines.extend(descriptor.content.splitlines())

    if descriptor.images:
        lines.append(f"{heading}{IMAGES_HEADING}{reset}")
        lines.extend(f"  {active_theme.dim}{image}{reset}" for image in descriptor.images)

    if not lines:
        lines.append(f"{active_theme.dim}{EMPTY_PAGE_TEXT}{reset}")
    return lines


def highlight_descriptor_json(
    descriptor: NodeDescriptor,
    style: str = DEFAULT_JSON_STYLE,
    no_color: bool = False,
) -> str:
    """Pretty-print a descriptor as JSON, colorized with Pygments."""
    source = json.dumps(descriptor_to_dict(descriptor), indent=2, ensure_ascii=False) + "\n"
    if no_color:
        return source
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_JSON_STYLE
    return highlight(source, JsonLexer(), Terminal256Formatter(style=style))


__all__ = [
    "BREADCRUMB_PREFIX",
    "NOTE_PREFIX",
    "EMPTY_PAGE_TEXT",
    "render_breadcrumb",
    "render_notes",
    "render_page",
    "highlight_descriptor_json",
]

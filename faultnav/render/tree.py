"""Tree-row formatting and the terminal renderer projection."""

from __future__ import annotations

from collections.abc import Sequence, Set

from ..navigator.path_resolver import BREADCRUMB_SEPARATOR, inherited_notes
from ..node_model import ExpansionState, TreeNode
from .ansi import clip_ansi_line
from .page import render_breadcrumb, render_notes, render_page
from .theme import DEFAULT_THEME, UITheme

NO_RESULTS_TEXT = "未找到匹配的节点"
LOADING_BADGE = " [加载中…]"
LOAD_ERROR_BADGE = " [加载失败，点击重试]"


def highlight_substring(text: str, query: str, theme: UITheme | None = None) -> str:
    """Highlight first case-insensitive substring match in ``text``.

    Matching uses ``casefold`` like the search filter; folded positions are
    mapped back to ``text`` since folding can change length (``ß`` -> ``ss``).
    """
    active_theme = theme or DEFAULT_THEME
    folded_query = query.casefold()
    if not folded_query or not active_theme.tree_match:
        return text
    folded: list[str] = []
    owners: list[int] = []
    for index, ch in enumerate(text):
        for part in ch.casefold():
            folded.append(part)
            owners.append(index)
    idx = "".join(folded).find(folded_query)
    if idx < 0:
        return text
    start = owners[idx]
    end = owners[idx + len(folded_query) - 1] + 1
    return text[:start] + active_theme.tree_match + text[start:end] + active_theme.reset + text[end:]


def format_tree_node(
    node: TreeNode,
    *,
    shown_open: bool = False,
    search_query: str = "",
    active: bool = False,
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * node.level
    title = highlight_substring(node.title, search_query, active_theme)
    if active and active_theme.tree_active:
        title = f"{active_theme.tree_active}{title}{reset}"

    if not node.is_folder:
        return f"{indent}  {active_theme.tree_page}{title}{reset}"

    marker = "▾ " if shown_open else "▸ "
    badge = ""
    if node.expansion_state is ExpansionState.LOADING:
        badge = f"{active_theme.tree_loading}{LOADING_BADGE}{reset}"
    elif node.expansion_state is ExpansionState.LOAD_ERROR:
        badge = f"{active_theme.tree_error}{LOAD_ERROR_BADGE}{reset}"
    return f"{indent}{active_theme.tree_marker}{marker}{reset}{active_theme.tree_folder}{title}{reset}{badge}"


def build_tree_lines(
    roots: Sequence[TreeNode],
    *,
    visible: Set[TreeNode] | None = None,
    has_any_match: bool = True,
    search_query: str = "",
    active_node: TreeNode | None = None,
    theme: UITheme | None = None,
) -> list[str]:
    """Render visible rows depth-first.

    ``visible=None`` shows every materialized node. With a visibility set,
    hidden nodes hide their whole subtree and a folder with a visible child is
    drawn open regardless of its stored state.
    """
    active_theme = theme or DEFAULT_THEME
    lines: list[str] = []

    def walk(nodes: Sequence[TreeNode]) -> None:
        for node in nodes:
            if visible is not None and node not in visible:
                continue
            shown_open = node.expansion_state is ExpansionState.EXPANDED
            if visible is not None and any(child in visible for child in node.child_nodes):
                shown_open = True
            lines.append(
                format_tree_node(
                    node,
                    shown_open=shown_open,
                    search_query=search_query,
                    active=node is active_node,
                    theme=active_theme,
                )
            )
            if shown_open:
                walk(node.child_nodes)

    walk(roots)
    if not has_any_match:
        lines.append(f"{active_theme.no_results}{NO_RESULTS_TEXT}{active_theme.reset}")
    return lines


class TerminalRenderer:
    """Keeps the latest projected state and composes printable frames.

    ``search_query`` mirrors the keyword of the last visibility event and
    drives match highlighting; an empty keyword shows every loaded node.
    """

    def __init__(
        self,
        theme: UITheme | None = None,
        breadcrumb_separator: str = BREADCRUMB_SEPARATOR,
        max_cols: int | None = None,
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        self.breadcrumb_separator = breadcrumb_separator
        self.max_cols = max_cols
        self.roots: list[TreeNode] = []
        self.visible: frozenset[TreeNode] | None = None
        self.has_any_match = True
        self.search_query = ""
        self.chain: list[TreeNode] = []
        self.dirty = True

    def on_node_list_changed(self, parent: TreeNode | None, children: Sequence[TreeNode]) -> None:
        if parent is None:
            self.roots = list(children)
        self.dirty = True

    def on_expansion_state_changed(self, node: TreeNode, state: ExpansionState) -> None:
        self.dirty = True

    def on_visibility_set_changed(self, visible: Set[TreeNode], has_any_match: bool, *, keyword: str = "") -> None:
        self.search_query = keyword
        self.visible = None if not keyword else frozenset(visible)
        self.has_any_match = has_any_match
        self.dirty = True

    def on_active_path_changed(self, chain: Sequence[TreeNode]) -> None:
        self.chain = list(chain)
        self.dirty = True

    def render_lines(self) -> list[str]:
        active_node = self.chain[-1] if self.chain else None
        lines: list[str] = []
        crumb = render_breadcrumb(self.chain, self.breadcrumb_separator, self.theme)
        if crumb:
            lines.append(crumb)
            lines.append("")
        lines.extend(
            build_tree_lines(
                self.roots,
                visible=self.visible,
                has_any_match=self.has_any_match,
                search_query=self.search_query,
                active_node=active_node,
                theme=self.theme,
            )
        )
        notes = render_notes(inherited_notes(self.chain), self.theme)
        if notes:
            lines.append("")
            lines.extend(notes)
        if active_node is not None and active_node.is_page:
            lines.append("")
            lines.extend(render_page(active_node.descriptor, self.theme))
        if self.max_cols is not None:
            lines = [clip_ansi_line(line, self.max_cols) for line in lines]
        self.dirty = False
        return lines

    def render(self) -> str:
        return "\n".join(self.render_lines()) + "\n"


__all__ = [
    "NO_RESULTS_TEXT",
    "LOADING_BADGE",
    "LOAD_ERROR_BADGE",
    "highlight_substring",
    "format_tree_node",
    "build_tree_lines",
    "TerminalRenderer",
]

"""Keyword filtering over the materialized tree with ancestor preservation.

Only nodes currently held in memory are searched: children of folders that
were never expanded do not exist yet and cannot match.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from ..node_model import TreeNode


@dataclass(frozen=True)
class VisibilityResult:
    """Outcome of one filter pass.

    ``auto_expanded`` lists folders on a visible ancestor chain that must be
    shown open so their matching descendants are reachable. It is a display
    override only; stored expansion states are untouched.
    """

    keyword: str
    visible: frozenset[TreeNode]
    matches: tuple[TreeNode, ...] = ()
    auto_expanded: frozenset[TreeNode] = frozenset()

    @property
    def cleared(self) -> bool:
        return not self.keyword

    @property
    def no_results(self) -> bool:
        return not self.cleared and not self.matches

    @property
    def has_any_match(self) -> bool:
        return not self.no_results

    def is_visible(self, node: TreeNode) -> bool:
        return node in self.visible


def normalize_keyword(keyword: str | None) -> str:
    return (keyword or "").strip()


def title_matches(title: str, keyword: str) -> bool:
    """Case-insensitive substring test."""
    return keyword.casefold() in title.casefold()


def iter_tree(roots: Sequence[TreeNode]) -> Iterator[TreeNode]:
    """Depth-first walk over materialized nodes."""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.child_nodes))


def compute_visibility(roots: Sequence[TreeNode], keyword: str | None) -> VisibilityResult:
    """Return the nodes to show for ``keyword``.

    An empty keyword shows everything. Otherwise each match and all of its
    ancestors are visible, and every other node (with its subtree) is hidden.
    """
    normalized = normalize_keyword(keyword)
    if not normalized:
        return VisibilityResult(keyword="", visible=frozenset(iter_tree(roots)))

    visible: set[TreeNode] = set()
    auto_expanded: set[TreeNode] = set()
    matches: list[TreeNode] = []
    for node in iter_tree(roots):
        if not title_matches(node.title, normalized):
            continue
        matches.append(node)
        visible.add(node)
        ancestor = node.parent
        while ancestor is not None and ancestor not in auto_expanded:
            visible.add(ancestor)
            auto_expanded.add(ancestor)
            ancestor = ancestor.parent

    return VisibilityResult(
        keyword=normalized,
        visible=frozenset(visible),
        matches=tuple(matches),
        auto_expanded=frozenset(auto_expanded),
    )


class SearchFilter:
    """Holds the active keyword and the last computed visibility."""

    def __init__(self) -> None:
        self.keyword = ""
        self.result: VisibilityResult | None = None

    @property
    def active(self) -> bool:
        return bool(self.keyword)

    def apply(self, roots: Sequence[TreeNode], keyword: str | None) -> VisibilityResult:
        self.keyword = normalize_keyword(keyword)
        self.result = compute_visibility(roots, self.keyword)
        return self.result

    def refresh(self, roots: Sequence[TreeNode]) -> VisibilityResult:
        """Recompute for the current keyword after the tree changed."""
        return self.apply(roots, self.keyword)

    def clear(self, roots: Sequence[TreeNode]) -> VisibilityResult:
        return self.apply(roots, "")


__all__ = [
    "VisibilityResult",
    "SearchFilter",
    "compute_visibility",
    "iter_tree",
    "normalize_keyword",
    "title_matches",
]

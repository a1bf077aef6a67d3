"""Ancestor-chain resolution for breadcrumbs and inherited notes."""

from __future__ import annotations

from collections.abc import Sequence

from ..node_model import TreeNode

BREADCRUMB_SEPARATOR = " > "


def ancestor_chain(node: TreeNode) -> list[TreeNode]:
    """Return nodes from the root down to ``node`` inclusive."""
    chain: list[TreeNode] = []
    current: TreeNode | None = node
    while current is not None:
        chain.append(current)
        current = current.parent
    chain.reverse()
    return chain


def breadcrumb(chain: Sequence[TreeNode], separator: str = BREADCRUMB_SEPARATOR) -> str:
    return separator.join(node.title for node in chain)


def inherited_notes(chain: Sequence[TreeNode]) -> list[str]:
    """Collect ``notes`` along ``chain`` in root-to-node order.

    Nodes without notes are skipped; the active node's own note comes last.
    """
    return [node.descriptor.notes for node in chain if node.descriptor.notes]


__all__ = ["BREADCRUMB_SEPARATOR", "ancestor_chain", "breadcrumb", "inherited_notes"]

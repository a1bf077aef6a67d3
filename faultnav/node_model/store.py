"""In-memory arena of materialized tree nodes.

Separates raw descriptor data from stateful nodes: a node is rebuilt from
descriptors on every expansion, so no UI state survives a re-fetch.
"""

from __future__ import annotations

import itertools
import weakref
from collections.abc import Iterator, Sequence

from .types import ExpansionState, NodeDescriptor, TreeNode


class NodeStore:
    """Owns the root node list and a node-id index of every live node."""

    def __init__(self, root_descriptors: Sequence[NodeDescriptor] = ()) -> None:
        self._ids = itertools.count(1)
        self._nodes: dict[int, TreeNode] = {}
        self.roots: list[TreeNode] = []
        if root_descriptors:
            self.build_children(None, root_descriptors)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, TreeNode) and self._nodes.get(node.node_id) is node

    def get(self, node_id: int) -> TreeNode | None:
        return self._nodes.get(node_id)

    def build_children(self, parent: TreeNode | None, descriptors: Sequence[NodeDescriptor]) -> list[TreeNode]:
        """Wrap ``descriptors`` as nodes and install them under ``parent``.

        ``parent=None`` replaces the root list. Any sequence previously held at
        that position is detached first. A ``parent`` that is no longer in the
        store is rejected with ``ValueError``.
        """
        if parent is not None and parent not in self:
            raise ValueError(f"{parent.title!r} is no longer part of the tree")
        level = 0 if parent is None else parent.level + 1
        parent_ref = None if parent is None else weakref.ref(parent)
        nodes: list[TreeNode] = []
        for key, descriptor in enumerate(descriptors):
            node = TreeNode(
                node_id=next(self._ids),
                descriptor=descriptor,
                key=key,
                level=level,
                _parent_ref=parent_ref,
                expansion_state=ExpansionState.COLLAPSED if descriptor.is_folder else None,
            )
            nodes.append(node)

        if parent is None:
            for old in self.roots:
                self._unregister(old)
            self.roots = nodes
        else:
            self.detach_children(parent)
            parent.child_nodes = nodes
        for node in nodes:
            self._nodes[node.node_id] = node
        return nodes

    def detach_children(self, node: TreeNode) -> None:
        """Drop ``node``'s materialized subtree from the arena."""
        for child in node.child_nodes:
            self._unregister(child)
        node.child_nodes = []

    def _unregister(self, node: TreeNode) -> None:
        for child in node.child_nodes:
            self._unregister(child)
        self._nodes.pop(node.node_id, None)
        if node.expansion_state is not None and node.expansion_state is not ExpansionState.COLLAPSED:
            # Invalidates any fetch still in flight for a torn-down node.
            node.set_state(ExpansionState.COLLAPSED)
        node.child_nodes = []

    def iter_materialized(self) -> Iterator[TreeNode]:
        """Yield every live node in depth-first display order."""

        def walk(nodes: Sequence[TreeNode]) -> Iterator[TreeNode]:
            for node in nodes:
                yield node
                yield from walk(node.child_nodes)

        yield from walk(self.roots)

    def find_by_titles(self, titles: Sequence[str]) -> TreeNode | None:
        """Follow exact titles from the root list through materialized children."""
        current: Sequence[TreeNode] = self.roots
        found: TreeNode | None = None
        for title in titles:
            found = next((node for node in current if node.title == title), None)
            if found is None:
                return None
            current = found.child_nodes
        return found


__all__ = ["NodeStore"]

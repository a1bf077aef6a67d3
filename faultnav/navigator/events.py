"""Renderer callbacks emitted by the navigation core."""

from __future__ import annotations

from collections.abc import Sequence, Set
from typing import Protocol

from ..node_model import ExpansionState, TreeNode


class Renderer(Protocol):
    """Projection of core state into a user interface."""

    def on_node_list_changed(self, parent: TreeNode | None, children: Sequence[TreeNode]) -> None: ...

    def on_expansion_state_changed(self, node: TreeNode, state: ExpansionState) -> None: ...

    def on_visibility_set_changed(self, visible: Set[TreeNode], has_any_match: bool, *, keyword: str = "") -> None: ...

    def on_active_path_changed(self, chain: Sequence[TreeNode]) -> None: ...


class NullRenderer:
    """Renderer that ignores every event; subclass to react to a subset."""

    def on_node_list_changed(self, parent: TreeNode | None, children: Sequence[TreeNode]) -> None:
        pass

    def on_expansion_state_changed(self, node: TreeNode, state: ExpansionState) -> None:
        pass

    def on_visibility_set_changed(self, visible: Set[TreeNode], has_any_match: bool, *, keyword: str = "") -> None:
        pass

    def on_active_path_changed(self, chain: Sequence[TreeNode]) -> None:
        pass


__all__ = ["Renderer", "NullRenderer"]

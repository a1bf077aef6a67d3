"""Datatypes for fault-tree descriptors and materialized tree nodes."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum

FOLDER = "folder"
PAGE = "page"
NODE_TYPES = frozenset({FOLDER, PAGE})


class ExpansionState(str, Enum):
    """Lifecycle state of one folder node."""

    COLLAPSED = "collapsed"
    LOADING = "loading"
    EXPANDED = "expanded"
    LOAD_ERROR = "load_error"


@dataclass(frozen=True)
class NodeDescriptor:
    """One node as loaded from a data collection.

    Folders carry either inline ``children`` or an external ``source`` id.
    Pages carry the diagnostic payload fields.
    """

    title: str
    type: str
    children: tuple["NodeDescriptor", ...] | None = None
    source: str | None = None
    root_cause: str | None = None
    measures: tuple[str, ...] = ()
    content: str | None = None
    notes: str | None = None
    images: tuple[str, ...] = ()

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER

    @property
    def is_page(self) -> bool:
        return self.type == PAGE


@dataclass(eq=False)
class TreeNode:
    """Stateful wrapper around a descriptor inside a ``NodeStore``.

    Identity-hashed so nodes can live in visibility sets. ``parent`` is held
    through a weak reference; the parent's ``child_nodes`` list owns children.
    """

    node_id: int
    descriptor: NodeDescriptor
    key: int
    level: int
    _parent_ref: weakref.ReferenceType[TreeNode] | None = field(default=None, repr=False)
    expansion_state: ExpansionState | None = None
    child_nodes: list[TreeNode] = field(default_factory=list, repr=False)
    generation: int = 0
    load_error: Exception | None = field(default=None, repr=False)

    @property
    def parent(self) -> TreeNode | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def title(self) -> str:
        return self.descriptor.title

    @property
    def is_folder(self) -> bool:
        return self.descriptor.is_folder

    @property
    def is_page(self) -> bool:
        return self.descriptor.is_page

    def set_state(self, state: ExpansionState) -> int:
        """Move to ``state`` and return the new generation counter."""
        self.expansion_state = state
        self.generation += 1
        return self.generation


__all__ = [
    "FOLDER",
    "PAGE",
    "NODE_TYPES",
    "ExpansionState",
    "NodeDescriptor",
    "TreeNode",
]

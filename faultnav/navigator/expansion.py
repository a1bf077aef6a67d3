"""Folder expand/collapse state machine with lazy child loading.

Transitions per folder::

    COLLAPSED  -> LOADING -> EXPANDED | LOAD_ERROR
    LOAD_ERROR -> LOADING            (retry on next toggle)
    EXPANDED   -> COLLAPSED
    any        -> COLLAPSED          (explicit ``collapse``)

Folders with inline children (or no children at all) skip ``LOADING``. Every
transition bumps the node's generation; a fetch result is applied only when
the node is still ``LOADING`` at the generation that issued it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..data_source import DataSource, LoadCache
from ..errors import FetchError
from ..node_model import ExpansionState, NodeDescriptor, NodeStore, TreeNode
from .events import NullRenderer, Renderer

logger = logging.getLogger(__name__)


class ExpansionController:
    """Drives folder state through ``NodeStore``, ``LoadCache`` and a data source."""

    def __init__(
        self,
        store: NodeStore,
        data_source: DataSource,
        cache: LoadCache | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.store = store
        self.data_source = data_source
        self.cache = cache if cache is not None else LoadCache()
        self.renderer: Renderer = renderer if renderer is not None else NullRenderer()

    @staticmethod
    def _require_folder(node: TreeNode) -> None:
        if not node.is_folder:
            raise ValueError(f"{node.title!r} is a page and cannot be expanded")

    def _require_attached(self, node: TreeNode) -> None:
        if node not in self.store:
            raise ValueError(f"{node.title!r} is no longer part of the tree")

    def _transition(self, node: TreeNode, state: ExpansionState) -> int:
        generation = node.set_state(state)
        logger.debug("%s -> %s (generation %d)", node.title, state.value, generation)
        self.renderer.on_expansion_state_changed(node, state)
        return generation

    def _is_current(self, node: TreeNode, generation: int) -> bool:
        return (
            node.expansion_state is ExpansionState.LOADING
            and node.generation == generation
            and node in self.store
        )

    async def toggle(self, node: TreeNode) -> ExpansionState:
        """Advance ``node`` one step through the state machine.

        Returns the state the node ends up in. Toggling while ``LOADING`` is a
        no-op.
        """
        self._require_folder(node)
        self._require_attached(node)
        state = node.expansion_state
        if state is ExpansionState.LOADING:
            logger.debug("ignoring toggle of %s while loading", node.title)
            return state
        if state is ExpansionState.EXPANDED:
            self.collapse(node)
            return ExpansionState.COLLAPSED
        return await self._expand(node)

    async def expand(self, node: TreeNode) -> ExpansionState:
        """Expand ``node`` unless it is already expanded or loading."""
        self._require_folder(node)
        self._require_attached(node)
        if node.expansion_state in (ExpansionState.EXPANDED, ExpansionState.LOADING):
            return node.expansion_state
        return await self._expand(node)

    def collapse(self, node: TreeNode) -> None:
        """Collapse ``node`` from any state, discarding its materialized subtree."""
        self._require_folder(node)
        if node.expansion_state is ExpansionState.COLLAPSED:
            return
        had_children = bool(node.child_nodes)
        self.store.detach_children(node)
        node.load_error = None
        self._transition(node, ExpansionState.COLLAPSED)
        if had_children:
            self.renderer.on_node_list_changed(node, [])

    def _materialize(self, node: TreeNode, descriptors: Sequence[NodeDescriptor]) -> ExpansionState:
        self._transition(node, ExpansionState.EXPANDED)
        children = self.store.build_children(node, descriptors)
        self.renderer.on_node_list_changed(node, children)
        return ExpansionState.EXPANDED

    async def _expand(self, node: TreeNode) -> ExpansionState:
        descriptor = node.descriptor
        node.load_error = None
        if descriptor.children is not None:
            return self._materialize(node, descriptor.children)
        if descriptor.source is None:
            return self._materialize(node, ())

        generation = self._transition(node, ExpansionState.LOADING)
        try:
            data = await self.cache.get_or_fetch(descriptor.source, self.data_source)
        except asyncio.CancelledError:
            if self._is_current(node, generation):
                self._transition(node, ExpansionState.COLLAPSED)
            raise
        except Exception as exc:
            if not self._is_current(node, generation):
                logger.debug("discarding stale failure for %s", node.title)
                return node.expansion_state
            if not isinstance(exc, FetchError):
                logger.exception("unexpected error loading %s", descriptor.source)
                exc = FetchError(descriptor.source, cause=exc)
            else:
                logger.warning("failed to load %s for %r: %s", descriptor.source, node.title, exc)
            node.load_error = exc
            self._transition(node, ExpansionState.LOAD_ERROR)
            return ExpansionState.LOAD_ERROR

        if not self._is_current(node, generation):
            logger.debug("discarding stale result for %s", node.title)
            return node.expansion_state
        return self._materialize(node, data)


__all__ = ["ExpansionController"]

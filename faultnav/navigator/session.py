"""One navigation session: root loading, activation and search routing."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..data_source import ROOT_SOURCE_ID, DataSource, LoadCache, fallback_root_descriptors
from ..errors import FetchError
from ..node_model import ExpansionState, NodeDescriptor, NodeStore, TreeNode
from .events import NullRenderer, Renderer
from .expansion import ExpansionController
from .path_resolver import BREADCRUMB_SEPARATOR, ancestor_chain, breadcrumb, inherited_notes
from .search_filter import SearchFilter, VisibilityResult

logger = logging.getLogger(__name__)


class NavigatorSession:
    """Wires store, cache, expansion and filtering to a single renderer."""

    def __init__(
        self,
        data_source: DataSource,
        *,
        root_source: str = ROOT_SOURCE_ID,
        renderer: Renderer | None = None,
        cache: LoadCache | None = None,
        fallback: Sequence[NodeDescriptor] | None = None,
        breadcrumb_separator: str = BREADCRUMB_SEPARATOR,
    ) -> None:
        self.data_source = data_source
        self.root_source = root_source
        self.renderer: Renderer = renderer if renderer is not None else NullRenderer()
        self.cache = cache if cache is not None else LoadCache()
        self.fallback = list(fallback) if fallback is not None else fallback_root_descriptors()
        self.breadcrumb_separator = breadcrumb_separator
        self.store = NodeStore()
        self.expansion = ExpansionController(self.store, data_source, self.cache, self.renderer)
        self.search = SearchFilter()
        self.active_node: TreeNode | None = None
        self.active_chain: list[TreeNode] = []
        self.used_fallback = False

    @property
    def roots(self) -> list[TreeNode]:
        return self.store.roots

    async def load_root(self) -> list[TreeNode]:
        """Load the root collection, degrading to the built-in list on failure."""
        try:
            descriptors = await self.cache.get_or_fetch(self.root_source, self.data_source)
            self.used_fallback = False
        except Exception as exc:
            if isinstance(exc, FetchError):
                logger.warning("root collection %r unavailable, using built-in list: %s", self.root_source, exc)
            else:
                logger.exception("unexpected error loading root collection %r, using built-in list", self.root_source)
            descriptors = list(self.fallback)
            self.used_fallback = True
        self.active_node = None
        self.active_chain = []
        roots = self.store.build_children(None, descriptors)
        self.renderer.on_node_list_changed(None, roots)
        self._refresh_filter()
        return roots

    async def activate(self, node: TreeNode) -> ExpansionState | None:
        """Make ``node`` active; folders additionally toggle open/closed.

        Returns the folder's resulting expansion state, or ``None`` for pages.
        """
        self.active_node = node
        self.active_chain = ancestor_chain(node)
        self.renderer.on_active_path_changed(list(self.active_chain))
        if not node.is_folder:
            return None
        state = await self.expansion.toggle(node)
        self._refresh_filter()
        return state

    async def toggle(self, node: TreeNode) -> ExpansionState:
        state = await self.expansion.toggle(node)
        self._refresh_filter()
        return state

    def collapse(self, node: TreeNode) -> None:
        self.expansion.collapse(node)
        self._refresh_filter()

    async def expand_path(self, titles: Sequence[str]) -> TreeNode:
        """Expand folders along ``titles`` from the root list.

        Raises ``LookupError`` when a title is missing or an intermediate
        folder cannot be loaded.
        """
        if not titles:
            raise LookupError("empty path")
        current: Sequence[TreeNode] = self.store.roots
        node: TreeNode | None = None
        for depth, title in enumerate(titles):
            node = next((candidate for candidate in current if candidate.title == title), None)
            if node is None:
                raise LookupError(f"no node titled {title!r} under {'/'.join(titles[:depth]) or 'root'}")
            if not node.is_folder:
                if depth != len(titles) - 1:
                    raise LookupError(f"{title!r} is a page")
                break
            state = await self.expansion.expand(node)
            if state is ExpansionState.LOAD_ERROR and depth != len(titles) - 1:
                raise LookupError(f"could not load {title!r}: {node.load_error}")
            current = node.child_nodes
        self._refresh_filter()
        assert node is not None
        return node

    def find(self, titles: Sequence[str]) -> TreeNode | None:
        return self.store.find_by_titles(titles)

    def set_filter(self, keyword: str | None) -> VisibilityResult:
        result = self.search.apply(self.store.roots, keyword)
        self.renderer.on_visibility_set_changed(result.visible, result.has_any_match, keyword=result.keyword)
        return result

    def clear_filter(self) -> VisibilityResult:
        return self.set_filter("")

    def _refresh_filter(self) -> None:
        if self.search.active:
            self.set_filter(self.search.keyword)

    @property
    def breadcrumb(self) -> str:
        return breadcrumb(self.active_chain, self.breadcrumb_separator)

    @property
    def inherited_notes(self) -> list[str]:
        return inherited_notes(self.active_chain)


__all__ = ["NavigatorSession"]

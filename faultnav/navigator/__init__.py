"""Navigation core: expansion state machine, search filter and path resolution."""

from __future__ import annotations

from .events import NullRenderer, Renderer
from .expansion import ExpansionController
from .path_resolver import BREADCRUMB_SEPARATOR, ancestor_chain, breadcrumb, inherited_notes
from .search_filter import SearchFilter, VisibilityResult, compute_visibility
from .session import NavigatorSession

__all__ = [
    "Renderer",
    "NullRenderer",
    "ExpansionController",
    "SearchFilter",
    "VisibilityResult",
    "compute_visibility",
    "BREADCRUMB_SEPARATOR",
    "ancestor_chain",
    "breadcrumb",
    "inherited_notes",
    "NavigatorSession",
]

"""Domain model for fault-tree nodes.

This package contains non-UI tree primitives:
- descriptor datatypes as loaded from JSON collections
- JSON decoding/validation of descriptor lists
- the node store that materializes descriptors into stateful tree nodes
"""

from __future__ import annotations

from .descriptors import descriptor_to_dict, parse_descriptor, parse_descriptor_json, parse_descriptor_list
from .store import NodeStore
from .types import FOLDER, NODE_TYPES, PAGE, ExpansionState, NodeDescriptor, TreeNode

__all__ = [
    "FOLDER",
    "PAGE",
    "NODE_TYPES",
    "ExpansionState",
    "NodeDescriptor",
    "TreeNode",
    "NodeStore",
    "parse_descriptor",
    "parse_descriptor_list",
    "parse_descriptor_json",
    "descriptor_to_dict",
]

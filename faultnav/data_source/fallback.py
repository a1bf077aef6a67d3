"""Built-in root collection used when the root source is unreachable."""

from __future__ import annotations

from ..node_model import FOLDER, NodeDescriptor

ROOT_SOURCE_ID = "main"

FALLBACK_ROOT: tuple[NodeDescriptor, ...] = (
    NodeDescriptor(title="FTA-重点关注", type=FOLDER, source="fta-focus.json"),
    NodeDescriptor(title="原材料", type=FOLDER, source="material-issues.json"),
    NodeDescriptor(title="工装/设备", type=FOLDER, source="equipment-issues.json"),
    NodeDescriptor(title="设备", type=FOLDER, source="equipment-issues.json"),
    NodeDescriptor(title="工装", type=FOLDER, source="tooling-issues.json"),
    NodeDescriptor(title="高压阀", type=FOLDER, source="high-pressure-valve.json"),
    NodeDescriptor(title="FailureMemory", type=FOLDER, source="failure-memory.json"),
)


def fallback_root_descriptors() -> list[NodeDescriptor]:
    return list(FALLBACK_ROOT)


__all__ = ["ROOT_SOURCE_ID", "FALLBACK_ROOT", "fallback_root_descriptors"]

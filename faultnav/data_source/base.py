"""Data-source protocol consumed by the navigation core."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Protocol, runtime_checkable

from ..node_model import NodeDescriptor

DEFAULT_SUFFIX = ".json"


@runtime_checkable
class DataSource(Protocol):
    """Fetches one named collection as an ordered descriptor list.

    Implementations raise ``FetchError`` (or its ``ParseError`` subclass) and
    never retry on their own.
    """

    async def fetch(self, source_id: str) -> list[NodeDescriptor]: ...


def source_relative_path(source_id: str) -> str:
    """Map a source id onto a relative document path.

    Ids without a suffix get ``.json`` appended, so ``"main"`` resolves to
    ``main.json``. Leading slashes are stripped.
    """
    path = PurePosixPath(source_id.strip().lstrip("/"))
    if not path.suffix:
        path = path.with_name(path.name + DEFAULT_SUFFIX)
    return str(path)


__all__ = ["DataSource", "DEFAULT_SUFFIX", "source_relative_path"]

"""Session-scoped memoization of fetched descriptor collections."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..node_model import NodeDescriptor
from .base import DataSource

logger = logging.getLogger(__name__)


def _consume_task_exception(task: asyncio.Task) -> None:
    """Mark a failed shared fetch as retrieved even if every waiter left."""
    if not task.cancelled():
        task.exception()


class LoadCache:
    """Unbounded cache keyed by source id, with shared in-flight fetches.

    Successful results are kept for the whole session. Concurrent requests for
    one uncached id await a single fetch task; a failed fetch is not cached so
    the next request fetches again.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[NodeDescriptor, ...]] = {}
        self._pending: dict[str, asyncio.Task] = {}

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, source_id: str) -> list[NodeDescriptor] | None:
        entry = self._entries.get(source_id)
        if entry is None:
            return None
        return list(entry)

    def put(self, source_id: str, data: Sequence[NodeDescriptor]) -> None:
        self._entries[source_id] = tuple(data)

    def clear(self) -> None:
        self._entries.clear()

    def is_pending(self, source_id: str) -> bool:
        return source_id in self._pending

    async def get_or_fetch(self, source_id: str, data_source: DataSource) -> list[NodeDescriptor]:
        """Return cached data or fetch it once through ``data_source``."""
        cached = self.get(source_id)
        if cached is not None:
            logger.debug("cache hit for %s", source_id)
            return cached

        task = self._pending.get(source_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch(source_id, data_source))
            task.add_done_callback(_consume_task_exception)
            self._pending[source_id] = task
        else:
            logger.debug("joining in-flight fetch for %s", source_id)
        data = await asyncio.shield(task)
        return list(data)

    async def _fetch(self, source_id: str, data_source: DataSource) -> tuple[NodeDescriptor, ...]:
        try:
            data = tuple(await data_source.fetch(source_id))
        finally:
            self._pending.pop(source_id, None)
        self._entries[source_id] = data
        logger.debug("cached %d descriptors for %s", len(data), source_id)
        return data


__all__ = ["LoadCache"]

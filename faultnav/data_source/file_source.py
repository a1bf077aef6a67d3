"""Local-directory data source reading JSON collections from disk."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ..errors import FetchError
from ..node_model import NodeDescriptor, parse_descriptor_json
from .base import source_relative_path

logger = logging.getLogger(__name__)


class FileDataSource:
    """Resolve source ids relative to ``root_dir`` and read them off-loop."""

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = Path(root_dir).resolve()

    def path_for(self, source_id: str) -> Path:
        """Return the on-disk path for ``source_id``, confined to ``root_dir``."""
        candidate = (self.root_dir / source_relative_path(source_id)).resolve()
        if not candidate.is_relative_to(self.root_dir):
            raise FetchError(source_id, "source escapes data directory")
        return candidate

    def _read(self, source_id: str) -> str:
        path = self.path_for(source_id)
        try:
            return path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as exc:
            raise FetchError(source_id, "not found", status=404, cause=exc) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(source_id, cause=exc) from exc

    async def fetch(self, source_id: str) -> list[NodeDescriptor]:
        logger.debug("reading %s from %s", source_id, self.root_dir)
        text = await asyncio.to_thread(self._read, source_id)
        return parse_descriptor_json(source_id, text)


__all__ = ["FileDataSource"]

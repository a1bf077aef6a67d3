"""Data collections feeding the navigation tree.

Defines the ``DataSource`` protocol, file and HTTP implementations, the
session ``LoadCache``, and the built-in fallback root collection.
"""

from __future__ import annotations

from .base import DataSource, source_relative_path
from .cache import LoadCache
from .fallback import FALLBACK_ROOT, ROOT_SOURCE_ID, fallback_root_descriptors
from .file_source import FileDataSource
from .http_source import HttpDataSource

__all__ = [
    "DataSource",
    "source_relative_path",
    "LoadCache",
    "FileDataSource",
    "HttpDataSource",
    "FALLBACK_ROOT",
    "ROOT_SOURCE_ID",
    "fallback_root_descriptors",
]

from __future__ import annotations

from .disk_store import FileEngineOptions, LocalFileEngine
from .interfaces import DocumentEngine
from .memory_store import MemoryEngine

__all__ = [
    "DocumentEngine",
    "FileEngineOptions",
    "LocalFileEngine",
    "MemoryEngine",
]

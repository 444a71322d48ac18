from __future__ import annotations

import asyncio
import copy
import enum
import logging
from pathlib import Path
from typing import Any

from persistence.interfaces import DocumentEngine

from .accessor import Accessor
from .keypath import KeyPath, PathLike
from .types import Document

logger = logging.getLogger(__name__)


class RootState(enum.Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    MUTATED = "mutated"
    SAVED = "saved"


def _is_empty(doc: Any) -> bool:
    return doc is None or (isinstance(doc, (dict, list)) and len(doc) == 0)


class DocumentRoot:
    """
    Owns the in-memory document and the engine it came from.

    The document is read once on construction. Every change goes straight into
    memory; nothing reaches the engine until save() is called.
    """

    def __init__(self, engine: DocumentEngine):
        self._engine = engine
        self._doc: Document = {}
        self._state = RootState.UNLOADED
        self._saved_once = False
        self.load()

    @property
    def engine(self) -> DocumentEngine:
        return self._engine

    @property
    def document(self) -> Document:
        return self._doc

    @property
    def state(self) -> RootState:
        return self._state

    @property
    def dirty(self) -> bool:
        return self._state is RootState.MUTATED

    @property
    def saved_once(self) -> bool:
        return self._saved_once

    def load(self) -> None:
        doc = self._engine.load()
        self._doc = {} if _is_empty(doc) else doc
        self._state = RootState.LOADED
        logger.debug("DOCSTORE LOAD: %s from %s", type(self._doc).__name__, type(self._engine).__name__)

    def reload(self) -> "DocumentRoot":
        """Drop unsaved changes and read the engine again."""
        if self.dirty:
            logger.info("DOCSTORE RELOAD: discarding unsaved changes")
        self.load()
        return self

    def _replace(self, doc: Document) -> None:
        self._doc = doc
        self._touch()

    def _touch(self) -> None:
        self._state = RootState.MUTATED

    def default(self, seed: Document) -> "DocumentRoot":
        if not _is_empty(self._doc):
            return self
        logger.debug("DOCSTORE DEFAULT: seeding empty document")
        self._replace(copy.deepcopy(seed))
        return self

    def value(self, default: Any = None) -> Any:
        return Accessor(self).value(default)

    def get(self, segment: Any) -> Accessor:
        return Accessor(self, KeyPath((segment,)))

    def at(self, path: PathLike) -> Accessor:
        """Accessor for a full path; dotted strings are split on '.'."""
        return Accessor(self, KeyPath.parse(path))

    def set(self, path: PathLike, value: Any) -> "DocumentRoot":
        self.at(path).set(value)
        return self

    def save(self) -> "DocumentRoot":
        self._engine.save(self._doc)
        self._state = RootState.SAVED
        self._saved_once = True
        logger.debug("DOCSTORE SAVE: %s via %s", type(self._doc).__name__, type(self._engine).__name__)
        return self

    async def save_async(self) -> "DocumentRoot":
        # Engine I/O is blocking; keep it off the event loop.
        return await asyncio.to_thread(self.save)

    def __repr__(self) -> str:
        return f"DocumentRoot(engine={type(self._engine).__name__}, state={self._state.value})"


def open_db(target: DocumentEngine | str | Path | None = None) -> DocumentRoot:
    """
    Open a database from an engine, a file path, or (with no argument) the path
    configured in settings.
    """
    from persistence.disk_store import LocalFileEngine
    from persistence.paths import as_db_path
    from settings import get_settings

    if target is None:
        target = get_settings().db_path
    if isinstance(target, (str, Path)):
        target = LocalFileEngine(as_db_path(target))
    return DocumentRoot(target)


async def open_db_async(target: DocumentEngine | str | Path | None = None) -> DocumentRoot:
    return await asyncio.to_thread(open_db, target)

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, Field

from docstore.errors import LoadError, SaveError
from json_store import atomic_write_text, dump_json, read_json

from .interfaces import DocumentEngine
from .locks import FILE_LOCKS

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], str]
Deserializer = Callable[[str], Any]


class FileEngineOptions(BaseModel):
    indent: int | None = Field(default=2, ge=0)
    sort_keys: bool = False
    encoding: str = "utf-8"
    create_if_missing: bool = True
    debug_log_documents: bool = False

    @classmethod
    def from_settings(cls) -> "FileEngineOptions":
        from settings import get_settings

        s = get_settings()
        return cls(
            indent=s.indent,
            sort_keys=s.sort_keys,
            create_if_missing=s.create_if_missing,
            debug_log_documents=s.debug_log_documents,
        )


class LocalFileEngine(DocumentEngine):
    """
    Stores the whole document in a single file at a fixed path.

    - JSON by default; pass serialize/deserialize to use another text format.
    - A missing or blank file loads as an empty dict.
    - Creates the file (holding an empty document) on construction unless
      create_if_missing is off.
    - Writes atomically.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        options: FileEngineOptions | dict[str, Any] | None = None,
        serialize: Serializer | None = None,
        deserialize: Deserializer | None = None,
    ):
        self._path = Path(path).expanduser()
        if options is None:
            options = FileEngineOptions.from_settings()
        self._options = FileEngineOptions.model_validate(options)
        self._serialize = serialize or self._dump
        self._deserialize = deserialize or json.loads

        if self._options.create_if_missing and not self._path.exists():
            logger.debug("FILE ENGINE: creating %s", self._path)
            self.save({})

    @property
    def path(self) -> Path:
        return self._path

    @property
    def options(self) -> FileEngineOptions:
        return self._options

    def _dump(self, doc: Any) -> str:
        return dump_json(doc, indent=self._options.indent, sort_keys=self._options.sort_keys)

    def load(self) -> Any:
        with FILE_LOCKS.held(self._path):
            try:
                raw = read_json(self._path, encoding=self._options.encoding, deserialize=self._deserialize)
            except (OSError, ValueError) as e:
                logger.warning("FILE ENGINE LOAD: failed to read %s: %r", self._path, e)
                raise LoadError(self._path, e) from e
        if raw is None:
            logger.debug("FILE ENGINE LOAD: %s is empty or absent", self._path)
            return {}
        if self._options.debug_log_documents:
            logger.debug("FILE ENGINE LOAD: %s -> %r", self._path, raw)
        return raw

    def save(self, doc: Any) -> None:
        try:
            text = self._serialize(doc)
        except (TypeError, ValueError) as e:
            logger.warning("FILE ENGINE SAVE: cannot serialize document for %s: %r", self._path, e)
            raise SaveError(self._path, e) from e
        with FILE_LOCKS.held(self._path):
            try:
                atomic_write_text(self._path, text, encoding=self._options.encoding)
            except OSError as e:
                logger.warning("FILE ENGINE SAVE: failed to write %s: %r", self._path, e)
                raise SaveError(self._path, e) from e
        if self._options.debug_log_documents:
            logger.debug("FILE ENGINE SAVE: %s <- %r", self._path, doc)
        else:
            logger.debug("FILE ENGINE SAVE: wrote %d chars to %s", len(text), self._path)

from __future__ import annotations

import copy
import logging
from typing import Any

from .interfaces import DocumentEngine

logger = logging.getLogger(__name__)


class MemoryEngine(DocumentEngine):
    """
    Keeps the persisted document in process memory.

    Useful for tests and scratch databases. Documents are deep-copied on the way in
    and out so the stored snapshot only changes on save().
    """

    def __init__(self, initial: Any | None = None):
        self._doc: Any = copy.deepcopy(initial) if initial is not None else {}
        self.save_count = 0

    def load(self) -> Any:
        logger.debug("MEMORY ENGINE LOAD: %s", type(self._doc).__name__)
        return copy.deepcopy(self._doc)

    def save(self, doc: Any) -> None:
        self._doc = copy.deepcopy(doc)
        self.save_count += 1
        logger.debug("MEMORY ENGINE SAVE: #%d", self.save_count)

    @property
    def snapshot(self) -> Any:
        return copy.deepcopy(self._doc)

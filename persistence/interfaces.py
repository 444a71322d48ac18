from __future__ import annotations

from typing import Any, Protocol


class DocumentEngine(Protocol):
    """
    Whole-document storage: a single JSON-like tree read and written in one pass.
    """

    def load(self) -> Any:
        """Load and return the full document (empty dict when nothing is stored yet)."""
        ...

    def save(self, doc: Any) -> None:
        """Persist the full document, replacing whatever was stored before."""
        ...

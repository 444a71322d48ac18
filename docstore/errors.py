"""Exceptions raised by the document store."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .types import kind_of


class DocStoreError(Exception):
    """Base exception for all document store errors."""


class TypeGuardError(DocStoreError, TypeError):
    """A list-only operation hit a value that is not a list."""

    def __init__(self, path: Any, operation: str, actual: Any, expected: str = "a list"):
        self.path = path
        self.operation = operation
        self.actual = kind_of(actual)
        self.expected = expected
        super().__init__(f"Cannot {operation} at {path}: value is {self.actual}, not {expected}")


class StructuralConflictError(DocStoreError, ValueError):
    """A write would have to pass through (or index into) something it cannot."""

    def __init__(self, path: Any, segment: Any, reason: str):
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Cannot write {path} at segment {segment!r}: {reason}")


class LoadError(DocStoreError):
    """The backing store could not be read or decoded."""

    def __init__(self, location: str | Path, cause: BaseException | None = None):
        self.location = location
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to load document from {location}{detail}")


class SaveError(DocStoreError):
    """The document could not be encoded or written to the backing store."""

    def __init__(self, location: str | Path, cause: BaseException | None = None):
        self.location = location
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to save document to {location}{detail}")

"""
Embedded JSON document store.

One document is loaded from a storage engine into memory, read and changed
through chainable path accessors, and written back on save():

    from docstore import open_db

    db = open_db("data/app.json")
    db.default({"users": {}, "log": []})

    db.set("users.alice.age", 31)
    db.get("log").push("alice joined")
    db.get("users").get("alice").get("age").value()   # 31
    db.get("log").length().value()                    # 1

    db.save()
"""

from .accessor import Accessor, ValueHandle
from .errors import (
    DocStoreError,
    LoadError,
    SaveError,
    StructuralConflictError,
    TypeGuardError,
)
from .keypath import KeyPath
from .resolver import resolve_delete, resolve_read, resolve_write
from .root import DocumentRoot, RootState, open_db, open_db_async
from .types import MISSING

__all__ = [
    # Main API
    "DocumentRoot",
    "RootState",
    "Accessor",
    "ValueHandle",
    "open_db",
    "open_db_async",
    # Paths
    "KeyPath",
    "MISSING",
    "resolve_read",
    "resolve_write",
    "resolve_delete",
    # Exceptions
    "DocStoreError",
    "TypeGuardError",
    "StructuralConflictError",
    "LoadError",
    "SaveError",
]

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable

from .errors import TypeGuardError
from .keypath import KeyPath
from .resolver import resolve_delete, resolve_read, resolve_write
from .types import MISSING

if TYPE_CHECKING:
    from .root import DocumentRoot

_UNSET = object()


class ValueHandle:
    """
    Read-only result of a derived computation (length, reduce).

    Computed lazily against the root's current document, like an Accessor.
    """

    __slots__ = ("_compute",)

    def __init__(self, compute: Callable[[], Any]):
        self._compute = compute

    def value(self, default: Any = None) -> Any:
        result = self._compute()
        return default if result is MISSING else result


class Accessor:
    """
    A (path, root) pair. Building one never touches the document; each terminal
    call resolves the path against whatever the root holds at that moment.

        db.get("users").get("alice").set("age", 31)
        db.get("log").push({"event": "login"})
        db.get("scores").map(lambda s: s * 2).value()

    Mutating calls return the accessor itself so they can be chained.
    """

    __slots__ = ("_root", "_path")

    def __init__(self, root: "DocumentRoot", path: KeyPath | None = None):
        self._root = root
        self._path = path if path is not None else KeyPath()

    @property
    def path(self) -> KeyPath:
        return self._path

    @property
    def root(self) -> "DocumentRoot":
        return self._root

    def get(self, segment: Any) -> "Accessor":
        return Accessor(self._root, self._path.child(segment))

    def _resolve(self) -> Any:
        return resolve_read(self._root.document, self._path)

    def _write(self, path: KeyPath, value: Any) -> None:
        self._root._replace(resolve_write(self._root.document, path, value))

    def _list(self, operation: str) -> list:
        current = self._resolve()
        if not isinstance(current, list):
            raise TypeGuardError(self._path, operation, current)
        return current

    # reads

    def value(self, default: Any = None) -> Any:
        """Return the value at this path, or default when the path does not resolve."""
        current = self._resolve()
        return default if current is MISSING else current

    def exists(self) -> bool:
        return self._resolve() is not MISSING

    def length(self) -> ValueHandle:
        """
        Size of the value at this path: elements of a list, keys of a map,
        characters of a string. A missing path has no length (value() gives the
        default); any other scalar raises TypeGuardError when read.
        """

        def compute() -> Any:
            current = self._resolve()
            if current is MISSING:
                return MISSING
            if isinstance(current, (list, dict, str)):
                return len(current)
            raise TypeGuardError(self._path, "take the length", current, expected="a list, map or string")

        return ValueHandle(compute)

    def reduce(self, fn: Callable[[Any, Any], Any], initial: Any = _UNSET) -> ValueHandle:
        def compute() -> Any:
            items = self._list("reduce")
            if initial is _UNSET:
                return functools.reduce(fn, items)
            return functools.reduce(fn, items, initial)

        return ValueHandle(compute)

    # writes

    def set(self, key_or_value: Any, value: Any = _UNSET) -> "Accessor":
        """
        set(value) stores value at this path.
        set(key, value) stores value one level down, same as get(key).set(value).
        """
        if value is _UNSET:
            self._write(self._path, key_or_value)
        else:
            self._write(self._path.child(key_or_value), value)
        return self

    def delete(self) -> "Accessor":
        doc, removed = resolve_delete(self._root.document, self._path)
        if removed:
            self._root._replace(doc)
        return self

    def push(self, item: Any) -> "Accessor":
        self._list("push").append(item)
        self._root._touch()
        return self

    def map(self, transform: Callable[[Any], Any]) -> "Accessor":
        mapped = [transform(x) for x in self._list("map")]
        self._write(self._path, mapped)
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> "Accessor":
        kept = [x for x in self._list("filter") if predicate(x)]
        self._write(self._path, kept)
        return self

    def sort(self, key: Callable[[Any], Any] | None = None, reverse: bool = False) -> "Accessor":
        ordered = sorted(self._list("sort"), key=key, reverse=reverse)
        self._write(self._path, ordered)
        return self

    def __repr__(self) -> str:
        return f"Accessor({self._path})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Accessor):
            return NotImplemented
        return self._root is other._root and self._path == other._path

    def __hash__(self) -> int:
        return hash((id(self._root), self._path))

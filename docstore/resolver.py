"""
Path resolution over JSON-like trees (dicts, lists, scalars).

Reads are forgiving: anything that does not resolve comes back as MISSING.
Writes create intermediate dicts where a key is absent, and refuse to walk through
a scalar. Map keys match by value and type; list nodes take int indices or strings
of digits.
"""
from __future__ import annotations

from typing import Any

from .errors import StructuralConflictError
from .keypath import KeyPath
from .types import MISSING, Document


def is_container(node: Any) -> bool:
    return isinstance(node, (dict, list))


def _as_index(segment: Any) -> int | None:
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment
    # isdigit alone accepts "²" and other digits int() rejects
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _list_index(node: list, segment: Any) -> int | None:
    """Normalise a segment to an in-range list index, or None."""
    idx = _as_index(segment)
    if idx is None:
        return None
    if idx < 0:
        idx += len(node)
    if 0 <= idx < len(node):
        return idx
    return None


def _has_key(node: dict, segment: Any) -> bool:
    # dict lookup treats 1, 1.0 and True as one key; require the same type as well
    if segment not in node:
        return False
    for key in node:
        if key == segment and type(key) is type(segment):
            return True
    return False


def _child(node: Any, segment: Any) -> Any:
    if isinstance(node, dict):
        return node[segment] if _has_key(node, segment) else MISSING
    if isinstance(node, list):
        idx = _list_index(node, segment)
        return node[idx] if idx is not None else MISSING
    return MISSING


def resolve_read(doc: Document, path: KeyPath) -> Any:
    node = doc
    for segment in path:
        node = _child(node, segment)
        if node is MISSING:
            return MISSING
    return node


def _assign(node: Any, segment: Any, value: Any, path: KeyPath) -> None:
    if isinstance(node, dict):
        if segment in node and not _has_key(node, segment):
            # an equal key of another type (1 vs True) would be overwritten in place
            raise StructuralConflictError(path, segment, "an equal key of a different type exists")
        node[segment] = value
        return
    if isinstance(node, list):
        idx = _list_index(node, segment)
        if idx is not None:
            node[idx] = value
            return
        if _as_index(segment) == len(node):
            node.append(value)
            return
        raise StructuralConflictError(path, segment, f"no index {segment!r} in list of {len(node)}")
    raise StructuralConflictError(path, segment, f"parent is a {type(node).__name__}, not a container")


def resolve_write(doc: Document, path: KeyPath, value: Any) -> Document:
    """
    Install value at path and return the (possibly replaced) document.

    Conflicts can only be found while walking nodes that already exist, so a
    failing write leaves the document untouched.
    """
    if not path:
        return value

    node = doc
    walked = 0
    for segment in path.segments[:-1]:
        child = _child(node, segment)
        if child is MISSING:
            break
        if not is_container(child):
            raise StructuralConflictError(path, segment, f"holds a {type(child).__name__}, not a container")
        node = child
        walked += 1

    rest = path.segments[walked:-1]
    if rest:
        # about to create containers below node; make sure node can take the first one
        first = rest[0]
        if isinstance(node, list):
            raise StructuralConflictError(path, first, f"no index {first!r} in list of {len(node)}")
        if not isinstance(node, dict):
            raise StructuralConflictError(path, first, f"parent is a {type(node).__name__}, not a container")
        if first in node and not _has_key(node, first):
            raise StructuralConflictError(path, first, "an equal key of a different type exists")
        # the new maps are only attached once the whole branch is built
        branch: dict = {}
        tail = branch
        for segment in rest[1:]:
            tail[segment] = {}
            tail = tail[segment]
        tail[path.last] = value
        node[first] = branch
        return doc

    _assign(node, path.last, value, path)
    return doc


def resolve_delete(doc: Document, path: KeyPath) -> tuple[Document, bool]:
    """Remove the entry at path. Returns (document, removed)."""
    if not path:
        if isinstance(doc, dict) and not doc:
            return doc, False
        return {}, True

    parent = resolve_read(doc, path.parent)
    segment = path.last
    if isinstance(parent, dict):
        if _has_key(parent, segment):
            del parent[segment]
            return doc, True
    elif isinstance(parent, list):
        idx = _list_index(parent, segment)
        if idx is not None:
            del parent[idx]
            return doc, True
    return doc, False

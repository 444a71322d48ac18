"""
Immutable key paths.

A KeyPath is an ordered tuple of segments. Dotted strings are split on "."; any
other sequence is taken segment by segment so non-string keys survive untouched:

    KeyPath.parse("one.two")       -> ("one", "two")
    KeyPath.parse(["a.b", 1])      -> ("a.b", 1)
    KeyPath.parse(7)               -> (7,)
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence, Union

PathLike = Union["KeyPath", str, Sequence[Any], Any]


class KeyPath:
    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Any] = ()):
        self._segments: tuple[Any, ...] = tuple(segments)

    @classmethod
    def parse(cls, path: PathLike) -> "KeyPath":
        if isinstance(path, KeyPath):
            return path
        if isinstance(path, str):
            if path == "":
                return cls()
            return cls(path.split("."))
        if isinstance(path, (list, tuple)):
            return cls(path)
        # a lone non-string key, e.g. 1
        return cls((path,))

    @property
    def segments(self) -> tuple[Any, ...]:
        return self._segments

    @property
    def parent(self) -> "KeyPath":
        return KeyPath(self._segments[:-1])

    @property
    def last(self) -> Any:
        return self._segments[-1]

    def child(self, segment: Any) -> "KeyPath":
        return KeyPath(self._segments + (segment,))

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._segments)

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyPath):
            return NotImplemented
        # compare types too: ("1",) and (1,) are different paths
        return len(self) == len(other) and all(
            type(a) is type(b) and a == b for a, b in zip(self._segments, other._segments)
        )

    def __hash__(self) -> int:
        return hash(tuple((type(s), s) for s in self._segments))

    def __repr__(self) -> str:
        return f"KeyPath({list(self._segments)!r})"

    def __str__(self) -> str:
        if not self._segments:
            return "<root>"
        return ".".join(str(s) for s in self._segments)

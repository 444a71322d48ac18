from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class FileLockRegistry:
    """
    Hands out one re-entrant lock per resolved file path, so two engines pointed at
    the same file never interleave a read with a write inside this process.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.RLock] = {}

    def lock_for(self, path: Path) -> threading.RLock:
        key = path.resolve()
        with self._guard:
            return self._locks.setdefault(key, threading.RLock())

    @contextmanager
    def held(self, path: Path) -> Iterator[None]:
        with self.lock_for(path):
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


FILE_LOCKS = FileLockRegistry()

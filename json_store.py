from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable


def read_json(
    path: Path,
    *,
    encoding: str = "utf-8",
    deserialize: Callable[[str], Any] = json.loads,
) -> Any | None:
    """
    Read a JSON document from disk.

    Returns None for missing or blank files. Decoding errors propagate to the caller.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding=encoding)
    if not raw.strip():
        return None
    return deserialize(raw)


def _json_key(key: Any) -> Any:
    # json writes non-string keys through the same encoder as values: 1 -> "1", True -> "true"
    if isinstance(key, str) or not isinstance(key, (int, float, type(None))):
        return key
    return json.dumps(key)


def check_key_collisions(payload: Any, where: str = "$") -> None:
    """
    Raise ValueError if two keys of one object would encode to the same JSON key
    (e.g. 1 and "1"); json.dumps would write both and the reader keeps only one.
    """
    if isinstance(payload, dict):
        seen: dict[Any, Any] = {}
        for key, value in payload.items():
            encoded = _json_key(key)
            if encoded in seen:
                raise ValueError(f"keys {seen[encoded]!r} and {key!r} at {where} both encode as {encoded!r}")
            seen[encoded] = key
            check_key_collisions(value, f"{where}.{encoded}")
    elif isinstance(payload, list):
        for i, item in enumerate(payload):
            check_key_collisions(item, f"{where}[{i}]")


def dump_json(payload: Any, *, indent: int | None = 2, sort_keys: bool = False) -> str:
    check_key_collisions(payload)
    return json.dumps(payload, indent=indent, sort_keys=sort_keys, ensure_ascii=False) + "\n"


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding=encoding) as f:
        f.write(text)
    tmp_path.replace(path)


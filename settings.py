from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_indent(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in ("", "none", "compact"):
        return None
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Backing file used when no engine or path is given
    db_path: Path

    # JSON layout
    indent: int | None
    sort_keys: bool

    # File engine behaviour
    create_if_missing: bool

    # Debug
    debug_log_documents: bool


def get_settings(env_file: str | None = "local.env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    from persistence.paths import default_db_path

    raw_path = os.getenv("DOCSTORE_PATH", "").strip()
    db_path = Path(raw_path).expanduser() if raw_path else default_db_path()

    indent = _env_indent("DOCSTORE_INDENT", 2)

    # Sorting would reorder maps on every save; default off to keep insertion order.
    sort_keys = _env_bool("DOCSTORE_SORT_KEYS", False)

    create_if_missing = _env_bool("DOCSTORE_CREATE_IF_MISSING", True)
    debug_log_documents = _env_bool("DOCSTORE_DEBUG_LOG_DOCUMENTS", False)

    return Settings(
        db_path=db_path,
        indent=indent,
        sort_keys=sort_keys,
        create_if_missing=create_if_missing,
        debug_log_documents=debug_log_documents,
    )

from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    return project_root() / "data"


def default_db_path() -> Path:
    return data_dir() / "db.json"


def as_db_path(target: str | Path) -> Path:
    path = Path(target).expanduser()
    if path.suffix == "":
        path = path.with_suffix(".json")
    return path

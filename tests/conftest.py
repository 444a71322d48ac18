from __future__ import annotations

import json
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


EXAMPLE_DOC = {
    "test-string": "string",
    "test-list": [1, 2, 3, 4, 5],
    "test-obj": {"nested-key": "nested-value"},
}


@pytest.fixture(autouse=True)
def sandbox_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point settings at a temp directory and ignore any local.env so tests never touch real ./data.
    """
    import persistence.paths as paths

    for name in (
        "DOCSTORE_PATH",
        "DOCSTORE_INDENT",
        "DOCSTORE_SORT_KEYS",
        "DOCSTORE_CREATE_IF_MISSING",
        "DOCSTORE_DEBUG_LOG_DOCUMENTS",
    ):
        monkeypatch.delenv(name, raising=False)

    def _data_dir() -> Path:
        return tmp_path / "data"

    monkeypatch.setattr(paths, "data_dir", _data_dir)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def example_db_path(tmp_path: Path) -> Path:
    path = tmp_path / "example.json"
    path.write_text(json.dumps(EXAMPLE_DOC), encoding="utf-8")
    return path


@pytest.fixture
def empty_db_path(tmp_path: Path) -> Path:
    path = tmp_path / "empty-db.json"
    path.write_text("", encoding="utf-8")
    return path

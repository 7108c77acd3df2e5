"""
cutsheet.io - JSON and text helpers with atomic writes.

Manifests, job records and exported timelines all go through here so an
interrupted export never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
        newline="",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)


def read_json(path: Path) -> dict[str, Any]:
    """Read JSON file with UTF-8 encoding.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Write JSON file atomically with pretty formatting."""
    _atomic_write(path, json.dumps(data, indent=indent, ensure_ascii=False) + "\n")


def read_text(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Write text file atomically, byte-for-byte (no newline translation)."""
    _atomic_write(path, content)


def path_to_file_url(path: Path) -> str:
    """Convert filesystem path to file:// URL."""
    absolute = path.resolve()
    return f"file://{quote(str(absolute))}"

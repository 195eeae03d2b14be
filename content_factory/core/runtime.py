"""
Runtime environment guards.
"""

import os
from pathlib import Path
from typing import Dict


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def assert_directory_writable(path: Path, *, create: bool = True) -> None:
    if create:
        path.mkdir(parents=True, exist_ok=True)
    if not path.exists() or not path.is_dir():
        raise RuntimeError(f"Required directory is missing: {path}")

    marker = path / f".write_check_{os.getpid()}.tmp"
    try:
        with open(marker, "w", encoding="utf-8") as f:
            f.write("ok")
        marker.unlink(missing_ok=True)
    except OSError as exc:
        raise RuntimeError(f"Directory is not writable: {path}") from exc


def check_data_directory(data_dir: Path) -> Dict[str, object]:
    """Report whether the repository directory is usable, without raising."""
    try:
        assert_directory_writable(data_dir)
        return {"path": str(data_dir), "writable": True}
    except RuntimeError as exc:
        return {"path": str(data_dir), "writable": False, "error": str(exc)}

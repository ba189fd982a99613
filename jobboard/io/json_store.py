from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def best_effort_lockdown_file_permissions(path: Path) -> None:
    """
    Best-effort privacy: on Unix, set 600. On Windows, no-op.
    """
    try:
        os.chmod(path, 0o600)
    except OSError:
        pass


def read_json(path: Path, default: Any) -> Any:
    """
    Returns `default` for a missing or blank file.
    Malformed JSON raises json.JSONDecodeError; callers decide how to degrade.
    """
    if not path.exists():
        return default
    raw_text = path.read_text(encoding="utf-8").strip()
    if not raw_text:
        return default
    return json.loads(raw_text)


def write_json(path: Path, payload: Any) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    best_effort_lockdown_file_permissions(path)

"""
Reading paper data and writing calendar files.

Papers are stored as JSON, either as a plain list or wrapped as

    {"papers": [ ... ]}

The conversion core never touches the filesystem; this module is the
thin layer the CLI (and callers who want a file) go through.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)


def load_papers(path: str | Path) -> list[dict[str, Any]]:
    """
    Load paper dicts from a JSON file.

    Returns an empty list if the file does not exist or is invalid,
    so callers still produce a (header-only) calendar.
    """
    papers_path = Path(path)

    if not papers_path.exists():
        log.warning("Papers file not found: %s", papers_path)
        return []

    try:
        data = json.loads(papers_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        log.warning("Could not read papers from %s: %s", papers_path, exc)
        return []

    if isinstance(data, dict):
        data = data.get("papers", [])
    if not isinstance(data, list):
        log.warning("Unexpected papers payload in %s (expected a list)", papers_path)
        return []

    return data


def write_calendar(text: str, out_path: str | Path) -> Path:
    """
    Write calendar text to out_path, creating parent directories.

    Line endings are written as given (CRLF is kept on every platform).
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8", newline="")
    return out
